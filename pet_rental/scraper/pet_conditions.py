"""ペット飼育条件の解析

ペット条件のテキスト断片 (例: ['猫飼育可（2匹まで）', '敷金1ヶ月追加']) を
PetConditions に変換する。

    >>> infer_pet_conditions(["猫飼育可（2匹まで）", "敷金1ヶ月追加"], 85000)
    PetConditions(cat_allowed=True, cat_limit=2, dog_allowed=False, small_dog_only=False, additional_deposit=85000, notes=None)
"""

import re

from pet_rental.scraper.items import PetConditions

# 「ペット可」「ペット相談」は猫・犬どちらの可否にも数える
RE_CAT = re.compile(r"猫|ペット可|ペット相談")
RE_DOG = re.compile(r"犬|ペット可|ペット相談")
RE_SMALL_DOG = re.compile(r"小型犬")

# 「猫N匹まで」「猫飼育可（N匹まで）」「猫N頭まで」
RE_CAT_LIMIT = re.compile(r"猫[飼育可]*[（(]?(\d+)[匹頭]まで")
# 「猫（N匹まで）」のように猫の後の括弧内に頭数があるもの
RE_CAT_LIMIT_BRACKET = re.compile(r"猫[^）)]*[（(](\d+)[匹頭]まで[）)]")

# 「敷金Nヶ月追加」「敷金Nヶ月増」「敷金プラスNヶ月」「敷金+Nヶ月」
RE_ADDITIONAL_DEPOSIT = re.compile(r"敷金(?:プラス|\+|＋)?(\d+)[ヶヵかカケ]月[追加増]?")

# ペット条件の断片とみなすキーワード
RE_PET_FRAGMENT = re.compile(r"猫|犬|ペット|敷金(?:プラス|\+|＋)?\d+[ヶヵかカケ]月[追加増]")
RE_FRAGMENT_SEPARATOR = re.compile(r"[/／、,，\n]+")


def infer_pet_conditions(
    conditions: list[str],
    rent_amount: int | None = None,
    notes: str | None = None,
) -> PetConditions:
    """ペット条件テキストの配列を PetConditions に変換

    Args:
        conditions: ペット条件のテキスト断片
        rent_amount: 賃料 (円)。追加敷金の計算に使用
        notes: 備考 (そのまま notes に格納)
    """
    text = " ".join(conditions)
    return PetConditions(
        cat_allowed=bool(RE_CAT.search(text)),
        cat_limit=_extract_cat_limit(text),
        dog_allowed=bool(RE_DOG.search(text)),
        small_dog_only=bool(RE_SMALL_DOG.search(text)),
        additional_deposit=_extract_additional_deposit(text, rent_amount),
        notes=notes,
    )


def _extract_cat_limit(text: str) -> int | None:
    for pattern in (RE_CAT_LIMIT, RE_CAT_LIMIT_BRACKET):
        m = pattern.search(text)
        if m:
            return int(m.group(1))
    return None


def _extract_additional_deposit(text: str, rent_amount: int | None) -> int | None:
    if not rent_amount:
        return None
    m = RE_ADDITIONAL_DEPOSIT.search(text)
    if m:
        return rent_amount * int(m.group(1))
    return None


def extract_pet_fragments(texts: list[str]) -> list[str]:
    """条件欄などの自由記述からペット条件の断片だけを取り出す

    例: ["ペット相談/楽器不可", "敷金1ヶ月追加"] → ["ペット相談", "敷金1ヶ月追加"]
    """
    fragments = []
    for text in texts:
        for part in RE_FRAGMENT_SEPARATOR.split(text or ""):
            part = part.strip()
            if part and RE_PET_FRAGMENT.search(part) and part not in fragments:
                fragments.append(part)
    return fragments
