"""テキスト正規化 - 賃料・面積・住所・方位などの表記を型付きの値に変換

どの関数も例外を投げない。解析できない入力にはフィールドごとの既定値
(費用は 0、該当なしは None、住所は空文字) を返す。
"""

import re
import unicodedata
from decimal import ROUND_HALF_UP, Decimal

from pet_rental.scraper.items import NearestStation

# 「値なし」を表す表記
EMPTY_MARKERS = {"", "-", "--", "－", "ー", "なし", "無", "ナシ"}

RE_WHITESPACE = re.compile(r"[ \t\r\n\f\v\xa0]+")
RE_NUMBER = re.compile(r"\d+(?:\.\d+)?")
RE_MAN_SUFFIX = re.compile(r"\s*万\s*(\d+)?")
RE_AREA = re.compile(r"(\d+(?:\.\d+)?)\s*(?:㎡|m²|m&#178;|m\s*2)")
RE_YEAR = re.compile(r"(\d{4})\s*年")
RE_FLOOR_COUNT = re.compile(r"(\d+)\s*階建")
RE_MONTHS = re.compile(r"(\d+(?:\.\d+)?)\s*[ヶヵかカケ箇]\s*月")
RE_FLOOR_PLAN = re.compile(r"^(\d+[SLDK]+R?|\d+R|ワンルーム)")
RE_STATION = re.compile(r"^(?P<line>.+?)[/／\s]+(?P<station>[^/／\s]+?駅)")
RE_WALK = re.compile(r"(?:徒)?歩\s*約?(\d+)\s*分")
RE_BUS = re.compile(r"バス\s*(\d+)\s*分")
RE_LISTING_SUFFIX = re.compile(r"の賃貸物件(?:情報)?$")

# 建物種別キーワード (先に一致したものを採用)
BUILDING_TYPE_KEYWORDS = (
    ("マンション", "mansion"),
    ("アパート", "apartment"),
    ("一戸建", "house"),
    ("戸建", "house"),
    ("テラスハウス", "terraced"),
    ("タウンハウス", "terraced"),
)

# 方位キーワード (「北東」の中の「北」に一致しないよう2文字を先に判定)
DIRECTION_KEYWORDS = (
    ("北東", "northeast"),
    ("北西", "northwest"),
    ("南東", "southeast"),
    ("南西", "southwest"),
    ("北", "north"),
    ("南", "south"),
    ("東", "east"),
    ("西", "west"),
)

PREFECTURES = (
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県", "岐阜県",
    "静岡県", "愛知県", "三重県", "滋賀県", "京都府", "大阪府", "兵庫県",
    "奈良県", "和歌山県", "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県", "福岡県", "佐賀県", "長崎県",
    "熊本県", "大分県", "宮崎県", "鹿児島県", "沖縄県",
)

RE_PREFECTURE = re.compile("^(" + "|".join(PREFECTURES) + r"|.{2,3}県)")
# 「余市郡余市町」のような郡部は郡名ごと市区町村に含める。
# 「四日市市」「大町市」は直後の「市」まで伸ばす
RE_CITY = re.compile(r"^([^\d]{1,4}郡.+?[町村]|.+?[市区町村](?!市))")
# 名前の途中に「市」「町」「村」「郡」を含み、汎用パターンでは途中で切れてしまう市町
IRREGULAR_CITIES = (
    "東村山市", "武蔵村山市", "大和郡山市", "小郡市", "蒲郡市", "上市町", "大町町",
)
RE_IRREGULAR_CITY = re.compile("^(" + "|".join(IRREGULAR_CITIES) + ")")

# WAF / ボット検知ページの目印
BOT_CHALLENGE_MARKERS = (
    "token.awswaf.com",
    "awswafintegration",
    "challenge-container",
    "cf-challenge",
    "g-recaptcha",
    "captcha",
    "ロボットではありません",
)


def clean_text(text: str | None) -> str:
    """空白を1つにまとめて前後を除去 (None は空文字)"""
    if not text:
        return ""
    return RE_WHITESPACE.sub(" ", text).strip()


def _is_empty(text: str | None) -> bool:
    return clean_text(text) in EMPTY_MARKERS


def _to_yen(value: Decimal) -> int:
    return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_man_yen(text: str | None) -> int:
    """万円単位の表記を円に変換

    例: "8.5万円" → 85000, "8.5" → 85000, "-" → 0
    """
    if _is_empty(text):
        return 0
    m = RE_NUMBER.search(text.replace(",", ""))
    if not m:
        return 0
    return _to_yen(Decimal(m.group()) * 10000)


def parse_yen(text: str | None) -> int:
    """円単位の表記を円に変換 (「万円」表記にも対応)

    例: "12,000円" → 12000, "1.2万円" → 12000, "1万5000円" → 15000
    """
    if _is_empty(text):
        return 0
    s = text.replace(",", "").replace("，", "")
    m = RE_NUMBER.search(s)
    if not m:
        return 0
    value = Decimal(m.group())
    man = RE_MAN_SUFFIX.match(s, m.end())
    if man:
        value = value * 10000 + int(man.group(1) or 0)
    return _to_yen(value)


def parse_area(text: str | None) -> float:
    """面積表記を㎡の数値に変換 (小数第2位まで)

    例: "37.26m²" → 37.26, "25.5m<sup>2</sup>" 由来の "25.5m2" → 25.5
    """
    if not text:
        return 0.0
    m = RE_AREA.search(text)
    if not m:
        return 0.0
    return round(float(m.group(1)), 2)


def parse_year(text: str | None) -> int | None:
    """「2019年3月」→ 2019"""
    if not text:
        return None
    m = RE_YEAR.search(text)
    return int(m.group(1)) if m else None


def parse_floor_count(text: str | None) -> int | None:
    """「3階/10階建」→ 10"""
    if not text:
        return None
    m = RE_FLOOR_COUNT.search(text)
    return int(m.group(1)) if m else None


def map_building_type(text: str | None) -> str | None:
    """建物種別テキストを mansion/apartment/house/terraced/other に変換"""
    text = clean_text(text)
    if not text:
        return None
    for keyword, building_type in BUILDING_TYPE_KEYWORDS:
        if keyword in text:
            return building_type
    return "other"


def map_direction(text: str | None) -> str | None:
    """向きテキストを8方位の英語表記に変換"""
    text = clean_text(text)
    if not text:
        return None
    for keyword, direction in DIRECTION_KEYWORDS:
        if keyword in text:
            return direction
    return None


def parse_deposit(text: str | None, rent: int | None) -> int:
    """敷金・礼金の表記を円に変換

    「Nヶ月」表記は賃料×N、それ以外は円表記として解析する。
    例: ("2ヶ月", 115000) → 230000, ("152,000円", 0) → 152000
    """
    if _is_empty(text):
        return 0
    m = RE_MONTHS.search(text)
    if m:
        return _to_yen(Decimal(m.group(1)) * (rent or 0))
    return parse_yen(text)


def split_address(address: str | None) -> tuple[str, str]:
    """住所を (都道府県, 市区町村) に分割 (一致しない側は空文字)

    例: "東京都渋谷区神宮前1-1-1" → ("東京都", "渋谷区")
    """
    text = clean_text(address).replace(" ", "").replace("\u3000", "")
    prefecture = ""
    m = RE_PREFECTURE.match(text)
    if m:
        prefecture = m.group(1)
        text = text[m.end():]
    m = RE_IRREGULAR_CITY.match(text) or RE_CITY.match(text)
    city = m.group(1) if m else ""
    return prefecture, city


def parse_floor_plan(text: str | None) -> str:
    """間取り表記の先頭から間取りコードを抽出 (「1K 25.05m²」→ "1K")"""
    text = unicodedata.normalize("NFKC", clean_text(text)).replace(" ", "")
    m = RE_FLOOR_PLAN.match(text)
    return m.group(1) if m else ""


def parse_station_access(text: str | None) -> NearestStation | None:
    """交通表記を NearestStation に変換

    対応形式:
    - "JR山手線/渋谷駅 歩5分"
    - "東急バス/渋谷駅 バス10分 (バス停)青山 歩2分"
    - "JR中央線 中野駅 徒歩7分"
    """
    text = clean_text(text)
    m = RE_STATION.search(text)
    if not m:
        return None
    walk = RE_WALK.search(text[m.end():])
    bus = RE_BUS.search(text[m.end():])
    return NearestStation(
        line=m.group("line").strip(),
        station=m.group("station"),
        walk_minutes=int(walk.group(1)) if walk else None,
        bus_minutes=int(bus.group(1)) if bus else None,
    )


def strip_listing_suffix(name: str | None) -> str:
    """建物名末尾の「の賃貸物件」「の賃貸物件情報」を除去"""
    return RE_LISTING_SUFFIX.sub("", clean_text(name)).strip()


def looks_like_bot_challenge(html: str | None) -> bool:
    """WAF・CAPTCHA などのボット検知ページらしいか"""
    lowered = (html or "").lower()
    return any(marker.lower() in lowered for marker in BOT_CHALLENGE_MARKERS)
