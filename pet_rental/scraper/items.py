"""Scrapy Items定義 - 全ポータル共通の物件データ構造"""

from dataclasses import asdict, dataclass, field

import scrapy

# データソース (ポータル識別子)
SOURCES = ("suumo", "homes", "athome", "door", "chintai", "nifty", "other")

# 建物種別
BUILDING_TYPES = ("mansion", "apartment", "house", "terraced", "other")

# 向き (8方位)
DIRECTIONS = (
    "north", "northeast", "east", "southeast",
    "south", "southwest", "west", "northwest",
)


@dataclass(frozen=True)
class PetConditions:
    """ペット飼育条件"""

    cat_allowed: bool = False
    cat_limit: int | None = None
    dog_allowed: bool = False
    small_dog_only: bool = False
    additional_deposit: int | None = None
    notes: str | None = None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class NearestStation:
    """最寄り駅情報"""

    line: str
    station: str
    walk_minutes: int | None = None
    bus_minutes: int | None = None

    def to_dict(self) -> dict:
        return asdict(self)


class PropertyItem(scrapy.Item):
    """賃貸物件アイテム (一覧ページでは部分的なデータ)"""

    # ソース情報
    external_id = scrapy.Field()
    source = scrapy.Field()
    source_url = scrapy.Field()

    # 基本情報
    name = scrapy.Field()
    address = scrapy.Field()
    prefecture = scrapy.Field()
    city = scrapy.Field()

    # 費用 (円)
    rent = scrapy.Field()
    management_fee = scrapy.Field()
    deposit = scrapy.Field()
    key_money = scrapy.Field()

    # スペック
    floor_plan = scrapy.Field()
    area = scrapy.Field()
    building_type = scrapy.Field()
    floors = scrapy.Field()
    year_built = scrapy.Field()
    direction = scrapy.Field()

    # ペット条件 (PetConditions | None)
    pet_conditions = scrapy.Field()

    # 設備・交通・画像
    features = scrapy.Field()
    nearest_stations = scrapy.Field()
    images = scrapy.Field()


@dataclass
class ScrapeResult:
    """スクレイピング結果 (全ポータル共通の戻り値)"""

    success: bool
    source: str
    properties: list[PropertyItem] = field(default_factory=list)
    error: str | None = None
    duration_ms: int = 0

    def __post_init__(self):
        # 失敗時は部分結果を返さない
        if not self.success:
            self.properties = []


# 詳細ページの値で上書きしない識別フィールド
_IDENTITY_FIELDS = ("external_id", "source")


def _is_unknown(value) -> bool:
    return value is None or value == "" or value == 0 or value == []


def merge_property(listed: PropertyItem, detail: PropertyItem) -> PropertyItem:
    """一覧ページのアイテムに詳細ページの値をマージした新しいアイテムを返す

    詳細側で値が判明しているフィールドだけを上書きする。入力は変更しない。
    """
    merged = PropertyItem(listed)
    for key, value in detail.items():
        if key in _IDENTITY_FIELDS and listed.get(key):
            continue
        if _is_unknown(value):
            continue
        merged[key] = list(value) if isinstance(value, list) else value
    return merged
