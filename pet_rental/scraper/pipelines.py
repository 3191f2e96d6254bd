"""Scrapyパイプライン - 重複除去・既定値補完・DB保存"""

from collections import defaultdict

from scrapy import signals
from scrapy.exceptions import DropItem

from pet_rental.config import get_db_path
from pet_rental.database.models import init_db
from pet_rental.database.repository import PropertyRepository
from pet_rental.scraper.normalize import clean_text, split_address

# 不明時の既定値
FIELD_DEFAULTS = {
    "name": "",
    "address": "",
    "prefecture": "",
    "city": "",
    "source_url": "",
    "rent": 0,
    "management_fee": 0,
    "deposit": 0,
    "key_money": 0,
    "area": 0.0,
    "building_type": None,
    "floors": None,
    "year_built": None,
    "direction": None,
    "pet_conditions": None,
    "features": [],
    "nearest_stations": [],
    "images": [],
}


class DuplicateFilterPipeline:
    """重複物件フィルタ ((source, external_id) 単位)"""

    def __init__(self):
        self.seen = set()

    def process_item(self, item, spider):
        if not item.get("external_id"):
            raise DropItem(f"物件IDなし: {item.get('source_url') or 'unknown'}")
        key = (item.get("source"), item.get("external_id"))
        if key in self.seen:
            raise DropItem(f"重複物件: {key}")
        self.seen.add(key)
        return item


class DataCleansingPipeline:
    """既定値の補完と住所分割"""

    def process_item(self, item, spider):
        for field, default in FIELD_DEFAULTS.items():
            if item.get(field) is None:
                item[field] = list(default) if isinstance(default, list) else default

        item["name"] = clean_text(item["name"])
        item["address"] = clean_text(item["address"])
        if item["address"] and not (item["prefecture"] or item["city"]):
            item["prefecture"], item["city"] = split_address(item["address"])

        if not item.get("floor_plan"):
            item["floor_plan"] = None
        return item


class SQLitePipeline:
    """SQLiteへの保存パイプライン

    スパイダーが正常終了 (reason="finished") し、一覧を最後まで取得できたときだけ
    今回取得できなかった物件を掲載終了として非アクティブ化する。
    dry_run のスパイダーでは何も書き込まない。
    """

    def __init__(self, db_path=None):
        self.db_path = db_path
        self.conn = None
        self.repo = None
        self.seen_ids: dict[str, list[str]] = defaultdict(list)

    @classmethod
    def from_crawler(cls, crawler):
        pipeline = cls(db_path=crawler.settings.get("PET_RENTAL_DB_PATH"))
        # close_spider の時点では終了理由が分からないため spider_closed で判定する
        crawler.signals.connect(pipeline.spider_closed, signal=signals.spider_closed)
        return pipeline

    def open_spider(self, spider):
        if getattr(spider, "dry_run", False):
            spider.logger.info("dry_run: DBへの保存をスキップします")
            return
        self.conn = init_db(self.db_path or get_db_path())
        self.repo = PropertyRepository(self.conn)

    def spider_closed(self, spider, reason):
        if not self.conn:
            return
        if reason == "finished" and getattr(spider, "completed", False):
            for source, ids in self.seen_ids.items():
                count = self.repo.deactivate_missing(source, ids)
                spider.logger.info(f"[{source}] 掲載終了: {count}件")
        else:
            spider.logger.info(f"掲載終了判定をスキップ (reason={reason})")
        self.conn.close()
        self.conn = None
        self.repo = None

    def process_item(self, item, spider):
        self.seen_ids[item["source"]].append(item["external_id"])
        if self.repo is None:
            return item

        result = self.repo.upsert_properties([item])
        for error in result.errors:
            spider.logger.warning(f"保存失敗: {item.get('source_url') or item['external_id']} - {error}")
        return item
