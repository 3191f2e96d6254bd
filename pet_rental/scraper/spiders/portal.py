"""ポータル共通スパイダー

一覧ページのHTMLを抽出器に渡して PropertyItem を生成し、
with_details 指定時は詳細ページも取得して一覧の値にマージする。

    scrapy crawl suumo -a with_details=1 -a dry_run=1 -a max_pages=2
"""

import scrapy

from pet_rental.config import load_scraper_config, load_search_urls
from pet_rental.scraper.items import merge_property
from pet_rental.scraper.sources.registry import get_extractor


def _flag(value) -> bool:
    return str(value).strip().lower() in ("1", "true", "yes", "on")


class PortalSpider(scrapy.Spider):
    """source を指定したサブクラスで使う"""

    source = None
    next_page_xpath = "//a[@rel='next']/@href"

    def __init__(self, with_details="0", dry_run="0", max_pages="0", start_url=None,
                 *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.with_details = _flag(with_details)
        self.dry_run = _flag(dry_run)
        self.max_pages = int(max_pages or 0)
        self.start_urls = [start_url] if start_url else load_search_urls(self.source)
        self.extractor = get_extractor(self.source, config=load_scraper_config())
        # 全一覧ページを最後まで辿れなかった場合 (取得失敗・max_pages 打ち切り等) は掲載終了判定を行わない
        self.completed = True

    def start_requests(self):
        if not self.start_urls:
            self.logger.warning(f"[{self.source}] 一覧ページURLが設定されていません")
        for url in self.start_urls:
            yield scrapy.Request(
                url, callback=self.parse_list, errback=self.list_failed, cb_kwargs={"page": 1},
            )

    def parse_list(self, response, page=1):
        """物件一覧ページをパース"""
        try:
            yield from self._parse_list(response, page)
        except Exception:
            # コールバック内の例外は errback に届かない
            self.completed = False
            raise

    def _parse_list(self, response, page):
        items = self.extractor.parse_list_html(response.text)
        self.logger.info(f"[{self.source}] {len(items)}件 (page {page}): {response.url}")
        if not items:
            # 構造変更・ボット検知で0件になった可能性がある
            self.completed = False

        for item in items:
            if self.with_details and self.extractor.supports_detail and item["source_url"]:
                yield scrapy.Request(
                    item["source_url"],
                    callback=self.parse_detail,
                    errback=self.detail_failed,
                    cb_kwargs={"listed": item},
                )
            else:
                yield item

        # ページネーション
        next_page = response.xpath(self.next_page_xpath).get()
        if not next_page or not items:
            return
        if self.max_pages and page >= self.max_pages:
            self.completed = False
            self.logger.info(f"[{self.source}] max_pages={self.max_pages} で打ち切り (掲載終了判定なし)")
            return
        yield response.follow(
            next_page,
            callback=self.parse_list,
            errback=self.list_failed,
            cb_kwargs={"page": page + 1},
        )

    def parse_detail(self, response, listed):
        """物件詳細ページをパースして一覧の値にマージ"""
        detail = self.extractor.parse_detail_html(response.text, response.url)
        yield merge_property(listed, detail)

    def list_failed(self, failure):
        self.completed = False
        self.logger.error(f"[{self.source}] 一覧ページ取得失敗: {failure.request.url} - {failure.value}")

    def detail_failed(self, failure):
        # 詳細が取れなくても一覧の情報だけで保存する
        self.logger.warning(f"[{self.source}] 詳細ページ取得失敗: {failure.request.url} - {failure.value}")
        yield failure.request.cb_kwargs["listed"]

    def closed(self, reason):
        self.extractor.close()
