"""ポータル別抽出器の共通処理

各ポータルの抽出器は一覧ページ (必須) と詳細ページ (任意) のHTMLを
PropertyItem に変換する。取得・計測・例外処理は Extractor が受け持つ。
"""

import logging
import time
from urllib.parse import urljoin

import requests
from scrapy import Selector

from pet_rental.config import ScraperConfig
from pet_rental.scraper.fetcher import FetchError, HttpFetcher
from pet_rental.scraper.items import PropertyItem, ScrapeResult
from pet_rental.scraper.normalize import clean_text, looks_like_bot_challenge, split_address

logger = logging.getLogger(__name__)

NOT_IMPLEMENTED = "Not implemented"


class Extractor:
    """ポータル抽出器の基底クラス

    サブクラスは source / base_url を定義し、parse_list_html を実装する。
    詳細ページに対応する場合は parse_detail_html を実装して
    supports_detail = True にする。
    """

    source = "other"
    base_url = ""
    supports_detail = False

    def __init__(self, config: ScraperConfig | None = None, fetcher=None):
        self.config = config or ScraperConfig()
        # fetch(url) と wait_for_rate_limit() を持つオブジェクト
        self._fetcher = fetcher

    @property
    def fetcher(self):
        # Scrapy から使う場合は不要なので、初回取得時に作る
        if self._fetcher is None:
            self._fetcher = HttpFetcher(self.config)
        return self._fetcher

    def close(self) -> None:
        if isinstance(self._fetcher, HttpFetcher):
            self._fetcher.close()
        self._fetcher = None

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        raise NotImplementedError

    def parse_detail_html(self, html: str, url: str = "") -> PropertyItem:
        raise NotImplementedError

    def scrape_list(self, url: str) -> ScrapeResult:
        """一覧ページを取得して物件リストを返す"""
        return self._scrape(url, self.parse_list_html)

    def scrape_detail(self, url: str) -> ScrapeResult:
        """詳細ページを取得して1件の物件を返す"""
        if not self.supports_detail:
            return ScrapeResult(
                success=False, source=self.source, error=NOT_IMPLEMENTED, duration_ms=0,
            )
        return self._scrape(url, lambda html: self._parse_detail(html, url))

    def _parse_detail(self, html: str, url: str) -> list[PropertyItem]:
        item = self.parse_detail_html(html, url)
        if not item.get("external_id"):
            logger.warning(f"[{self.source}] 物件IDが取得できない詳細ページをスキップ: {url!r}")
            return []
        return [item]

    def _scrape(self, url: str, parse) -> ScrapeResult:
        started = time.monotonic()
        try:
            self.fetcher.wait_for_rate_limit()
            html = self.fetcher.fetch(url)
            properties = parse(html)
        except (FetchError, requests.RequestException) as e:
            logger.error(f"[{self.source}] 取得失敗: {url} - {e}")
            return self._failure(str(e), started)
        except Exception as e:
            logger.exception(f"[{self.source}] 解析失敗: {url}")
            return self._failure(str(e) or e.__class__.__name__, started)

        logger.info(f"[{self.source}] {len(properties)}件取得: {url}")
        return ScrapeResult(
            success=True,
            source=self.source,
            properties=properties,
            duration_ms=_elapsed_ms(started),
        )

    def _failure(self, error: str, started: float) -> ScrapeResult:
        return ScrapeResult(
            success=False, source=self.source, error=error, duration_ms=_elapsed_ms(started),
        )

    def absolute_url(self, href: str | None) -> str:
        if not href:
            return ""
        return urljoin(self.base_url, href)

    def new_item(self, external_id: str, source_url: str, **fields) -> PropertyItem:
        """共通フィールドを埋めた PropertyItem を作る"""
        item = PropertyItem(
            external_id=external_id,
            source=self.source,
            source_url=source_url,
            name=fields.pop("name", ""),
            address=fields.pop("address", ""),
            rent=fields.pop("rent", 0),
            management_fee=fields.pop("management_fee", 0),
            deposit=fields.pop("deposit", 0),
            key_money=fields.pop("key_money", 0),
            floor_plan=fields.pop("floor_plan", ""),
            area=fields.pop("area", 0.0),
            features=fields.pop("features", []),
            nearest_stations=fields.pop("nearest_stations", []),
            images=fields.pop("images", []),
            pet_conditions=fields.pop("pet_conditions", None),
            **fields,
        )
        item["prefecture"], item["city"] = split_address(item["address"])
        return item


def _elapsed_ms(started: float) -> int:
    return int((time.monotonic() - started) * 1000)


def load_html(html: str) -> Selector:
    return Selector(text=html or "<html></html>")


def text_of(node, query: str = None, sep: str = " ") -> str:
    """要素 (query 指定時はその一致要素すべて) の子孫テキストを連結"""
    if node is None:
        return ""
    target = node.css(query) if query else node
    return clean_text(sep.join(target.css("::text").getall()))


def lines_of(node) -> list[str]:
    """要素内のテキストノードを空行を除いて行ごとに返す (<br> 区切りの交通欄など)"""
    if node is None:
        return []
    lines = [clean_text(t) for t in node.css("::text").getall()]
    return [line for line in lines if line]


def label_cell(sel, *labels: str):
    """見出し (th / dt) にいずれかのラベルを含む最初の値セルを返す"""
    for label in labels:
        cells = sel.xpath(
            "//th[contains(normalize-space(.), $label)]/following-sibling::td[1]"
            " | //dt[contains(normalize-space(.), $label)]/following-sibling::dd[1]",
            label=label,
        )
        if cells:
            return cells[0]
    return None


def label_text(sel, *labels: str) -> str:
    return text_of(label_cell(sel, *labels))


def image_urls(sel, query: str, base_url: str) -> list[str]:
    """画像URL (data-src 優先) を重複なく絶対URLで返す"""
    urls = []
    for img in sel.css(query):
        src = img.attrib.get("data-src") or img.attrib.get("src")
        if not src or src.startswith("data:"):
            continue
        url = urljoin(base_url, src)
        if url not in urls:
            urls.append(url)
    return urls


def warn_no_containers(source: str, html: str) -> None:
    """建物コンテナが1件もないときの診断ログ"""
    if looks_like_bot_challenge(html):
        logger.warning(f"[{source}] 物件が見つかりません (ボット検知ページの可能性)")
    else:
        logger.warning(f"[{source}] 物件が見つかりません (ページ構造が変わった可能性)")


def split_features(texts: list[str]) -> list[str]:
    """「エアコン、オートロック」のような設備表記を項目ごとに分割"""
    features = []
    for text in texts:
        for part in text.replace("／", "、").replace("/", "、").split("、"):
            part = clean_text(part)
            if part and part not in features:
                features.append(part)
    return features
