"""HTTP取得 - リトライ・リクエスト間隔付き"""

import logging
import time

import requests

from pet_rental.config import ScraperConfig

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """ページ取得の失敗 (リトライ上限到達)"""


class HttpFetcher:
    """リトライ付きでHTMLを取得するクライアント"""

    def __init__(self, config: ScraperConfig | None = None, timeout: int = 30):
        self.config = config or ScraperConfig()
        self.timeout = timeout
        self.session = requests.Session()
        self.session.headers.update({
            "User-Agent": self.config.user_agent,
            "Accept": "text/html,application/xhtml+xml",
            "Accept-Language": "ja,en;q=0.9",
        })

    def wait_for_rate_limit(self) -> None:
        """リクエスト間隔を確保"""
        if self.config.request_delay_ms > 0:
            time.sleep(self.config.request_delay_ms / 1000)

    def fetch(self, url: str, headers: dict[str, str] | None = None) -> str:
        """URLのHTMLを取得 (失敗時は retry_delay_ms 待って再試行)"""
        last_error: Exception | None = None
        for attempt in range(1, self.config.max_retries + 1):
            try:
                resp = self.session.get(url, headers=headers, timeout=self.timeout)
                if not resp.ok:
                    raise FetchError(f"HTTP {resp.status_code}: {resp.reason}")
                if resp.encoding is None or resp.encoding == "ISO-8859-1":
                    resp.encoding = resp.apparent_encoding or "utf-8"
                return resp.text
            except (requests.RequestException, FetchError) as e:
                last_error = e
                logger.warning(f"取得失敗 ({attempt}/{self.config.max_retries}): {url} - {e}")
                if attempt < self.config.max_retries and self.config.retry_delay_ms > 0:
                    time.sleep(self.config.retry_delay_ms / 1000)

        if isinstance(last_error, FetchError):
            raise last_error
        raise FetchError(str(last_error) if last_error else "Unknown error") from last_error

    def close(self) -> None:
        self.session.close()
