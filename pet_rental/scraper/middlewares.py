"""Scrapyミドルウェア - リクエストヘッダ制御"""

from scrapy import signals


class BrowserHeadersMiddleware:
    """一般的なブラウザと同じヘッダでリクエストする

    ヘッダが不自然だと WAF のチャレンジページが返されやすい。
    """

    def __init__(self, user_agent: str):
        self.user_agent = user_agent

    @classmethod
    def from_crawler(cls, crawler):
        mw = cls(crawler.settings.get("USER_AGENT"))
        crawler.signals.connect(mw.spider_opened, signal=signals.spider_opened)
        return mw

    def spider_opened(self, spider):
        spider.logger.info(f"BrowserHeadersMiddleware: {spider.name} started")

    def process_request(self, request, spider):
        if self.user_agent:
            request.headers["User-Agent"] = self.user_agent
        request.headers.setdefault("Accept", "text/html,application/xhtml+xml")
        request.headers.setdefault("Accept-Language", "ja,en;q=0.9")
        return None
