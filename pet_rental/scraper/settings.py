"""Scrapy設定 (取得ポリシーは config/settings.yaml の scraper セクションから)"""

from pet_rental.config import load_scraper_config

_scraper_config = load_scraper_config()

BOT_NAME = "pet_rental"
SPIDER_MODULES = ["pet_rental.scraper.spiders"]
NEWSPIDER_MODULE = "pet_rental.scraper.spiders"

USER_AGENT = _scraper_config.user_agent

# robots.txt 遵守
ROBOTSTXT_OBEY = _scraper_config.respect_robots_txt

# リクエスト制御 (逐次スクレイピング)
CONCURRENT_REQUESTS = _scraper_config.max_concurrent
CONCURRENT_REQUESTS_PER_DOMAIN = _scraper_config.max_concurrent
DOWNLOAD_DELAY = _scraper_config.request_delay_ms / 1000
RANDOMIZE_DOWNLOAD_DELAY = True

# リトライ
RETRY_TIMES = _scraper_config.max_retries
RETRY_HTTP_CODES = [500, 502, 503, 504, 408, 429]

# ミドルウェア
DOWNLOADER_MIDDLEWARES = {
    "pet_rental.scraper.middlewares.BrowserHeadersMiddleware": 500,
}

# パイプライン
ITEM_PIPELINES = {
    "pet_rental.scraper.pipelines.DuplicateFilterPipeline": 100,
    "pet_rental.scraper.pipelines.DataCleansingPipeline": 200,
    "pet_rental.scraper.pipelines.SQLitePipeline": 300,
}

# ログ
LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s [%(name)s] %(levelname)s: %(message)s"

# キャッシュ (開発時)
# HTTPCACHE_ENABLED = True
# HTTPCACHE_DIR = ".scrapy/httpcache"

REQUEST_FINGERPRINTER_IMPLEMENTATION = "2.7"
TWISTED_REACTOR = "twisted.internet.asyncioreactor.AsyncioSelectorReactor"
FEED_EXPORT_ENCODING = "utf-8"
