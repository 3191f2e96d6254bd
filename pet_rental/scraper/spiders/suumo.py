"""SUUMO (suumo.jp) スパイダー - 全国最大手不動産ポータル"""

from pet_rental.scraper.spiders.portal import PortalSpider


class SuumoSpider(PortalSpider):
    name = "suumo"
    source = "suumo"
    allowed_domains = ["suumo.jp"]
    custom_settings = {
        "DOWNLOAD_DELAY": 5,
    }
    next_page_xpath = "//p[contains(@class, 'pagination-parts')]/a[contains(., '次へ')]/@href"
