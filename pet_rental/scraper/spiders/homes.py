"""HOME'S (homes.co.jp) スパイダー - LIFULL HOME'S

詳細ページは未対応のため一覧ページの情報のみ保存する。
"""

from pet_rental.scraper.spiders.portal import PortalSpider


class HomesSpider(PortalSpider):
    name = "homes"
    source = "homes"
    allowed_domains = ["www.homes.co.jp"]
    custom_settings = {
        "DOWNLOAD_DELAY": 5,
    }
    next_page_xpath = "//div[contains(@class, 'mod-listPaging')]//li[contains(@class, 'nextPage')]/a/@href"
