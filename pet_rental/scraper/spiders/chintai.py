"""CHINTAIネット (chintai.net) スパイダー"""

from pet_rental.scraper.spiders.portal import PortalSpider


class ChintaiSpider(PortalSpider):
    name = "chintai"
    source = "chintai"
    allowed_domains = ["www.chintai.net"]
    next_page_xpath = "//li[contains(@class, 'next')]/a/@href"
