"""@nifty不動産 (myhome.nifty.com) スパイダー"""

from pet_rental.scraper.spiders.portal import PortalSpider


class NiftySpider(PortalSpider):
    name = "nifty"
    source = "nifty"
    allowed_domains = ["myhome.nifty.com"]
