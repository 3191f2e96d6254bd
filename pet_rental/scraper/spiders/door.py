"""DOOR賃貸 (door.ac) スパイダー"""

from pet_rental.scraper.spiders.portal import PortalSpider


class DoorSpider(PortalSpider):
    name = "door"
    source = "door"
    allowed_domains = ["door.ac"]
