"""DOOR賃貸 (door.ac) 抽出器 - 一覧ページのみ"""

import logging
import re

from pet_rental.scraper.items import PropertyItem
from pet_rental.scraper.normalize import (
    parse_area,
    parse_deposit,
    parse_floor_plan,
    parse_man_yen,
    parse_yen,
    strip_listing_suffix,
)
from pet_rental.scraper.sources.base import Extractor, load_html, text_of, warn_no_containers

logger = logging.getLogger(__name__)

# /buildings/{buildingId}/properties/{propertyId} → propertyId
RE_EXTERNAL_ID = re.compile(r"/properties/([a-f0-9-]+)")


class DoorExtractor(Extractor):
    source = "door"
    base_url = "https://door.ac"

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        """建物(.building-box) > 部屋行(table.table-secondary tbody tr)"""
        sel = load_html(html)
        buildings = sel.css(".building-box")
        if not buildings:
            warn_no_containers(self.source, html)
            return []

        properties = []
        for building in buildings:
            name = strip_listing_suffix(text_of(building.css(".heading a")[:1]))
            address = text_of(building.css(".description-item")[:1], "dd")

            for room in building.css("table.table-secondary tbody tr"):
                href = room.css("a.btn-secondary::attr(href)").get("")
                m = RE_EXTERNAL_ID.search(href)
                if not m:
                    logger.warning(f"[door] 物件IDが取得できない部屋をスキップ: href={href!r}")
                    continue

                # td: 0=階, 1=賃料, 2=管理費, 3=敷金/礼金, 4=間取り, 5=専有面積
                cells = [text_of(td) for td in room.css("td")] + [""] * 6
                rent = parse_man_yen(text_of(room, "em.emphasis-primary"))
                deposit_text, _, key_money_text = cells[3].partition("/")

                properties.append(self.new_item(
                    m.group(1),
                    self.absolute_url(href),
                    name=name,
                    address=address,
                    rent=rent,
                    management_fee=parse_yen(cells[2]),
                    deposit=parse_deposit(deposit_text, rent),
                    key_money=parse_deposit(key_money_text, rent),
                    floor_plan=parse_floor_plan(cells[4]),
                    area=parse_area(cells[5]),
                ))
        return properties
