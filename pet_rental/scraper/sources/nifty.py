"""@nifty不動産 (myhome.nifty.com) 抽出器 - 一覧ページのみ"""

import logging

from pet_rental.scraper.items import PropertyItem
from pet_rental.scraper.normalize import (
    RE_PREFECTURE,
    parse_area,
    parse_floor_plan,
    parse_man_yen,
    parse_yen,
    strip_listing_suffix,
)
from pet_rental.scraper.sources.base import Extractor, load_html, text_of, warn_no_containers

logger = logging.getLogger(__name__)

BOX = "contains(concat(' ', normalize-space(@class), ' '), ' box ')"
# 地図マーカーのアイコンを含む最も内側の .box の次の .box に住所がある
ADDRESS_XPATH = (
    "(.//*[local-name()='svg'][@aria-label='地図マーカー' or"
    " .//*[local-name()='title'][contains(., '地図マーカー')]]"
    f"/ancestor::*[{BOX}])[last()]"
    f"/following-sibling::*[{BOX}][1]//p"
)


class NiftyExtractor(Extractor):
    source = "nifty"
    base_url = "https://myhome.nifty.com"

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        """建物(li.result-bukken-list) > 部屋(.result-bukken-table tbody.click-area)"""
        sel = load_html(html)
        buildings = sel.css("li.result-bukken-list")
        if not buildings:
            warn_no_containers(self.source, html)
            return []

        properties = []
        for building in buildings:
            name = strip_listing_suffix(text_of(building, "h2 a"))
            address = self._address(building)

            for room in building.css(".result-bukken-table tbody.click-area"):
                link = room.css("a[data-detail-id]")
                external_id = (link.attrib.get("data-detail-id") or "").strip() if link else ""
                if not external_id:
                    logger.warning(f"[nifty] 物件IDが取得できない部屋をスキップ: {name}")
                    continue

                detail_path = link.attrib.get("href") or ""
                fee_texts = room.css(".bukken-info-rent p")
                # data-link-wrap-item セル: 0=階数, 1=間取り/面積, 2=賃料
                layout_cells = room.css("tr:first-child td[data-link-wrap-item]")
                layout = layout_cells[1].css("p") if len(layout_cells) > 1 else []

                properties.append(self.new_item(
                    external_id,
                    self.base_url + detail_path if detail_path else "",
                    name=name,
                    address=address,
                    rent=parse_man_yen(text_of(room, ".bukken-info-rent .text.is-xl")),
                    management_fee=parse_yen(text_of(fee_texts[1]) if len(fee_texts) > 1 else ""),
                    floor_plan=parse_floor_plan(text_of(layout[0]) if layout else ""),
                    area=parse_area(text_of(layout[1]) if len(layout) > 1 else ""),
                ))
        return properties

    @staticmethod
    def _address(building) -> str:
        address = text_of(building.xpath(ADDRESS_XPATH))
        if address:
            return address
        # アイコンが見つからない場合は都道府県名で始まる段落を住所とみなす
        for p in building.css(".box p"):
            text = text_of(p)
            if RE_PREFECTURE.match(text):
                return text
        return ""
