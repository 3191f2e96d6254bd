"""LIFULL HOME'S (homes.co.jp) 抽出器 - 一覧ページのみ"""

import logging
import re

from pet_rental.scraper.items import PropertyItem
from pet_rental.scraper.normalize import parse_area, parse_floor_plan, parse_man_yen, parse_yen
from pet_rental.scraper.sources.base import Extractor, load_html, text_of, warn_no_containers

logger = logging.getLogger(__name__)

# 例: /chintai/room/305282f37697179ed20bc96c9ebac105663de8fb/
RE_EXTERNAL_ID = re.compile(r"/chintai/room/([a-f0-9]+)/")
# 賃料セルの「/8,000円」部分
RE_MANAGEMENT_FEE = re.compile(r"/\s*([0-9,]+)円")


class HomesExtractor(Extractor):
    source = "homes"
    base_url = "https://www.homes.co.jp"

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        """建物カード(.mod-mergeBuilding--rent--photo) > 部屋リスト(.prg-roomList tr.prg-roomInfo)"""
        sel = load_html(html)
        buildings = sel.css(".mod-mergeBuilding--rent--photo")
        if not buildings:
            warn_no_containers(self.source, html)
            return []

        properties = []
        for building in buildings:
            name = text_of(building, ".bukkenName")
            address = ""
            for tr in building.css(".bukkenSpec table tr"):
                if "所在地" in text_of(tr, "th"):
                    address = text_of(tr, "td")
                    break

            for room in building.css(".prg-roomList tr.prg-roomInfo"):
                url = self.absolute_url(room.attrib.get("data-href"))
                m = RE_EXTERNAL_ID.search(url)
                if not m:
                    logger.warning(f"[homes] 物件IDが取得できない部屋をスキップ: {url!r}")
                    continue

                fee = RE_MANAGEMENT_FEE.search(text_of(room.css(".price")[:1]))
                layout = text_of(room, ".layout")
                properties.append(self.new_item(
                    m.group(1),
                    url,
                    name=name,
                    address=address,
                    rent=parse_man_yen(text_of(room, ".price .priceLabel .num")),
                    management_fee=parse_yen(fee.group(1) + "円") if fee else 0,
                    floor_plan=parse_floor_plan(layout),
                    area=parse_area(layout),
                ))
        return properties
