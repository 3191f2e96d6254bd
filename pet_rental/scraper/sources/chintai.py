"""CHINTAIネット (chintai.net) 抽出器 - 一覧・詳細ページ対応"""

import logging
import re

from pet_rental.scraper.items import PropertyItem
from pet_rental.scraper.normalize import (
    map_building_type,
    map_direction,
    parse_area,
    parse_deposit,
    parse_floor_count,
    parse_floor_plan,
    parse_man_yen,
    parse_station_access,
    parse_year,
    parse_yen,
)
from pet_rental.scraper.pet_conditions import extract_pet_fragments, infer_pet_conditions
from pet_rental.scraper.sources.base import (
    Extractor,
    image_urls,
    label_cell,
    label_text,
    lines_of,
    load_html,
    split_features,
    text_of,
    warn_no_containers,
)

logger = logging.getLogger(__name__)

# 見出しの「賃貸マンション」などの種別プレフィックス
RE_TYPE_PREFIX = re.compile(r"^賃貸(マンション|アパート|一戸建て|テラスハウス)")
# 賃料セル「15.2万円 10,000円」の2行目 (管理費)
RE_MANAGEMENT_FEE = re.compile(r"万円[\s\S]*?(\d[\d,]*円|-)")
# 詳細URL: /detail/bk-C010104521798620019219950001/
RE_DETAIL_ID = re.compile(r"/detail/bk-([A-Za-z0-9]+)/")


class ChintaiExtractor(Extractor):
    source = "chintai"
    base_url = "https://www.chintai.net"
    supports_detail = True

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        """建物カード(.cassette_item.build) > 部屋リスト(.cassette_detail tbody)"""
        sel = load_html(html)
        buildings = sel.css("section.cassette_item.build")
        if not buildings:
            warn_no_containers(self.source, html)
            return []

        properties = []
        for building in buildings:
            heading = text_of(building, ".cassette_ttl.ttl_main h2")
            name = RE_TYPE_PREFIX.sub("", heading).strip()
            info = building.css(".bukken_information table")
            address = text_of(info, "tr:first-child td:first-of-type")

            for room in building.css(".cassette_detail tbody"):
                # 部屋の識別子は URL ではなく data-bkkey 属性
                external_id = (room.attrib.get("data-bkkey") or "").strip()
                if not external_id:
                    logger.warning(f"[chintai] 物件IDが取得できない部屋をスキップ: {name}")
                    continue

                detail_url = room.attrib.get("data-detailurl") or ""
                rent = parse_man_yen(text_of(room, ".price .num"))
                fee = RE_MANAGEMENT_FEE.search(text_of(room, ".price"))
                other_prices = [text_of(span) for span in room.css(".other_price span")]

                floor_plan = room.css("input.madori::attr(value)").get("").strip()
                area = parse_area((room.css("input.senMenseki::attr(value)").get("") + "m²"))
                if not floor_plan or not area:
                    layout = self._layout_cell_text(room)
                    floor_plan = floor_plan or parse_floor_plan(layout)
                    area = area or parse_area(layout)

                properties.append(self.new_item(
                    external_id,
                    self.base_url + detail_url if detail_url else "",
                    name=name,
                    address=address,
                    rent=rent,
                    management_fee=parse_yen(fee.group(1)) if fee else 0,
                    deposit=parse_deposit(other_prices[0] if other_prices else "", rent),
                    key_money=parse_deposit(other_prices[1] if len(other_prices) > 1 else "", rent),
                    floor_plan=floor_plan,
                    area=area,
                ))
        return properties

    @staticmethod
    def _layout_cell_text(room) -> str:
        # 「1K<br>25.05m²」形式の間取り・面積セル
        for td in room.css("tr.detail-inner td"):
            if "price" in (td.attrib.get("class") or "").split():
                continue
            text = text_of(td)
            if "m" in text:
                return text
        return ""

    def parse_detail_html(self, html: str, url: str = "") -> PropertyItem:
        """物件詳細ページをパース (見出し/値のテーブル)"""
        sel = load_html(html)
        m = RE_DETAIL_ID.search(url)
        rent = parse_man_yen(label_text(sel, "賃料"))

        conditions = extract_pet_fragments([label_text(sel, "ペット"), label_text(sel, "条件")])
        remarks = label_text(sel, "備考") or None
        pet_conditions = infer_pet_conditions(conditions, rent, remarks) if conditions else None

        features_cell = label_cell(sel, "設備")
        features = []
        if features_cell is not None:
            items = features_cell.css("li")
            features = split_features(
                [text_of(li) for li in items] if items else [text_of(features_cell)]
            )

        heading = text_of(sel, "h1")
        return self.new_item(
            m.group(1) if m else "",
            url,
            name=RE_TYPE_PREFIX.sub("", heading).strip(),
            address=label_text(sel, "所在地"),
            rent=rent,
            management_fee=parse_yen(label_text(sel, "管理費")),
            deposit=parse_deposit(label_text(sel, "敷金"), rent),
            key_money=parse_deposit(label_text(sel, "礼金"), rent),
            floor_plan=parse_floor_plan(label_text(sel, "間取り")) or None,
            area=parse_area(text_of(label_cell(sel, "専有面積", "面積"), sep="")),
            building_type=map_building_type(label_text(sel, "建物種別", "種別")),
            floors=parse_floor_count(label_text(sel, "階建", "階数")),
            year_built=parse_year(label_text(sel, "築年月", "築年数")),
            direction=map_direction(label_text(sel, "方位", "向き")),
            nearest_stations=[
                s for s in map(parse_station_access, lines_of(label_cell(sel, "交通"))) if s
            ],
            features=features,
            images=image_urls(sel, ".detail_slider img", self.base_url),
            pet_conditions=pet_conditions,
        )
