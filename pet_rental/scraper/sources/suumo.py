"""SUUMO (suumo.jp) 抽出器 - 一覧・詳細ページ対応"""

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

# 部屋の詳細URL: /chintai/jnc_000012345678/
RE_EXTERNAL_ID = re.compile(r"/chintai/([^/]+)/")
# 「管理費・共益費: 5000円」のような注記
RE_NOTE = re.compile(r"^(?P<label>[^:：]+)[:：]\s*(?P<value>.*)$")


class SuumoExtractor(Extractor):
    source = "suumo"
    base_url = "https://suumo.jp"
    supports_detail = True

    def parse_list_html(self, html: str) -> list[PropertyItem]:
        """物件一覧ページをパース (1建物に複数部屋)"""
        sel = load_html(html)
        cassettes = sel.css(".cassetteitem")
        if not cassettes:
            warn_no_containers(self.source, html)
            return []

        properties = []
        for cassette in cassettes:
            name = text_of(cassette, ".cassetteitem_content-title")
            address = text_of(cassette, ".cassetteitem_detail-col1")
            building_type = map_building_type(text_of(cassette, ".cassetteitem_content-label"))
            access = cassette.css(".cassetteitem_detail-col2 .cassetteitem_detail-text")
            stations = [s for s in (parse_station_access(text_of(a)) for a in access) if s]
            age_structure = [text_of(div) for div in cassette.css(".cassetteitem_detail-col3 div")]

            for row in cassette.css("table.cassetteitem_other tbody tr"):
                href = row.css("a[href*='/chintai/']::attr(href)").get("")
                m = RE_EXTERNAL_ID.search(href)
                if not m:
                    logger.warning(f"[suumo] 物件IDが取得できない部屋をスキップ: {name}")
                    continue

                rent = parse_man_yen(
                    text_of(row, ".cassetteitem_price--rent .cassetteitem_other-emphasis")
                    or text_of(row, ".cassetteitem_other-emphasis")
                )
                properties.append(self.new_item(
                    m.group(1),
                    self.absolute_url(href),
                    name=name,
                    address=address,
                    rent=rent,
                    management_fee=parse_yen(text_of(row, ".cassetteitem_price--administration")),
                    deposit=parse_deposit(text_of(row, ".cassetteitem_price--deposit"), rent),
                    key_money=parse_deposit(text_of(row, ".cassetteitem_price--gratuity"), rent),
                    floor_plan=parse_floor_plan(text_of(row, ".cassetteitem_madori")),
                    area=parse_area(text_of(row, ".cassetteitem_menseki", sep="")),
                    building_type=building_type,
                    floors=next(
                        (parse_floor_count(t) for t in age_structure if parse_floor_count(t)), None
                    ),
                    year_built=next((parse_year(t) for t in age_structure if parse_year(t)), None),
                    nearest_stations=list(stations),
                ))
        return properties

    def parse_detail_html(self, html: str, url: str = "") -> PropertyItem:
        """物件詳細ページをパース"""
        sel = load_html(html)
        notes = self._note_values(sel)

        rent = parse_man_yen(
            text_of(sel, ".property_view_note-emphasis") or label_text(sel, "賃料")
        )
        m = RE_EXTERNAL_ID.search(url)

        stations = []
        access_cell = label_cell(sel, "駅徒歩", "交通")
        if access_cell is not None:
            reads = access_cell.css(".property_view_table-read")
            texts = [text_of(r) for r in reads] if reads else lines_of(access_cell)
            stations = [s for s in map(parse_station_access, texts) if s]

        conditions = extract_pet_fragments([label_text(sel, "条件"), label_text(sel, "ペット")])
        remarks = label_text(sel, "備考") or None
        pet_conditions = infer_pet_conditions(conditions, rent, remarks) if conditions else None

        return self.new_item(
            m.group(1) if m else "",
            url,
            name=text_of(sel, ".section_h1-header-title"),
            address=label_text(sel, "所在地"),
            rent=rent,
            management_fee=parse_yen(notes.get("管理費・共益費") or label_text(sel, "管理費")),
            deposit=parse_deposit(notes.get("敷金") or label_text(sel, "敷金"), rent),
            key_money=parse_deposit(notes.get("礼金") or label_text(sel, "礼金"), rent),
            floor_plan=parse_floor_plan(label_text(sel, "間取り")) or None,
            area=parse_area(text_of(label_cell(sel, "専有面積"), sep="")),
            building_type=map_building_type(label_text(sel, "建物種別", "種別")),
            floors=parse_floor_count(label_text(sel, "階建")),
            year_built=parse_year(label_text(sel, "築年月")),
            direction=map_direction(label_text(sel, "向き")),
            nearest_stations=stations,
            features=split_features(
                [text_of(li) for li in sel.css("#bkdt-option li")]
                or [label_text(sel, "部屋の特徴・設備", "設備")]
            ),
            images=image_urls(sel, "#js-view_gallery img", self.base_url),
            pet_conditions=pet_conditions,
        )

    @staticmethod
    def _note_values(sel) -> dict[str, str]:
        """賃料欄の「ラベル: 値」形式の注記を辞書にする"""
        values = {}
        for span in sel.css(".property_view_note-list span"):
            m = RE_NOTE.match(text_of(span))
            if m:
                values.setdefault(m.group("label").strip(), m.group("value").strip())
        return values
