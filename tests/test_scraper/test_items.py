"""アイテム・結果型のテスト"""

from pet_rental.scraper.items import (
    NearestStation,
    PetConditions,
    PropertyItem,
    ScrapeResult,
    merge_property,
)


def _listed():
    return PropertyItem(
        external_id="jnc_000000001",
        source="suumo",
        source_url="https://suumo.jp/chintai/jnc_000000001/",
        name="ペットマンション中野",
        address="東京都中野区中野1丁目",
        rent=85000,
        management_fee=5000,
        floor_plan="1K",
        area=25.5,
        features=[],
        pet_conditions=None,
    )


def test_merge_property_fills_detail_values():
    detail = PropertyItem(
        external_id="jnc_000000001",
        source="suumo",
        rent=85000,
        direction="south",
        features=["エアコン"],
        nearest_stations=[NearestStation(line="JR中央線", station="中野駅", walk_minutes=7)],
        pet_conditions=PetConditions(cat_allowed=True, cat_limit=2),
    )
    merged = merge_property(_listed(), detail)
    assert merged["direction"] == "south"
    assert merged["features"] == ["エアコン"]
    assert merged["pet_conditions"].cat_limit == 2
    assert merged["nearest_stations"][0].station == "中野駅"


def test_merge_property_keeps_known_values():
    detail = PropertyItem(external_id="", source="suumo", name="", rent=0, area=0.0, floor_plan=None)
    merged = merge_property(_listed(), detail)
    assert merged["external_id"] == "jnc_000000001"
    assert merged["name"] == "ペットマンション中野"
    assert merged["rent"] == 85000
    assert merged["area"] == 25.5
    assert merged["floor_plan"] == "1K"


def test_merge_property_keeps_identity_fields():
    detail = PropertyItem(external_id="other_id", source="homes", name="詳細の名前")
    merged = merge_property(_listed(), detail)
    assert merged["external_id"] == "jnc_000000001"
    assert merged["source"] == "suumo"
    assert merged["name"] == "詳細の名前"


def test_merge_property_does_not_mutate_inputs():
    listed = _listed()
    detail = PropertyItem(features=["宅配ボックス"], rent=90000)
    merge_property(listed, detail)
    assert listed["features"] == []
    assert listed["rent"] == 85000
    assert detail["features"] == ["宅配ボックス"]


def test_scrape_result_failure_has_no_properties():
    result = ScrapeResult(success=False, source="suumo", properties=[_listed()], error="HTTP 503")
    assert result.properties == []
    assert result.error == "HTTP 503"


def test_scrape_result_success_keeps_properties():
    result = ScrapeResult(success=True, source="suumo", properties=[_listed()])
    assert len(result.properties) == 1
    assert result.error is None


def test_pet_conditions_to_dict():
    assert PetConditions(cat_allowed=True, dog_allowed=True).to_dict() == {
        "cat_allowed": True,
        "cat_limit": None,
        "dog_allowed": True,
        "small_dog_only": False,
        "additional_deposit": None,
        "notes": None,
    }
