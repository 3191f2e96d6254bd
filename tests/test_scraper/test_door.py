"""DOOR賃貸 抽出器テスト"""

from pathlib import Path

import pytest

from pet_rental.scraper.sources.door import DoorExtractor

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def extractor():
    return DoorExtractor(fetcher=object())


@pytest.fixture
def properties(extractor):
    html = (FIXTURES / "door_list.html").read_text(encoding="utf-8")
    return extractor.parse_list_html(html)


def test_parse_list(properties):
    assert len(properties) == 2
    prop = properties[0]
    assert prop["source"] == "door"
    assert prop["name"] == "ハイツサクマ"
    assert prop["address"] == "東京都町田市金井5丁目"
    assert prop["prefecture"] == "東京都"
    assert prop["city"] == "町田市"
    assert prop["rent"] == 63000
    assert prop["management_fee"] == 0
    assert prop["floor_plan"] == "2K"
    assert prop["area"] == 37.26


def test_parse_list_ids_from_properties_path(properties):
    assert properties[0]["external_id"] == "3f2a9c1e-8b7d-4e6f-a012-6c5d4b3a2910"
    assert properties[0]["source_url"] == (
        "https://door.ac/buildings/100234567/properties/3f2a9c1e-8b7d-4e6f-a012-6c5d4b3a2910"
    )
    assert properties[1]["external_id"] == "7a1b2c3d-4e5f-6a7b-8c9d-0e1f2a3b4c5d"


def test_parse_list_deposit_and_key_money(properties):
    assert properties[0]["deposit"] == 0
    assert properties[0]["key_money"] == 63000
    assert properties[1]["deposit"] == 61000
    assert properties[1]["key_money"] == 0
    assert properties[1]["management_fee"] == 2000


def test_parse_list_skips_room_without_id(extractor):
    html = """
    <div class="building-box">
      <h2 class="heading"><a href="/buildings/1">テスト荘の賃貸物件情報</a></h2>
      <table class="table-secondary"><tbody>
        <tr><td>1階</td><td><em class="emphasis-primary">5</em>万円</td>
            <td><a class="btn-secondary" href="/buildings/1/properties/ab12-cd34">詳細</a></td></tr>
        <tr><td>2階</td><td><em class="emphasis-primary">5.5</em>万円</td>
            <td><a class="btn-secondary" href="/buildings/1">詳細</a></td></tr>
      </tbody></table>
    </div>
    """
    properties = extractor.parse_list_html(html)
    assert [p["external_id"] for p in properties] == ["ab12-cd34"]
    assert properties[0]["name"] == "テスト荘"
    assert properties[0]["rent"] == 50000
    assert properties[0]["area"] == 0


def test_parse_list_no_containers(extractor):
    assert extractor.parse_list_html("<html><body><div class='empty'></div></body></html>") == []
