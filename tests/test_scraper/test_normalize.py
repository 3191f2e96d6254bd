"""テキスト正規化テスト"""

import pytest

from pet_rental.scraper.items import BUILDING_TYPES, DIRECTIONS, NearestStation
from pet_rental.scraper.normalize import (
    clean_text,
    looks_like_bot_challenge,
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
    split_address,
    strip_listing_suffix,
)


@pytest.mark.parametrize("text", ["-", "なし", "", None, "--", "無", "ナシ"])
def test_parse_man_yen_empty_markers(text):
    assert parse_man_yen(text) == 0


def test_parse_man_yen():
    assert parse_man_yen("8.5万円") == 85000
    assert parse_man_yen("27.8万円") == 278000
    assert parse_man_yen("8.5") == 85000
    assert parse_man_yen("12") == 120000


def test_parse_man_yen_rounds_half_up():
    assert parse_man_yen("10.05万円") == 100500
    assert parse_man_yen("5.05万円") == 50500


def test_parse_yen():
    assert parse_yen("12,000円") == 12000
    assert parse_yen("5800円") == 5800
    assert parse_yen("1.2万円") == 12000
    assert parse_yen("1万円") == 10000
    assert parse_yen("1万5000円") == 15000
    assert parse_yen("-") == 0
    assert parse_yen("なし") == 0
    assert parse_yen("") == 0


def test_parse_deposit():
    assert parse_deposit("2ヶ月", 115000) == 230000
    assert parse_deposit("1ヶ月", 115000) == 115000
    assert parse_deposit("1ヵ月", 80000) == 80000
    assert parse_deposit("152,000円", 0) == 152000
    assert parse_deposit("8.5万円", 85000) == 85000
    assert parse_deposit("-", 115000) == 0
    assert parse_deposit("--", None) == 0


def test_parse_area():
    assert parse_area("37.26m²") == 37.26
    assert parse_area("34.54㎡") == 34.54
    assert parse_area("28.5m&#178;") == 28.5
    assert parse_area("25.5m2") == 25.5
    assert parse_area("1K 25.05m²") == 25.05
    assert parse_area("") == 0
    assert parse_area("-") == 0
    assert parse_area(None) == 0


def test_parse_year():
    assert parse_year("2019年3月") == 2019
    assert parse_year("築6年") is None
    assert parse_year(None) is None


def test_parse_floor_count():
    assert parse_floor_count("3階/10階建") == 10
    assert parse_floor_count("地上14階建") == 14
    assert parse_floor_count("3階") is None


def test_map_building_type():
    assert map_building_type("賃貸マンション") == "mansion"
    assert map_building_type("アパート") == "apartment"
    assert map_building_type("一戸建て") == "house"
    assert map_building_type("テラスハウス") == "terraced"
    assert map_building_type("タウンハウス") == "terraced"
    assert map_building_type("店舗") == "other"
    assert map_building_type("") is None


def test_map_direction_compound_before_single():
    assert map_direction("北東") == "northeast"
    assert map_direction("南西向き") == "southwest"
    assert map_direction("北") == "north"
    assert map_direction("西") == "west"
    assert map_direction("-") is None
    assert map_direction(None) is None


def test_split_address():
    assert split_address("東京都渋谷区神宮前1-1-1") == ("東京都", "渋谷区")
    assert split_address("神奈川県横浜市中区山下町") == ("神奈川県", "横浜市")
    assert split_address("北海道余市郡余市町黒川町") == ("北海道", "余市郡余市町")
    assert split_address("三重県四日市市諏訪町") == ("三重県", "四日市市")
    assert split_address("東京都町田市金井5丁目") == ("東京都", "町田市")


def test_split_address_irregular_city_names():
    assert split_address("東京都東村山市本町1-2") == ("東京都", "東村山市")
    assert split_address("東京都武蔵村山市学園") == ("東京都", "武蔵村山市")
    assert split_address("奈良県大和郡山市北郡山町") == ("奈良県", "大和郡山市")
    assert split_address("愛知県蒲郡市港町") == ("愛知県", "蒲郡市")
    assert split_address("富山県中新川郡上市町湯上野") == ("富山県", "中新川郡上市町")
    assert split_address("石川県野々市市本町") == ("石川県", "野々市市")
    assert split_address("東京都羽村市緑ヶ丘") == ("東京都", "羽村市")


def test_split_address_without_prefecture():
    assert split_address("那覇市牧志1-1") == ("", "那覇市")
    assert split_address("") == ("", "")
    assert split_address(None) == ("", "")


def test_parse_floor_plan():
    assert parse_floor_plan("1K") == "1K"
    assert parse_floor_plan("2LDK 55.2m²") == "2LDK"
    assert parse_floor_plan("ワンルーム") == "ワンルーム"
    assert parse_floor_plan("1R") == "1R"
    assert parse_floor_plan("２ＬＤＫ") == "2LDK"
    assert parse_floor_plan("-") == ""


def test_parse_station_access():
    assert parse_station_access("JR山手線/渋谷駅 歩5分") == NearestStation(
        line="JR山手線", station="渋谷駅", walk_minutes=5
    )
    assert parse_station_access("JR中央線 中野駅 徒歩7分") == NearestStation(
        line="JR中央線", station="中野駅", walk_minutes=7
    )


def test_parse_station_access_bus():
    station = parse_station_access("東急バス/渋谷駅 バス10分 (バス停)青山 歩2分")
    assert station.station == "渋谷駅"
    assert station.bus_minutes == 10
    assert station.walk_minutes == 2


def test_parse_station_access_unparsable():
    assert parse_station_access("車10分") is None
    assert parse_station_access("") is None


def test_clean_text_keeps_fullwidth_space_inside():
    assert clean_text("  ＩＮＵＮＥＫＯ　ＨＩＬＬＳ \n") == "ＩＮＵＮＥＫＯ　ＨＩＬＬＳ"
    assert clean_text("a \n\t b") == "a b"
    assert clean_text(None) == ""


def test_strip_listing_suffix():
    assert strip_listing_suffix("TRADIS両国IIIの賃貸物件") == "TRADIS両国III"
    assert strip_listing_suffix("ペットハウス中野の賃貸物件情報") == "ペットハウス中野"
    assert strip_listing_suffix("新宿マンション") == "新宿マンション"


def test_looks_like_bot_challenge():
    assert looks_like_bot_challenge('<script src="https://x.token.awswaf.com/challenge.js"></script>')
    assert looks_like_bot_challenge('<div id="challenge-container"></div>')
    assert not looks_like_bot_challenge("<div class='cassetteitem'></div>")
    assert not looks_like_bot_challenge(None)


def test_mapped_values_are_enumerated():
    for text in ("賃貸マンション", "アパート", "一戸建て", "テラスハウス", "倉庫"):
        assert map_building_type(text) in BUILDING_TYPES
    for text in ("北", "北東", "東", "南東", "南", "南西", "西", "北西"):
        assert map_direction(text) in DIRECTIONS
    assert {map_direction(t) for t in ("北", "北東", "東", "南東", "南", "南西", "西", "北西")} == set(DIRECTIONS)
