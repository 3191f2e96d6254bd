"""ソース識別子 → 抽出器"""

from pet_rental.config import ScraperConfig
from pet_rental.scraper.items import SOURCES
from pet_rental.scraper.sources.base import Extractor
from pet_rental.scraper.sources.chintai import ChintaiExtractor
from pet_rental.scraper.sources.door import DoorExtractor
from pet_rental.scraper.sources.homes import HomesExtractor
from pet_rental.scraper.sources.nifty import NiftyExtractor
from pet_rental.scraper.sources.suumo import SuumoExtractor

EXTRACTORS: dict[str, type[Extractor]] = {
    cls.source: cls
    for cls in (SuumoExtractor, HomesExtractor, ChintaiExtractor, DoorExtractor, NiftyExtractor)
}


def available_sources() -> list[str]:
    return list(EXTRACTORS)


def get_extractor(source: str, config: ScraperConfig | None = None, fetcher=None) -> Extractor:
    """ソースに対応する抽出器を生成 (未対応のソースは KeyError)"""
    if source not in SOURCES:
        raise KeyError(f"不明なソースです: {source} (ソース一覧: {', '.join(SOURCES)})")
    try:
        cls = EXTRACTORS[source]
    except KeyError:
        raise KeyError(
            f"未対応のソースです: {source} (対応: {', '.join(available_sources())})"
        ) from None
    return cls(config=config, fetcher=fetcher)
