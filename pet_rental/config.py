"""設定ファイル (config/*.yaml) の読み込み"""

import dataclasses
import logging
import os
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

PROJECT_ROOT = Path(__file__).parent.parent
CONFIG_DIR = PROJECT_ROOT / "config"
SETTINGS_PATH = CONFIG_DIR / "settings.yaml"
SEARCH_URLS_PATH = CONFIG_DIR / "search_urls.yaml"
DEFAULT_DB_PATH = "data/pet_rental.db"

# 一般的なブラウザの User-Agent
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


@dataclasses.dataclass(frozen=True)
class ScraperConfig:
    """スクレイピング設定"""

    request_delay_ms: int = 3000      # リクエスト間隔
    user_agent: str = DEFAULT_USER_AGENT
    respect_robots_txt: bool = True
    max_concurrent: int = 1           # 逐次スクレイピングのみ
    max_retries: int = 3
    retry_delay_ms: int = 10000       # リトライ間隔

    @classmethod
    def from_dict(cls, data: dict[str, Any] | None) -> "ScraperConfig":
        data = data or {}
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning(f"未知のスクレイピング設定を無視: {', '.join(unknown)}")
        values = {k: v for k, v in data.items() if k in known}
        if values.get("max_concurrent", 1) != 1:
            logger.warning("max_concurrent は 1 固定です (逐次スクレイピング)")
        values["max_concurrent"] = 1
        return cls(**values)


def _load_yaml(path: str | Path) -> dict:
    path = Path(path)
    if not path.exists():
        logger.warning(f"設定ファイルが見つかりません: {path}")
        return {}
    with open(path, encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def load_settings(path: str | Path | None = None) -> dict:
    """settings.yaml を読み込む"""
    return _load_yaml(path or SETTINGS_PATH)


def load_scraper_config(path: str | Path | None = None) -> ScraperConfig:
    """settings.yaml の scraper セクションから ScraperConfig を生成"""
    settings = load_settings(path)
    return ScraperConfig.from_dict(settings.get("scraper"))


def get_db_path(settings: dict | None = None) -> Path:
    """DBファイルのパス (環境変数 PET_RENTAL_DB_PATH が優先)"""
    env_path = os.getenv("PET_RENTAL_DB_PATH")
    if env_path:
        return Path(env_path)
    if settings is None:
        settings = load_settings()
    db_path = Path(settings.get("database", {}).get("path", DEFAULT_DB_PATH))
    return db_path if db_path.is_absolute() else PROJECT_ROOT / db_path


def load_search_urls(source: str, path: str | Path | None = None) -> list[str]:
    """search_urls.yaml から指定ソースの一覧ページURLを取得"""
    urls = _load_yaml(path or SEARCH_URLS_PATH).get(source) or []
    return [str(u) for u in urls]
