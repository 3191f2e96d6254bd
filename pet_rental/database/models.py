"""SQLite データベーススキーマ定義・初期化"""

import sqlite3
from pathlib import Path

SCHEMA_SQL = """
-- 物件テーブル (ペット可賃貸物件)
CREATE TABLE IF NOT EXISTS properties (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    external_id TEXT NOT NULL,         -- スクレイピング元での物件ID
    source TEXT NOT NULL,              -- データソース (suumo/homes/chintai/door/nifty/...)
    source_url TEXT,                   -- 元サイトの物件ページURL

    -- 基本情報
    name TEXT,                         -- 物件名
    address TEXT,                      -- 住所
    prefecture TEXT,                   -- 都道府県
    city TEXT,                         -- 市区町村

    -- 費用 (円)
    rent INTEGER NOT NULL DEFAULT 0,   -- 賃料
    management_fee INTEGER DEFAULT 0,  -- 管理費・共益費
    deposit INTEGER DEFAULT 0,         -- 敷金
    key_money INTEGER DEFAULT 0,       -- 礼金

    -- スペック
    floor_plan TEXT,                   -- 間取り (1K, 2LDK等)
    area REAL,                         -- 専有面積 (㎡, 不明は NULL)
    building_type TEXT,                -- mansion/apartment/house/terraced/other
    floors INTEGER,                    -- 建物階数
    year_built INTEGER,                -- 築年 (西暦)
    direction TEXT,                    -- 向き (north, northeast, ...)

    -- JSON カラム
    pet_conditions TEXT,               -- {"cat_allowed": true, "cat_limit": 2, ...}
    features TEXT DEFAULT '[]',        -- ["エアコン", "オートロック", ...]
    nearest_stations TEXT DEFAULT '[]',-- [{"line": "JR山手線", "station": "渋谷駅", ...}]
    images TEXT DEFAULT '[]',          -- 画像URL配列

    -- メタデータ
    is_active INTEGER DEFAULT 1,       -- 掲載中フラグ
    first_seen_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
    last_seen_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
    created_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),
    updated_at TEXT NOT NULL DEFAULT (datetime('now', 'localtime')),

    UNIQUE(source, external_id)
);

-- インデックス
CREATE INDEX IF NOT EXISTS idx_properties_prefecture_rent ON properties(prefecture, rent);
CREATE INDEX IF NOT EXISTS idx_properties_city ON properties(city);
CREATE INDEX IF NOT EXISTS idx_properties_active_rent ON properties(is_active, rent);
CREATE INDEX IF NOT EXISTS idx_properties_area ON properties(area);
CREATE INDEX IF NOT EXISTS idx_properties_direction ON properties(direction);
CREATE INDEX IF NOT EXISTS idx_properties_created ON properties(created_at);
CREATE INDEX IF NOT EXISTS idx_properties_last_seen ON properties(last_seen_at);
"""


def _configure(conn: sqlite3.Connection) -> sqlite3.Connection:
    conn.row_factory = sqlite3.Row
    # WALモード有効化 (スクレイピング中の読み取りを妨げない)
    conn.execute("PRAGMA journal_mode=WAL")
    conn.execute("PRAGMA busy_timeout=5000")
    return conn


def init_db(db_path: str | Path) -> sqlite3.Connection:
    """データベースを初期化し、接続を返す"""
    db_path = Path(db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = _configure(sqlite3.connect(str(db_path)))
    conn.executescript(SCHEMA_SQL)
    conn.commit()
    return conn


def get_connection(db_path: str | Path) -> sqlite3.Connection:
    """DB接続を取得 (既存DB前提)"""
    return _configure(sqlite3.connect(str(db_path)))
