"""データベース初期化テスト"""

import sqlite3
import tempfile
from pathlib import Path

import pytest

from pet_rental.database.models import get_connection, init_db


@pytest.fixture
def db_path():
    with tempfile.NamedTemporaryFile(suffix=".db", delete=False) as f:
        path = f.name
    yield path
    for suffix in ("", "-wal", "-shm"):
        Path(path + suffix).unlink(missing_ok=True)


def test_init_db_creates_tables(db_path):
    conn = init_db(db_path)

    # テーブル存在確認
    tables = conn.execute(
        "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
    ).fetchall()
    table_names = [t[0] for t in tables]
    assert "properties" in table_names

    columns = {r["name"] for r in conn.execute("PRAGMA table_info(properties)")}
    for column in ("external_id", "source", "pet_conditions", "nearest_stations",
                   "is_active", "first_seen_at", "last_seen_at"):
        assert column in columns

    conn.close()


def test_init_db_creates_parent_dir(tmp_path):
    conn = init_db(tmp_path / "nested" / "dir" / "test.db")
    assert (tmp_path / "nested" / "dir" / "test.db").exists()
    conn.close()


def test_init_db_is_idempotent(db_path):
    init_db(db_path).close()
    conn = init_db(db_path)
    assert conn.execute("SELECT COUNT(*) FROM properties").fetchone()[0] == 0
    conn.close()


def test_wal_mode_enabled(db_path):
    conn = init_db(db_path)
    mode = conn.execute("PRAGMA journal_mode").fetchone()[0]
    assert mode == "wal"
    conn.close()


def test_unique_source_external_id(db_path):
    conn = init_db(db_path)
    conn.execute("INSERT INTO properties (external_id, source) VALUES ('A1', 'suumo')")
    conn.execute("INSERT INTO properties (external_id, source) VALUES ('A1', 'homes')")
    with pytest.raises(sqlite3.IntegrityError):
        conn.execute("INSERT INTO properties (external_id, source) VALUES ('A1', 'suumo')")
    conn.close()


def test_get_connection_row_factory(db_path):
    init_db(db_path).close()
    conn = get_connection(db_path)
    row = conn.execute("SELECT 1 AS one").fetchone()
    assert row["one"] == 1
    conn.close()
