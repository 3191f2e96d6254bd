"""物件データのCRUD操作"""

import dataclasses
import json
import logging
import math
import sqlite3
from typing import Any

logger = logging.getLogger(__name__)

# properties テーブルに書き込むカラム (id・タイムスタンプ以外)
COLUMNS = (
    "external_id", "source", "source_url",
    "name", "address", "prefecture", "city",
    "rent", "management_fee", "deposit", "key_money",
    "floor_plan", "area", "building_type", "floors", "year_built", "direction",
    "pet_conditions", "features", "nearest_stations", "images",
)
JSON_COLUMNS = ("pet_conditions", "features", "nearest_stations", "images")
JSON_LIST_COLUMNS = ("features", "nearest_stations", "images")
# 値が判明しないときは既存値を残すカラム (一覧ページのみの再取得で詳細情報を消さない)
KEEP_IF_NULL = (
    "source_url", "name", "address", "prefecture", "city", "floor_plan", "area",
    "building_type", "floors", "year_built", "direction", "pet_conditions",
)


@dataclasses.dataclass
class UpsertResult:
    inserted: int = 0
    updated: int = 0
    errors: list[str] = dataclasses.field(default_factory=list)


def _to_json_value(value):
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_to_json_value(v) for v in value]
    return value


def item_to_row(item) -> dict[str, Any]:
    """PropertyItem (または dict) を properties テーブルの行に変換"""
    data = dict(item)
    row = {c: data.get(c) for c in COLUMNS}
    for c in ("name", "address", "prefecture", "city", "floor_plan", "source_url"):
        row[c] = row[c] or None
    for c in ("rent", "management_fee", "deposit", "key_money"):
        row[c] = int(row[c] or 0)
    # 面積 0 は「不明」
    row["area"] = float(row["area"]) if row["area"] else None
    for c in JSON_COLUMNS:
        value = _to_json_value(row[c])
        if value is None and c in JSON_LIST_COLUMNS:
            value = []
        row[c] = json.dumps(value, ensure_ascii=False) if value is not None else None
    return row


def row_to_dict(row: sqlite3.Row) -> dict[str, Any]:
    """DBの行を dict に変換 (JSON カラムはデコード)"""
    d = dict(row)
    for c in JSON_COLUMNS:
        if d.get(c) is not None:
            d[c] = json.loads(d[c])
    return d


class PropertyRepository:
    """物件データのリポジトリ"""

    SORT_COLUMNS = {"rent", "area", "year_built", "created_at"}

    def __init__(self, conn: sqlite3.Connection):
        self.conn = conn

    def upsert_property(self, item) -> bool:
        """物件をupsert (source, external_id で一意)。新規挿入なら True"""
        row = item_to_row(item)
        existing = self.conn.execute(
            "SELECT id FROM properties WHERE source = ? AND external_id = ?",
            (row["source"], row["external_id"]),
        ).fetchone()

        update_cols = []
        for c in COLUMNS:
            if c in ("source", "external_id"):
                continue
            if c in KEEP_IF_NULL:
                update_cols.append(f"{c} = COALESCE(excluded.{c}, {c})")
            elif c in JSON_LIST_COLUMNS:
                update_cols.append(
                    f"{c} = CASE WHEN excluded.{c} = '[]' THEN {c} ELSE excluded.{c} END"
                )
            else:
                update_cols.append(f"{c} = excluded.{c}")

        sql = f"""
            INSERT INTO properties ({", ".join(COLUMNS)})
            VALUES ({", ".join(f":{c}" for c in COLUMNS)})
            ON CONFLICT(source, external_id) DO UPDATE SET
                {", ".join(update_cols)},
                last_seen_at = datetime('now', 'localtime'),
                updated_at = datetime('now', 'localtime'),
                is_active = 1
        """
        self.conn.execute(sql, row)
        self.conn.commit()
        return existing is None

    def upsert_properties(self, items) -> UpsertResult:
        """複数物件を一括upsert (1件の失敗で全体を止めない)"""
        result = UpsertResult()
        for item in items:
            if not item.get("external_id"):
                result.errors.append("Missing external_id")
                continue
            try:
                if self.upsert_property(item):
                    result.inserted += 1
                else:
                    result.updated += 1
            except sqlite3.Error as e:
                self.conn.rollback()
                logger.error(f"upsert失敗: {item.get('source')}/{item.get('external_id')} - {e}")
                result.errors.append(f"Upsert failed: {e}")
        return result

    def deactivate_missing(self, source: str, active_ids: list[str]) -> int:
        """指定された external_id 以外の掲載中物件を非アクティブにする (掲載終了検出)"""
        if not active_ids:
            return 0
        placeholders = ", ".join("?" for _ in active_ids)
        cursor = self.conn.execute(
            f"""UPDATE properties
                SET is_active = 0, updated_at = datetime('now', 'localtime')
                WHERE source = ? AND external_id NOT IN ({placeholders}) AND is_active = 1""",
            [source] + list(active_ids),
        )
        self.conn.commit()
        return cursor.rowcount

    def search(
        self,
        keyword: str | None = None,
        prefecture: str | None = None,
        city: str | None = None,
        rent_min: int | None = None,
        rent_max: int | None = None,
        area_min: float | None = None,
        floor_plans: list[str] | None = None,
        max_age: int | None = None,
        cat_only: bool = False,
        sort_by: str = "created_at",
        sort_order: str = "DESC",
        page: int = 1,
        per_page: int = 20,
    ) -> dict[str, Any]:
        """掲載中の物件を検索してページ単位で返す"""
        conditions = ["is_active = 1"]
        params: dict[str, Any] = {}

        if keyword:
            conditions.append("(name LIKE :kw OR address LIKE :kw)")
            params["kw"] = f"%{keyword}%"
        if prefecture:
            conditions.append("prefecture = :prefecture")
            params["prefecture"] = prefecture
        if city:
            conditions.append("city = :city")
            params["city"] = city

        if rent_min is not None:
            conditions.append("rent >= :rent_min")
            params["rent_min"] = rent_min
        if rent_max is not None:
            conditions.append("rent <= :rent_max")
            params["rent_max"] = rent_max

        if area_min is not None:
            conditions.append("area >= :area_min")
            params["area_min"] = area_min

        if floor_plans:
            placeholders = ", ".join(f":fp{i}" for i in range(len(floor_plans)))
            conditions.append(f"floor_plan IN ({placeholders})")
            for i, fp in enumerate(floor_plans):
                params[f"fp{i}"] = fp

        if max_age is not None:
            conditions.append(
                "year_built >= CAST(strftime('%Y', 'now', 'localtime') AS INTEGER) - :max_age"
            )
            params["max_age"] = max_age

        if cat_only:
            conditions.append("json_extract(pet_conditions, '$.cat_allowed') = 1")

        if sort_by not in self.SORT_COLUMNS:
            sort_by = "created_at"
        if sort_order.upper() not in ("ASC", "DESC"):
            sort_order = "DESC"
        page = max(page, 1)
        per_page = max(per_page, 1)

        where_clause = " AND ".join(conditions)
        total = self.conn.execute(
            f"SELECT COUNT(*) AS cnt FROM properties WHERE {where_clause}", params
        ).fetchone()["cnt"]

        rows = self.conn.execute(
            f"""
            SELECT * FROM properties
            WHERE {where_clause}
            ORDER BY {sort_by} {sort_order.upper()}, id
            LIMIT :limit OFFSET :offset
            """,
            {**params, "limit": per_page, "offset": (page - 1) * per_page},
        ).fetchall()

        return {
            "items": [row_to_dict(row) for row in rows],
            "total": total,
            "page": page,
            "per_page": per_page,
            "total_pages": math.ceil(total / per_page),
        }

    def get_by_id(self, property_id: int) -> dict | None:
        """IDで物件を取得"""
        row = self.conn.execute(
            "SELECT * FROM properties WHERE id = ?", (property_id,)
        ).fetchone()
        return row_to_dict(row) if row else None

    def get_by_external_id(self, source: str, external_id: str) -> dict | None:
        row = self.conn.execute(
            "SELECT * FROM properties WHERE source = ? AND external_id = ?",
            (source, external_id),
        ).fetchone()
        return row_to_dict(row) if row else None
