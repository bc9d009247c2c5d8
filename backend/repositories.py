from __future__ import annotations

import json
from datetime import datetime, timezone

from sqlalchemy import text as sql_text

from backend.db import get_sessionmaker
from backend.db_init import DOCUMENTS_TABLE


def _merge_fields(existing: dict, patch: dict) -> dict:
    merged = dict(existing or {})
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = _merge_fields(current, value)
        else:
            merged[key] = value
    return merged


def _split_path(path: str) -> tuple[str, str]:
    collection, _, doc_id = path.rpartition("/")
    return collection, doc_id


async def get_document(path: str) -> dict | None:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        row = (await session.execute(
            sql_text(f"SELECT data FROM {DOCUMENTS_TABLE} WHERE path = :path"),
            {"path": path},
        )).fetchone()
    return json.loads(row[0]) if row else None


async def write_document(path: str, data: dict, merge: bool = True) -> dict:
    collection, doc_id = _split_path(path)
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        async with session.begin():
            payload = dict(data)
            if merge:
                row = (await session.execute(
                    sql_text(f"SELECT data FROM {DOCUMENTS_TABLE} WHERE path = :path"),
                    {"path": path},
                )).fetchone()
                payload = _merge_fields(json.loads(row[0]) if row else {}, data)
            await session.execute(
                sql_text(
                    f"""
                    INSERT INTO {DOCUMENTS_TABLE} (path, collection, doc_id, data, updated_at)
                    VALUES (:path, :collection, :doc_id, :data, :updated_at)
                    ON CONFLICT(path) DO UPDATE SET data=EXCLUDED.data, updated_at=EXCLUDED.updated_at
                    """
                ),
                {
                    "path": path,
                    "collection": collection,
                    "doc_id": doc_id,
                    "data": json.dumps(payload),
                    "updated_at": datetime.now(timezone.utc).isoformat(),
                },
            )
    return payload


async def list_collection(collection: str, order_by: str | None = None) -> list[dict]:
    session_factory = get_sessionmaker()
    async with session_factory() as session:
        rows = (await session.execute(
            sql_text(f"SELECT data FROM {DOCUMENTS_TABLE} WHERE collection = :collection"),
            {"collection": collection},
        )).fetchall()
    items = [json.loads(row[0]) for row in rows]
    if order_by:
        items.sort(key=lambda item: (order_by in item, str(item.get(order_by, ""))))
    return items
