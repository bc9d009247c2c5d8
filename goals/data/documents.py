"""Document store boundary.

Documents are JSON objects addressed by slash-separated paths such as
``users/{uid}/entries/{date}``. Both stores offer the same three calls:
``get`` by path, ``set`` with optional merge, and an ordered scan of one
collection.
"""
from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional
from urllib.parse import quote

from sqlalchemy import text as sql_text
from sqlalchemy.exc import SQLAlchemyError

from goals.constants import DOCUMENTS_TABLE
from goals.data import api_client

logger = logging.getLogger(__name__)


class DocumentStoreError(RuntimeError):
    pass


def document_path(*segments) -> str:
    return "/".join(str(segment).strip("/") for segment in segments)


def split_path(path: str) -> tuple[str, str]:
    collection, _, doc_id = str(path).rpartition("/")
    if not collection or not doc_id:
        raise DocumentStoreError(f"Invalid document path: {path!r}")
    return collection, doc_id


def merge_fields(existing: Dict[str, Any] | None, patch: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``patch`` on ``existing``; nested maps merge key by key."""
    merged = dict(existing or {})
    for key, value in patch.items():
        current = merged.get(key)
        if isinstance(value, dict) and isinstance(current, dict):
            merged[key] = merge_fields(current, value)
        else:
            merged[key] = value
    return merged


def sort_documents(items: List[Dict[str, Any]], order_by: Optional[str]) -> List[Dict[str, Any]]:
    if not order_by:
        return list(items)
    # Documents without the field sort first, like a missing value in the hosted store.
    return sorted(items, key=lambda item: (order_by in item, str(item.get(order_by, ""))))


class SqlDocumentStore:
    def __init__(self, engine, table: str = DOCUMENTS_TABLE):
        self.engine = engine
        self.table = table
        self._schema_ready = False

    def ensure_schema(self):
        if self._schema_ready:
            return
        with self.engine.begin() as conn:
            conn.execute(
                sql_text(
                    f"""
                    CREATE TABLE IF NOT EXISTS {self.table} (
                        path TEXT PRIMARY KEY,
                        collection TEXT NOT NULL,
                        doc_id TEXT NOT NULL,
                        data TEXT NOT NULL,
                        updated_at TEXT
                    )
                    """
                )
            )
            conn.execute(
                sql_text(f"CREATE INDEX IF NOT EXISTS idx_{self.table}_collection ON {self.table} (collection)")
            )
        self._schema_ready = True

    def get(self, path: str) -> Optional[Dict[str, Any]]:
        try:
            self.ensure_schema()
            with self.engine.connect() as conn:
                row = conn.execute(
                    sql_text(f"SELECT data FROM {self.table} WHERE path = :path"),
                    {"path": path},
                ).fetchone()
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Read failed for {path}: {exc}") from exc
        return json.loads(row[0]) if row else None

    def set(self, path: str, data: Dict[str, Any], merge: bool = True) -> Dict[str, Any]:
        collection, doc_id = split_path(path)
        try:
            self.ensure_schema()
            with self.engine.begin() as conn:
                payload = dict(data)
                if merge:
                    row = conn.execute(
                        sql_text(f"SELECT data FROM {self.table} WHERE path = :path"),
                        {"path": path},
                    ).fetchone()
                    payload = merge_fields(json.loads(row[0]) if row else {}, data)
                conn.execute(
                    sql_text(
                        f"""
                        INSERT INTO {self.table} (path, collection, doc_id, data, updated_at)
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
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Write failed for {path}: {exc}") from exc
        return payload

    def list_collection(self, collection_path: str, order_by: Optional[str] = None) -> List[Dict[str, Any]]:
        try:
            self.ensure_schema()
            with self.engine.connect() as conn:
                rows = conn.execute(
                    sql_text(f"SELECT data FROM {self.table} WHERE collection = :collection"),
                    {"collection": collection_path},
                ).fetchall()
        except SQLAlchemyError as exc:
            raise DocumentStoreError(f"Scan failed for {collection_path}: {exc}") from exc
        return sort_documents([json.loads(row[0]) for row in rows], order_by)


class ApiDocumentStore:
    """Talks to the remote document service (see ``backend``)."""

    def _url(self, path: str) -> str:
        return "/v1/" + "/".join(quote(part, safe="") for part in str(path).split("/"))

    def get(self, path: str) -> Optional[Dict[str, Any]]:
        try:
            payload = api_client.request("GET", self._url(path))
        except api_client.ApiError as exc:
            raise DocumentStoreError(str(exc)) from exc
        if not payload or not payload.get("exists"):
            return None
        return payload.get("data") or {}

    def set(self, path: str, data: Dict[str, Any], merge: bool = True) -> Dict[str, Any]:
        split_path(path)
        try:
            payload = api_client.request("PUT", self._url(path), json={"data": data, "merge": merge})
        except api_client.ApiError as exc:
            raise DocumentStoreError(str(exc)) from exc
        return (payload or {}).get("data") or dict(data)

    def list_collection(self, collection_path: str, order_by: Optional[str] = None) -> List[Dict[str, Any]]:
        params = {"order_by": order_by} if order_by else None
        try:
            payload = api_client.request("GET", self._url(collection_path), params=params)
        except api_client.ApiError as exc:
            raise DocumentStoreError(str(exc)) from exc
        return list((payload or {}).get("items") or [])
