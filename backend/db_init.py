from __future__ import annotations

import logging

from sqlalchemy import text as sql_text

from backend.db import get_engine

logger = logging.getLogger(__name__)

DOCUMENTS_TABLE = "documents"


async def init_db():
    engine = get_engine()
    async with engine.begin() as conn:
        await conn.execute(
            sql_text(
                f"""
                CREATE TABLE IF NOT EXISTS {DOCUMENTS_TABLE} (
                    path TEXT PRIMARY KEY,
                    collection TEXT NOT NULL,
                    doc_id TEXT NOT NULL,
                    data TEXT NOT NULL,
                    updated_at TEXT
                )
                """
            )
        )
        await conn.execute(
            sql_text(
                f"CREATE INDEX IF NOT EXISTS idx_{DOCUMENTS_TABLE}_collection ON {DOCUMENTS_TABLE} (collection)"
            )
        )
    logger.info("Document tables ready.")
