from __future__ import annotations

import logging

from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from backend.settings import get_settings

logger = logging.getLogger(__name__)

ASYNC_DRIVERS = {
    "sqlite": "sqlite+aiosqlite",
    "postgres": "postgresql+asyncpg",
    "postgresql": "postgresql+asyncpg",
    "postgresql+psycopg2": "postgresql+asyncpg",
}
LOCAL_HOSTS = {"localhost", "127.0.0.1"}

_engine: AsyncEngine | None = None
_session_factory: async_sessionmaker | None = None


def _normalize_database_url(database_url: str) -> str:
    raw = str(database_url or "").strip()
    if not raw:
        return raw
    url = make_url(raw)
    url = url.set(drivername=ASYNC_DRIVERS.get(url.drivername, url.drivername))
    if url.get_backend_name() == "postgresql":
        # asyncpg takes ssl=true instead of libpq's sslmode.
        wants_ssl = "sslmode" in url.query
        url = url.difference_update_query(["sslmode", "channel_binding", "ssl"])
        if wants_ssl:
            url = url.update_query_dict({"ssl": "true"})
    return url.render_as_string(hide_password=False)


def get_engine() -> AsyncEngine:
    global _engine
    if _engine is not None:
        return _engine
    db_url = _normalize_database_url(get_settings().database_url)
    url = make_url(db_url)
    if url.get_backend_name() == "sqlite":
        _engine = create_async_engine(db_url, future=True)
    else:
        connect_args = {}
        if url.host and url.host not in LOCAL_HOSTS:
            connect_args["ssl"] = True
        _engine = create_async_engine(
            db_url,
            connect_args=connect_args,
            pool_pre_ping=True,
            pool_size=20,
            max_overflow=10,
            future=True,
        )
    logger.info("Async engine created for %s", url.render_as_string(hide_password=True))
    return _engine


def get_sessionmaker() -> async_sessionmaker:
    global _session_factory
    if _session_factory is None:
        _session_factory = async_sessionmaker(get_engine(), expire_on_commit=False)
    return _session_factory


async def dispose_engine() -> None:
    global _engine, _session_factory
    engine, _engine, _session_factory = _engine, None, None
    if engine is not None:
        await engine.dispose()
