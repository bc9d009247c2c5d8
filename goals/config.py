from __future__ import annotations

import os

import streamlit as st
from sqlalchemy import create_engine
from sqlalchemy.engine import make_url

ROOT_DIR = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
DB_PATH = os.path.join(ROOT_DIR, "goals.db")
ENV_PATH = os.path.join(ROOT_DIR, ".env")

# Secret path -> environment variable checked first.
ENV_FALLBACK_KEYS = {
    ("firebase", "api_key"): "FIREBASE_API_KEY",
    ("database", "url"): "DATABASE_URL",
    ("app", "API_BASE_URL"): "API_BASE_URL",
    ("app", "BACKEND_SESSION_SECRET"): "BACKEND_SESSION_SECRET",
}

SYNC_DRIVERS = {
    "postgres": "postgresql+psycopg2",
    "postgresql": "postgresql+psycopg2",
}


def _parse_env_line(raw_line):
    line = raw_line.strip()
    if not line or line.startswith("#"):
        return None
    name, sep, value = line.partition("=")
    name = name.strip()
    if not sep or not name:
        return None
    return name, value.strip().strip("\"'")


def load_local_env(env_path=ENV_PATH):
    """Fill missing environment variables from a local ``.env`` file."""
    if not os.path.isfile(env_path):
        return
    with open(env_path, encoding="utf-8") as env_file:
        for raw_line in env_file:
            parsed = _parse_env_line(raw_line)
            if parsed:
                os.environ.setdefault(*parsed)


def get_secret(path, default=None):
    path = tuple(path)
    env_name = ENV_FALLBACK_KEYS.get(path)
    if env_name and os.getenv(env_name):
        return os.getenv(env_name)
    try:
        node = st.secrets
        for part in path:
            if part not in node:
                return default
            node = node[part]
    except Exception:
        # No secrets.toml at all: environment only.
        return default
    return node


def firebase_api_key():
    return str(get_secret(("firebase", "api_key")) or "").strip()


def auth_configured():
    return bool(firebase_api_key())


def normalize_database_url(database_url):
    raw = str(database_url or "").strip()
    if not raw:
        return raw
    url = make_url(raw)
    driver = SYNC_DRIVERS.get(url.drivername)
    if driver:
        url = url.set(drivername=driver)
    if "channel_binding" in url.query:
        url = url.difference_update_query(["channel_binding"])
    return url.render_as_string(hide_password=False)


def get_database_url():
    configured = str(get_secret(("database", "url")) or "").strip()
    if configured and configured.lower() not in {"none", "null"}:
        return normalize_database_url(configured)
    return f"sqlite:///{DB_PATH}"


def using_local_sqlite(database_url):
    return str(database_url).strip().lower().startswith("sqlite")


def describe_database_target(database_url):
    """Connection target without credentials, for captions and logs."""
    raw = str(database_url or "").strip()
    if not raw:
        return "(empty)"
    if using_local_sqlite(raw):
        return "sqlite:///goals.db (local file)"
    url = make_url(raw)
    port = f":{url.port}" if url.port else ""
    return f"{url.drivername}://{url.host or 'unknown-host'}{port}/{url.database or 'database'}"


@st.cache_resource
def get_engine(database_url):
    if using_local_sqlite(database_url):
        return create_engine(database_url, connect_args={"check_same_thread": False}, future=True)
    return create_engine(database_url, pool_pre_ping=True, future=True)
