import logging

import streamlit as st

from goals.config import (
    auth_configured,
    describe_database_target,
    firebase_api_key,
    get_database_url,
    get_engine,
    get_secret,
    load_local_env,
    using_local_sqlite,
)
from goals.constants import APP_TITLE
from goals.context import build_app_context
from goals.data import api_client, repositories
from goals.data.documents import ApiDocumentStore, SqlDocumentStore
from goals.logging_config import configure_logging
from goals.router import render_router
from goals.theme import inject_theme_css

CONTEXT_KEY = "goals.context"

st.set_page_config(page_title=APP_TITLE, page_icon="🎯", layout="centered")
load_local_env()
configure_logging()
logger = logging.getLogger("goals.app")
inject_theme_css()


def current_user_id():
    ctx = st.session_state.get(CONTEXT_KEY)
    return ctx.session.user_id if ctx else None


@st.cache_resource
def get_sql_store(database_url):
    store = SqlDocumentStore(get_engine(database_url))
    store.ensure_schema()
    logger.info("Document store ready at %s", describe_database_target(database_url))
    return store


def get_document_store():
    if api_client.is_enabled():
        return ApiDocumentStore()
    return get_sql_store(get_database_url())


def storage_label():
    if api_client.is_enabled():
        return f"Synced through {api_client.api_base_url()}"
    database_url = get_database_url()
    if using_local_sqlite(database_url):
        return f"Storing entries in {describe_database_target(database_url)}"
    return ""


def show_auth_setup():
    st.title(APP_TITLE)
    st.markdown("#### Sign-in setup required")
    st.markdown("Add your identity provider web API key to Streamlit secrets (or `.env`) before using the app.")
    st.code(
        "[firebase]\n"
        "api_key = \"YOUR_WEB_API_KEY\"\n\n"
        "# optional: remote document service\n"
        "[app]\n"
        "API_BASE_URL = \"https://goals-api.example.com\"\n"
        "BACKEND_SESSION_SECRET = \"LONG_RANDOM_SECRET\"",
        language="toml",
    )
    st.stop()


if not auth_configured():
    show_auth_setup()

api_client.configure(get_secret, current_user_id)
repositories.configure(get_document_store)

if CONTEXT_KEY not in st.session_state:
    st.session_state[CONTEXT_KEY] = build_app_context(firebase_api_key(), storage_label=storage_label())

render_router(st.session_state[CONTEXT_KEY])
