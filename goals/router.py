import streamlit as st

from goals.constants import APP_TITLE
from goals.entry_form import AppState
from goals.header import render_header
from goals.views.entry_view import forget_widget_state, render_entry_view
from goals.views.login_view import render_login_view


def render_router(ctx):
    state = ctx.form.state

    if state != AppState.AUTHENTICATED:
        forget_widget_state()

    if state == AppState.LOADING:
        st.title(APP_TITLE)
        st.caption("Loading…")
        return state

    if state == AppState.UNAUTHENTICATED:
        render_login_view(ctx)
        return state

    render_header(ctx)
    render_entry_view(ctx)
    return state
