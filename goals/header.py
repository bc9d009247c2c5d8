import streamlit as st

from goals.constants import APP_TITLE, GOAL_KEYS
from goals.models import zero_summary
from goals.visualizations import month_score_chart


def _sign_out(ctx):
    status = ctx.session.sign_out()
    if status:
        ctx.form.status = status


def render_header(ctx):
    user = ctx.user
    form = ctx.form

    title_col, action_col = st.columns([4, 1])
    with title_col:
        st.title(APP_TITLE)
        st.markdown(
            "Daily check-in for your three goals. Rate yesterday (or any day), add notes, "
            "and track monthly progress."
        )
        email = (user.email if user else None) or "(no email)"
        uid = user.uid if user else ""
        st.markdown(
            f"<div class='small-label'>Signed in as: {email} • UID: {uid}</div>",
            unsafe_allow_html=True,
        )
    with action_col:
        st.button("Sign out", key="header.sign_out", on_click=_sign_out, args=(ctx,))

    summary = form.month_summary or zero_summary()
    with st.container(border=True):
        st.markdown(f"<div class='small-label'>Month score ({form.month})</div>", unsafe_allow_html=True)
        cols = st.columns(len(GOAL_KEYS))
        for idx, key in enumerate(GOAL_KEYS):
            cols[idx].metric(key, f"{summary.get(key, 0)}%")
        st.plotly_chart(month_score_chart(summary, form.month), use_container_width=True)
