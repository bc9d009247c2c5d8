from datetime import date

import streamlit as st

from goals.constants import GOALS, RATING_CHOICES

DATE_KEY = "entry.selected_date"
BOUND_KEY = "entry.bound_key"


def _rating_key(goal_key):
    return f"entry.rating.{goal_key}"


def _note_key(goal_key):
    return f"entry.notes.{goal_key}"


def _sync_widgets(form):
    # Push the draft into widget state whenever the form (re)loaded or reset.
    marker = (form.loaded_key, form.selected_date)
    if st.session_state.get(BOUND_KEY) == marker:
        return
    st.session_state[DATE_KEY] = date.fromisoformat(form.selected_date)
    for goal in GOALS:
        key = goal["key"]
        st.session_state[_rating_key(key)] = form.draft.rating[key]
        st.session_state[_note_key(key)] = form.draft.notes[key]
    st.session_state[BOUND_KEY] = marker


def _on_date_change(form):
    selected = st.session_state.get(DATE_KEY)
    if not selected:
        return
    form.select_date(selected.isoformat())


def _on_rating_change(form, goal_key):
    form.set_rating(goal_key, st.session_state.get(_rating_key(goal_key)))


def _on_note_change(form, goal_key):
    form.set_note(goal_key, st.session_state.get(_note_key(goal_key), ""))


def _save(form):
    form.save()


def _render_goal_block(form, goal, mantra):
    key = goal["key"]
    with st.container(border=True):
        text_col, rating_col = st.columns([3, 1])
        with text_col:
            st.markdown(f"<div class='goal-title'>{goal['title']}</div>", unsafe_allow_html=True)
            st.markdown(f"<div class='goal-prompt'>{goal['prompt']}</div>", unsafe_allow_html=True)
            st.markdown(f"<div class='goal-mantra'>Mantra: {mantra}</div>", unsafe_allow_html=True)
        with rating_col:
            st.selectbox(
                "Rating (1–5)",
                RATING_CHOICES,
                key=_rating_key(key),
                on_change=_on_rating_change,
                args=(form, key),
            )
        st.text_area(
            "Notes",
            key=_note_key(key),
            height=100,
            placeholder="What happened today? What will you do tomorrow?",
            on_change=_on_note_change,
            args=(form, key),
        )


def render_entry_view(ctx):
    form = ctx.form
    form.ensure_loaded()
    _sync_widgets(form)

    st.date_input("Date", key=DATE_KEY, on_change=_on_date_change, args=(form,))
    st.caption("Tip: switch to yesterday to do the daily review.")

    for goal in GOALS:
        _render_goal_block(form, goal, ctx.mantras[goal["key"]])

    save_col, status_col = st.columns([1, 2])
    save_col.button(
        "Saving…" if form.saving else "Save entry",
        key="entry.save",
        type="primary",
        disabled=form.saving or not ctx.session.user_id,
        on_click=_save,
        args=(form,),
    )
    if form.status:
        status_col.markdown(form.status)

    st.divider()
    st.caption(
        "Signed in with email. Data is stored under your user ID and will sync across devices "
        "when you sign in with the same account."
    )
    if ctx.storage_label:
        st.caption(ctx.storage_label)


def forget_widget_state():
    # Widget values are dropped by Streamlit whenever the form is not rendered.
    st.session_state.pop(BOUND_KEY, None)
