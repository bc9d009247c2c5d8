import streamlit as st

from goals.constants import APP_TITLE

EMAIL_KEY = "login.email"
PASSWORD_KEY = "login.password"


def _credentials():
    return (
        str(st.session_state.get(EMAIL_KEY, "") or ""),
        str(st.session_state.get(PASSWORD_KEY, "") or ""),
    )


def _clear_credentials():
    st.session_state[EMAIL_KEY] = ""
    st.session_state[PASSWORD_KEY] = ""


def _sign_in(ctx):
    email, password = _credentials()
    status = ctx.session.sign_in(email, password)
    if status:
        ctx.form.status = status
        return
    _clear_credentials()


def _sign_up(ctx):
    email, password = _credentials()
    status = ctx.session.sign_up(email, password)
    if status:
        ctx.form.status = status
        return
    _clear_credentials()


def render_login_view(ctx):
    st.title(APP_TITLE)
    st.caption("Sign in with the same email on every device to see the same entries.")

    with st.container(border=True):
        st.text_input("Email", key=EMAIL_KEY, placeholder="you@example.com", autocomplete="email")
        st.text_input(
            "Password",
            key=PASSWORD_KEY,
            type="password",
            placeholder="••••••••",
            autocomplete="current-password",
        )
        cols = st.columns(2)
        cols[0].button("Sign in", key="login.sign_in", type="primary", use_container_width=True, on_click=_sign_in, args=(ctx,))
        cols[1].button("Create account", key="login.sign_up", use_container_width=True, on_click=_sign_up, args=(ctx,))

        if ctx.form.status:
            st.markdown(ctx.form.status)
        st.markdown(
            "<div class='small-label'>Tip: use a strong password; the identity provider keeps your account "
            "and session so you stay signed in.</div>",
            unsafe_allow_html=True,
        )
