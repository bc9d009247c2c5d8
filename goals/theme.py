import streamlit as st

THEME = {
    "bg_main": "#09090b",
    "bg_glow": "#18181b",
    "bg_card": "#18181b",
    "bg_field": "#09090b",
    "border": "#27272a",
    "text_main": "#fafafa",
    "text_soft": "#a1a1aa",
    "text_faint": "#71717a",
    "button": "#fafafa",
    "button_text": "#09090b",
    "plot_grid": "#27272a",
}


def get_active_theme():
    return THEME


def inject_theme_css():
    theme = get_active_theme()
    theme_vars_css = f"""
:root {{
    --bg-main: {theme['bg_main']};
    --bg-glow: {theme['bg_glow']};
    --bg-card: {theme['bg_card']};
    --bg-field: {theme['bg_field']};
    --border: {theme['border']};
    --text-main: {theme['text_main']};
    --text-soft: {theme['text_soft']};
    --text-faint: {theme['text_faint']};
    --button: {theme['button']};
    --button-text: {theme['button_text']};
}}
"""
    st.markdown(
        "<style>"
        + theme_vars_css
        + """
html, body, [class*="css"] {
    font-family: system-ui, -apple-system, "Segoe UI", Roboto, Helvetica, Arial, sans-serif;
    color: var(--text-main);
}

.stApp {
    background: radial-gradient(1200px 800px at 20% 0%, var(--bg-glow) 0%, var(--bg-main) 60%);
    color: var(--text-main);
}

.block-container {
    max-width: 48rem;
}

.goal-card {
    background: var(--bg-card);
    border: 1px solid var(--border);
    border-radius: 16px;
    padding: 16px 20px;
    margin-bottom: 12px;
}

.goal-title {
    font-size: 18px;
    font-weight: 600;
}

.goal-prompt {
    color: var(--text-soft);
    font-size: 14px;
    margin-top: 4px;
}

.goal-mantra {
    color: var(--text-soft);
    font-size: 12px;
    font-style: italic;
    margin-top: 8px;
}

.small-label {
    color: var(--text-faint);
    font-size: 12px;
    letter-spacing: 0.2px;
}

.stTextArea textarea, .stTextInput input {
    background: var(--bg-field);
    color: var(--text-main);
    border-radius: 12px;
}

.stButton > button[kind="primary"] {
    background: var(--button);
    color: var(--button-text);
    border: none;
    border-radius: 12px;
    font-weight: 600;
}
</style>
""",
        unsafe_allow_html=True,
    )
    return theme
