from __future__ import annotations

from goals.constants import GOAL_COLORS, GOAL_KEYS, GOAL_TITLES
from goals.models import zero_summary
from goals.theme import get_active_theme


def apply_common_plot_style(fig, title, show_xgrid=False, show_ygrid=True):
    theme = get_active_theme()
    fig.update_layout(
        title=title,
        title_font=dict(color=theme["text_main"], size=14),
        paper_bgcolor="rgba(0,0,0,0)",
        plot_bgcolor="rgba(0,0,0,0)",
        font=dict(color=theme["text_main"]),
        margin=dict(l=30, r=10, t=40, b=30),
        xaxis=dict(
            showgrid=show_xgrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
        ),
        yaxis=dict(
            showgrid=show_ygrid,
            gridcolor=theme["plot_grid"],
            tickfont=dict(color=theme["text_soft"]),
            zeroline=False,
        ),
    )
    return fig


def month_score_chart(summary, month, height=220):
    import plotly.graph_objects as go

    values = summary or zero_summary()
    percents = [int(values.get(key, 0) or 0) for key in GOAL_KEYS]
    fig = go.Figure(
        data=go.Bar(
            x=[GOAL_TITLES[key] for key in GOAL_KEYS],
            y=percents,
            text=[f"{value}%" for value in percents],
            textposition="outside",
            marker=dict(color=[GOAL_COLORS[key] for key in GOAL_KEYS]),
            hovertemplate="%{x}: %{y}%<extra></extra>",
        )
    )
    apply_common_plot_style(fig, f"Month score ({month})")
    fig.update_layout(height=height, showlegend=False)
    fig.update_yaxes(range=[0, 110], ticksuffix="%")
    return fig
