"""
Visualizations: Plotly figures for each scene of the profit story.
The controller looks up `RENDERERS[scene.kind]` and gets back the figure.
"""
import plotly.graph_objects as go

from . import config
from .scenes import (
    DiscountProfitScene,
    NationwideCategoryScene,
    SceneKind,
    StateSelectorScene,
)

# ── Color Palette ─────────────────────────────────────────────────────────────
COLORS = {
    "positive": "#007bff",  # profit bars
    "negative": "#dc3545",  # loss bars
    "accent":   "#f97316",  # callout arrows
    "card":     "#ffffff",
    "text":     "#1a2744",
    "grid":     "#d1ddf0",
    "muted":    "#94a3b8",
}

LAYOUT_BASE = dict(
    paper_bgcolor=COLORS["card"],
    plot_bgcolor=COLORS["card"],
    font=dict(color=COLORS["text"], family="Inter, sans-serif", size=12),
    margin=dict(t=100, b=60, l=60, r=40),
)


# ── Scene Builders ────────────────────────────────────────────────────────────

def state_category_chart(scene: StateSelectorScene):
    """Profit by category for the selected state, with highest / major-loss callouts."""
    data = scene.category_profits()
    if not data:
        return _placeholder(scene.title, "No data for this state")

    cats = [c for c, _ in data]
    vals = [v for _, v in data]
    fig = go.Figure(go.Bar(
        x=cats, y=vals,
        marker_color=[COLORS["positive"] if v > 0 else COLORS["negative"] for v in vals],
        hovertemplate="<b>%{x}</b><br>Profit: $%{y:,.2f}<extra></extra>",
        name="Profit",
    ))

    for h in scene.highlights():
        above = h.kind == "highest"
        fig.add_annotation(
            x=h.category, y=h.value,
            text=f"<b>{h.title}</b><br>{h.label}",
            showarrow=True, arrowhead=2, arrowcolor=COLORS["accent"],
            ax=50 if above else -50, ay=-40 if above else 40,
            bgcolor="rgba(255,255,255,0.85)", bordercolor=COLORS["accent"],
        )

    return _finish(fig, scene.title)


def category_chart(scene: NationwideCategoryScene):
    """Nationwide profit per category, annotated with the fixed story callouts."""
    data = scene.bars()
    if not data:
        return _placeholder(scene.title, "No category data")

    fig = go.Figure(go.Bar(
        x=[c for c, _ in data],
        y=[v for _, v in data],
        marker_color=COLORS["positive"],
        hovertemplate="<b>%{x}</b><br>Profit: $%{y:,.0f}<extra></extra>",
        name="Profit",
    ))

    for c in scene.callouts():
        fig.add_annotation(
            x=c.x, y=c.y,
            text=f"<b>{c.title}</b><br>{c.label}",
            showarrow=True, arrowhead=2, arrowcolor=COLORS["accent"],
            ax=-20, ay=-50,
            bgcolor="rgba(255,255,255,0.85)", bordercolor=COLORS["accent"],
        )

    return _finish(fig, scene.title)


def discount_chart(scene: DiscountProfitScene):
    """Scatter: Discount vs Profit, one dot per order line, colored by category."""
    df = scene.points()
    if df.empty:
        return _placeholder(scene.title, "No records to plot")

    fig = go.Figure()
    for cat, color in scene.palette.items():
        sub = df[df["Category"] == cat]
        fig.add_trace(go.Scatter(
            x=sub["Discount"], y=sub["Profit"],
            mode="markers",
            name=cat,
            marker=dict(color=color, size=7, opacity=0.6),
            hovertext=[scene.tooltip(row) for row in sub.to_dict("records")],
            hoverinfo="text",
        ))

    callouts = scene.callouts()
    # Open rings mark the circled regions the callouts point at.
    fig.add_trace(go.Scatter(
        x=[c.x for c in callouts], y=[c.y for c in callouts],
        mode="markers",
        marker=dict(symbol="circle-open", size=40, color=COLORS["accent"], line=dict(width=2)),
        hoverinfo="skip",
        showlegend=False,
        name="callouts",
    ))
    for c in callouts:
        fig.add_annotation(
            x=c.x, y=c.y,
            text=f"<b>{c.title}</b><br>{c.label}",
            showarrow=True, arrowhead=2, arrowcolor=COLORS["accent"],
            ax=80, ay=-50,
            bgcolor="rgba(255,255,255,0.85)", bordercolor=COLORS["accent"],
        )

    fig = _finish(fig, scene.title, zero_baseline=False)
    fig.update_xaxes(title_text="Discount", tickformat=".0%")
    fig.update_yaxes(title_text="Profit ($)")
    fig.update_layout(showlegend=True, legend=dict(orientation="h", x=0, y=1.08))
    return fig


RENDERERS = {
    SceneKind.STATE_SELECTOR: state_category_chart,
    SceneKind.NATIONWIDE_CATEGORY: category_chart,
    SceneKind.DISCOUNT_PROFIT: discount_chart,
}


# ── Helpers ───────────────────────────────────────────────────────────────────

def _finish(fig, title: str, zero_baseline: bool = True):
    """Apply the shared layout. Bar charts always keep zero inside the y range."""
    width, height = config.chart_size()
    fig.update_layout(
        title_text=title,
        title_x=0.5,
        title_font_size=16,
        width=width,
        height=height,
        showlegend=False,
        **LAYOUT_BASE,
    )
    _apply_axis_style(fig)
    if zero_baseline:
        fig.update_yaxes(rangemode="tozero", zeroline=True, zerolinecolor=COLORS["muted"])
    return fig


def _placeholder(title: str, message: str):
    """Empty chart with a centred message, used when a scene has nothing to draw."""
    fig = go.Figure()
    fig.add_annotation(
        x=0.5, y=0.5, xref="paper", yref="paper",
        text=message, showarrow=False,
        font=dict(size=14, color=COLORS["muted"]),
    )
    fig = _finish(fig, title, zero_baseline=False)
    fig.update_xaxes(visible=False)
    fig.update_yaxes(visible=False)
    return fig


def _apply_axis_style(fig):
    fig.update_xaxes(gridcolor=COLORS["grid"], color=COLORS["text"])
    fig.update_yaxes(gridcolor=COLORS["grid"], color=COLORS["text"], showgrid=True)
