"""
src/layout/components/channel_tile.py
──────────────────────────────────────
Channel reading tile used inside the device cards.
"""
from dash import html

from src.layout.components.status_badge import status_badge

CARD_BG = "#161b22"
MUTED = "#8b949e"


def channel_tile(
    label: str,
    value: str,
    status: str,
    color: str = "#c9d1d9",
    sub_label: str = "",
) -> html.Div:
    """
    Compact channel reading.

    Args:
        label: Channel name (shown above value)
        value: Formatted value with unit
        status: Severity value, rendered as a badge
        color: Value text color (reflects status)
        sub_label: Small secondary label, e.g. healing progress
    """
    children = [
        html.Div(
            [
                html.Span(label, style={"fontSize": ".68rem", "color": MUTED, "textTransform": "uppercase", "letterSpacing": ".06em"}),
                status_badge(status),
            ],
            style={"display": "flex", "justifyContent": "space-between", "alignItems": "center"},
        ),
        html.Div(value, style={"fontSize": "1.4rem", "fontWeight": "700", "color": color, "lineHeight": "1.2", "marginTop": "4px"}),
    ]
    if sub_label:
        children.append(html.Div(sub_label, style={"fontSize": ".68rem", "color": MUTED, "marginTop": "2px"}))

    return html.Div(
        children,
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {color}",
            "borderRadius": "8px",
            "padding": "12px 14px",
            "marginBottom": "8px",
        },
    )


def binary_tile(label: str, value: str, ok: bool) -> html.Div:
    """Inline status row for a binary channel."""
    color = "#48BB78" if ok else "#ED8936"
    return html.Div([
        html.Div(label, style={"fontSize": ".62rem", "color": MUTED, "textTransform": "uppercase"}),
        html.Div(value, style={"fontSize": ".85rem", "fontWeight": "700", "color": color}),
    ])
