"""
src/layout/components/status_badge.py
──────────────────────────────────────
Severity badge component.
"""

from dash import html

from config.severity import SEVERITY_COLORS, SEVERITY_LABELS


def status_badge(status: str) -> html.Span:
    """Inline severity badge with color-coded border."""
    color = SEVERITY_COLORS.get(status, "#718096")
    label = SEVERITY_LABELS.get(status, status.capitalize())

    return html.Span(
        label,
        style={
            "fontSize": ".65rem",
            "fontWeight": "700",
            "color": color,
            "border": f"1px solid {color}",
            "borderRadius": "4px",
            "padding": "1px 7px",
            "whiteSpace": "nowrap",
        },
    )
