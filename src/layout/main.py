"""
src/layout/main.py
───────────────────
Main application layout composition.

Contains:
  - dcc.Interval for live updates (one refresh per simulation tick)
  - Loading banner shown until the simulation is ready
  - Ventilator / defibrillator cards and the diagnostics log (filled by callbacks)
"""
import dash_bootstrap_components as dbc
from dash import dcc, html

from config.settings import settings


def create_layout() -> html.Div:
    """Assemble the root application layout."""
    return html.Div(
        [
            # ── Live update interval ──────────────────────────────────────────
            dcc.Interval(
                id="interval-live",
                interval=min(settings.TICK_INTERVAL_MS, 1_000),
                n_intervals=0,
            ),

            # ── Header ────────────────────────────────────────────────────────
            html.Div(
                [
                    html.H2("ICU Device Monitoring", className="page-title"),
                    html.P(id="monitor-subtitle", className="page-subtitle"),
                ],
                style={"padding": "1.2rem 1.5rem .4rem"},
            ),

            # ── Loading banner (until ready) ──────────────────────────────────
            html.Div(id="monitor-loading"),

            # ── Device cards + diagnostics ────────────────────────────────────
            dbc.Row(
                [
                    dbc.Col(html.Div(id="ventilator-card"), md=4),
                    dbc.Col(html.Div(id="defibrillator-card"), md=4),
                    dbc.Col(
                        html.Div(
                            [
                                html.Div("Diagnostics", className="chart-title"),
                                html.Div(id="diagnostics-summary", className="mb-2"),
                                html.Div(id="diagnostics-log"),
                            ],
                        ),
                        md=4,
                    ),
                ],
                className="g-3",
                style={"padding": "0 1.5rem"},
            ),

            # ── Footer ────────────────────────────────────────────────────────
            html.Footer(
                [
                    html.Span("ICU Device Monitor"),
                    html.Span(" · "),
                    html.Span("Simulated telemetry"),
                ],
                style={
                    "textAlign": "center",
                    "padding": ".7rem",
                    "fontSize": ".72rem",
                    "color": "#8b949e",
                    "borderTop": "1px solid #30363d",
                    "marginTop": "2rem",
                },
            ),
        ],
        style={"backgroundColor": "#0d1117", "minHeight": "100vh", "color": "#c9d1d9"},
    )
