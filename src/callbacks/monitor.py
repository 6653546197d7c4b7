"""
src/callbacks/monitor.py
─────────────────────────
Live monitor callbacks: read the published device state on every interval
and render the device cards and the diagnostics log.
"""
from __future__ import annotations

from datetime import UTC, datetime

import dash_bootstrap_components as dbc
import pandas as pd
from dash import Input, Output, html

from config.devices import DEVICE_CONFIG
from config.severity import SEVERITY_COLORS, SEVERITY_LABELS, Severity
from src.analytics.diagnostics import severity_counts, to_dataframe
from src.analytics.thresholds import device_severity
from src.data.healing import healing_progress
from src.data.models import DeviceSnapshot
from src.data.store import DeviceState, DeviceStore
from src.layout.components.channel_tile import binary_tile, channel_tile
from src.layout.components.status_badge import status_badge

CARD_BG = "#161b22"
BORDER = "#30363d"
MUTED = "#8b949e"


def _device_card(snapshot: DeviceSnapshot, now: datetime) -> html.Div:
    eq = DEVICE_CONFIG[snapshot.kind]
    overall = device_severity(snapshot)

    tiles = []
    for name, metric in snapshot.metrics().items():
        spec = eq["channels"][name]
        sub_label = ""
        if metric.status == Severity.AUTO_FIX:
            sub_label = f"Self-healing · {healing_progress(metric, now):.0%}"
        tiles.append(
            channel_tile(
                spec.label,
                f"{metric.value:.{spec.precision}f} {spec.unit}",
                metric.status.value,
                color=SEVERITY_COLORS[metric.status],
                sub_label=sub_label,
            )
        )

    binary_state = getattr(snapshot, eq["binary_channel"])
    tiles.append(binary_tile(eq["binary_label"], binary_state.value, ok=not snapshot.has_binary_fault))

    return html.Div(
        [
            html.Div(
                [
                    html.Span(eq["name"], style={"fontWeight": "700", "fontSize": "1.05rem"}),
                    status_badge(overall.value),
                ],
                style={"display": "flex", "justifyContent": "space-between", "marginBottom": "10px"},
            ),
            *tiles,
        ],
        style={
            "backgroundColor": CARD_BG,
            "border": f"1px solid {SEVERITY_COLORS[overall]}",
            "borderRadius": "10px",
            "padding": "14px",
        },
    )


def _log_list(state: DeviceState) -> html.Div:
    df = to_dataframe(state.diagnostic_log)
    if df.empty:
        return html.Div("No diagnostic messages yet.", style={"color": MUTED, "padding": "20px", "textAlign": "center"})

    rows = []
    for _, row in df.iterrows():
        color = SEVERITY_COLORS.get(row["status"], MUTED)
        rows.append(
            html.Div(
                [
                    html.Div(
                        [
                            html.Span(row["device"].capitalize(), style={"fontWeight": "600", "fontSize": ".8rem"}),
                            html.Span(
                                pd.to_datetime(row["timestamp"]).strftime("%H:%M:%S"),
                                style={"fontSize": ".7rem", "color": MUTED},
                            ),
                        ],
                        style={"display": "flex", "justifyContent": "space-between"},
                    ),
                    html.Div(row["message"], style={"fontSize": ".75rem", "marginTop": "2px"}),
                ],
                style={
                    "borderLeft": f"4px solid {color}",
                    "backgroundColor": CARD_BG,
                    "borderRadius": "6px",
                    "padding": "8px 10px",
                    "marginBottom": "6px",
                },
            )
        )
    return html.Div(rows, style={"maxHeight": "70vh", "overflowY": "auto"})


def _summary_badges(state: DeviceState) -> dbc.Row:
    counts = severity_counts(state.diagnostic_log)
    return dbc.Row(
        [
            dbc.Col(
                html.Div(
                    [
                        html.Div(str(counts[sev.value]), style={"fontSize": "1.1rem", "fontWeight": "700", "color": SEVERITY_COLORS[sev]}),
                        html.Div(SEVERITY_LABELS[sev], style={"fontSize": ".6rem", "color": MUTED, "textTransform": "uppercase"}),
                    ],
                    style={"backgroundColor": CARD_BG, "border": f"1px solid {BORDER}", "borderRadius": "8px", "padding": "6px 10px"},
                ),
                xs=3,
            )
            for sev in Severity
        ],
        className="g-2",
    )


def register(app, store: DeviceStore) -> None:

    @app.callback(
        [
            Output("monitor-loading", "children"),
            Output("monitor-subtitle", "children"),
            Output("ventilator-card", "children"),
            Output("defibrillator-card", "children"),
            Output("diagnostics-summary", "children"),
            Output("diagnostics-log", "children"),
        ],
        Input("interval-live", "n_intervals"),
    )
    def update_monitor(n_intervals: int):
        state = store.read()
        if not state.is_ready:
            loading = dbc.Alert(
                "Initializing medical devices… connecting to monitoring systems.",
                color="info",
                style={"margin": "0 1.5rem 1rem"},
            )
            return loading, "", html.Div(), html.Div(), html.Div(), html.Div()

        now = datetime.now(tz=UTC)
        subtitle = f"Snapshot #{state.version} · updated {state.updated_at.strftime('%H:%M:%S')} UTC"
        return (
            None,
            subtitle,
            _device_card(state.ventilator, now),
            _device_card(state.defibrillator, now),
            _summary_badges(state),
            _log_list(state),
        )
