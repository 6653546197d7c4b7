"""
src/analytics/diagnostics.py
────────────────────────────
Diagnostic log generator.

Each tick:
  - one message per numeric channel whose status is not normal
  - one alert per binary channel in its fault state
  - occasionally, one routine "all systems normal" heartbeat

New messages are prepended to the previous log and the result is cut to
the newest LOG_CAP entries. Repeated conditions re-emit every tick and age
older entries out; there is no other deduplication.
"""
from __future__ import annotations

import uuid
from datetime import datetime

import numpy as np
import pandas as pd

from config.devices import DEVICE_CONFIG, ChannelSpec, DeviceKind
from config.settings import settings
from config.severity import Severity
from src.data.models import (
    DefibrillatorSnapshot,
    DeviceSnapshot,
    DiagnosticMessage,
    VentilatorSnapshot,
)

DiagnosticLog = tuple[DiagnosticMessage, ...]

HEARTBEAT_METRIC = "system"
HEARTBEAT_MESSAGE = "All systems operating within normal parameters."

# channel name → severity → template; {device} {value} {unit} are filled in
MESSAGE_TEMPLATES: dict[str, dict[Severity, str]] = {
    "temperature": {
        Severity.AUTO_FIX: "{device} temperature at {value}{unit}. Activating cooling system.",
        Severity.ALERT: "{device} temperature alert: {value}{unit}. Technician assistance needed.",
        Severity.EMERGENCY: "{device} temperature critical: {value}{unit}. Emergency protocols engaged.",
    },
    "pressure": {
        Severity.AUTO_FIX: "{device} pressure at {value} {unit}. Adjusting regulator.",
        Severity.ALERT: "{device} pressure alert: {value} {unit}. Verify patient circuit.",
        Severity.EMERGENCY: "{device} pressure critical: {value} {unit}. Emergency shutdown initiated.",
    },
    "oxygen_level": {
        Severity.AUTO_FIX: "{device} oxygen level at {value}{unit}. Optimizing oxygen delivery.",
        Severity.ALERT: "{device} oxygen level alert: {value}{unit}. Verify oxygen source.",
        Severity.EMERGENCY: "{device} oxygen level critical: {value}{unit}. Emergency backup engaged.",
    },
    "battery_voltage": {
        Severity.AUTO_FIX: "{device} battery at {value}{unit}. Activating power saving mode.",
        Severity.ALERT: "{device} battery alert: {value}{unit}. Connect to external power.",
        Severity.EMERGENCY: "{device} battery critical: {value}{unit}. Switching to emergency backup.",
    },
    "ecg_signal": {
        Severity.AUTO_FIX: "{device} ECG signal variation at {value} {unit}. Recalibrating sensors.",
        Severity.ALERT: "{device} ECG signal alert: {value} {unit}. Check electrode placement.",
        Severity.EMERGENCY: "{device} ECG signal critical: {value} {unit}. Signal integrity compromised.",
    },
}


def status_message(device: DeviceKind, spec: ChannelSpec, status: Severity, value: float) -> str:
    """Human-readable message for one channel in a non-normal state."""
    device_name = DEVICE_CONFIG[device]["name"]
    shown = abs(value) if spec.rectified else value
    formatted = f"{shown:.{spec.precision}f}"

    template = MESSAGE_TEMPLATES.get(spec.name, {}).get(status)
    if template is None:
        return f"{device_name} {spec.label.lower()} issue detected at {formatted} {spec.unit}. Status: {status.value}."
    return template.format(device=device_name, value=formatted, unit=spec.unit)


def _message(device: DeviceKind, metric: str, text: str, status: Severity, now: datetime) -> DiagnosticMessage:
    return DiagnosticMessage(
        id=str(uuid.uuid4()),
        timestamp=now,
        device=device,
        metric=metric,
        message=text,
        status=status,
    )


def _device_messages(snapshot: DeviceSnapshot, now: datetime) -> list[DiagnosticMessage]:
    device = snapshot.kind
    eq = DEVICE_CONFIG[device]
    messages: list[DiagnosticMessage] = []

    for name, metric in snapshot.metrics().items():
        if metric.status == Severity.NORMAL:
            continue
        text = status_message(device, eq["channels"][name], metric.status, metric.value)
        messages.append(_message(device, name, text, metric.status, now))

    if snapshot.has_binary_fault:
        messages.append(_message(device, eq["binary_metric"], eq["fault_message"], Severity.ALERT, now))

    return messages


# ── Public API ────────────────────────────────────────────────────────────────

def derive_messages(
    ventilator: VentilatorSnapshot,
    defibrillator: DefibrillatorSnapshot,
    now: datetime,
    rng: np.random.Generator,
    heartbeat_probability: float = settings.HEARTBEAT_PROBABILITY,
) -> list[DiagnosticMessage]:
    """
    Derive this tick's messages from the new device snapshots.
    All returned messages share the timestamp `now`.
    """
    messages = _device_messages(ventilator, now) + _device_messages(defibrillator, now)

    if rng.random() < heartbeat_probability:
        device = DeviceKind.VENTILATOR if rng.random() < 0.5 else DeviceKind.DEFIBRILLATOR
        messages.append(_message(device, HEARTBEAT_METRIC, HEARTBEAT_MESSAGE, Severity.NORMAL, now))

    return messages


def merge_log(
    new_messages: list[DiagnosticMessage],
    previous: DiagnosticLog,
    cap: int = settings.LOG_CAP,
) -> DiagnosticLog:
    """Prepend new messages and keep the newest `cap` entries."""
    return tuple([*new_messages, *previous][:cap])


def generate_diagnostic_log(
    ventilator: VentilatorSnapshot,
    defibrillator: DefibrillatorSnapshot,
    previous: DiagnosticLog,
    now: datetime,
    rng: np.random.Generator,
    cap: int = settings.LOG_CAP,
    heartbeat_probability: float = settings.HEARTBEAT_PROBABILITY,
) -> DiagnosticLog:
    messages = derive_messages(ventilator, defibrillator, now, rng, heartbeat_probability)
    return merge_log(messages, previous, cap)


def to_dataframe(log: DiagnosticLog) -> pd.DataFrame:
    """Convert a diagnostic log to a DataFrame (newest first)."""
    columns = list(DiagnosticMessage.model_fields)
    df = pd.DataFrame([m.model_dump(mode="json") for m in log], columns=columns)
    if not df.empty:
        df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    return df


def severity_counts(log: DiagnosticLog) -> dict[str, int]:
    """Number of log entries per severity value, zero-filled."""
    df = to_dataframe(log)
    counts = df.groupby("status").size() if not df.empty else pd.Series(dtype=int)
    return {sev.value: int(counts.get(sev.value, 0)) for sev in Severity}
