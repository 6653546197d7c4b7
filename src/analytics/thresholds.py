"""
src/analytics/thresholds.py
────────────────────────────
Threshold classification engine.

Provides:
  - classify()          : value + normal/warning/critical ranges → Severity
  - classify_channel()  : same, driven by a ChannelSpec
  - max_severity()      : most urgent of several statuses
  - device_severity()   : overall status of a device snapshot

Borderline excursions (warning range, or the critical zone just below
normal) are split at random between auto-fix and alert: some are
recoverable on their own, some need an operator.
"""
from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from config.devices import ChannelSpec, Range
from config.settings import settings
from config.severity import SEVERITY_ORDER, Severity
from src.data.models import DeviceSnapshot


def classify(
    value: float,
    normal: Range,
    warning: Range,
    critical: Range,
    rng: np.random.Generator,
    auto_fix_probability: float = settings.AUTO_FIX_PROBABILITY,
) -> Severity:
    """
    Classify a value against a range triple.

    Only interval membership is tested; the triple may be in any order.
    Every float maps to a severity (NaN falls through to emergency).
    """
    if normal.contains(value):
        return Severity.NORMAL
    if warning.contains(value) or critical.lower <= value <= normal.lower:
        return Severity.AUTO_FIX if rng.random() < auto_fix_probability else Severity.ALERT
    return Severity.EMERGENCY


def classify_channel(
    value: float,
    spec: ChannelSpec,
    rng: np.random.Generator,
    auto_fix_probability: float = settings.AUTO_FIX_PROBABILITY,
) -> Severity:
    measured = abs(value) if spec.rectified else value
    ranges = spec.ranges
    return classify(measured, ranges.normal, ranges.warning, ranges.critical, rng, auto_fix_probability)


def max_severity(statuses: Iterable[Severity]) -> Severity:
    return max(statuses, key=SEVERITY_ORDER.__getitem__, default=Severity.NORMAL)


def device_severity(snapshot: DeviceSnapshot) -> Severity:
    """
    Overall device status: the most urgent numeric channel, raised to at
    least alert while the binary channel reports its fault state.
    """
    statuses = [metric.status for metric in snapshot.metrics().values()]
    if snapshot.has_binary_fault:
        statuses.append(Severity.ALERT)
    return max_severity(statuses)
