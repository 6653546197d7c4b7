"""
src/data/healing.py
───────────────────
Per-channel value dynamics.

  fluctuate — sensor noise / natural drift for channels that are not healing
  heal      — time-bounded recovery for channels in the auto-fix state

Healing walks the value a progress-proportional fraction of the way toward
a target drawn inside the narrowed normal band. The target is re-drawn on
every call. Progress reaches 1 once the healing duration has elapsed since
the channel entered auto-fix, so recovery always completes in bounded time.
"""
from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np

from config.devices import ChannelSpec
from config.settings import settings
from config.severity import Severity
from src.data.models import MetricValue

HEALING_DURATION = timedelta(milliseconds=settings.HEALING_DURATION_MS)


def fluctuate(value: float, magnitude: float, rng: np.random.Generator) -> float:
    """Add uniform noise in [-magnitude, +magnitude], rounded to 2 decimals."""
    return round(value + float(rng.uniform(-magnitude, magnitude)), 2)


def healing_progress(
    metric: MetricValue,
    now: datetime,
    healing_duration: timedelta = HEALING_DURATION,
) -> float:
    """Fraction [0, 1] of the healing window elapsed since `metric.timestamp`."""
    raw = (now - metric.timestamp) / healing_duration
    return float(np.clip(raw, 0.0, 1.0))


def heal(
    metric: MetricValue,
    spec: ChannelSpec,
    now: datetime,
    rng: np.random.Generator,
    healing_duration: timedelta = HEALING_DURATION,
) -> MetricValue:
    """
    Advance one auto-fix channel by one tick.

    Returns:
        MetricValue with status normal and timestamp `now` once healing
        completes, otherwise status auto-fix with the original timestamp.
    """
    progress = healing_progress(metric, now, healing_duration)
    band = spec.heal_band
    target = round(float(rng.uniform(band.lower, band.upper)), 2)
    value = round(metric.value + (target - metric.value) * progress, 2)

    if progress >= 1.0:
        return MetricValue(value=value, status=Severity.NORMAL, timestamp=now)
    return MetricValue(value=value, status=Severity.AUTO_FIX, timestamp=metric.timestamp)
