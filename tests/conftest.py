"""
tests/conftest.py
─────────────────
Shared pytest fixtures for the ICU Device Monitor test suite.
"""
import os
from collections import deque
from datetime import datetime, timedelta, timezone

import numpy as np
import pytest

os.environ.setdefault("DEBUG", "false")


class ScriptedRng:
    """
    Deterministic stand-in for np.random.Generator.

    random()        pops the next scripted value (default 0.99: no auto-fix,
                    no flip, no heartbeat)
    uniform(lo, hi) pops the next scripted FRACTION f and returns
                    lo + f * (hi - lo) (default 0.5: midpoint, zero noise)
    """

    def __init__(self, randoms=(), uniforms=()):
        self._randoms = deque(randoms)
        self._uniforms = deque(uniforms)

    def random(self) -> float:
        return self._randoms.popleft() if self._randoms else 0.99

    def uniform(self, low: float, high: float) -> float:
        fraction = self._uniforms.popleft() if self._uniforms else 0.5
        return low + fraction * (high - low)


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(42)


@pytest.fixture
def scripted():
    return ScriptedRng


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 6, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def metric(now):
    """Factory for MetricValue with sensible defaults."""
    from src.data.models import MetricValue
    from config.severity import Severity

    def _make(value: float, status: Severity = Severity.NORMAL, age_ms: int = 0):
        return MetricValue(value=value, status=status, timestamp=now - timedelta(milliseconds=age_ms))

    return _make


@pytest.fixture
def ventilator(metric):
    from src.data.models import FirmwareStatus, VentilatorSnapshot
    return VentilatorSnapshot(
        temperature=metric(30.0),
        pressure=metric(20.0),
        oxygen_level=metric(95.0),
        firmware_status=FirmwareStatus.RESPONSIVE,
    )


@pytest.fixture
def defibrillator(metric):
    from src.data.models import CapacitorReadiness, DefibrillatorSnapshot
    return DefibrillatorSnapshot(
        battery_voltage=metric(12.5),
        ecg_signal=metric(0.2),
        temperature=metric(30.0),
        capacitor_readiness=CapacitorReadiness.READY,
    )
