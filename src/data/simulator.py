"""
src/data/simulator.py
─────────────────────
Telemetry simulator for the ventilator and the defibrillator.

Each tick, per numeric channel, in order:
  1. auto-fix channels are advanced by heal() instead of fluctuating
  2. every other channel fluctuates by its noise magnitude
  3. the new value is reclassified against the channel's range triple;
     a healing channel leaves auto-fix only for normal (early recovery)
     or when heal() completes, so healing always ends within its window
  4. the timestamp moves to `now` only when the status changed

Binary channels (firmware, capacitor) flip with a small independent
probability and never heal.

Snapshots are immutable: tick_*() return new ones.
"""
from __future__ import annotations

from datetime import datetime, timedelta

import numpy as np
import structlog

from config.devices import DEFIBRILLATOR_CHANNELS, VENTILATOR_CHANNELS, ChannelSpec, DeviceKind
from config.settings import settings
from config.severity import Severity
from src.analytics.thresholds import classify_channel
from src.data.healing import HEALING_DURATION, fluctuate, heal
from src.data.models import (
    CapacitorReadiness,
    DefibrillatorSnapshot,
    FirmwareStatus,
    MetricValue,
    VentilatorSnapshot,
)

logger = structlog.get_logger(__name__)


def _initial_metric(spec: ChannelSpec, now: datetime, rng: np.random.Generator) -> MetricValue:
    normal = spec.ranges.normal
    value = round(float(rng.uniform(normal.lower, normal.upper)), 2)
    return MetricValue(value=value, status=Severity.NORMAL, timestamp=now)


def _tick_metric(
    device: DeviceKind,
    metric: MetricValue,
    spec: ChannelSpec,
    now: datetime,
    rng: np.random.Generator,
    healing_duration: timedelta,
    auto_fix_probability: float,
) -> MetricValue:
    if metric.status == Severity.AUTO_FIX:
        healed = heal(metric, spec, now, rng, healing_duration)
        # back inside normal before the window ends → recovered early
        if healed.status == Severity.AUTO_FIX and classify_channel(
            healed.value, spec, rng, auto_fix_probability
        ) == Severity.NORMAL:
            healed = MetricValue(value=healed.value, status=Severity.NORMAL, timestamp=now)
        if healed.status != metric.status:
            logger.debug("channel_healed", device=device.value, channel=spec.name, value=healed.value)
        return healed

    value = fluctuate(metric.value, spec.fluctuation, rng)
    status = classify_channel(value, spec, rng, auto_fix_probability)
    if status == metric.status:
        return MetricValue(value=value, status=status, timestamp=metric.timestamp)

    logger.debug(
        "channel_transition",
        device=device.value,
        channel=spec.name,
        previous=metric.status.value,
        status=status.value,
        value=value,
    )
    return MetricValue(value=value, status=status, timestamp=now)


def _tick_metrics(
    device: DeviceKind,
    metrics: dict[str, MetricValue],
    channels: dict[str, ChannelSpec],
    now: datetime,
    rng: np.random.Generator,
    healing_duration: timedelta,
    auto_fix_probability: float,
) -> dict[str, MetricValue]:
    return {
        name: _tick_metric(device, metrics[name], spec, now, rng, healing_duration, auto_fix_probability)
        for name, spec in channels.items()
    }


def _flips(rng: np.random.Generator, probability: float) -> bool:
    return bool(rng.random() < probability)


# ── Public API ────────────────────────────────────────────────────────────────

def initialize_ventilator(
    now: datetime,
    rng: np.random.Generator,
    fault_probability: float = settings.INITIAL_FAULT_PROBABILITY,
) -> VentilatorSnapshot:
    """Fresh ventilator: every numeric channel sampled inside its normal range."""
    metrics = {name: _initial_metric(spec, now, rng) for name, spec in VENTILATOR_CHANNELS.items()}
    firmware = FirmwareStatus.UNRESPONSIVE if _flips(rng, fault_probability) else FirmwareStatus.RESPONSIVE
    return VentilatorSnapshot(**metrics, firmware_status=firmware)


def initialize_defibrillator(
    now: datetime,
    rng: np.random.Generator,
    fault_probability: float = settings.INITIAL_FAULT_PROBABILITY,
) -> DefibrillatorSnapshot:
    """Fresh defibrillator: every numeric channel sampled inside its normal range."""
    metrics = {name: _initial_metric(spec, now, rng) for name, spec in DEFIBRILLATOR_CHANNELS.items()}
    capacitor = CapacitorReadiness.NOT_READY if _flips(rng, fault_probability) else CapacitorReadiness.READY
    return DefibrillatorSnapshot(**metrics, capacitor_readiness=capacitor)


def tick_ventilator(
    snapshot: VentilatorSnapshot,
    now: datetime,
    rng: np.random.Generator,
    healing_duration: timedelta = HEALING_DURATION,
    auto_fix_probability: float = settings.AUTO_FIX_PROBABILITY,
    flip_probability: float = settings.BINARY_FLIP_PROBABILITY,
) -> VentilatorSnapshot:
    metrics = _tick_metrics(
        DeviceKind.VENTILATOR,
        snapshot.metrics(),
        VENTILATOR_CHANNELS,
        now,
        rng,
        healing_duration,
        auto_fix_probability,
    )

    firmware = snapshot.firmware_status
    if _flips(rng, flip_probability):
        firmware = (
            FirmwareStatus.UNRESPONSIVE
            if firmware == FirmwareStatus.RESPONSIVE
            else FirmwareStatus.RESPONSIVE
        )
        logger.debug("binary_flip", device=DeviceKind.VENTILATOR.value, firmware_status=firmware.value)

    return VentilatorSnapshot(**metrics, firmware_status=firmware)


def tick_defibrillator(
    snapshot: DefibrillatorSnapshot,
    now: datetime,
    rng: np.random.Generator,
    healing_duration: timedelta = HEALING_DURATION,
    auto_fix_probability: float = settings.AUTO_FIX_PROBABILITY,
    flip_probability: float = settings.BINARY_FLIP_PROBABILITY,
) -> DefibrillatorSnapshot:
    metrics = _tick_metrics(
        DeviceKind.DEFIBRILLATOR,
        snapshot.metrics(),
        DEFIBRILLATOR_CHANNELS,
        now,
        rng,
        healing_duration,
        auto_fix_probability,
    )

    capacitor = snapshot.capacitor_readiness
    if _flips(rng, flip_probability):
        capacitor = (
            CapacitorReadiness.NOT_READY
            if capacitor == CapacitorReadiness.READY
            else CapacitorReadiness.READY
        )
        logger.debug("binary_flip", device=DeviceKind.DEFIBRILLATOR.value, capacitor_readiness=capacitor.value)

    return DefibrillatorSnapshot(**metrics, capacitor_readiness=capacitor)
