"""
tests/test_thresholds.py
─────────────────────────
Tests for the threshold classifier and severity aggregation.
"""
import math

import numpy as np
import pytest

from config.devices import (
    DEFIBRILLATOR_CHANNELS,
    DEFIBRILLATOR_ECG,
    VENTILATOR_CHANNELS,
    VENTILATOR_OXYGEN,
    VENTILATOR_TEMPERATURE,
)
from config.severity import Severity
from src.analytics.thresholds import classify, classify_channel, device_severity, max_severity
from src.data.models import CapacitorReadiness, FirmwareStatus

ALL_CHANNELS = [*VENTILATOR_CHANNELS.values(), *DEFIBRILLATOR_CHANNELS.values()]


class TestClassify:
    @pytest.mark.parametrize("spec", ALL_CHANNELS, ids=lambda s: s.name)
    def test_normal_range_is_normal(self, spec, rng):
        normal = spec.ranges.normal
        for value in np.linspace(normal.lower, normal.upper, 25):
            assert classify_channel(float(value), spec, rng) == Severity.NORMAL

    def test_warning_splits_auto_fix(self, scripted):
        r = VENTILATOR_TEMPERATURE.ranges
        assert classify(39.0, r.normal, r.warning, r.critical, scripted(randoms=[0.1])) == Severity.AUTO_FIX

    def test_warning_splits_alert(self, scripted):
        r = VENTILATOR_TEMPERATURE.ranges
        assert classify(39.0, r.normal, r.warning, r.critical, scripted(randoms=[0.9])) == Severity.ALERT

    def test_split_boundary_uses_probability(self, scripted):
        r = VENTILATOR_TEMPERATURE.ranges
        assert classify(39.0, r.normal, r.warning, r.critical, scripted(randoms=[0.7])) == Severity.ALERT
        assert classify(39.0, r.normal, r.warning, r.critical, scripted(randoms=[0.69])) == Severity.AUTO_FIX

    def test_above_warning_is_emergency(self, rng):
        assert classify_channel(45.0, VENTILATOR_TEMPERATURE, rng) == Severity.EMERGENCY

    def test_below_normal_zone_is_borderline(self, rng):
        # oxygen critical range [0, 85] overlaps [critical.lower, normal.lower]
        for value in (10.0, 50.0, 84.0, 88.0):
            assert classify_channel(value, VENTILATOR_OXYGEN, rng) in (Severity.AUTO_FIX, Severity.ALERT)

    def test_ventilator_temperature_below_normal_is_emergency(self, rng):
        # critical range sits above normal, so nothing below 20 °C is borderline
        assert classify_channel(15.0, VENTILATOR_TEMPERATURE, rng) == Severity.EMERGENCY

    def test_auto_fix_probability_override(self, rng):
        r = VENTILATOR_TEMPERATURE.ranges
        results = {classify(39.0, r.normal, r.warning, r.critical, rng, auto_fix_probability=0.0) for _ in range(20)}
        assert results == {Severity.ALERT}

    @pytest.mark.parametrize("value", [-1e9, -60.0, 0.0, 1e9, math.inf, -math.inf, math.nan])
    def test_total_over_all_inputs(self, value, rng):
        for spec in ALL_CHANNELS:
            assert classify_channel(value, spec, rng) in set(Severity)

    def test_no_randomness_consumed_for_normal(self, scripted):
        source = scripted(randoms=[0.1])
        classify_channel(30.0, VENTILATOR_TEMPERATURE, source)
        assert source.random() == 0.1


class TestRectifiedChannel:
    def test_negative_ecg_within_amplitude_is_normal(self, rng):
        assert classify_channel(-0.8, DEFIBRILLATOR_ECG, rng) == Severity.NORMAL

    def test_negative_ecg_warning_uses_amplitude(self, scripted):
        assert classify_channel(-1.3, DEFIBRILLATOR_ECG, scripted(randoms=[0.1])) == Severity.AUTO_FIX

    def test_large_negative_ecg_is_emergency(self, rng):
        assert classify_channel(-1.8, DEFIBRILLATOR_ECG, rng) == Severity.EMERGENCY


class TestMaxSeverity:
    def test_alert_outranks_auto_fix(self):
        assert max_severity([Severity.AUTO_FIX, Severity.ALERT]) == Severity.ALERT
        assert max_severity([Severity.ALERT, Severity.AUTO_FIX]) == Severity.ALERT

    def test_emergency_outranks_all(self):
        assert max_severity(list(Severity)) == Severity.EMERGENCY

    def test_empty_is_normal(self):
        assert max_severity([]) == Severity.NORMAL


class TestDeviceSeverity:
    def test_all_normal(self, ventilator, defibrillator):
        assert device_severity(ventilator) == Severity.NORMAL
        assert device_severity(defibrillator) == Severity.NORMAL

    def test_worst_channel_wins(self, ventilator, metric):
        snap = ventilator.model_copy(update={"pressure": metric(37.0, Severity.ALERT)})
        assert device_severity(snap) == Severity.ALERT

    def test_auto_fix_only(self, ventilator, metric):
        snap = ventilator.model_copy(update={"oxygen_level": metric(88.0, Severity.AUTO_FIX)})
        assert device_severity(snap) == Severity.AUTO_FIX

    def test_firmware_fault_forces_alert(self, ventilator, metric):
        snap = ventilator.model_copy(update={
            "firmware_status": FirmwareStatus.UNRESPONSIVE,
            "temperature": metric(39.0, Severity.AUTO_FIX),
        })
        assert device_severity(snap) == Severity.ALERT

    def test_capacitor_fault_does_not_mask_emergency(self, defibrillator, metric):
        snap = defibrillator.model_copy(update={
            "capacitor_readiness": CapacitorReadiness.NOT_READY,
            "battery_voltage": metric(9.0, Severity.EMERGENCY),
        })
        assert device_severity(snap) == Severity.EMERGENCY
