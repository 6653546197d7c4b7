"""
tests/test_config.py
─────────────────────
Tests for settings validation and the channel range tables.
"""
import pytest

from config.devices import (
    DEFIBRILLATOR_BATTERY,
    DEVICE_CONFIG,
    VENTILATOR_OXYGEN,
    VENTILATOR_TEMPERATURE,
    ChannelSpec,
    DeviceKind,
    Range,
    RangeConfigError,
    RangeTriple,
)
from config.settings import Settings
from config.severity import SEVERITY_ORDER, Severity


class TestRange:
    def test_contains_is_closed(self):
        r = Range(5, 35)
        assert r.contains(5)
        assert r.contains(35)
        assert not r.contains(35.01)

    def test_inverted_range_rejected(self):
        with pytest.raises(RangeConfigError):
            Range(40, 20)

    def test_narrowed(self):
        assert Range(20, 38).narrowed(2) == Range(22, 36)

    def test_narrowed_too_far_rejected(self):
        with pytest.raises(RangeConfigError):
            Range(11, 14).narrowed(2)

    def test_negative_fluctuation_rejected(self):
        with pytest.raises(RangeConfigError):
            ChannelSpec(
                name="x",
                label="X",
                unit="",
                ranges=RangeTriple(Range(0, 10), Range(10, 20), Range(20, 30)),
                fluctuation=-1.0,
                heal_margin=1.0,
            )

    def test_oversized_heal_margin_rejected(self):
        with pytest.raises(RangeConfigError):
            ChannelSpec(
                name="x",
                label="X",
                unit="",
                ranges=RangeTriple(Range(0, 1), Range(1, 2), Range(2, 3)),
                fluctuation=0.1,
                heal_margin=1.0,
            )


class TestChannelTables:
    def test_ventilator_temperature(self):
        r = VENTILATOR_TEMPERATURE.ranges
        assert (r.normal, r.warning, r.critical) == (Range(20, 38), Range(38, 40), Range(40, 50))
        assert VENTILATOR_TEMPERATURE.heal_band == Range(22, 36)

    def test_oxygen_normal_is_high_end(self):
        r = VENTILATOR_OXYGEN.ranges
        assert r.normal.lower > r.critical.upper

    def test_battery_heal_band(self):
        assert DEFIBRILLATOR_BATTERY.heal_band == Range(11.5, 13.5)
        assert DEFIBRILLATOR_BATTERY.fluctuation == 0.2

    def test_registry(self):
        assert list(DEVICE_CONFIG[DeviceKind.VENTILATOR]["channels"]) == ["temperature", "pressure", "oxygen_level"]
        assert DEVICE_CONFIG[DeviceKind.DEFIBRILLATOR]["binary_metric"] == "capacitor"


class TestSeverityOrder:
    def test_ascending_urgency(self):
        ranked = sorted(Severity, key=SEVERITY_ORDER.__getitem__)
        assert ranked == [Severity.NORMAL, Severity.AUTO_FIX, Severity.ALERT, Severity.EMERGENCY]


class TestSettings:
    def test_defaults(self):
        s = Settings()
        assert s.LOG_CAP == 20
        assert s.HEALING_DURATION_MS == 30_000
        assert s.TICK_INTERVAL_MS == 6_000
        assert s.AUTO_FIX_PROBABILITY == 0.7
        assert s.HEARTBEAT_PROBABILITY == 0.3
        assert s.BINARY_FLIP_PROBABILITY == 0.05

    @pytest.mark.parametrize("name", ["AUTO_FIX_PROBABILITY", "HEARTBEAT_PROBABILITY", "BINARY_FLIP_PROBABILITY"])
    def test_probability_out_of_range(self, name):
        with pytest.raises(ValueError):
            Settings(**{name: 1.5})

    def test_non_positive_cap(self):
        with pytest.raises(ValueError):
            Settings(LOG_CAP=0)

    def test_negative_warmup(self):
        with pytest.raises(ValueError):
            Settings(WARMUP_MS=-1)
