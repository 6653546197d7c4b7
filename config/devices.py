"""
config/devices.py
─────────────────
Device definitions and per-channel telemetry ranges.

Each numeric channel carries a normal / warning / critical range triple.
The triples are not assumed to be ordered: oxygen saturation and battery
voltage are healthy at the HIGH end, so their critical range sits below
the normal one.

Ranges are validated on construction, so a malformed table fails at import.
"""
from dataclasses import dataclass, field
from enum import Enum


class RangeConfigError(ValueError):
    """Raised when a channel range table is malformed."""


class DeviceKind(str, Enum):
    VENTILATOR = "ventilator"
    DEFIBRILLATOR = "defibrillator"


@dataclass(frozen=True)
class Range:
    """Closed numeric interval [lower, upper]."""
    lower: float
    upper: float

    def __post_init__(self) -> None:
        if self.lower > self.upper:
            raise RangeConfigError(f"range lower bound {self.lower} exceeds upper bound {self.upper}")

    def contains(self, value: float) -> bool:
        return self.lower <= value <= self.upper

    def narrowed(self, margin: float) -> "Range":
        """Shrink both ends by `margin` (healing target band)."""
        if margin < 0 or self.lower + margin > self.upper - margin:
            raise RangeConfigError(f"margin {margin} empties range [{self.lower}, {self.upper}]")
        return Range(self.lower + margin, self.upper - margin)


@dataclass(frozen=True)
class RangeTriple:
    normal: Range
    warning: Range
    critical: Range


@dataclass(frozen=True)
class ChannelSpec:
    name: str
    label: str
    unit: str
    ranges: RangeTriple
    fluctuation: float       # ± uniform noise per tick
    heal_margin: float       # healing targets stay this far inside normal
    rectified: bool = False  # classify |value| (signal amplitude)
    precision: int = 1       # decimals in diagnostic messages
    heal_band: Range = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.fluctuation < 0:
            raise RangeConfigError(f"{self.name}: fluctuation must not be negative")
        object.__setattr__(self, "heal_band", self.ranges.normal.narrowed(self.heal_margin))


# ── Ventilator channels ───────────────────────────────────────────────────────
VENTILATOR_TEMPERATURE = ChannelSpec(
    name="temperature",
    label="Temperature",
    unit="°C",
    ranges=RangeTriple(normal=Range(20, 38), warning=Range(38, 40), critical=Range(40, 50)),
    fluctuation=1.0,
    heal_margin=2.0,
)

VENTILATOR_PRESSURE = ChannelSpec(
    name="pressure",
    label="Pressure",
    unit="cmH₂O",
    ranges=RangeTriple(normal=Range(5, 35), warning=Range(35, 40), critical=Range(40, 50)),
    fluctuation=2.0,
    heal_margin=5.0,
)

VENTILATOR_OXYGEN = ChannelSpec(
    name="oxygen_level",
    label="Oxygen Level",
    unit="%",
    ranges=RangeTriple(normal=Range(90, 100), warning=Range(85, 90), critical=Range(0, 85)),
    fluctuation=1.0,
    heal_margin=2.0,
)

# ── Defibrillator channels ────────────────────────────────────────────────────
DEFIBRILLATOR_BATTERY = ChannelSpec(
    name="battery_voltage",
    label="Battery Voltage",
    unit="V",
    ranges=RangeTriple(normal=Range(11, 14), warning=Range(10, 11), critical=Range(0, 10)),
    fluctuation=0.2,
    heal_margin=0.5,
)

DEFIBRILLATOR_ECG = ChannelSpec(
    name="ecg_signal",
    label="ECG Signal",
    unit="mV",
    ranges=RangeTriple(normal=Range(-1, 1), warning=Range(-1.5, 1.5), critical=Range(-2, 2)),
    fluctuation=0.3,
    heal_margin=0.2,
    rectified=True,
    precision=2,
)

DEFIBRILLATOR_TEMPERATURE = ChannelSpec(
    name="temperature",
    label="Temperature",
    unit="°C",
    ranges=RangeTriple(normal=Range(20, 40), warning=Range(40, 45), critical=Range(45, 55)),
    fluctuation=1.0,
    heal_margin=2.0,
)

# ── Device registry ───────────────────────────────────────────────────────────
VENTILATOR_CHANNELS: dict[str, ChannelSpec] = {
    spec.name: spec for spec in (VENTILATOR_TEMPERATURE, VENTILATOR_PRESSURE, VENTILATOR_OXYGEN)
}

DEFIBRILLATOR_CHANNELS: dict[str, ChannelSpec] = {
    spec.name: spec for spec in (DEFIBRILLATOR_BATTERY, DEFIBRILLATOR_ECG, DEFIBRILLATOR_TEMPERATURE)
}

DEVICE_CONFIG: dict[DeviceKind, dict] = {
    DeviceKind.VENTILATOR: {
        "id": DeviceKind.VENTILATOR,
        "name": "Ventilator",
        "channels": VENTILATOR_CHANNELS,
        "binary_channel": "firmware_status",
        "binary_label": "Firmware Status",
        "binary_metric": "firmware",
        "fault_message": "Ventilator firmware is unresponsive. System attempting to restart service.",
    },
    DeviceKind.DEFIBRILLATOR: {
        "id": DeviceKind.DEFIBRILLATOR,
        "name": "Defibrillator",
        "channels": DEFIBRILLATOR_CHANNELS,
        "binary_channel": "capacitor_readiness",
        "binary_label": "Capacitor",
        "binary_metric": "capacitor",
        "fault_message": "Defibrillator capacitor is not ready. System charging capacitor bank.",
    },
}

DEVICE_KINDS = list(DEVICE_CONFIG.keys())
