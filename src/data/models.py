"""
src/data/models.py
──────────────────
Pydantic v2 data models for channel samples, device snapshots, and
diagnostic messages. All models are frozen: each tick builds new ones.
"""

from datetime import datetime
from enum import Enum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict

from config.devices import DEFIBRILLATOR_CHANNELS, VENTILATOR_CHANNELS, DeviceKind
from config.severity import Severity


class FirmwareStatus(str, Enum):
    RESPONSIVE = "responsive"
    UNRESPONSIVE = "unresponsive"


class CapacitorReadiness(str, Enum):
    READY = "ready"
    NOT_READY = "not-ready"


class MetricValue(BaseModel):
    """Latest sample of one numeric channel.

    `timestamp` is the instant the channel last changed status (or finished
    healing), not the instant of the sample.
    """
    model_config = ConfigDict(frozen=True)

    value: float
    status: Severity
    timestamp: datetime


class VentilatorSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[DeviceKind] = DeviceKind.VENTILATOR

    temperature: MetricValue
    pressure: MetricValue
    oxygen_level: MetricValue
    firmware_status: FirmwareStatus = FirmwareStatus.RESPONSIVE

    def metrics(self) -> dict[str, MetricValue]:
        return {name: getattr(self, name) for name in VENTILATOR_CHANNELS}

    @property
    def has_binary_fault(self) -> bool:
        return self.firmware_status == FirmwareStatus.UNRESPONSIVE


class DefibrillatorSnapshot(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: ClassVar[DeviceKind] = DeviceKind.DEFIBRILLATOR

    battery_voltage: MetricValue
    ecg_signal: MetricValue
    temperature: MetricValue
    capacitor_readiness: CapacitorReadiness = CapacitorReadiness.READY

    def metrics(self) -> dict[str, MetricValue]:
        return {name: getattr(self, name) for name in DEFIBRILLATOR_CHANNELS}

    @property
    def has_binary_fault(self) -> bool:
        return self.capacitor_readiness == CapacitorReadiness.NOT_READY


DeviceSnapshot = VentilatorSnapshot | DefibrillatorSnapshot


class DiagnosticMessage(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    timestamp: datetime
    device: DeviceKind
    metric: str
    message: str
    status: Severity
