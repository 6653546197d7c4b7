"""
src/data/store.py
─────────────────
In-memory state container for the published device state.

Provides:
  - DeviceStore.initialize() : fresh randomized-normal snapshots, empty log
  - read()                   : latest published DeviceState (immutable)
  - require_ready()          : same, but only once the simulation is ready
  - mark_ready() / stop()    : lifecycle transitions
  - publish()                : replace the whole state in one step

Lifecycle: uninitialized → ready → stopped. Using the store outside that
order is a wiring bug and raises LifecycleError.

Thread safety: single writer (the clock), many readers; the state object is
frozen and swapped under a lock, so readers never see a partial update.
"""
from __future__ import annotations

import threading
from datetime import datetime
from enum import Enum

import numpy as np
from pydantic import BaseModel, ConfigDict

from config.settings import settings
from src.data.models import DefibrillatorSnapshot, DiagnosticMessage, VentilatorSnapshot
from src.data.simulator import initialize_defibrillator, initialize_ventilator


class LifecycleError(RuntimeError):
    """Raised when the device state is used outside its valid lifecycle."""


class LogOverflowError(RuntimeError):
    """Raised when a published diagnostic log exceeds the retention cap."""


class Lifecycle(str, Enum):
    UNINITIALIZED = "uninitialized"
    READY = "ready"
    STOPPED = "stopped"


class DeviceState(BaseModel):
    model_config = ConfigDict(frozen=True)

    ventilator: VentilatorSnapshot
    defibrillator: DefibrillatorSnapshot
    diagnostic_log: tuple[DiagnosticMessage, ...] = ()
    is_ready: bool = False
    version: int = 0
    updated_at: datetime


class DeviceStore:
    def __init__(
        self,
        ventilator: VentilatorSnapshot,
        defibrillator: DefibrillatorSnapshot,
        now: datetime,
        log_cap: int = settings.LOG_CAP,
    ) -> None:
        self._lock = threading.RLock()
        self._log_cap = log_cap
        self._lifecycle = Lifecycle.UNINITIALIZED
        self._state = DeviceState(ventilator=ventilator, defibrillator=defibrillator, updated_at=now)

    @classmethod
    def initialize(
        cls,
        now: datetime,
        rng: np.random.Generator,
        log_cap: int = settings.LOG_CAP,
    ) -> DeviceStore:
        return cls(initialize_ventilator(now, rng), initialize_defibrillator(now, rng), now, log_cap)

    @property
    def lifecycle(self) -> Lifecycle:
        return self._lifecycle

    @property
    def log_cap(self) -> int:
        return self._log_cap

    def read(self) -> DeviceState:
        with self._lock:
            if self._lifecycle == Lifecycle.STOPPED:
                raise LifecycleError("device state read after the simulation was stopped")
            return self._state

    def require_ready(self) -> DeviceState:
        with self._lock:
            if self._lifecycle != Lifecycle.READY:
                raise LifecycleError(f"device state requires a ready simulation (currently {self._lifecycle.value})")
            return self._state

    def mark_ready(self) -> DeviceState:
        with self._lock:
            if self._lifecycle == Lifecycle.STOPPED:
                raise LifecycleError("cannot mark a stopped simulation ready")
            if self._lifecycle == Lifecycle.UNINITIALIZED:
                self._lifecycle = Lifecycle.READY
                self._state = self._state.model_copy(update={"is_ready": True})
            return self._state

    def publish(
        self,
        ventilator: VentilatorSnapshot,
        defibrillator: DefibrillatorSnapshot,
        diagnostic_log: tuple[DiagnosticMessage, ...],
        now: datetime,
    ) -> DeviceState:
        if len(diagnostic_log) > self._log_cap:
            raise LogOverflowError(f"diagnostic log has {len(diagnostic_log)} entries, cap is {self._log_cap}")

        with self._lock:
            current = self.require_ready()
            self._state = DeviceState(
                ventilator=ventilator,
                defibrillator=defibrillator,
                diagnostic_log=tuple(diagnostic_log),
                is_ready=True,
                version=current.version + 1,
                updated_at=now,
            )
            return self._state

    def stop(self) -> None:
        with self._lock:
            self._lifecycle = Lifecycle.STOPPED
