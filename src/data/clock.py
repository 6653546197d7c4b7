"""
src/data/clock.py
─────────────────
Simulation clock.

start() spawns one daemon thread that:
  1. waits WARMUP_MS, then marks the store ready
  2. every TICK_INTERVAL_MS runs one tick: ventilator, defibrillator,
     diagnostic log, then a single publish of the new state; a tick that
     raises is logged as tick_failed and the loop carries on

stop() cancels both waits, is idempotent, and guarantees no publish
happens afterwards. tick() may also be called directly (tests, replay).
"""
from __future__ import annotations

import threading
from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import numpy as np
import structlog

from config.settings import settings
from src.analytics.diagnostics import generate_diagnostic_log
from src.analytics.thresholds import device_severity
from src.data.simulator import tick_defibrillator, tick_ventilator
from src.data.store import DeviceState, DeviceStore, LifecycleError

logger = structlog.get_logger(__name__)


def utc_now() -> datetime:
    return datetime.now(tz=UTC)


class SimulationClock:
    def __init__(
        self,
        store: DeviceStore,
        rng: np.random.Generator | None = None,
        now_fn: Callable[[], datetime] = utc_now,
        interval_ms: int = settings.TICK_INTERVAL_MS,
        warmup_ms: int = settings.WARMUP_MS,
        healing_duration_ms: int = settings.HEALING_DURATION_MS,
        auto_fix_probability: float = settings.AUTO_FIX_PROBABILITY,
        flip_probability: float = settings.BINARY_FLIP_PROBABILITY,
        heartbeat_probability: float = settings.HEARTBEAT_PROBABILITY,
    ) -> None:
        self._store = store
        self._rng = rng if rng is not None else np.random.default_rng(settings.SIMULATION_SEED)
        self._now = now_fn
        self._interval = interval_ms / 1000.0
        self._warmup = warmup_ms / 1000.0
        self._healing_duration = timedelta(milliseconds=healing_duration_ms)
        self._auto_fix_probability = auto_fix_probability
        self._flip_probability = flip_probability
        self._heartbeat_probability = heartbeat_probability

        self._stopped = threading.Event()
        self._tick_lock = threading.Lock()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    @property
    def stopped(self) -> bool:
        return self._stopped.is_set()

    def start(self) -> None:
        if self._stopped.is_set():
            raise LifecycleError("a stopped simulation clock cannot be restarted")
        if self._thread is not None:
            return
        self._thread = threading.Thread(target=self._run, name="simulation-clock", daemon=True)
        self._thread.start()
        logger.info("clock_started", interval_s=self._interval, warmup_s=self._warmup)

    def stop(self, timeout: float | None = 5.0) -> None:
        if self._stopped.is_set():
            return
        self._stopped.set()
        # wait for an in-flight tick so nothing is published after stop()
        with self._tick_lock:
            self._store.stop()
        thread = self._thread
        if thread is not None and thread is not threading.current_thread():
            thread.join(timeout)
        logger.info("clock_stopped")

    def _run(self) -> None:
        if self._stopped.wait(self._warmup):
            return
        with self._tick_lock:
            if self._stopped.is_set():
                return
            self._store.mark_ready()
        logger.info("simulation_ready")

        while not self._stopped.wait(self._interval):
            try:
                self.tick()
            except Exception:
                # a failed step publishes nothing; the next interval retries
                logger.exception("tick_failed")

    def tick(self) -> DeviceState | None:
        """
        Run one full simulation step and publish it.

        Returns the published state, or None when the clock has been stopped.
        """
        with self._tick_lock:
            if self._stopped.is_set():
                return None

            state = self._store.require_ready()
            now = self._now()

            ventilator = tick_ventilator(
                state.ventilator,
                now,
                self._rng,
                self._healing_duration,
                self._auto_fix_probability,
                self._flip_probability,
            )
            defibrillator = tick_defibrillator(
                state.defibrillator,
                now,
                self._rng,
                self._healing_duration,
                self._auto_fix_probability,
                self._flip_probability,
            )
            log = generate_diagnostic_log(
                ventilator,
                defibrillator,
                state.diagnostic_log,
                now,
                self._rng,
                cap=self._store.log_cap,
                heartbeat_probability=self._heartbeat_probability,
            )
            published = self._store.publish(ventilator, defibrillator, log, now)

        logger.debug(
            "tick",
            version=published.version,
            ventilator=device_severity(ventilator).value,
            defibrillator=device_severity(defibrillator).value,
            log_size=len(log),
        )
        return published
