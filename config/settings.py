"""
config/settings.py
──────────────────
Application configuration loaded from environment variables.
"""
import os
from dataclasses import dataclass


def _optional_int(name: str) -> int | None:
    raw = os.getenv(name)
    return int(raw) if raw not in (None, "") else None


@dataclass
class Settings:
    # Server
    DEBUG: bool = os.getenv("DEBUG", "true").lower() == "true"
    PORT: int = int(os.getenv("PORT", "8050"))
    HOST: str = os.getenv("HOST", "0.0.0.0")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # Simulation clock
    TICK_INTERVAL_MS: int = int(os.getenv("TICK_INTERVAL_MS", "6000"))
    WARMUP_MS: int = int(os.getenv("WARMUP_MS", "1000"))
    HEALING_DURATION_MS: int = int(os.getenv("HEALING_DURATION_MS", "30000"))

    # Diagnostic log retention (entries, newest first)
    LOG_CAP: int = int(os.getenv("LOG_CAP", "20"))

    # Tunable business constants (no clinical rationale behind the defaults)
    AUTO_FIX_PROBABILITY: float = float(os.getenv("AUTO_FIX_PROBABILITY", "0.7"))
    HEARTBEAT_PROBABILITY: float = float(os.getenv("HEARTBEAT_PROBABILITY", "0.3"))
    BINARY_FLIP_PROBABILITY: float = float(os.getenv("BINARY_FLIP_PROBABILITY", "0.05"))
    INITIAL_FAULT_PROBABILITY: float = float(os.getenv("INITIAL_FAULT_PROBABILITY", "0.1"))

    # None → seeded from OS entropy
    SIMULATION_SEED: int | None = _optional_int("SIMULATION_SEED")

    def __post_init__(self) -> None:
        for name in (
            "AUTO_FIX_PROBABILITY",
            "HEARTBEAT_PROBABILITY",
            "BINARY_FLIP_PROBABILITY",
            "INITIAL_FAULT_PROBABILITY",
        ):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise ValueError(f"{name} must be within [0, 1], got {value}")
        for name in ("TICK_INTERVAL_MS", "HEALING_DURATION_MS", "LOG_CAP"):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name} must be positive, got {getattr(self, name)}")
        if self.WARMUP_MS < 0:
            raise ValueError(f"WARMUP_MS must not be negative, got {self.WARMUP_MS}")


settings = Settings()
