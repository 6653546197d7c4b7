"""
app.py
──────
ICU Device Monitor — Application Entry Point.

Startup sequence:
  1. Configure logging
  2. Create the device store (fresh randomized-normal snapshots) and clock
  3. Create Dash app with DARKLY bootstrap theme and register callbacks
  4. Start the simulation clock (warm-up, then one tick per interval)
  5. Run dev server (or expose `server` for gunicorn in production)
"""
import atexit

import dash
import dash_bootstrap_components as dbc
import numpy as np
import structlog

from config.settings import settings
from src.callbacks import monitor
from src.data.clock import SimulationClock, utc_now
from src.data.store import DeviceStore
from src.layout.main import create_layout
from src.logging_config import configure_logging

# ── 1. Logging ────────────────────────────────────────────────────────────────
configure_logging(settings.LOG_LEVEL, debug=settings.DEBUG)
logger = structlog.get_logger("app")

# ── 2. Simulation state ───────────────────────────────────────────────────────
rng = np.random.default_rng(settings.SIMULATION_SEED)
store = DeviceStore.initialize(utc_now(), rng)
clock = SimulationClock(store, rng=rng)

# ── 3. Dash app ───────────────────────────────────────────────────────────────
app = dash.Dash(
    __name__,
    external_stylesheets=[dbc.themes.DARKLY],
    suppress_callback_exceptions=True,
    meta_tags=[{"name": "viewport", "content": "width=device-width, initial-scale=1"}],
    title="ICU Monitor",
)

server = app.server  # gunicorn entry point
app.layout = create_layout()
monitor.register(app, store)

# ── 4. Start simulation ───────────────────────────────────────────────────────
clock.start()
atexit.register(clock.stop)
logger.info("app_ready", host=settings.HOST, port=settings.PORT)

# ── 5. Run ────────────────────────────────────────────────────────────────────
if __name__ == "__main__":
    app.run(
        debug=settings.DEBUG,
        host=settings.HOST,
        port=settings.PORT,
        use_reloader=False,
    )
