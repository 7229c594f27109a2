"""FastAPI app for GET /status and GET /events on a running SteamReactor (same process)."""

import logging
import time
from typing import Any, Dict, Optional

import uvicorn
from fastapi import FastAPI

from sentinel.core.metrics import Metrics, get_metrics
from sentinel.reactor.steam_reactor import SteamReactor

logger = logging.getLogger(__name__)


def create_app(reactor: SteamReactor, metrics: Optional[Metrics] = None) -> FastAPI:
    """Build FastAPI app reading live reactor state and event counters."""
    metrics = metrics or get_metrics()
    app = FastAPI(title="Sentinel Status Server", description="Steam reactor status")

    @app.get("/status")
    def get_status() -> Dict[str, Any]:
        """Return login state, trade listener state and last event age."""
        last_ts = metrics.last_event_ts
        return {
            "steamid": reactor.steamid,
            "online": reactor.user_online,
            "trade_listeners_attached": reactor.trade_listeners_attached,
            "auth_retries": metrics.auth_retries,
            "last_event_ts": last_ts,
            "seconds_since_last_event": (time.time() - last_ts) if last_ts is not None else None,
        }

    @app.get("/events")
    def get_events() -> Dict[str, Any]:
        """Return emitted event counts per kind."""
        return {"events": metrics.event_counts()}

    return app


def build_server(app: FastAPI, host: str, port: int) -> uvicorn.Server:
    """uvicorn server to be awaited on the reactor's event loop."""
    logger.info("Status server on %s:%s", host, port)
    return uvicorn.Server(uvicorn.Config(app, host=host, port=int(port), log_level="info"))
