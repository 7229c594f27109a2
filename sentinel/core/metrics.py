"""Simple in-memory counters for reactor events and login attempts."""

import logging
import threading
from typing import Dict, Optional

logger = logging.getLogger(__name__)


class Metrics:
    """In-memory counters; read by the status server from another thread."""

    def __init__(self):
        self._lock = threading.Lock()
        self._event_counts: Dict[str, int] = {}
        self._auth_retries = 0
        self._last_event_ts: Optional[float] = None

    def inc_event(self, kind: str, ts: Optional[float] = None) -> int:
        with self._lock:
            count = self._event_counts.get(kind, 0) + 1
            self._event_counts[kind] = count
            if ts is not None:
                self._last_event_ts = ts
            return count

    def event_counts(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._event_counts)

    def inc_auth_retry(self) -> int:
        with self._lock:
            self._auth_retries += 1
            return self._auth_retries

    @property
    def auth_retries(self) -> int:
        with self._lock:
            return self._auth_retries

    @property
    def last_event_ts(self) -> Optional[float]:
        with self._lock:
            return self._last_event_ts

    def log_snapshot(self) -> None:
        """Log current metrics snapshot."""
        with self._lock:
            parts = [f"auth_retries={self._auth_retries}"]
            for kind in sorted(self._event_counts):
                parts.append(f"{kind}={self._event_counts[kind]}")
        logger.info("metrics " + " ".join(parts))


_global_metrics: Optional[Metrics] = None


def get_metrics() -> Metrics:
    global _global_metrics
    if _global_metrics is None:
        _global_metrics = Metrics()
    return _global_metrics
