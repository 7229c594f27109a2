"""Status server: GET /status for a running reactor."""

from sentinel.status_server.app import create_app, build_server

__all__ = ["create_app", "build_server"]
