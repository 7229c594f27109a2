#!/usr/bin/env python3
"""Entry point: log the bot account into Steam and run the reactor until SIGTERM/SIGINT."""

import argparse
import logging
import os
import sys

# Project root: always resolve relative to script location, not cwd
_PROJECT_ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, _PROJECT_ROOT)
os.chdir(_PROJECT_ROOT)  # Ensure config paths resolve from project root

# ANSI color codes
_RESET = "\033[0m"
_BOLD = "\033[1m"
_GRAY = "\033[90m"
_RED = "\033[31m"
_YELLOW = "\033[33m"
_CYAN = "\033[36m"

_LEVEL_COLORS = {
    logging.DEBUG: _GRAY,
    logging.INFO: _CYAN,
    logging.WARNING: _YELLOW,
    logging.ERROR: _RED + _BOLD,
    logging.CRITICAL: _RED + _BOLD,
}


class ColoredFormatter(logging.Formatter):
    """Formatter that adds colors per log level."""

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, _RESET)
        record.levelname = f"{color}[{record.levelname}]{_RESET}"
        return super().format(record)


def setup_logging(debug: bool = False) -> None:
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        ColoredFormatter(
            fmt="%(asctime)s %(levelname)s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    logging.root.handlers.clear()
    logging.root.addHandler(handler)
    logging.root.setLevel(logging.DEBUG if debug else logging.INFO)
    # eventkit logs subscriber exceptions; keep them visible
    logging.getLogger("eventkit").setLevel(logging.WARNING)


def build_overrides(args: argparse.Namespace) -> dict:
    """Map command-line flags onto config sections."""
    overrides: dict = {}
    if args.test_mode:
        overrides.setdefault("reactor", {})["test_mode"] = True
    if args.auth_retry_delay is not None:
        overrides.setdefault("reactor", {})["auth_retry_delay_sec"] = args.auth_retry_delay
    if args.status_port is not None:
        overrides["status_server"] = {"enabled": True, "port": args.status_port}
    return overrides


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Log the bot account into Steam and republish session / trade-offer events."
    )
    parser.add_argument(
        "config",
        nargs="?",
        default=None,
        help="Config YAML (default: $SENTINEL_CONFIG or config/config.yaml); "
        "STEAM_ACCOUNT_NAME / STEAM_PASSWORD / STEAM_SHARED_SECRET override credentials",
    )
    parser.add_argument("--debug", action="store_true", help="DEBUG logging incl. reactor_event lines")
    parser.add_argument(
        "--test-mode",
        action="store_true",
        help="Skip pushing web-session cookies to the trade manager; attach trade listeners directly",
    )
    parser.add_argument(
        "--auth-retry-delay",
        type=float,
        default=None,
        help="Seconds to wait before answering a Steam Guard challenge with a fresh code (default 30)",
    )
    parser.add_argument(
        "--status-port",
        type=int,
        default=None,
        help="Serve GET /status and GET /events on this port",
    )
    return parser.parse_args()


if __name__ == "__main__":
    args = parse_args()
    setup_logging(debug=args.debug)

    from sentinel.app.runner import run_reactor

    config_path = args.config
    if config_path and not os.path.isabs(config_path):
        config_path = os.path.join(_PROJECT_ROOT, config_path)
    run_reactor(config_path, overrides=build_overrides(args))
