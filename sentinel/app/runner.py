"""Build a SteamReactor from config and keep it running until SIGTERM/SIGINT."""

import asyncio
import importlib
import logging
import signal
from typing import Any, Callable, Optional

from sentinel.config.settings import (
    apply_overrides,
    get_credentials,
    get_factory_paths,
    get_reactor_config,
    get_status_server_config,
    read_config,
)
from sentinel.core.metrics import get_metrics
from sentinel.reactor.events import ErrorEvent, ReactorEvent
from sentinel.reactor.steam_reactor import SteamReactor

logger = logging.getLogger(__name__)


def load_factory(path: str) -> Callable[..., Any]:
    """Resolve 'package.module:callable'. Raises ValueError on a malformed or unknown path."""
    module_name, sep, attr = (path or "").partition(":")
    if not sep or not module_name or not attr:
        raise ValueError(f"Factory path must look like 'package.module:callable', got {path!r}")
    try:
        module = importlib.import_module(module_name)
    except ImportError as e:
        raise ValueError(f"Cannot import factory module {module_name!r}: {e}") from e
    factory = getattr(module, attr, None)
    if not callable(factory):
        raise ValueError(f"Factory {path!r} is not a callable")
    return factory


def build_reactor(config: dict) -> SteamReactor:
    """Create session via the configured factory and hand it to a new SteamReactor."""
    credentials = get_credentials(config)
    reactor_cfg = get_reactor_config(config)
    paths = get_factory_paths(config)
    session_factory = load_factory(paths["session_factory"])
    trade_manager_factory = load_factory(paths["trade_manager_factory"])
    session = session_factory()
    return SteamReactor(credentials, session, trade_manager_factory, config=reactor_cfg)


def _log_event(event: ReactorEvent) -> None:
    if isinstance(event, ErrorEvent):
        logger.error("[Reactor] %s: %s", event.kind.value, event.error)
    else:
        logger.info("[Reactor] %s", event.kind.value)


async def _run_reactor_main(
    config_path: Optional[str] = None, overrides: Optional[dict] = None
) -> None:
    """Load config, register signals, run until stopped."""
    config, resolved_path = read_config(config_path)
    config = apply_overrides(config, overrides)
    logger.info("Loaded config from %s", resolved_path)
    loop = asyncio.get_running_loop()
    stop = asyncio.Event()

    def _on_stop_signal(*_args: Any) -> None:
        logger.info("[Reactor] received SIGTERM/SIGINT -> stopping")
        loop.call_soon_threadsafe(stop.set)

    for sig in (signal.SIGTERM, signal.SIGINT):
        try:
            loop.add_signal_handler(sig, _on_stop_signal)
        except (NotImplementedError, OSError):
            pass  # add_signal_handler not supported on Windows

    reactor = build_reactor(config)
    reactor.events += _log_event

    server = None
    server_task = None
    status_cfg = get_status_server_config(config)
    if status_cfg["enabled"]:
        from sentinel.status_server.app import build_server, create_app

        server = build_server(create_app(reactor), status_cfg["host"], status_cfg["port"])
        server_task = asyncio.create_task(server.serve())

    stop_task = asyncio.create_task(stop.wait())
    try:
        waiting = {stop_task} if server_task is None else {stop_task, server_task}
        await asyncio.wait(waiting, return_when=asyncio.FIRST_COMPLETED)
    finally:
        stop_task.cancel()
        if server_task is not None:
            server.should_exit = True
            await server_task
        get_metrics().log_snapshot()


def run_reactor(config_path: Optional[str] = None, overrides: Optional[dict] = None) -> None:
    """Entry: run the Steam reactor (SIGTERM/SIGINT stop)."""
    asyncio.run(_run_reactor_main(config_path, overrides))
