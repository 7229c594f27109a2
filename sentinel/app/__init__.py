"""Application entry: build a SteamReactor from config and run it."""

from sentinel.app.runner import load_factory, run_reactor

__all__ = ["load_factory", "run_reactor"]
