"""Sentinel: Steam session reactor for a trading bot."""

__version__ = "0.1.0"
