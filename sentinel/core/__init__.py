"""Logging helpers and in-memory metrics."""
