"""Config loading for credentials, reactor and status server."""
