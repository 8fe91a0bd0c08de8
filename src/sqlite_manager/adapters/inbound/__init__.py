"""Inbound adapters - APIs offered to clients."""

from sqlite_manager.adapters.inbound.rest_api import create_app, run_server

__all__ = ["create_app", "run_server"]
