"""Inbound HTTP adapter."""

from modrelay.adapters.web.server import create_app

__all__ = ["create_app"]
