"""Moderation backend adapter."""

from modrelay.adapters.webapp.client import WebappClient
from modrelay.adapters.webapp.signer import RequestSigner, sign_headers

__all__ = ["WebappClient", "RequestSigner", "sign_headers"]
