"""Request signing for calls to the moderation backend."""

import time
import uuid
from typing import Any, Callable, Dict

from modrelay.errors import ConfigError


def sign_headers(
    secret: str,
    *,
    nonce_factory: Callable[[], Any] = uuid.uuid4,
    clock: Callable[[], float] = time.time,
) -> Dict[str, str]:
    """Authorization (raw shared secret), a fresh nonce and the Unix time in seconds."""
    if not secret:
        raise ConfigError("webapp shared secret is not configured")
    return {
        "Authorization": secret,
        "X-Nonce": str(nonce_factory()),
        "X-Ts": str(int(clock())),
    }


class RequestSigner:
    """Binds the shared secret so callers only ask for fresh headers."""

    def __init__(
        self,
        secret: str,
        nonce_factory: Callable[[], Any] = uuid.uuid4,
        clock: Callable[[], float] = time.time,
    ):
        if not secret:
            raise ConfigError("webapp shared secret is not configured")
        self._secret = secret
        self._nonce_factory = nonce_factory
        self._clock = clock

    def headers(self) -> Dict[str, str]:
        return sign_headers(self._secret, nonce_factory=self._nonce_factory, clock=self._clock)
