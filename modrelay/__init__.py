"""ModRelay — chat moderation command relay and inbound log receiver."""

from modrelay.config import RelayConfig, __version__
from modrelay.errors import ConfigError, RelayError, WebappTransportError

__all__ = [
    "RelayConfig",
    "ConfigError",
    "RelayError",
    "WebappTransportError",
    "__version__",
]
