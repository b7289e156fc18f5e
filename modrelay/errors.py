"""Exception hierarchy for the relay."""


class RelayError(Exception):
    """Base class for relay errors."""


class ConfigError(RelayError):
    """Required configuration is missing or malformed. Fatal at startup."""


class WebappTransportError(RelayError):
    """The moderation backend could not be reached (no HTTP status available).

    Distinct from a non-2xx response, which is a normal ``WebappResult``.
    """

    def __init__(self, method: str, path: str, reason: str):
        super().__init__(f"{method} {path} failed: {reason}")
        self.method = method
        self.path = path
        self.reason = reason
