"""Port interfaces (Hexagonal Architecture)."""

from modrelay.ports.inbound import ActorIdentity
from modrelay.ports.outbound import (
    LogChannelPort,
    Parsed,
    ResponseBody,
    Unparsed,
    WebappPort,
    WebappResult,
)

__all__ = [
    "ActorIdentity",
    "LogChannelPort",
    "Parsed",
    "ResponseBody",
    "Unparsed",
    "WebappPort",
    "WebappResult",
]
