"""Outbound ports — interfaces for the moderation backend and the log channel."""

from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol, Union, runtime_checkable

from modrelay.domain.models import LogNotice


@dataclass(frozen=True)
class Parsed:
    """Response body that decoded as JSON."""

    value: Any


@dataclass(frozen=True)
class Unparsed:
    """Response body that is not valid JSON."""

    raw_text: str


ResponseBody = Union[Parsed, Unparsed]


@dataclass(frozen=True)
class WebappResult:
    """Normalized response from the moderation backend."""

    ok: bool
    status: int
    raw_body: str
    body: ResponseBody

    def json_object(self) -> Optional[Dict[str, Any]]:
        """Return the parsed body if it is a JSON object, else None."""
        if isinstance(self.body, Parsed) and isinstance(self.body.value, dict):
            return self.body.value
        return None


@runtime_checkable
class WebappPort(Protocol):
    """Interface for the signed moderation backend client."""

    async def get(self, path: str) -> WebappResult: ...

    async def post(self, path: str, body: Dict[str, Any]) -> WebappResult: ...


@runtime_checkable
class LogChannelPort(Protocol):
    """Interface for posting rendered log notices to a chat channel."""

    async def resolve(self, channel_id: int) -> Optional[Any]: ...

    async def post(self, channel: Any, notice: LogNotice) -> None: ...
