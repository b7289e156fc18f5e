"""Domain data models — pure Python dataclasses."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Tuple

from pydantic import BaseModel, Field


class CommandKind(str, Enum):
    HELP = "help"
    WHEREIS = "whereis"
    WARN = "warn"
    UNWARN = "unwarn"
    KICK = "kick"
    UNBAN = "unban"


@dataclass(frozen=True)
class Command:
    """Parsed chat command: kind plus the argument text after the command token."""

    kind: CommandKind
    arg_text: str = ""

    @property
    def args(self) -> Tuple[str, ...]:
        return tuple(self.arg_text.split())

    @property
    def user_id(self) -> str:
        args = self.args
        return args[0] if args else ""

    @property
    def reason(self) -> str:
        """Text after the user id, trimmed at the ends but otherwise untouched."""
        parts = self.arg_text.split(None, 1)
        return parts[1].strip() if len(parts) > 1 else ""


class LogEvent(BaseModel):
    """Inbound relay event: an open-ended type tag plus its payload."""

    type: str
    payload: Dict[str, Any] = Field(default_factory=dict)


@dataclass
class LogNotice:
    """Rendered log event, independent of the chat platform's embed type."""

    title: str
    description: str = ""
    fields: List[Tuple[str, str]] = field(default_factory=list)
    color: int = 0x5865F2
