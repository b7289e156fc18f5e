"""Domain layer — command parsing, permissions and log rendering."""

from modrelay.domain.models import Command, CommandKind, LogEvent, LogNotice
from modrelay.domain.commands import parse_command, resolve_reason, is_valid_user_id
from modrelay.domain.log_events import render_log_event

__all__ = [
    "Command",
    "CommandKind",
    "LogEvent",
    "LogNotice",
    "parse_command",
    "resolve_reason",
    "is_valid_user_id",
    "render_log_event",
]
