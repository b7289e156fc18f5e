"""Chat command parsing.

Commands are recognized only when the first whitespace-delimited token,
lower-cased, exactly equals a known command token. Everything else is
ordinary chat text and is ignored.
"""

import re
from typing import Dict, Optional

from modrelay.domain.models import Command, CommandKind

COMMAND_TOKENS: Dict[str, CommandKind] = {
    "!help": CommandKind.HELP,
    "!whereis": CommandKind.WHEREIS,
    "!warning": CommandKind.WARN,
    "!unwarn": CommandKind.UNWARN,
    "!kick": CommandKind.KICK,
    "!unban": CommandKind.UNBAN,
}

DEFAULT_REASONS: Dict[CommandKind, str] = {
    CommandKind.WARN: "Rule violation",
    CommandKind.UNWARN: "Cleared",
    CommandKind.KICK: "Rule violation",
    CommandKind.UNBAN: "Unbanned",
}

USAGE: Dict[CommandKind, str] = {
    CommandKind.WHEREIS: "Usage: `!whereis <userId>`",
    CommandKind.WARN: "Usage: `!warning <userId> <reason...>`",
    CommandKind.UNWARN: "Usage: `!unwarn <userId> <reason...>`",
    CommandKind.KICK: "Usage: `!kick <userId> <reason...>`",
    CommandKind.UNBAN: "Usage: `!unban <userId> <reason...>`",
}

HELP_TEXT = (
    "**Commands**\n"
    "`!warning <userId> <reason...>`\n"
    "`!unwarn <userId> <reason...>`\n"
    "`!kick <userId> <reason...>` (ban + kick)\n"
    "`!unban <userId> <reason...>`\n"
    "`!whereis <userId>`\n"
    "`!help`"
)

_USER_ID_RE = re.compile(r"[0-9]+")


def parse_command(text: str) -> Optional[Command]:
    """Return the Command for ``text``, or None if it is not a command."""
    parts = text.strip().split(None, 1)
    if not parts:
        return None
    kind = COMMAND_TOKENS.get(parts[0].lower())
    if kind is None:
        return None
    return Command(kind=kind, arg_text=parts[1] if len(parts) > 1 else "")


def is_valid_user_id(value: str) -> bool:
    return bool(_USER_ID_RE.fullmatch(value))


def resolve_reason(kind: CommandKind, reason: str) -> str:
    """Apply the per-command default when no reason text was given."""
    if reason.strip():
        return reason
    return DEFAULT_REASONS[kind]
