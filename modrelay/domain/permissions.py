"""Permission gate for moderation commands."""

from typing import FrozenSet

from modrelay.domain.models import CommandKind
from modrelay.ports.inbound import ActorIdentity

PROTECTED_COMMANDS: FrozenSet[CommandKind] = frozenset({
    CommandKind.WARN,
    CommandKind.UNWARN,
    CommandKind.KICK,
    CommandKind.UNBAN,
})


def is_protected(kind: CommandKind) -> bool:
    return kind in PROTECTED_COMMANDS


def is_authorized(actor: ActorIdentity, mod_role_name: str) -> bool:
    """Guild owner, or holder of a role named exactly ``mod_role_name``."""
    return actor.is_guild_owner or mod_role_name in actor.role_names
