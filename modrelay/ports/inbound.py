"""Inbound port — platform-agnostic representation of a chat actor."""

from dataclasses import dataclass, field
from typing import FrozenSet


@dataclass(frozen=True)
class ActorIdentity:
    """The user who authored an inbound chat message."""

    user_id: int
    tag: str
    is_guild_owner: bool = False
    role_names: FrozenSet[str] = field(default_factory=frozenset)
    is_bot: bool = False
    in_guild: bool = True
