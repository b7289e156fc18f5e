"""Rendering of inbound relay log events into chat notices."""

import json
from typing import Any, Dict, Iterable

from modrelay.domain.models import LogEvent, LogNotice

BANNED_JOIN_ATTEMPT = "banned_join_attempt"

UNKNOWN = "Unknown"
DEFAULT_BAN_REASON = "Rule violation"

MAX_PAYLOAD_DUMP = 1000

COLOR_BANNED_JOIN = 0xED4245
COLOR_GENERIC = 0x99AAB5


def _pick(payload: Dict[str, Any], keys: Iterable[str], default: str = UNKNOWN) -> str:
    """First present, non-empty value among ``keys``, stringified."""
    for key in keys:
        value = payload.get(key)
        if value is not None and value != "":
            return str(value)
    return default


def render_banned_join_attempt(payload: Dict[str, Any]) -> LogNotice:
    username = _pick(payload, ("username", "handle"))
    display_name = _pick(payload, ("displayName", "display_name"), default=username)
    user_id = _pick(payload, ("userId", "user_id"))

    return LogNotice(
        title="🚫 Banned user tried to join",
        description=f"**{display_name}** (@{username}) was blocked from joining.",
        fields=[
            ("Display name", display_name),
            ("Username", username),
            ("User ID", user_id),
            ("Reason", _pick(payload, ("reason",), default=DEFAULT_BAN_REASON)),
            ("Moderator", _pick(payload, ("moderator",))),
            ("Network", _pick(payload, ("networkId", "network_id"))),
            ("Place", _pick(payload, ("placeId", "place_id"))),
            ("Universe", _pick(payload, ("universeId", "universe_id"))),
            ("Server", _pick(payload, ("serverId", "server_id"))),
        ],
        color=COLOR_BANNED_JOIN,
    )


def render_generic(event: LogEvent) -> LogNotice:
    try:
        dump = json.dumps(event.payload, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        dump = str(event.payload)
    if len(dump) > MAX_PAYLOAD_DUMP:
        dump = dump[: MAX_PAYLOAD_DUMP - 3] + "..."
    return LogNotice(
        title="Unknown log event",
        description=f"Type: `{event.type}`\n```json\n{dump}\n```",
        color=COLOR_GENERIC,
    )


def render_log_event(event: LogEvent) -> LogNotice:
    """Render ``event``; unrecognized types still produce a visible notice."""
    if event.type == BANNED_JOIN_ATTEMPT:
        return render_banned_join_attempt(event.payload)
    return render_generic(event)
