"""Command dispatcher — routes parsed chat commands to the moderation backend.

Stateless per invocation: each call to ``handle`` parses, gates, calls the
backend at most once and renders a reply string.
"""

import math
import sys
import time
from typing import Any, Callable, Dict, Optional

from modrelay.domain.commands import (
    HELP_TEXT,
    USAGE,
    is_valid_user_id,
    parse_command,
    resolve_reason,
)
from modrelay.domain.models import Command, CommandKind
from modrelay.domain.permissions import is_authorized, is_protected
from modrelay.errors import WebappTransportError
from modrelay.ports.inbound import ActorIdentity
from modrelay.ports.outbound import WebappPort, WebappResult

PERMISSION_DENIED = "❌ You don't have permission."
WHEREIS_NOT_FOUND = "Not found in any active server (or mapping expired)."
UNKNOWN_SERVER = "unknown"

WARNING_EXTRA: Dict[str, Any] = {
    "imageA": "WARNING_A",
    "imageB": "WARNING_B",
    "interval": 0.35,
}


def _log(msg: str):
    print(msg, file=sys.stderr)


def _routed_server(data: Optional[Dict[str, Any]]) -> str:
    if data and data.get("routedServerId") is not None:
        return str(data["routedServerId"])
    return UNKNOWN_SERVER


def _is_offline(data: Optional[Dict[str, Any]]) -> bool:
    return bool(data) and data.get("offline") is True


class CommandDispatcher:
    """Turns chat text from an actor into at most one backend call and a reply."""

    def __init__(
        self,
        webapp: WebappPort,
        mod_role_name: str,
        clock: Callable[[], float] = time.time,
    ):
        self._webapp = webapp
        self._mod_role_name = mod_role_name
        self._clock = clock

    async def handle(self, text: str, actor: ActorIdentity) -> Optional[str]:
        """Return the reply for ``text``, or None when nothing should be sent."""
        command = parse_command(text)
        if command is None:
            return None

        _log(f"[dispatcher] !{command.kind.value} from {actor.tag}")

        if command.kind is CommandKind.HELP:
            return HELP_TEXT

        if is_protected(command.kind) and not is_authorized(actor, self._mod_role_name):
            _log(f"[dispatcher] refused !{command.kind.value} for {actor.tag}")
            return PERMISSION_DENIED

        try:
            if command.kind is CommandKind.WHEREIS:
                return await self._whereis(command)
            return await self._moderate(command, actor)
        except WebappTransportError as e:
            _log(f"[dispatcher] backend unreachable: {e}")
            return f"❌ Request failed (action not confirmed): {e.reason}"

    async def _whereis(self, command: Command) -> str:
        args = command.args
        if len(args) != 1 or not is_valid_user_id(args[0]):
            return USAGE[CommandKind.WHEREIS]
        user_id = args[0]

        result = await self._webapp.get(f"/whois/{user_id}")
        data = result.json_object()
        if not result.ok or data is None:
            return WHEREIS_NOT_FOUND

        now_ms = self._clock() * 1000
        try:
            last_seen_sec = math.floor((now_ms - float(data.get("lastSeenMs", now_ms))) / 1000)
        except (TypeError, ValueError, OverflowError):
            last_seen_sec = 0
        return (
            f"User **{user_id}** is in server **{data.get('serverId', UNKNOWN_SERVER)}** "
            f"(last seen {last_seen_sec}s ago)"
        )

    async def _moderate(self, command: Command, actor: ActorIdentity) -> str:
        user_id = command.user_id
        if not is_valid_user_id(user_id):
            return USAGE[command.kind]

        reason = resolve_reason(command.kind, command.reason)
        body: Dict[str, Any] = {
            "action": command.kind.value,
            "userId": user_id,
            "reason": reason,
            "moderator": actor.tag,
        }
        if command.kind is CommandKind.WARN:
            body.update(WARNING_EXTRA)

        result = await self._webapp.post("/command", body)
        if not result.ok:
            return f"❌ Failed ({result.status}): {result.raw_body}"
        return self._render_success(command.kind, user_id, reason, result)

    @staticmethod
    def _render_success(kind: CommandKind, user_id: str, reason: str, result: WebappResult) -> str:
        data = result.json_object()
        server = _routed_server(data)

        if kind is CommandKind.WARN:
            return f"⚠️ Warned **{user_id}** (server: **{server}**)"
        if kind is CommandKind.UNWARN:
            return f"✅ Unwarn queued for **{user_id}** (server: **{server}**)"
        if kind is CommandKind.KICK:
            if _is_offline(data):
                return f"🚫 Banned **{user_id}** (offline/global). Reason: {reason}"
            return f"🚫 Kick+Ban queued for **{user_id}** (server: **{server}**)"
        # UNBAN
        if _is_offline(data):
            return f"✅ Unbanned **{user_id}** (offline/global)."
        return f"✅ Unban queued for **{user_id}** (server: **{server}**)"
