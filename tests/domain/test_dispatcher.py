"""Tests for CommandDispatcher — parsing, gating, backend calls and replies."""

import json
from typing import Any, Dict, List, Optional, Tuple

import pytest

from modrelay.domain.commands import HELP_TEXT
from modrelay.domain.dispatcher import (
    PERMISSION_DENIED,
    WHEREIS_NOT_FOUND,
    CommandDispatcher,
)
from modrelay.errors import WebappTransportError
from modrelay.ports.inbound import ActorIdentity
from modrelay.ports.outbound import Parsed, Unparsed, WebappResult

MOD_ROLE = "Moderator"
NOW = 1_700_000_000.0


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _result(status: int = 200, body: Any = None, raw: Optional[str] = None) -> WebappResult:
    if raw is None:
        raw = json.dumps(body) if body is not None else ""
    try:
        parsed = Parsed(json.loads(raw))
    except ValueError:
        parsed = Unparsed(raw)
    return WebappResult(ok=200 <= status < 300, status=status, raw_body=raw, body=parsed)


class FakeWebapp:
    """Records calls and returns canned results (or raises)."""

    def __init__(self, result: Optional[WebappResult] = None, error: Optional[Exception] = None):
        self.result = result or _result(body={})
        self.error = error
        self.calls: List[Tuple[str, str, Optional[Dict[str, Any]]]] = []

    async def get(self, path: str) -> WebappResult:
        self.calls.append(("GET", path, None))
        if self.error:
            raise self.error
        return self.result

    async def post(self, path: str, body: Dict[str, Any]) -> WebappResult:
        self.calls.append(("POST", path, body))
        if self.error:
            raise self.error
        return self.result


OWNER = ActorIdentity(user_id=1, tag="owner#0001", is_guild_owner=True)
MOD = ActorIdentity(user_id=2, tag="mod#0002", role_names=frozenset({MOD_ROLE}))
MEMBER = ActorIdentity(user_id=3, tag="member#0003", role_names=frozenset({"Member"}))


def _dispatcher(webapp: FakeWebapp) -> CommandDispatcher:
    return CommandDispatcher(webapp, MOD_ROLE, clock=lambda: NOW)


# ---------------------------------------------------------------------------
# Ignoring and help
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["hello", "!warningx 1 x", "", "!ban 1"])
async def test_non_commands_are_ignored(text):
    webapp = FakeWebapp()
    assert await _dispatcher(webapp).handle(text, OWNER) is None
    assert webapp.calls == []


@pytest.mark.asyncio
async def test_help_needs_no_permission():
    webapp = FakeWebapp()
    assert await _dispatcher(webapp).handle("!HELP", MEMBER) == HELP_TEXT
    assert webapp.calls == []


# ---------------------------------------------------------------------------
# !whereis
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("user_id", ["1", "42", "123456789012345678"])
async def test_whereis_gets_exact_path(user_id):
    webapp = FakeWebapp(_result(body={"serverId": "S9", "lastSeenMs": NOW * 1000}))
    await _dispatcher(webapp).handle(f"!whereis {user_id}", MEMBER)
    assert webapp.calls == [("GET", f"/whois/{user_id}", None)]


@pytest.mark.asyncio
async def test_whereis_found():
    webapp = FakeWebapp(_result(body={"serverId": "S9", "lastSeenMs": NOW * 1000 - 12_500}))
    reply = await _dispatcher(webapp).handle("!whereis 77", MEMBER)
    assert reply == "User **77** is in server **S9** (last seen 12s ago)"


@pytest.mark.asyncio
@pytest.mark.parametrize("result", [
    _result(status=404, raw="not found"),
    _result(status=500, raw="boom"),
    _result(status=200, raw="not json"),
])
async def test_whereis_not_found_is_generic(result):
    reply = await _dispatcher(FakeWebapp(result)).handle("!whereis 77", MEMBER)
    assert reply == WHEREIS_NOT_FOUND


@pytest.mark.asyncio
@pytest.mark.parametrize("last_seen", [float("inf"), float("-inf"), float("nan"), "soon"])
async def test_whereis_unusable_last_seen_still_replies(last_seen):
    webapp = FakeWebapp(_result(raw=json.dumps({"serverId": "S1", "lastSeenMs": last_seen})))
    reply = await _dispatcher(webapp).handle("!whereis 5", MEMBER)
    assert reply == "User **5** is in server **S1** (last seen 0s ago)"


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["!whereis", "!whereis abc", "!whereis 12 34", "!whereis -1"])
async def test_whereis_usage(text):
    webapp = FakeWebapp()
    reply = await _dispatcher(webapp).handle(text, MEMBER)
    assert reply.startswith("Usage: `!whereis")
    assert webapp.calls == []


# ---------------------------------------------------------------------------
# Permission gate
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
@pytest.mark.parametrize("text", [
    "!warning 1 x", "!unwarn 1", "!kick 55 griefing", "!unban 1", "!kick", "!warning abc",
])
async def test_unauthorized_never_calls_backend(text):
    webapp = FakeWebapp()
    reply = await _dispatcher(webapp).handle(text, MEMBER)
    assert reply == PERMISSION_DENIED
    assert webapp.calls == []


@pytest.mark.asyncio
async def test_moderator_role_is_authorized():
    webapp = FakeWebapp(_result(body={"routedServerId": "S1"}))
    reply = await _dispatcher(webapp).handle("!unwarn 10", MOD)
    assert "S1" in reply
    assert len(webapp.calls) == 1


@pytest.mark.asyncio
@pytest.mark.parametrize("text", ["!warning", "!unwarn abc", "!kick <@123>", "!unban 12x reason"])
async def test_protected_usage(text):
    webapp = FakeWebapp()
    reply = await _dispatcher(webapp).handle(text, OWNER)
    assert reply.startswith("Usage:")
    assert webapp.calls == []


# ---------------------------------------------------------------------------
# !warning / !unwarn
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_warning_scenario():
    webapp = FakeWebapp(_result(body={"routedServerId": "S1"}))
    reply = await _dispatcher(webapp).handle("!warning 123456789 spamming", OWNER)

    assert webapp.calls == [("POST", "/command", {
        "action": "warn",
        "userId": "123456789",
        "reason": "spamming",
        "moderator": "owner#0001",
        "imageA": "WARNING_A",
        "imageB": "WARNING_B",
        "interval": 0.35,
    })]
    assert "123456789" in reply
    assert "S1" in reply


@pytest.mark.asyncio
@pytest.mark.parametrize("text,action,reason", [
    ("!warning 5", "warn", "Rule violation"),
    ("!unwarn 5", "unwarn", "Cleared"),
    ("!kick 5   ", "kick", "Rule violation"),
    ("!unban 5", "unban", "Unbanned"),
])
async def test_default_reasons(text, action, reason):
    webapp = FakeWebapp(_result(body={"routedServerId": "S1"}))
    await _dispatcher(webapp).handle(text, OWNER)
    body = webapp.calls[0][2]
    assert body["action"] == action
    assert body["reason"] == reason


@pytest.mark.asyncio
async def test_reason_passes_through_unmodified():
    webapp = FakeWebapp(_result(body={"routedServerId": "S1"}))
    reason = 'said "hi" <@everyone>  twice & left ' + "x" * 500
    await _dispatcher(webapp).handle(f"!kick 5 {reason}", OWNER)
    assert webapp.calls[0][2]["reason"] == reason


@pytest.mark.asyncio
async def test_only_warning_carries_extra():
    webapp = FakeWebapp(_result(body={"routedServerId": "S1"}))
    await _dispatcher(webapp).handle("!unwarn 5 ok", OWNER)
    assert set(webapp.calls[0][2]) == {"action", "userId", "reason", "moderator"}


@pytest.mark.asyncio
async def test_unwarn_queued():
    webapp = FakeWebapp(_result(body={"routedServerId": "S2"}))
    reply = await _dispatcher(webapp).handle("!unwarn 5", OWNER)
    assert reply == "✅ Unwarn queued for **5** (server: **S2**)"


@pytest.mark.asyncio
async def test_success_without_structured_body():
    webapp = FakeWebapp(_result(status=200, raw="queued"))
    reply = await _dispatcher(webapp).handle("!warning 5", OWNER)
    assert reply == "⚠️ Warned **5** (server: **unknown**)"


# ---------------------------------------------------------------------------
# !kick / !unban
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_kick_offline():
    webapp = FakeWebapp(_result(body={"offline": True}))
    reply = await _dispatcher(webapp).handle("!kick 55 griefing", OWNER)
    assert reply == "🚫 Banned **55** (offline/global). Reason: griefing"


@pytest.mark.asyncio
async def test_kick_online():
    webapp = FakeWebapp(_result(body={"routedServerId": "S3", "offline": False}))
    reply = await _dispatcher(webapp).handle("!kick 55 griefing", OWNER)
    assert reply == "🚫 Kick+Ban queued for **55** (server: **S3**)"


@pytest.mark.asyncio
async def test_unban_offline():
    webapp = FakeWebapp(_result(body={"offline": True}))
    reply = await _dispatcher(webapp).handle("!unban 55", OWNER)
    assert reply == "✅ Unbanned **55** (offline/global)."


@pytest.mark.asyncio
async def test_unban_online():
    webapp = FakeWebapp(_result(body={"routedServerId": "S4"}))
    reply = await _dispatcher(webapp).handle("!unban 55", OWNER)
    assert reply == "✅ Unban queued for **55** (server: **S4**)"


@pytest.mark.asyncio
async def test_offline_must_be_true():
    webapp = FakeWebapp(_result(body={"routedServerId": "S4", "offline": "yes"}))
    reply = await _dispatcher(webapp).handle("!kick 55", OWNER)
    assert "queued" in reply


# ---------------------------------------------------------------------------
# Remote errors
# ---------------------------------------------------------------------------

@pytest.mark.asyncio
async def test_remote_error_is_surfaced():
    webapp = FakeWebapp(_result(status=403, raw='{"error":"bad signature"}'))
    reply = await _dispatcher(webapp).handle("!kick 55", OWNER)
    assert reply == '❌ Failed (403): {"error":"bad signature"}'


@pytest.mark.asyncio
async def test_transport_error_is_reported_once():
    webapp = FakeWebapp(error=WebappTransportError("POST", "/command", "connection refused"))
    reply = await _dispatcher(webapp).handle("!warning 5", OWNER)
    assert "not confirmed" in reply
    assert "connection refused" in reply
    assert len(webapp.calls) == 1


@pytest.mark.asyncio
async def test_whereis_transport_error():
    webapp = FakeWebapp(error=WebappTransportError("GET", "/whois/5", "timeout"))
    reply = await _dispatcher(webapp).handle("!whereis 5", MEMBER)
    assert "timeout" in reply
