"""Inbound log receiver — the companion relay posts events here."""

import hmac
import json
import sys
from typing import Optional

from fastapi import APIRouter, Header, HTTPException, Request
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from modrelay.config import RelayConfig
from modrelay.domain.log_events import render_log_event
from modrelay.domain.models import LogEvent
from modrelay.ports.outbound import LogChannelPort

log_router = APIRouter(prefix="/internal", tags=["Relay"])


def _log(msg: str):
    print(msg, file=sys.stderr)


def _authorized(expected: str, provided: Optional[str]) -> bool:
    if provided is None:
        return False
    return hmac.compare_digest(expected.encode(), provided.encode())


@log_router.post("/log")
async def receive_log(request: Request, authorization: Optional[str] = Header(None)):
    config: RelayConfig = request.app.state.config
    channels: LogChannelPort = request.app.state.log_channel

    if not config.log_receiver_configured:
        _log("[log-receiver] rejected: receiver not configured")
        raise HTTPException(status_code=500, detail="Log receiver not configured")

    if not _authorized(config.relay_secret, authorization):
        _log("[log-receiver] rejected: unauthorized")
        raise HTTPException(status_code=401, detail="Unauthorized")

    raw_body = await request.body()
    try:
        event = LogEvent.model_validate(json.loads(raw_body))
    except (ValueError, ValidationError) as e:
        _log(f"[log-receiver] rejected: bad body ({type(e).__name__})")
        raise HTTPException(status_code=400, detail="Bad request")

    channel = await channels.resolve(config.log_channel_id)
    if channel is None:
        _log(f"[log-receiver] log channel {config.log_channel_id} not found")
        raise HTTPException(status_code=500, detail="Log channel unavailable")

    notice = render_log_event(event)
    try:
        await channels.post(channel, notice)
    except Exception as e:
        _log(f"[log-receiver] post failed for {event.type}: {e}")
        return JSONResponse(status_code=400, content={"ok": False})

    _log(f"[log-receiver] posted {event.type}")
    return {"ok": True}
