"""FastAPI application: inbound log receiver and liveness endpoints."""

from fastapi import FastAPI
from fastapi.responses import PlainTextResponse

from modrelay.adapters.web.log_routes import log_router
from modrelay.config import RelayConfig
from modrelay.ports.outbound import LogChannelPort


async def bot_ping():
    return PlainTextResponse("BOT OK")


async def keepalive():
    return PlainTextResponse("OK")


def create_app(config: RelayConfig, log_channel: LogChannelPort) -> FastAPI:
    """Build the HTTP app with its dependencies attached to ``app.state``."""
    app = FastAPI(title="ModRelay", docs_url=None, redoc_url=None, openapi_url=None)
    app.state.config = config
    app.state.log_channel = log_channel

    app.include_router(log_router)
    app.add_api_route("/bot/ping", bot_ping, methods=["GET"], include_in_schema=False)
    app.add_api_route(config.keepalive_path, keepalive, methods=["GET"], include_in_schema=False)
    return app
