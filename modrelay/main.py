"""Launcher: builds every component from config and runs bot + HTTP server."""

import asyncio
import sys

import uvicorn

from modrelay.adapters.discord import DiscordLogChannel, RelayBot
from modrelay.adapters.web import create_app
from modrelay.adapters.webapp import RequestSigner, WebappClient
from modrelay.config import RelayConfig
from modrelay.domain.dispatcher import CommandDispatcher
from modrelay.errors import ConfigError


def _log(msg: str):
    print(msg, file=sys.stderr)


def build(config: RelayConfig):
    """Wire components together. Returns (bot, app)."""
    webapp = WebappClient(config.webapp_url, RequestSigner(config.webapp_secret))
    dispatcher = CommandDispatcher(webapp, config.mod_role_name)
    bot = RelayBot(dispatcher)
    app = create_app(config, DiscordLogChannel(bot))
    return bot, app


async def serve(config: RelayConfig):
    bot, app = build(config)
    server = uvicorn.Server(uvicorn.Config(app, host="0.0.0.0", port=config.port, log_level="info"))

    if not config.log_receiver_configured:
        _log("Log receiver not configured (set RELAY_SHARED_SECRET and LOG_CHANNEL_ID) — /internal/log will return 500")
    _log(f"HTTP server listening on port {config.port} (keep-alive path: {config.keepalive_path})")

    async with bot:
        await asyncio.gather(bot.start(config.discord_token), server.serve())


def main() -> int:
    try:
        config = RelayConfig.from_env()
    except ConfigError as e:
        _log(str(e))
        return 1
    try:
        asyncio.run(serve(config))
    except KeyboardInterrupt:
        pass
    return 0


if __name__ == "__main__":
    sys.exit(main())
