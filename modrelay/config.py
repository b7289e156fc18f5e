"""Configuration loaded once at startup."""

__version__ = "0.1.0"

import os
from dataclasses import dataclass
from typing import List, Mapping, Optional

from dotenv import load_dotenv

from modrelay.errors import ConfigError

DEFAULT_MOD_ROLE_NAME = "Moderator"
DEFAULT_PORT = 3000
DEFAULT_KEEPALIVE_PATH = "/"

# env var -> RelayConfig field
REQUIRED_ENV = {
    "DISCORD_BOT_TOKEN": "discord_token",
    "WEBAPP_URL": "webapp_url",
    "WEBAPP_SHARED_SECRET": "webapp_secret",
}


def _parse_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        raise ConfigError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class RelayConfig:
    """Immutable process configuration, injected into every component."""

    discord_token: str
    webapp_url: str
    webapp_secret: str
    mod_role_name: str = DEFAULT_MOD_ROLE_NAME
    relay_secret: str = ""
    log_channel_id: int = 0
    port: int = DEFAULT_PORT
    keepalive_path: str = DEFAULT_KEEPALIVE_PATH

    @property
    def log_receiver_configured(self) -> bool:
        return bool(self.relay_secret and self.log_channel_id)

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        load_dotenv_file: bool = True,
    ) -> "RelayConfig":
        """Create RelayConfig from environment variables.

        Raises ConfigError naming every missing required variable.
        """
        if env is None:
            if load_dotenv_file:
                load_dotenv()
            env = os.environ

        missing: List[str] = [name for name in REQUIRED_ENV if not env.get(name, "").strip()]
        if missing:
            raise ConfigError(f"Missing env vars: {', '.join(missing)}")

        keepalive_path = env.get("KEEPALIVE_PATH", "").strip() or DEFAULT_KEEPALIVE_PATH
        if not keepalive_path.startswith("/"):
            keepalive_path = "/" + keepalive_path

        return cls(
            discord_token=env["DISCORD_BOT_TOKEN"].strip(),
            webapp_url=env["WEBAPP_URL"].strip().rstrip("/"),
            webapp_secret=env["WEBAPP_SHARED_SECRET"].strip(),
            mod_role_name=env.get("MOD_ROLE_NAME") or DEFAULT_MOD_ROLE_NAME,
            relay_secret=env.get("RELAY_SHARED_SECRET", "").strip(),
            log_channel_id=_parse_int(env, "LOG_CHANNEL_ID", 0),
            port=_parse_int(env, "PORT", DEFAULT_PORT),
            keepalive_path=keepalive_path,
        )
