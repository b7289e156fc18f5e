"""Discord adapter."""

from modrelay.adapters.discord.bot import RelayBot
from modrelay.adapters.discord.notification import DiscordLogChannel

__all__ = ["RelayBot", "DiscordLogChannel"]
