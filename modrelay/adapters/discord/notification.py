"""LogChannelPort implementation using discord.Client."""

import sys
from typing import Optional

import discord

from modrelay.domain.models import LogNotice

EMBED_TITLE_LIMIT = 256
EMBED_FIELD_LIMIT = 1024
EMBED_DESCRIPTION_LIMIT = 4096
EMBED_TOTAL_LIMIT = 6000


def _log(msg: str):
    print(msg, file=sys.stderr)


def _clip(text: str, limit: int) -> str:
    if len(text) <= limit:
        return text
    return text[: limit - 3] + "..."


def to_embed(notice: LogNotice) -> discord.Embed:
    """Render ``notice``, keeping the whole embed inside Discord's 6000 character cap."""
    title = _clip(notice.title, EMBED_TITLE_LIMIT)
    description = _clip(notice.description, EMBED_DESCRIPTION_LIMIT)
    embed = discord.Embed(title=title, description=description, color=notice.color)
    if not notice.fields:
        return embed

    names = [_clip(name, EMBED_TITLE_LIMIT) for name, _ in notice.fields]
    budget = EMBED_TOTAL_LIMIT - len(title) - len(description) - sum(len(n) for n in names)
    # Each field gets an equal share of what is left, never below a short stub
    share = min(EMBED_FIELD_LIMIT, max(4, budget // len(notice.fields)))
    for name, (_, value) in zip(names, notice.fields):
        embed.add_field(name=name, value=_clip(value, share), inline=True)
    return embed


class DiscordLogChannel:
    """Resolves the configured log channel and posts notices as embeds."""

    def __init__(self, client: discord.Client):
        self._client = client

    async def resolve(self, channel_id: int) -> Optional[discord.abc.Messageable]:
        channel = self._client.get_channel(channel_id)
        if channel is not None:
            return channel
        try:
            return await self._client.fetch_channel(channel_id)
        except (discord.HTTPException, discord.InvalidData) as e:
            _log(f"[discord] cannot resolve channel {channel_id}: {e}")
            return None

    async def post(self, channel: discord.abc.Messageable, notice: LogNotice) -> None:
        await channel.send(embed=to_embed(notice), allowed_mentions=discord.AllowedMentions.none())
