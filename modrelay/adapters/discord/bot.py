"""Discord adapter — bridges discord.Client to the command dispatcher."""

import sys
from typing import List, Optional

import discord

from modrelay.domain.dispatcher import CommandDispatcher
from modrelay.ports.inbound import ActorIdentity

MESSAGE_LIMIT = 2000

# Replies quote remote error text verbatim; only the invoking user may be pinged.
REPLY_MENTIONS = discord.AllowedMentions(everyone=False, users=False, roles=False, replied_user=True)


def _log(msg: str):
    print(msg, file=sys.stderr)


class RelayBot(discord.Client):
    """Listens for moderation commands in guild channels and replies in place."""

    def __init__(self, dispatcher: CommandDispatcher, **discord_kwargs):
        intents = discord.Intents.default()
        intents.message_content = True
        super().__init__(intents=intents, **discord_kwargs)
        self.dispatcher = dispatcher

    @staticmethod
    def to_actor(message: discord.Message) -> ActorIdentity:
        """Convert the message author to a platform-agnostic ActorIdentity."""
        guild: Optional[discord.Guild] = message.guild
        author = message.author
        roles = getattr(author, "roles", None) or []
        return ActorIdentity(
            user_id=author.id,
            tag=str(author),
            is_guild_owner=guild is not None and guild.owner_id == author.id,
            role_names=frozenset(role.name for role in roles),
            is_bot=bool(author.bot),
            in_guild=guild is not None,
        )

    async def on_ready(self):
        _log(f"[discord] bot online as {self.user}")

    async def on_message(self, message: discord.Message):
        actor = self.to_actor(message)
        # Own messages, other bots, and DMs are never commands
        if actor.is_bot or not actor.in_guild:
            return

        reply = await self.dispatcher.handle(message.content, actor)
        if not reply:
            return
        for chunk in self._split_message(reply):
            await message.reply(chunk, allowed_mentions=REPLY_MENTIONS)

    @staticmethod
    def _split_message(text: str, limit: int = MESSAGE_LIMIT) -> List[str]:
        """Split a message into chunks that fit Discord's character limit"""
        if len(text) <= limit:
            return [text]
        chunks = []
        while text:
            chunks.append(text[:limit])
            text = text[limit:]
        return chunks
