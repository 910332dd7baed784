"""Hookcord Discord - embed building and webhook delivery."""

from hookcord.discord.client import DiscordClient
from hookcord.discord.embeds import Colors, build_embed, truncate_text

__all__ = ["DiscordClient", "Colors", "build_embed", "truncate_text"]
