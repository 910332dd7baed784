"""Discord mention rendering."""

from collections.abc import Iterable

from hookcord.identity import IdentityDirectory


def render_one(discord_id: str) -> str:
    """Render a Discord user mention token."""
    return f"<@{discord_id}>"


class MentionFormatter:
    """Turns GitHub usernames into Discord mention tokens.

    Usernames without a directory entry are dropped silently; the relative
    order of the remaining usernames is preserved.
    """

    def __init__(self, directory: IdentityDirectory):
        self.directory = directory

    def mention(self, github_username: str | None) -> str | None:
        """Get the mention token for one username, or None if unmapped."""
        discord_id = self.directory.lookup(github_username)
        return render_one(discord_id) if discord_id else None

    def render_many(self, usernames: Iterable[str]) -> list[str]:
        """Render mention tokens for usernames, skipping unmapped ones."""
        tokens = []
        for username in usernames:
            token = self.mention(username)
            if token:
                tokens.append(token)
        return tokens

    def render(self, usernames: Iterable[str]) -> str | None:
        """Render tokens joined by a single space, or None if there are none."""
        tokens = self.render_many(usernames)
        return " ".join(tokens) if tokens else None
