"""GitHub username to Discord user ID directory."""

import logging
import os
from collections.abc import Iterator, Mapping
from functools import lru_cache

logger = logging.getLogger(__name__)

USER_ENV_PREFIX = "DISCORD_USER_"
"""Environment variables DISCORD_USER_<GITHUB_USERNAME>=<discord_user_id>."""


class IdentityDirectory(Mapping[str, str]):
    """Read-only mapping from GitHub username to Discord user ID.

    Keys are lowercased on construction and lookups lowercase their input,
    so matching is case-insensitive. Entries with empty IDs are skipped.
    A missing entry is a normal outcome: lookup returns None.

    Example:
        directory = IdentityDirectory({"Octocat": "123"})
        directory.lookup("OCTOCAT")  # "123"
    """

    def __init__(self, entries: Mapping[str, str] | None = None):
        self._entries: dict[str, str] = {}
        for username, discord_id in (entries or {}).items():
            if not username or not discord_id:
                continue
            self._entries[username.lower()] = discord_id

    @classmethod
    def from_environ(
        cls,
        environ: Mapping[str, str],
        prefix: str = USER_ENV_PREFIX,
    ) -> "IdentityDirectory":
        """Build a directory from prefixed environment variables.

        Args:
            environ: Environment mapping (usually os.environ)
            prefix: Variable prefix preceding the GitHub username

        Returns:
            Directory with one entry per non-empty prefixed variable
        """
        entries = {
            key[len(prefix):]: value
            for key, value in environ.items()
            if key.startswith(prefix) and value
        }
        return cls(entries)

    def lookup(self, github_username: str | None) -> str | None:
        """Get the Discord user ID for a GitHub username, or None."""
        if not github_username:
            return None
        return self._entries.get(github_username.lower())

    def __getitem__(self, github_username: str) -> str:
        return self._entries[github_username.lower()]

    def __contains__(self, github_username: object) -> bool:
        if not isinstance(github_username, str):
            return False
        return github_username.lower() in self._entries

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"IdentityDirectory({len(self)} users)"


@lru_cache
def get_identity_directory() -> IdentityDirectory:
    """Get the process-wide directory, built once from os.environ."""
    directory = IdentityDirectory.from_environ(os.environ)
    logger.info(f"Loaded {len(directory)} GitHub to Discord user mappings")
    return directory
