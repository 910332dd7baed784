"""Hookcord - GitHub webhook relay for Discord with pull request mentions."""

__version__ = "0.1.0"
