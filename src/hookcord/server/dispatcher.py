"""Routing a GitHub webhook event to a Discord channel message."""

import logging
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any

import httpx

from hookcord.discord.client import DiscordClient
from hookcord.mentions import (
    MentionFormatter,
    extract_mention_info,
    is_pr_event,
    select_mentionees,
)

logger = logging.getLogger(__name__)


@dataclass
class Notification:
    """A message ready to be posted to a Discord channel.

    Attributes:
        repo: Repository name the event came from
        webhook_url: Discord webhook URL for the repository's channel
        content: Space-separated mention tokens, or None
        embed: Rich embed describing the event
    """

    repo: str
    webhook_url: str
    content: str | None
    embed: dict[str, Any]


def get_event_name(header: str | None) -> str | None:
    """Normalize the X-GitHub-Event header value.

    Repeated headers arrive comma-joined; the first value wins.
    """
    if not header:
        return None
    return header.split(",")[0].strip() or None


def get_repo_name(payload: Any) -> str | None:
    """Get repository.name from a payload, or None."""
    if not isinstance(payload, Mapping):
        return None
    repo = payload.get("repository")
    if not isinstance(repo, Mapping):
        return None
    name = repo.get("name")
    return name if isinstance(name, str) and name else None


def log_mention_results(usernames: Iterable[str], formatter: MentionFormatter) -> None:
    """Log which mentionees resolved to a Discord user."""
    for username in usernames:
        token = formatter.mention(username)
        if token:
            logger.info(f"Will ping: {username} -> {token}")
        else:
            logger.info(f"No Discord mapping found for GitHub user: {username}")


def resolve_mentions(event: str, payload: Any, formatter: MentionFormatter) -> str | None:
    """Work out the mention text for a PR event.

    Args:
        event: GitHub event name
        payload: Parsed webhook body
        formatter: Formatter bound to the identity directory

    Returns:
        Space-separated mention tokens, or None if nobody is mentioned
    """
    if not is_pr_event(event, payload):
        return None

    info = extract_mention_info(event, payload)
    usernames = select_mentionees(info)
    if not usernames:
        logger.info("No mentions to send (self-action or no roles)")
        return None

    log_mention_results(usernames, formatter)
    content = formatter.render(usernames)
    if content:
        logger.info(f"Final mentions: {content}")
    return content


async def deliver(notification: Notification) -> None:
    """Post a notification to Discord.

    Delivery failures are logged, never raised: GitHub has already been
    acknowledged by the time this runs.
    """
    mode = f"with mention: {notification.content}" if notification.content else "embed only"
    logger.info(f"Sending to Discord for {notification.repo} ({mode})")

    try:
        async with DiscordClient() as discord:
            await discord.send_message(
                notification.webhook_url,
                notification.content,
                [notification.embed],
            )
    except httpx.HTTPError as e:
        logger.exception(f"Failed to send webhook for {notification.repo}: {e}")
        return

    logger.info(f"Successfully sent to Discord for {notification.repo}")
