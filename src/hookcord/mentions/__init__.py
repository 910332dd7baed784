"""Hookcord Mentions - PR event classification, mention policy and rendering."""

from hookcord.mentions.classifier import (
    PREventType,
    PRMentionInfo,
    extract_mention_info,
    is_pr_event,
)
from hookcord.mentions.formatter import MentionFormatter, render_one
from hookcord.mentions.policy import select_mentionees

__all__ = [
    "PREventType",
    "PRMentionInfo",
    "extract_mention_info",
    "is_pr_event",
    "MentionFormatter",
    "render_one",
    "select_mentionees",
]
