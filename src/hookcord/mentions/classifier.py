"""Pull request event classification and role extraction."""

import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

logger = logging.getLogger(__name__)


class PREventType(Enum):
    """GitHub webhook events that can concern a pull request.

    Values:
        PULL_REQUEST: PR opened, closed, review requested, etc.
        PULL_REQUEST_REVIEW: Review submitted, edited or dismissed
        PULL_REQUEST_REVIEW_COMMENT: Inline comment on the PR diff
        ISSUE_COMMENT: Conversation comment on an issue or a PR
    """

    PULL_REQUEST = "pull_request"
    PULL_REQUEST_REVIEW = "pull_request_review"
    PULL_REQUEST_REVIEW_COMMENT = "pull_request_review_comment"
    ISSUE_COMMENT = "issue_comment"

    @classmethod
    def parse(cls, event_name: str | None) -> "PREventType | None":
        """Get the member for an event name, or None if unrecognized."""
        try:
            return cls(event_name)
        except ValueError:
            return None


@dataclass(frozen=True)
class PRMentionInfo:
    """GitHub users playing a role in one PR event.

    Attributes:
        pr_author: Login of the user who opened the pull request
        actor: Login of the user who performed this action
        requested_reviewer: Login of the user asked to review (review requests only)
    """

    pr_author: str | None = None
    actor: str | None = None
    requested_reviewer: str | None = None


def _get(data: Any, *path: str) -> Any:
    """Walk nested mappings, returning None at the first missing step."""
    current = data
    for key in path:
        if not isinstance(current, Mapping):
            return None
        current = current.get(key)
    return current


def _login(data: Any, *path: str) -> str | None:
    """Get a non-empty string login at path, or None."""
    value = _get(data, *path, "login")
    if isinstance(value, str) and value:
        return value
    return None


def _is_pr_issue(payload: Any) -> bool:
    # Issues and PRs share issue_comment; only PRs carry issue.pull_request
    return _get(payload, "issue", "pull_request") is not None


def is_pr_event(event_name: str | None, payload: Any) -> bool:
    """Check if a webhook event concerns a pull request.

    pull_request, pull_request_review and pull_request_review_comment always
    do. issue_comment does only when the commented issue is a PR.

    Args:
        event_name: Value of the X-GitHub-Event header
        payload: Parsed webhook body

    Returns:
        True if this is a PR-related event
    """
    event_type = PREventType.parse(event_name)
    if event_type is None:
        return False
    if event_type is PREventType.ISSUE_COMMENT:
        return _is_pr_issue(payload)
    return True


def _extract_pull_request(payload: Any) -> PRMentionInfo:
    info = PRMentionInfo(
        pr_author=_login(payload, "pull_request", "user"),
        actor=_login(payload, "sender"),
        requested_reviewer=_login(payload, "requested_reviewer"),
    )
    logger.debug(
        f"PR event: action={_get(payload, 'action')}, prAuthor={info.pr_author}, "
        f"sender={info.actor}, requestedReviewer={info.requested_reviewer}"
    )
    return info


def _extract_review(payload: Any) -> PRMentionInfo:
    info = PRMentionInfo(
        pr_author=_login(payload, "pull_request", "user"),
        actor=_login(payload, "review", "user"),
    )
    logger.debug(
        f"Review event: state={_get(payload, 'review', 'state')}, "
        f"prAuthor={info.pr_author}, sender={info.actor}"
    )
    return info


def _extract_review_comment(payload: Any) -> PRMentionInfo:
    # The PR author is not part of this payload's contract
    info = PRMentionInfo(actor=_login(payload, "comment", "user"))
    logger.debug(f"Review comment: sender={info.actor}, PR author not available")
    return info


def _extract_issue_comment(payload: Any) -> PRMentionInfo:
    if not _is_pr_issue(payload):
        return PRMentionInfo()
    info = PRMentionInfo(
        pr_author=_login(payload, "issue", "user"),
        actor=_login(payload, "comment", "user"),
    )
    logger.debug(f"PR comment: prAuthor={info.pr_author}, sender={info.actor}")
    return info


EXTRACTORS: dict[PREventType, Callable[[Any], PRMentionInfo]] = {
    PREventType.PULL_REQUEST: _extract_pull_request,
    PREventType.PULL_REQUEST_REVIEW: _extract_review,
    PREventType.PULL_REQUEST_REVIEW_COMMENT: _extract_review_comment,
    PREventType.ISSUE_COMMENT: _extract_issue_comment,
}


def extract_mention_info(event_name: str | None, payload: Any) -> PRMentionInfo:
    """Extract the PR author, actor and requested reviewer from an event.

    Each event type stores these roles in different places. Missing or
    malformed fields yield None for that role; unrecognized events yield
    an empty PRMentionInfo.

    Args:
        event_name: Value of the X-GitHub-Event header
        payload: Parsed webhook body

    Returns:
        PRMentionInfo for this event
    """
    event_type = PREventType.parse(event_name)
    if event_type is None:
        return PRMentionInfo()
    return EXTRACTORS[event_type](payload)
