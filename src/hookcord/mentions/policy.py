"""Who gets mentioned for a pull request interaction."""

from hookcord.mentions.classifier import PRMentionInfo


def select_mentionees(info: PRMentionInfo) -> list[str]:
    """Select the GitHub usernames to notify for a PR event.

    The PR author is included only when someone else performed the action
    (exact, case-sensitive comparison). A requested reviewer is always
    included. Order is author first, then reviewer, without duplicates.

    Args:
        info: Roles extracted from the event

    Returns:
        GitHub usernames to mention, possibly empty
    """
    mentionees: list[str] = []

    if info.pr_author and info.actor and info.pr_author != info.actor:
        mentionees.append(info.pr_author)

    if info.requested_reviewer and info.requested_reviewer not in mentionees:
        mentionees.append(info.requested_reviewer)

    return mentionees
