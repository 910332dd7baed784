"""Discord embed construction for GitHub webhook events."""

from collections.abc import Callable, Mapping
from datetime import datetime, timezone
from typing import Any

Embed = dict[str, Any]
EmbedBuilder = Callable[[Mapping[str, Any]], Embed | None]

# Discord embed limits
TITLE_LIMIT = 256
DESCRIPTION_LIMIT = 4096
FIELD_VALUE_LIMIT = 1024
MAX_COMMITS = 5

UNKNOWN = "unknown"


class Colors:
    """Embed sidebar colors."""

    GREEN = 0x2EA043
    RED = 0xDA3633
    PURPLE = 0x8957E5
    BLUE = 0x1F6FEB
    YELLOW = 0xD29922
    GRAY = 0x6E7681


# pull_request actions not worth a channel message
IGNORED_PR_ACTIONS = frozenset(
    {"synchronize", "labeled", "unlabeled", "assigned", "unassigned", "edited"}
)
IGNORED_COMMENT_ACTIONS = frozenset({"edited", "deleted"})

REVIEW_STATES = {
    "approved": ("approved", Colors.GREEN),
    "changes_requested": ("requested changes on", Colors.RED),
    "commented": ("reviewed", Colors.BLUE),
    "dismissed": ("dismissed a review on", Colors.GRAY),
}


def truncate_text(text: str, max_length: int) -> str:
    """Truncate text to max_length characters, ending with "..." if cut."""
    if len(text) <= max_length:
        return text
    if max_length < 3:
        return text[:max_length]
    return text[: max_length - 3] + "..."


def _mapping(value: Any) -> Mapping[str, Any]:
    return value if isinstance(value, Mapping) else {}


def _text(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _login(user: Any) -> str:
    return _text(_mapping(user).get("login")) or UNKNOWN


def _author(payload: Mapping[str, Any]) -> dict[str, str]:
    sender = _mapping(payload.get("sender"))
    author = {"name": _login(sender)}
    if _text(sender.get("avatar_url")):
        author["icon_url"] = sender["avatar_url"]
    if _text(sender.get("html_url")):
        author["url"] = sender["html_url"]
    return author


def _embed(
    payload: Mapping[str, Any],
    title: str,
    color: int,
    url: str = "",
    description: str = "",
    fields: list[dict[str, Any]] | None = None,
) -> Embed:
    """Assemble an embed with the fields every event shares."""
    repo = _mapping(payload.get("repository"))
    embed: Embed = {
        "title": truncate_text(title, TITLE_LIMIT),
        "color": color,
        "author": _author(payload),
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }
    if url:
        embed["url"] = url
    if description:
        embed["description"] = truncate_text(description, DESCRIPTION_LIMIT)
    if fields:
        embed["fields"] = [
            {**f, "value": truncate_text(str(f["value"]), FIELD_VALUE_LIMIT)} for f in fields
        ]
    full_name = _text(repo.get("full_name")) or _text(repo.get("name"))
    if full_name:
        embed["footer"] = {"text": full_name}
    return embed


def _pr_title(pr: Mapping[str, Any]) -> str:
    number = pr.get("number")
    title = _text(pr.get("title"))
    return f"#{number} {title}".strip() if number is not None else title


def _build_pull_request(payload: Mapping[str, Any]) -> Embed | None:
    action = _text(payload.get("action"))
    if action in IGNORED_PR_ACTIONS:
        return None

    pr = _mapping(payload.get("pull_request"))
    color = Colors.BLUE
    verb = action.replace("_", " ")

    if action == "closed" and pr.get("merged"):
        verb, color = "merged", Colors.PURPLE
    elif action == "closed":
        color = Colors.RED
    elif action in ("opened", "reopened", "ready_for_review"):
        color = Colors.GREEN
    elif action == "converted_to_draft":
        color = Colors.GRAY
    elif action == "review_requested":
        color = Colors.YELLOW

    fields = []
    base = _text(_mapping(pr.get("base")).get("ref"))
    head = _text(_mapping(pr.get("head")).get("ref"))
    if base and head:
        fields.append({"name": "Branch", "value": f"`{head}` → `{base}`", "inline": True})
    reviewer = _mapping(payload.get("requested_reviewer"))
    if reviewer:
        fields.append({"name": "Reviewer", "value": _login(reviewer), "inline": True})

    description = _text(pr.get("body")) if action == "opened" else ""
    return _embed(
        payload,
        title=f"Pull request {verb}: {_pr_title(pr)}",
        color=color,
        url=_text(pr.get("html_url")),
        description=description,
        fields=fields,
    )


def _build_pull_request_review(payload: Mapping[str, Any]) -> Embed | None:
    review = _mapping(payload.get("review"))
    pr = _mapping(payload.get("pull_request"))
    state = _text(review.get("state")).lower()
    body = _text(review.get("body"))

    # GitHub wraps every batch of inline comments in an empty "commented" review
    if state == "commented" and not body:
        return None

    verb, color = REVIEW_STATES.get(state, ("reviewed", Colors.BLUE))
    return _embed(
        payload,
        title=f"{_login(review.get('user'))} {verb} {_pr_title(pr)}",
        color=color,
        url=_text(review.get("html_url")) or _text(pr.get("html_url")),
        description=body,
    )


def _build_review_comment(payload: Mapping[str, Any]) -> Embed | None:
    if _text(payload.get("action")) in IGNORED_COMMENT_ACTIONS:
        return None

    comment = _mapping(payload.get("comment"))
    pr = _mapping(payload.get("pull_request"))
    fields = []
    path = _text(comment.get("path"))
    if path:
        line = comment.get("line")
        location = f"`{path}`" + (f" line {line}" if line is not None else "")
        fields.append({"name": "File", "value": location, "inline": False})

    return _embed(
        payload,
        title=f"Review comment on {_pr_title(pr)}",
        color=Colors.BLUE,
        url=_text(comment.get("html_url")),
        description=_text(comment.get("body")),
        fields=fields,
    )


def _build_issue_comment(payload: Mapping[str, Any]) -> Embed | None:
    if _text(payload.get("action")) in IGNORED_COMMENT_ACTIONS:
        return None

    issue = _mapping(payload.get("issue"))
    comment = _mapping(payload.get("comment"))
    kind = "pull request" if issue.get("pull_request") is not None else "issue"
    return _embed(
        payload,
        title=f"New comment on {kind} {_pr_title(issue)}",
        color=Colors.BLUE,
        url=_text(comment.get("html_url")) or _text(issue.get("html_url")),
        description=_text(comment.get("body")),
    )


def _build_issues(payload: Mapping[str, Any]) -> Embed | None:
    action = _text(payload.get("action"))
    issue = _mapping(payload.get("issue"))
    color = {"opened": Colors.GREEN, "closed": Colors.RED, "reopened": Colors.GREEN}.get(
        action, Colors.BLUE
    )
    return _embed(
        payload,
        title=f"Issue {action.replace('_', ' ')}: {_pr_title(issue)}",
        color=color,
        url=_text(issue.get("html_url")),
        description=_text(issue.get("body")) if action == "opened" else "",
    )


def _build_push(payload: Mapping[str, Any]) -> Embed | None:
    commits = [c for c in payload.get("commits") or [] if isinstance(c, Mapping)]
    if not commits:
        return None

    ref = _text(payload.get("ref"))
    branch = ref.removeprefix("refs/heads/")
    lines = []
    for commit in commits[:MAX_COMMITS]:
        sha = _text(commit.get("id"))[:7]
        message = _text(commit.get("message")).splitlines()[0:1]
        summary = truncate_text(message[0], 80) if message else ""
        url = _text(commit.get("url"))
        lines.append(f"[`{sha}`]({url}) {summary}" if url else f"`{sha}` {summary}")
    if len(commits) > MAX_COMMITS:
        lines.append(f"... and {len(commits) - MAX_COMMITS} more")

    noun = "commit" if len(commits) == 1 else "commits"
    return _embed(
        payload,
        title=f"{len(commits)} new {noun} to {branch}",
        color=Colors.GRAY,
        url=_text(payload.get("compare")),
        description="\n".join(lines),
    )


def _build_release(payload: Mapping[str, Any]) -> Embed | None:
    action = _text(payload.get("action"))
    if action != "published":
        return None
    release = _mapping(payload.get("release"))
    name = _text(release.get("name")) or _text(release.get("tag_name"))
    return _embed(
        payload,
        title=f"Release published: {name}",
        color=Colors.PURPLE,
        url=_text(release.get("html_url")),
        description=_text(release.get("body")),
    )


def _build_ref_event(verb: str, color: int) -> EmbedBuilder:
    def build(payload: Mapping[str, Any]) -> Embed | None:
        ref_type = _text(payload.get("ref_type")) or "ref"
        ref = _text(payload.get("ref"))
        return _embed(payload, title=f"{verb} {ref_type} {ref}".strip(), color=color)

    return build


def _build_generic(event: str, payload: Mapping[str, Any]) -> Embed:
    action = _text(payload.get("action"))
    label = event.replace("_", " ")
    title = f"{label} {action}".strip() + f" by {_login(payload.get('sender'))}"
    return _embed(payload, title=title, color=Colors.GRAY)


BUILDERS: dict[str, EmbedBuilder] = {
    "pull_request": _build_pull_request,
    "pull_request_review": _build_pull_request_review,
    "pull_request_review_comment": _build_review_comment,
    "issue_comment": _build_issue_comment,
    "issues": _build_issues,
    "push": _build_push,
    "release": _build_release,
    "create": _build_ref_event("Created", Colors.GREEN),
    "delete": _build_ref_event("Deleted", Colors.RED),
}


def build_embed(event: str, payload: Any) -> Embed | None:
    """Build a Discord embed for a GitHub webhook event.

    Events without a dedicated builder get a generic one-line embed.

    Args:
        event: Value of the X-GitHub-Event header
        payload: Parsed webhook body

    Returns:
        Embed dictionary, or None if the event should not be relayed
    """
    payload = _mapping(payload)
    builder = BUILDERS.get(event)
    if builder is None:
        return _build_generic(event, payload)
    return builder(payload)
