"""Pytest configuration and shared fixtures."""

import pytest

from hookcord.env import get_settings
from hookcord.identity import IdentityDirectory, get_identity_directory
from hookcord.mentions import MentionFormatter
from hookcord.server.ratelimit import get_rate_limiter

FROSTER_ID = "620058726069567503"
CHAAD_ID = "335363734446931968"


@pytest.fixture(autouse=True)
def isolated_config(tmp_path, monkeypatch):
    """Point configuration at an empty directory and reset cached singletons."""
    monkeypatch.setenv("HOOKCORD_CONFIG_DIR", str(tmp_path))
    get_settings.cache_clear()
    get_identity_directory.cache_clear()
    get_rate_limiter.cache_clear()
    yield
    get_settings.cache_clear()
    get_identity_directory.cache_clear()
    get_rate_limiter.cache_clear()


@pytest.fixture
def directory() -> IdentityDirectory:
    """Directory with the two users used throughout the tests."""
    return IdentityDirectory({"froster01": FROSTER_ID, "chaad98": CHAAD_ID})


@pytest.fixture
def formatter(directory) -> MentionFormatter:
    return MentionFormatter(directory)


@pytest.fixture
def review_requested_payload() -> dict:
    """pull_request review_requested where the author requests the review."""
    return {
        "repository": {"name": "webhook-integration", "full_name": "OwLabs/webhook-integration"},
        "action": "review_requested",
        "pull_request": {
            "number": 4,
            "title": "Test PR",
            "html_url": "https://github.com/OwLabs/webhook-integration/pull/4",
            "user": {"login": "froster01"},
            "base": {"ref": "main"},
            "head": {"ref": "feature"},
            "merged": False,
        },
        "requested_reviewer": {"login": "chaad98"},
        "sender": {"login": "froster01"},
    }


@pytest.fixture
def review_approved_payload() -> dict:
    """pull_request_review approved by someone other than the author."""
    return {
        "repository": {"name": "webhook-integration"},
        "action": "submitted",
        "review": {
            "state": "approved",
            "body": "LGTM!",
            "html_url": "https://github.com/OwLabs/webhook-integration/pull/4#pullrequestreview-1",
            "user": {"login": "chaad98"},
        },
        "pull_request": {
            "number": 4,
            "title": "Test PR",
            "html_url": "https://github.com/OwLabs/webhook-integration/pull/4",
            "user": {"login": "froster01"},
        },
        "sender": {"login": "chaad98"},
    }


@pytest.fixture
def pr_comment_payload() -> dict:
    """issue_comment on a pull request."""
    return {
        "repository": {"name": "webhook-integration"},
        "action": "created",
        "issue": {
            "number": 4,
            "title": "Test PR",
            "html_url": "https://github.com/OwLabs/webhook-integration/pull/4",
            "user": {"login": "froster01"},
            "pull_request": {"url": "https://api.github.com/repos/OwLabs/webhook-integration/pulls/4"},
        },
        "comment": {
            "body": "Could you split this up?",
            "html_url": "https://github.com/OwLabs/webhook-integration/pull/4#issuecomment-1",
            "user": {"login": "chaad98"},
        },
        "sender": {"login": "chaad98"},
    }
