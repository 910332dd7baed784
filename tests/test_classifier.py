"""Tests for pull request event classification and role extraction."""

import pytest

from hookcord.mentions import PREventType, PRMentionInfo, extract_mention_info, is_pr_event


class TestIsPREvent:
    """Tests for is_pr_event."""

    @pytest.mark.parametrize(
        "event", ["pull_request", "pull_request_review", "pull_request_review_comment"]
    )
    @pytest.mark.parametrize("payload", [{}, {"action": "opened"}, None, "garbage"])
    def test_pr_events_regardless_of_payload(self, event, payload):
        assert is_pr_event(event, payload) is True

    def test_issue_comment_on_pull_request(self, pr_comment_payload):
        assert is_pr_event("issue_comment", pr_comment_payload) is True

    def test_issue_comment_on_plain_issue(self, pr_comment_payload):
        del pr_comment_payload["issue"]["pull_request"]
        assert is_pr_event("issue_comment", pr_comment_payload) is False

    def test_issue_comment_with_null_pull_request(self):
        payload = {"issue": {"pull_request": None}}
        assert is_pr_event("issue_comment", payload) is False

    def test_issue_comment_without_issue(self):
        assert is_pr_event("issue_comment", {}) is False

    @pytest.mark.parametrize("event", ["push", "issues", "release", "ping", "", None, "PULL_REQUEST"])
    def test_other_events(self, event):
        assert is_pr_event(event, {"pull_request": {"user": {"login": "a"}}}) is False


class TestExtractMentionInfo:
    """Tests for extract_mention_info."""

    def test_pull_request(self, review_requested_payload):
        info = extract_mention_info("pull_request", review_requested_payload)
        assert info == PRMentionInfo(
            pr_author="froster01",
            actor="froster01",
            requested_reviewer="chaad98",
        )

    def test_pull_request_without_review_request(self, review_requested_payload):
        del review_requested_payload["requested_reviewer"]
        review_requested_payload["action"] = "ready_for_review"
        review_requested_payload["sender"] = {"login": "chaad98"}

        info = extract_mention_info("pull_request", review_requested_payload)
        assert info == PRMentionInfo(pr_author="froster01", actor="chaad98")

    def test_pull_request_review(self, review_approved_payload):
        info = extract_mention_info("pull_request_review", review_approved_payload)
        assert info == PRMentionInfo(pr_author="froster01", actor="chaad98")

    def test_review_actor_comes_from_review_not_sender(self, review_approved_payload):
        review_approved_payload["sender"] = {"login": "someone-else"}
        info = extract_mention_info("pull_request_review", review_approved_payload)
        assert info.actor == "chaad98"

    def test_pull_request_review_comment_has_no_author(self):
        payload = {
            "comment": {"user": {"login": "chaad98"}},
            "pull_request": {"user": {"login": "froster01"}},
        }
        info = extract_mention_info("pull_request_review_comment", payload)
        assert info == PRMentionInfo(actor="chaad98")

    def test_issue_comment_on_pull_request(self, pr_comment_payload):
        info = extract_mention_info("issue_comment", pr_comment_payload)
        assert info == PRMentionInfo(pr_author="froster01", actor="chaad98")

    def test_issue_comment_on_plain_issue(self, pr_comment_payload):
        del pr_comment_payload["issue"]["pull_request"]
        assert extract_mention_info("issue_comment", pr_comment_payload) == PRMentionInfo()

    @pytest.mark.parametrize("event", ["push", "issues", None, "unknown"])
    def test_unrecognized_events_are_empty(self, event, review_requested_payload):
        assert extract_mention_info(event, review_requested_payload) == PRMentionInfo()

    @pytest.mark.parametrize(
        "payload",
        [
            None,
            [],
            "not a dict",
            {"pull_request": "oops"},
            {"pull_request": {"user": None}, "sender": {"login": 42}},
            {"pull_request": {"user": {"login": ""}}, "requested_reviewer": []},
        ],
    )
    def test_malformed_payloads_degrade_to_absent(self, payload):
        assert extract_mention_info("pull_request", payload) == PRMentionInfo()

    def test_extraction_is_idempotent(self, review_requested_payload):
        first = extract_mention_info("pull_request", review_requested_payload)
        second = extract_mention_info("pull_request", review_requested_payload)
        assert first == second


def test_event_type_parse():
    assert PREventType.parse("pull_request_review") is PREventType.PULL_REQUEST_REVIEW
    assert PREventType.parse("push") is None
    assert PREventType.parse(None) is None
