"""Tests for GitHub event parsing."""

from datetime import datetime, timezone

import pytest

from ghtimecard.core.events import (
    IssueCommentEvent,
    IssuesEvent,
    OtherEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    UnparsablePayload,
    parse_event,
    parse_timestamp,
)


def raw_event(kind, payload, created_at="2025-01-15T10:00:00Z", repo="octo/widgets"):
    return {
        "id": "123",
        "type": kind,
        "created_at": created_at,
        "repo": {"name": repo},
        "payload": payload,
    }


ISSUE = {
    "number": 10,
    "html_url": "https://github.com/octo/widgets/issues/10",
    "title": "Widgets wobble",
    "body": "They wobble a lot.",
    "user": {"login": "alice"},
}

PULL = {
    "number": 42,
    "html_url": "https://github.com/octo/widgets/pull/42",
    "title": "Stop the wobble",
    "body": None,
    "user": {"login": "bob"},
    "merged": True,
}


class TestParseEvent:
    def test_envelope_fields(self):
        event = parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": ISSUE}))

        assert event.id == "123"
        assert event.kind == "IssuesEvent"
        assert event.repo == "octo/widgets"
        assert event.created_at == datetime(2025, 1, 15, 10, 0, tzinfo=timezone.utc)

    def test_issues_event(self):
        event = parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": ISSUE}))

        assert isinstance(event.payload, IssuesEvent)
        assert event.payload.action == "opened"
        ref = event.payload.issue
        assert ref.number == 10
        assert ref.title == "Widgets wobble"
        assert ref.author == "alice"
        assert ref.is_pull_request is False

    def test_issue_flagged_as_pull_request(self):
        issue = dict(ISSUE, pull_request={"url": "https://api.github.com/..."})
        event = parse_event(raw_event("IssueCommentEvent", {
            "action": "created",
            "issue": issue,
            "comment": {"body": "lgtm"},
        }))

        assert isinstance(event.payload, IssueCommentEvent)
        assert event.payload.issue.is_pull_request is True
        assert event.payload.body == "lgtm"

    def test_pull_request_event(self):
        event = parse_event(raw_event("PullRequestEvent", {"action": "closed", "pull_request": PULL}))

        assert isinstance(event.payload, PullRequestEvent)
        ref = event.payload.pull_request
        assert ref.merged is True
        assert ref.is_pull_request is True
        assert ref.body == ""

    def test_review_and_review_comment(self):
        review = parse_event(raw_event("PullRequestReviewEvent", {
            "action": "created",
            "pull_request": PULL,
            "review": {"body": "Looks good"},
        }))
        comment = parse_event(raw_event("PullRequestReviewCommentEvent", {
            "action": "created",
            "pull_request": PULL,
            "comment": {"body": "nit: spacing"},
        }))

        assert isinstance(review.payload, PullRequestReviewEvent)
        assert review.payload.body == "Looks good"
        assert isinstance(comment.payload, PullRequestReviewCommentEvent)
        assert comment.payload.body == "nit: spacing"

    def test_review_without_body(self):
        event = parse_event(raw_event("PullRequestReviewEvent", {
            "action": "created",
            "pull_request": PULL,
            "review": {"body": None},
        }))
        assert event.payload.body == ""

    def test_other_kinds(self):
        event = parse_event(raw_event("PushEvent", {"ref": "refs/heads/main"}))
        assert event.payload == OtherEvent("PushEvent")

    def test_missing_payload_for_unknown_kind_is_fine(self):
        raw = raw_event("SponsorshipEvent", None)
        assert parse_event(raw).payload == OtherEvent("SponsorshipEvent")


class TestUnparsable:
    def test_missing_type(self):
        raw = raw_event("IssuesEvent", {})
        del raw["type"]
        with pytest.raises(UnparsablePayload, match="no type"):
            parse_event(raw)

    def test_missing_issue(self):
        with pytest.raises(UnparsablePayload, match="'issue'"):
            parse_event(raw_event("IssuesEvent", {"action": "opened"}))

    def test_missing_number(self):
        issue = {k: v for k, v in ISSUE.items() if k != "number"}
        with pytest.raises(UnparsablePayload, match="number"):
            parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": issue}))

    def test_bad_timestamp(self):
        with pytest.raises(UnparsablePayload, match="created_at"):
            parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": ISSUE}, created_at="yesterday"))

    def test_missing_timestamp(self):
        raw = raw_event("PushEvent", {})
        del raw["created_at"]
        with pytest.raises(UnparsablePayload):
            parse_event(raw)

    def test_not_a_dict(self):
        with pytest.raises(UnparsablePayload):
            parse_event(["IssuesEvent"])

    def test_comment_is_a_string(self):
        with pytest.raises(UnparsablePayload, match="'comment' is not an object"):
            parse_event(raw_event("IssueCommentEvent", {"action": "created", "issue": ISSUE, "comment": "lgtm"}))

    def test_review_is_a_string(self):
        with pytest.raises(UnparsablePayload, match="'review'"):
            parse_event(raw_event("PullRequestReviewEvent", {"action": "created", "pull_request": PULL, "review": "ok"}))

    def test_user_is_a_string(self):
        issue = dict(ISSUE, user="alice")
        with pytest.raises(UnparsablePayload, match="'user'"):
            parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": issue}))

    def test_title_is_not_text(self):
        issue = dict(ISSUE, title=["Widgets", "wobble"])
        with pytest.raises(UnparsablePayload, match="'title' is not a string"):
            parse_event(raw_event("IssuesEvent", {"action": "opened", "issue": issue}))

    def test_repo_is_a_list(self):
        raw = raw_event("PushEvent", {})
        raw["repo"] = ["octo/widgets"]
        with pytest.raises(UnparsablePayload, match="'repo'"):
            parse_event(raw)

    def test_type_is_not_text(self):
        with pytest.raises(UnparsablePayload, match="no type"):
            parse_event(raw_event(7, {}))

    def test_null_nested_objects_read_as_empty(self):
        issue = dict(ISSUE, user=None)
        raw = raw_event("IssueCommentEvent", {"action": "created", "issue": issue, "comment": None})
        raw["repo"] = None

        event = parse_event(raw)

        assert event.repo == ""
        assert event.payload.issue.author == ""
        assert event.payload.body == ""


class TestParseTimestamp:
    def test_offset_timestamp(self):
        ts = parse_timestamp("2025-01-15T10:00:00+02:00")
        assert ts.utcoffset().total_seconds() == 7200
