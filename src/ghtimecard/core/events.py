"""GitHub event parsing - raw API dicts into typed events."""

from dataclasses import dataclass
from datetime import datetime


class UnparsablePayload(ValueError):
    """Raised when a raw event cannot be turned into a typed event."""

    pass


@dataclass(frozen=True)
class WorkItemRef:
    """The issue or pull request an event points at."""

    number: int
    url: str
    title: str
    body: str
    author: str
    is_pull_request: bool = False
    merged: bool = False

    @classmethod
    def from_issue(cls, data: dict) -> "WorkItemRef":
        """Build from an API issue object (may actually be a pull request)."""
        return cls(
            number=_number(data),
            url=_text(data, "html_url"),
            title=_text(data, "title"),
            body=_text(data, "body"),
            author=_text(_object(data, "user"), "login"),
            is_pull_request=bool(data.get("pull_request")),
        )

    @classmethod
    def from_pull_request(cls, data: dict) -> "WorkItemRef":
        """Build from an API pull request object."""
        return cls(
            number=_number(data),
            url=_text(data, "html_url"),
            title=_text(data, "title"),
            body=_text(data, "body"),
            author=_text(_object(data, "user"), "login"),
            is_pull_request=True,
            merged=bool(data.get("merged")),
        )


@dataclass(frozen=True)
class IssuesEvent:
    action: str
    issue: WorkItemRef


@dataclass(frozen=True)
class IssueCommentEvent:
    action: str
    issue: WorkItemRef
    body: str


@dataclass(frozen=True)
class PullRequestEvent:
    action: str
    pull_request: WorkItemRef


@dataclass(frozen=True)
class PullRequestReviewEvent:
    action: str
    pull_request: WorkItemRef
    body: str


@dataclass(frozen=True)
class PullRequestReviewCommentEvent:
    action: str
    pull_request: WorkItemRef
    body: str


@dataclass(frozen=True)
class OtherEvent:
    """Any event kind without a dedicated payload type."""

    kind: str


Payload = (
    IssuesEvent
    | IssueCommentEvent
    | PullRequestEvent
    | PullRequestReviewEvent
    | PullRequestReviewCommentEvent
    | OtherEvent
)


@dataclass(frozen=True)
class GitHubEvent:
    """One entry from the user events feed."""

    id: str
    kind: str
    created_at: datetime
    repo: str
    payload: Payload


def _number(data: dict) -> int:
    try:
        return int(data["number"])
    except (KeyError, TypeError, ValueError):
        raise UnparsablePayload(f"work item has no usable number: {data.get('number')!r}")


def _record(payload: dict, key: str) -> dict:
    value = payload.get(key)
    if not isinstance(value, dict):
        raise UnparsablePayload(f"payload is missing {key!r}")
    return value


def _object(data: dict, key: str) -> dict:
    """An optional nested object; absent or null reads as empty."""
    value = data.get(key)
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise UnparsablePayload(f"{key!r} is not an object: {value!r}")
    return value


def _text(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise UnparsablePayload(f"{key!r} is not a string: {value!r}")
    return value


def _body(payload: dict, key: str) -> str:
    return _text(_object(payload, key), "body")


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO-8601 timestamp ("2024-01-15T10:00:00Z")."""
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except (AttributeError, ValueError):
        raise UnparsablePayload(f"invalid created_at: {value!r}")


def parse_payload(kind: str, payload: dict) -> Payload:
    """Turn the `payload` object of an event into its typed form."""
    if not isinstance(payload, dict):
        raise UnparsablePayload(f"{kind} payload is not an object")

    action = _text(payload, "action")

    match kind:
        case "IssuesEvent":
            return IssuesEvent(action, WorkItemRef.from_issue(_record(payload, "issue")))
        case "IssueCommentEvent":
            return IssueCommentEvent(
                action,
                WorkItemRef.from_issue(_record(payload, "issue")),
                _body(payload, "comment"),
            )
        case "PullRequestEvent":
            return PullRequestEvent(
                action,
                WorkItemRef.from_pull_request(_record(payload, "pull_request")),
            )
        case "PullRequestReviewEvent":
            return PullRequestReviewEvent(
                action,
                WorkItemRef.from_pull_request(_record(payload, "pull_request")),
                _body(payload, "review"),
            )
        case "PullRequestReviewCommentEvent":
            return PullRequestReviewCommentEvent(
                action,
                WorkItemRef.from_pull_request(_record(payload, "pull_request")),
                _body(payload, "comment"),
            )
        case _:
            return OtherEvent(kind)


def parse_event(raw: dict) -> GitHubEvent:
    """
    Parse one raw event from the GitHub events API.

    Raises:
        UnparsablePayload: the event is missing required fields or its
            payload doesn't match its declared type
    """
    if not isinstance(raw, dict):
        raise UnparsablePayload("event is not an object")

    kind = raw.get("type")
    if not kind or not isinstance(kind, str):
        raise UnparsablePayload("event has no type")

    return GitHubEvent(
        id=str(raw.get("id", "")),
        kind=kind,
        created_at=parse_timestamp(raw.get("created_at")),
        repo=_text(_object(raw, "repo"), "name"),
        payload=parse_payload(kind, raw.get("payload") or {}),
    )
