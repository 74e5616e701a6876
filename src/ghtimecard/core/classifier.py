"""Event classification and ingestion into the activity ledger."""

import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Iterable

from ghtimecard.ports.summarizer import Summarizer

from .events import (
    GitHubEvent,
    IssueCommentEvent,
    IssuesEvent,
    OtherEvent,
    PullRequestEvent,
    PullRequestReviewCommentEvent,
    PullRequestReviewEvent,
    UnparsablePayload,
    WorkItemRef,
    parse_event,
)
from .ledger import Action, ActivityLedger, ObjectKind, WorkItem, WorkItemKind
from .summarize import condense

logger = logging.getLogger(__name__)

# Event kinds we know about but don't report on yet
UNREPORTED_KINDS = frozenset(
    {
        "CommitCommentEvent",
        "CreateEvent",
        "DeleteEvent",
        "ForkEvent",
        "GollumEvent",
        "MemberEvent",
        "MilestoneEvent",
        "PackageEvent",
        "PublicEvent",
        "PushEvent",
        "ReleaseEvent",
        "RepositoryEvent",
        "RepositoryVulnerabilityAlertEvent",
        "WatchEvent",
    }
)


class IgnoreReason(Enum):
    UNREPORTED_KIND = "unreported_kind"
    UNKNOWN_KIND = "unknown_kind"
    UNPARSABLE_PAYLOAD = "unparsable_payload"


@dataclass(frozen=True)
class Classified:
    """A work item sighting and the action performed on it."""

    item: WorkItem
    action: Action


@dataclass(frozen=True)
class Ignored:
    """An event with nothing to report."""

    reason: IgnoreReason
    kind: str = ""


Outcome = Classified | Ignored


@dataclass
class IngestStats:
    """Counters from one ingest() pass."""

    seen: int = 0
    classified: int = 0
    ignored: int = 0
    filtered: int = 0
    unparsable: int = 0


class EventClassifier:
    """
    Turns typed GitHub events into (work item, action) pairs.

    Body text is condensed through the summarizer before it's stored.
    """

    def __init__(self, summarizer: Summarizer):
        self.summarizer = summarizer

    def _work_item(
        self, ref: WorkItemRef, kind: WorkItemKind, tracked_user: str, known: bool
    ) -> WorkItem:
        return WorkItem(
            id=ref.number,
            kind=kind,
            url=ref.url,
            title=ref.title,
            # A known item keeps its first description, so don't pay for another summary
            description="" if known else condense(self.summarizer, ref.body),
            is_author=ref.author == tracked_user,
        )

    def classify(
        self, event: GitHubEvent, tracked_user: str, ledger: ActivityLedger | None = None
    ) -> Outcome:
        """
        Classify one event.

        `ledger` is only consulted to skip summarizing descriptions of items
        already stored; it is never modified here.
        """
        payload = event.payload

        match payload:
            case IssuesEvent(action=action, issue=ref):
                obj, verb, body = ObjectKind.ISSUE, action, ref.body
            case IssueCommentEvent(action=action, issue=ref, body=body):
                obj, verb = ObjectKind.ISSUE_COMMENT, action
            case PullRequestEvent(action=action, pull_request=ref):
                obj, body = ObjectKind.PULL_REQUEST, ref.body
                verb = "merged" if action == "closed" and ref.merged else action
            case PullRequestReviewEvent(action=action, pull_request=ref, body=body):
                obj, verb = ObjectKind.PULL_REQUEST_COMMENT, action
            case PullRequestReviewCommentEvent(action=action, pull_request=ref, body=body):
                obj, verb = ObjectKind.PULL_REQUEST_COMMENT, action
            case OtherEvent(kind=kind) if kind in UNREPORTED_KINDS:
                logger.debug(f"Skipping {kind} {event.id}")
                return Ignored(IgnoreReason.UNREPORTED_KIND, kind)
            case _:
                logger.warning(f"Unknown event type: {event.kind}")
                return Ignored(IgnoreReason.UNKNOWN_KIND, event.kind)

        kind = WorkItemKind.PULL_REQUEST if ref.is_pull_request else WorkItemKind.ISSUE
        known = ledger is not None and ref.number in ledger
        return Classified(
            item=self._work_item(ref, kind, tracked_user, known),
            action=Action(action=verb, object=obj, content=condense(self.summarizer, body)),
        )

    def classify_raw(
        self, raw: dict, tracked_user: str, ledger: ActivityLedger | None = None
    ) -> Outcome:
        """
        Parse and classify one raw API event.

        Entry point for callers holding a single raw dict; `ingest` runs the
        same parse step over a feed. Parse failures become Ignored.
        """
        event = parse_or_ignore(raw)
        if isinstance(event, Ignored):
            return event
        return self.classify(event, tracked_user, ledger)


def parse_or_ignore(raw: dict) -> GitHubEvent | Ignored:
    """Parse a raw event, logging and ignoring it if it can't be parsed."""
    try:
        return parse_event(raw)
    except UnparsablePayload as e:
        logger.warning(f"Error parsing payload: {e}")
        kind = raw.get("type") if isinstance(raw, dict) else ""
        return Ignored(IgnoreReason.UNPARSABLE_PAYLOAD, kind if isinstance(kind, str) else "")


def record(ledger: ActivityLedger, outcome: Outcome) -> None:
    """Apply a classification outcome to the ledger."""
    if isinstance(outcome, Classified):
        ledger.upsert_work_item(outcome.item)
        ledger.append_action(outcome.item.id, outcome.action)


def _in_repo(event_repo: str, repo: str | None) -> bool:
    return not repo or event_repo.lower() == repo.lower()


def ingest(
    ledger: ActivityLedger,
    classifier: EventClassifier,
    events: Iterable[dict],
    begin: datetime,
    repo: str | None = None,
) -> IngestStats:
    """
    Feed raw events (newest first) into the ledger until one predates `begin`.

    Stops pulling from `events` at the first event older than `begin`, so a
    lazily paginated source never fetches pages it doesn't need. Events from
    other repositories are skipped when `repo` ("owner/name") is given. A
    naive `begin` is taken as local time.
    """
    stats = IngestStats()
    if begin.tzinfo is None:
        begin = begin.astimezone()

    for raw in events:
        stats.seen += 1
        event = parse_or_ignore(raw)
        if isinstance(event, Ignored):
            stats.unparsable += 1
            stats.ignored += 1
            continue

        if event.created_at < begin:
            break

        if not _in_repo(event.repo, repo):
            stats.filtered += 1
            continue

        outcome = classifier.classify(event, ledger.tracked_user, ledger)
        if isinstance(outcome, Ignored):
            stats.ignored += 1
            continue

        record(ledger, outcome)
        stats.classified += 1

    logger.info(
        f"Ingested {stats.classified} of {stats.seen} events "
        f"({stats.ignored} ignored, {stats.filtered} other repos)"
    )
    return stats
