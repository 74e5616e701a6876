"""Functional core - pure business logic with no network I/O."""

from .dates import KEYWORDS, InvalidKeyword, resolve
from .events import GitHubEvent, UnparsablePayload, parse_event
from .ledger import Action, ActivityLedger, ObjectKind, WorkItem, WorkItemKind
from .classifier import Classified, EventClassifier, Ignored, IgnoreReason, IngestStats, ingest, parse_or_ignore
from .report import ReportBuilder, SummaryStyle

__all__ = [
    # Dates
    "KEYWORDS",
    "InvalidKeyword",
    "resolve",
    # Events
    "GitHubEvent",
    "UnparsablePayload",
    "parse_event",
    # Ledger
    "Action",
    "ActivityLedger",
    "ObjectKind",
    "WorkItem",
    "WorkItemKind",
    # Classification
    "Classified",
    "EventClassifier",
    "Ignored",
    "IgnoreReason",
    "IngestStats",
    "ingest",
    "parse_or_ignore",
    # Report
    "ReportBuilder",
    "SummaryStyle",
]
