"""Workflow layer between the CLI and the core.

Resolves the date range, streams events into a ledger, then summarizes
the ledger into a timecard.
"""

import logging
from dataclasses import dataclass
from datetime import datetime

from .adapters.claude_cli import ClaudeCLISummarizer
from .adapters.github_api import GitHubEventsAdapter
from .adapters.openai_chat import OpenAIChatSummarizer
from .config import Config
from .core.classifier import EventClassifier, IngestStats, ingest
from .core.dates import resolve
from .core.ledger import ActivityLedger
from .core.report import ReportBuilder, SummaryStyle
from .ports import EventSource, Summarizer

logger = logging.getLogger(__name__)


@dataclass
class TimecardResult:
    """Everything one run produced."""

    begin: datetime
    tracked_user: str
    stats: IngestStats
    report: str
    timecard: str


def normalize_repo(repo: str | None) -> str | None:
    """Validate an "owner/repo" filter. Empty means all repositories."""
    if not repo:
        return None
    repo = repo.strip().lower()
    if "/" not in repo:
        raise ValueError(f"Invalid owner/repo: {repo}")
    return repo


def build_summarizer(config: Config) -> Summarizer:
    """Pick the configured summarizer backend."""
    if config.summarizer == "claude":
        return ClaudeCLISummarizer(timeout=max(config.request_timeout, 300))
    return OpenAIChatSummarizer(
        token=config.openai_token,
        model=config.openai_model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
        timeout=config.request_timeout,
    )


def build_event_source(config: Config) -> GitHubEventsAdapter:
    return GitHubEventsAdapter(token=config.github_token, timeout=config.request_timeout)


def run_timecard(
    config: Config,
    date_keyword: str,
    style: str | SummaryStyle,
    repo: str | None = None,
    now: datetime | None = None,
    source: EventSource | None = None,
    summarizer: Summarizer | None = None,
    raw: bool = False,
) -> TimecardResult:
    """
    Build a timecard for the activity since `date_keyword`.

    Arguments are validated before any network call. With `raw`, the final
    timecard call is skipped and `timecard` holds the per-item report. A naive
    `now` is local time; `begin` always comes back timezone-aware.

    Raises:
        InvalidKeyword: unknown date keyword
        ValueError: unknown style or malformed repo filter
    """
    now = now or datetime.now().astimezone()
    begin = resolve(date_keyword, now)
    if begin.tzinfo is None:
        begin = begin.astimezone()
    style = style if isinstance(style, SummaryStyle) else SummaryStyle.parse(style)
    repo = normalize_repo(repo)

    source = source or build_event_source(config)
    summarizer = summarizer or build_summarizer(config)

    tracked_user = source.authenticated_user()
    username = config.github_user or tracked_user
    logger.info(f"Collecting events for {username} since {begin.isoformat()}")

    ledger = ActivityLedger(tracked_user)
    stats = ingest(ledger, EventClassifier(summarizer), source.iter_events(username), begin, repo)

    builder = ReportBuilder(summarizer)
    report = builder.build_report(ledger)
    timecard = report if raw else builder.timecard(report, style)

    return TimecardResult(
        begin=begin,
        tracked_user=tracked_user,
        stats=stats,
        report=report,
        timecard=timecard,
    )
