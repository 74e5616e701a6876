"""Report assembly - per-item narratives and the final timecard."""

import logging
from enum import Enum

from ghtimecard.ports.summarizer import Summarizer

from .ledger import ActivityLedger, WorkItem
from .summarize import safe_summarize

logger = logging.getLogger(__name__)


class SummaryStyle(Enum):
    """Flavor of the final timecard."""

    EXECUTIVE = "executive"
    TECHNICAL = "technical"
    DETAILED = "detailed"  # executive + technical

    @classmethod
    def parse(cls, value: str) -> "SummaryStyle":
        try:
            return cls(value.lower())
        except ValueError:
            choices = ", ".join(s.value for s in cls)
            raise ValueError(f"Invalid summary type: {value!r} (expected one of: {choices})")


ACTION_SUMMARY_ROLE = """
You will be given a summary of a GitHub Issue or PR and a series of actions made
by me on it. They will be in the form of:

Summary of the issue or PR (check URL string to see if it is an issue or PR)
-
Author: true or false (if I'm the author of the issue or PR)
-
Action: create, edit, delete, etc.
Object: issue, pull request, issue comment, pull request comment/review.
Content: description.
-
...

Your job is to describe what I did in this issue, or pull request, taking into
consideration the issue description AND the series of actions, objects and
description given in the form above.

Note: I'm creating issues and pull requests, but I'm also commenting in other
people's issues and pull requests (and sometimes replying above quoted text).
So, you should be able to differentiate whether I'm the author of the issue or
PR, or if I'm just commenting on it (or reviewing it).
"""

TIMECARD_ROLE = """
You will be given a complete report of all the issues and pull requests I
created or commented on in a certain period of time. The report will be in the
form of:

Issues:
Issue: number (URL) title
Description: summary of what I did in the issue
Issue:
...

Pulls:
PR: number (URL) title
Description: summary of what I did in the pull request
PR:
...
"""

TIMECARD_EXECUTIVE = """
Provide an executive summary of the report below. Don't try to sell yourself,
just provide the facts. Differentiate between features, fixes or chores. The
executive summary should be no more than 3-4 sentences.
"""

TIMECARD_TECHNICAL = """
Provide a technical summary of the report below. Don't try to sell yourself,
just provide the facts. The technical summary should be written in a technical
language. Differentiate between features, fixes, docs, tests, management, ...
Split the technical summary into sections, if needed. Use emojis to
differentiate between sections.
"""


def format_item_instruction(ledger: ActivityLedger, item: WorkItem) -> str:
    """
    Build the summarization request for one work item.

    Pure function - no I/O.
    """
    actions = ledger.actions(item.id)
    lines = [
        f"Summary of #{item.id} ({item.url}) {item.title}\n-\n",
        f"Author: {'true' if item.is_author else 'false'}\n-\n",
        f"Description: {item.description}\n-\n",
        f"Actions: {len(actions)}\n-\n",
    ]
    for action in actions:
        lines.append(
            f"Action: {action.action}\nObject: {action.object.value}\nContent: {action.content}\n-\n"
        )
    return "".join(lines)


def timecard_role(style: SummaryStyle) -> str:
    """System role for the final timecard call."""
    match style:
        case SummaryStyle.EXECUTIVE:
            return TIMECARD_ROLE + TIMECARD_EXECUTIVE
        case SummaryStyle.TECHNICAL:
            return TIMECARD_ROLE + TIMECARD_TECHNICAL
        case SummaryStyle.DETAILED:
            return TIMECARD_ROLE + TIMECARD_EXECUTIVE + TIMECARD_TECHNICAL


class ReportBuilder:
    """
    Walks a ledger and asks the summarizer what happened on each item.

    Calls are sequential, one per work item. A failed call leaves that
    item's narrative empty and the report carries on.
    """

    def __init__(self, summarizer: Summarizer):
        self.summarizer = summarizer

    def summarize_item(self, ledger: ActivityLedger, item: WorkItem) -> str:
        """Narrative of what the tracked user did on one work item."""
        return safe_summarize(
            self.summarizer, ACTION_SUMMARY_ROLE, format_item_instruction(ledger, item)
        )

    def build_report(self, ledger: ActivityLedger) -> str:
        """Per-item narratives grouped under Issues: and Pulls: headings."""
        sections = ["\nIssues:\n\n"]
        for issue in ledger.all_issues():
            logger.info(f"Summarizing issue #{issue.id}")
            narrative = self.summarize_item(ledger, issue)
            sections.append(f"Issue: #{issue.id} ({issue.url}) {issue.title}\n")
            sections.append(f"Description: {narrative}\n")

        sections.append("\nPulls:\n\n")
        for pull in ledger.all_pulls():
            logger.info(f"Summarizing pull request #{pull.id}")
            narrative = self.summarize_item(ledger, pull)
            sections.append(f"PR: #{pull.id} ({pull.url}) {pull.title}\n")
            sections.append(f"Description: {narrative}\n")

        return "".join(sections)

    def timecard(self, report: str, style: SummaryStyle) -> str:
        """Final user-facing summary of an assembled report."""
        return safe_summarize(self.summarizer, timecard_role(style), report)

