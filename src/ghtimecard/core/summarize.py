"""Best-effort calls into a Summarizer."""

import logging

from ghtimecard.ports.summarizer import SummarizationFailure, Summarizer

logger = logging.getLogger(__name__)

REWRITE_ROLE = "You are a BOT that rewrites GitHub Issue and PR descriptions."
REWRITE_INSTRUCTION = "Rewrite description below in couple of lines:\n\n"


def safe_summarize(summarizer: Summarizer, role: str, instruction: str) -> str:
    """
    Call the summarizer, turning any failure into an empty string.

    An empty answer and a raised error are treated the same way: logged and
    replaced with "" so one bad call never sinks the whole report.
    """
    try:
        answer = summarizer.summarize(role, instruction)
        if not answer or not answer.strip():
            raise SummarizationFailure("summarizer returned no content")
        return answer.strip()
    except Exception as e:
        logger.warning(f"Summarization failed: {e}")
        return ""


def condense(summarizer: Summarizer, text: str) -> str:
    """Rewrite an issue/PR/comment body in a couple of lines. Empty text skips the call."""
    if not text.strip():
        return ""
    return safe_summarize(summarizer, REWRITE_ROLE, REWRITE_INSTRUCTION + text)
