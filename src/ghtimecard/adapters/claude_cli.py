"""Claude CLI adapter - subprocess wrapper for Claude Code."""

import logging
import subprocess

from ghtimecard.ports.summarizer import SummarizationFailure

logger = logging.getLogger(__name__)


class ClaudeCLISummarizer:
    """
    Claude CLI subprocess adapter.

    Implements Summarizer protocol. Wraps the claude CLI tool; the role is
    passed as the system prompt and the instruction on stdin.
    """

    def __init__(self, binary: str = "claude", timeout: int = 300):
        self.binary = binary
        self.timeout = timeout

    def summarize(self, role: str, instruction: str) -> str:
        """Run one prompt. Returns the CLI's stdout."""
        try:
            proc = subprocess.run(
                [self.binary, "-p", "--system-prompt", role],
                input=instruction,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
            if proc.returncode != 0:
                logger.error(f"Claude CLI failed: {proc.stderr}")
                raise SummarizationFailure(f"Claude CLI failed: {proc.stderr}")
            return proc.stdout
        except FileNotFoundError:
            raise SummarizationFailure("Claude CLI not found. Install with: npm install -g @anthropic-ai/claude-code")
        except subprocess.TimeoutExpired:
            raise SummarizationFailure(f"Claude CLI timed out after {self.timeout}s")
