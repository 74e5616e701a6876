"""Summarizer interface."""

from typing import Protocol


class SummarizationFailure(RuntimeError):
    """Raised when a summarizer produces no usable text."""

    pass


class Summarizer(Protocol):
    """Interface for condensing text with an LLM."""

    def summarize(self, role: str, instruction: str) -> str:
        """Run `instruction` under the system `role`. Returns the answer text."""
        ...
