"""Ports - interfaces/protocols for external dependencies."""

from .event_source import EventSource
from .summarizer import SummarizationFailure, Summarizer

__all__ = [
    "EventSource",
    "SummarizationFailure",
    "Summarizer",
]
