"""Adapters - I/O implementations of ports."""

from .github_api import GitHubEventsAdapter, AuthenticationError, RateLimitError
from .openai_chat import OpenAIChatSummarizer
from .claude_cli import ClaudeCLISummarizer

__all__ = [
    "GitHubEventsAdapter",
    "AuthenticationError",
    "RateLimitError",
    "OpenAIChatSummarizer",
    "ClaudeCLISummarizer",
]
