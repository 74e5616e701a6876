"""Event source interface."""

from typing import Iterator, Protocol


class EventSource(Protocol):
    """Interface for reading a user's activity feed."""

    def authenticated_user(self) -> str:
        """Login of the user the credentials belong to."""
        ...

    def iter_events(self, username: str) -> Iterator[dict]:
        """Yield raw events newest-first, fetching pages lazily."""
        ...
