"""GitHub REST adapter - HTTP client for the user events feed."""

import logging
from typing import Iterator

import requests

logger = logging.getLogger(__name__)

API_BASE = "https://api.github.com"
PER_PAGE = 100


class AuthenticationError(Exception):
    """Raised when GitHub rejects or is missing credentials."""

    pass


class RateLimitError(RuntimeError):
    """Raised when GitHub's rate limit blocks further requests."""

    pass


class GitHubEventsAdapter:
    """
    GitHub events API adapter.

    Implements EventSource protocol. Handles authentication headers and
    pagination. No business logic - just I/O.
    """

    def __init__(
        self,
        token: str,
        timeout: int = 60,
        max_pages: int | None = None,
        session: requests.Session | None = None,
    ):
        if not token:
            raise AuthenticationError("No GitHub token. Export GITHUB_TOKEN or add it to ghtimecard.conf.")
        self.timeout = timeout
        self.max_pages = max_pages
        self._session = session or requests.Session()
        self._session.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Accept": "application/vnd.github+json",
                "X-GitHub-Api-Version": "2022-11-28",
            }
        )

    def _get(self, url: str, params: dict | None = None) -> requests.Response:
        """Make authenticated API request."""
        resp = self._session.get(url, params=params, timeout=self.timeout)
        if resp.status_code in (403, 429) and resp.headers.get("X-RateLimit-Remaining") == "0":
            reset = resp.headers.get("X-RateLimit-Reset", "unknown")
            raise RateLimitError(f"GitHub API rate limit exceeded; remaining=0; reset_at={reset}")
        if resp.status_code in (401, 403):
            raise AuthenticationError(f"GitHub rejected the token ({resp.status_code}): {resp.text}")
        resp.raise_for_status()
        return resp

    def authenticated_user(self) -> str:
        """Login of the token's owner."""
        return self._get(f"{API_BASE}/user").json()["login"]

    def iter_pages(self, username: str) -> Iterator[list[dict]]:
        """Yield pages of raw events, newest first, following Link headers."""
        url = f"{API_BASE}/users/{username}/events"
        params: dict | None = {"per_page": PER_PAGE}
        page = 1

        while url:
            logger.info(f"Fetching events... page {page}")
            resp = self._get(url, params)
            yield resp.json()

            if self.max_pages and page >= self.max_pages:
                return
            # The next link already carries the query string
            url = resp.links.get("next", {}).get("url")
            params = None
            page += 1

    def iter_events(self, username: str) -> Iterator[dict]:
        """Yield raw events newest-first, fetching pages lazily."""
        for events in self.iter_pages(username):
            yield from events
