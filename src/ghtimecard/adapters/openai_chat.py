"""OpenAI chat completions adapter."""

import logging

import requests

from ghtimecard.ports.summarizer import SummarizationFailure

logger = logging.getLogger(__name__)

API_URL = "https://api.openai.com/v1/chat/completions"


class OpenAIChatSummarizer:
    """
    OpenAI chat completions adapter.

    Implements Summarizer protocol. The role goes in as the system message,
    the instruction as the user message.
    """

    def __init__(
        self,
        token: str,
        model: str = "gpt-4",
        temperature: float = 0.2,
        max_tokens: int = 180,
        timeout: int = 60,
        session: requests.Session | None = None,
    ):
        if not token:
            raise SummarizationFailure("No OpenAI token. Export OPENAI_TOKEN or add it to ghtimecard.conf.")
        self.token = token
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.timeout = timeout
        self._session = session or requests.Session()

    def summarize(self, role: str, instruction: str) -> str:
        """Run one chat completion. Returns the assistant message text."""
        try:
            resp = self._session.post(
                API_URL,
                headers={"Authorization": f"Bearer {self.token}"},
                json={
                    "model": self.model,
                    "messages": [
                        {"role": "system", "content": role},
                        {"role": "user", "content": instruction},
                    ],
                    "temperature": self.temperature,
                    "max_tokens": self.max_tokens,
                },
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise SummarizationFailure(f"OpenAI request failed: {e}") from e

        if resp.status_code != 200:
            logger.error(f"OpenAI request failed: {resp.status_code} {resp.text}")
            raise SummarizationFailure(f"OpenAI request failed: {resp.status_code}")

        try:
            return resp.json()["choices"][0]["message"]["content"] or ""
        except (ValueError, KeyError, IndexError, TypeError) as e:
            raise SummarizationFailure(f"Unexpected OpenAI response: {e}") from e
