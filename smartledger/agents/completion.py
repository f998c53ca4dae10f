"""
Text Completion Clients

The AI provider is hidden behind a one-method interface,
complete(prompt) -> text, so the advisor can be tested with a fake and
the rest of the system never imports the provider SDK.
"""

from abc import ABC, abstractmethod
from typing import Optional

import google.generativeai as genai

from smartledger.config import GeminiSettings, get_settings


class CompletionClient(ABC):
    """Minimal text-completion interface."""

    @abstractmethod
    async def complete(self, prompt: str) -> str:
        """
        Send a prompt and return the generated text.

        Raises:
            Any exception on network or API failure. Callers treat every
            exception as "the service is unavailable".
        """
        pass


class GeminiCompletionClient(CompletionClient):
    """Completion client backed by Google Gemini."""

    def __init__(self, settings: Optional[GeminiSettings] = None):
        self._settings = settings or get_settings().gemini
        self._configure_genai()

    def _configure_genai(self):
        """Configure Google Generative AI."""
        genai.configure(api_key=self._settings.api_key)
        self._model = genai.GenerativeModel(
            model_name=self._settings.model_name,
            generation_config={
                "temperature": self._settings.temperature,
                "max_output_tokens": self._settings.max_tokens,
            }
        )

    async def complete(self, prompt: str) -> str:
        response = await self._model.generate_content_async(prompt)
        return response.text or ""


class CompletionUnavailableError(Exception):
    """No completion service is configured."""
    pass


class UnconfiguredCompletionClient(CompletionClient):
    """
    Stand-in used when no API key is set.

    Every call fails, so the advisor shows its normal failure message
    while the rest of the ledger keeps working.
    """

    def __init__(self, reason: str = "Gemini API key is not configured"):
        self.reason = reason

    async def complete(self, prompt: str) -> str:
        raise CompletionUnavailableError(self.reason)
