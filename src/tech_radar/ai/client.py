"""AI collaborator: text generation behind a small async interface."""

from abc import ABC, abstractmethod
from typing import Optional

from google import genai
from google.genai import types
import structlog

from tech_radar.core.config import settings
from tech_radar.core.error_handling import ConfigurationError, ExternalServiceError

logger = structlog.get_logger(__name__)


class TextGenerator(ABC):
    """Produces free-form text for a prompt.

    The returned text is untrusted; callers sanitize and validate it.
    """

    name = "text-generator"

    @abstractmethod
    async def generate(self, prompt: str) -> str:
        """Return the model's text for ``prompt``."""


class GeminiTextGenerator(TextGenerator):
    """Text generator backed by the Google Gemini API."""

    name = "gemini"

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        use_search_grounding: Optional[bool] = None
    ):
        self._api_key = api_key
        self.model = model or settings.gemini_model
        self.use_search_grounding = (
            settings.use_search_grounding if use_search_grounding is None else use_search_grounding
        )
        self._client: Optional[genai.Client] = None

    def _get_api_key(self) -> str:
        key = (self._api_key if self._api_key is not None else settings.gemini_api_key).strip()
        if not key:
            raise ConfigurationError("GEMINI_API_KEY is not set")
        return key

    @property
    def client(self) -> genai.Client:
        """SDK client, created on first use so a missing key only fails jobs."""
        if self._client is None:
            self._client = genai.Client(api_key=self._get_api_key())
        return self._client

    def _build_config(self) -> Optional[types.GenerateContentConfig]:
        if not self.use_search_grounding:
            return None
        return types.GenerateContentConfig(
            tools=[types.Tool(google_search=types.GoogleSearch())]
        )

    async def generate(self, prompt: str) -> str:
        """Call Gemini asynchronously and return the response text.

        Raises:
            ConfigurationError: If no API key is configured
            ExternalServiceError: If the API call fails
        """
        client = self.client

        try:
            response = await client.aio.models.generate_content(
                model=self.model,
                contents=prompt,
                config=self._build_config()
            )
        except Exception as e:
            logger.error(
                "Gemini generate_content call failed",
                model=self.model,
                error=str(e),
                error_type=type(e).__name__
            )
            raise ExternalServiceError(
                f"Gemini request failed: {e}",
                service_name=self.name,
                original_error=e
            )

        return response.text or ""
