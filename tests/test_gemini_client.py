"""Tests for the Gemini text generator with the SDK mocked out."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from tech_radar.ai.client import GeminiTextGenerator, TextGenerator
from tech_radar.core.error_handling import ConfigurationError, ExternalServiceError


def _mock_sdk_client(response=None, error=None):
    sdk_client = MagicMock()
    sdk_client.aio.models.generate_content = AsyncMock(return_value=response, side_effect=error)
    return sdk_client


class TestGeminiTextGenerator:
    """Gemini request construction and error mapping."""

    def test_is_a_text_generator(self):
        assert isinstance(GeminiTextGenerator(api_key="key"), TextGenerator)

    @pytest.mark.asyncio
    async def test_generate_returns_response_text(self):
        sdk_client = _mock_sdk_client(SimpleNamespace(text='{"a": 1}'))

        with patch("tech_radar.ai.client.genai.Client", return_value=sdk_client) as client_cls:
            generator = GeminiTextGenerator(api_key="key", model="gemini-test", use_search_grounding=False)
            text = await generator.generate("the prompt")

        assert text == '{"a": 1}'
        client_cls.assert_called_once_with(api_key="key")
        sdk_client.aio.models.generate_content.assert_awaited_once_with(
            model="gemini-test", contents="the prompt", config=None
        )

    @pytest.mark.asyncio
    async def test_search_grounding_adds_google_search_tool(self):
        sdk_client = _mock_sdk_client(SimpleNamespace(text="{}"))

        with patch("tech_radar.ai.client.genai.Client", return_value=sdk_client):
            generator = GeminiTextGenerator(api_key="key", use_search_grounding=True)
            await generator.generate("prompt")

        config = sdk_client.aio.models.generate_content.call_args.kwargs["config"]
        assert len(config.tools) == 1
        assert config.tools[0].google_search is not None

    @pytest.mark.asyncio
    async def test_missing_text_becomes_empty_string(self):
        sdk_client = _mock_sdk_client(SimpleNamespace(text=None))

        with patch("tech_radar.ai.client.genai.Client", return_value=sdk_client):
            assert await GeminiTextGenerator(api_key="key").generate("prompt") == ""

    @pytest.mark.asyncio
    async def test_sdk_failure_is_external_service_error(self):
        sdk_client = _mock_sdk_client(error=RuntimeError("quota exceeded"))

        with patch("tech_radar.ai.client.genai.Client", return_value=sdk_client):
            with pytest.raises(ExternalServiceError, match="Gemini request failed: quota exceeded") as exc_info:
                await GeminiTextGenerator(api_key="key").generate("prompt")

        assert exc_info.value.service_name == "gemini"

    @pytest.mark.asyncio
    async def test_missing_key_is_configuration_error(self):
        with patch("tech_radar.ai.client.genai.Client") as client_cls:
            with pytest.raises(ConfigurationError, match="GEMINI_API_KEY is not set"):
                await GeminiTextGenerator(api_key="  ").generate("prompt")

        client_cls.assert_not_called()

    def test_client_is_created_once(self):
        with patch("tech_radar.ai.client.genai.Client") as client_cls:
            generator = GeminiTextGenerator(api_key="key")
            assert generator.client is generator.client

        client_cls.assert_called_once()
