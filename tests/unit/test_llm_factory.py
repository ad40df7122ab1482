"""Tests for LlmClientFactory."""

from unittest.mock import patch

import pytest

from medcommittee.config.settings import Settings
from medcommittee.llm.extraction_client import LlmExtractionClient
from medcommittee.llm.factory import LlmClientFactory

ADAPTER = "medcommittee.llm.factory.OpenAIClientAdapter"


class TestLlmClientFactory:
    def test_creates_example_client(self) -> None:
        client = LlmClientFactory.create(Settings(llm_provider="example"))
        assert isinstance(client, LlmExtractionClient)
        assert "ישראל ישראלי" in client.complete("any text")

    def test_uses_openai_settings(self) -> None:
        settings = Settings(
            llm_provider="openai",
            openai_api_key="openai-key",
            llm_model_name="gpt-4o",
            llm_timeout_seconds=42,
        )
        with patch(ADAPTER) as mock_adapter:
            client = LlmClientFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="openai-key",
            timeout_seconds=42,
            base_url=None,
        )
        assert isinstance(client, LlmExtractionClient)

    def test_uses_provider_default_base_url_for_openrouter(self) -> None:
        settings = Settings(llm_provider="openrouter", openai_compatible_api_key="k")
        with patch(ADAPTER) as mock_adapter:
            LlmClientFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="k",
            timeout_seconds=60,
            base_url="https://openrouter.ai/api/v1",
        )

    def test_uses_custom_base_url_for_openai_compatible(self) -> None:
        settings = Settings(
            llm_provider="openai_compatible",
            openai_compatible_base_url="https://example.com/v1",
        )
        with patch(ADAPTER) as mock_adapter:
            LlmClientFactory.create(settings)
        mock_adapter.assert_called_once_with(
            api_key="not-needed",
            timeout_seconds=60,
            base_url="https://example.com/v1",
        )

    def test_openai_compatible_requires_base_url(self) -> None:
        settings = Settings(llm_provider="openai_compatible")
        with pytest.raises(ValueError, match="openai_compatible_base_url"):
            LlmClientFactory.create(settings)

    def test_uses_azure_deployment(self) -> None:
        settings = Settings(
            llm_provider="azure",
            azure_openai_endpoint="https://example.openai.azure.com",
            azure_openai_api_key="azure-key",
            azure_openai_deployment_name="committee-gpt4",
        )
        with patch(ADAPTER) as mock_adapter:
            LlmClientFactory.create(settings)
        mock_adapter.for_azure.assert_called_once_with(
            endpoint="https://example.openai.azure.com",
            api_key="azure-key",
            api_version="2024-02-15-preview",
            timeout_seconds=60,
        )
        mock_adapter.assert_not_called()

    def test_azure_requires_endpoint_and_deployment(self) -> None:
        with pytest.raises(ValueError, match="azure_openai_endpoint"):
            LlmClientFactory.create(Settings(llm_provider="azure"))

    def test_unknown_provider_raises_value_error(self) -> None:
        with pytest.raises(ValueError, match="Unknown LLM provider"):
            LlmClientFactory.create(Settings(llm_provider="unknown"))
