from typing import ClassVar

from medcommittee.config.settings import Settings
from medcommittee.llm.example_client_adapter import ExampleClientAdapter
from medcommittee.llm.extraction_client import LlmExtractionClient
from medcommittee.llm.openai_client_adapter import OpenAIClientAdapter


class LlmClientFactory:
    """Creates the configured LLM extraction client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> LlmExtractionClient:
        provider = settings.llm_provider.lower()
        if provider == "example":
            return LlmExtractionClient(client=ExampleClientAdapter(), model="example")

        if provider == "azure":
            if not settings.azure_openai_endpoint or not settings.azure_openai_deployment_name:
                raise ValueError(
                    "azure_openai_endpoint and azure_openai_deployment_name are required "
                    "for llm_provider=azure"
                )
            client = OpenAIClientAdapter.for_azure(
                endpoint=settings.azure_openai_endpoint,
                api_key=settings.azure_openai_api_key.get_secret_value(),
                api_version=settings.azure_openai_api_version,
                timeout_seconds=settings.llm_timeout_seconds,
            )
            model = settings.azure_openai_deployment_name
        else:
            client = OpenAIClientAdapter(
                api_key=cls._resolve_api_key(provider, settings),
                timeout_seconds=settings.llm_timeout_seconds,
                base_url=cls._resolve_base_url(provider, settings),
            )
            model = settings.llm_model_name

        return LlmExtractionClient(
            client=client,
            model=model,
            temperature=settings.llm_temperature,
            max_tokens=settings.llm_max_tokens,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = settings.openai_compatible_base_url.strip()
            if not url:
                raise ValueError(
                    "openai_compatible_base_url is required for llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "azure",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @staticmethod
    def _resolve_api_key(provider: str, settings: Settings) -> str:
        if provider == "openai":
            return settings.openai_api_key.get_secret_value()
        # openai.OpenAI refuses an empty key even for keyless local servers
        return settings.openai_compatible_api_key.get_secret_value() or "not-needed"
