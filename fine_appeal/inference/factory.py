from typing import ClassVar

from fine_appeal.config.settings import Settings
from fine_appeal.exceptions import ConfigurationError
from fine_appeal.inference.client_base import BaseInferenceClient
from fine_appeal.inference.example_client_adapter import ExampleClientAdapter
from fine_appeal.inference.openai_client_adapter import OpenAIClientAdapter


class InferenceClientFactory:
    """Creates the configured inference client."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "gemini": "https://generativelanguage.googleapis.com/v1beta/openai/",
        "openrouter": "https://openrouter.ai/api/v1",
        "groq": "https://api.groq.com/openai/v1",
        "together": "https://api.together.xyz/v1",
        "deepseek": "https://api.deepseek.com/v1",
        "ollama": "http://localhost:11434/v1",
    }

    KEYLESS_PROVIDERS: ClassVar[frozenset[str]] = frozenset({"ollama"})

    @classmethod
    def create(cls, settings: Settings) -> BaseInferenceClient:
        """Create a configured inference client from application settings.

        Raises:
            ConfigurationError: if the provider is unknown or credentials are missing.
        """
        provider = settings.inference_provider.strip().lower()
        if provider == "example":
            return ExampleClientAdapter()
        base_url = cls._resolve_base_url(provider, settings)
        api_key = cls._resolve_api_key(provider, settings)
        model = settings.inference_model_name.strip()
        if not model:
            raise ConfigurationError(
                f"inference_model_name is required for inference_provider={provider}"
            )
        return OpenAIClientAdapter(
            api_key=api_key,
            model=model,
            timeout_seconds=settings.inference_timeout_seconds,
            temperature=settings.inference_temperature,
            base_url=base_url,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        override = settings.inference_base_url.strip()
        if provider == "openai":
            return override or None
        if provider == "openai_compatible":
            if not override:
                raise ConfigurationError(
                    "inference_base_url is required for "
                    "inference_provider=openai_compatible"
                )
            return override
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return override or default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ConfigurationError(
            f"Unknown inference provider '{provider}'. Choose from: {supported}"
        )

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key = settings.inference_api_key.strip()
        if key:
            return key
        if provider in cls.KEYLESS_PROVIDERS:
            return provider
        raise ConfigurationError(
            f"Missing API key: set INFERENCE_API_KEY for inference_provider={provider}"
        )
