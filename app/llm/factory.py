from typing import ClassVar

from app.config.settings import Settings
from app.llm.base import BaseRecordStreamer
from app.llm.example_client_adapter import ExampleClientAdapter
from app.llm.openai_client_adapter import OpenAIClientAdapter
from app.llm.streamer import RecordStreamer
from app.streaming.sse import Framing


class RecordStreamerFactory:
    """Creates the configured record streamer."""

    OPENAI_COMPATIBLE_BASE_URLS: ClassVar[dict[str, str]] = {
        "openrouter": "https://openrouter.ai/api/v1",
        "ollama": "http://localhost:11434/v1",
    }

    @classmethod
    def create(cls, settings: Settings) -> BaseRecordStreamer:
        """Create a configured record streamer from application settings."""
        provider = settings.llm_provider.lower()
        framing = cls._resolve_framing(settings)
        if provider == "example":
            return RecordStreamer(
                client=ExampleClientAdapter(),
                model="example",
                temperature=0.0,
                framing=framing,
            )
        client = OpenAIClientAdapter(
            api_key=cls._resolve_api_key(provider, settings),
            timeout_seconds=cls._resolve_timeout_seconds(provider, settings),
            base_url=cls._resolve_base_url(provider, settings),
            default_headers=cls._resolve_headers(provider, settings),
        )
        return RecordStreamer(
            client=client,
            model=cls._resolve_model_name(provider, settings),
            temperature=settings.llm_temperature,
            framing=framing,
        )

    @classmethod
    def _resolve_base_url(cls, provider: str, settings: Settings) -> str | None:
        if provider == "openai":
            return None
        if provider == "openai_compatible":
            url = (settings.llm_openai_compatible_base_url or "").strip()
            if not url:
                raise ValueError(
                    "llm_openai_compatible_base_url is required for "
                    "llm_provider=openai_compatible"
                )
            return url
        default_base_url = cls.OPENAI_COMPATIBLE_BASE_URLS.get(provider)
        if default_base_url is not None:
            return default_base_url
        supported = [
            "example",
            "openai",
            "openai_compatible",
            *sorted(cls.OPENAI_COMPATIBLE_BASE_URLS),
        ]
        raise ValueError(f"Unknown LLM provider '{provider}'. Choose from: {supported}")

    @classmethod
    def _resolve_api_key(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.llm_openai_api_key,
            "openai_compatible": settings.llm_openai_compatible_api_key,
            "openrouter": settings.llm_openrouter_api_key,
            "ollama": settings.llm_ollama_api_key,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_model_name(cls, provider: str, settings: Settings) -> str:
        key_map = {
            "openai": settings.llm_openai_model_name,
            "openai_compatible": settings.llm_openai_compatible_model_name,
            "openrouter": settings.llm_openrouter_model_name,
            "ollama": settings.llm_ollama_model_name,
        }
        return key_map.get(provider, "") or ""

    @classmethod
    def _resolve_timeout_seconds(cls, provider: str, settings: Settings) -> int:
        key_map = {
            "openai": settings.llm_openai_timeout_seconds,
            "openai_compatible": settings.llm_openai_compatible_timeout_seconds,
            "openrouter": settings.llm_openrouter_timeout_seconds,
            "ollama": settings.llm_ollama_timeout_seconds,
        }
        return key_map.get(provider, 60) or 60

    @classmethod
    def _resolve_headers(cls, provider: str, settings: Settings) -> dict[str, str] | None:
        if provider != "openrouter":
            return None
        return {"HTTP-Referer": settings.site_url, "X-Title": settings.app_title}

    @classmethod
    def _resolve_framing(cls, settings: Settings) -> Framing:
        try:
            return Framing(settings.stream_framing.lower())
        except ValueError as exc:
            raise ValueError(
                f"Unknown stream framing '{settings.stream_framing}'. "
                f"Choose from: {[f.value for f in Framing]}"
            ) from exc
