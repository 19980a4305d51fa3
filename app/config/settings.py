from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    pdf_engine: str = "pdfplumber"
    min_text_length: int = 50

    stream_framing: str = "snapshot"

    llm_provider: str = "openrouter"
    llm_temperature: float = 0.0

    llm_openai_api_key: str = ""
    llm_openai_model_name: str = "gpt-4o-mini"
    llm_openai_timeout_seconds: int = 60

    llm_openai_compatible_base_url: str = ""
    llm_openai_compatible_api_key: str = ""
    llm_openai_compatible_model_name: str = ""
    llm_openai_compatible_timeout_seconds: int = 60

    llm_openrouter_api_key: str = ""
    llm_openrouter_model_name: str = "google/gemini-2.5-flash-lite"
    llm_openrouter_timeout_seconds: int = 60

    llm_ollama_api_key: str = "ollama"
    llm_ollama_model_name: str = "llama3.1"
    llm_ollama_timeout_seconds: int = 120

    site_url: str = "https://localhost:3000"
    app_title: str = "Arhiv Parser"
