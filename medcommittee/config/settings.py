from pathlib import Path

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    pdf_engine: str = "pdfplumber"
    native_max_pages: int = 10
    native_min_chars: int = 50

    ocr_provider: str = "google_vision"
    ocr_max_pages: int = 3
    ocr_min_chars: int = 30
    ocr_page_min_chars: int = 10
    ocr_render_scale: float = 2.0
    ocr_language_hints: list[str] = ["he", "en"]
    google_vision_api_key: SecretStr = SecretStr("")
    google_vision_endpoint: str = "https://vision.googleapis.com/v1/images:annotate"
    google_vision_timeout_seconds: int = 30
    tesseract_languages: str = "heb+eng"

    byte_pattern_min_chars: int = 100
    byte_pattern_max_fragments: int = 50

    readability_threshold: float = 30.0
    prompt_max_chars: int = 15000

    llm_provider: str = "openai"
    llm_model_name: str = "gpt-4o-mini"
    llm_temperature: float = 0.0
    llm_timeout_seconds: int = 60
    llm_max_tokens: int = 4000
    openai_api_key: SecretStr = SecretStr("")
    openai_compatible_base_url: str = ""
    openai_compatible_api_key: SecretStr = SecretStr("")
    azure_openai_endpoint: str = ""
    azure_openai_api_key: SecretStr = SecretStr("")
    azure_openai_deployment_name: str = ""
    azure_openai_api_version: str = "2024-02-15-preview"

    vision_fallback_enabled: bool = False
    vision_max_pages: int = 3

    max_concurrent_documents: int = 4
    export_dir: Path = Path("exports")
