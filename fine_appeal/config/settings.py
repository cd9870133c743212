from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_env: str = "dev"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8000

    max_upload_size_bytes: int = 10 * 1024 * 1024

    pdf_engine: str = "pdfplumber"
    pdf_max_pages: int = 20

    image_max_dimension: int = 1200
    image_jpeg_quality: int = 85
    image_max_pixels: int = 50_000_000

    inference_provider: str = "openai"
    inference_api_key: str = ""
    inference_model_name: str = "gpt-4o-mini"
    inference_base_url: str = ""
    inference_timeout_seconds: int = 30
    inference_temperature: float = Field(default=0.2, ge=0.0, le=2.0)

    pipeline_timeout_seconds: int = 60

    export_title: str = "Appeal Letter"
    export_generator_name: str = "No Más Multas"
