# backend/pickmypdf/core/config_loader.py

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Provider keys: a missing key degrades that feature to its fallback
    OPENAI_API_KEY: str = ""
    TRIPADVISOR_API_KEY: str = ""
    UNSPLASH_ACCESS_KEY: str = ""

    # Sessions are issued by the hosted auth provider, we only verify them
    JWT_SECRET_KEY: str = "supersecret"
    JWT_ALGORITHM: str = "HS256"
    JWT_AUDIENCE: Optional[str] = None

    DB_PATH: str = "data.sqlite3"

    gpt_model_extract: str = "gpt-4o-mini"
    gpt_model_summary: str = "gpt-4o-mini"

    image_cache_size: int = 512
    hotel_cache_size: int = 256
    builder_cache_size: int = 128

    pdf_viewport_width: int = 420
    pdf_viewport_height: int = 800
    pdf_render_timeout: int = 60
    chrome_binary: Optional[str] = None

    cors_origins: List[str] = ["*"]
    environment: str = "development"

    log_level: str = "DEBUG"
    log_dir: Optional[str] = None
    log_to_file: bool = True

    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
