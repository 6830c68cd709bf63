"""Application configuration."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings."""

    # Logging
    LOG_LEVEL: str = "WARNING"

    # Preview window
    PREVIEW_ENABLED: bool = True
    PREVIEW_TITLE: str = "pixelchain"

    # Encoding
    JPEG_QUALITY: int = 90  # 0 = worst, 95 = best

    model_config = {"env_prefix": "PIXELCHAIN_"}


settings = Settings()
