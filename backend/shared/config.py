"""Global configuration for the PDF boundary splitter."""

from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""
    
    # Application
    app_name: str = "pdf-boundary-splitter"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    log_file: Optional[Path] = None
    
    # External page-cutting tool
    qpdf_binary: str = "qpdf"
    qpdf_timeout_seconds: Optional[float] = None
    
    # Split working area
    temp_dir: Optional[Path] = None  # None = system temp
    temp_prefix: str = "pdf-split-"
    
    # Performance
    split_max_workers: int = 1  # 1 = sequential
    
    model_config = SettingsConfigDict(
        env_prefix="PDF_SPLITTER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """Return the cached settings instance."""
    return Settings()


# Global settings instance
settings = get_settings()
