"""
AI Server Settings - Pydantic Settings with .env support

All configuration is loaded from environment variables.
Use .env file for local development.
"""

from typing import Literal
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import AliasChoices, Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # ===== Environment =====
    ENV: Literal["dev", "prod", "test"] = "dev"
    DEBUG: bool = False

    # ===== Server =====
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    # ===== Database (place corpus, read only) =====
    DATABASE_URL: str = "sqlite:///:memory:"

    # ===== Embedding provider (OpenAI-compatible, LM Studio by default) =====
    EMBEDDING_BASE_URL: str = Field(
        default="http://localhost:1234/v1",
        validation_alias=AliasChoices("EMBEDDING_BASE_URL", "LM_STUDIO_BASE_URL"),
    )
    EMBEDDING_API_KEY: str = "not-needed"  # LM Studio ignores the key
    EMBEDDING_MODEL: str = "text-embedding-embeddinggemma-300m-qat"
    EMBEDDING_TIMEOUT_SECONDS: float = Field(default=30.0, gt=0)
    EMBEDDING_MAX_RETRIES: int = Field(default=2, ge=0)

    # ===== Embedding index =====
    EMBEDDINGS_PATH: str = "embeddings.json"

    # ===== Search =====
    DEFAULT_TOP_K: int = Field(default=3, ge=1)
    MAX_TOP_K: int = Field(default=50, ge=1)
    RANK_OFFLOAD_THRESHOLD: int = Field(default=2000, ge=1)  # records

    # ===== Logging =====
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    LOG_FORMAT: Literal["json", "text"] = "text"

    # ===== Helper Methods =====

    @property
    def is_api_key_configured(self) -> bool:
        """Check if a real provider key is set."""
        return bool(self.EMBEDDING_API_KEY and self.EMBEDDING_API_KEY != "not-needed")

    def get_public_settings(self) -> dict:
        """Get settings safe to expose via API (no secrets)."""
        return {
            "env": self.ENV,
            "debug": self.DEBUG,
            "embedding_base_url": self.EMBEDDING_BASE_URL,
            "embedding_model": self.EMBEDDING_MODEL,
            "embedding_timeout_seconds": self.EMBEDDING_TIMEOUT_SECONDS,
            "embeddings_path": self.EMBEDDINGS_PATH,
            "default_top_k": self.DEFAULT_TOP_K,
            "max_top_k": self.MAX_TOP_K,
            "api_key_configured": self.is_api_key_configured,
        }


# Global settings instance
settings = Settings()
