"""Configuration management for the Filestore connector."""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Limits enforced by the Filestore API for a single resumable chunk
MIN_CHUNK_SIZE_MB = 5
MAX_CHUNK_SIZE_MB = 50


class Settings(BaseSettings):
    """Connector settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
    )

    ENV: str = "local"
    SERVICE_NAME: str = "filestore-connector"
    SERVICE_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # Resumable upload
    CHUNK_SIZE_MB: int = Field(default=10, ge=MIN_CHUNK_SIZE_MB, le=MAX_CHUNK_SIZE_MB)
    REQUEST_TIMEOUT: float = 300  # seconds, applied to every Filestore call

    # Attachment materialization
    MAX_ATTACHMENT_MB: int = 1024
    ATTACHMENT_FETCH_ATTEMPTS: int = 3

    @property
    def chunk_size_bytes(self) -> int:
        """Convert CHUNK_SIZE_MB to bytes."""
        return self.CHUNK_SIZE_MB * 1024 * 1024

    @property
    def max_attachment_bytes(self) -> int:
        """Convert MAX_ATTACHMENT_MB to bytes."""
        return self.MAX_ATTACHMENT_MB * 1024 * 1024


# Singleton settings instance
settings = Settings()
