"""
Application Configuration

Uses Pydantic Settings for type-safe configuration.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, field_validator, ConfigDict


class Settings(BaseSettings):
    """Application settings with validation."""

    # === Core ===
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: str = Field(default="INFO", description="Logging level")

    # === CORS ===
    cors_origins: List[str] = Field(
        default_factory=lambda: ["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins"
    )

    # === Combine ===
    min_files: int = Field(
        default=2,
        ge=2,
        description="Minimum number of files a combine run accepts"
    )
    max_file_size_mb: int = Field(
        default=20,
        description="Upload size limit per file"
    )
    file_encoding: str = Field(
        default="utf-8",
        description="Text encoding for GPX files that declare none"
    )

    # === Output ===
    output_filename: str = Field(default="combined.gpx")
    output_media_type: str = Field(default="application/gpx+xml")
    gpx_creator: str = Field(
        default="gpx-combine",
        description="Value of the creator attribute in combined documents"
    )

    @field_validator('cors_origins', mode='before')
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS origins from comma-separated string."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(',')]
        return v

    @property
    def max_file_size_bytes(self) -> int:
        return self.max_file_size_mb * 1024 * 1024

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Global settings instance
settings = Settings()
