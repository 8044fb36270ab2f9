"""
Configuration Management for the FaceApp client

Uses pydantic-settings for type-safe configuration from environment variables.

The remote endpoints are process-wide constants. They are exposed as
settings so tests and self-hosted mirrors can override them, but every
default reproduces the public FaceApp service exactly.
"""

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class FaceAppSettings(BaseSettings):
    """FaceApp remote service configuration."""

    model_config = SettingsConfigDict(
        env_prefix="FACEAPP_",
        extra="ignore",
        frozen=True,
    )

    api_base_url: str = Field(
        default="https://node-03.faceapp.io",
        description="Base URL of the FaceApp API node"
    )
    api_version: str = Field(
        default="v2.11",
        description="API version segment used in every endpoint path"
    )
    api_user_agent: str = Field(
        default="FaceApp/1.0.229 (Linux; Android 4.4)",
        description="Client identity sent as the User-Agent header"
    )
    test_image_url: str = Field(
        default="https://i.imgur.com/nVsxMNp.jpg",
        description="Sample face photo used to enumerate available filters"
    )
    upload_filename: str = Field(
        default="image.png",
        description="Filename attached to the multipart upload"
    )
    request_timeout_seconds: float = Field(
        default=30.0,
        ge=1.0,
        le=300.0,
        description="Timeout applied to every outbound request"
    )

    @field_validator('api_base_url')
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    @property
    def photos_url(self) -> str:
        """Upload endpoint for new photos."""
        return f"{self.api_base_url}/api/{self.api_version}/photos"

    def filter_url(self, code: str, filter_id: str) -> str:
        """Rendering endpoint for one filter applied to an uploaded photo."""
        return f"{self.photos_url}/{code}/filters/{filter_id}"


class Settings(BaseSettings):
    """
    Root settings container.

    Sub-settings are built lazily so a missing or invalid environment
    only fails when that section is actually used.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    @property
    def faceapp(self) -> FaceAppSettings:
        return FaceAppSettings()


@lru_cache()
def get_settings() -> Settings:
    """
    Get application settings (cached).

    Call get_settings.cache_clear() to reload if needed.
    """
    return Settings()
