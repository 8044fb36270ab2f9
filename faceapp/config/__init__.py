"""Configuration package."""

from faceapp.config.settings import (
    FaceAppSettings,
    Settings,
    get_settings,
)

__all__ = [
    "FaceAppSettings",
    "Settings",
    "get_settings",
]
