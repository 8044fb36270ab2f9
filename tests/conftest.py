"""Shared fixtures for the FaceApp client tests."""

import pytest

from faceapp.config import FaceAppSettings
from tests.fakes import API_BASE_URL, SAMPLE_IMAGE_URL, FixedIdentityProvider


@pytest.fixture
def settings() -> FaceAppSettings:
    return FaceAppSettings(
        api_base_url=API_BASE_URL + "/",
        test_image_url=SAMPLE_IMAGE_URL,
    )


@pytest.fixture
def identity() -> FixedIdentityProvider:
    return FixedIdentityProvider()
