"""Device identity package."""

from faceapp.services.identity.device import (
    DeviceIdentityProvider,
    generate_device_id,
)

__all__ = [
    "DeviceIdentityProvider",
    "generate_device_id",
]
