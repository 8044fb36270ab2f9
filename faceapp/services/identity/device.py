"""Device identifiers sent with every FaceApp API request."""

import secrets


def generate_device_id() -> str:
    """Return a fresh random device identifier (16 hex characters)."""
    return secrets.token_hex(8)


class DeviceIdentityProvider:
    """
    Produces one device identifier per top-level operation.

    The server ties an upload to the device that sent it, so the same
    identifier must accompany every request about that upload.
    """

    def generate_device_id(self) -> str:
        return generate_device_id()
