"""
Flow tests for process() and list_filters()

The fake service stands in for both the FaceApp API and the sample
image host, so every request of a flow can be inspected.
"""

import json

import pytest

import faceapp
from faceapp.audit import AuditLogger
from faceapp.models.audit import AuditEvent, AuditEventType
from faceapp.orchestrator import FaceAppClient, translate_remote_error
from faceapp.services.api import (
    DEVICE_ID_HEADER,
    InvalidFilterError,
    MalformedResponseError,
    NoFacesDetectedError,
    RemoteServiceError,
)
from tests.fakes import SAMPLE_IMAGE_URL, FakeFaceAppService


class RecordingAuditLogger(AuditLogger):
    """Keeps every logged event in memory."""

    def __init__(self):
        super().__init__()
        self.events: list[AuditEvent] = []

    def log(self, event: AuditEvent) -> None:
        self.events.append(event)
        super().log(event)

    @property
    def event_types(self) -> list[AuditEventType]:
        return [e.event_type for e in self.events]


class FailingAuditLogger(AuditLogger):
    """Raises on every write, like a broken log handler."""

    def __init__(self):
        super().__init__()
        self.attempts = 0

    def log(self, event: AuditEvent) -> None:
        self.attempts += 1
        raise RuntimeError("log handler unavailable")


def _client(service, settings, identity=None, audit_logger=None) -> FaceAppClient:
    return FaceAppClient(
        settings=settings,
        http_client=service.http_client(),
        identity_provider=identity,
        audit_logger=audit_logger,
    )


class TestTranslateRemoteError:
    """Tests for the service error code mapping."""

    def test_known_codes(self):
        no_faces = RemoteServiceError("x", 400, b'{"err": {"code": "photo_no_faces"}}')
        bad_filter = RemoteServiceError("x", 400, b'{"err": {"code": "bad_filter_id"}}')

        assert isinstance(translate_remote_error(no_faces), NoFacesDetectedError)
        assert str(translate_remote_error(no_faces)) == "No Faces found in Photo"
        assert isinstance(translate_remote_error(bad_filter), InvalidFilterError)
        assert str(translate_remote_error(bad_filter)) == "Invalid Filter ID"

    def test_only_400_is_translated(self):
        error = RemoteServiceError("x", 500, b'{"err": {"code": "photo_no_faces"}}')
        assert translate_remote_error(error) is None

    def test_unknown_code_is_not_translated(self):
        assert translate_remote_error(
            RemoteServiceError("x", 400, b'{"err": {"code": "photo_too_big"}}')
        ) is None
        assert translate_remote_error(RemoteServiceError("x", 400, b"{}")) is None


class TestProcessFlow:
    """Tests for the end-to-end process flow."""

    @pytest.mark.asyncio
    async def test_process_returns_filtered_image(self, settings, identity):
        service = FakeFaceAppService()
        audit = RecordingAuditLogger()

        async with _client(service, settings, identity, audit) as client:
            image = await client.process(b"image-bytes", "female_2")

        assert image == b"filtered-image-bytes"
        post, get = service.requests
        assert post.method == "POST"
        assert get.method == "GET"
        assert get.headers[DEVICE_ID_HEADER] == post.headers[DEVICE_ID_HEADER]
        assert get.url.params["cropped"] == "1"
        assert audit.event_types == [
            AuditEventType.CATALOG_RECEIVED,
            AuditEventType.FILTER_IMAGE_RECEIVED,
        ]
        assert len({e.correlation_id for e in audit.events}) == 1

    @pytest.mark.asyncio
    async def test_process_defaults_to_no_filter(self, settings, identity):
        service = FakeFaceAppService()
        async with _client(service, settings, identity) as client:
            await client.process(b"image-bytes")

        assert service.requests[-1].url.path.endswith("/filters/no-filter")

    @pytest.mark.asyncio
    async def test_explicit_none_filter_uses_default(self, settings, identity):
        service = FakeFaceAppService()
        async with _client(service, settings, identity) as client:
            image = await client.process(b"image-bytes", None)

        assert image == b"filtered-image-bytes"
        assert service.requests[-1].url.path.endswith("/filters/no-filter")

    @pytest.mark.asyncio
    async def test_no_faces_is_translated(self, settings, identity):
        service = FakeFaceAppService(
            upload_status=400,
            upload_body={"err": {"code": "photo_no_faces"}},
        )
        audit = RecordingAuditLogger()

        async with _client(service, settings, identity, audit) as client:
            with pytest.raises(NoFacesDetectedError, match="No Faces found in Photo") as exc_info:
                await client.process(b"landscape")

        assert isinstance(exc_info.value.__cause__, RemoteServiceError)
        assert audit.event_types == [
            AuditEventType.REMOTE_SERVICE_ERROR,
            AuditEventType.ERROR_TRANSLATED,
        ]

    @pytest.mark.asyncio
    async def test_bad_filter_id_is_translated(self, settings, identity):
        service = FakeFaceAppService(
            filter_status=400,
            filter_body={"err": {"code": "bad_filter_id"}},
        )
        async with _client(service, settings, identity) as client:
            with pytest.raises(InvalidFilterError, match="Invalid Filter ID"):
                await client.process(b"image-bytes", "female_2")

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {"err": {"code": "photo_bad_type"}},
        {"err": {}},
        b"Bad Request",
    ])
    async def test_unknown_400_propagates_unchanged(self, settings, identity, body):
        service = FakeFaceAppService(upload_status=400, upload_body=body)
        async with _client(service, settings, identity) as client:
            with pytest.raises(RemoteServiceError) as exc_info:
                await client.process(b"image-bytes")

        expected_body = body if isinstance(body, bytes) else json.dumps(body).encode()
        assert type(exc_info.value) is RemoteServiceError
        assert exc_info.value.status_code == 400
        assert exc_info.value.body == expected_body

    @pytest.mark.asyncio
    async def test_other_status_propagates_unchanged(self, settings, identity):
        service = FakeFaceAppService(
            upload_status=500,
            upload_body={"err": {"code": "photo_no_faces"}},
        )
        async with _client(service, settings, identity) as client:
            with pytest.raises(RemoteServiceError) as exc_info:
                await client.process(b"image-bytes")

        assert exc_info.value.status_code == 500
        assert exc_info.value.error_code == "photo_no_faces"

    @pytest.mark.asyncio
    async def test_local_invalid_filter_propagates(self, settings, identity):
        service = FakeFaceAppService()
        audit = RecordingAuditLogger()

        async with _client(service, settings, identity, audit) as client:
            with pytest.raises(InvalidFilterError) as exc_info:
                await client.process(b"image-bytes", "bogus")

        assert exc_info.value.available_filters == ["no-filter", "female_2"]
        assert service.requests_to("GET") == []
        assert audit.event_types[-1] == AuditEventType.FILTER_REJECTED

    @pytest.mark.asyncio
    async def test_long_unknown_filter_id_still_raises_invalid_filter(self, settings, identity):
        """Test that an oversized filter ID does not break audit logging."""
        long_id = "x" * 600
        service = FakeFaceAppService()
        audit = RecordingAuditLogger()

        async with _client(service, settings, identity, audit) as client:
            with pytest.raises(InvalidFilterError):
                await client.process(b"image-bytes", long_id)

        rejected = audit.events[-1]
        assert rejected.event_type == AuditEventType.FILTER_REJECTED
        assert rejected.details["filter_id"] == long_id
        assert len(rejected.description) <= 500

    @pytest.mark.asyncio
    async def test_audit_failure_keeps_rendered_image(self, settings, identity):
        """Test that a failing audit sink never discards the result."""
        service = FakeFaceAppService()
        audit = FailingAuditLogger()

        async with _client(service, settings, identity, audit) as client:
            image = await client.process(b"image-bytes", "female_2")

        assert image == b"filtered-image-bytes"
        assert audit.attempts == 2

    @pytest.mark.asyncio
    async def test_malformed_response_propagates(self, settings, identity):
        service = FakeFaceAppService(upload_body={"code": "abc", "objects": []})
        async with _client(service, settings, identity) as client:
            with pytest.raises(MalformedResponseError):
                await client.process(b"image-bytes")


class TestFilterListingFlow:
    """Tests for listing filters with the sample photo."""

    @pytest.mark.asyncio
    async def test_list_filters_full(self, settings, identity):
        service = FakeFaceAppService()
        async with _client(service, settings, identity) as client:
            filters = await client.list_filters()

        assert [f.id for f in filters] == ["no-filter", "female_2"]
        assert filters[1].cropped is True

        sample_request, upload_request = service.requests
        assert str(sample_request.url) == SAMPLE_IMAGE_URL
        assert b"sample-image-bytes" in upload_request.content

    @pytest.mark.asyncio
    async def test_minimal_matches_full_ids(self, settings, identity):
        service = FakeFaceAppService()
        async with _client(service, settings, identity) as client:
            full = await client.list_filters()
            minimal = await client.list_filters(minimal=True)

        assert minimal == [f.id for f in full]

    @pytest.mark.asyncio
    async def test_sample_download_failure_propagates(self, settings, identity):
        service = FakeFaceAppService(sample_status=404)
        async with _client(service, settings, identity) as client:
            with pytest.raises(RemoteServiceError) as exc_info:
                await client.list_filters()

        assert exc_info.value.status_code == 404
        assert service.requests_to("POST") == []

    @pytest.mark.asyncio
    async def test_no_faces_is_not_translated(self, settings, identity):
        service = FakeFaceAppService(
            upload_status=400,
            upload_body={"err": {"code": "photo_no_faces"}},
        )
        async with _client(service, settings, identity) as client:
            with pytest.raises(RemoteServiceError) as exc_info:
                await client.list_filters()

        assert type(exc_info.value) is RemoteServiceError


class TestFaceAppClient:
    """Tests for client lifecycle and the module-level API."""

    @pytest.mark.asyncio
    async def test_external_http_client_stays_open(self, settings):
        service = FakeFaceAppService()
        http_client = service.http_client()

        async with FaceAppClient(settings=settings, http_client=http_client):
            pass

        assert not http_client.is_closed
        await http_client.aclose()

    @pytest.mark.asyncio
    async def test_owned_http_client_is_closed(self, settings):
        client = FaceAppClient(settings=settings)
        await client.aclose()
        assert client._http_client.is_closed

    @pytest.mark.asyncio
    async def test_module_level_process(self, monkeypatch, settings):
        service = FakeFaceAppService()
        real_client = FaceAppClient

        def client_factory():
            return real_client(settings=settings, http_client=service.http_client())

        monkeypatch.setattr("faceapp.orchestrator.FaceAppClient", client_factory)

        assert await faceapp.process(b"image-bytes") == b"filtered-image-bytes"
        assert await faceapp.list_filters(minimal=True) == ["no-filter", "female_2"]
