import httpx
import pytest

from app.backend import LimsClient, unwrap
from app.core.exceptions import BackendResponseException, BackendUnavailableException

BACKEND_URL = "http://lims.test"


def test_unwrap_envelope_and_raw_payloads():
    assert unwrap({"success": True, "data": [1, 2]}) == [1, 2]
    assert unwrap([{"id": 1}]) == [{"id": 1}]
    assert unwrap({"customer_id": 5}) == {"customer_id": 5}


def test_unwrap_failed_envelope():
    with pytest.raises(BackendResponseException) as exc_info:
        unwrap({"success": False, "error": "Cliente duplicado"})
    assert exc_info.value.detail == "Cliente duplicado"


async def test_get_list_unwraps_envelope(lims, fake_backend):
    fake_backend.on("GET", "/api/customers", {"success": True, "data": [{"customer_id": 1}]})
    assert await lims.get_list("/api/customers") == [{"customer_id": 1}]


async def test_get_list_empty_body_is_empty_list(lims, fake_backend):
    fake_backend.on_call("GET", "/api/samples", lambda request: httpx.Response(200))
    assert await lims.get_list("/api/samples") == []


async def test_client_error_keeps_status_and_message(lims, fake_backend):
    fake_backend.on("POST", "/api/customers", {"error": "Email ya registrado"}, status=400)
    with pytest.raises(BackendResponseException) as exc_info:
        await lims.post("/api/customers", json={})
    assert exc_info.value.status_code == 400
    assert exc_info.value.detail == "Email ya registrado"


async def test_server_error_becomes_bad_gateway(lims, fake_backend):
    fake_backend.on_call(
        "GET", "/api/requests",
        lambda request: httpx.Response(500, text="<html>Internal Server Error</html>"),
    )
    with pytest.raises(BackendResponseException) as exc_info:
        await lims.get("/api/requests")
    assert exc_info.value.status_code == 502
    assert exc_info.value.upstream_status == 500
    assert exc_info.value.detail == "HTTP 500"


async def test_message_field_is_used_when_no_error(lims, fake_backend):
    fake_backend.on("GET", "/api/samples/9", {"message": "Muestra no encontrada"}, status=404)
    with pytest.raises(BackendResponseException) as exc_info:
        await lims.get("/api/samples/9")
    assert exc_info.value.status_code == 404
    assert exc_info.value.detail == "Muestra no encontrada"


async def test_connection_error_is_service_unavailable():
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    async with LimsClient(base_url=BACKEND_URL, transport=httpx.MockTransport(refuse)) as client:
        with pytest.raises(BackendUnavailableException) as exc_info:
            await client.get("/api/customers")
    assert exc_info.value.status_code == 503
    assert BACKEND_URL in exc_info.value.detail


async def test_download_returns_bytes_and_content_type(lims, fake_backend):
    fake_backend.on("GET", "/api/documents/final-report-pdf/3", b"%PDF-1.4 fake")
    content, content_type = await lims.download("/api/documents/final-report-pdf/3")
    assert content.startswith(b"%PDF")
    assert content_type == "application/pdf"
