"""
Endpoints HTTP de la API v1 con el backend LIMS simulado.
"""

import httpx
import pytest

API = "/api/v1"


async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "backend_url" in data


async def test_list_samples(client, fake_backend, sample_rows, sample_type_rows):
    fake_backend.on("GET", "/api/samples", {"success": True, "data": sample_rows})
    fake_backend.on("GET", "/api/sample-types", sample_type_rows)

    response = await client.get(f"{API}/samples", params={"selected": [2, 4]})

    assert response.status_code == 200
    data = response.json()
    assert [s["sample_id"] for s in data["items"]] == [4, 3, 2, 1]
    archived = data["items"][1]["classification"]
    assert archived["is_archived"] is True
    assert archived["actions"] == ["restore"]
    cards = data["summary"]["cards"]
    assert [c["title"] for c in cards] == ["Total Muestras", "Analizadas", "Pendientes", "Seleccionadas"]
    assert [c["value"] for c in cards] == [3, 1, 2, 2]


async def test_stale_selection_is_cleared(client, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/samples", sample_rows)

    response = await client.get(f"{API}/samples", params={"selected": [99]})

    assert response.json()["summary"]["selected"] == 0


async def test_mark_archived_sample_as_analyzed_conflict(client, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/samples/3", sample_rows[2])

    response = await client.patch(f"{API}/samples/3/analyzed")

    assert response.status_code == 409


async def test_cancel_request_requires_reason(client, fake_backend):
    response = await client.patch(f"{API}/requests/10/cancel", json={"reason": ""})

    assert response.status_code == 422
    assert response.json()["detail"] == "Debe indicar el motivo de la cancelación"
    assert fake_backend.calls == []


async def test_cart_rejects_non_numeric_quantity(client, fake_backend, service_type_rows):
    fake_backend.on("GET", "/api/service-types", service_type_rows)

    response = await client.post(
        f"{API}/requests/cart/items", json={"items": [], "service_type_id": 1, "quantity": "abc"}
    )

    assert response.status_code == 422
    assert response.json()["detail"] == "Ingrese una cantidad válida"


async def test_cart_remove_reenables_option(client, fake_backend, service_type_rows):
    fake_backend.on("GET", "/api/service-types", service_type_rows)
    items = [{"service_type_id": 1, "service_name": "Servicio 1", "quantity": 1}]

    response = await client.post(f"{API}/requests/cart/items/1/remove", json={"items": items})

    data = response.json()
    assert data["count"] == 0
    assert not any(o["disabled"] for o in data["options"])
    assert fake_backend.calls_to("POST", "/api/requests") == []


async def test_backend_down_is_service_unavailable(client, fake_backend):
    def refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("Connection refused", request=request)

    fake_backend.on_call("GET", "/api/customers", refuse)

    response = await client.get(f"{API}/clients")

    assert response.status_code == 503
    assert "No se puede conectar al servidor" in response.json()["detail"]


async def test_backend_client_error_is_propagated(client, fake_backend):
    fake_backend.on("GET", "/api/customers/77", {"error": "Cliente no encontrado"}, status=404)

    response = await client.get(f"{API}/clients/77")

    assert response.status_code == 404
    assert response.json()["detail"] == "Cliente no encontrado"


async def test_invalid_phone_never_reaches_backend(client, fake_backend):
    payload = {
        "name": "Ana",
        "surname": "Quispe",
        "email": "ana@example.com",
        "phone_number": "812345678",
        "address": {"street": "Av. Lima 1", "department": "Lima", "province": "Lima", "district": "Lima"},
    }

    response = await client.post(f"{API}/clients", json=payload)

    assert response.status_code == 422
    assert fake_backend.calls == []


async def test_dashboard_with_failing_source(client, fake_backend, customer_rows, sample_rows):
    fake_backend.on("GET", "/api/customers", customer_rows)
    fake_backend.on("GET", "/api/samples", sample_rows)
    fake_backend.on("GET", "/api/requests", {"error": "Oracle caído"}, status=500)
    fake_backend.on("GET", "/api/analysis-results", [])

    response = await client.get(f"{API}/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["stats"]["requests_total"] == 0
    assert data["stats"]["clients_inactive"] == 1
    assert len(data["recent_activity"]) == 4


async def test_entity_summary(client, fake_backend, result_rows):
    fake_backend.on("GET", "/api/analysis-results", result_rows)

    response = await client.get(f"{API}/dashboard/summary/results", params={"selected": [100]})

    data = response.json()
    assert data["counters"]["total"] == 2
    assert data["counters"]["deleted"] == 1
    assert data["cards"][-1]["value"] == 1


async def test_export_clients_csv(client, fake_backend, customer_rows):
    fake_backend.on("GET", "/api/customers", customer_rows)

    response = await client.get(f"{API}/clients/export/csv", params={"state": "I"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert 'filename="clientes_' in response.headers["content-disposition"]
    assert response.text.splitlines()[1].startswith("2,Luis")


async def test_final_report_pdf_named_after_sample_code(client, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/documents/final-report-pdf/1", b"%PDF-1.4 informe")
    fake_backend.on("GET", "/api/samples/1", sample_rows[0])

    response = await client.get(f"{API}/documents/final-report/1/pdf")

    assert response.status_code == 200
    assert response.content.startswith(b"%PDF")
    assert 'filename="reporte_final_M-001.pdf"' in response.headers["content-disposition"]


async def test_clients_by_state(client, fake_backend, customer_rows):
    fake_backend.on("GET", "/api/customers/estado/I", [customer_rows[1]])

    response = await client.get(f"{API}/clients/state/I")

    assert response.status_code == 200
    rows = response.json()
    assert rows[0]["state_label"] == "Inactivo"
    assert rows[0]["actions"] == ["view", "restore"]


def _lines(*pairs):
    return [
        {"service_type_id": sid, "service_name": f"Servicio {sid}", "quantity": qty}
        for sid, qty in pairs
    ]


@pytest.mark.parametrize(
    "items",
    [
        _lines(*[(i, 1) for i in range(1, 7)]),
        _lines((1, 1), (1, 2)),
        _lines((1, 0)),
        _lines((1, 9)),
    ],
    ids=["six-services", "duplicate", "zero-quantity", "quantity-over-max"],
)
async def test_create_request_rechecks_cart(client, fake_backend, items):
    response = await client.post(f"{API}/requests", json={"customer_id": 1, "items": items})

    assert response.status_code == 422
    assert fake_backend.calls == []


async def test_report_filename_with_quotes_and_accents(client, fake_backend, sample_rows):
    row = {**sample_rows[0], "sample_code": 'M"Ñ-01'}
    fake_backend.on("GET", "/api/documents/final-report-pdf/1", b"%PDF-1.4 informe")
    fake_backend.on("GET", "/api/samples/1", row)

    response = await client.get(f"{API}/documents/final-report/1/pdf")

    disposition = response.headers["content-disposition"]
    assert 'filename="reporte_final_M-01.pdf"' in disposition
    assert "filename*=UTF-8''reporte_final_M%22%C3%91-01.pdf" in disposition


async def test_entity_summary_drops_stale_selection(client, fake_backend, result_rows):
    fake_backend.on("GET", "/api/analysis-results", result_rows)

    response = await client.get(
        f"{API}/dashboard/summary/results", params={"selected": [100, 999]}
    )

    data = response.json()
    assert data["selected"] == 0
    assert data["cards"][-1]["value"] == 0
