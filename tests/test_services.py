"""
Casos de uso contra el backend simulado.
"""

import json
import logging

import pytest

from app.core.exceptions import BackendResponseException, ConflictException, ValidationException
from app.schemas.customer import CustomerCreate
from app.schemas.dashboard import DashboardStats
from app.schemas.request import CartAddRequest, CartLine, ServiceRequestCreate
from app.services import customer_service, dashboard_service, request_service, sample_service


def _body(request) -> dict:
    return json.loads(request.content)


NEW_CUSTOMER = {
    "name": "María José",
    "surname": "Pérez",
    "email": "maria@example.com",
    "phone_number": "912345678",
    "address": {
        "street": "Jr. Junín 456",
        "department": "Lima",
        "province": "Lima",
        "district": "Miraflores",
    },
}


# ── Clientes ─────────────────────────────────────────

async def test_create_customer_registers_address_first(lims, fake_backend, customer_rows):
    fake_backend.on("POST", "/api/addresses", {"success": True, "data": {"id": 55}})
    fake_backend.on("POST", "/api/customers", {"customer_id": 4}, status=201)
    fake_backend.on("GET", "/api/customers", customer_rows)

    view = await customer_service.create_customer_with_address(lims, CustomerCreate(**NEW_CUSTOMER))

    paths = [(c.method, c.url.path) for c in fake_backend.calls]
    assert paths.index(("POST", "/api/addresses")) < paths.index(("POST", "/api/customers"))
    sent = _body(fake_backend.calls_to("POST", "/api/customers")[0])
    assert sent["address_id"] == 55
    assert sent["state"] == "A"
    assert "address" not in sent
    assert view.summary.counters["total"] == 3


async def test_failed_customer_logs_orphan_address(lims, fake_backend, caplog):
    fake_backend.on("POST", "/api/addresses", {"address_id": 55})
    fake_backend.on("POST", "/api/customers", {"error": "El email ya existe"}, status=400)

    with caplog.at_level(logging.WARNING):
        with pytest.raises(BackendResponseException) as exc_info:
            await customer_service.create_customer_with_address(lims, CustomerCreate(**NEW_CUSTOMER))

    assert exc_info.value.detail == "El email ya existe"
    assert "dirección 55" in caplog.text


async def test_address_without_id_stops_creation(lims, fake_backend):
    fake_backend.on("POST", "/api/addresses", {"success": True})

    with pytest.raises(BackendResponseException):
        await customer_service.create_customer_with_address(lims, CustomerCreate(**NEW_CUSTOMER))
    assert fake_backend.calls_to("POST", "/api/customers") == []


async def test_client_view_filters_but_counts_everything(lims, fake_backend, customer_rows):
    fake_backend.on("GET", "/api/customers", customer_rows + [customer_rows[0]])

    view = await customer_service.get_client_view(lims, search="rojas")

    assert [c.customer_id for c in view.items] == [2]
    assert view.items[0].state_label == "Inactivo"
    assert view.summary.counters == {"total": 3, "active": 2, "inactive": 1}


# ── Solicitudes ──────────────────────────────────────

async def test_cancel_without_reason_never_reaches_backend(lims, fake_backend):
    with pytest.raises(ValidationException) as exc_info:
        await request_service.cancel_request(lims, 10, "")
    assert exc_info.value.status_code == 422
    assert fake_backend.calls == []


@pytest.mark.parametrize(
    "reason, expected",
    [("   ", "Cancelada por el usuario"), ("  Cliente desistió ", "Cliente desistió")],
)
async def test_cancel_reason_is_normalized(lims, fake_backend, request_rows, reason, expected):
    fake_backend.on("PATCH", "/api/requests/10", {"message": "ok"})
    fake_backend.on("GET", "/api/requests", request_rows)

    await request_service.cancel_request(lims, 10, reason)

    assert _body(fake_backend.calls_to("PATCH", "/api/requests/10")[0]) == {"reason": expected}


async def test_restore_request_sets_pending(lims, fake_backend, request_rows):
    fake_backend.on("PUT", "/api/requests/12", {"message": "ok"})
    fake_backend.on("GET", "/api/requests", request_rows)

    await request_service.restore_request(lims, 12)

    assert _body(fake_backend.calls_to("PUT", "/api/requests/12")[0]) == {
        "status": "PENDIENTE",
        "notes": "Restaurada",
    }


async def test_create_request_sends_only_ids_and_quantities(lims, fake_backend, request_rows):
    fake_backend.on("POST", "/api/requests", {"service_request_id": 13}, status=201)
    fake_backend.on("GET", "/api/requests", request_rows)
    items = [
        CartLine(service_type_id=1, service_name="Servicio 1", quantity=2,
                 unit_price="10.50", subtotal="21.00"),
    ]

    await request_service.create_request(
        lims, ServiceRequestCreate(customer_id=1, notes="Urgente", items=items)
    )

    sent = _body(fake_backend.calls_to("POST", "/api/requests")[0])
    assert sent == {
        "customer_id": 1,
        "notes": "Urgente",
        "items": [{"service_type_id": 1, "quantity": 2}],
    }


async def test_create_request_requires_customer_and_items(lims, fake_backend):
    with pytest.raises(ValidationException, match="ID Cliente"):
        await request_service.create_request(lims, ServiceRequestCreate(items=[]))
    with pytest.raises(ValidationException, match="al menos un servicio"):
        await request_service.create_request(lims, ServiceRequestCreate(customer_id=1))
    assert fake_backend.calls == []


async def test_add_cart_item_uses_catalog_price(lims, fake_backend, service_type_rows):
    fake_backend.on("GET", "/api/service-types", service_type_rows)

    view = await request_service.add_cart_item(
        lims, CartAddRequest(service_type_id=2, quantity="3")
    )

    assert view.count == 1
    assert str(view.items[0].subtotal) == "61.50"
    disabled = [o.service_type_id for o in view.options if o.disabled]
    assert disabled == [2]


async def test_add_cart_item_rejects_sixth_service(lims, fake_backend, service_type_rows):
    fake_backend.on("GET", "/api/service-types", service_type_rows)
    items = [
        CartLine(service_type_id=i, service_name=f"Servicio {i}", quantity=1)
        for i in range(1, 6)
    ]

    with pytest.raises(ValidationException, match="límite máximo"):
        await request_service.add_cart_item(
            lims, CartAddRequest(items=items, service_type_id=6, quantity=1)
        )


# ── Muestras ─────────────────────────────────────────

async def test_sample_list_resolves_type_names(lims, fake_backend, sample_rows, sample_type_rows):
    fake_backend.on("GET", "/api/samples", sample_rows)
    fake_backend.on("GET", "/api/sample-types", sample_type_rows)

    samples = await sample_service.list_samples(lims)

    assert [s.sample_id for s in samples] == [4, 3, 2, 1]
    assert samples[-1].sample_type_name == "Agua potable"


async def test_sample_list_survives_missing_catalog(lims, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/samples", sample_rows)
    fake_backend.on("GET", "/api/sample-types", {"error": "Oracle caído"}, status=500)

    view = await sample_service.get_sample_view(lims)

    assert len(view.items) == 4
    assert all(item.sample_type_name is None for item in view.items)


async def test_mark_analyzed_puts_status_four(lims, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/samples/1", sample_rows[0])
    fake_backend.on("PUT", "/api/samples/1", {"message": "ok"})
    fake_backend.on("GET", "/api/samples", sample_rows)

    await sample_service.mark_analyzed(lims, 1, "  Sin observaciones ")

    assert _body(fake_backend.calls_to("PUT", "/api/samples/1")[0]) == {
        "current_status_id": 4,
        "comments": "Sin observaciones",
    }


async def test_mark_analyzed_rejects_archived_sample(lims, fake_backend, sample_rows):
    fake_backend.on("GET", "/api/samples/3", sample_rows[2])

    with pytest.raises(ConflictException):
        await sample_service.mark_analyzed(lims, 3)
    assert fake_backend.calls_to("PUT", "/api/samples/3") == []


# ── Dashboard ────────────────────────────────────────

async def test_dashboard_degrades_when_a_source_fails(
    lims, fake_backend, customer_rows, request_rows, sample_rows
):
    fake_backend.on("GET", "/api/customers", customer_rows)
    fake_backend.on("GET", "/api/requests", request_rows)
    fake_backend.on("GET", "/api/samples", sample_rows)
    fake_backend.on("GET", "/api/analysis-results", {"error": "Oracle caído"}, status=500)

    dashboard = await dashboard_service.get_dashboard(lims)

    assert dashboard.stats.clients_total == 3
    assert dashboard.stats.results_total == 0
    assert dashboard.stats.samples_awaiting_results == 4
    assert dashboard.pending_tasks[0].title == "Análisis Pendientes"
    assert len(dashboard.pending_tasks) <= 3
    assert len(dashboard.recent_activity) == 4


def test_tasks_when_everything_is_up_to_date():
    tasks = dashboard_service.build_tasks(DashboardStats())
    assert [t.title for t in tasks] == ["Sin pendientes"]
