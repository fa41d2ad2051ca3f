"""
Fixtures compartidas para Pytest.
El backend LIMS se simula con httpx.MockTransport; la API se prueba vía ASGITransport.
"""

from collections.abc import AsyncGenerator, Callable
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from app.backend import LimsClient, get_backend
from app.main import app

BACKEND_URL = "http://lims.test"


class FakeBackend:
    """Rutas del backend en memoria: (método, path) → respuesta."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[httpx.Request] = []

    def on(self, method: str, path: str, body: Any = None, status: int = 200) -> None:
        self.routes[(method, path)] = (status, body)

    def on_call(self, method: str, path: str, handler: Callable[[httpx.Request], httpx.Response]) -> None:
        self.routes[(method, path)] = handler

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.calls.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"error": "Recurso no encontrado"})
        if callable(route):
            return route(request)
        status, body = route
        if isinstance(body, bytes):
            return httpx.Response(status, content=body, headers={"content-type": "application/pdf"})
        return httpx.Response(status, json=body)

    def calls_to(self, method: str, path: str) -> list[httpx.Request]:
        return [c for c in self.calls if c.method == method and c.url.path == path]


@pytest.fixture
def fake_backend() -> FakeBackend:
    return FakeBackend()


@pytest_asyncio.fixture
async def lims(fake_backend: FakeBackend) -> AsyncGenerator[LimsClient, None]:
    """Cliente del backend conectado al fake."""
    client = LimsClient(
        base_url=BACKEND_URL,
        transport=httpx.MockTransport(fake_backend.handler),
    )
    yield client
    await client.aclose()


@pytest_asyncio.fixture
async def client(lims: LimsClient) -> AsyncGenerator[AsyncClient, None]:
    """Cliente HTTP de test contra la app con el backend simulado."""
    app.dependency_overrides[get_backend] = lambda: lims

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ── Datos de ejemplo ─────────────────────────────────

@pytest.fixture
def sample_rows() -> list[dict]:
    return [
        {"sample_id": 1, "sample_code": "M-001", "collection_date": "2026-01-05",
         "collection_location": "Planta Norte", "sample_type_id": 1,
         "service_request_id": 10, "current_status_id": 1, "is_deleted": 0},
        {"sample_id": 2, "sample_code": "M-002", "collection_date": "2026-01-06",
         "collection_location": "Pozo 3", "sample_type_id": 2,
         "service_request_id": 10, "current_status_id": 4, "is_deleted": 0},
        {"sample_id": 3, "sample_code": "M-003", "collection_date": "2026-01-07",
         "collection_location": "Río Rímac", "sample_type_id": 1,
         "service_request_id": 11, "current_status_id": 12, "is_deleted": 1},
        {"sample_id": 4, "sample_code": "M-004", "collection_date": "2026-01-08",
         "collection_location": "Laguna", "sample_type_id": 2,
         "service_request_id": 11, "current_status_id": None},
    ]


@pytest.fixture
def sample_type_rows() -> list[dict]:
    return [
        {"sample_type_id": 1, "type_name": "Agua potable"},
        {"sample_type_id": 2, "type_name": "Agua residual"},
    ]


@pytest.fixture
def customer_rows() -> list[dict]:
    return [
        {"customer_id": 1, "name": "Ana", "surname": "Quispe", "email": "ana@example.com",
         "phone_number": "987654321", "state": "A",
         "address": {"address_id": 7, "street": "Av. Arequipa 123", "district": "Lince",
                     "province": "Lima", "zip_code": "15046"}},
        {"customer_id": 2, "name": "Luis", "surname": "Rojas", "email": "luis@example.com",
         "phone_number": "912345678", "state": "I"},
        {"customer_id": 3, "name": "Rosa", "surname": "Huamán", "email": "rosa@example.com",
         "phone_number": "", "state": "A"},
    ]


@pytest.fixture
def service_type_rows() -> list[dict]:
    return [
        {"service_type_id": i, "service_name": f"Servicio {i}", "unit_price": f"{i * 10}.50", "state": "A"}
        for i in range(1, 8)
    ]


@pytest.fixture
def request_rows() -> list[dict]:
    return [
        {"service_request_id": 10, "customer_id": 1,
         "customer": {"id": 1, "name": "Ana", "surname": "Quispe"},
         "request_date": "2026-01-04", "status": "PENDIENTE", "notes": "Urgente",
         "items": [{"service_type_id": 1, "service_name": "Servicio 1", "quantity": 2,
                    "unit_price": "10.50", "subtotal": "21.00"}],
         "total_estimated": "21.00"},
        {"service_request_id": 11, "customer_id": 2,
         "customer": {"id": 2, "name": "Luis", "surname": "Rojas"},
         "request_date": "2026-01-03", "status": "COMPLETADA", "notes": None,
         "items": [], "total_estimated": "0"},
        {"service_request_id": 12, "customer_id": 1,
         "customer": {"id": 1, "name": "Ana", "surname": "Quispe"},
         "request_date": "2026-01-02", "status": "CANCELADA",
         "notes": "CANCELLED - Cliente desistió", "items": [], "total_estimated": "0"},
    ]


@pytest.fixture
def result_rows() -> list[dict]:
    return [
        {"analysis_result_id": 100, "sample_id": 2, "analysis_parameter_id": 1,
         "parameter_name": "pH", "unit": "", "result_value": 7.2,
         "analysis_date": "2026-01-10", "is_deleted": False},
        {"analysis_result_id": 101, "sample_id": 2, "analysis_parameter_id": 2,
         "parameter_name": "Turbidez", "unit": "NTU", "result_value": 1.5,
         "analysis_date": "2026-01-11", "is_deleted": 0},
        {"analysis_result_id": 102, "sample_id": 1, "analysis_parameter_id": 1,
         "parameter_name": "pH", "unit": "", "result_value": 6.9,
         "analysis_date": "2025-12-20", "is_deleted": True},
    ]
