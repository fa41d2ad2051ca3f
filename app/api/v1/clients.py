"""
Endpoints de clientes (alta con dirección, edición, baja lógica y exportación).
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from app.api.responses import export_response
from app.backend import LimsClient, get_backend
from app.models.states import EntityState
from app.schemas.customer import (
    AddressResponse,
    AddressUpdate,
    CustomerCreate,
    CustomerResponse,
    CustomerRow,
    CustomerUpdate,
)
from app.schemas.summary import ClientListView
from app.services import address_service, customer_service, export_service

router = APIRouter()


@router.get("", response_model=ClientListView)
async def list_clients(
    search: str | None = Query(None, description="Nombre, email o teléfono"),
    state: EntityState | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Lista clientes con tarjetas resumen."""
    return await customer_service.get_client_view(backend, search, state, selected)


@router.get("/export/{fmt}")
async def export_clients(
    fmt: Literal["csv", "xlsx", "pdf"],
    search: str | None = Query(None),
    state: EntityState | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Exporta los clientes seleccionados (o el listado filtrado)."""
    export = await export_service.export_clients(backend, fmt, search, state, selected)
    return export_response(export)


@router.get("/addresses", response_model=list[AddressResponse])
async def list_addresses(backend: LimsClient = Depends(get_backend)):
    return await address_service.list_addresses(backend)


@router.get("/addresses/{address_id}", response_model=AddressResponse)
async def get_address(address_id: int, backend: LimsClient = Depends(get_backend)):
    return await address_service.get_address(backend, address_id)


@router.put("/addresses/{address_id}", response_model=AddressResponse)
async def update_address(
    address_id: int,
    data: AddressUpdate,
    backend: LimsClient = Depends(get_backend),
):
    return await address_service.update_address(backend, address_id, data)


@router.get("/state/{state}", response_model=list[CustomerRow])
async def list_clients_by_state(state: EntityState, backend: LimsClient = Depends(get_backend)):
    """Clientes activos (A) o inactivos (I) según el backend."""
    customers = await customer_service.list_customers_by_state(backend, state)
    return [customer_service.to_row(c) for c in customers]


@router.get("/{customer_id}", response_model=CustomerResponse)
async def get_client(customer_id: int, backend: LimsClient = Depends(get_backend)):
    """Obtiene un cliente con su dirección."""
    return await customer_service.get_customer(backend, customer_id)


@router.post("", response_model=ClientListView, status_code=201)
async def create_client(data: CustomerCreate, backend: LimsClient = Depends(get_backend)):
    """Registra la dirección y luego el cliente (estado activo)."""
    return await customer_service.create_customer_with_address(backend, data)


@router.put("/{customer_id}", response_model=ClientListView)
async def update_client(
    customer_id: int,
    data: CustomerUpdate,
    backend: LimsClient = Depends(get_backend),
):
    return await customer_service.update_customer(backend, customer_id, data)


@router.patch("/{customer_id}/deactivate", response_model=ClientListView)
async def deactivate_client(customer_id: int, backend: LimsClient = Depends(get_backend)):
    """Baja lógica: el cliente pasa a estado I."""
    return await customer_service.deactivate_customer(backend, customer_id)


@router.patch("/{customer_id}/restore", response_model=ClientListView)
async def restore_client(customer_id: int, backend: LimsClient = Depends(get_backend)):
    return await customer_service.restore_customer(backend, customer_id)
