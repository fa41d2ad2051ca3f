"""
Endpoints de solicitudes de servicio y del carrito de ítems.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from app.api.responses import export_response
from app.backend import LimsClient, get_backend
from app.schemas.request import (
    CancelRequest,
    CartAddRequest,
    CartOptionsRequest,
    CartView,
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestUpdate,
)
from app.schemas.summary import RequestListView
from app.services import export_service, request_service
from app.services.cart_service import Cart

router = APIRouter()


@router.get("", response_model=RequestListView)
async def list_requests(
    search: str | None = Query(None, description="ID de solicitud, ID o nombre del cliente"),
    customer_id: int | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Lista solicitudes con tarjetas resumen."""
    return await request_service.get_request_view(backend, search, selected, customer_id)


@router.get("/export/{fmt}")
async def export_requests(
    fmt: Literal["xlsx", "pdf"],
    search: str | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    export = await export_service.export_requests(backend, fmt, search, selected)
    return export_response(export)


# ── Carrito ──────────────────────────────────────────

@router.post("/cart/items", response_model=CartView)
async def add_cart_item(data: CartAddRequest, backend: LimsClient = Depends(get_backend)):
    """Valida y agrega un servicio al carrito. Retorna el carrito actualizado."""
    return await request_service.add_cart_item(backend, data)


@router.post("/cart/items/{service_type_id}/remove", response_model=CartView)
async def remove_cart_item(
    service_type_id: int,
    data: CartOptionsRequest,
    backend: LimsClient = Depends(get_backend),
):
    """Quita un servicio del carrito sin crear la solicitud."""
    return await request_service.remove_cart_item(backend, data.items, service_type_id)


@router.post("/cart/options", response_model=CartView)
async def cart_options(data: CartOptionsRequest, backend: LimsClient = Depends(get_backend)):
    """Catálogo de servicios con los ya agregados deshabilitados."""
    return await request_service.cart_options(backend, Cart(data.items))


# ── Solicitudes ──────────────────────────────────────

@router.get("/{request_id}", response_model=ServiceRequestResponse)
async def get_request(request_id: int, backend: LimsClient = Depends(get_backend)):
    return await request_service.get_request(backend, request_id)


@router.get("/{request_id}/pdf")
async def print_request(request_id: int, backend: LimsClient = Depends(get_backend)):
    """Orden de servicio individual en PDF."""
    export = await export_service.export_request_order(backend, request_id)
    return export_response(export)


@router.post("", response_model=RequestListView, status_code=201)
async def create_request(data: ServiceRequestCreate, backend: LimsClient = Depends(get_backend)):
    """Crea la solicitud a partir del carrito."""
    return await request_service.create_request(backend, data)


@router.put("/{request_id}", response_model=RequestListView)
async def update_request(
    request_id: int,
    data: ServiceRequestUpdate,
    backend: LimsClient = Depends(get_backend),
):
    """Actualiza la cabecera de la solicitud (los ítems no se editan)."""
    return await request_service.update_request(backend, request_id, data)


@router.patch("/{request_id}/cancel", response_model=RequestListView)
async def cancel_request(
    request_id: int,
    data: CancelRequest,
    backend: LimsClient = Depends(get_backend),
):
    """Cancela la solicitud. El motivo es obligatorio."""
    return await request_service.cancel_request(backend, request_id, data.reason)


@router.patch("/{request_id}/restore", response_model=RequestListView)
async def restore_request(request_id: int, backend: LimsClient = Depends(get_backend)):
    return await request_service.restore_request(backend, request_id)
