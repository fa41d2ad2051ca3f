"""
Solicitudes de servicio.

La creación parte de un carrito ya validado; la cancelación exige motivo y
solo cambia estado/notas. Toda mutación devuelve el listado recargado.
"""

import logging

from app.backend import LimsClient
from app.config import get_settings
from app.core.exceptions import NotFoundException, ValidationException
from app.models.states import RequestStatus
from app.schemas.request import (
    CartAddRequest,
    CartLine,
    CartView,
    ServiceRequestCreate,
    ServiceRequestResponse,
    ServiceRequestRow,
    ServiceRequestUpdate,
)
from app.schemas.summary import RequestListView
from app.services import catalog_service
from app.services.cart_service import Cart, CartError
from app.services.sample_lifecycle import request_actions
from app.services.summary_service import SelectionState, summarize_requests, unique_by

settings = get_settings()
logger = logging.getLogger(__name__)


def to_row(request: ServiceRequestResponse) -> ServiceRequestRow:
    return ServiceRequestRow(**request.model_dump(), actions=request_actions(request.status))


def filter_requests(
    requests: list[ServiceRequestResponse], search: str | None = None
) -> list[ServiceRequestResponse]:
    """Búsqueda por id de solicitud, id de cliente o nombre del cliente."""
    if not search:
        return requests
    term = search.strip().lower()
    return [
        r for r in requests
        if term in str(r.service_request_id)
        or term in str(r.customer_id or (r.customer.customer_id if r.customer else ""))
        or term in r.customer_name.lower()
    ]


def normalize_cancel_reason(reason: str | None) -> str:
    """
    Motivo de cancelación.
    Vacío → error (antes de llamar al backend); solo espacios → motivo por defecto.
    """
    if reason is None or reason == "":
        raise ValidationException("Debe indicar el motivo de la cancelación")
    cleaned = reason.strip()
    return cleaned or settings.DEFAULT_CANCEL_REASON


async def list_requests(backend: LimsClient) -> list[ServiceRequestResponse]:
    rows = await backend.get_list("/api/requests")
    requests = [ServiceRequestResponse.model_validate(r) for r in rows]
    return unique_by(requests, lambda r: r.service_request_id)


async def list_requests_by_customer(
    backend: LimsClient, customer_id: int
) -> list[ServiceRequestResponse]:
    rows = await backend.get_list(f"/api/requests/customer/{customer_id}")
    return [ServiceRequestResponse.model_validate(r) for r in rows]


async def get_request(backend: LimsClient, request_id: int) -> ServiceRequestResponse:
    data = await backend.get(f"/api/requests/{request_id}")
    if not data:
        raise NotFoundException("Solicitud", detail="Solicitud no encontrada")
    return ServiceRequestResponse.model_validate(data)


async def get_request_view(
    backend: LimsClient,
    search: str | None = None,
    selected: list[int] | None = None,
    customer_id: int | None = None,
) -> RequestListView:
    if customer_id is not None:
        requests = await list_requests_by_customer(backend, customer_id)
    else:
        requests = await list_requests(backend)
    selection = SelectionState(selected)
    selection.on_reload(r.service_request_id for r in requests)
    filtered = filter_requests(requests, search)
    return RequestListView(
        items=[to_row(r) for r in filtered],
        summary=summarize_requests(requests, selection.ids),
    )


# ── Carrito ──────────────────────────────────────────

def checked_cart(items: list[CartLine]) -> Cart:
    """Carrito recibido del cliente, revisado antes de usarlo."""
    cart = Cart(items)
    try:
        cart.validate()
    except CartError as exc:
        raise ValidationException(str(exc))
    return cart


async def add_cart_item(backend: LimsClient, data: CartAddRequest) -> CartView:
    """Agrega un ítem al carrito usando el precio vigente del catálogo."""
    cart = checked_cart(data.items)
    service_types = await catalog_service.list_service_types(backend)
    service_type = next(
        (st for st in service_types if st.service_type_id == data.service_type_id), None
    )
    if data.service_type_id is not None and service_type is None:
        raise NotFoundException("Tipo de servicio")
    try:
        cart.add(service_type, data.quantity)
    except CartError as exc:
        raise ValidationException(str(exc))
    return cart.view(service_types)


async def remove_cart_item(
    backend: LimsClient, items: list[CartLine], service_type_id: int
) -> CartView:
    """Quita una línea del carrito. No envía nada al backend de solicitudes."""
    cart = Cart(items)
    cart.remove(service_type_id)
    return await cart_options(backend, cart)


async def cart_options(backend: LimsClient, cart: Cart) -> CartView:
    service_types = await catalog_service.list_service_types(backend)
    return cart.view(service_types)


# ── Mutaciones ───────────────────────────────────────

async def create_request(backend: LimsClient, data: ServiceRequestCreate) -> RequestListView:
    """Crea la solicitud con los ítems del carrito (solo id de servicio y cantidad)."""
    if not data.customer_id:
        raise ValidationException("Por favor, complete el ID Cliente")
    if not data.items:
        raise ValidationException("Debe agregar al menos un servicio al carrito")

    cart = checked_cart(data.items)
    payload = {
        "customer_id": data.customer_id,
        "notes": data.notes,
        "items": [item.model_dump() for item in cart.payload()],
    }
    await backend.post("/api/requests", json=payload)
    logger.info(f"Solicitud creada para cliente {data.customer_id} con {len(data.items)} servicios")
    return await get_request_view(backend)


async def update_request(
    backend: LimsClient, request_id: int, data: ServiceRequestUpdate
) -> RequestListView:
    """Solo se actualiza la cabecera (cliente, estado, notas, fecha)."""
    await backend.put(f"/api/requests/{request_id}", json=data.model_dump(mode="json", exclude_none=True))
    logger.info(f"Solicitud actualizada: {request_id}")
    return await get_request_view(backend)


async def cancel_request(
    backend: LimsClient, request_id: int, reason: str | None
) -> RequestListView:
    final_reason = normalize_cancel_reason(reason)
    await backend.patch(f"/api/requests/{request_id}", json={"reason": final_reason})
    logger.info(f"Solicitud cancelada: {request_id} ({final_reason})")
    return await get_request_view(backend)


async def restore_request(backend: LimsClient, request_id: int) -> RequestListView:
    await backend.put(
        f"/api/requests/{request_id}",
        json={"status": RequestStatus.PENDING.value, "notes": "Restaurada"},
    )
    logger.info(f"Solicitud restaurada: {request_id}")
    return await get_request_view(backend)
