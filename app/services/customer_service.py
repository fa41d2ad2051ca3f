"""
Clientes.

El alta es un solo caso de uso en dos pasos: primero la dirección y luego
el cliente con el address_id obtenido. Las bajas son lógicas (estado A/I).
"""

import logging

from app.backend import LimsClient
from app.core.exceptions import NotFoundException
from app.models.states import EntityState
from app.schemas.customer import (
    CustomerCreate,
    CustomerResponse,
    CustomerRow,
    CustomerUpdate,
)
from app.schemas.summary import ClientListView
from app.services import address_service
from app.services.sample_lifecycle import client_actions
from app.services.summary_service import SelectionState, summarize_clients, unique_by

logger = logging.getLogger(__name__)


def to_row(customer: CustomerResponse) -> CustomerRow:
    state = EntityState.ACTIVE if customer.is_active else EntityState.INACTIVE
    return CustomerRow(
        **customer.model_dump(),
        state_label=state.label,
        actions=client_actions(customer.state),
    )


def filter_customers(
    customers: list[CustomerResponse],
    search: str | None = None,
    state: EntityState | None = None,
) -> list[CustomerResponse]:
    """Búsqueda por nombre completo, email o teléfono y filtro por estado."""
    filtered = customers
    if search:
        term = search.strip().lower()
        filtered = [
            c for c in filtered
            if term in c.full_name.lower()
            or term in (c.email or "").lower()
            or term in (c.phone_number or "")
        ]
    if state is not None:
        filtered = [c for c in filtered if c.state == state]
    return filtered


async def list_customers(backend: LimsClient) -> list[CustomerResponse]:
    rows = await backend.get_list("/api/customers")
    customers = [CustomerResponse.model_validate(r) for r in rows]
    return unique_by(customers, lambda c: c.customer_id)


async def list_customers_by_state(
    backend: LimsClient, state: EntityState
) -> list[CustomerResponse]:
    rows = await backend.get_list(f"/api/customers/estado/{state.value}")
    return [CustomerResponse.model_validate(r) for r in rows]


async def get_customer(backend: LimsClient, customer_id: int) -> CustomerResponse:
    data = await backend.get(f"/api/customers/{customer_id}")
    if not data:
        raise NotFoundException("Cliente")
    return CustomerResponse.model_validate(data)


async def get_client_view(
    backend: LimsClient,
    search: str | None = None,
    state: EntityState | None = None,
    selected: list[int] | None = None,
) -> ClientListView:
    """Listado de clientes con sus tarjetas resumen. Las tarjetas cuentan todo el padrón."""
    customers = await list_customers(backend)
    selection = SelectionState(selected)
    selection.on_reload(c.customer_id for c in customers)
    filtered = filter_customers(customers, search, state)
    return ClientListView(
        items=[to_row(c) for c in filtered],
        summary=summarize_clients(customers, selection.ids),
    )


async def create_customer_with_address(
    backend: LimsClient, data: CustomerCreate
) -> ClientListView:
    """
    Crea la dirección y luego el cliente (estado A).
    Si falla el segundo paso la dirección queda huérfana: no hay borrado
    físico, solo se registra en el log.
    """
    address = await address_service.create_address(backend, data.address)

    payload = data.model_dump(exclude={"address"})
    payload["address_id"] = address.address_id
    payload["state"] = EntityState.ACTIVE.value
    try:
        await backend.post("/api/customers", json=payload)
    except Exception:
        logger.warning(
            f"No se pudo crear el cliente {data.email}; "
            f"la dirección {address.address_id} quedó sin cliente"
        )
        raise

    logger.info(f"Cliente creado: {data.name} {data.surname} (dirección {address.address_id})")
    return await get_client_view(backend)


async def update_customer(
    backend: LimsClient, customer_id: int, data: CustomerUpdate
) -> ClientListView:
    """Actualiza datos del cliente; la dirección viaja anidada con su address_id."""
    payload = data.model_dump(exclude_none=True, exclude={"address", "address_id"})
    if data.address is not None:
        address = data.address.model_dump(exclude_none=True)
        if data.address_id is not None:
            address["address_id"] = data.address_id
        payload["address"] = address
    elif data.address_id is not None:
        payload["address_id"] = data.address_id

    await backend.put(f"/api/customers/{customer_id}", json=payload)
    logger.info(f"Cliente actualizado: {customer_id}")
    return await get_client_view(backend)


async def deactivate_customer(backend: LimsClient, customer_id: int) -> ClientListView:
    await backend.patch(f"/api/customers/eliminar/{customer_id}")
    logger.info(f"Cliente desactivado: {customer_id}")
    return await get_client_view(backend)


async def restore_customer(backend: LimsClient, customer_id: int) -> ClientListView:
    await backend.patch(f"/api/customers/restaurar/{customer_id}")
    logger.info(f"Cliente restaurado: {customer_id}")
    return await get_client_view(backend)
