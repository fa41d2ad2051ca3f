import logging

from app.backend import LimsClient
from app.core.exceptions import BackendResponseException, NotFoundException
from app.schemas.customer import AddressCreate, AddressResponse, AddressUpdate

logger = logging.getLogger(__name__)


async def list_addresses(backend: LimsClient) -> list[AddressResponse]:
    rows = await backend.get_list("/api/addresses")
    return [AddressResponse.model_validate(r) for r in rows]


async def get_address(backend: LimsClient, address_id: int) -> AddressResponse:
    data = await backend.get(f"/api/addresses/{address_id}")
    if not data:
        raise NotFoundException("Dirección", detail="Dirección no encontrada")
    return AddressResponse.model_validate(data)


async def create_address(backend: LimsClient, data: AddressCreate) -> AddressResponse:
    """
    Crea la dirección y retorna su id.
    El backend devuelve el id como address_id o como id.
    """
    created = await backend.post("/api/addresses", json=data.model_dump())
    address = AddressResponse.model_validate(created or {})
    if address.address_id is None:
        raise BackendResponseException(502, "El servidor no devolvió el ID de la dirección")
    logger.info(f"Dirección creada: {address.address_id}")
    return address


async def update_address(
    backend: LimsClient, address_id: int, data: AddressUpdate
) -> AddressResponse:
    await backend.put(f"/api/addresses/{address_id}", json=data.model_dump(exclude_none=True))
    return await get_address(backend, address_id)
