"""
Personal del laboratorio: analistas y recepcionistas.
Ambos recursos comparten las mismas operaciones en el backend.
"""

import logging
from enum import Enum

from app.backend import LimsClient
from app.core.exceptions import NotFoundException
from app.schemas.catalog import AnalystIn, ReceptionistIn, StaffResponse

logger = logging.getLogger(__name__)


class StaffKind(str, Enum):
    ANALYST = "analysts"
    RECEPTIONIST = "receptionists"


_LABELS = {
    StaffKind.ANALYST: "Analista",
    StaffKind.RECEPTIONIST: "Recepcionista",
}


def _base(kind: StaffKind) -> str:
    return f"/api/{kind.value}"


async def list_staff(backend: LimsClient, kind: StaffKind) -> list[StaffResponse]:
    rows = await backend.get_list(_base(kind))
    return [StaffResponse.model_validate(r) for r in rows]


async def get_staff(backend: LimsClient, kind: StaffKind, staff_id: int) -> StaffResponse:
    data = await backend.get(f"{_base(kind)}/{staff_id}")
    if not data:
        raise NotFoundException(_LABELS[kind])
    return StaffResponse.model_validate(data)


async def create_staff(
    backend: LimsClient, kind: StaffKind, data: AnalystIn | ReceptionistIn
) -> StaffResponse:
    created = await backend.post(_base(kind), json=data.model_dump(mode="json"))
    logger.info(f"{_LABELS[kind]} creado: {data.name} {data.surname}")
    return StaffResponse.model_validate(created)


async def update_staff(
    backend: LimsClient, kind: StaffKind, staff_id: int, data: AnalystIn | ReceptionistIn
) -> StaffResponse:
    await backend.put(f"{_base(kind)}/{staff_id}", json=data.model_dump(mode="json"))
    return await get_staff(backend, kind, staff_id)


async def set_staff_active(
    backend: LimsClient, kind: StaffKind, staff_id: int, active: bool
) -> StaffResponse:
    action = "activate" if active else "deactivate"
    await backend.patch(f"{_base(kind)}/{staff_id}/{action}")
    logger.info(f"{_LABELS[kind]} {staff_id}: {action}")
    return await get_staff(backend, kind, staff_id)
