from typing import Literal

from fastapi import APIRouter, Depends, Query

from app.backend import LimsClient, get_backend
from app.schemas.dashboard import DashboardResponse
from app.schemas.summary import EntitySummary
from app.services import dashboard_service

router = APIRouter()


@router.get("", response_model=DashboardResponse)
async def get_dashboard(backend: LimsClient = Depends(get_backend)):
    """Estadísticas, tareas pendientes y actividad reciente."""
    return await dashboard_service.get_dashboard(backend)


@router.get("/summary/{entity}", response_model=EntitySummary)
async def get_entity_summary(
    entity: Literal["clients", "requests", "samples", "results"],
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Tarjetas resumen de una entidad."""
    return await dashboard_service.get_entity_summary(backend, entity, selected)
