"""
Panel principal: estadísticas, tareas pendientes y actividad reciente.

Las cuatro fuentes se cargan en paralelo; si una falla el panel se arma
igual con esa fuente vacía.
"""

import asyncio
import logging
from datetime import datetime, timezone

from fastapi import HTTPException

from app.backend import LimsClient
from app.core.dates import parse_date, time_ago
from app.core.exceptions import NotFoundException
from app.models.icons import Icon
from app.models.states import EntityState
from app.schemas.analysis import AnalysisResultResponse
from app.schemas.customer import CustomerResponse
from app.schemas.dashboard import (
    ActivityItem,
    DashboardResponse,
    DashboardStats,
    PendingTask,
)
from app.schemas.request import ServiceRequestResponse
from app.schemas.sample import SampleResponse
from app.schemas.summary import EntitySummary
from app.services import analysis_service, customer_service, request_service, sample_service
from app.services.sample_lifecycle import classify
from app.services.summary_service import (
    SelectionState,
    summarize_clients,
    summarize_requests,
    summarize_results,
    summarize_samples,
    unique_by,
)

logger = logging.getLogger(__name__)

MAX_TASKS = 3
MAX_ACTIVITY = 4

_SOURCE_NAMES = ("clientes", "solicitudes", "muestras", "resultados")


async def _load_sources(backend: LimsClient) -> tuple[list, list, list, list]:
    loaded = await asyncio.gather(
        customer_service.list_customers(backend),
        request_service.list_requests(backend),
        sample_service.list_samples(backend),
        analysis_service.list_results(backend, include_deleted=False),
        return_exceptions=True,
    )
    sources = []
    for name, result in zip(_SOURCE_NAMES, loaded):
        if isinstance(result, HTTPException):
            logger.warning(f"Dashboard: no se pudieron cargar {name}: {result.detail}")
            sources.append([])
        elif isinstance(result, BaseException):
            raise result
        else:
            sources.append(result)
    return tuple(sources)


def build_stats(
    clients: list[CustomerResponse],
    requests: list[ServiceRequestResponse],
    samples: list[SampleResponse],
    results: list[AnalysisResultResponse],
) -> DashboardStats:
    clients = unique_by(clients, lambda c: c.customer_id)
    results = unique_by(results, lambda r: r.analysis_result_id)
    samples_with_results = {r.sample_id for r in results if r.sample_id is not None}
    return DashboardStats(
        clients_total=len(clients),
        clients_active=sum(1 for c in clients if c.state == EntityState.ACTIVE),
        clients_inactive=sum(1 for c in clients if c.state == EntityState.INACTIVE),
        requests_total=len(requests),
        samples_total=len(samples),
        samples_pending=sum(
            1 for s in samples if classify(s.current_status_id, s.is_deleted).is_pending
        ),
        samples_awaiting_results=sum(1 for s in samples if s.sample_id not in samples_with_results),
        results_total=len(results),
    )


def build_tasks(stats: DashboardStats) -> list[PendingTask]:
    tasks: list[PendingTask] = []
    if stats.samples_awaiting_results > 0:
        tasks.append(PendingTask(
            title="Análisis Pendientes",
            description=f"{stats.samples_awaiting_results} muestras requieren atención",
            icon=Icon.MICROSCOPE,
            color="purple",
            count=stats.samples_awaiting_results,
        ))
    if stats.clients_inactive > 0:
        tasks.append(PendingTask(
            title="Clientes Inactivos",
            description=f"{stats.clients_inactive} usuarios marcados como inactivos",
            icon=Icon.USERS,
            color="red",
            count=stats.clients_inactive,
        ))
    if stats.requests_total > stats.samples_total:
        tasks.append(PendingTask(
            title="Solicitudes Nuevas",
            description="Falta recepcionar muestras físicas",
            icon=Icon.PAPER_PLANE,
            color="cyan",
            count=stats.requests_total - stats.samples_total,
        ))
    if not tasks:
        tasks.append(PendingTask(
            title="Sin pendientes",
            description="Todo el sistema está al día",
            icon=Icon.CHECK_CIRCLE,
            color="green",
        ))
    return tasks[:MAX_TASKS]


def build_activity(
    clients: list[CustomerResponse],
    samples: list[SampleResponse],
    now: datetime | None = None,
) -> list[ActivityItem]:
    """Clientes y muestras más recientes. Sin fecha se consideran recientes."""
    now = now or datetime.now(timezone.utc)
    timeline: list[tuple[datetime, ActivityItem]] = []

    for c in unique_by(clients, lambda c: c.customer_id):
        date = c.created_at.isoformat() if c.created_at else None
        timeline.append((parse_date(date) or now, ActivityItem(
            kind="client",
            initials=(c.name or "C")[:1] + (c.surname or "L")[:1],
            title=f"{c.name or ''} {c.surname or ''}".strip(),
            description="Cliente Activo en sistema" if c.state == EntityState.ACTIVE else "Cliente Inactivo",
            icon=Icon.USERS,
            date=date,
            time_ago=time_ago(date, now),
        )))

    for s in samples:
        timeline.append((parse_date(s.collection_date) or now, ActivityItem(
            kind="sample",
            initials="MU",
            title=f"Muestra {s.sample_code or s.sample_id}",
            description="Recepcionada en laboratorio",
            icon=Icon.VIAL,
            date=s.collection_date,
            time_ago=time_ago(s.collection_date, now),
        )))

    timeline.sort(key=lambda entry: entry[0], reverse=True)
    return [item for _, item in timeline[:MAX_ACTIVITY]]


async def get_dashboard(backend: LimsClient) -> DashboardResponse:
    clients, requests, samples, results = await _load_sources(backend)
    stats = build_stats(clients, requests, samples, results)
    return DashboardResponse(
        stats=stats,
        pending_tasks=build_tasks(stats),
        recent_activity=build_activity(clients, samples),
    )


async def get_entity_summary(
    backend: LimsClient, entity: str, selected: list[int] | None = None
) -> EntitySummary:
    """Tarjetas resumen de una entidad, sin los ítems. La selección pasa por la recarga."""
    selection = SelectionState(selected)
    if entity == "clients":
        clients = await customer_service.list_customers(backend)
        selection.on_reload(c.customer_id for c in clients)
        return summarize_clients(clients, selection.ids)
    if entity == "requests":
        requests = await request_service.list_requests(backend)
        selection.on_reload(r.service_request_id for r in requests)
        return summarize_requests(requests, selection.ids)
    if entity == "samples":
        samples = await sample_service.list_samples(backend)
        selection.on_reload(s.sample_id for s in samples)
        return summarize_samples(samples, selection.ids)
    if entity == "results":
        results = await analysis_service.list_results(backend)
        selection.on_reload(r.analysis_result_id for r in results)
        return summarize_results(results, selection.ids)
    raise NotFoundException("Resumen", detail=f"Entidad desconocida: {entity}")
