"""
Muestras físicas.

El listado resuelve el nombre del tipo de muestra desde el catálogo y se
ordena por id descendente (la última registrada primero). Eliminar una
muestra la archiva (estado 12); restaurarla la devuelve a REGISTRADA.
"""

import asyncio
import logging

from fastapi import HTTPException

from app.backend import LimsClient
from app.core.exceptions import ConflictException, NotFoundException
from app.models.sample_status import SampleStatus, status_display
from app.models.states import UIAction
from app.schemas.sample import (
    SampleClassificationResponse,
    SampleCreate,
    SampleResponse,
    SampleRow,
    SampleUpdate,
)
from app.schemas.summary import SampleListView
from app.services import catalog_service
from app.services.sample_lifecycle import classify, sample_actions
from app.services.summary_service import SelectionState, summarize_samples, unique_by

logger = logging.getLogger(__name__)


def classification_of(sample: SampleResponse) -> SampleClassificationResponse:
    c = classify(sample.current_status_id, sample.is_deleted)
    display = status_display(c.status_id)
    return SampleClassificationResponse(
        status_id=c.status_id,
        status_label=c.status_label,
        status_color=display.color,
        status_icon=display.icon,
        is_archived=c.is_archived,
        is_analyzed=c.is_analyzed,
        is_pending=c.is_pending,
        actions=sample_actions(c),
    )


def to_row(sample: SampleResponse) -> SampleRow:
    return SampleRow(**sample.model_dump(), classification=classification_of(sample))


def filter_samples(samples: list[SampleResponse], search: str | None = None) -> list[SampleResponse]:
    """Búsqueda por código, ubicación, id, tipo de muestra o fecha de recolección."""
    if not search or not search.strip():
        return samples
    term = search.strip().lower()

    def matches(s: SampleResponse) -> bool:
        return (
            term in (s.sample_code or "").lower()
            or term in (s.collection_location or "").lower()
            or term in str(s.sample_id)
            or term in (s.sample_type_name or "").lower()
            or (s.sample_type_id is not None and term in str(s.sample_type_id))
            or term in (s.collection_date or "").lower()
        )

    return [s for s in samples if matches(s)]


async def _type_names(backend: LimsClient) -> dict[int, str]:
    try:
        types = await catalog_service.list_sample_types(backend)
    except HTTPException as exc:
        # Sin catálogo la tabla se muestra igual, sin nombre de tipo
        logger.warning(f"No se pudieron cargar los tipos de muestra: {exc.detail}")
        return {}
    return catalog_service.sample_type_names(types)


async def list_samples(backend: LimsClient) -> list[SampleResponse]:
    rows, names = await asyncio.gather(
        backend.get_list("/api/samples"),
        _type_names(backend),
    )
    samples = unique_by(
        (SampleResponse.model_validate(r) for r in rows), lambda s: s.sample_id
    )
    for sample in samples:
        sample.sample_type_name = names.get(sample.sample_type_id)
    return sorted(samples, key=lambda s: s.sample_id, reverse=True)


async def get_sample(backend: LimsClient, sample_id: int) -> SampleResponse:
    data = await backend.get(f"/api/samples/{sample_id}")
    if not data:
        raise NotFoundException("Muestra", detail="Muestra no encontrada")
    return SampleResponse.model_validate(data)


async def get_sample_by_code(backend: LimsClient, code: str) -> SampleResponse:
    data = await backend.get(f"/api/samples/code/{code}")
    if not data:
        raise NotFoundException("Muestra", detail=f"No existe una muestra con código {code}")
    return SampleResponse.model_validate(data)


async def list_samples_by_request(backend: LimsClient, request_id: int) -> list[SampleResponse]:
    rows = await backend.get_list(f"/api/samples/request/{request_id}")
    return [SampleResponse.model_validate(r) for r in rows]


async def get_sample_view(
    backend: LimsClient,
    search: str | None = None,
    selected: list[int] | None = None,
) -> SampleListView:
    samples = await list_samples(backend)
    selection = SelectionState(selected)
    selection.on_reload(s.sample_id for s in samples)
    filtered = filter_samples(samples, search)
    return SampleListView(
        items=[to_row(s) for s in filtered],
        summary=summarize_samples(samples, selection.ids),
    )


# ── Mutaciones ───────────────────────────────────────

async def create_sample(backend: LimsClient, data: SampleCreate) -> SampleListView:
    await backend.post("/api/samples", json=data.model_dump())
    logger.info(f"Muestra registrada para la solicitud {data.service_request_id}")
    return await get_sample_view(backend)


async def update_sample(backend: LimsClient, sample_id: int, data: SampleUpdate) -> SampleListView:
    await backend.put(f"/api/samples/{sample_id}", json=data.model_dump(exclude_none=True))
    logger.info(f"Muestra actualizada: {sample_id}")
    return await get_sample_view(backend)


async def mark_analyzed(
    backend: LimsClient, sample_id: int, comments: str | None = None
) -> SampleListView:
    """Pasa la muestra a ANALIZADA (4). Solo aplica a muestras pendientes."""
    sample = await get_sample(backend, sample_id)
    if UIAction.MARK_ANALYZED not in classification_of(sample).actions:
        raise ConflictException("La muestra ya fue analizada o está archivada")

    payload: dict = {"current_status_id": int(SampleStatus.ANALYZED)}
    if comments and comments.strip():
        payload["comments"] = comments.strip()
    await backend.put(f"/api/samples/{sample_id}", json=payload)
    logger.info(f"Muestra {sample_id} marcada como analizada")
    return await get_sample_view(backend)


async def archive_sample(
    backend: LimsClient, sample_id: int, comments: str | None = None
) -> SampleListView:
    payload = {"comments": comments.strip()} if comments and comments.strip() else None
    await backend.patch(f"/api/samples/{sample_id}", json=payload)
    logger.info(f"Muestra archivada: {sample_id}")
    return await get_sample_view(backend)


async def restore_sample(backend: LimsClient, sample_id: int) -> SampleListView:
    await backend.patch(f"/api/samples/restaurar/{sample_id}")
    logger.info(f"Muestra restaurada: {sample_id}")
    return await get_sample_view(backend)
