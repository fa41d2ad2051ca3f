"""
Endpoints de muestras: registro, marcado como analizada, archivado y restauración.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from app.api.responses import export_response
from app.backend import LimsClient, get_backend
from app.schemas.sample import (
    SampleAnalyzedRequest,
    SampleArchiveRequest,
    SampleClassificationResponse,
    SampleCreate,
    SampleResponse,
    SampleRow,
    SampleUpdate,
)
from app.schemas.summary import SampleListView
from app.services import export_service, sample_service

router = APIRouter()


@router.get("", response_model=SampleListView)
async def list_samples(
    search: str | None = Query(None, description="Código, ubicación, ID, tipo o fecha"),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Lista muestras (más recientes primero) con su clasificación y tarjetas resumen."""
    return await sample_service.get_sample_view(backend, search, selected)


@router.get("/export/{fmt}")
async def export_samples(
    fmt: Literal["xlsx", "pdf"],
    search: str | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    export = await export_service.export_samples(backend, fmt, search, selected)
    return export_response(export)


@router.get("/code/{code}", response_model=SampleRow)
async def get_sample_by_code(code: str, backend: LimsClient = Depends(get_backend)):
    sample = await sample_service.get_sample_by_code(backend, code)
    return sample_service.to_row(sample)


@router.get("/request/{request_id}", response_model=list[SampleRow])
async def list_samples_by_request(request_id: int, backend: LimsClient = Depends(get_backend)):
    """Muestras asociadas a una solicitud."""
    samples = await sample_service.list_samples_by_request(backend, request_id)
    return [sample_service.to_row(s) for s in samples]


@router.get("/{sample_id}", response_model=SampleRow)
async def get_sample(sample_id: int, backend: LimsClient = Depends(get_backend)):
    sample = await sample_service.get_sample(backend, sample_id)
    return sample_service.to_row(sample)


@router.get("/{sample_id}/classification", response_model=SampleClassificationResponse)
async def get_sample_classification(sample_id: int, backend: LimsClient = Depends(get_backend)):
    """Estado, etiqueta y acciones disponibles de una muestra."""
    sample: SampleResponse = await sample_service.get_sample(backend, sample_id)
    return sample_service.classification_of(sample)


@router.post("", response_model=SampleListView, status_code=201)
async def create_sample(data: SampleCreate, backend: LimsClient = Depends(get_backend)):
    return await sample_service.create_sample(backend, data)


@router.put("/{sample_id}", response_model=SampleListView)
async def update_sample(
    sample_id: int,
    data: SampleUpdate,
    backend: LimsClient = Depends(get_backend),
):
    return await sample_service.update_sample(backend, sample_id, data)


@router.patch("/{sample_id}/analyzed", response_model=SampleListView)
async def mark_sample_analyzed(
    sample_id: int,
    data: SampleAnalyzedRequest | None = None,
    backend: LimsClient = Depends(get_backend),
):
    """Marca la muestra como ANALIZADA (estado 4)."""
    comments = data.comments if data else None
    return await sample_service.mark_analyzed(backend, sample_id, comments)


@router.patch("/{sample_id}/archive", response_model=SampleListView)
async def archive_sample(
    sample_id: int,
    data: SampleArchiveRequest | None = None,
    backend: LimsClient = Depends(get_backend),
):
    """Eliminación lógica: la muestra pasa a ARCHIVADA."""
    comments = data.comments if data else None
    return await sample_service.archive_sample(backend, sample_id, comments)


@router.patch("/{sample_id}/restore", response_model=SampleListView)
async def restore_sample(sample_id: int, backend: LimsClient = Depends(get_backend)):
    """Devuelve una muestra archivada a REGISTRADA."""
    return await sample_service.restore_sample(backend, sample_id)
