"""
Endpoints de resultados de análisis.
"""

from typing import Literal

from fastapi import APIRouter, Depends, Query

from app.api.responses import export_response
from app.backend import LimsClient, get_backend
from app.schemas.analysis import (
    AnalysisResultCreate,
    AnalysisResultDelete,
    AnalysisResultResponse,
    AnalysisResultUpdate,
)
from app.schemas.summary import ResultListView
from app.services import analysis_service, export_service

router = APIRouter()


@router.get("", response_model=ResultListView)
async def list_results(
    search: str | None = Query(None, description="ID, muestra, parámetro o valor"),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    """Lista resultados (incluye eliminados) con tarjetas resumen."""
    return await analysis_service.get_result_view(backend, search, selected)


@router.get("/export/{fmt}")
async def export_results(
    fmt: Literal["xlsx", "pdf"],
    search: str | None = Query(None),
    selected: list[int] | None = Query(None),
    backend: LimsClient = Depends(get_backend),
):
    export = await export_service.export_results(backend, fmt, search, selected)
    return export_response(export)


@router.get("/sample/{sample_id}", response_model=list[AnalysisResultResponse])
async def list_results_by_sample(
    sample_id: int,
    include_deleted: bool = Query(False),
    backend: LimsClient = Depends(get_backend),
):
    return await analysis_service.list_results_by_sample(backend, sample_id, include_deleted)


@router.get("/{result_id}", response_model=AnalysisResultResponse)
async def get_result(result_id: int, backend: LimsClient = Depends(get_backend)):
    return await analysis_service.get_result(backend, result_id)


@router.post("", response_model=ResultListView, status_code=201)
async def create_result(data: AnalysisResultCreate, backend: LimsClient = Depends(get_backend)):
    return await analysis_service.create_result(backend, data)


@router.put("/{result_id}", response_model=ResultListView)
async def update_result(
    result_id: int,
    data: AnalysisResultUpdate,
    backend: LimsClient = Depends(get_backend),
):
    return await analysis_service.update_result(backend, result_id, data)


@router.patch("/{result_id}/delete", response_model=ResultListView)
async def delete_result(
    result_id: int,
    data: AnalysisResultDelete | None = None,
    backend: LimsClient = Depends(get_backend),
):
    """Eliminación lógica del resultado."""
    comments = data.comments if data else None
    return await analysis_service.delete_result(backend, result_id, comments)


@router.patch("/{result_id}/restore", response_model=ResultListView)
async def restore_result(result_id: int, backend: LimsClient = Depends(get_backend)):
    return await analysis_service.restore_result(backend, result_id)
