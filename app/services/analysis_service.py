"""
Resultados de análisis. Eliminación lógica con comentario opcional.
"""

import logging

from app.backend import LimsClient
from app.core.exceptions import NotFoundException
from app.schemas.analysis import (
    AnalysisResultCreate,
    AnalysisResultResponse,
    AnalysisResultRow,
    AnalysisResultUpdate,
)
from app.schemas.summary import ResultListView
from app.services.sample_lifecycle import result_actions
from app.services.summary_service import SelectionState, summarize_results, unique_by

logger = logging.getLogger(__name__)

_INCLUDE_DELETED = {"include_deleted": "true"}


def to_row(result: AnalysisResultResponse) -> AnalysisResultRow:
    return AnalysisResultRow(**result.model_dump(), actions=result_actions(result.is_deleted))


def filter_results(
    results: list[AnalysisResultResponse], search: str | None = None
) -> list[AnalysisResultResponse]:
    """Búsqueda por id de resultado, id de muestra, parámetro o valor."""
    if not search:
        return results
    term = search.strip().lower()
    return [
        r for r in results
        if term in str(r.analysis_result_id)
        or (r.sample_id is not None and term in str(r.sample_id))
        or term in (r.parameter_name or "").lower()
        or (r.result_value is not None and term in str(r.result_value).lower())
    ]


async def list_results(
    backend: LimsClient, include_deleted: bool = True
) -> list[AnalysisResultResponse]:
    params = _INCLUDE_DELETED if include_deleted else None
    rows = await backend.get_list("/api/analysis-results", params=params)
    results = [AnalysisResultResponse.model_validate(r) for r in rows]
    return unique_by(results, lambda r: r.analysis_result_id)


async def list_results_by_sample(
    backend: LimsClient, sample_id: int, include_deleted: bool = False
) -> list[AnalysisResultResponse]:
    params = _INCLUDE_DELETED if include_deleted else None
    rows = await backend.get_list(f"/api/analysis-results/sample/{sample_id}", params=params)
    return [AnalysisResultResponse.model_validate(r) for r in rows]


async def get_result(backend: LimsClient, result_id: int) -> AnalysisResultResponse:
    data = await backend.get(f"/api/analysis-results/{result_id}")
    if not data:
        raise NotFoundException("Resultado", detail="Resultado no encontrado")
    return AnalysisResultResponse.model_validate(data)


async def get_result_view(
    backend: LimsClient,
    search: str | None = None,
    selected: list[int] | None = None,
) -> ResultListView:
    results = await list_results(backend)
    selection = SelectionState(selected)
    selection.on_reload(r.analysis_result_id for r in results)
    filtered = filter_results(results, search)
    return ResultListView(
        items=[to_row(r) for r in filtered],
        summary=summarize_results(results, selection.ids),
    )


# ── Mutaciones ───────────────────────────────────────

async def create_result(backend: LimsClient, data: AnalysisResultCreate) -> ResultListView:
    await backend.post("/api/analysis-results", json=data.model_dump(exclude_none=True))
    logger.info(f"Resultado registrado para la muestra {data.sample_id}")
    return await get_result_view(backend)


async def update_result(
    backend: LimsClient, result_id: int, data: AnalysisResultUpdate
) -> ResultListView:
    await backend.put(f"/api/analysis-results/{result_id}", json=data.model_dump(exclude_none=True))
    logger.info(f"Resultado actualizado: {result_id}")
    return await get_result_view(backend)


async def delete_result(
    backend: LimsClient, result_id: int, comments: str | None = None
) -> ResultListView:
    payload = {"comments": comments.strip()} if comments and comments.strip() else None
    await backend.patch(f"/api/analysis-results/{result_id}", json=payload)
    logger.info(f"Resultado eliminado (lógico): {result_id}")
    return await get_result_view(backend)


async def restore_result(backend: LimsClient, result_id: int) -> ResultListView:
    await backend.patch(f"/api/analysis-results/restaurar/{result_id}")
    logger.info(f"Resultado restaurado: {result_id}")
    return await get_result_view(backend)
