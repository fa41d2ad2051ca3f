"""
Catálogos del backend: tipos de muestra, estados, tipos de servicio y
parámetros de análisis.
"""

import logging

from app.backend import LimsClient
from app.core.exceptions import NotFoundException
from app.schemas.analysis import AnalysisParameterIn, AnalysisParameterResponse
from app.schemas.catalog import (
    SampleStatusResponse,
    SampleTypeIn,
    SampleTypeResponse,
    ServiceTypeIn,
    ServiceTypeResponse,
)

logger = logging.getLogger(__name__)


# ── Tipos de muestra ─────────────────────────────────

async def list_sample_types(backend: LimsClient) -> list[SampleTypeResponse]:
    rows = await backend.get_list("/api/sample-types")
    return [SampleTypeResponse.model_validate(r) for r in rows]


async def get_sample_type(backend: LimsClient, sample_type_id: int) -> SampleTypeResponse:
    data = await backend.get(f"/api/sample-types/{sample_type_id}")
    if not data:
        raise NotFoundException("Tipo de muestra")
    return SampleTypeResponse.model_validate(data)


async def create_sample_type(backend: LimsClient, data: SampleTypeIn) -> SampleTypeResponse:
    created = await backend.post("/api/sample-types", json=data.model_dump())
    logger.info(f"Tipo de muestra creado: {data.type_name}")
    return SampleTypeResponse.model_validate(created)


async def update_sample_type(
    backend: LimsClient, sample_type_id: int, data: SampleTypeIn
) -> SampleTypeResponse:
    await backend.put(f"/api/sample-types/{sample_type_id}", json=data.model_dump())
    return await get_sample_type(backend, sample_type_id)


def sample_type_names(types: list[SampleTypeResponse]) -> dict[int, str]:
    return {t.sample_type_id: t.type_name or "" for t in types}


# ── Estados de muestra ───────────────────────────────

async def list_sample_statuses(
    backend: LimsClient, active_only: bool = False
) -> list[SampleStatusResponse]:
    path = "/api/sample-status/active" if active_only else "/api/sample-status"
    rows = await backend.get_list(path)
    return [SampleStatusResponse.model_validate(r) for r in rows]


async def get_sample_status(backend: LimsClient, status_id: int) -> SampleStatusResponse:
    data = await backend.get(f"/api/sample-status/{status_id}")
    if not data:
        raise NotFoundException("Estado de muestra")
    return SampleStatusResponse.model_validate(data)


# ── Tipos de servicio ────────────────────────────────

async def list_service_types(backend: LimsClient) -> list[ServiceTypeResponse]:
    rows = await backend.get_list("/api/service-types")
    return [ServiceTypeResponse.model_validate(r) for r in rows]


async def get_service_type(backend: LimsClient, service_type_id: int) -> ServiceTypeResponse:
    data = await backend.get(f"/api/service-types/{service_type_id}")
    if not data:
        raise NotFoundException("Tipo de servicio")
    return ServiceTypeResponse.model_validate(data)


async def create_service_type(backend: LimsClient, data: ServiceTypeIn) -> ServiceTypeResponse:
    created = await backend.post("/api/service-types", json=data.model_dump(mode="json"))
    logger.info(f"Tipo de servicio creado: {data.service_name}")
    return ServiceTypeResponse.model_validate(created)


async def update_service_type(
    backend: LimsClient, service_type_id: int, data: ServiceTypeIn
) -> ServiceTypeResponse:
    await backend.put(f"/api/service-types/{service_type_id}", json=data.model_dump(mode="json"))
    return await get_service_type(backend, service_type_id)


async def set_service_type_active(
    backend: LimsClient, service_type_id: int, active: bool
) -> ServiceTypeResponse:
    action = "activate" if active else "deactivate"
    await backend.patch(f"/api/service-types/{service_type_id}/{action}")
    logger.info(f"Tipo de servicio {service_type_id}: {action}")
    return await get_service_type(backend, service_type_id)


# ── Parámetros de análisis ───────────────────────────

async def list_parameters(backend: LimsClient) -> list[AnalysisParameterResponse]:
    rows = await backend.get_list("/api/analysis-parameters")
    return [AnalysisParameterResponse.model_validate(r) for r in rows]


async def get_parameter(backend: LimsClient, parameter_id: int) -> AnalysisParameterResponse:
    data = await backend.get(f"/api/analysis-parameters/{parameter_id}")
    if not data:
        raise NotFoundException("Parámetro de análisis")
    return AnalysisParameterResponse.model_validate(data)


async def create_parameter(
    backend: LimsClient, data: AnalysisParameterIn
) -> AnalysisParameterResponse:
    created = await backend.post("/api/analysis-parameters", json=data.model_dump())
    return AnalysisParameterResponse.model_validate(created)


async def update_parameter(
    backend: LimsClient, parameter_id: int, data: AnalysisParameterIn
) -> AnalysisParameterResponse:
    await backend.put(f"/api/analysis-parameters/{parameter_id}", json=data.model_dump())
    return await get_parameter(backend, parameter_id)
