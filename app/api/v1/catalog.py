"""
Endpoints de catálogos: tipos de muestra, estados, tipos de servicio,
parámetros de análisis y personal.
"""

from fastapi import APIRouter, Depends, Query

from app.backend import LimsClient, get_backend
from app.schemas.analysis import AnalysisParameterIn, AnalysisParameterResponse
from app.schemas.catalog import (
    AnalystIn,
    ReceptionistIn,
    SampleStatusResponse,
    SampleTypeIn,
    SampleTypeResponse,
    ServiceTypeIn,
    ServiceTypeResponse,
    StaffResponse,
)
from app.services import catalog_service, staff_service
from app.services.staff_service import StaffKind

router = APIRouter()


# ── Tipos de muestra ─────────────────────────────────

@router.get("/sample-types", response_model=list[SampleTypeResponse])
async def list_sample_types(backend: LimsClient = Depends(get_backend)):
    return await catalog_service.list_sample_types(backend)


@router.get("/sample-types/{sample_type_id}", response_model=SampleTypeResponse)
async def get_sample_type(sample_type_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.get_sample_type(backend, sample_type_id)


@router.post("/sample-types", response_model=SampleTypeResponse, status_code=201)
async def create_sample_type(data: SampleTypeIn, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.create_sample_type(backend, data)


@router.put("/sample-types/{sample_type_id}", response_model=SampleTypeResponse)
async def update_sample_type(
    sample_type_id: int,
    data: SampleTypeIn,
    backend: LimsClient = Depends(get_backend),
):
    return await catalog_service.update_sample_type(backend, sample_type_id, data)


# ── Estados de muestra ───────────────────────────────

@router.get("/sample-statuses", response_model=list[SampleStatusResponse])
async def list_sample_statuses(
    active_only: bool = Query(False),
    backend: LimsClient = Depends(get_backend),
):
    return await catalog_service.list_sample_statuses(backend, active_only)


@router.get("/sample-statuses/{status_id}", response_model=SampleStatusResponse)
async def get_sample_status(status_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.get_sample_status(backend, status_id)


# ── Tipos de servicio ────────────────────────────────

@router.get("/service-types", response_model=list[ServiceTypeResponse])
async def list_service_types(backend: LimsClient = Depends(get_backend)):
    """Catálogo de servicios con precio unitario."""
    return await catalog_service.list_service_types(backend)


@router.get("/service-types/{service_type_id}", response_model=ServiceTypeResponse)
async def get_service_type(service_type_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.get_service_type(backend, service_type_id)


@router.post("/service-types", response_model=ServiceTypeResponse, status_code=201)
async def create_service_type(data: ServiceTypeIn, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.create_service_type(backend, data)


@router.put("/service-types/{service_type_id}", response_model=ServiceTypeResponse)
async def update_service_type(
    service_type_id: int,
    data: ServiceTypeIn,
    backend: LimsClient = Depends(get_backend),
):
    return await catalog_service.update_service_type(backend, service_type_id, data)


@router.patch("/service-types/{service_type_id}/activate", response_model=ServiceTypeResponse)
async def activate_service_type(service_type_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.set_service_type_active(backend, service_type_id, True)


@router.patch("/service-types/{service_type_id}/deactivate", response_model=ServiceTypeResponse)
async def deactivate_service_type(service_type_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.set_service_type_active(backend, service_type_id, False)


# ── Parámetros de análisis ───────────────────────────

@router.get("/analysis-parameters", response_model=list[AnalysisParameterResponse])
async def list_parameters(backend: LimsClient = Depends(get_backend)):
    return await catalog_service.list_parameters(backend)


@router.get("/analysis-parameters/{parameter_id}", response_model=AnalysisParameterResponse)
async def get_parameter(parameter_id: int, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.get_parameter(backend, parameter_id)


@router.post("/analysis-parameters", response_model=AnalysisParameterResponse, status_code=201)
async def create_parameter(data: AnalysisParameterIn, backend: LimsClient = Depends(get_backend)):
    return await catalog_service.create_parameter(backend, data)


@router.put("/analysis-parameters/{parameter_id}", response_model=AnalysisParameterResponse)
async def update_parameter(
    parameter_id: int,
    data: AnalysisParameterIn,
    backend: LimsClient = Depends(get_backend),
):
    return await catalog_service.update_parameter(backend, parameter_id, data)


# ── Personal ─────────────────────────────────────────

@router.get("/staff/{kind}", response_model=list[StaffResponse])
async def list_staff(kind: StaffKind, backend: LimsClient = Depends(get_backend)):
    """Lista analistas o recepcionistas."""
    return await staff_service.list_staff(backend, kind)


@router.get("/staff/{kind}/{staff_id}", response_model=StaffResponse)
async def get_staff(kind: StaffKind, staff_id: int, backend: LimsClient = Depends(get_backend)):
    return await staff_service.get_staff(backend, kind, staff_id)


@router.post("/staff/analysts", response_model=StaffResponse, status_code=201)
async def create_analyst(data: AnalystIn, backend: LimsClient = Depends(get_backend)):
    return await staff_service.create_staff(backend, StaffKind.ANALYST, data)


@router.post("/staff/receptionists", response_model=StaffResponse, status_code=201)
async def create_receptionist(data: ReceptionistIn, backend: LimsClient = Depends(get_backend)):
    return await staff_service.create_staff(backend, StaffKind.RECEPTIONIST, data)


@router.put("/staff/analysts/{staff_id}", response_model=StaffResponse)
async def update_analyst(staff_id: int, data: AnalystIn, backend: LimsClient = Depends(get_backend)):
    return await staff_service.update_staff(backend, StaffKind.ANALYST, staff_id, data)


@router.put("/staff/receptionists/{staff_id}", response_model=StaffResponse)
async def update_receptionist(
    staff_id: int,
    data: ReceptionistIn,
    backend: LimsClient = Depends(get_backend),
):
    return await staff_service.update_staff(backend, StaffKind.RECEPTIONIST, staff_id, data)


@router.patch("/staff/{kind}/{staff_id}/activate", response_model=StaffResponse)
async def activate_staff(kind: StaffKind, staff_id: int, backend: LimsClient = Depends(get_backend)):
    return await staff_service.set_staff_active(backend, kind, staff_id, True)


@router.patch("/staff/{kind}/{staff_id}/deactivate", response_model=StaffResponse)
async def deactivate_staff(kind: StaffKind, staff_id: int, backend: LimsClient = Depends(get_backend)):
    return await staff_service.set_staff_active(backend, kind, staff_id, False)
