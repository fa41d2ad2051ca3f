"""
Schemas de catálogos: tipos de muestra, estados, tipos de servicio y personal.
"""

from decimal import Decimal

from pydantic import AliasChoices, BaseModel, EmailStr, Field

from app.models.states import EntityState


# ── Tipos de muestra ─────────────────────────────────


class SampleTypeIn(BaseModel):
    type_name: str = Field(..., min_length=1, max_length=100)
    description: str | None = None


class SampleTypeResponse(BaseModel):
    sample_type_id: int = Field(validation_alias=AliasChoices("sample_type_id", "id"))
    type_name: str | None = None
    description: str | None = None


# ── Estados de muestra ───────────────────────────────


class SampleStatusResponse(BaseModel):
    status_id: int = Field(validation_alias=AliasChoices("status_id", "sample_status_id", "id"))
    status_name: str | None = None
    description: str | None = None


# ── Tipos de servicio ────────────────────────────────


class ServiceTypeIn(BaseModel):
    service_name: str = Field(..., min_length=1, max_length=150)
    description: str | None = None
    unit_price: Decimal = Field(Decimal("0.00"), ge=0)
    estimated_duration_d: int | None = Field(None, ge=0)
    state: EntityState = EntityState.ACTIVE


class ServiceTypeResponse(BaseModel):
    service_type_id: int = Field(validation_alias=AliasChoices("service_type_id", "id"))
    service_name: str | None = None
    description: str | None = None
    unit_price: Decimal = Decimal("0.00")
    estimated_duration_d: int | None = None
    state: str | None = None


# ── Personal ─────────────────────────────────────────


class AnalystIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    specialty: str = Field(..., min_length=1, max_length=100)
    state: EntityState = EntityState.ACTIVE


class ReceptionistIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    state: EntityState = EntityState.ACTIVE


class StaffResponse(BaseModel):
    staff_id: int = Field(
        validation_alias=AliasChoices("analyst_id", "receptionist_id", "id")
    )
    name: str | None = None
    surname: str | None = None
    specialty: str | None = None
    email: str | None = None
    state: str | None = None
