"""
Schemas para muestras físicas.
"""

from pydantic import AliasChoices, BaseModel, Field, field_validator

from app.models.states import UIAction


class SampleCreate(BaseModel):
    collection_date: str = Field(..., min_length=8, description="Fecha de recolección (YYYY-MM-DD)")
    collection_location: str = Field(..., min_length=1, max_length=200)
    sample_type_id: int = Field(..., ge=1)
    service_request_id: int = Field(..., ge=1)

    @field_validator("collection_location")
    @classmethod
    def strip_location(cls, v: str) -> str:
        cleaned = v.strip()
        if not cleaned:
            raise ValueError("La ubicación de recolección es obligatoria")
        return cleaned


class SampleUpdate(BaseModel):
    collection_date: str | None = None
    collection_location: str | None = Field(None, max_length=200)
    sample_type_id: int | None = Field(None, ge=1)
    service_request_id: int | None = Field(None, ge=1)


class SampleAnalyzedRequest(BaseModel):
    comments: str | None = Field(None, max_length=500)


class SampleArchiveRequest(BaseModel):
    comments: str | None = Field(None, max_length=500, description="Motivo de la eliminación")


class SampleResponse(BaseModel):
    sample_id: int = Field(validation_alias=AliasChoices("sample_id", "id"))
    sample_code: str | None = None
    collection_date: str | None = None
    collection_location: str | None = None
    sample_type_id: int | None = None
    sample_type_name: str | None = None
    service_request_id: int | None = None
    current_status_id: int | None = None
    is_deleted: bool | int | None = None


class SampleClassificationResponse(BaseModel):
    status_id: int
    status_label: str
    status_color: str
    status_icon: str
    is_archived: bool
    is_analyzed: bool
    is_pending: bool
    actions: list[UIAction]


class SampleRow(SampleResponse):
    """Muestra con la clasificación y las acciones que la tabla puede mostrar."""
    classification: SampleClassificationResponse
