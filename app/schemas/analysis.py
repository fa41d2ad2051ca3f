"""
Schemas para resultados y parámetros de análisis.
"""

from pydantic import AliasChoices, BaseModel, Field

from app.models.states import UIAction


class AnalysisResultCreate(BaseModel):
    sample_id: int = Field(..., ge=1)
    analysis_parameter_id: int = Field(..., ge=1)
    result_value: float | str
    analysis_date: str | None = None
    comments: str | None = Field(None, max_length=500)
    analyst_id: int | None = None


class AnalysisResultUpdate(BaseModel):
    analysis_parameter_id: int | None = None
    result_value: float | str | None = None
    analysis_date: str | None = None
    comments: str | None = Field(None, max_length=500)
    analyst_id: int | None = None


class AnalysisResultDelete(BaseModel):
    comments: str | None = Field(None, max_length=500)


class AnalysisResultResponse(BaseModel):
    analysis_result_id: int = Field(
        validation_alias=AliasChoices("analysis_result_id", "id")
    )
    sample_id: int | None = None
    analysis_parameter_id: int | None = None
    parameter_name: str | None = None
    unit: str | None = None
    result_value: float | str | None = None
    analysis_date: str | None = None
    comments: str | None = None
    analyst_id: int | None = None
    is_deleted: bool | int | None = None
    deleted_at: str | None = None


class AnalysisResultRow(AnalysisResultResponse):
    actions: list[UIAction]


class AnalysisParameterIn(BaseModel):
    parameter_name: str = Field(..., min_length=1, max_length=100)
    unit: str | None = Field(None, max_length=30)
    description: str | None = None


class AnalysisParameterResponse(BaseModel):
    analysis_parameter_id: int = Field(
        validation_alias=AliasChoices("analysis_parameter_id", "id")
    )
    parameter_name: str | None = None
    unit: str | None = None
    description: str | None = None
