"""
Schemas de tarjetas resumen y vistas de listado (items + resumen).
"""

from pydantic import BaseModel, Field

from app.models.icons import Icon
from app.schemas.analysis import AnalysisResultRow
from app.schemas.customer import CustomerRow
from app.schemas.request import ServiceRequestRow
from app.schemas.sample import SampleRow


class SummaryCard(BaseModel):
    title: str
    value: int = 0
    icon: Icon
    color: str = "blue"


class EntitySummary(BaseModel):
    """Contadores de una entidad + sus 4 tarjetas (la 4ª siempre es la selección)."""
    entity: str
    counters: dict[str, int] = Field(default_factory=dict)
    selected: int = 0
    cards: list[SummaryCard] = Field(default_factory=list)


class ClientListView(BaseModel):
    items: list[CustomerRow]
    summary: EntitySummary


class RequestListView(BaseModel):
    items: list[ServiceRequestRow]
    summary: EntitySummary


class SampleListView(BaseModel):
    items: list[SampleRow]
    summary: EntitySummary


class ResultListView(BaseModel):
    items: list[AnalysisResultRow]
    summary: EntitySummary
