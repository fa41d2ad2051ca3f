"""
Tarjetas resumen de cada listado.

Todas siguen el mismo esquema:
1. Deduplicar por llave primaria (se conserva la primera aparición).
2. Contar por el discriminante de la entidad.
3. Armar 4 tarjetas; la 4ª es la cantidad de seleccionados y se puede
   recalcular sola con with_selection() sin volver a cargar datos.
"""

from collections.abc import Callable, Hashable, Iterable
from datetime import datetime
from typing import TypeVar

from app.core.dates import is_same_month
from app.models.icons import Icon
from app.models.states import EntityState, RequestStatus
from app.schemas.analysis import AnalysisResultResponse
from app.schemas.customer import CustomerResponse
from app.schemas.request import ServiceRequestResponse
from app.schemas.sample import SampleResponse
from app.schemas.summary import EntitySummary, SummaryCard
from app.services.sample_lifecycle import classify, is_deleted_flag

T = TypeVar("T")


def unique_by(items: Iterable[T], key: Callable[[T], Hashable]) -> list[T]:
    """Quita duplicados por llave conservando el orden y la primera aparición."""
    seen: set = set()
    unique: list[T] = []
    for item in items:
        k = key(item)
        if k in seen:
            continue
        seen.add(k)
        unique.append(item)
    return unique


def count_selected(selected: Iterable[Hashable] | None) -> int:
    return len(set(selected or ()))


def _selection_card(title: str, count: int, color: str = "purple") -> SummaryCard:
    return SummaryCard(title=title, value=count, icon=Icon.CHECK, color=color)


def with_selection(summary: EntitySummary, selected: Iterable[Hashable] | None) -> EntitySummary:
    """Recalcula solo la tarjeta de seleccionados. No modifica el resumen original."""
    count = count_selected(selected)
    cards = list(summary.cards)
    if cards:
        last = cards[-1]
        cards[-1] = last.model_copy(update={"value": count})
    return summary.model_copy(update={"selected": count, "cards": cards})


# ── Clientes ─────────────────────────────────────────

def summarize_clients(
    clients: Iterable[CustomerResponse],
    selected: Iterable[Hashable] | None = None,
) -> EntitySummary:
    unique = unique_by(clients, lambda c: c.customer_id)
    active = sum(1 for c in unique if c.state == EntityState.ACTIVE)
    inactive = sum(1 for c in unique if c.state == EntityState.INACTIVE)
    selected_count = count_selected(selected)
    return EntitySummary(
        entity="clients",
        counters={"total": len(unique), "active": active, "inactive": inactive},
        selected=selected_count,
        cards=[
            SummaryCard(title="Total de Clientes", value=len(unique), icon=Icon.USERS, color="blue"),
            SummaryCard(title="Clientes Activos", value=active, icon=Icon.CHECK_CIRCLE, color="green"),
            SummaryCard(title="Clientes Inactivos", value=inactive, icon=Icon.POWER_OFF, color="red"),
            _selection_card("Seleccionados", selected_count),
        ],
    )


# ── Solicitudes ──────────────────────────────────────

def summarize_requests(
    requests: Iterable[ServiceRequestResponse],
    selected: Iterable[Hashable] | None = None,
) -> EntitySummary:
    unique = unique_by(requests, lambda r: r.service_request_id)
    completed = sum(1 for r in unique if r.status == RequestStatus.COMPLETED)
    pending = sum(1 for r in unique if r.status == RequestStatus.PENDING)
    cancelled = sum(1 for r in unique if r.status == RequestStatus.CANCELLED)
    selected_count = count_selected(selected)
    return EntitySummary(
        entity="requests",
        counters={
            "total": len(unique),
            "completed": completed,
            "pending": pending,
            "cancelled": cancelled,
        },
        selected=selected_count,
        cards=[
            SummaryCard(title="Total Solicitudes", value=len(unique), icon=Icon.FILE_ALT, color="blue"),
            SummaryCard(title="Completadas", value=completed, icon=Icon.CHECK_CIRCLE, color="green"),
            SummaryCard(title="En Proceso", value=pending, icon=Icon.SPINNER, color="yellow"),
            _selection_card("Seleccionadas", selected_count),
        ],
    )


# ── Muestras ─────────────────────────────────────────

def summarize_samples(
    samples: Iterable[SampleResponse],
    selected: Iterable[Hashable] | None = None,
) -> EntitySummary:
    unique = unique_by(samples, lambda s: s.sample_id)
    classified = [classify(s.current_status_id, s.is_deleted) for s in unique]
    archived = sum(1 for c in classified if c.is_archived)
    analyzed = sum(1 for c in classified if c.is_analyzed and not c.is_archived)
    pending = sum(1 for c in classified if c.is_pending)
    total = len(unique) - archived
    selected_count = count_selected(selected)
    return EntitySummary(
        entity="samples",
        counters={
            "total": total,
            "analyzed": analyzed,
            "pending": pending,
            "archived": archived,
        },
        selected=selected_count,
        cards=[
            SummaryCard(title="Total Muestras", value=total, icon=Icon.VIAL, color="blue"),
            SummaryCard(title="Analizadas", value=analyzed, icon=Icon.CHECK_CIRCLE, color="green"),
            SummaryCard(title="Pendientes", value=pending, icon=Icon.CLOCK, color="yellow"),
            _selection_card("Seleccionadas", selected_count),
        ],
    )


# ── Resultados ───────────────────────────────────────

def summarize_results(
    results: Iterable[AnalysisResultResponse],
    selected: Iterable[Hashable] | None = None,
    now: datetime | None = None,
) -> EntitySummary:
    unique = unique_by(results, lambda r: r.analysis_result_id)
    live = [r for r in unique if not is_deleted_flag(r.is_deleted)]
    deleted = len(unique) - len(live)
    this_month = sum(1 for r in live if is_same_month(r.analysis_date, now))
    samples_analyzed = len({r.sample_id for r in live if r.sample_id is not None})
    selected_count = count_selected(selected)
    return EntitySummary(
        entity="results",
        counters={
            "total": len(live),
            "deleted": deleted,
            "this_month": this_month,
            "samples_analyzed": samples_analyzed,
        },
        selected=selected_count,
        cards=[
            SummaryCard(title="Total Resultados", value=len(live), icon=Icon.FLASK, color="blue"),
            SummaryCard(title="Este Mes", value=this_month, icon=Icon.CALENDAR, color="green"),
            SummaryCard(title="Muestras Analizadas", value=samples_analyzed, icon=Icon.MICROSCOPE, color="purple"),
            _selection_card("Seleccionados", selected_count, color="indigo"),
        ],
    )


# ── Selección ────────────────────────────────────────

class SelectionState:
    """
    Conjunto de ids seleccionados en una tabla.

    Se vacía cuando una recarga trae un conjunto de ids distinto al anterior,
    o cuando alguno de los seleccionados ya no existe.
    """

    def __init__(self, selected: Iterable[Hashable] | None = None):
        self._selected: set = set(selected or ())
        self._identity: frozenset | None = None

    @property
    def ids(self) -> set:
        return set(self._selected)

    @property
    def count(self) -> int:
        return len(self._selected)

    def toggle(self, item_id: Hashable) -> None:
        if item_id in self._selected:
            self._selected.discard(item_id)
        else:
            self._selected.add(item_id)

    def select_all(self, ids: Iterable[Hashable]) -> None:
        self._selected = set(ids)

    def clear(self) -> None:
        self._selected.clear()

    def on_reload(self, ids: Iterable[Hashable]) -> bool:
        """Registra el resultado de una recarga. Retorna True si se limpió la selección."""
        identity = frozenset(ids)
        changed = self._identity is not None and identity != self._identity
        stale = not self._selected <= identity
        self._identity = identity
        if changed or stale:
            self._selected.clear()
            return True
        return False
