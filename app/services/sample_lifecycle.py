"""
Clasificación de muestras y elegibilidad de acciones.

Mismo criterio para la tabla, las tarjetas y los contadores:
- archivada: estado 12 o is_deleted
- analizada: estado en {4, 6, 9, 11}
- pendiente: ni analizada ni archivada
"""

from dataclasses import dataclass

from app.models.sample_status import (
    ANALYZED_STATUSES,
    SampleStatus,
    normalize_status,
    status_label,
)
from app.models.states import EntityState, RequestStatus, UIAction


@dataclass(frozen=True)
class SampleClassification:
    status_id: int
    status_label: str
    is_archived: bool
    is_analyzed: bool
    is_pending: bool


def is_deleted_flag(value) -> bool:
    # El backend envía is_deleted como bool o como 0/1
    return value is True or value == 1


def classify(current_status_id: int | None = None, is_deleted=None) -> SampleClassification:
    """Clasifica una muestra a partir de su estado; nunca lanza excepción."""
    status_id = normalize_status(current_status_id)
    is_archived = status_id == SampleStatus.ARCHIVED or is_deleted_flag(is_deleted)
    is_analyzed = status_id in ANALYZED_STATUSES
    return SampleClassification(
        status_id=status_id,
        status_label=status_label(status_id),
        is_archived=is_archived,
        is_analyzed=is_analyzed,
        is_pending=not is_analyzed and not is_archived,
    )


_ACTIVE_SAMPLE_ACTIONS = (
    UIAction.VIEW,
    UIAction.EDIT,
    UIAction.MARK_ANALYZED,
    UIAction.FINAL_REPORT,
    UIAction.HISTORY,
    UIAction.DOWNLOAD_PDF,
    UIAction.DELETE,
)


def sample_actions(classification: SampleClassification) -> list[UIAction]:
    if classification.is_archived:
        return [UIAction.RESTORE]
    if classification.is_analyzed:
        return [a for a in _ACTIVE_SAMPLE_ACTIONS if a is not UIAction.MARK_ANALYZED]
    return list(_ACTIVE_SAMPLE_ACTIONS)


def request_actions(status: str | None) -> list[UIAction]:
    if status == RequestStatus.CANCELLED:
        return [UIAction.VIEW, UIAction.PRINT, UIAction.RESTORE]
    if status == RequestStatus.COMPLETED:
        return [UIAction.VIEW, UIAction.PRINT]
    return [UIAction.VIEW, UIAction.EDIT, UIAction.PRINT, UIAction.CANCEL]


def client_actions(state: str | None) -> list[UIAction]:
    if state == EntityState.ACTIVE:
        return [UIAction.VIEW, UIAction.EDIT, UIAction.DEACTIVATE]
    return [UIAction.VIEW, UIAction.RESTORE]


def result_actions(is_deleted) -> list[UIAction]:
    if is_deleted_flag(is_deleted):
        return [UIAction.RESTORE]
    return [UIAction.VIEW, UIAction.EDIT, UIAction.DELETE]

