"""
Ciclo de vida de una muestra.

Los códigos 1–12 los asigna el backend; aquí solo se centralizan para que
todas las vistas usen la misma tabla de nombres y el mismo conjunto de
estados "analizados".
"""

import enum
from dataclasses import dataclass

from app.models.icons import DEFAULT_STATUS_EMOJI, STATUS_EMOJI


class SampleStatus(enum.IntEnum):
    """Estados de una muestra según el backend."""
    REGISTERED = 1       # Estado inicial y de restauración
    IN_RECEPTION = 2
    IN_ANALYSIS = 3
    ANALYZED = 4         # Acción explícita del analista
    IN_REVIEW = 5
    APPROVED = 6
    REJECTED = 7
    IN_CORRECTION = 8
    COMPLETED = 9
    SENT = 10
    DELIVERED = 11
    ARCHIVED = 12        # Eliminación lógica


ANALYZED_STATUSES: frozenset[int] = frozenset({
    SampleStatus.ANALYZED,
    SampleStatus.APPROVED,
    SampleStatus.COMPLETED,
    SampleStatus.DELIVERED,
})

DEFAULT_STATUS = SampleStatus.REGISTERED


STATUS_LABELS: dict[int, str] = {
    SampleStatus.REGISTERED: "REGISTRADA",
    SampleStatus.IN_RECEPTION: "EN RECEPCIÓN",
    SampleStatus.IN_ANALYSIS: "EN ANÁLISIS",
    SampleStatus.ANALYZED: "ANALIZADA",
    SampleStatus.IN_REVIEW: "EN REVISIÓN",
    SampleStatus.APPROVED: "APROBADA",
    SampleStatus.REJECTED: "RECHAZADA",
    SampleStatus.IN_CORRECTION: "EN CORRECCIÓN",
    SampleStatus.COMPLETED: "COMPLETADA",
    SampleStatus.SENT: "ENVIADA",
    SampleStatus.DELIVERED: "ENTREGADA",
    SampleStatus.ARCHIVED: "ARCHIVADA",
}

# Token de color (Tailwind) por estado
STATUS_COLORS: dict[int, str] = {
    SampleStatus.REGISTERED: "blue",
    SampleStatus.IN_RECEPTION: "yellow",
    SampleStatus.IN_ANALYSIS: "orange",
    SampleStatus.ANALYZED: "green",
    SampleStatus.IN_REVIEW: "purple",
    SampleStatus.APPROVED: "emerald",
    SampleStatus.REJECTED: "red",
    SampleStatus.IN_CORRECTION: "amber",
    SampleStatus.COMPLETED: "teal",
    SampleStatus.SENT: "indigo",
    SampleStatus.DELIVERED: "cyan",
    SampleStatus.ARCHIVED: "gray",
}


@dataclass(frozen=True)
class StatusDisplay:
    status_id: int
    name: str
    color: str
    icon: str


def normalize_status(status_id: int | None) -> int:
    """Un estado ausente se interpreta como REGISTRADA."""
    if status_id is None:
        return int(DEFAULT_STATUS)
    return int(status_id)


def status_label(status_id: int | None) -> str:
    """Nombre del estado; los códigos desconocidos se muestran como 'ESTADO {id}'."""
    status_id = normalize_status(status_id)
    return STATUS_LABELS.get(status_id, f"ESTADO {status_id}")


def status_display(status_id: int | None) -> StatusDisplay:
    status_id = normalize_status(status_id)
    return StatusDisplay(
        status_id=status_id,
        name=status_label(status_id),
        color=STATUS_COLORS.get(status_id, "gray"),
        icon=STATUS_EMOJI.get(status_id, DEFAULT_STATUS_EMOJI),
    )
