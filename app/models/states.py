"""
Estados de clientes, solicitudes y acciones disponibles en la interfaz.
"""

import enum


class EntityState(str, enum.Enum):
    """Estado lógico de clientes, tipos de servicio y personal."""
    ACTIVE = "A"
    INACTIVE = "I"

    @property
    def label(self) -> str:
        return "Activo" if self is EntityState.ACTIVE else "Inactivo"


class RequestStatus(str, enum.Enum):
    """Estados de una solicitud de servicio."""
    PENDING = "PENDIENTE"
    COMPLETED = "COMPLETADA"
    CANCELLED = "CANCELADA"


class UIAction(str, enum.Enum):
    """Acciones que la interfaz puede ofrecer sobre una fila."""
    VIEW = "view"
    EDIT = "edit"
    MARK_ANALYZED = "mark_analyzed"
    FINAL_REPORT = "final_report"
    HISTORY = "history"
    DOWNLOAD_PDF = "download_pdf"
    DELETE = "delete"
    RESTORE = "restore"
    PRINT = "print"
    CANCEL = "cancel"
    DEACTIVATE = "deactivate"
