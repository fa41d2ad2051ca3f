"""
Excepciones HTTP personalizadas para la API.
"""

from fastapi import HTTPException, status


class NotFoundException(HTTPException):
    """Recurso no encontrado (404)."""

    def __init__(self, resource: str = "Recurso", detail: str | None = None):
        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail or f"{resource} no encontrado",
        )


class ConflictException(HTTPException):
    """Conflicto de datos (409), ej: acción no permitida en el estado actual."""

    def __init__(self, detail: str = "El recurso ya existe"):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
        )


class ValidationException(HTTPException):
    """Error de validación de negocio (422). Nunca llega al backend."""

    def __init__(self, detail: str = "Error de validación"):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=detail,
        )


class BackendUnavailableException(HTTPException):
    """El backend LIMS no responde (503): conexión rechazada o timeout."""

    def __init__(self, base_url: str, detail: str | None = None):
        self.base_url = base_url
        super().__init__(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=detail or (
                "No se puede conectar al servidor. "
                f"Verifique que el backend esté corriendo en {base_url}"
            ),
        )


class BackendResponseException(HTTPException):
    """
    El backend respondió con error.
    Los 4xx se propagan con el mismo código; los 5xx se reportan como 502.
    """

    def __init__(self, upstream_status: int, detail: str):
        self.upstream_status = upstream_status
        status_code = (
            upstream_status
            if 400 <= upstream_status < 500
            else status.HTTP_502_BAD_GATEWAY
        )
        super().__init__(status_code=status_code, detail=detail)


class ExportException(HTTPException):
    """Falla al generar un archivo exportado (PDF / Excel / CSV)."""

    def __init__(self, detail: str = "No se pudo generar el archivo"):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
        )
