"""
Respuestas binarias (exportaciones y PDFs del backend).
"""

import re
from urllib.parse import quote

from fastapi import Response

from app.services.export_service import ExportFile

_UNSAFE_FILENAME = re.compile(r'[\x00-\x1f\x7f"\\]')


def content_disposition(filename: str) -> str:
    """
    Encabezado de descarga. `filename` lleva una versión ASCII sin comillas ni
    caracteres de control; `filename*` conserva el nombre original en UTF-8.
    """
    cleaned = _UNSAFE_FILENAME.sub("", filename)
    fallback = cleaned.encode("ascii", "ignore").decode("ascii") or "descarga"
    if fallback == filename:
        return f'attachment; filename="{filename}"'
    return f"attachment; filename=\"{fallback}\"; filename*=UTF-8''{quote(filename)}"


def attachment(content: bytes, media_type: str, filename: str) -> Response:
    """Respuesta binaria descargable con su nombre de archivo."""
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": content_disposition(filename)},
    )


def export_response(export: ExportFile) -> Response:
    return attachment(export.content, export.media_type, export.filename)
