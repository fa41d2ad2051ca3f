"""
Documentos generados por el backend: cadena de custodia, informe final y
resumen de estado de una muestra.
"""

import logging

from app.backend import LimsClient
from app.core.exceptions import BackendResponseException, NotFoundException
from app.services import sample_service

logger = logging.getLogger(__name__)


async def get_chain_of_custody(backend: LimsClient, sample_id: int) -> dict:
    data = await backend.get(f"/api/documents/chain-of-custody/{sample_id}")
    if not data:
        raise NotFoundException("Cadena de custodia", detail="Cadena de custodia no encontrada")
    return data


async def get_final_report(backend: LimsClient, sample_id: int) -> dict:
    data = await backend.get(f"/api/documents/final-report/{sample_id}")
    if not data:
        raise NotFoundException("Informe final", detail="Informe final no encontrado")
    return data


async def get_status_summary(backend: LimsClient, sample_id: int) -> dict:
    data = await backend.get(f"/api/documents/status-summary/{sample_id}")
    if not data:
        raise NotFoundException("Resumen de estado", detail="Resumen de estado no encontrado")
    return data


async def _pdf_filename(backend: LimsClient, prefix: str, sample_id: int) -> str:
    """Nombre del PDF con el código de la muestra, o su id si no se puede obtener."""
    try:
        sample = await sample_service.get_sample(backend, sample_id)
        code = sample.sample_code or sample_id
    except (NotFoundException, BackendResponseException):
        code = sample_id
    return f"{prefix}_{code}.pdf"


async def download_final_report_pdf(backend: LimsClient, sample_id: int) -> tuple[bytes, str, str]:
    """Retorna (contenido, content-type, nombre de archivo)."""
    content, content_type = await backend.download(f"/api/documents/final-report-pdf/{sample_id}")
    filename = await _pdf_filename(backend, "reporte_final", sample_id)
    logger.info(f"PDF de informe final descargado: {filename}")
    return content, content_type, filename


async def download_chain_of_custody_pdf(
    backend: LimsClient, sample_id: int
) -> tuple[bytes, str, str]:
    content, content_type = await backend.download(
        f"/api/documents/chain-of-custody-pdf/{sample_id}"
    )
    filename = await _pdf_filename(backend, "cadena_custodia", sample_id)
    logger.info(f"PDF de cadena de custodia descargado: {filename}")
    return content, content_type, filename
