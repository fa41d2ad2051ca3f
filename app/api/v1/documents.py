"""
Endpoints de documentos de una muestra: cadena de custodia, informe final
y resumen de estado. Los PDF los genera el backend; aquí solo se reenvían.
"""

from fastapi import APIRouter, Depends

from app.api.responses import attachment
from app.backend import LimsClient, get_backend
from app.services import document_service

router = APIRouter()


@router.get("/chain-of-custody/{sample_id}")
async def get_chain_of_custody(sample_id: int, backend: LimsClient = Depends(get_backend)) -> dict:
    return await document_service.get_chain_of_custody(backend, sample_id)


@router.get("/final-report/{sample_id}")
async def get_final_report(sample_id: int, backend: LimsClient = Depends(get_backend)) -> dict:
    return await document_service.get_final_report(backend, sample_id)


@router.get("/status-summary/{sample_id}")
async def get_status_summary(sample_id: int, backend: LimsClient = Depends(get_backend)) -> dict:
    return await document_service.get_status_summary(backend, sample_id)


@router.get("/final-report/{sample_id}/pdf")
async def download_final_report(sample_id: int, backend: LimsClient = Depends(get_backend)):
    """Descarga el informe final (reporte_final_{código}.pdf)."""
    content, media_type, filename = await document_service.download_final_report_pdf(
        backend, sample_id
    )
    return attachment(content, media_type, filename)


@router.get("/chain-of-custody/{sample_id}/pdf")
async def download_chain_of_custody(sample_id: int, backend: LimsClient = Depends(get_backend)):
    """Descarga la cadena de custodia (cadena_custodia_{código}.pdf)."""
    content, media_type, filename = await document_service.download_chain_of_custody_pdf(
        backend, sample_id
    )
    return attachment(content, media_type, filename)
