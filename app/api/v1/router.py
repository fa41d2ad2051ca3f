"""
Router principal de la API v1.
Agrupa todos los sub-routers de la versión 1.
"""

from fastapi import APIRouter

from app.api.v1.catalog import router as catalog_router
from app.api.v1.clients import router as clients_router
from app.api.v1.dashboard import router as dashboard_router
from app.api.v1.documents import router as documents_router
from app.api.v1.requests import router as requests_router
from app.api.v1.results import router as results_router
from app.api.v1.samples import router as samples_router

api_v1_router = APIRouter()

api_v1_router.include_router(
    dashboard_router,
    prefix="/dashboard",
    tags=["Dashboard"],
)

api_v1_router.include_router(
    clients_router,
    prefix="/clients",
    tags=["Clientes"],
)

api_v1_router.include_router(
    requests_router,
    prefix="/requests",
    tags=["Solicitudes"],
)

api_v1_router.include_router(
    samples_router,
    prefix="/samples",
    tags=["Muestras"],
)

api_v1_router.include_router(
    results_router,
    prefix="/results",
    tags=["Resultados"],
)

api_v1_router.include_router(
    documents_router,
    prefix="/documents",
    tags=["Documentos"],
)

api_v1_router.include_router(
    catalog_router,
    prefix="/catalog",
    tags=["Catálogos"],
)
