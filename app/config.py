"""
Configuración central de la aplicación.
Usa Pydantic BaseSettings para validar variables de entorno.
"""

from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # ── App ──────────────────────────────────────────
    APP_NAME: str = "Recepción de Muestras"
    APP_ENV: str = "development"
    DEBUG: bool = True
    API_V1_PREFIX: str = "/api/v1"
    VERSION: str = "0.1.0"

    # ── Server ───────────────────────────────────────
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    # ── Logging ──────────────────────────────────────
    LOG_LEVEL: str = "INFO"

    # ── CORS ─────────────────────────────────────────
    CORS_ORIGINS: List[str] = ["http://localhost:5173", "http://localhost:3000"]

    # ── Backend LIMS (Flask + Oracle) ────────────────
    LIMS_API_URL: str = "http://localhost:5000"
    LIMS_API_TIMEOUT: float = 15.0

    # ── Reglas de negocio del cliente ────────────────
    CART_MAX_ITEMS: int = 5
    CART_MAX_QUANTITY: int = 5
    DEFAULT_CANCEL_REASON: str = "Cancelada por el usuario"

    # ── Reportes ─────────────────────────────────────
    REPORT_TITLE: str = "Sistema de Recepción de Muestras"
    REPORT_LOCALE_DATE_FORMAT: str = "%d/%m/%Y"

    @field_validator("LIMS_API_URL")
    @classmethod
    def strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @field_validator("LOG_LEVEL")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_production(self) -> bool:
        return self.APP_ENV == "production"


@lru_cache
def get_settings() -> Settings:
    return Settings()
