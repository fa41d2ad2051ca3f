"""
Cliente HTTP del backend LIMS (Flask + Oracle).

Un único httpx.AsyncClient por aplicación, creado en el lifespan de FastAPI
y expuesto a los endpoints vía la dependencia get_backend().

Convenciones del backend que se normalizan aquí:
- Las respuestas llegan como arreglo/objeto crudo o como {success, data}.
- Los errores traen {error} o {message}; si el cuerpo no es JSON se usa
  "HTTP {status}".
"""

import logging
from typing import Any

import httpx
from fastapi import Request

from app.config import get_settings
from app.core.exceptions import BackendResponseException, BackendUnavailableException

settings = get_settings()
logger = logging.getLogger(__name__)


def unwrap(payload: Any) -> Any:
    """
    Extrae los datos de una respuesta del backend.

    {success: true, data: X} → X
    {success: false, error|message} → BackendResponseException
    cualquier otra forma → tal cual
    """
    if isinstance(payload, dict) and "success" in payload:
        if payload.get("success") is False:
            raise BackendResponseException(
                400, payload.get("error") or payload.get("message") or "Error desconocido"
            )
        if "data" in payload:
            return payload["data"]
    return payload


def error_message(response: httpx.Response) -> str:
    """Mensaje legible de una respuesta no-2xx."""
    try:
        body = response.json()
    except ValueError:
        return f"HTTP {response.status_code}"
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return f"HTTP {response.status_code}"


class LimsClient:
    """Envoltorio delgado sobre httpx.AsyncClient con el manejo de errores del backend."""

    def __init__(
        self,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.LIMS_API_URL).rstrip("/")
        self._client = httpx.AsyncClient(
            base_url=self.base_url,
            timeout=timeout if timeout is not None else settings.LIMS_API_TIMEOUT,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "LimsClient":
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict | None = None,
    ) -> httpx.Response:
        logger.debug(f"{method} {self.base_url}{path}")
        try:
            response = await self._client.request(method, path, json=json, params=params)
        except httpx.TimeoutException:
            logger.error(f"Timeout en {method} {path}")
            raise BackendUnavailableException(self.base_url)
        except httpx.RequestError as exc:
            logger.error(f"Error de conexión en {method} {path}: {exc}")
            raise BackendUnavailableException(self.base_url)

        if response.is_error:
            message = error_message(response)
            logger.warning(f"{method} {path} → {response.status_code}: {message}")
            raise BackendResponseException(response.status_code, message)
        return response

    async def request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict | None = None,
    ) -> Any:
        """Ejecuta la petición y retorna el cuerpo JSON ya desenvuelto."""
        response = await self._send(method, path, json=json, params=params)
        if not response.content:
            return None
        try:
            payload = response.json()
        except ValueError:
            raise BackendResponseException(
                response.status_code,
                f"Error al procesar la respuesta del servidor: HTTP {response.status_code}",
            )
        return unwrap(payload)

    async def get(self, path: str, params: dict | None = None) -> Any:
        return await self.request("GET", path, params=params)

    async def get_list(self, path: str, params: dict | None = None) -> list[dict]:
        data = await self.get(path, params=params)
        if data is None:
            return []
        if not isinstance(data, list):
            raise BackendResponseException(502, f"Se esperaba una lista en {path}")
        return data

    async def post(self, path: str, json: Any = None) -> Any:
        return await self.request("POST", path, json=json)

    async def put(self, path: str, json: Any = None) -> Any:
        return await self.request("PUT", path, json=json)

    async def patch(self, path: str, json: Any = None) -> Any:
        return await self.request("PATCH", path, json=json)

    async def download(self, path: str) -> tuple[bytes, str]:
        """Descarga un binario (PDF). Retorna (contenido, content-type)."""
        response = await self._send("GET", path)
        content_type = response.headers.get("content-type", "application/pdf")
        return response.content, content_type.split(";")[0]


# ── Dependencia FastAPI ──────────────────────────────

async def get_backend(request: Request) -> LimsClient:
    """Provee el cliente compartido creado en el lifespan."""
    return request.app.state.lims_client
