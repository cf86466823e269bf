"""Taxonomía de fallos duros de la extracción.

Por qué en el dominio:
- El orquestador solo necesita saber que la extracción falló y qué mensaje
  mostrar; no debe importar excepciones del SDK de OpenAI.
- Un "no pude leer la imagen" (respuesta 2xx sin JSON) NO es un error: es un
  `ExtractionOutcome` con estado `unparsable`.
"""

from __future__ import annotations


class ExtractionError(RuntimeError):
    """Fallo duro de la extracción; `str(exc)` es apto para mostrar al usuario."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ConfigurationError(ExtractionError):
    """Credenciales ausentes; se lanza antes de cualquier intento de red."""


class AuthError(ExtractionError):
    """HTTP 401."""


class PermissionDeniedError(ExtractionError):
    """HTTP 403."""


class RateLimitError(ExtractionError):
    """HTTP 429."""


class ServerError(ExtractionError):
    """HTTP 5xx."""


class ProviderError(ExtractionError):
    """Cualquier otro estado no-2xx (400, 404, 422...)."""


class NetworkError(ExtractionError):
    """Sin respuesta del proveedor (DNS, conexión rechazada, TLS...)."""


class ProviderTimeoutError(NetworkError):
    """El proveedor no respondió dentro del timeout configurado."""
