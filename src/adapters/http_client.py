"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts y cabeceras (atribución OpenRouter) para el SDK de
  OpenAI y para las comprobaciones del `doctor`.
- Facilita testeo: se puede inyectar un `transport` (p.ej. `httpx.MockTransport`).
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Crea un `httpx.AsyncClient` con defaults seguros.

    Por qué un builder:
    - Centraliza timeouts/headers para que el proveedor IA y el `doctor`
      se comporten igual.
    - `HTTP-Referer` y `X-Title` identifican la app ante OpenRouter; otros
      proveedores compatibles OpenAI los ignoran.
    """

    settings = settings or AppSettings()
    headers: dict[str, str] = {
        "User-Agent": f"{settings.app_title.lower()}-check/0.1",
        "HTTP-Referer": settings.app_url,
        "X-Title": settings.app_title,
    }
    if extra_headers:
        headers.update(extra_headers)
    return httpx.AsyncClient(
        timeout=httpx.Timeout(settings.ai_timeout_seconds),
        follow_redirects=True,
        headers=headers,
        transport=transport,
    )
