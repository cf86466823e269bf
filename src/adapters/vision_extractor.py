"""Adaptador de extracción por visión (proveedor compatible OpenAI via SDK).

Responsabilidad:
- Construir la instrucción fija del dominio (imei / serial / specs).
- Enviar imagen (data URI) + instrucción al endpoint de chat del proveedor.
- Parsear la salida libre del modelo como un único objeto JSON.
- Traducir los fallos del SDK a la taxonomía `core.domain.errors`.

Respuesta 2xx sin JSON utilizable => `ExtractionOutcome` `unparsable` (no
lanza). Credenciales ausentes, 401/403/429/5xx, red y timeout => excepción.
Sin reintentos: repetir la llamada es decisión del llamador.
"""

from __future__ import annotations

import json
import logging
from typing import Any

import httpx
from openai import (
    APIConnectionError,
    APIResponseValidationError,
    APIStatusError,
    APITimeoutError,
    AsyncOpenAI,
)

from adapters.http_client import build_async_client
from core.config import AppSettings
from core.domain.errors import (
    AuthError,
    ConfigurationError,
    ExtractionError,
    NetworkError,
    PermissionDeniedError,
    ProviderError,
    ProviderTimeoutError,
    RateLimitError,
    ServerError,
)
from core.domain.language import Language
from core.domain.messages import render
from core.domain.models import DataDomain, ExtractedFields, ExtractionOutcome, ImagePayload
from core.interfaces.extractor import FieldExtractor

log = logging.getLogger(__name__)

_TEMPERATURE = 0.1


_PROMPTS: dict[DataDomain, dict[Language, str]] = {
    DataDomain.IMEI: {
        Language.ENGLISH: (
            "Examine this screenshot and extract every IMEI shown. Dual-SIM phones may show two IMEIs "
            "(IMEI1 for SIM1 and IMEI2 for SIM2). Also extract the serial number if it is visible. "
            "Reply ONLY with a JSON object with the fields 'imei1', 'imei2' and 'serialNumber'. "
            "If a single IMEI is found, put it in 'imei1' and set 'imei2' to null. "
            "Set any field you cannot find to null. Each IMEI must contain exactly 15 digits. "
            'Example: {"imei1": "123456789012345", "imei2": "987654321098765", "serialNumber": "ABC123"} '
            'or {"imei1": "123456789012345", "imei2": null, "serialNumber": "ABC123"} for a single IMEI.'
        ),
        Language.FRENCH: (
            "Examinez cette capture d'écran et extrayez tous les IMEI présents. Pour les téléphones dual-SIM, "
            "il peut y avoir deux IMEI (IMEI1 pour SIM1 et IMEI2 pour SIM2). Extrayez également le numéro de "
            "série s'il est visible. Répondez uniquement avec un JSON contenant les champs 'imei1', 'imei2' et "
            "'serialNumber'. Si un seul IMEI est trouvé, placez-le dans 'imei1' et mettez 'imei2' à null. "
            "Mettez à null tout champ introuvable. Chaque IMEI doit contenir exactement 15 chiffres. "
            'Exemple : {"imei1": "123456789012345", "imei2": "987654321098765", "serialNumber": "ABC123"} '
            'ou {"imei1": "123456789012345", "imei2": null, "serialNumber": "ABC123"} pour un seul IMEI.'
        ),
    },
    DataDomain.SERIAL: {
        Language.ENGLISH: (
            "Examine this screenshot and extract only the serial number. "
            "Reply ONLY with a JSON object with the field 'serialNumber'. "
            "If you cannot find a serial number, set 'serialNumber' to null. "
            'Example: {"serialNumber": "ABC123"}'
        ),
        Language.FRENCH: (
            "Examinez cette capture d'écran et extrayez uniquement le numéro de série. "
            "Répondez uniquement avec un JSON contenant le champ 'serialNumber'. "
            "Si vous ne trouvez pas de numéro de série, mettez 'serialNumber' à null. "
            'Exemple : {"serialNumber": "ABC123"}'
        ),
    },
    DataDomain.SPECS: {
        Language.ENGLISH: (
            "Examine this screenshot and extract only the RAM and the storage capacity. "
            "Reply ONLY with a JSON object with the fields 'ram' and 'storage'. "
            "Set 'ram' or 'storage' to null if you cannot find it. "
            'Example: {"ram": "8GB", "storage": "128GB"}'
        ),
        Language.FRENCH: (
            "Examinez cette capture d'écran et extrayez uniquement la RAM et le stockage. "
            "Répondez uniquement avec un JSON contenant les champs 'ram' et 'storage'. "
            "Si vous ne trouvez pas la RAM ou le stockage, mettez le champ correspondant à null. "
            'Exemple : {"ram": "8GB", "storage": "128GB"}'
        ),
    },
}


def build_prompt(domain: DataDomain, language: Language) -> str:
    return _PROMPTS[DataDomain(domain)][language]


def _first_balanced_object(text: str) -> str | None:
    """Devuelve el primer tramo `{...}` balanceado (ignora llaves dentro de strings)."""

    start = text.find("{")
    while start != -1:
        depth = 0
        in_string = False
        escaped = False
        for index in range(start, len(text)):
            char = text[index]
            if in_string:
                if escaped:
                    escaped = False
                elif char == "\\":
                    escaped = True
                elif char == '"':
                    in_string = False
                continue
            if char == '"':
                in_string = True
            elif char == "{":
                depth += 1
            elif char == "}":
                depth -= 1
                if depth == 0:
                    return text[start : index + 1]
        # Sin cierre desde este `{`; probar el siguiente.
        start = text.find("{", start + 1)
    return None


def extract_json_object(text: str) -> dict[str, Any] | None:
    """Parseo en dos niveles de la respuesta del proveedor.

    1. `json.loads` estricto del texto completo.
    2. Primer objeto `{...}` balanceado dentro del texto (prosa, fences...).

    Devuelve None si ninguno produce un objeto JSON.
    """

    stripped = (text or "").strip()
    if not stripped:
        return None

    try:
        data = json.loads(stripped)
    except json.JSONDecodeError:
        data = None
    if isinstance(data, dict):
        return data

    candidate = _first_balanced_object(stripped)
    if candidate is None:
        return None
    try:
        data = json.loads(candidate)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _status_error(exc: APIStatusError, language: Language) -> ExtractionError:
    status = exc.status_code
    if status == 401:
        return AuthError(render("provider_auth", language), status_code=status)
    if status == 403:
        return PermissionDeniedError(render("provider_forbidden", language), status_code=status)
    if status == 429:
        return RateLimitError(render("provider_rate_limit", language), status_code=status)
    if status >= 500:
        return ServerError(render("provider_server", language, status=status), status_code=status)
    return ProviderError(render("provider_status", language, status=status), status_code=status)


def _message_text(response: Any) -> str | None:
    choices = getattr(response, "choices", None) or []
    if not choices:
        return None
    message = getattr(choices[0], "message", None)
    content = getattr(message, "content", None)
    return content if isinstance(content, str) else None


class VisionExtractor(FieldExtractor):
    """Lee IMEI / número de serie / specs de una captura con un modelo de visión."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        language: Language | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or AppSettings()
        self._language = language or self._settings.default_language
        self._http_client = http_client

    async def analyze(self, image: ImagePayload, domain: DataDomain) -> ExtractionOutcome:
        domain = DataDomain(domain)
        api_key = (self._settings.ai_api_key or "").strip()
        if not api_key:
            raise ConfigurationError(render("missing_api_key", self._language))

        if self._http_client is not None:
            return await self._request(api_key, self._http_client, image, domain)
        async with build_async_client(self._settings) as http_client:
            return await self._request(api_key, http_client, image, domain)

    async def _request(
        self,
        api_key: str,
        http_client: httpx.AsyncClient,
        image: ImagePayload,
        domain: DataDomain,
    ) -> ExtractionOutcome:
        settings = self._settings
        client = AsyncOpenAI(
            api_key=api_key,
            base_url=settings.ai_base_url,
            timeout=settings.ai_timeout_seconds,
            max_retries=0,
            http_client=http_client,
        )
        messages = [
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": build_prompt(domain, self._language)},
                    {"type": "image_url", "image_url": {"url": image.to_data_uri()}},
                ],
            }
        ]

        log.debug("Sending %s extraction request to %s (%s)", domain.value, settings.ai_base_url, settings.ai_model)
        try:
            response = await client.chat.completions.create(
                model=settings.ai_model,
                messages=messages,  # type: ignore[arg-type]
                temperature=_TEMPERATURE,
                max_tokens=settings.ai_max_tokens,
            )
        except APITimeoutError as exc:
            raise ProviderTimeoutError(
                render("provider_timeout", self._language, seconds=settings.ai_timeout_seconds)
            ) from exc
        except APIConnectionError as exc:
            raise NetworkError(render("provider_network", self._language)) from exc
        except APIStatusError as exc:
            log.error("AI provider returned HTTP %s for %s extraction", exc.status_code, domain.value)
            raise _status_error(exc, self._language) from exc
        except APIResponseValidationError:
            log.warning("AI provider returned a 2xx body that is not a chat completion")
            return ExtractionOutcome.unparsable(raw_text=None, model=settings.ai_model)
        except json.JSONDecodeError as exc:
            # El SDK decodifica el cuerpo 2xx antes de devolverlo.
            log.warning("AI provider returned a 2xx body that is not valid JSON: %s", exc)
            return ExtractionOutcome.unparsable(raw_text=None, model=settings.ai_model)

        model = getattr(response, "model", None) or settings.ai_model
        content = _message_text(response)
        payload = extract_json_object(content or "")
        if payload is None:
            log.warning("Could not locate a JSON object in the %s extraction reply", domain.value)
            return ExtractionOutcome.unparsable(raw_text=content, model=model)

        extracted = ExtractedFields.from_payload(domain, payload)
        log.debug("Extracted %s fields: %s", domain.value, extracted.model_dump(exclude_none=True))
        return ExtractionOutcome(
            extracted_data=extracted,
            confidence=settings.ai_confidence,
            model=model,
            raw_text=content,
        )
