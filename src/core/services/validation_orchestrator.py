"""Orquestación de una validación: extractor → motor → compositor.

Por qué un orquestador:
- Encadena una tupla (imagen, dominio, declaración) por el adaptador de
  visión, el motor de conciliación y el compositor de resultados.
- Mantiene un slot independiente por dominio (estado en vuelo + último
  resultado): validaciones concurrentes de `imei` y `specs` no se ven.
- Es el único punto que convierte un resultado en efectos (notificaciones);
  el motor y el compositor siguen siendo puros.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum

from core.domain.errors import ExtractionError
from core.domain.language import Language
from core.domain.models import (
    DataDomain,
    Declaration,
    ExtractionStatus,
    ImagePayload,
    ValidationResult,
    parse_declaration,
)
from core.interfaces.extractor import FieldExtractor
from core.interfaces.notifier import Notifier
from core.services.reconciliation import reconcile
from core.services.result_composer import compose_result, failure_result

log = logging.getLogger(__name__)


class ValidationState(str, Enum):
    """Estado de un slot de dominio."""

    IDLE = "idle"
    ANALYZING = "analyzing"
    RESOLVED = "resolved"
    FAILED = "failed"


@dataclass
class DomainSlot:
    """Estado independiente por dominio (en vuelo + último resultado)."""

    state: ValidationState = ValidationState.IDLE
    pending: int = 0
    result: ValidationResult | None = None

    @property
    def in_flight(self) -> bool:
        return self.pending > 0


@dataclass
class ValidationOrchestrator:
    """Punto de entrada para la UI: valida una imagen contra lo declarado."""

    extractor: FieldExtractor
    notifier: Notifier | None = None
    language: Language = Language.ENGLISH
    _slots: dict[DataDomain, DomainSlot] = field(init=False, default_factory=dict)

    def __post_init__(self) -> None:
        self._slots = {domain: DomainSlot() for domain in DataDomain}

    @property
    def results(self) -> dict[DataDomain, ValidationResult]:
        """Último resultado por dominio (solo dominios ya validados)."""

        return {domain: slot.result for domain, slot in self._slots.items() if slot.result is not None}

    def result_for(self, domain: DataDomain | str) -> ValidationResult | None:
        return self._slots[DataDomain(domain)].result

    def state_of(self, domain: DataDomain | str) -> ValidationState:
        return self._slots[DataDomain(domain)].state

    def is_analyzing(self, domain: DataDomain | str | None = None) -> bool:
        """True si `domain` (o cualquier dominio si es None) tiene una llamada en vuelo."""

        if domain is None:
            return any(slot.in_flight for slot in self._slots.values())
        return self._slots[DataDomain(domain)].in_flight

    async def validate(
        self,
        image: ImagePayload,
        domain: DataDomain | str,
        declared: Declaration | Mapping[str, object],
    ) -> ValidationResult:
        """Ejecuta una validación completa y cachea su resultado para `domain`.

        Un fallo duro del extractor no se propaga: se convierte en un
        `ValidationResult` inválido con un único error, igual que cualquier
        otro resultado inválido.
        """

        domain = DataDomain(domain)
        declaration = (
            declared if not isinstance(declared, Mapping) else parse_declaration(domain, declared)
        )

        slot = self._slots[domain]
        slot.pending += 1
        slot.state = ValidationState.ANALYZING
        log.info("Starting %s validation", domain.value)
        try:
            try:
                extraction = await self.extractor.analyze(image, domain)
            except ExtractionError as exc:
                log.warning("%s extraction failed (%s): %s", domain.value, type(exc).__name__, exc)
                result = failure_result(domain, str(exc))
                slot.state = ValidationState.FAILED
            else:
                if extraction.status is ExtractionStatus.UNPARSABLE:
                    # Se trata como "nada encontrado": no bloquea el envío.
                    log.warning(
                        "%s extraction returned no usable JSON; reconciling against empty fields",
                        domain.value,
                    )
                outcome = reconcile(domain, extraction.extracted_data, declaration, language=self.language)
                result = compose_result(domain, outcome, extraction)
                slot.state = ValidationState.RESOLVED
            slot.result = result
        finally:
            slot.pending -= 1
            if slot.state is ValidationState.ANALYZING and not slot.in_flight:
                slot.state = ValidationState.IDLE

        log.info(
            "Finished %s validation: valid=%s errors=%d warnings=%d suggestions=%d",
            domain.value,
            result.is_valid,
            len(result.errors),
            len(result.warnings),
            len(result.suggestions),
        )
        self._notify(result)
        return result

    def _notify(self, result: ValidationResult) -> None:
        if self.notifier is None:
            return
        for message in result.errors:
            self.notifier.error(message)
        for message in result.warnings:
            self.notifier.warning(message)
        for message in result.suggestions:
            self.notifier.suggestion(message)
