"""Composición del `ValidationResult` público.

Único lugar que ensambla la forma visible hacia fuera: el motor de
conciliación nunca ve la procedencia (campos crudos, confianza, estado del
parseo) y el orquestador nunca construye resultados a mano.
"""

from __future__ import annotations

from core.domain.models import (
    DataDomain,
    ExtractedFields,
    ExtractionOutcome,
    ReconciliationOutcome,
    ValidationResult,
)


def compose_result(
    domain: DataDomain,
    outcome: ReconciliationOutcome,
    extraction: ExtractionOutcome,
) -> ValidationResult:
    """Une la clasificación del motor con la procedencia de la extracción."""

    return ValidationResult(
        is_valid=outcome.is_valid,
        errors=list(outcome.errors),
        warnings=list(outcome.warnings),
        suggestions=list(outcome.suggestions),
        extracted_data=extraction.extracted_data,
        imei_count=outcome.imei_count,
        user_imei_count=outcome.user_imei_count,
        confidence=extraction.confidence,
        domain=DataDomain(domain),
        extraction_status=extraction.status,
        missing_imei_fields=list(outcome.missing_imei_fields),
    )


def failure_result(domain: DataDomain, message: str) -> ValidationResult:
    """Forma uniforme para un fallo duro: un único error, sin campos extraídos."""

    return ValidationResult(
        is_valid=False,
        errors=[message],
        extracted_data=ExtractedFields(),
        confidence=0.0,
        domain=DataDomain(domain),
        extraction_status=None,
    )
