"""Motor de conciliación: campos extraídos vs. campos declarados.

Función pura (sin I/O): recibe lo que el modelo de visión leyó y lo que el
usuario escribió, y clasifica la diferencia en:

- errores: contradicciones de datos (invalidan el envío),
- avisos y sugerencias: ambigüedades de orden/cantidad en dispositivos
  dual-SIM; informativos, nunca invalidan.

La ausencia de un valor en cualquiera de los dos lados no es un error: no hay
nada que contradecir.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.language import Language
from core.domain.messages import render
from core.domain.models import (
    DataDomain,
    Declaration,
    ExtractedFields,
    ImeiDeclaration,
    ReconciliationOutcome,
    SerialDeclaration,
    SpecsDeclaration,
)
from core.services.normalizer import is_present, normalize


@dataclass
class _Findings:
    language: Language
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)
    missing_imei_fields: list[str] = field(default_factory=list)

    def error(self, key: str, **values: object) -> None:
        self.errors.append(render(key, self.language, **values))

    def warning(self, key: str, **values: object) -> None:
        self.warnings.append(render(key, self.language, **values))

    def suggestion(self, key: str, **values: object) -> None:
        self.suggestions.append(render(key, self.language, **values))


def reconcile(
    domain: DataDomain,
    extracted: ExtractedFields,
    declared: Declaration,
    *,
    language: Language = Language.ENGLISH,
) -> ReconciliationOutcome:
    """Compara `extracted` con `declared` según las reglas de `domain`."""

    domain = DataDomain(domain)
    if declared.data_domain is not domain:
        raise ValueError(
            f"Declaration for domain {declared.data_domain.value!r} "
            f"cannot be reconciled as {domain.value!r}"
        )

    findings = _Findings(language=language)
    imei_count = extracted.imei_count
    user_imei_count = 0

    if isinstance(declared, ImeiDeclaration):
        user_imei_count = declared.imei_count
        _reconcile_imeis(extracted, declared, findings)
        _compare(findings, "serial_mismatch", extracted.serial_number, declared.serial_number)
    elif isinstance(declared, SerialDeclaration):
        _compare(findings, "serial_mismatch", extracted.serial_number, declared.serial_number)
    elif isinstance(declared, SpecsDeclaration):
        _compare(findings, "ram_mismatch", extracted.ram, declared.ram)
        _compare(findings, "storage_mismatch", extracted.storage, declared.storage)

    return ReconciliationOutcome(
        errors=findings.errors,
        warnings=findings.warnings,
        suggestions=findings.suggestions,
        imei_count=imei_count,
        user_imei_count=user_imei_count,
        missing_imei_fields=findings.missing_imei_fields,
    )


def _compare(findings: _Findings, key: str, extracted: str | None, declared: str | None) -> None:
    if not (is_present(extracted) and is_present(declared)):
        return
    extracted_value = normalize(extracted)
    declared_value = normalize(declared)
    if extracted_value != declared_value:
        findings.error(key, extracted=extracted_value, declared=declared_value)


def _reconcile_imeis(
    extracted: ExtractedFields,
    declared: ImeiDeclaration,
    findings: _Findings,
) -> None:
    ext1, ext2 = (normalize(value) or None for value in extracted.imei_slots)
    usr1, usr2 = (normalize(value) or None for value in declared.imei_slots)
    extracted_count = (ext1 is not None) + (ext2 is not None)
    user_count = (usr1 is not None) + (usr2 is not None)

    # Dual-SIM detectado, un solo IMEI declarado. La guía depende del campo
    # que el usuario rellenó.
    if extracted_count == 2 and user_count == 1:
        if usr1 is not None:
            _guide_declared_primary_slot(usr1, ext1, ext2, findings)
        else:
            _guide_declared_secondary_slot(usr2, ext1, ext2, findings)
        return

    # Un IMEI por lado pero en campos distintos (el modelo siempre usa imei1
    # para un IMEI único): se comparan los valores, no las posiciones.
    if extracted_count == 1 and user_count == 1 and (usr1 is None) != (ext1 is None):
        single, read = usr1 or usr2, ext1 or ext2
        if single != read:
            findings.error("imei_single_mismatch", declared=single, extracted=read)
        return

    if extracted_count == 2 and user_count == 2 and usr1 != ext1 and usr2 != ext2:
        if usr1 == ext2 and usr2 == ext1:
            findings.warning("imei_swapped_warning")
            findings.suggestion("imei_swapped_suggestion", imei1=ext1, imei2=ext2)
            return

    for slot, user_value, extracted_value in (("IMEI1", usr1, ext1), ("IMEI2", usr2, ext2)):
        if user_value and extracted_value and user_value != extracted_value:
            findings.error(
                "imei_slot_mismatch",
                slot=slot,
                declared=user_value,
                extracted=extracted_value,
            )

    if user_count == 2 and extracted_count == 1:
        findings.warning("imei_single_read_warning", imei=ext1 or ext2)


def _guide_declared_primary_slot(single: str, ext1: str, ext2: str, findings: _Findings) -> None:
    if single == ext1:
        findings.warning("imei_second_detected_warning")
        findings.suggestion("imei_second_detected_suggestion", imei=ext2)
        findings.missing_imei_fields.append("imei2")
    elif single == ext2:
        # El IMEI secundario quedó en el campo IMEI1: falta el principal.
        findings.warning("imei_second_detected_warning")
        findings.warning("imei_secondary_entered_warning", imei=single)
        findings.suggestion("imei_primary_suggestion", imei=ext1)
        findings.suggestion("imei_move_to_secondary_suggestion", imei=single)
        findings.missing_imei_fields.append("imei1")
    else:
        findings.error("imei_no_match", declared=single, imei1=ext1, imei2=ext2)


def _guide_declared_secondary_slot(single: str, ext1: str, ext2: str, findings: _Findings) -> None:
    if single == ext2:
        findings.warning("imei_second_detected_warning")
        findings.suggestion("imei_primary_suggestion", imei=ext1)
        findings.missing_imei_fields.append("imei1")
    elif single == ext1:
        findings.error("imei_slot_mismatch", slot="IMEI2", declared=single, extracted=ext2)
    else:
        findings.error("imei_no_match", declared=single, imei1=ext1, imei2=ext2)
