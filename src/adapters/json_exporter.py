"""Exportación JSON del resultado de validación.

Por qué JSON:
- Es el contrato que consumen formularios y la capa de notificaciones.
- Permite guardar evidencia de una validación sin depender del render Rich.
"""

from __future__ import annotations

import json
from pathlib import Path

from core.domain.models import ValidationResult


def result_to_json(result: ValidationResult) -> str:
    """Serializa `ValidationResult` en camelCase con formato estable."""

    return json.dumps(result.to_payload(), ensure_ascii=False, indent=2, sort_keys=True)


def export_result_json(*, result: ValidationResult, output_path: Path) -> Path:
    """Exporta `ValidationResult` a JSON UTF-8."""

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(result_to_json(result) + "\n", encoding="utf-8")
    return output_path
