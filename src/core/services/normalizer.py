"""Normalización de campos antes de comparar.

Los valores extraídos por el modelo de visión llegan con artefactos de OCR
(espacios entre bloques de dígitos, saltos de línea) y los valores declarados
con espacios accidentales. Ambos lados pasan por `normalize` antes de
cualquier comparación.
"""

from __future__ import annotations

import re

_WHITESPACE_RE = re.compile(r"\s+")


def normalize(value: str | None) -> str | None:
    """Elimina todo espacio en blanco (inicial, final e interno).

    `None` se devuelve tal cual. Idempotente. No filtra dígitos: la forma de
    un IMEI (15 dígitos) la impone la capa de entrada, no el conciliador.
    """

    if value is None:
        return None
    return _WHITESPACE_RE.sub("", value)


def is_present(value: str | None) -> bool:
    """True si el valor normalizado no está vacío."""

    return bool(normalize(value))
