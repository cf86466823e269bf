"""Contrato del extractor de campos por visión.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el orquestador use el adaptador OpenAI-compatible en
  producción y un doble en memoria en los tests.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import DataDomain, ExtractionOutcome, ImagePayload


@runtime_checkable
class FieldExtractor(Protocol):
    """Contrato mínimo para leer campos de identidad de una imagen.

    Reglas de diseño:
    - `analyze` es asíncrono porque hace I/O (HTTP) y es el único punto de
      suspensión de toda la validación.
    - Los fallos duros se lanzan como `core.domain.errors.ExtractionError`;
      una respuesta ilegible se devuelve como `ExtractionOutcome` `unparsable`.
    """

    async def analyze(self, image: ImagePayload, domain: DataDomain) -> ExtractionOutcome:
        """Lee los campos de `domain` presentes en `image`."""

        ...
