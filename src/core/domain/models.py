"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Nos da validación estricta en el borde (lo que escribe el usuario y lo que
  devuelve el proveedor IA) sin acoplar el Core a librerías de I/O.
- Sustituye las "bolsas" de campos sin tipo por variantes etiquetadas por
  `DataDomain`, cada una con solo los campos que le corresponden.

Nota:
- Estos modelos describen *qué* es la información, no *cómo* se obtiene.
"""

from __future__ import annotations

import base64
from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Literal, Union

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    TypeAdapter,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from core.services.normalizer import is_present, normalize


class DataDomain(str, Enum):
    """Qué grupo de campos participa en la conciliación."""

    IMEI = "imei"
    SERIAL = "serial"
    SPECS = "specs"


class ExtractionStatus(str, Enum):
    """Resultado del parseo de la respuesta del proveedor."""

    PARSED = "parsed"
    UNPARSABLE = "unparsable"


# Nombres de campo tal y como los pide el prompt (wire) por dominio.
_DOMAIN_WIRE_FIELDS: dict[DataDomain, tuple[str, ...]] = {
    DataDomain.IMEI: ("imei1", "imei2", "serialNumber"),
    DataDomain.SERIAL: ("serialNumber",),
    DataDomain.SPECS: ("ram", "storage"),
}

_NULL_MARKERS = frozenset({"null", "none", "n/a"})


def _clean_extracted(value: object) -> object:
    if value is None:
        return None
    if isinstance(value, int) and not isinstance(value, bool):
        value = str(value)
    if isinstance(value, str):
        cleaned = normalize(value)
        if not cleaned or cleaned.lower() in _NULL_MARKERS:
            return None
        return cleaned
    return value


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class ExtractedFields(BaseModel):
    """Campos de identidad leídos de la imagen por el proveedor IA.

    Cada campo es un string normalizado o `None` (no encontrado, o no pedido
    en este dominio).
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    imei1: str | None = Field(default=None, description="IMEI del slot SIM1.")
    imei2: str | None = Field(default=None, description="IMEI del slot SIM2 (dual-SIM).")
    serial_number: str | None = Field(
        default=None,
        alias="serialNumber",
        description="Número de serie del equipo.",
    )
    ram: str | None = Field(default=None, description="RAM tal y como aparece (p.ej. '8GB').")
    storage: str | None = Field(default=None, description="Almacenamiento (p.ej. '128GB').")

    _normalize_values = field_validator(
        "imei1", "imei2", "serial_number", "ram", "storage", mode="before"
    )(_clean_extracted)

    @classmethod
    def from_payload(cls, domain: DataDomain, payload: Mapping[str, object]) -> ExtractedFields:
        """Construye los campos de `domain` a partir del objeto JSON del proveedor.

        Los campos ajenos al dominio y los valores que no son texto/número se
        descartan: la respuesta del proveedor nunca hace fallar la validación.
        """

        data: dict[str, object] = {}
        for wire_name in _DOMAIN_WIRE_FIELDS[domain]:
            value = payload.get(wire_name)
            if value is None and wire_name == "serialNumber":
                value = payload.get("serial_number")
            if isinstance(value, bool) or not isinstance(value, (str, int)):
                continue
            data[wire_name] = value
        return cls.model_validate(data)

    @property
    def imei_slots(self) -> tuple[str | None, str | None]:
        return self.imei1, self.imei2

    @property
    def imei_count(self) -> int:
        return sum(1 for value in self.imei_slots if value)


class _DeclarationBase(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True, frozen=True)

    @property
    def data_domain(self) -> DataDomain:
        return DataDomain(getattr(self, "domain"))


class ImeiDeclaration(_DeclarationBase):
    """Lo que el usuario escribió en el formulario de IMEI."""

    domain: Literal["imei"] = "imei"
    imei1: str | None = Field(default=None, description="IMEI principal declarado.")
    imei2: str | None = Field(default=None, description="IMEI secundario declarado.")
    serial_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("serial_number", "serialNumber"),
        description="Número de serie declarado.",
    )

    _blank = field_validator("imei1", "imei2", "serial_number", mode="before")(_blank_to_none)

    @property
    def imei_slots(self) -> tuple[str | None, str | None]:
        return self.imei1, self.imei2

    @property
    def imei_count(self) -> int:
        return sum(1 for value in self.imei_slots if is_present(value))


class SerialDeclaration(_DeclarationBase):
    """Número de serie declarado."""

    domain: Literal["serial"] = "serial"
    serial_number: str | None = Field(
        default=None,
        validation_alias=AliasChoices("serial_number", "serialNumber"),
    )

    _blank = field_validator("serial_number", mode="before")(_blank_to_none)


class SpecsDeclaration(_DeclarationBase):
    """RAM y almacenamiento declarados."""

    domain: Literal["specs"] = "specs"
    ram: str | None = None
    storage: str | None = None

    _blank = field_validator("ram", "storage", mode="before")(_blank_to_none)


Declaration = Annotated[
    Union[ImeiDeclaration, SerialDeclaration, SpecsDeclaration],
    Field(discriminator="domain"),
]

_DECLARATION_ADAPTER: TypeAdapter[Declaration] = TypeAdapter(Declaration)


def parse_declaration(domain: DataDomain | str, data: Mapping[str, object]) -> Declaration:
    """Valida en el borde un mapping "suelto" (formulario) como declaración tipada.

    Lanza `pydantic.ValidationError` si los valores no tienen el tipo esperado.
    """

    payload = dict(data)
    payload["domain"] = DataDomain(domain).value
    return _DECLARATION_ADAPTER.validate_python(payload)


class ImagePayload(BaseModel):
    """Imagen a analizar (captura de pantalla o foto de la caja/etiqueta)."""

    model_config = ConfigDict(frozen=True)

    content: bytes = Field(..., min_length=1, description="Bytes crudos de la imagen.")
    mime_type: str = Field(default="image/jpeg", description="Tipo MIME (image/png, image/jpeg...).")
    filename: str | None = Field(default=None, description="Nombre original del fichero.")

    @field_validator("mime_type")
    @classmethod
    def _require_image_mime(cls, value: str) -> str:
        value = value.strip().lower()
        if not value.startswith("image/"):
            raise ValueError(f"Unsupported MIME type for image analysis: {value!r}")
        return value

    def to_data_uri(self) -> str:
        encoded = base64.b64encode(self.content).decode("ascii")
        return f"data:{self.mime_type};base64,{encoded}"


class ExtractionOutcome(BaseModel):
    """Salida del adaptador de visión.

    `status=unparsable` significa "no pude leer la respuesta", que NO es lo
    mismo que "la imagen no tenía identificadores" (`parsed` con campos vacíos).
    """

    extracted_data: ExtractedFields = Field(default_factory=ExtractedFields)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    status: ExtractionStatus = ExtractionStatus.PARSED
    model: str | None = Field(default=None, description="Modelo IA que respondió.")
    raw_text: str | None = Field(default=None, description="Texto crudo para auditoría.")

    @classmethod
    def unparsable(cls, *, raw_text: str | None, model: str | None = None) -> ExtractionOutcome:
        return cls(
            extracted_data=ExtractedFields(),
            confidence=0.0,
            status=ExtractionStatus.UNPARSABLE,
            model=model,
            raw_text=raw_text,
        )


class ReconciliationOutcome(BaseModel):
    """Clasificación pura producida por el motor (sin procedencia)."""

    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    imei_count: int = Field(default=0, ge=0, le=2)
    user_imei_count: int = Field(default=0, ge=0, le=2)
    missing_imei_fields: list[str] = Field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ValidationResult(BaseModel):
    """Contrato público consumido por formularios y la capa de notificaciones.

    Se serializa en camelCase (`isValid`, `extractedData`, `imeiCount`...).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    is_valid: bool
    errors: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    suggestions: list[str] = Field(default_factory=list)
    extracted_data: ExtractedFields = Field(default_factory=ExtractedFields)
    imei_count: int = Field(default=0, ge=0, le=2)
    user_imei_count: int = Field(default=0, ge=0, le=2)
    confidence: float = Field(default=0.0, ge=0.0, le=1.0)
    domain: DataDomain
    extraction_status: ExtractionStatus | None = Field(
        default=None,
        description="None cuando la extracción falló de forma dura.",
    )
    missing_imei_fields: list[str] = Field(default_factory=list)

    @model_validator(mode="after")
    def _validity_follows_errors(self) -> ValidationResult:
        if self.is_valid != (not self.errors):
            raise ValueError("is_valid must be True exactly when there are no errors")
        return self

    def to_payload(self) -> dict[str, object]:
        """Forma JSON (camelCase) que consume el resto del sistema."""

        payload = self.model_dump(mode="json", by_alias=True)
        payload["extractedData"] = self.extracted_data.model_dump(
            mode="json", by_alias=True, exclude_none=True
        )
        return payload
