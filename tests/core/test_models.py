from __future__ import annotations

import pytest
from pydantic import ValidationError

from core.domain.models import (
    DataDomain,
    ExtractedFields,
    ExtractionStatus,
    ImagePayload,
    ImeiDeclaration,
    SerialDeclaration,
    SpecsDeclaration,
    ValidationResult,
    parse_declaration,
)


def test_parse_declaration_selects_variant_by_domain() -> None:
    imei = parse_declaration("imei", {"imei1": "123", "imei2": "", "serial_number": "SN1"})
    serial = parse_declaration(DataDomain.SERIAL, {"serialNumber": "SN1"})
    specs = parse_declaration("specs", {"ram": "8GB", "storage": "128GB", "imei1": "ignored"})

    assert isinstance(imei, ImeiDeclaration)
    assert imei.imei2 is None
    assert imei.serial_number == "SN1"
    assert isinstance(serial, SerialDeclaration)
    assert serial.serial_number == "SN1"
    assert isinstance(specs, SpecsDeclaration)
    assert specs.data_domain is DataDomain.SPECS


def test_parse_declaration_rejects_unknown_domain() -> None:
    with pytest.raises(ValueError):
        parse_declaration("battery", {})


def test_parse_declaration_rejects_wrong_types() -> None:
    with pytest.raises(ValidationError):
        parse_declaration("specs", {"ram": ["8GB"]})


def test_imei_declaration_counts_non_blank_slots() -> None:
    assert ImeiDeclaration(imei1="1", imei2="  ").imei_count == 1
    assert ImeiDeclaration(imei1="1", imei2="2").imei_count == 2
    assert ImeiDeclaration().imei_count == 0


def test_extracted_fields_keep_only_domain_fields() -> None:
    payload = {"imei1": "1234 5678", "imei2": None, "serialNumber": " SN 1 ", "ram": "8GB"}

    imei = ExtractedFields.from_payload(DataDomain.IMEI, payload)
    specs = ExtractedFields.from_payload(DataDomain.SPECS, payload)

    assert imei.imei1 == "12345678"
    assert imei.imei2 is None
    assert imei.serial_number == "SN1"
    assert imei.ram is None
    assert specs.model_dump(exclude_none=True) == {"ram": "8GB"}


def test_extracted_fields_tolerate_odd_provider_values() -> None:
    payload = {"imei1": 123456789012345, "imei2": "null", "serial_number": ["x"], "serialNumber": True}

    fields = ExtractedFields.from_payload(DataDomain.IMEI, payload)

    assert fields.imei1 == "123456789012345"
    assert fields.imei2 is None
    assert fields.serial_number is None
    assert fields.imei_count == 1


def test_image_payload_builds_data_uri() -> None:
    image = ImagePayload(content=b"abc", mime_type="IMAGE/PNG")

    assert image.mime_type == "image/png"
    assert image.to_data_uri() == "data:image/png;base64,YWJj"


def test_image_payload_rejects_non_images() -> None:
    with pytest.raises(ValidationError):
        ImagePayload(content=b"abc", mime_type="application/pdf")


def test_validation_result_enforces_validity_invariant() -> None:
    with pytest.raises(ValidationError):
        ValidationResult(is_valid=True, errors=["boom"], domain=DataDomain.SERIAL)


def test_validation_result_payload_is_camel_case() -> None:
    result = ValidationResult(
        is_valid=True,
        extracted_data=ExtractedFields(serial_number="SN1"),
        domain=DataDomain.SERIAL,
        extraction_status=ExtractionStatus.PARSED,
        confidence=0.7,
    )

    payload = result.to_payload()

    assert payload["isValid"] is True
    assert payload["extractedData"] == {"serialNumber": "SN1"}
    assert payload["imeiCount"] == 0
    assert payload["userImeiCount"] == 0
    assert payload["extractionStatus"] == "parsed"
