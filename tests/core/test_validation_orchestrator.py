from __future__ import annotations

import asyncio

import pytest

from core.domain.errors import AuthError, ConfigurationError
from core.domain.models import (
    DataDomain,
    ExtractionOutcome,
    ExtractionStatus,
    ImagePayload,
    ImeiDeclaration,
)
from core.services.validation_orchestrator import ValidationOrchestrator, ValidationState
from tests.support import IMEI_A, IMEI_B, FakeExtractor, RecordingNotifier, parsed


def test_validate_resolves_and_caches_result(image: ImagePayload) -> None:
    extractor = FakeExtractor(outcome=parsed(imei1=IMEI_A, imei2=IMEI_B))
    orchestrator = ValidationOrchestrator(extractor=extractor)

    result = asyncio.run(orchestrator.validate(image, "imei", {"imei1": IMEI_A, "imei2": IMEI_B}))

    assert result.is_valid
    assert result.confidence == 0.7
    assert orchestrator.result_for("imei") is result
    assert orchestrator.results == {DataDomain.IMEI: result}
    assert orchestrator.state_of(DataDomain.IMEI) is ValidationState.RESOLVED
    assert not orchestrator.is_analyzing()
    assert extractor.calls == [DataDomain.IMEI]


def test_validate_accepts_typed_declaration(image: ImagePayload) -> None:
    orchestrator = ValidationOrchestrator(extractor=FakeExtractor(outcome=parsed(imei1=IMEI_A, imei2=IMEI_B)))

    result = asyncio.run(orchestrator.validate(image, DataDomain.IMEI, ImeiDeclaration(imei1=IMEI_B, imei2=IMEI_A)))

    assert result.is_valid
    assert len(result.warnings) == 1


def test_hard_failure_becomes_uniform_invalid_result(image: ImagePayload) -> None:
    notifier = RecordingNotifier()
    extractor = FakeExtractor(error=AuthError("The AI provider rejected the API key.", status_code=401))
    orchestrator = ValidationOrchestrator(extractor=extractor, notifier=notifier)

    result = asyncio.run(orchestrator.validate(image, "imei", {"imei1": IMEI_A}))

    assert not result.is_valid
    assert result.errors == ["The AI provider rejected the API key."]
    assert result.extracted_data.model_dump(exclude_none=True) == {}
    assert orchestrator.result_for("imei") is result
    assert orchestrator.state_of("imei") is ValidationState.FAILED
    assert not orchestrator.is_analyzing("imei")
    assert notifier.errors == result.errors


def test_missing_configuration_is_reported_like_other_failures(image: ImagePayload) -> None:
    orchestrator = ValidationOrchestrator(extractor=FakeExtractor(error=ConfigurationError("no key")))

    result = asyncio.run(orchestrator.validate(image, "serial", {"serial_number": "SN1"}))

    assert result.errors == ["no key"]


def test_unexpected_errors_propagate_and_clear_in_flight(image: ImagePayload) -> None:
    orchestrator = ValidationOrchestrator(extractor=FakeExtractor(error=RuntimeError("bug")))

    with pytest.raises(RuntimeError):
        asyncio.run(orchestrator.validate(image, "specs", {"ram": "8GB"}))

    assert not orchestrator.is_analyzing("specs")
    assert orchestrator.state_of("specs") is ValidationState.IDLE
    assert orchestrator.result_for("specs") is None


def test_new_result_overwrites_previous_for_domain(image: ImagePayload) -> None:
    extractor = FakeExtractor(outcome=parsed(serial_number="ABC123"))
    orchestrator = ValidationOrchestrator(extractor=extractor)

    first = asyncio.run(orchestrator.validate(image, "serial", {"serial_number": "XYZ999"}))
    second = asyncio.run(orchestrator.validate(image, "serial", {"serial_number": "ABC123"}))

    assert not first.is_valid
    assert second.is_valid
    assert orchestrator.result_for("serial") is second


def test_unparsable_reply_reconciles_against_empty_fields(image: ImagePayload) -> None:
    extractor = FakeExtractor(outcome=ExtractionOutcome.unparsable(raw_text="Sorry, blurry."))
    orchestrator = ValidationOrchestrator(extractor=extractor)

    result = asyncio.run(orchestrator.validate(image, "imei", {"imei1": IMEI_A, "imei2": IMEI_B}))

    assert result.is_valid
    assert result.warnings == []
    assert result.extraction_status is ExtractionStatus.UNPARSABLE


def test_one_notification_per_entry(image: ImagePayload) -> None:
    notifier = RecordingNotifier()
    orchestrator = ValidationOrchestrator(
        extractor=FakeExtractor(outcome=parsed(imei1=IMEI_A, imei2=IMEI_B, serial_number="ABC123")),
        notifier=notifier,
    )

    result = asyncio.run(orchestrator.validate(image, "imei", {"imei1": IMEI_B, "serial_number": "XYZ999"}))

    assert notifier.errors == result.errors
    assert notifier.warnings == result.warnings
    assert notifier.suggestions == result.suggestions
    assert len(notifier.errors) == 1
    assert len(notifier.warnings) == 2


class _GatedExtractor:
    def __init__(self) -> None:
        self.gates = {domain: asyncio.Event() for domain in DataDomain}

    async def analyze(self, image: ImagePayload, domain: DataDomain) -> ExtractionOutcome:
        await self.gates[domain].wait()
        if domain is DataDomain.SPECS:
            return parsed(ram="8GB", storage="128GB")
        return parsed(imei1=IMEI_A)


def test_domains_have_independent_in_flight_slots(image: ImagePayload) -> None:
    extractor = _GatedExtractor()
    orchestrator = ValidationOrchestrator(extractor=extractor)

    async def scenario() -> None:
        imei_task = asyncio.create_task(orchestrator.validate(image, "imei", {"imei1": IMEI_A}))
        specs_task = asyncio.create_task(orchestrator.validate(image, "specs", {"ram": "8GB"}))
        await asyncio.sleep(0)

        assert orchestrator.is_analyzing("imei")
        assert orchestrator.is_analyzing("specs")
        assert orchestrator.state_of("specs") is ValidationState.ANALYZING

        extractor.gates[DataDomain.SPECS].set()
        await specs_task

        assert not orchestrator.is_analyzing("specs")
        assert orchestrator.is_analyzing("imei")
        assert orchestrator.is_analyzing()
        assert orchestrator.result_for("imei") is None

        extractor.gates[DataDomain.IMEI].set()
        await imei_task

        assert not orchestrator.is_analyzing()

    asyncio.run(scenario())
