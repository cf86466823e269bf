"""Dobles de prueba compartidos (extractor y notificador en memoria)."""

from __future__ import annotations

from dataclasses import dataclass, field

from core.domain.models import DataDomain, ExtractedFields, ExtractionOutcome, ImagePayload

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32

IMEI_A = "123456789012345"
IMEI_B = "987654321098765"


@dataclass
class FakeExtractor:
    """Extractor en memoria: devuelve `outcome` o lanza `error`."""

    outcome: ExtractionOutcome | None = None
    error: Exception | None = None
    calls: list[DataDomain] = field(default_factory=list)

    async def analyze(self, image: ImagePayload, domain: DataDomain) -> ExtractionOutcome:
        self.calls.append(domain)
        if self.error is not None:
            raise self.error
        assert self.outcome is not None
        return self.outcome


@dataclass
class RecordingNotifier:
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)
    suggestions: list[str] = field(default_factory=list)

    def error(self, message: str) -> None:
        self.errors.append(message)

    def warning(self, message: str) -> None:
        self.warnings.append(message)

    def suggestion(self, message: str) -> None:
        self.suggestions.append(message)


def parsed(**fields: str | None) -> ExtractionOutcome:
    return ExtractionOutcome(extracted_data=ExtractedFields(**fields), confidence=0.7)
