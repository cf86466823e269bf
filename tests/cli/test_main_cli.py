from __future__ import annotations

import json
from pathlib import Path

import pytest
from typer.testing import CliRunner

import cli.main as cli_main
from core.domain.errors import AuthError
from tests.support import IMEI_A, IMEI_B, PNG_BYTES, FakeExtractor, parsed

runner = CliRunner()


@pytest.fixture
def screenshot(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("SECURITEL_LOG_LEVEL", "CRITICAL")
    path = tmp_path / "screen.png"
    path.write_bytes(PNG_BYTES)
    return path


def _use_extractor(monkeypatch: pytest.MonkeyPatch, extractor: FakeExtractor) -> None:
    monkeypatch.setattr(cli_main, "build_extractor", lambda settings, language: extractor)


def test_validate_json_output_for_matching_imeis(screenshot: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    extractor = FakeExtractor(outcome=parsed(imei1=IMEI_A, imei2=IMEI_B))
    _use_extractor(monkeypatch, extractor)

    result = runner.invoke(
        cli_main.app,
        ["validate", str(screenshot), "--imei1", IMEI_A, "--imei2", IMEI_B, "--json"],
    )

    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["isValid"] is True
    assert payload["imeiCount"] == 2
    assert payload["userImeiCount"] == 2
    assert payload["errors"] == []
    assert extractor.calls == ["imei"]


def test_validate_exits_with_error_on_mismatch(screenshot: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _use_extractor(monkeypatch, FakeExtractor(outcome=parsed(ram="8GB", storage="128GB")))

    result = runner.invoke(
        cli_main.app,
        ["validate", str(screenshot), "-d", "specs", "--ram", "4GB", "--storage", "128 GB", "--json"],
    )

    assert result.exit_code == 1
    payload = json.loads(result.stdout)
    assert payload["isValid"] is False
    assert len(payload["errors"]) == 1
    assert payload["domain"] == "specs"


def test_validate_reports_provider_failure(screenshot: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _use_extractor(monkeypatch, FakeExtractor(error=AuthError("bad key", status_code=401)))

    result = runner.invoke(cli_main.app, ["validate", str(screenshot), "-d", "serial", "--serial", "X1"])

    assert result.exit_code == 1
    assert "bad key" in result.stdout
    assert "Invalid" in result.stdout


def test_validate_writes_output_file(screenshot: Path, monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _use_extractor(monkeypatch, FakeExtractor(outcome=parsed(serial_number="ABC123")))
    target = tmp_path / "exports" / "result.json"

    result = runner.invoke(
        cli_main.app,
        ["validate", str(screenshot), "-d", "serial", "--serial", "ABC 123", "-o", str(target)],
    )

    assert result.exit_code == 0, result.output
    assert json.loads(target.read_text(encoding="utf-8"))["extractedData"] == {"serialNumber": "ABC123"}


def test_validate_rejects_missing_image(tmp_path: Path) -> None:
    result = runner.invoke(cli_main.app, ["validate", str(tmp_path / "nope.png")])

    assert result.exit_code == 2
