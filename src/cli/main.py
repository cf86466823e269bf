"""CLI principal (Typer).

Por qué Typer + Rich:
- Tipado de opciones (enums de dominio/idioma) sin parsers a mano.
- La CLI solo traduce argumentos a una llamada del orquestador y pinta el
  resultado; toda la lógica vive en `core`.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.image_source import load_image
from adapters.json_exporter import export_result_json, result_to_json
from adapters.vision_extractor import VisionExtractor
from cli import doctor
from cli.ui_components import ConsoleNotifier, build_extracted_table, build_result_panel, print_banner
from core.config import AppSettings
from core.domain.language import Language
from core.domain.models import DataDomain, parse_declaration
from core.interfaces.extractor import FieldExtractor
from core.logging import configure_logging
from core.services.validation_orchestrator import ValidationOrchestrator

app = typer.Typer(
    no_args_is_help=True,
    help="Cross-check device identity fields against a screenshot read by a vision model.",
)
app.add_typer(doctor.app, name="doctor")

_console = Console()


def build_extractor(settings: AppSettings, language: Language) -> FieldExtractor:
    return VisionExtractor(settings, language=language)


def _declared_fields(
    domain: DataDomain,
    *,
    imei1: str | None,
    imei2: str | None,
    serial: str | None,
    ram: str | None,
    storage: str | None,
) -> dict[str, object]:
    if domain is DataDomain.IMEI:
        return {"imei1": imei1, "imei2": imei2, "serial_number": serial}
    if domain is DataDomain.SERIAL:
        return {"serial_number": serial}
    return {"ram": ram, "storage": storage}


@app.command()
def validate(
    image: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="Screenshot or photo."),
    domain: DataDomain = typer.Option(DataDomain.IMEI, "--domain", "-d", help="Which fields to cross-check."),
    imei1: str | None = typer.Option(None, "--imei1", help="Declared primary IMEI."),
    imei2: str | None = typer.Option(None, "--imei2", help="Declared secondary IMEI."),
    serial: str | None = typer.Option(None, "--serial", help="Declared serial number."),
    ram: str | None = typer.Option(None, "--ram", help="Declared RAM (e.g. 8GB)."),
    storage: str | None = typer.Option(None, "--storage", help="Declared storage (e.g. 128GB)."),
    language: Language | None = typer.Option(None, "--lang", help="Language for prompts and messages."),
    as_json: bool = typer.Option(False, "--json", help="Print the result payload as JSON only."),
    output: Path | None = typer.Option(None, "--output", "-o", help="Also write the JSON payload to this file."),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging."),
) -> None:
    """Validate one image against the declared fields of DOMAIN."""

    settings = AppSettings()
    configure_logging(level=logging.DEBUG if verbose else settings.log_level, force=True)
    effective_language = language or settings.default_language

    try:
        declared = parse_declaration(
            domain,
            _declared_fields(domain, imei1=imei1, imei2=imei2, serial=serial, ram=ram, storage=storage),
        )
        payload = load_image(image)
    except (ValidationError, ValueError) as exc:
        raise typer.BadParameter(str(exc)) from exc

    orchestrator = ValidationOrchestrator(
        extractor=build_extractor(settings, effective_language),
        notifier=None if as_json else ConsoleNotifier(_console),
        language=effective_language,
    )

    if not as_json:
        print_banner(_console)
    result = asyncio.run(orchestrator.validate(payload, domain, declared))

    if as_json:
        typer.echo(result_to_json(result))
    else:
        _console.print(build_extracted_table(result))
        _console.print(build_result_panel(result))

    if output is not None:
        export_result_json(result=result, output_path=output)
        if not as_json:
            _console.print(f"[green]Saved result to:[/green] {output}")

    if not result.is_valid:
        raise typer.Exit(code=1)


def run() -> None:
    app()
