"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- `ConsoleNotifier` es el renderizador de notificaciones de la CLI: el
  orquestador solo conoce el contrato `Notifier`.
"""

from __future__ import annotations

from rich.align import Align
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.models import ValidationResult


def print_banner(console: Console) -> None:
    """Imprime el banner de bienvenida.

    Por qué aquí:
    - Evita dependencias circulares (main <-> doctor).
    - Permite desactivar banner en modos no interactivos (JSON/pipelines).
    """

    title = Text("SecuriTel", style="bold cyan")
    subtitle = Text("IMEI • Serial number • Specs • AI cross-check", style="dim")
    body = Align.center(Text.assemble(title, "\n", subtitle), vertical="middle")
    console.print(Panel(body, border_style="cyan", padding=(1, 4)))


class ConsoleNotifier:
    """Una línea por notificación, con el color de su severidad."""

    def __init__(self, console: Console) -> None:
        self._console = console

    def error(self, message: str) -> None:
        self._console.print(f"[bold red]✗[/bold red] {message}")

    def warning(self, message: str) -> None:
        self._console.print(f"[yellow]![/yellow] {message}")

    def suggestion(self, message: str) -> None:
        self._console.print(f"[cyan]→[/cyan] {message}")


def build_extracted_table(result: ValidationResult) -> Table:
    """Tabla con los campos leídos de la imagen."""

    table = Table(title="Extracted fields")
    table.add_column("Field", style="cyan", no_wrap=True)
    table.add_column("Value", style="white")
    extracted = result.extracted_data.model_dump(by_alias=True)
    for name, value in extracted.items():
        table.add_row(name, value if value is not None else "[dim]—[/dim]")
    return table


def build_result_panel(result: ValidationResult) -> Panel:
    """Panel para presentar el `ValidationResult`."""

    if result.is_valid:
        title = Text("Valid", style="bold green")
        border = "yellow" if result.warnings else "green"
    else:
        title = Text("Invalid", style="bold red")
        border = "red"

    body = Text()
    body.append(f"Domain: {result.domain.value}\n")
    if result.extraction_status is not None:
        body.append(f"Extraction: {result.extraction_status.value}\n")
    body.append(f"IMEIs read / declared: {result.imei_count} / {result.user_imei_count}\n")
    body.append(f"Errors: {len(result.errors)}  Warnings: {len(result.warnings)}  ")
    body.append(f"Suggestions: {len(result.suggestions)}\n")
    if result.missing_imei_fields:
        body.append(f"Missing: {', '.join(result.missing_imei_fields)}\n")
    body.append(f"\nConfidence: {result.confidence:.2f}", style="dim")

    return Panel(body, title=title, border_style=border)
