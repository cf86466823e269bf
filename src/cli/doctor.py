"""Doctor command for environment diagnostics."""

from __future__ import annotations

import asyncio

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.http_client import build_async_client
from core.config import AppSettings, get_user_env_file, write_user_env_vars

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()

PROVIDER_PRESETS: dict[str, dict[str, str]] = {
    "openrouter": {
        "SECURITEL_AI_BASE_URL": "https://openrouter.ai/api/v1",
        "SECURITEL_AI_MODEL": "google/gemini-flash-1.5",
    },
    "openai": {"SECURITEL_AI_BASE_URL": "https://api.openai.com/v1", "SECURITEL_AI_MODEL": "gpt-4o-mini"},
    "groq": {
        "SECURITEL_AI_BASE_URL": "https://api.groq.com/openai/v1",
        "SECURITEL_AI_MODEL": "llama-3.2-11b-vision-preview",
    },
    "ollama": {"SECURITEL_AI_BASE_URL": "http://localhost:11434/v1", "SECURITEL_AI_MODEL": "llava"},
}


async def _check_http(url: str, settings: AppSettings) -> tuple[bool, str]:
    try:
        async with build_async_client(settings) as client:
            response = await client.get(url)
        return True, f"HTTP {response.status_code}"
    except httpx.HTTPError as exc:
        return False, f"{type(exc).__name__}: {exc}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="SecuriTel Doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    # Config
    if settings.ai_api_key:
        table.add_row("AI key", "OK", "Image cross-check enabled")
    else:
        table.add_row("AI key", "MISSING", "Every validation will fail until a key is configured")
    table.add_row("AI base_url", "OK", settings.ai_base_url)
    table.add_row("AI model", "OK", settings.ai_model)
    table.add_row("AI timeout", "OK", f"{settings.ai_timeout_seconds:g}s")
    table.add_row("User config", "OK" if get_user_env_file().exists() else "ABSENT", str(get_user_env_file()))

    # Connectivity (best-effort)
    models_url = settings.ai_base_url.rstrip("/") + "/models"
    ok_http, detail_http = asyncio.run(_check_http(models_url, settings))
    table.add_row("Provider connectivity", "OK" if ok_http else "FAIL", detail_http)

    _console.print(table)

    if not settings.ai_api_key:
        _console.print("\n[yellow]Note:[/yellow] run `securitel doctor setup-ai` to store a provider key.")


@app.command(name="setup-ai")
def setup_ai() -> None:
    """Interactive AI setup (stores config in the user config .env)."""

    provider = typer.prompt(
        "AI provider",
        default="openrouter",
        show_default=True,
    ).strip().lower()

    values = PROVIDER_PRESETS.get(provider, {}).copy()
    if not values:
        _console.print("[yellow]Unknown provider preset. You can still enter custom values.[/yellow]")

    base_url = typer.prompt("AI base URL", default=values.get("SECURITEL_AI_BASE_URL", ""), show_default=True).strip()
    model = typer.prompt("AI model", default=values.get("SECURITEL_AI_MODEL", ""), show_default=True).strip()
    api_key = typer.prompt("AI API key", hide_input=True, confirmation_prompt=False).strip()

    if not base_url or not model:
        raise typer.BadParameter("base_url and model are required")

    env_path = write_user_env_vars(
        {
            "SECURITEL_AI_BASE_URL": base_url,
            "SECURITEL_AI_MODEL": model,
            "SECURITEL_AI_API_KEY": api_key,
        }
    )

    _console.print(f"[green]Saved AI config to:[/green] {env_path}")
