"""Configuración del Core.

Por qué aquí:
- Centraliza variables de entorno (pydantic-settings) sin contaminar la CLI.
- Permite que el adaptador de visión y el `doctor` lean config de forma
  consistente.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from core.domain.language import Language


def get_user_config_dir() -> Path:
    """Directorio de configuración por usuario (cross-platform, sin dependencias).

    Objetivo: permitir configurar la clave del proveedor IA una sola vez
    (`securitel doctor setup-ai`) sin editar `.env` en el proyecto.
    """

    if sys.platform.startswith("win"):
        base = Path(os.environ.get("APPDATA", str(Path.home())))
        return base / "securitel"
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / "securitel"

    xdg = os.environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "securitel"
    return Path.home() / ".config" / "securitel"


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    data: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if "=" not in line:
            continue
        key, value = line.split("=", 1)
        key = key.strip()
        value = value.strip().strip('"').strip("'")
        if key:
            data[key] = value
    return data


def write_user_env_vars(values: dict[str, str], *, env_path: Path | None = None) -> Path:
    """Escribe/actualiza variables en el .env global del usuario."""

    env_path = env_path or get_user_env_file()
    env_path.parent.mkdir(parents=True, exist_ok=True)

    existing: dict[str, str] = {}
    if env_path.exists():
        existing = _parse_env_lines(env_path.read_text(encoding="utf-8"))

    existing.update({k: v for k, v in values.items() if v is not None})

    lines = ["# SecuriTel user config (.env)"]
    for key in sorted(existing.keys()):
        lines.append(f"{key}={existing[key]}")
    env_path.write_text("\n".join(lines) + "\n", encoding="utf-8")
    return env_path


class AppSettings(BaseSettings):
    """Configuración central de la aplicación.

    Por qué pydantic-settings:
    - Tipado + validación en el borde (env vars) sin ensuciar el Core con lógica.
    - Un único contrato de configuración para CLI/adapters.
    """

    model_config = SettingsConfigDict(
        env_prefix="SECURITEL_",
        extra="ignore",
        case_sensitive=False,
        # Orden: proyecto primero (dev), luego config global de usuario.
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
    )

    ai_api_key: str | None = Field(
        default=None,
        description="API key del proveedor IA (OpenRouter u otro compatible OpenAI).",
    )
    ai_base_url: str = Field(
        default="https://openrouter.ai/api/v1",
        min_length=8,
        description="Base URL compatible OpenAI.",
    )
    ai_model: str = Field(
        default="google/gemini-flash-1.5",
        min_length=1,
        description="Modelo de visión usado para leer las capturas.",
    )
    ai_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout de la llamada al proveedor IA (segundos).",
    )
    ai_confidence: float = Field(
        default=0.7,
        ge=0.0,
        le=1.0,
        description="Confianza reportada cuando la respuesta del modelo se pudo parsear.",
    )
    ai_max_tokens: int = Field(
        default=300,
        ge=16,
        description="Límite de tokens de la respuesta (solo se espera un JSON corto).",
    )

    app_title: str = Field(
        default="SecuriTel",
        min_length=1,
        description="Nombre enviado como cabecera X-Title (atribución OpenRouter).",
    )
    app_url: str = Field(
        default="https://securitel.local",
        min_length=1,
        description="URL enviada como cabecera HTTP-Referer (atribución OpenRouter).",
    )

    default_language: Language = Field(
        default=Language.ENGLISH,
        description="Idioma por defecto para prompts y mensajes (en/fr).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging de la CLI (DEBUG, INFO, WARNING...).",
    )
