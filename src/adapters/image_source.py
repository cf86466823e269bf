"""Carga de imágenes desde disco.

Por qué aquí:
- La UI/CLI trabaja con rutas; el Core solo conoce `ImagePayload`.
- Centraliza la detección del tipo MIME para construir el data URI.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from core.domain.models import ImagePayload

_SIGNATURES: tuple[tuple[bytes, str], ...] = (
    (b"\x89PNG\r\n\x1a\n", "image/png"),
    (b"\xff\xd8\xff", "image/jpeg"),
    (b"GIF87a", "image/gif"),
    (b"GIF89a", "image/gif"),
)


def sniff_mime_type(content: bytes, filename: str | None = None) -> str:
    """Detecta el MIME por firma de bytes, luego por extensión."""

    for signature, mime in _SIGNATURES:
        if content.startswith(signature):
            return mime
    if content[:4] == b"RIFF" and content[8:12] == b"WEBP":
        return "image/webp"
    if filename:
        guessed, _ = mimetypes.guess_type(filename)
        if guessed:
            return guessed
    return "image/jpeg"


def load_image(path: Path) -> ImagePayload:
    """Lee `path` y devuelve un `ImagePayload` listo para el extractor."""

    content = path.read_bytes()
    return ImagePayload(
        content=content,
        mime_type=sniff_mime_type(content, path.name),
        filename=path.name,
    )
