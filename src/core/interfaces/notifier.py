"""Contrato del renderizador de notificaciones (toasts, consola...)."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class Notifier(Protocol):
    """Recibe una llamada por cada error, aviso y sugerencia de un resultado."""

    def error(self, message: str) -> None: ...

    def warning(self, message: str) -> None: ...

    def suggestion(self, message: str) -> None: ...
