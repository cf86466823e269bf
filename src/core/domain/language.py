"""Language utilities for SecuriTel.

This module centralizes the language options supported across the
application. Keeping it in the domain layer allows the reconciliation
engine, the vision adapter and the CLI to share a single source of truth
without creating circular imports with adapters.
"""

from __future__ import annotations

from enum import Enum


class Language(str, Enum):
    """Supported natural-language choices for user-facing output."""

    ENGLISH = "en"
    FRENCH = "fr"

    @classmethod
    def default(cls) -> "Language":
        """Return the default language used across the application."""

        return cls.ENGLISH

    @classmethod
    def from_bool(cls, french: bool) -> "Language":
        """Derive a language value from a boolean flag."""

        return cls.FRENCH if french else cls.ENGLISH

    def label(self) -> str:
        """Human readable label for prompts and logging."""

        return "French" if self is Language.FRENCH else "English"
