"""Capa CLI (Typer + Rich): comandos `validate` y `doctor`."""
