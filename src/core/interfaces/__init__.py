"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (extractor de visión, renderizador de notificaciones).
- Permite invertir dependencias: el Core depende de abstracciones.
"""
