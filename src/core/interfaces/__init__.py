"""Interfaces/abstracciones del Core.

Por qué:
- Define contratos (Protocol) que implementan adaptadores concretos
  (transporte HTTP, decodificador de payloads).
- Permite invertir dependencias: el Core depende de abstracciones.
"""
