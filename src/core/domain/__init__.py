"""Modelos y entidades del dominio.

Por qué:
- Aquí viven los descriptores de endpoints, las variantes de respuesta y los
  payloads (dataclasses inmutables + Pydantic v2).
- El dominio no conoce httpx, CLI ni plantillas: solo conceptos del problema.
"""
