"""Decodificador JSON por defecto (pydantic `TypeAdapter`).

Cumple `core.interfaces.transport.Decoder`: recibe bytes y el tipo destino
declarado por la variante (modelo, `PaginatedList[...]`, `dict`, ...).
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any

from pydantic import TypeAdapter


@lru_cache(maxsize=256)
def _adapter(target: Any) -> TypeAdapter[Any]:
    return TypeAdapter(target)


def decode_json(raw: bytes, target: Any) -> Any:
    """Valida `raw` como JSON del tipo `target`.

    Lanza `pydantic.ValidationError` si el JSON está mal formado o no encaja.
    """

    return _adapter(target).validate_json(raw)
