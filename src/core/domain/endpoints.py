"""Descriptores de endpoints (tablas data-driven).

Idea:
- En vez de generar un lector/params/variantes por recurso, cada endpoint es
  un descriptor inmutable: verbo + path template + parámetros declarados +
  tabla status -> variante.
- Las tablas se construyen al cargar un documento de schema (ver
  `adapters.schema`), no a mano.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from http import HTTPStatus
from types import MappingProxyType
from typing import Any, Mapping


class ParamLocation(str, Enum):
    """Slot de la petición donde se escribe un parámetro."""

    PATH = "path"
    QUERY = "query"
    BODY = "body"


@dataclass(frozen=True)
class ParameterSpec:
    """Parámetro declarado por un endpoint y su regla de formato."""

    name: str
    location: ParamLocation
    type: str = "string"
    format: str | None = None
    required: bool = False
    items_type: str | None = None
    collection_format: str = "csv"
    description: str | None = None


def variant_name(status_code: int) -> str:
    """Nombre compacto de la variante a partir de la frase HTTP (204 -> NoContent)."""

    try:
        phrase = HTTPStatus(status_code).phrase
    except ValueError:
        return f"Status{status_code}"
    words = phrase.replace("-", " ").split()
    if phrase.isupper():
        return phrase.replace(" ", "")
    return "".join(w[:1].upper() + w[1:] for w in words)


@dataclass(frozen=True)
class VariantSpec:
    """Una fila de la tabla status -> variante.

    `payload_type` es `None` para respuestas sin contenido (p.ej. 204).
    """

    status_code: int
    name: str
    payload_type: Any = None
    description: str = ""

    @property
    def has_payload(self) -> bool:
        return self.payload_type is not None


@dataclass(frozen=True)
class EndpointDescriptor:
    """Contrato de un endpoint: compatibilidad exacta con la API remota."""

    operation_id: str
    method: str
    path_template: str
    parameters: tuple[ParameterSpec, ...] = ()
    responses: tuple[VariantSpec, ...] = ()
    base_path: str = "/api"
    summary: str = ""
    tags: tuple[str, ...] = ()
    _table: Mapping[int, VariantSpec] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        table = {variant.status_code: variant for variant in self.responses}
        object.__setattr__(self, "_table", MappingProxyType(table))

    @property
    def key(self) -> str:
        return f"{self.method} {self.path_template}"

    @property
    def response_table(self) -> Mapping[int, VariantSpec]:
        return self._table

    def parameter(self, name: str) -> ParameterSpec | None:
        for spec in self.parameters:
            if spec.name == name:
                return spec
        return None

    @property
    def camel_name(self) -> str:
        """`dcim_module-bays_delete` -> `dcimModuleBaysDelete`."""

        head, *rest = re.split(r"[_\-]+", self.operation_id)
        return head + "".join(part[:1].upper() + part[1:] for part in rest)
