"""Variante de respuesta (resultado tipado de un dispatch)."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from core.domain.endpoints import EndpointDescriptor


@dataclass(frozen=True)
class ResponseVariant:
    """Resultado de una respuesta cuyo status está en la tabla del endpoint.

    Se construye una sola vez a partir de exactamente una respuesta HTTP y no
    se muta después. `payload` es `None` en variantes sin contenido; si el body
    llegó vacío trae el valor por defecto del tipo declarado.
    """

    endpoint: EndpointDescriptor
    status_code: int
    name: str
    payload: Any = None

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    def __str__(self) -> str:
        return (
            f"[{self.endpoint.method} {self.endpoint.path_template}][{self.status_code}] "
            f"{self.endpoint.camel_name}{self.name}  {self.payload!r}"
        )
