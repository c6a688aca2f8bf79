"""Parámetros por llamada y descriptor de petición saliente.

`RequestParams` pertenece al código que llama: se crea por llamada y se
descarta tras el envío. `OutgoingRequest` es la representación agnóstica del
transporte en la que escribe el builder.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote


@dataclass
class RequestParams:
    """Valores por nombre + timeout/cancelación opcionales."""

    values: dict[str, Any] = field(default_factory=dict)
    timeout: float | None = None
    cancel_event: threading.Event | None = None

    @classmethod
    def of(
        cls,
        *,
        timeout: float | None = None,
        cancel_event: threading.Event | None = None,
        **values: Any,
    ) -> "RequestParams":
        return cls(values=dict(values), timeout=timeout, cancel_event=cancel_event)

    def with_value(self, name: str, value: Any) -> "RequestParams":
        self.values[name] = value
        return self


@dataclass
class OutgoingRequest:
    method: str
    path_template: str
    base_path: str = "/api"
    path_params: dict[str, str] = field(default_factory=dict)
    query: list[tuple[str, str]] = field(default_factory=list)
    headers: dict[str, str] = field(default_factory=dict)
    body: Any = None
    has_body: bool = False
    timeout: float | None = None
    cancel_event: threading.Event | None = None
    operation_id: str | None = None

    def set_path_param(self, name: str, value: str) -> None:
        self.path_params[name] = value

    def add_query_param(self, name: str, value: str) -> None:
        self.query.append((name, value))

    def set_body(self, body: Any) -> None:
        self.body = body
        self.has_body = True

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    def url_path(self) -> str:
        """Path final: base_path + template con valores escapados."""

        path = self.path_template
        for name, value in self.path_params.items():
            path = path.replace("{" + name + "}", quote(value, safe=""))
        return self.base_path.rstrip("/") + path
