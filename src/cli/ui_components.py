"""Componentes de UI para CLI (Rich).

Por qué separar componentes:
- Evita mezclar lógica de comandos con detalles visuales.
- Permite reutilizar tablas/paneles en múltiples comandos.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from pydantic import BaseModel
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from core.domain.endpoints import EndpointDescriptor
from core.domain.responses import ResponseVariant
from core.errors import NetBoxClientError


def _type_label(payload_type: Any) -> str:
    if payload_type is None:
        return "-"
    return getattr(payload_type, "__name__", None) or str(payload_type)


def build_endpoints_table(endpoints: Iterable[EndpointDescriptor]) -> Table:
    """Tabla de endpoints: operación, verbo + path, parámetros y variantes."""

    table = Table(title="NetBox endpoints")
    table.add_column("Operation", style="cyan", no_wrap=True)
    table.add_column("Method", style="bold")
    table.add_column("Path", style="magenta")
    table.add_column("Parameters", style="white")
    table.add_column("Responses", style="green")

    for endpoint in endpoints:
        params = ", ".join(
            f"{p.name}:{p.location.value}" + ("*" if p.required else "") for p in endpoint.parameters
        )
        responses = ", ".join(
            f"{v.status_code} {v.name}({_type_label(v.payload_type)})" for v in endpoint.responses
        )
        table.add_row(endpoint.operation_id, endpoint.method, endpoint.path_template, params, responses)
    return table


def payload_to_jsonable(payload: Any) -> Any:
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", by_alias=True, exclude_none=True)
    if isinstance(payload, list):
        return [payload_to_jsonable(item) for item in payload]
    return payload


def build_variant_panel(variant: ResponseVariant) -> Panel:
    """Panel para presentar una variante y su payload."""

    title = Text(
        f"{variant.endpoint.method} {variant.endpoint.path_template} -> {variant.status_code} {variant.name}",
        style="bold green",
    )
    if variant.payload is None:
        body = Text("(no payload)", style="dim")
    else:
        body = Text(json.dumps(payload_to_jsonable(variant.payload), ensure_ascii=False, indent=2))
    return Panel(body, title=title, border_style="green")


def build_error_panel(error: NetBoxClientError) -> Panel:
    body = Text()
    body.append(error.message + "\n", style="bold")
    for key, value in error.details.items():
        if isinstance(value, list):
            for item in value:
                body.append(f"- {item}\n")
        else:
            body.append(f"{key}: {value}\n", style="dim")
    return Panel(body, title=Text(type(error).__name__, style="bold red"), border_style="red")
