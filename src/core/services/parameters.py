"""Request Parameter Builder.

Escribe los parámetros declarados por un endpoint en un `OutgoingRequest`
(path, query o body) aplicando la regla de formato de cada uno. No hace I/O.

Reglas:
- Se intentan todos los parámetros; los fallos se acumulan y se reportan
  juntos en un único `ParameterEncodingError`.
- Timeout y señal de cancelación se copian tal cual: este módulo no los
  interpreta.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

from core.domain.endpoints import EndpointDescriptor, ParameterSpec, ParamLocation
from core.domain.requests import OutgoingRequest, RequestParams
from core.errors import ParameterEncodingError

logger = logging.getLogger(__name__)

INT_RANGES: dict[str | None, tuple[int, int]] = {
    "int32": (-(2**31), 2**31 - 1),
    "int64": (-(2**63), 2**63 - 1),
    # Sin formato explícito, NetBox/go-swagger tratan los enteros como int64.
    None: (-(2**63), 2**63 - 1),
}

COLLECTION_SEPARATORS = {
    "csv": ",",
    "ssv": " ",
    "tsv": "\t",
    "pipes": "|",
}


def format_integer(value: Any, fmt: str | None = None) -> str:
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid integer")
    if isinstance(value, str):
        try:
            value = int(value.strip(), 10)
        except ValueError:
            raise ValueError(f"{value!r} is not a valid integer") from None
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValueError(f"{value!r} is not a whole number")
        value = int(value)
    elif isinstance(value, Decimal):
        if not value.is_finite() or value != value.to_integral_value():
            raise ValueError(f"{value!r} is not a whole number")
        value = int(value)
    elif not isinstance(value, int):
        raise ValueError(f"expected an integer, got {type(value).__name__}")

    low, high = INT_RANGES.get(fmt, INT_RANGES[None])
    if not low <= value <= high:
        raise ValueError(f"{value} is out of range for {fmt or 'int64'}")
    return str(value)


def format_number(value: Any) -> str:
    if isinstance(value, bool):
        raise ValueError("boolean is not a valid number")
    if isinstance(value, str):
        try:
            value = Decimal(value.strip())
        except ArithmeticError:
            raise ValueError(f"{value!r} is not a valid number") from None
    elif isinstance(value, (int, float)):
        value = Decimal(repr(value))
    elif not isinstance(value, Decimal):
        raise ValueError(f"expected a number, got {type(value).__name__}")
    if not value.is_finite():
        raise ValueError(f"{value} is not a finite number")
    return format(value, "f")


def format_boolean(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str) and value.strip().lower() in ("true", "false"):
        return value.strip().lower()
    raise ValueError(f"{value!r} is not a valid boolean")


def format_string(value: Any, fmt: str | None = None) -> str:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, date):
        return value.isoformat()
    if fmt in ("date-time", "date") and not isinstance(value, str):
        raise ValueError(f"expected {fmt}, got {type(value).__name__}")
    if isinstance(value, (dict, list, tuple, set)) or value is None:
        raise ValueError(f"expected a string, got {type(value).__name__}")
    return str(value)


def format_scalar(kind: str | None, value: Any, fmt: str | None = None) -> str:
    if kind == "integer":
        return format_integer(value, fmt)
    if kind == "number":
        return format_number(value)
    if kind == "boolean":
        return format_boolean(value)
    return format_string(value, fmt)


def format_body(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json", by_alias=True, exclude_unset=True)
    if isinstance(value, (dict, list)):
        return value
    raise ValueError(f"body must be a model, dict or list, got {type(value).__name__}")


def format_parameter(spec: ParameterSpec, value: Any) -> list[str] | Any:
    """Formatea un valor según su spec.

    Devuelve una lista de strings para path/query (más de un elemento solo en
    arrays `multi`) o el objeto JSON para el body.
    """

    if spec.location is ParamLocation.BODY:
        return format_body(value)

    if spec.type == "array":
        if isinstance(value, (str, bytes)) or not hasattr(value, "__iter__"):
            items = [value]
        else:
            items = list(value)
        formatted = [format_scalar(spec.items_type, item) for item in items]
        if spec.collection_format == "multi" and spec.location is ParamLocation.QUERY:
            return formatted
        separator = COLLECTION_SEPARATORS.get(spec.collection_format, ",")
        return [separator.join(formatted)]

    return [format_scalar(spec.type, value, spec.format)]


class RequestParameterBuilder:
    """Escribe los parámetros declarados de un endpoint en una petición."""

    def __init__(self, endpoint: EndpointDescriptor) -> None:
        self._endpoint = endpoint

    @property
    def endpoint(self) -> EndpointDescriptor:
        return self._endpoint

    def new_request(self) -> OutgoingRequest:
        return OutgoingRequest(
            method=self._endpoint.method,
            path_template=self._endpoint.path_template,
            base_path=self._endpoint.base_path,
            operation_id=self._endpoint.operation_id,
        )

    def write_to_request(self, request: OutgoingRequest, params: RequestParams) -> None:
        errors: list[tuple[str, str]] = []
        values = dict(params.values)

        for spec in self._endpoint.parameters:
            if spec.name not in values or values[spec.name] is None:
                values.pop(spec.name, None)
                if spec.required or spec.location is ParamLocation.PATH:
                    errors.append((spec.name, "is required"))
                continue

            value = values.pop(spec.name)
            try:
                formatted = format_parameter(spec, value)
            except ValueError as exc:
                errors.append((spec.name, str(exc)))
                continue

            if spec.location is ParamLocation.PATH:
                request.set_path_param(spec.name, formatted[0])
            elif spec.location is ParamLocation.QUERY:
                for item in formatted:
                    request.add_query_param(spec.name, item)
            else:
                request.set_body(formatted)

        for name in sorted(values):
            errors.append((name, "is not a declared parameter"))

        request.timeout = params.timeout
        request.cancel_event = params.cancel_event

        if errors:
            raise ParameterEncodingError(errors, operation_id=self._endpoint.operation_id)

    def build(self, params: RequestParams | None = None) -> OutgoingRequest:
        request = self.new_request()
        self.write_to_request(request, params or RequestParams())
        logger.debug("built %s %s", request.method, request.url_path())
        return request
