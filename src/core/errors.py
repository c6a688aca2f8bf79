"""Errores tipados del cliente.

Jerarquía:
    NetBoxClientError (base)
    ├── ParameterEncodingError (uno o más parámetros no se pudieron formatear)
    ├── UnexpectedStatusError (status fuera de la tabla del endpoint)
    ├── PayloadDecodeError (body presente pero no conforme al tipo)
    ├── UnknownOperationError (operation_id no registrado)
    ├── SchemaError (documento de schema inválido)
    └── RequestCancelledError (cancelado antes de enviar)

Los errores de transporte (httpx) no se envuelven: se propagan tal cual.
"""

from __future__ import annotations

from typing import Any


class NetBoxClientError(Exception):
    """Base de todos los errores del cliente.

    Guarda `message` y `details` para poder serializar el error en logs o
    en la salida JSON de la CLI.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        self.message = message
        self.details = details or {}
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            details_str = ", ".join(f"{k}={v!r}" for k, v in self.details.items())
            return f"{self.message} ({details_str})"
        return self.message

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "details": self.details,
        }


class ParameterEncodingError(NetBoxClientError):
    """Error compuesto del builder de parámetros.

    `errors` contiene un par (parámetro, motivo) por cada fallo; el builder
    intenta todos los parámetros antes de lanzar.
    """

    def __init__(self, errors: list[tuple[str, str]], operation_id: str | None = None) -> None:
        self.errors = list(errors)
        self.operation_id = operation_id
        details: dict[str, Any] = {"errors": [f"{name}: {reason}" for name, reason in self.errors]}
        if operation_id:
            details["operation_id"] = operation_id
        count = len(self.errors)
        super().__init__(f"{count} parameter(s) could not be encoded", details)

    @property
    def names(self) -> list[str]:
        return [name for name, _ in self.errors]


UNEXPECTED_STATUS_MESSAGE = (
    "response status code does not match any response statuses defined for this endpoint in the API schema"
)


class UnexpectedStatusError(NetBoxClientError):
    """Status no declarado en la tabla del endpoint.

    Conserva la respuesta cruda (`response`) para diagnóstico. El body ya fue
    leído por el dispatcher, así que `response.content` sigue disponible tras
    el cierre.
    """

    def __init__(
        self,
        code: int,
        response: Any = None,
        message: str = UNEXPECTED_STATUS_MESSAGE,
        operation_id: str | None = None,
    ) -> None:
        self.code = code
        self.response = response
        self.operation_id = operation_id
        details: dict[str, Any] = {"code": code}
        if operation_id:
            details["operation_id"] = operation_id
        super().__init__(message, details)


class PayloadDecodeError(NetBoxClientError):
    """El body no se pudo deserializar al tipo declarado por la variante."""

    def __init__(
        self,
        status_code: int,
        variant: str,
        cause: Exception,
        operation_id: str | None = None,
    ) -> None:
        self.status_code = status_code
        self.variant = variant
        self.cause = cause
        self.operation_id = operation_id
        details: dict[str, Any] = {"status_code": status_code, "variant": variant}
        if operation_id:
            details["operation_id"] = operation_id
        super().__init__(f"could not decode {variant} payload: {cause}", details)


class UnknownOperationError(NetBoxClientError):
    def __init__(self, operation_id: str) -> None:
        self.operation_id = operation_id
        super().__init__(f"unknown operation: {operation_id}", {"operation_id": operation_id})


class SchemaError(NetBoxClientError):
    """Documento de schema (Swagger) que no se puede convertir en tablas."""


class RequestCancelledError(NetBoxClientError):
    """La señal de cancelación estaba activa antes de enviar la petición."""

    def __init__(self, operation_id: str | None = None) -> None:
        self.operation_id = operation_id
        details = {"operation_id": operation_id} if operation_id else None
        super().__init__("request cancelled before it was sent", details)
