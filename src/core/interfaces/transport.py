"""Contratos de transporte y decodificación.

Por qué Protocol:
- El transporte HTTP (pooling, TLS, reintentos) es un colaborador externo:
  el Core solo necesita "enviar descriptor -> respuesta con status + body".
- `httpx.Response` cumple `ClientResponse` y `AsyncClientResponse` tal cual,
  y los tests pueden usar stubs sin heredar de nada.
"""

from __future__ import annotations

from typing import Any, Mapping, Protocol, runtime_checkable

from core.domain.requests import OutgoingRequest


@runtime_checkable
class ClientResponse(Protocol):
    """Respuesta recibida con body legible una sola vez."""

    status_code: int

    @property
    def headers(self) -> Mapping[str, str]: ...

    def read(self) -> bytes: ...

    def close(self) -> None: ...


@runtime_checkable
class AsyncClientResponse(Protocol):
    status_code: int

    @property
    def headers(self) -> Mapping[str, str]: ...

    async def aread(self) -> bytes: ...

    async def aclose(self) -> None: ...


@runtime_checkable
class Transport(Protocol):
    def send(self, request: OutgoingRequest) -> ClientResponse: ...


@runtime_checkable
class AsyncTransport(Protocol):
    async def send(self, request: OutgoingRequest) -> AsyncClientResponse: ...


class Decoder(Protocol):
    """`decode(bytes, tipo) -> valor`; lanza cualquier excepción si no encaja."""

    def __call__(self, raw: bytes, target: Any) -> Any: ...
