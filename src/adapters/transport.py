"""Transportes httpx que cumplen `core.interfaces.transport`.

Convierten un `OutgoingRequest` en una petición httpx y la envían en modo
stream: el dispatcher es quien lee el body (una vez) y cierra la respuesta.
"""

from __future__ import annotations

import logging

import httpx

from core.domain.requests import OutgoingRequest
from core.errors import RequestCancelledError

logger = logging.getLogger(__name__)


def _build(client: httpx.Client | httpx.AsyncClient, request: OutgoingRequest) -> httpx.Request:
    kwargs: dict = {
        "params": request.query,
        "headers": request.headers or None,
    }
    if request.has_body:
        kwargs["json"] = request.body
    if request.timeout is not None:
        kwargs["timeout"] = request.timeout
    return client.build_request(request.method, request.url_path(), **kwargs)


class HttpxTransport:
    """Transporte síncrono sobre un `httpx.Client` ya configurado."""

    def __init__(self, client: httpx.Client) -> None:
        self._client = client

    def send(self, request: OutgoingRequest) -> httpx.Response:
        if request.cancelled:
            raise RequestCancelledError(request.operation_id)
        http_request = _build(self._client, request)
        logger.debug("%s %s", http_request.method, http_request.url)
        return self._client.send(http_request, stream=True)

    def close(self) -> None:
        self._client.close()


class AsyncHttpxTransport:
    """Transporte asíncrono; la cancelación la da la propia tarea asyncio."""

    def __init__(self, client: httpx.AsyncClient) -> None:
        self._client = client

    async def send(self, request: OutgoingRequest) -> httpx.Response:
        if request.cancelled:
            raise RequestCancelledError(request.operation_id)
        http_request = _build(self._client, request)
        logger.debug("%s %s", http_request.method, http_request.url)
        return await self._client.send(http_request, stream=True)

    async def aclose(self) -> None:
        await self._client.aclose()
