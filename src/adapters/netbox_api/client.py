"""Cliente NetBox: builder + transporte + dispatcher.

Flujo de una llamada (sin estado compartido entre llamadas):
1. `RequestParameterBuilder` escribe los parámetros en un `OutgoingRequest`.
2. El transporte lo envía (httpx, modo stream).
3. `ResponseDispatcher` devuelve la variante tipada o lanza el error.

Los errores de transporte (httpx.TimeoutException, ConnectError, ...) se
propagan sin tocar.
"""

from __future__ import annotations

import logging
from typing import Any

from adapters.decoding import decode_json
from adapters.http_client import build_async_client, build_client
from adapters.schema.catalog import EndpointCatalog, catalog_for
from adapters.transport import AsyncHttpxTransport, HttpxTransport
from core.config import AppSettings
from core.domain.requests import OutgoingRequest, RequestParams
from core.domain.responses import ResponseVariant
from core.interfaces.transport import AsyncTransport, Decoder, Transport
from core.services.dispatcher import ResponseDispatcher
from core.services.parameters import RequestParameterBuilder

logger = logging.getLogger(__name__)


def _merge_params(params: RequestParams | None, values: dict[str, Any]) -> RequestParams:
    merged = RequestParams() if params is None else RequestParams(
        values=dict(params.values),
        timeout=params.timeout,
        cancel_event=params.cancel_event,
    )
    merged.values.update(values)
    return merged


class _BaseClient:
    def __init__(
        self,
        settings: AppSettings | None,
        catalog: EndpointCatalog | None,
        decoder: Decoder,
    ) -> None:
        self._settings = settings or AppSettings()
        self._catalog = catalog if catalog is not None else catalog_for(self._settings.schema_path)
        self._decoder = decoder

    @property
    def catalog(self) -> EndpointCatalog:
        return self._catalog

    @property
    def settings(self) -> AppSettings:
        return self._settings

    def prepare(
        self,
        operation_id: str,
        params: RequestParams | None = None,
        **values: Any,
    ) -> tuple[OutgoingRequest, ResponseDispatcher]:
        """Construye la petición y el dispatcher de una operación (sin I/O)."""

        endpoint = self._catalog[operation_id]
        merged = _merge_params(params, values)
        if merged.timeout is None:
            merged.timeout = self._settings.http_timeout_seconds
        request = RequestParameterBuilder(endpoint).build(merged)
        return request, ResponseDispatcher(endpoint, self._decoder)


class NetBoxClient(_BaseClient):
    """Cliente síncrono.

    Ejemplo:
        with NetBoxClient(settings) as nb:
            variant = nb.request("tenancy_contacts_read", id=3)
            contact = variant.payload
    """

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        catalog: EndpointCatalog | None = None,
        transport: Transport | None = None,
        decoder: Decoder = decode_json,
    ) -> None:
        super().__init__(settings, catalog, decoder)
        self._owns_transport = transport is None
        self._transport: Transport = transport or HttpxTransport(build_client(self._settings))

    def request(
        self,
        operation_id: str,
        params: RequestParams | None = None,
        **values: Any,
    ) -> ResponseVariant:
        request, dispatcher = self.prepare(operation_id, params, **values)
        logger.debug("%s -> %s %s", operation_id, request.method, request.url_path())
        response = self._transport.send(request)
        return dispatcher.dispatch(response)

    def close(self) -> None:
        if self._owns_transport and isinstance(self._transport, HttpxTransport):
            self._transport.close()

    def __enter__(self) -> "NetBoxClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


class AsyncNetBoxClient(_BaseClient):
    """Cliente asíncrono; misma semántica que `NetBoxClient`."""

    def __init__(
        self,
        settings: AppSettings | None = None,
        *,
        catalog: EndpointCatalog | None = None,
        transport: AsyncTransport | None = None,
        decoder: Decoder = decode_json,
    ) -> None:
        super().__init__(settings, catalog, decoder)
        self._owns_transport = transport is None
        self._transport: AsyncTransport = transport or AsyncHttpxTransport(build_async_client(self._settings))

    async def request(
        self,
        operation_id: str,
        params: RequestParams | None = None,
        **values: Any,
    ) -> ResponseVariant:
        request, dispatcher = self.prepare(operation_id, params, **values)
        logger.debug("%s -> %s %s", operation_id, request.method, request.url_path())
        response = await self._transport.send(request)
        return await dispatcher.adispatch(response)

    async def aclose(self) -> None:
        if self._owns_transport and isinstance(self._transport, AsyncHttpxTransport):
            await self._transport.aclose()

    async def __aenter__(self) -> "AsyncNetBoxClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()
