"""Response Dispatcher.

Dado un status y un body, selecciona la variante tipada del endpoint o
produce `UnexpectedStatusError`.

Garantías:
- El body se consume como mucho una vez y la respuesta se cierra en todos los
  caminos de salida (incluido el fallo de decodificación).
- Nunca se devuelve una variante a medio poblar: si el payload no decodifica,
  el resultado es un error.
- Body vacío en una variante con payload = éxito con el valor por defecto del
  tipo declarado (`Contact()`, `PaginatedList` sin resultados, `{}`). Es una
  indulgencia heredada del cliente upstream (trata EOF como éxito); puede
  ocultar violaciones de schema del servidor.
"""

from __future__ import annotations

import logging
from typing import Any, Callable

from core.domain.endpoints import EndpointDescriptor, VariantSpec
from core.domain.models import default_payload
from core.domain.responses import ResponseVariant
from core.errors import PayloadDecodeError, UnexpectedStatusError
from core.interfaces.transport import AsyncClientResponse, ClientResponse, Decoder

logger = logging.getLogger(__name__)


class ResponseDispatcher:
    """Dispatcher genérico parametrizado por la tabla del endpoint."""

    def __init__(
        self,
        endpoint: EndpointDescriptor,
        decoder: Decoder,
        default_factory: Callable[[Any], Any] = default_payload,
    ) -> None:
        self._endpoint = endpoint
        self._decoder = decoder
        self._default_factory = default_factory

    @property
    def endpoint(self) -> EndpointDescriptor:
        return self._endpoint

    def lookup(self, status_code: int) -> VariantSpec | None:
        return self._endpoint.response_table.get(status_code)

    def dispatch(self, response: ClientResponse) -> ResponseVariant:
        try:
            spec = self.lookup(response.status_code)
            if spec is None:
                # Se lee para que el diagnóstico sobreviva al cierre.
                response.read()
                raise self._unexpected(response)
            if not spec.has_payload:
                return self._variant(spec, None)
            return self._populate(spec, response.read())
        finally:
            response.close()

    async def adispatch(self, response: AsyncClientResponse) -> ResponseVariant:
        try:
            spec = self.lookup(response.status_code)
            if spec is None:
                await response.aread()
                raise self._unexpected(response)
            if not spec.has_payload:
                return self._variant(spec, None)
            return self._populate(spec, await response.aread())
        finally:
            await response.aclose()

    def _populate(self, spec: VariantSpec, raw: bytes) -> ResponseVariant:
        if not raw or not raw.strip():
            logger.debug(
                "%s: empty body for %s %s, using default payload",
                self._endpoint.operation_id,
                spec.status_code,
                spec.name,
            )
            return self._variant(spec, self._default_factory(spec.payload_type))
        try:
            payload = self._decoder(raw, spec.payload_type)
        except Exception as exc:
            raise PayloadDecodeError(
                spec.status_code,
                spec.name,
                exc,
                operation_id=self._endpoint.operation_id,
            ) from exc
        return self._variant(spec, payload)

    def _variant(self, spec: VariantSpec, payload: Any) -> ResponseVariant:
        logger.debug("%s: dispatched %s %s", self._endpoint.operation_id, spec.status_code, spec.name)
        return ResponseVariant(
            endpoint=self._endpoint,
            status_code=spec.status_code,
            name=spec.name,
            payload=payload,
        )

    def _unexpected(self, response: Any) -> UnexpectedStatusError:
        logger.warning(
            "%s: unexpected status %s for %s",
            self._endpoint.operation_id,
            response.status_code,
            self._endpoint.key,
        )
        return UnexpectedStatusError(
            response.status_code,
            response,
            operation_id=self._endpoint.operation_id,
        )
