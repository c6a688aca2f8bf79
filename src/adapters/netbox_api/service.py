"""Servicios por recurso (Get/List/Extract/Create/Update/Delete).

Por qué existe:
- Es la capa "hand-rolled" sencilla sobre el cliente: trabaja con modelos y
  ids en vez de variantes y status.
- `cli generate` produce subclases mínimas de `ResourceService` que solo fijan
  endpoint/servicio/tipos.
"""

from __future__ import annotations

import logging
from typing import Any, Generic, Iterator, TypeVar

import httpx
from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

from adapters.netbox_api.client import NetBoxClient
from core.domain.models import PaginatedList
from core.errors import NetBoxClientError

logger = logging.getLogger(__name__)

T = TypeVar("T", bound=BaseModel)


class ListOptions(BaseModel):
    """Filtros de listado; cualquier filtro declarado por el endpoint vale como extra."""

    model_config = ConfigDict(extra="allow")

    limit: int | None = Field(default=None, ge=1)
    offset: int | None = Field(default=None, ge=0)
    q: str | None = None
    ordering: str | None = None

    def to_values(self) -> dict[str, Any]:
        return self.model_dump(exclude_none=True)


class Page:
    """Cursor sobre un endpoint paginado (limit/offset).

    Uso:
        page = service.list()
        while page.next():
            for item in service.extract(page):
                ...
        if page.err():
            raise page.err()

    El primer error corta la iteración y queda en `err()`.
    """

    def __init__(
        self,
        client: NetBoxClient,
        operation_id: str,
        options: ListOptions | None = None,
        *,
        limit: int | None = None,
    ) -> None:
        self._client = client
        self._operation_id = operation_id
        self._values = options.to_values() if options else {}
        self._values.setdefault("limit", limit or client.settings.page_limit)
        self._offset = int(self._values.pop("offset", 0))
        self._data: PaginatedList[Any] | None = None
        self._err: Exception | None = None
        self._done = False

    @property
    def data(self) -> PaginatedList[Any] | None:
        return self._data

    @property
    def offset(self) -> int:
        return self._offset

    def err(self) -> Exception | None:
        return self._err

    def next(self) -> bool:
        if self._done or self._err is not None:
            return False
        try:
            variant = self._client.request(self._operation_id, offset=self._offset, **self._values)
        except (NetBoxClientError, httpx.HTTPError) as exc:
            self._err = exc
            self._data = None
            return False

        data = variant.payload
        if not isinstance(data, PaginatedList):
            data = PaginatedList[Any].model_validate(data or {})
        self._data = data
        self._offset += len(data.results)
        if not data.next or not data.results:
            self._done = True
        return True

    def __iter__(self) -> Iterator["Page"]:
        while self.next():
            yield self


class ResourceService(Generic[T]):
    """Acceso a `{endpoint}/{service}` de NetBox con un tipo de modelo.

    `update_type` es el modelo con el que se serializan creates/updates
    (p.ej. `WritableContact`, que colapsa objetos anidados a ids).
    """

    endpoint: str = ""
    service: str = ""
    type_: type[BaseModel] = BaseModel
    update_type: type[BaseModel] | None = None

    def __init__(
        self,
        client: NetBoxClient,
        *,
        endpoint: str | None = None,
        service: str | None = None,
        type_: type[BaseModel] | None = None,
        update_type: type[BaseModel] | None = None,
    ) -> None:
        self._client = client
        self.endpoint = endpoint or self.endpoint
        self.service = service or self.service
        self.type_ = type_ or self.type_
        self.update_type = update_type or self.update_type or self.type_
        if not self.endpoint or not self.service:
            raise ValueError("endpoint and service are required")

    def _operation(self, action: str) -> str:
        return self._client.catalog.operation_id(self.endpoint, self.service, action)

    def _coerce(self, payload: Any) -> Any:
        if payload is None or isinstance(payload, self.type_):
            return payload
        if isinstance(payload, BaseModel):
            payload = payload.model_dump(by_alias=True)
        return self.type_.model_validate(payload)

    def _marshal(self, data: BaseModel) -> BaseModel:
        update_type = self.update_type or self.type_
        if isinstance(data, update_type):
            return data
        return update_type.model_validate(data.model_dump(by_alias=True, exclude_unset=True))

    def get(self, id: int) -> T:
        """Obtiene un objeto por id (modelo vacío si el servidor respondió sin body)."""

        variant = self._client.request(self._operation("read"), id=id)
        return self._coerce(variant.payload)

    def list(self, options: ListOptions | None = None) -> Page:
        return Page(self._client, self._operation("list"), options)

    def extract(self, page: Page) -> list[T]:
        """Objetos de la página actual; relanza el error de la página si lo hubo."""

        err = page.err()
        if err is not None:
            raise err
        if page.data is None:
            return []
        return [self._coerce(item) for item in page.data.results]

    def iter_all(self, options: ListOptions | None = None) -> Iterator[T]:
        page = self.list(options)
        for current in page:
            yield from self.extract(current)
        err = page.err()
        if err is not None:
            raise err

    def create(self, data: BaseModel) -> int | None:
        """Crea el objeto y devuelve el id asignado por NetBox."""

        variant = self._client.request(self._operation("create"), data=self._marshal(data))
        created = variant.payload
        return getattr(created, "id", None) if not isinstance(created, dict) else created.get("id")

    def update(self, data: BaseModel) -> int | None:
        """PATCH del objeto existente (`data.id`) y devuelve su id."""

        object_id = getattr(data, "id", None)
        variant = self._client.request(
            self._operation("partial_update"),
            id=object_id,
            data=self._marshal(data),
        )
        # El payload no es la representación completa de `get`; solo
        # confirmamos que decodificó y devolvemos el id.
        updated = variant.payload
        return getattr(updated, "id", None) if not isinstance(updated, dict) else updated.get("id")

    def delete(self, data: BaseModel) -> None:
        self._client.request(self._operation("delete"), id=getattr(data, "id", None))
