"""Catálogo de endpoints (operation_id -> descriptor).

Inmutable tras construirse: se comparte entre hilos/tareas sin locks.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Iterator, Mapping

from adapters.schema.loader import BUNDLED_SCHEMA_PATH, build_endpoints, load_schema
from core.domain.endpoints import EndpointDescriptor
from core.errors import UnknownOperationError


class EndpointCatalog(Mapping[str, EndpointDescriptor]):
    def __init__(self, endpoints: list[EndpointDescriptor]) -> None:
        self._by_id = MappingProxyType({e.operation_id: e for e in endpoints})
        self._by_key = MappingProxyType({e.key: e for e in endpoints})

    def __getitem__(self, operation_id: str) -> EndpointDescriptor:
        try:
            return self._by_id[operation_id]
        except KeyError:
            raise UnknownOperationError(operation_id) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._by_id)

    def __len__(self) -> int:
        return len(self._by_id)

    def __contains__(self, operation_id: object) -> bool:
        return operation_id in self._by_id

    def get(self, operation_id: str, default: EndpointDescriptor | None = None) -> EndpointDescriptor | None:  # type: ignore[override]
        return self._by_id.get(operation_id, default)

    def find(self, method: str, path_template: str) -> EndpointDescriptor | None:
        """Busca por verbo + path (`find("DELETE", "/dcim/module-bays/{id}/")`)."""

        return self._by_key.get(f"{method.upper()} {path_template}")

    def operation_id(self, endpoint: str, service: str, action: str) -> str:
        """`("tenancy", "tenant-groups", "read")` -> `tenancy_tenant-groups_read`."""

        return f"{endpoint}_{service}_{action}"


def load_catalog(path: Path) -> EndpointCatalog:
    return EndpointCatalog(build_endpoints(load_schema(path)))


@lru_cache(maxsize=1)
def default_catalog() -> EndpointCatalog:
    """Catálogo del subset de schema incluido en el paquete."""

    return load_catalog(BUNDLED_SCHEMA_PATH)


def catalog_for(schema_path: Path | None) -> EndpointCatalog:
    if schema_path is None:
        return default_catalog()
    return load_catalog(schema_path)
