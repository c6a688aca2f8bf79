from adapters.schema.catalog import EndpointCatalog, catalog_for, default_catalog, load_catalog
from adapters.schema.loader import build_endpoints, load_schema, parse_schema, resolve_payload_type
from adapters.schema.models import SwaggerDocument

__all__ = [
    "EndpointCatalog",
    "SwaggerDocument",
    "build_endpoints",
    "catalog_for",
    "default_catalog",
    "load_catalog",
    "load_schema",
    "parse_schema",
    "resolve_payload_type",
]
