"""Carga de documentos Swagger y construcción de tablas de endpoints.

Soporta:
- Documento completo de NetBox (`/api/docs/?format=openapi`, Swagger 2.0).
- El subset incluido en `data/netbox-swagger.json` (por defecto).

Reglas de conversión:
- Parámetros de path-item + operación se combinan (la operación manda).
- Respuestas `$ref` -> modelo registrado en `PAYLOAD_MODELS` o `dict`.
- Objetos `{count, results: [...]}` -> `PaginatedList[Modelo]`.
- La respuesta `default` se ignora: un status fuera de la tabla siempre es
  `UnexpectedStatusError`.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from adapters.schema.models import SwaggerDocument, SwaggerParameter
from core.domain.endpoints import EndpointDescriptor, ParameterSpec, ParamLocation, VariantSpec, variant_name
from core.domain.models import PAYLOAD_MODELS, PaginatedList
from core.errors import SchemaError

logger = logging.getLogger(__name__)

BUNDLED_SCHEMA_PATH = Path(__file__).resolve().parent / "data" / "netbox-swagger.json"

_SCALAR_TYPES: dict[str, Any] = {
    "integer": int,
    "number": float,
    "string": str,
    "boolean": bool,
}


def load_schema(path: Path) -> SwaggerDocument:
    raw = path.read_text(encoding="utf-8")
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as exc:
        raise SchemaError(f"{path} is not valid JSON: {exc}", {"path": str(path)}) from exc
    return parse_schema(data)


def parse_schema(data: Mapping[str, Any]) -> SwaggerDocument:
    try:
        return SwaggerDocument.model_validate(data)
    except ValidationError as exc:
        raise SchemaError(f"invalid Swagger document: {exc.error_count()} error(s)", {"errors": exc.errors()}) from exc


def resolve_payload_type(
    schema: Mapping[str, Any] | None,
    *,
    definitions: Mapping[str, Any],
    models: Mapping[str, Any] = PAYLOAD_MODELS,
) -> Any:
    """Tipo Python para el schema de una respuesta (`None` = sin payload)."""

    if schema is None:
        return None

    ref = schema.get("$ref")
    if ref:
        name = str(ref).rsplit("/", 1)[-1]
        if name in models:
            return models[name]
        if name not in definitions:
            raise SchemaError(f"unresolved reference: {ref}", {"ref": ref})
        return dict[str, Any]

    kind = schema.get("type")
    if kind == "array":
        items = resolve_payload_type(schema.get("items") or {}, definitions=definitions, models=models)
        return list[items if items is not None else Any]
    if kind == "object" or "properties" in schema:
        properties = schema.get("properties") or {}
        results = properties.get("results")
        if "count" in properties and isinstance(results, Mapping) and results.get("type") == "array":
            item_type = resolve_payload_type(results.get("items") or {}, definitions=definitions, models=models)
            return PaginatedList[item_type if item_type is not None else Any]
        return dict[str, Any]
    if kind in _SCALAR_TYPES:
        return _SCALAR_TYPES[kind]
    return Any


def _to_parameter_spec(param: SwaggerParameter) -> ParameterSpec | None:
    try:
        location = ParamLocation(param.location)
    except ValueError:
        # header/formData: NetBox no los declara en endpoints de recursos.
        logger.debug("skipping %s parameter %s", param.location, param.name)
        return None

    items = param.items or {}
    return ParameterSpec(
        name=param.name,
        location=location,
        type=param.type or ("object" if location is ParamLocation.BODY else "string"),
        format=param.format,
        required=param.required or location is ParamLocation.PATH,
        items_type=items.get("type"),
        collection_format=param.collection_format or "csv",
        description=param.description,
    )


def _merge_parameters(
    path_level: list[SwaggerParameter],
    op_level: list[SwaggerParameter],
) -> list[SwaggerParameter]:
    merged: dict[tuple[str, str], SwaggerParameter] = {}
    for param in [*path_level, *op_level]:
        merged[(param.name, param.location)] = param
    return list(merged.values())


def build_endpoints(
    document: SwaggerDocument,
    *,
    models: Mapping[str, Any] = PAYLOAD_MODELS,
) -> list[EndpointDescriptor]:
    """Convierte el documento en descriptores inmutables."""

    endpoints: list[EndpointDescriptor] = []
    seen: set[str] = set()

    for path_template, item in document.paths.items():
        for method, operation in item.operations():
            if operation.operation_id in seen:
                raise SchemaError(
                    f"duplicated operationId: {operation.operation_id}",
                    {"operation_id": operation.operation_id},
                )
            seen.add(operation.operation_id)

            parameters: list[ParameterSpec] = []
            for param in _merge_parameters(item.parameters, operation.parameters):
                spec = _to_parameter_spec(param)
                if spec is not None:
                    parameters.append(spec)

            variants: list[VariantSpec] = []
            for status, response in operation.responses.items():
                if status == "default":
                    logger.debug("%s: ignoring default response", operation.operation_id)
                    continue
                if not status.isdigit():
                    raise SchemaError(
                        f"invalid response status {status!r} in {operation.operation_id}",
                        {"operation_id": operation.operation_id},
                    )
                code = int(status)
                variants.append(
                    VariantSpec(
                        status_code=code,
                        name=variant_name(code),
                        payload_type=resolve_payload_type(
                            response.body_schema,
                            definitions=document.definitions,
                            models=models,
                        ),
                        description=response.description,
                    )
                )

            endpoints.append(
                EndpointDescriptor(
                    operation_id=operation.operation_id,
                    method=method,
                    path_template=path_template,
                    parameters=tuple(parameters),
                    responses=tuple(sorted(variants, key=lambda v: v.status_code)),
                    base_path=document.base_path,
                    summary=operation.summary or operation.description or "",
                    tags=tuple(operation.tags),
                )
            )

    return endpoints
