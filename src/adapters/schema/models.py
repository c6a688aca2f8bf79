"""Modelos del documento Swagger 2.0 (subset que usamos).

Idea:
- En vez de mantener cientos de ficheros generados por recurso, leemos el
  documento Swagger de NetBox y construimos tablas con un motor genérico.
- Solo modelamos lo necesario para parámetros y respuestas; el resto se
  ignora (`extra="ignore"`).
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field
from pydantic.config import ConfigDict

HTTP_METHODS = ("get", "put", "post", "delete", "options", "head", "patch")


class SwaggerParameter(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., min_length=1)
    location: str = Field(..., alias="in")
    required: bool = False
    type: str | None = None
    format: str | None = None
    description: str | None = None
    items: dict[str, Any] | None = None
    collection_format: str | None = Field(default=None, alias="collectionFormat")
    body_schema: dict[str, Any] | None = Field(default=None, alias="schema")


class SwaggerResponse(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    description: str = ""
    body_schema: dict[str, Any] | None = Field(default=None, alias="schema")


class SwaggerOperation(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    operation_id: str = Field(..., alias="operationId", min_length=1)
    summary: str | None = None
    description: str | None = None
    tags: list[str] = Field(default_factory=list)
    parameters: list[SwaggerParameter] = Field(default_factory=list)
    responses: dict[str, SwaggerResponse] = Field(default_factory=dict)


class SwaggerPathItem(BaseModel):
    model_config = ConfigDict(extra="ignore")

    parameters: list[SwaggerParameter] = Field(default_factory=list)
    get: SwaggerOperation | None = None
    put: SwaggerOperation | None = None
    post: SwaggerOperation | None = None
    delete: SwaggerOperation | None = None
    options: SwaggerOperation | None = None
    head: SwaggerOperation | None = None
    patch: SwaggerOperation | None = None

    def operations(self) -> list[tuple[str, SwaggerOperation]]:
        out: list[tuple[str, SwaggerOperation]] = []
        for method in HTTP_METHODS:
            operation = getattr(self, method)
            if operation is not None:
                out.append((method.upper(), operation))
        return out


class SwaggerDocument(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    swagger: str = Field(default="2.0")
    info: dict[str, Any] = Field(default_factory=dict)
    base_path: str = Field(default="/api", alias="basePath")
    paths: dict[str, SwaggerPathItem] = Field(default_factory=dict)
    definitions: dict[str, dict[str, Any]] = Field(default_factory=dict)
