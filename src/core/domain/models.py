"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- La forma de los payloads la define el schema de NetBox, no este proyecto:
  los modelos validan lo que conocemos y conservan el resto (`extra="allow"`).
- Los modelos `Writable*` son la representación de escritura: los objetos
  anidados se colapsan a su id, igual que espera la API.

Nota:
- `PAYLOAD_MODELS` relaciona nombres de definiciones del schema con modelos;
  las definiciones sin modelo se decodifican como `dict`.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Generic, TypeVar, get_origin

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

T = TypeVar("T")


def _nested_to_id(value: Any) -> Any:
    if isinstance(value, BaseModel):
        return getattr(value, "id", None)
    if isinstance(value, dict):
        return value.get("id")
    return value


class NetBoxModel(BaseModel):
    """Base común: campos de solo lectura que NetBox añade a todo objeto."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    id: int | None = Field(default=None, description="Identificador único (solo lectura).")
    url: str | None = Field(default=None, description="URL canónica del objeto en la API.")
    display: str | None = Field(default=None, description="Representación legible.")


class NestedModel(NetBoxModel):
    """Referencia anidada (id + url + display + nombre)."""

    name: str | None = None


class NestedContactGroup(NestedModel):
    slug: str | None = None
    depth: int | None = Field(default=None, alias="_depth")


class NestedTenantGroup(NestedModel):
    slug: str | None = None
    depth: int | None = Field(default=None, alias="_depth")


class NestedSite(NestedModel):
    slug: str | None = None


class NestedCircuit(NetBoxModel):
    cid: str | None = Field(default=None, description="Circuit ID.")


class NestedDevice(NestedModel):
    pass


class NestedModule(NetBoxModel):
    device: NestedDevice | None = None
    module_bay: dict[str, Any] | None = None


class TaggedModel(NetBoxModel):
    tags: list[dict[str, Any]] = Field(default_factory=list)
    custom_fields: dict[str, Any] = Field(default_factory=dict)
    created: date | datetime | None = None
    last_updated: datetime | None = None


class Contact(TaggedModel):
    """Contacto (tenancy/contacts)."""

    group: NestedContactGroup | None = None
    name: str | None = Field(default=None, max_length=100)
    title: str | None = None
    phone: str | None = None
    email: str | None = None
    address: str | None = None
    link: str | None = None
    comments: str | None = None


class WritableContact(Contact):
    group: int | None = None  # type: ignore[assignment]

    @field_validator("group", mode="before")
    @classmethod
    def collapse_nested_refs(cls, value: Any) -> Any:
        return _nested_to_id(value)


class CircuitTermination(TaggedModel):
    """Terminación de circuito (circuits/circuit-terminations)."""

    circuit: NestedCircuit | None = None
    term_side: str | None = Field(default=None, description="Lado A o Z.")
    site: NestedSite | None = None
    provider_network: dict[str, Any] | None = None
    port_speed: int | None = None
    upstream_speed: int | None = None
    xconnect_id: str | None = None
    pp_info: str | None = None
    description: str | None = None
    mark_connected: bool | None = None
    cable: dict[str, Any] | None = None
    link_peers: list[dict[str, Any]] = Field(default_factory=list)
    link_peers_type: str | None = None
    occupied: bool | None = Field(default=None, alias="_occupied")


class WritableCircuitTermination(CircuitTermination):
    circuit: int | None = None  # type: ignore[assignment]
    site: int | None = None  # type: ignore[assignment]

    @field_validator("circuit", "site", mode="before")
    @classmethod
    def collapse_nested_refs(cls, value: Any) -> Any:
        return _nested_to_id(value)


class ModuleBay(TaggedModel):
    """Bahía de módulo (dcim/module-bays)."""

    device: NestedDevice | None = None
    name: str | None = Field(default=None, max_length=64)
    installed_module: NestedModule | None = None
    label: str | None = None
    position: str | None = None
    description: str | None = None


class WritableModuleBay(ModuleBay):
    device: int | None = None  # type: ignore[assignment]
    installed_module: int | None = None  # type: ignore[assignment]

    @field_validator("device", "installed_module", mode="before")
    @classmethod
    def collapse_nested_refs(cls, value: Any) -> Any:
        return _nested_to_id(value)


class TenantGroup(TaggedModel):
    """Grupo de tenants (tenancy/tenant-groups)."""

    name: str | None = Field(default=None, max_length=100)
    slug: str | None = None
    parent: NestedTenantGroup | None = None
    description: str | None = None
    tenant_count: int | None = None
    depth: int | None = Field(default=None, alias="_depth")


class WritableTenantGroup(TenantGroup):
    parent: int | None = None  # type: ignore[assignment]

    @field_validator("parent", mode="before")
    @classmethod
    def collapse_nested_refs(cls, value: Any) -> Any:
        return _nested_to_id(value)


class PaginatedList(BaseModel, Generic[T]):
    """Página de resultados de un endpoint de listado."""

    model_config = ConfigDict(extra="allow")

    count: int = 0
    next: str | None = None
    previous: str | None = None
    results: list[T] = Field(default_factory=list)


class ApiStatus(BaseModel):
    """Estado operativo de la instancia (`GET /api/status/`)."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    netbox_version: str | None = Field(default=None, alias="netbox-version")
    django_version: str | None = Field(default=None, alias="django-version")
    python_version: str | None = Field(default=None, alias="python-version")
    plugins: dict[str, str] = Field(default_factory=dict)
    installed_apps: dict[str, Any] = Field(default_factory=dict, alias="installed-apps")
    workers_running: int | None = Field(default=None, alias="rq-workers-running")


PAYLOAD_MODELS: dict[str, type[BaseModel]] = {
    "ApiStatus": ApiStatus,
    "Contact": Contact,
    "WritableContact": WritableContact,
    "NestedContactGroup": NestedContactGroup,
    "CircuitTermination": CircuitTermination,
    "WritableCircuitTermination": WritableCircuitTermination,
    "NestedCircuit": NestedCircuit,
    "NestedSite": NestedSite,
    "ModuleBay": ModuleBay,
    "WritableModuleBay": WritableModuleBay,
    "NestedDevice": NestedDevice,
    "NestedModule": NestedModule,
    "TenantGroup": TenantGroup,
    "WritableTenantGroup": WritableTenantGroup,
    "NestedTenantGroup": NestedTenantGroup,
}


def default_payload(target: Any) -> Any:
    """Valor por defecto del tipo declarado por una variante.

    Es lo que recibe quien llama cuando el servidor responde con body vacío:
    un modelo sin campos (`Contact()`), `PaginatedList[...]()` sin resultados,
    `{}` o `[]`. `None` solo para tipos sin valor vacío razonable (`Any`).
    """

    if target is None:
        return None
    origin = get_origin(target)
    if origin is None and isinstance(target, type) and issubclass(target, BaseModel):
        return target()
    origin = origin or target
    if origin in (list, tuple, set, frozenset, dict, str, int, float, bool):
        return origin()
    return None
