"""Cliente NetBox y servicios por recurso.

Por qué un paquete:
- `client` une builder + transporte + dispatcher para cualquier operación
  del catálogo.
- `service` ofrece la capa Get/List/Create/Update/Delete sobre modelos.
"""

from adapters.netbox_api.client import AsyncNetBoxClient, NetBoxClient
from adapters.netbox_api.service import ListOptions, Page, ResourceService

__all__ = [
    "AsyncNetBoxClient",
    "ListOptions",
    "NetBoxClient",
    "Page",
    "ResourceService",
]
