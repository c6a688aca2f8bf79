"""Fixtures compartidas.

- `catalog`: catálogo del subset de schema incluido.
- `make_response`: respuesta falsa que cuenta lecturas y cierres.
- `settings`: configuración aislada (sin leer ficheros .env).
- `mock_client`: fábrica de `NetBoxClient` sobre `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx
import pytest

from adapters.http_client import build_async_client, build_client
from adapters.netbox_api.client import AsyncNetBoxClient, NetBoxClient
from adapters.schema.catalog import default_catalog
from adapters.transport import AsyncHttpxTransport, HttpxTransport
from core.config import AppSettings


class FakeResponse:
    """Respuesta mínima que cumple `ClientResponse` y `AsyncClientResponse`."""

    def __init__(self, status_code: int, content: bytes = b"", headers: dict | None = None):
        self.status_code = status_code
        self.content = content
        self.headers = headers or {}
        self.reads = 0
        self.closes = 0

    def read(self) -> bytes:
        self.reads += 1
        return self.content

    def close(self) -> None:
        self.closes += 1

    async def aread(self) -> bytes:
        return self.read()

    async def aclose(self) -> None:
        self.close()


@pytest.fixture
def catalog():
    return default_catalog()


@pytest.fixture
def make_response():
    return FakeResponse


@pytest.fixture
def settings():
    return AppSettings(
        _env_file=None,
        url="http://netbox.test",
        token="abc123",
        page_limit=2,
    )


@pytest.fixture
def mock_client(settings):
    """`mock_client(handler)` -> NetBoxClient que responde con `handler`."""

    def factory(handler, client_settings=None):
        client_settings = client_settings or settings
        http = build_client(client_settings, transport=httpx.MockTransport(handler))
        return NetBoxClient(client_settings, transport=HttpxTransport(http))

    return factory


@pytest.fixture
def mock_async_client(settings):
    def factory(handler):
        http = build_async_client(settings, transport=httpx.MockTransport(handler))
        return AsyncNetBoxClient(settings, transport=AsyncHttpxTransport(http))

    return factory
