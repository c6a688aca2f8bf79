"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza timeouts, headers (token, User-Agent) y verificación TLS.
- Facilita testeo: se puede pasar un `httpx.MockTransport`.
"""

from __future__ import annotations

import httpx

from core.config import AppSettings


def _default_headers(settings: AppSettings, extra_headers: dict[str, str] | None) -> dict[str, str]:
    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": "application/json",
    }
    if settings.token:
        headers["Authorization"] = f"Token {settings.token}"
    if extra_headers:
        headers.update(extra_headers)
    return headers


def build_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` apuntando a la instancia NetBox configurada."""

    settings = settings or AppSettings()
    return httpx.Client(
        base_url=settings.url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=_default_headers(settings, extra_headers),
        verify=settings.verify_ssl,
        transport=transport,
    )


def build_async_client(
    settings: AppSettings | None = None,
    *,
    extra_headers: dict[str, str] | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Versión asíncrona de `build_client` (mismos defaults)."""

    settings = settings or AppSettings()
    return httpx.AsyncClient(
        base_url=settings.url,
        timeout=httpx.Timeout(settings.http_timeout_seconds),
        headers=_default_headers(settings, extra_headers),
        verify=settings.verify_ssl,
        transport=transport,
    )
