"""Documento de schema de NetBox: dónde vive y cómo se descarga.

En `core/` porque tanto la CLI (`schema pull`, `doctor`) como los adaptadores
necesitan las mismas rutas. El schema completo no va en el repo: se descarga
a `data/` bajo demanda.
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import httpx

from core.config import AppSettings, get_user_config_dir

SCHEMA_DOCS_PATH = "/api/docs/?format=openapi"
SCHEMA_FILENAME = "netbox-swagger.json"

# src/core/resources_loader.py -> raíz del proyecto
_PROJECT_ROOT = Path(__file__).resolve().parents[2]


def data_dir() -> Path:
    """`NETBOX_REST_DATA_DIR` si está definido; si no, `data/` del proyecto.

    En un ejecutable empaquetado (`sys.frozen`) el árbol del proyecto no es
    escribible, así que se usa `<config de usuario>/data`.
    """

    override = os.environ.get("NETBOX_REST_DATA_DIR", "").strip()
    if override:
        return Path(override)
    if getattr(sys, "frozen", False):
        return get_user_config_dir() / "data"
    return _PROJECT_ROOT / "data"


def get_default_schema_path(filename: str = SCHEMA_FILENAME) -> Path | None:
    """Primer schema descargado que exista: data dir, config de usuario, cwd."""

    for folder in (data_dir(), get_user_config_dir() / "data", Path.cwd()):
        candidate = folder / filename
        if candidate.is_file():
            return candidate
    return None


def _auth_headers(settings: AppSettings) -> dict[str, str]:
    headers = {"User-Agent": settings.user_agent, "Accept": "application/json"}
    if settings.token:
        headers["Authorization"] = f"Token {settings.token}"
    return headers


def load_netbox_schema(
    settings: AppSettings | None = None,
    *,
    refresh: bool = False,
    client: httpx.Client | None = None,
) -> tuple[Path, dict]:
    """Devuelve `(ruta cacheada, documento)`.

    Reutiliza `<data_dir>/netbox-swagger.json` salvo `refresh=True`; si hay
    que descargar, pide `/api/docs/?format=openapi` a la instancia configurada.
    """

    settings = settings or AppSettings()
    cached = data_dir() / SCHEMA_FILENAME
    if cached.is_file() and not refresh:
        return cached, json.loads(cached.read_text(encoding="utf-8"))

    url = settings.url.rstrip("/") + SCHEMA_DOCS_PATH
    if client is None:
        response = httpx.get(
            url,
            headers=_auth_headers(settings),
            timeout=settings.http_timeout_seconds,
            verify=settings.verify_ssl,
            follow_redirects=True,
        )
    else:
        response = client.get(url, headers=_auth_headers(settings))
    response.raise_for_status()

    document = response.json()
    cached.parent.mkdir(parents=True, exist_ok=True)
    cached.write_text(json.dumps(document, ensure_ascii=False, indent=2) + "\n", encoding="utf-8")
    return cached, document
