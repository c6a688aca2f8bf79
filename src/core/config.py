"""Configuración: variables `NETBOX_REST_*` y el .env por usuario.

- `AppSettings` es el único contrato de configuración; CLI y adaptadores lo
  reciben ya validado.
- `doctor setup` guarda URL/token en el .env del usuario para no tener que
  exportarlos en cada shell.
"""

from __future__ import annotations

import os
import sys
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

APP_DIR_NAME = "netbox-rest"


def get_user_config_dir() -> Path:
    """`%APPDATA%`, `~/Library/Application Support` o XDG, según plataforma."""

    home = Path.home()
    if sys.platform.startswith("win"):
        return Path(os.environ.get("APPDATA") or home) / APP_DIR_NAME
    if sys.platform == "darwin":
        return home / "Library" / "Application Support" / APP_DIR_NAME
    return Path(os.environ.get("XDG_CONFIG_HOME") or home / ".config") / APP_DIR_NAME


def get_user_env_file() -> Path:
    return get_user_config_dir() / ".env"


def _parse_env_lines(text: str) -> dict[str, str]:
    """Lee pares `CLAVE=valor`; ignora comentarios, líneas vacías y basura."""

    parsed: dict[str, str] = {}
    for line in (raw.strip() for raw in text.splitlines()):
        if line.startswith("#") or "=" not in line:
            continue
        name, _, raw_value = line.partition("=")
        name = name.strip()
        if not name:
            continue
        parsed[name] = raw_value.strip().strip("\"'")
    return parsed


def write_user_env_vars(values: dict[str, str | None], env_path: Path | None = None) -> Path:
    """Fusiona `values` en el .env del usuario (los `None` no pisan nada)."""

    target = env_path or get_user_env_file()
    current = _parse_env_lines(target.read_text(encoding="utf-8")) if target.is_file() else {}
    current.update((name, value) for name, value in values.items() if value is not None)

    body = "".join(f"{name}={current[name]}\n" for name in sorted(current))
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(f"# {APP_DIR_NAME} user config\n{body}", encoding="utf-8")
    return target


class AppSettings(BaseSettings):
    """Ajustes de la instancia NetBox y del cliente.

    Fuentes (de mayor a menor prioridad): argumentos, entorno, `.env` del
    directorio actual, `.env` del usuario.
    """

    model_config = SettingsConfigDict(
        env_prefix="NETBOX_REST_",
        env_file=(".env", str(get_user_env_file())),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    url: str = Field(
        default="http://localhost:8000",
        min_length=1,
        description="URL base de la instancia NetBox (sin /api).",
    )
    token: str | None = Field(
        default=None,
        description="Token de API de NetBox (cabecera `Authorization: Token ...`).",
    )
    http_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        description="Timeout por request (segundos) cuando la llamada no indica uno.",
    )
    verify_ssl: bool = Field(
        default=True,
        description="Verificar certificados TLS.",
    )
    user_agent: str = Field(
        default="netbox-rest/0.1",
        min_length=1,
        description="User-Agent de las peticiones.",
    )
    page_limit: int = Field(
        default=50,
        ge=1,
        le=1000,
        description="Tamaño de página para los listados paginados.",
    )
    schema_path: Path | None = Field(
        default=None,
        description="Ruta local a un documento Swagger de NetBox (p.ej. descargado con `schema pull`).",
    )
    log_level: str = Field(
        default="WARNING",
        description="Nivel de logging (DEBUG, INFO, WARNING, ERROR).",
    )
