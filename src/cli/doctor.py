"""Doctor: diagnóstico de configuración, schema y conectividad con NetBox."""

from __future__ import annotations

import httpx
import typer
from rich.console import Console
from rich.table import Table

from adapters.netbox_api.client import NetBoxClient
from adapters.schema.catalog import catalog_for
from core.config import AppSettings, write_user_env_vars
from core.domain.models import ApiStatus
from core.errors import NetBoxClientError
from core.resources_loader import get_default_schema_path

app = typer.Typer(no_args_is_help=True, help="Environment diagnostics and configuration checks.")

_console = Console()


def _check_schema(settings: AppSettings) -> tuple[bool, str]:
    try:
        catalog = catalog_for(settings.schema_path)
    except (OSError, NetBoxClientError) as exc:
        return False, str(exc)
    source = str(settings.schema_path) if settings.schema_path else "bundled subset"
    return True, f"{len(catalog)} operations ({source})"


def _check_status(settings: AppSettings) -> tuple[bool, str]:
    """Call `GET /api/status/` through the regular dispatch path."""

    try:
        with NetBoxClient(settings) as nb:
            variant = nb.request("status_list")
    except (httpx.HTTPError, NetBoxClientError) as exc:
        return False, str(exc)
    status = variant.payload if isinstance(variant.payload, ApiStatus) else ApiStatus()
    version = status.netbox_version or "unknown version"
    return True, f"HTTP {variant.status_code}, NetBox {version}"


@app.command()
def run() -> None:
    """Run baseline diagnostics and show recommended fixes."""

    settings = AppSettings()

    table = Table(title="netbox-rest doctor")
    table.add_column("Check", style="bright_green", no_wrap=True)
    table.add_column("Status", style="white")
    table.add_column("Details", style="dim")

    table.add_row("NetBox URL", "OK", settings.url)
    if settings.token:
        table.add_row("API token", "OK", "Token configured")
    else:
        table.add_row("API token", "OPTIONAL", "No token set -> anonymous access only")

    ok_schema, detail_schema = _check_schema(settings)
    table.add_row("Endpoint schema", "OK" if ok_schema else "FAIL", detail_schema)

    downloaded = get_default_schema_path()
    if downloaded is None:
        table.add_row("Downloaded schema", "OPTIONAL", "none -> run `netbox-rest schema pull`")
    else:
        table.add_row("Downloaded schema", "OK", str(downloaded))

    ok_status = False
    if ok_schema:
        ok_status, detail_status = _check_status(settings)
        table.add_row("API status", "OK" if ok_status else "FAIL", detail_status)

    _console.print(table)

    if not ok_status:
        _console.print(
            "\n[yellow]Note:[/yellow] run `netbox-rest doctor setup` to store the NetBox URL and token."
        )
        raise typer.Exit(code=1)


@app.command(name="setup")
def setup() -> None:
    """Interactive setup (stores URL/token in the user config .env)."""

    url = typer.prompt("NetBox URL", default="http://localhost:8000", show_default=True).strip()
    token = typer.prompt("API token", hide_input=True, default="", show_default=False).strip()
    verify = typer.confirm("Verify TLS certificates?", default=True)

    if not url:
        raise typer.BadParameter("url is required")

    env_path = write_user_env_vars(
        {
            "NETBOX_REST_URL": url,
            "NETBOX_REST_TOKEN": token or None,
            "NETBOX_REST_VERIFY_SSL": "true" if verify else "false",
        }
    )

    _console.print(f"[green]Saved NetBox config to:[/green] {env_path}")
