"""CLI principal (Typer).

Comandos:
- `endpoints`: tabla de endpoints cargados del schema.
- `call`: invoca una operación y muestra la variante resultante.
- `generate`: genera un servicio por recurso desde la plantilla.
- `schema pull`: descarga y cachea el schema de la instancia NetBox.
- `doctor`: diagnósticos y configuración.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, List, Optional

import httpx
import typer
from pydantic import ValidationError
from rich.console import Console

from adapters.generator.service_generator import GenerationError, ServiceSpec, write_service
from adapters.netbox_api.client import NetBoxClient
from adapters.schema.catalog import catalog_for
from cli import doctor
from cli.ui_components import build_endpoints_table, build_error_panel, build_variant_panel, payload_to_jsonable
from core.config import AppSettings
from core.domain.requests import RequestParams
from core.errors import NetBoxClientError
from core.logging import setup_logging
from core.resources_loader import load_netbox_schema

app = typer.Typer(no_args_is_help=True, help="NetBox REST client with table-driven response dispatch.")
schema_app = typer.Typer(no_args_is_help=True, help="NetBox schema document management.")
app.add_typer(doctor.app, name="doctor")
app.add_typer(schema_app, name="schema")

_console = Console()
_err_console = Console(stderr=True)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, "--log-level", help="DEBUG, INFO, WARNING, ERROR."),
) -> None:
    if log_level is None:
        try:
            log_level = AppSettings().log_level
        except ValidationError as exc:
            _err_console.print(f"[red]Invalid configuration:[/red] {exc}")
            raise typer.Exit(code=1)
    setup_logging(log_level)


def parse_param_items(items: List[str]) -> dict[str, Any]:
    """`["id=3", "tag=a", "tag=b"]` -> `{"id": "3", "tag": ["a", "b"]}`."""

    values: dict[str, Any] = {}
    for item in items:
        if "=" not in item:
            raise typer.BadParameter(f"expected name=value, got {item!r}", param_hint="--param")
        name, value = item.split("=", 1)
        name = name.strip()
        if name in values:
            previous = values[name]
            values[name] = [*previous, value] if isinstance(previous, list) else [previous, value]
        else:
            values[name] = value
    return values


@app.command()
def endpoints(
    schema: Optional[Path] = typer.Option(None, "--schema", help="Swagger document (default: bundled subset)."),
    tag: Optional[str] = typer.Option(None, "--tag", help="Only endpoints with this tag (dcim, tenancy, ...)."),
) -> None:
    """List the endpoint tables loaded from the schema."""

    try:
        catalog = catalog_for(schema or AppSettings().schema_path)
    except NetBoxClientError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1)
    except OSError as exc:
        _err_console.print(f"[red]Cannot read schema:[/red] {exc}")
        raise typer.Exit(code=1)
    selected = [e for e in catalog.values() if tag is None or tag in e.tags]
    _console.print(build_endpoints_table(selected))


@app.command()
def call(
    operation_id: str = typer.Argument(..., help="Operation id, e.g. tenancy_contacts_read."),
    param: List[str] = typer.Option([], "--param", "-p", help="name=value (repeat for arrays)."),
    data: Optional[str] = typer.Option(None, "--data", help="JSON body for create/update operations."),
    timeout: Optional[float] = typer.Option(None, "--timeout", help="Request timeout in seconds."),
    as_json: bool = typer.Option(False, "--json", help="Print the payload as JSON."),
) -> None:
    """Invoke one operation and print the dispatched variant."""

    values = parse_param_items(param)
    if data is not None:
        try:
            values["data"] = json.loads(data)
        except json.JSONDecodeError as exc:
            raise typer.BadParameter(f"invalid JSON: {exc}", param_hint="--data")

    settings = AppSettings()
    try:
        with NetBoxClient(settings) as nb:
            variant = nb.request(operation_id, RequestParams(values=values, timeout=timeout))
    except NetBoxClientError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1)
    except httpx.HTTPError as exc:
        _err_console.print(f"[red]Transport error:[/red] {exc}")
        raise typer.Exit(code=1)

    if as_json:
        typer.echo(json.dumps(payload_to_jsonable(variant.payload), ensure_ascii=False, indent=2))
    else:
        _console.print(build_variant_panel(variant))


@app.command()
def generate(
    type_name: str = typer.Option("Example", "--type-name", help="Name of the type to use (e.g. TenantGroup)."),
    service_name: str = typer.Option(
        "ExampleService", "--service-name", help="Name of the service to create (e.g. TenantGroupsService)."
    ),
    endpoint: str = typer.Option("tenancy", "--endpoint", help="Name of the endpoint (e.g. dcim, ipam, tenancy)."),
    service: str = typer.Option("example", "--service", help="Name of the service below endpoint (e.g. tenant-groups)."),
    update_type_name: str = typer.Option(
        "",
        "--update-type-name",
        help="Name of the type to use for creates and updates, to change the marshal behavior. Default type-name.",
    ),
    without_list_opts: bool = typer.Option(False, "--without-list-opts", help="Disable list options for this endpoint."),
    output_dir: Path = typer.Option(Path("."), "--output-dir", help="Directory for the generated file."),
) -> None:
    """Generate `{endpoint}_{service}.py` with a resource service."""

    spec = ServiceSpec(
        type_name=type_name,
        service_name=service_name,
        endpoint=endpoint,
        service=service,
        update_type_name=update_type_name,
        list_opts=not without_list_opts,
    )
    try:
        path = write_service(spec, output_dir)
    except GenerationError as exc:
        _err_console.print(build_error_panel(exc))
        raise typer.Exit(code=1)
    except OSError as exc:
        _err_console.print(f"[red]Cannot write output:[/red] {exc}")
        raise typer.Exit(code=1)
    _console.print(f"[green]Generated[/green] {path}")


@schema_app.command("pull")
def schema_pull(
    refresh: bool = typer.Option(False, "--refresh", help="Download even if a cached copy exists."),
) -> None:
    """Download NetBox's Swagger document and cache it in the data dir."""

    settings = AppSettings()
    try:
        path, document = load_netbox_schema(settings, refresh=refresh)
    except (httpx.HTTPError, ValueError) as exc:
        _err_console.print(f"[red]Schema download failed:[/red] {exc}")
        raise typer.Exit(code=1)
    _console.print(f"[green]Schema saved:[/green] {path} ({len(document.get('paths', {}))} paths)")
    _console.print(f"Set [bold]NETBOX_REST_SCHEMA_PATH={path}[/bold] to use it.")


def run() -> None:
    app()


if __name__ == "__main__":
    run()
