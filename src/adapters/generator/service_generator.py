"""Generador de servicios por recurso (plantilla Jinja2).

Por qué está en adapters:
- La plantilla y el render son detalles de infraestructura (Jinja2 + ast).
- La CLI solo traduce flags a `ServiceSpec` y decide el código de salida.

Flujo:
1. Render de `templates/service.py.j2` con `StrictUndefined`.
2. Comprobación de que el resultado es Python válido (`ast.parse`) y
   normalización de espacios.
3. Escritura en `{endpoint}_{service}.py`.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, StrictUndefined, TemplateError

from core.errors import NetBoxClientError

_TEMPLATES_DIR = Path(__file__).resolve().parent / "templates"
SERVICE_TEMPLATE = "service.py.j2"


class GenerationError(NetBoxClientError):
    """Fallo de render o de formato del fichero generado."""


@dataclass
class ServiceSpec:
    """Valores que alimentan la plantilla (equivalen a los flags de la CLI)."""

    type_name: str = "Example"
    service_name: str = "ExampleService"
    endpoint: str = "tenancy"
    service: str = "example"
    update_type_name: str = ""
    list_opts: bool = True
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if not self.update_type_name:
            self.update_type_name = self.type_name

    @property
    def model_imports(self) -> list[str]:
        return sorted({self.type_name, self.update_type_name})


def _get_env(templates_dir: Path = _TEMPLATES_DIR) -> Environment:
    env = Environment(
        loader=FileSystemLoader(str(templates_dir)),
        undefined=StrictUndefined,
        trim_blocks=True,
        lstrip_blocks=True,
        keep_trailing_newline=True,
        autoescape=False,
    )
    env.filters["pyrepr"] = repr
    return env


def output_filename(spec: ServiceSpec) -> str:
    return f"{spec.endpoint}_{spec.service}.py"


def format_source(source: str, filename: str = "<generated>") -> str:
    """Valida el Python generado y normaliza espacios finales.

    Lanza `GenerationError` si el resultado no compila.
    """

    try:
        ast.parse(source, filename=filename)
    except SyntaxError as exc:
        raise GenerationError(
            f"generated source is not valid Python: {exc.msg}",
            {"file": filename, "line": exc.lineno},
        ) from exc
    lines = [line.rstrip() for line in source.splitlines()]
    return "\n".join(lines).rstrip("\n") + "\n"


def render_service(
    spec: ServiceSpec,
    *,
    templates_dir: Path = _TEMPLATES_DIR,
    template_name: str = SERVICE_TEMPLATE,
) -> str:
    try:
        template = _get_env(templates_dir).get_template(template_name)
        source = template.render(
            timestamp=spec.timestamp.isoformat(timespec="seconds"),
            type_name=spec.type_name,
            update_type_name=spec.update_type_name,
            service_name=spec.service_name,
            endpoint=spec.endpoint,
            service=spec.service,
            list_opts=spec.list_opts,
            model_imports=spec.model_imports,
        )
    except TemplateError as exc:
        raise GenerationError(f"template render failed: {exc}", {"template": template_name}) from exc
    return format_source(source, output_filename(spec))


def write_service(spec: ServiceSpec, output_dir: Path, **render_kwargs: object) -> Path:
    """Renderiza y escribe el servicio; no toca disco si el render falla."""

    source = render_service(spec, **render_kwargs)  # type: ignore[arg-type]
    output_dir.mkdir(parents=True, exist_ok=True)
    output_path = output_dir / output_filename(spec)
    output_path.write_text(source, encoding="utf-8")
    return output_path
