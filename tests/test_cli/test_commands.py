"""Tests de los comandos `endpoints`, `call`, `schema pull` y `doctor`."""

import io
import json

import httpx
import pytest
from pydantic import ValidationError
from rich.console import Console
from typer.testing import CliRunner

import cli.doctor as doctor_module
import cli.main as main_module
import core.config as config_module
from adapters.http_client import build_client
from adapters.netbox_api.client import NetBoxClient
from adapters.transport import HttpxTransport
from cli.main import app, parse_param_items
from cli.ui_components import build_endpoints_table, build_error_panel, build_variant_panel
from core.domain.requests import RequestParams
from core.errors import ParameterEncodingError
from core.resources_loader import SCHEMA_FILENAME

runner = CliRunner()


def _render(renderable) -> str:
    console = Console(file=io.StringIO(), width=250)
    console.print(renderable)
    return console.file.getvalue()


def _patched_client(handler):
    def factory(settings):
        http = build_client(settings, transport=httpx.MockTransport(handler))
        return NetBoxClient(settings, transport=HttpxTransport(http))

    return factory


class TestParamItems:
    def test_repeated_names_collect(self):
        assert parse_param_items(["id=3", "tag=a", "tag=b", "tag=c"]) == {"id": "3", "tag": ["a", "b", "c"]}

    def test_value_may_contain_equals(self):
        assert parse_param_items(["q=a=b"]) == {"q": "a=b"}


class TestInvalidConfiguration:
    """Una variable de entorno inválida se informa sin traceback."""

    def test_invalid_env_value_exits_1(self, monkeypatch):
        monkeypatch.setenv("NETBOX_REST_PAGE_LIMIT", "0")
        result = runner.invoke(app, ["endpoints"])
        assert result.exit_code == 1
        assert not isinstance(result.exception, ValidationError)
        assert "Invalid configuration" in result.output

    def test_explicit_log_level_skips_settings(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NETBOX_REST_PAGE_LIMIT", "0")
        result = runner.invoke(app, ["--log-level", "WARNING", "generate", "--output-dir", str(tmp_path)])
        assert result.exit_code == 0, result.output
        assert (tmp_path / "tenancy_example.py").exists()


class TestEndpointsCommand:
    def test_lists_bundled_endpoints(self):
        result = runner.invoke(app, ["endpoints", "--tag", "dcim"])
        assert result.exit_code == 0, result.output

    def test_missing_schema_file(self, tmp_path):
        result = runner.invoke(app, ["endpoints", "--schema", str(tmp_path / "missing.json")])
        assert result.exit_code == 1

    def test_table_content(self, catalog):
        selected = [catalog["dcim_module-bays_delete"], catalog["circuits_circuit-terminations_read"]]
        text = _render(build_endpoints_table(selected))
        assert "dcim_module-bays_delete" in text
        assert "204 NoContent(-)" in text
        assert "200 OK(CircuitTermination)" in text


class TestCallCommand:
    def test_json_output(self, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/tenancy/contacts/3/"
            return httpx.Response(200, json={"id": 3, "name": "Ada"})

        monkeypatch.setattr(main_module, "NetBoxClient", _patched_client(handler))
        result = runner.invoke(app, ["call", "tenancy_contacts_read", "-p", "id=3", "--json"])
        assert result.exit_code == 0, result.output
        payload = json.loads(result.stdout)
        assert payload["id"] == 3
        assert payload["name"] == "Ada"

    def test_body_from_data_option(self, monkeypatch):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content) == {"name": "Ada"}
            return httpx.Response(200, json={"id": 3, "name": "Ada"})

        monkeypatch.setattr(main_module, "NetBoxClient", _patched_client(handler))
        result = runner.invoke(
            app, ["call", "tenancy_contacts_partial_update", "-p", "id=3", "--data", '{"name": "Ada"}']
        )
        assert result.exit_code == 0, result.output

    def test_unexpected_status_exits_1(self, monkeypatch):
        monkeypatch.setattr(main_module, "NetBoxClient", _patched_client(lambda r: httpx.Response(503)))
        result = runner.invoke(app, ["call", "dcim_module-bays_delete", "-p", "id=1"])
        assert result.exit_code == 1

    def test_unknown_operation_exits_1(self):
        result = runner.invoke(app, ["call", "dcim_nothing_list"])
        assert result.exit_code == 1

    def test_bad_parameter_value_exits_1(self):
        result = runner.invoke(app, ["call", "tenancy_contacts_read", "-p", "id=abc"])
        assert result.exit_code == 1

    def test_malformed_param_item_is_usage_error(self):
        result = runner.invoke(app, ["call", "tenancy_contacts_read", "-p", "id"])
        assert result.exit_code == 2


class TestSchemaPull:
    def test_uses_cached_copy(self, tmp_path, monkeypatch):
        monkeypatch.setenv("NETBOX_REST_DATA_DIR", str(tmp_path))
        (tmp_path / SCHEMA_FILENAME).write_text('{"swagger": "2.0", "paths": {"/a/": {}}}', encoding="utf-8")
        result = runner.invoke(app, ["schema", "pull"])
        assert result.exit_code == 0, result.output
        assert "Schema saved" in result.stdout


class TestDoctor:
    def test_run_ok(self, monkeypatch):
        handler = lambda r: httpx.Response(200, json={"netbox-version": "4.1.3"})  # noqa: E731
        monkeypatch.setattr(doctor_module, "NetBoxClient", _patched_client(handler))
        result = runner.invoke(app, ["doctor", "run"])
        assert result.exit_code == 0, result.output

    def test_status_check_reports_version(self, settings, monkeypatch):
        handler = lambda r: httpx.Response(200, json={"netbox-version": "4.1.3", "django-version": "5.0.9"})  # noqa: E731
        monkeypatch.setattr(doctor_module, "NetBoxClient", _patched_client(handler))
        assert doctor_module._check_status(settings) == (True, "HTTP 200, NetBox 4.1.3")

    def test_status_check_with_empty_body(self, settings, monkeypatch):
        monkeypatch.setattr(doctor_module, "NetBoxClient", _patched_client(lambda r: httpx.Response(200)))
        assert doctor_module._check_status(settings) == (True, "HTTP 200, NetBox unknown version")

    def test_run_fails_when_status_fails(self, monkeypatch):
        monkeypatch.setattr(doctor_module, "NetBoxClient", _patched_client(lambda r: httpx.Response(502)))
        result = runner.invoke(app, ["doctor", "run"])
        assert result.exit_code == 1

    def test_setup_writes_user_env(self, tmp_path, monkeypatch):
        env_path = tmp_path / ".env"
        monkeypatch.setattr(config_module, "get_user_env_file", lambda: env_path)
        result = runner.invoke(app, ["doctor", "setup"], input="http://nb.test\nsecret\nn\n")
        assert result.exit_code == 0, result.output
        data = config_module._parse_env_lines(env_path.read_text(encoding="utf-8"))
        assert data == {
            "NETBOX_REST_TOKEN": "secret",
            "NETBOX_REST_URL": "http://nb.test",
            "NETBOX_REST_VERIFY_SSL": "false",
        }


class TestPanels:
    def test_variant_panel(self, mock_client):
        nb = mock_client(lambda r: httpx.Response(200, json={"id": 3, "name": "Ada"}))
        variant = nb.request("tenancy_contacts_read", RequestParams.of(id=3))
        text = _render(build_variant_panel(variant))
        assert "200 OK" in text
        assert '"name": "Ada"' in text

    def test_error_panel_lists_failures(self):
        error = ParameterEncodingError([("id", "is required")])
        text = _render(build_error_panel(error))
        assert "ParameterEncodingError" in text
        assert "- id: is required" in text
