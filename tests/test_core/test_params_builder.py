"""Tests del Request Parameter Builder sobre las tablas del schema incluido."""

import threading

import pytest

from core.domain.endpoints import EndpointDescriptor, ParameterSpec, ParamLocation
from core.domain.models import WritableContact
from core.domain.requests import OutgoingRequest, RequestParams
from core.errors import ParameterEncodingError
from core.services.parameters import RequestParameterBuilder


def _builder(catalog, operation_id):
    return RequestParameterBuilder(catalog[operation_id])


class TestPathAndQuery:
    def test_path_param_is_substituted(self, catalog):
        request = _builder(catalog, "tenancy_contacts_read").build(RequestParams.of(id=7))
        assert request.method == "GET"
        assert request.path_params == {"id": "7"}
        assert request.url_path() == "/api/tenancy/contacts/7/"
        assert request.has_body is False

    def test_query_follows_declaration_order(self, catalog):
        params = RequestParams.of(q="ada", tag=["x", "y"], id__in=[1, 2], limit=10)
        request = _builder(catalog, "tenancy_contacts_list").build(params)
        assert request.query == [
            ("id__in", "1,2"),
            ("q", "ada"),
            ("tag", "x"),
            ("tag", "y"),
            ("limit", "10"),
        ]

    def test_optional_params_omitted(self, catalog):
        request = _builder(catalog, "tenancy_contacts_list").build()
        assert request.query == []

    def test_path_value_is_escaped(self):
        endpoint = EndpointDescriptor(
            operation_id="extras_things_read",
            method="GET",
            path_template="/extras/things/{slug}/",
            parameters=(ParameterSpec("slug", ParamLocation.PATH, required=True),),
        )
        request = RequestParameterBuilder(endpoint).build(RequestParams.of(slug="a/b c"))
        assert request.url_path() == "/api/extras/things/a%2Fb%20c/"


class TestBody:
    def test_model_body_serialized_with_set_fields_only(self, catalog):
        params = RequestParams.of(id=3, data=WritableContact(name="Ada"))
        request = _builder(catalog, "tenancy_contacts_partial_update").build(params)
        assert request.has_body is True
        assert request.body == {"name": "Ada"}

    def test_missing_required_body(self, catalog):
        with pytest.raises(ParameterEncodingError) as exc_info:
            _builder(catalog, "tenancy_contacts_partial_update").build(RequestParams.of(id=3))
        assert exc_info.value.names == ["data"]


class TestErrorCollection:
    """Todos los parámetros se intentan antes de fallar."""

    def test_missing_path_param(self, catalog):
        with pytest.raises(ParameterEncodingError) as exc_info:
            _builder(catalog, "dcim_module-bays_delete").build()
        assert exc_info.value.names == ["id"]
        assert exc_info.value.operation_id == "dcim_module-bays_delete"

    def test_none_counts_as_missing(self, catalog):
        with pytest.raises(ParameterEncodingError) as exc_info:
            _builder(catalog, "dcim_module-bays_read").build(RequestParams.of(id=None))
        assert exc_info.value.names == ["id"]

    def test_multiple_failures_reported_together(self, catalog):
        params = RequestParams.of(id="abc", zeta=1, bogus="x")
        with pytest.raises(ParameterEncodingError) as exc_info:
            _builder(catalog, "dcim_module-bays_read").build(params)
        error = exc_info.value
        assert error.names == ["id", "bogus", "zeta"]
        assert error.message == "3 parameter(s) could not be encoded"
        assert "bogus: is not a declared parameter" in error.details["errors"]

    def test_overflowing_id(self, catalog):
        with pytest.raises(ParameterEncodingError) as exc_info:
            _builder(catalog, "tenancy_contacts_read").build(RequestParams.of(id=2**63))
        assert "out of range" in exc_info.value.errors[0][1]


class TestTimeoutAndCancel:
    def test_copied_unchanged(self, catalog):
        event = threading.Event()
        params = RequestParams.of(id=1, timeout=2.5, cancel_event=event)
        request = _builder(catalog, "tenancy_tenant-groups_read").build(params)
        assert request.timeout == 2.5
        assert request.cancel_event is event
        assert request.cancelled is False
        event.set()
        assert request.cancelled is True

    def test_write_to_existing_request(self, catalog):
        builder = _builder(catalog, "tenancy_tenant-groups_read")
        request = builder.new_request()
        assert isinstance(request, OutgoingRequest)
        builder.write_to_request(request, RequestParams.of(id=4, timeout=1.0))
        assert request.url_path() == "/api/tenancy/tenant-groups/4/"
        assert request.timeout == 1.0
