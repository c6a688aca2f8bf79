"""Tests de las reglas de formato de parámetros."""

from datetime import date, datetime, timezone
from decimal import Decimal

import pytest

from core.domain.endpoints import ParameterSpec, ParamLocation
from core.services.parameters import (
    format_boolean,
    format_integer,
    format_number,
    format_parameter,
    format_string,
)


class TestIntegerFormatting:
    """Enteros: decimal base 10 dentro del rango del formato declarado."""

    def test_decimal_text(self):
        assert format_integer(12345) == "12345"

    def test_negative_value(self):
        assert format_integer(-42, "int32") == "-42"

    def test_int64_bounds(self):
        assert format_integer(2**63 - 1, "int64") == "9223372036854775807"
        assert format_integer(-(2**63), "int64") == "-9223372036854775808"

    def test_int32_overflow_is_error(self):
        with pytest.raises(ValueError, match="out of range"):
            format_integer(2**31, "int32")

    def test_missing_format_uses_int64_range(self):
        assert format_integer(2**40) == str(2**40)
        with pytest.raises(ValueError):
            format_integer(2**63)

    def test_bool_rejected(self):
        with pytest.raises(ValueError):
            format_integer(True)

    @pytest.mark.parametrize("value, expected", [(Decimal("12"), "12"), (Decimal("12.000"), "12"), (Decimal("-3"), "-3")])
    def test_integral_decimal_accepted(self, value, expected):
        assert format_integer(value) == expected

    @pytest.mark.parametrize("value", [Decimal("1.5"), Decimal("NaN"), Decimal("Infinity")])
    def test_fractional_or_non_finite_decimal_rejected(self, value):
        with pytest.raises(ValueError):
            format_integer(value)

    def test_decimal_range_checked(self):
        with pytest.raises(ValueError):
            format_integer(Decimal(2**31), "int32")

    def test_numeric_string_accepted(self):
        assert format_integer(" 7 ") == "7"

    def test_non_numeric_string_rejected(self):
        with pytest.raises(ValueError):
            format_integer("abc")

    def test_whole_float_accepted_fraction_rejected(self):
        assert format_integer(3.0) == "3"
        with pytest.raises(ValueError):
            format_integer(1.5)


class TestNumberFormatting:
    def test_shortest_decimal(self):
        assert format_number(1.5) == "1.5"
        assert format_number(0.1) == "0.1"

    def test_no_exponent(self):
        assert format_number(1e-7) == "0.0000001"

    def test_integer_and_decimal_inputs(self):
        assert format_number(10) == "10"
        assert format_number(Decimal("2.50")) == "2.50"
        assert format_number("2.50") == "2.50"

    def test_non_finite_rejected(self):
        with pytest.raises(ValueError):
            format_number(float("nan"))

    def test_garbage_rejected(self):
        with pytest.raises(ValueError):
            format_number("one")


class TestBooleanAndString:
    def test_boolean_literals(self):
        assert format_boolean(True) == "true"
        assert format_boolean(False) == "false"
        assert format_boolean("TRUE") == "true"

    def test_boolean_rejects_integers(self):
        with pytest.raises(ValueError):
            format_boolean(1)

    def test_datetime_is_iso8601(self):
        value = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
        assert format_string(value, "date-time") == "2024-01-02T03:04:05+00:00"

    def test_date_is_iso8601(self):
        assert format_string(date(2024, 1, 2), "date") == "2024-01-02"

    def test_date_time_format_rejects_numbers(self):
        with pytest.raises(ValueError):
            format_string(1700000000, "date-time")

    def test_plain_string_passthrough(self):
        assert format_string("ada lovelace") == "ada lovelace"

    def test_none_rejected(self):
        with pytest.raises(ValueError):
            format_string(None)


class TestArrayParameters:
    """Arrays: `csv`/`pipes`/... se unen; `multi` repite el parámetro."""

    def test_csv_joins_items(self):
        spec = ParameterSpec("id__in", ParamLocation.QUERY, type="array", items_type="integer")
        assert format_parameter(spec, [1, 2, 3]) == ["1,2,3"]

    def test_multi_repeats(self):
        spec = ParameterSpec(
            "tag", ParamLocation.QUERY, type="array", items_type="string", collection_format="multi"
        )
        assert format_parameter(spec, ["core", "edge"]) == ["core", "edge"]

    def test_pipes_separator(self):
        spec = ParameterSpec("x", ParamLocation.QUERY, type="array", items_type="string", collection_format="pipes")
        assert format_parameter(spec, ("a", "b")) == ["a|b"]

    def test_scalar_value_is_single_item(self):
        spec = ParameterSpec("id__in", ParamLocation.QUERY, type="array", items_type="integer")
        assert format_parameter(spec, 5) == ["5"]

    def test_bad_item_fails_whole_parameter(self):
        spec = ParameterSpec("id__in", ParamLocation.QUERY, type="array", items_type="integer")
        with pytest.raises(ValueError):
            format_parameter(spec, [1, "two"])

    def test_body_passes_dict_through(self):
        spec = ParameterSpec("data", ParamLocation.BODY, type="object", required=True)
        assert format_parameter(spec, {"name": "Ada"}) == {"name": "Ada"}

    def test_body_rejects_scalars(self):
        spec = ParameterSpec("data", ParamLocation.BODY, type="object", required=True)
        with pytest.raises(ValueError):
            format_parameter(spec, "name=Ada")
