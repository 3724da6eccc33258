#
# PrettyBytes - Serialization Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import json
import math

# Third-party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from prettybytes.errors import InvalidConfigurationError, InvalidSerializedInputError
from prettybytes.numeric import U64_MAX
from prettybytes.pretty import PrettyBytes, PrettyDelta, pretty_bytes, pretty_delta
from prettybytes.serialize import PrettyBytesEncoder, dumps, from_dict, loads, to_dict
from prettybytes.units import UnitSystem


# Tests ----------------------------------------------------------------------------------------------------------------

class TestToDict:

    def test_record(self):
        """raw is a decimal string, value a number, unit a symbol."""
        assert to_dict(pretty_bytes(1234567890123)) == {"raw": "1234567890123", "value": 1.23, "unit": "TB"}

    def test_u64_max(self):
        record = to_dict(pretty_bytes(U64_MAX, unit_system="binary"))
        assert record == {"raw": "18446744073709551615", "value": 16.0, "unit": "EiB"}

    def test_delta(self):
        assert to_dict(pretty_delta(-1536, unit_system="binary", precision=1)) == {
            "raw": "-1536", "value": -1.5, "unit": "KiB"
        }

    def test_type_error(self):
        with pytest.raises(TypeError):
            to_dict({"raw": "1", "value": 1.0, "unit": "B"})


class TestRoundTrip:

    @pytest.mark.parametrize("unit_system", ["decimal", "binary"])
    def test_raw_exact(self, large_raw, unit_system):
        """The exact byte count survives JSON, above 2**53 included."""
        pb = pretty_bytes(large_raw, unit_system=unit_system)
        restored = loads(dumps(pb), unit_system)
        assert restored.raw == large_raw
        assert restored == pb

    def test_double_only_consumer(self, large_raw):
        """A parser reading every number as a double still sees the exact raw string."""
        text = dumps(pretty_bytes(large_raw))
        record = json.loads(text, parse_int=float, parse_float=float)
        assert record["raw"] == str(large_raw)
        assert from_dict(record).raw == large_raw

    def test_native_number_would_lose_precision(self):
        """Sanity check of the motivating case: 2**53 + 1 is not representable as a double."""
        assert float(2 ** 53 + 1) == float(2 ** 53)

    def test_delta_round_trip(self):
        pd = pretty_delta(-U64_MAX)
        restored = loads(dumps(pd), signed=True)
        assert isinstance(restored, PrettyDelta)
        assert restored.raw == -U64_MAX
        assert restored == pd

    def test_unit_system_carried(self):
        restored = from_dict({"raw": "0", "value": 0, "unit": "B"}, UnitSystem.BINARY)
        assert restored.unit_system is UnitSystem.BINARY
        assert isinstance(restored.value, float)


class TestFromDictRejects:

    @pytest.mark.parametrize("raw", [
        pytest.param("-1", id="negative"),
        pytest.param("abc", id="letters"),
        pytest.param("99999999999999999999999999", id="overflow"),
        pytest.param("18446744073709551616", id="u64_max_plus_one"),
        pytest.param("", id="empty"),
        pytest.param(" 1", id="whitespace"),
        pytest.param("+1", id="plus_sign"),
        pytest.param("1.0", id="decimal_point"),
        pytest.param("1e3", id="exponent"),
        pytest.param(1, id="native_int"),
        pytest.param(1.0, id="native_float"),
        pytest.param(None, id="none"),
    ])
    def test_invalid_raw(self, raw):
        with pytest.raises(InvalidSerializedInputError):
            from_dict({"raw": raw, "value": 1.0, "unit": "B"})

    @pytest.mark.parametrize("value", [
        pytest.param("1.5", id="str"),
        pytest.param(True, id="bool"),
        pytest.param(None, id="none"),
        pytest.param(math.nan, id="nan"),
        pytest.param(math.inf, id="inf"),
        pytest.param(10 ** 400, id="int_overflow"),
    ])
    def test_invalid_value(self, value):
        with pytest.raises(InvalidSerializedInputError):
            from_dict({"raw": "1500", "value": value, "unit": "kB"})

    @pytest.mark.parametrize("unit, unit_system", [
        pytest.param("XB", None, id="unknown"),
        pytest.param("KB", None, id="wrong_case"),
        pytest.param("KiB", "decimal", id="other_ladder"),
        pytest.param(1, None, id="not_str"),
    ])
    def test_invalid_unit(self, unit, unit_system):
        with pytest.raises(InvalidSerializedInputError):
            from_dict({"raw": "1500", "value": 1.5, "unit": unit}, unit_system)

    @pytest.mark.parametrize("data", [
        pytest.param({"raw": "1", "value": 1.0}, id="missing_unit"),
        pytest.param({"raw": "1", "value": 1.0, "unit": "B", "extra": 1}, id="extra_key"),
        pytest.param(["1", 1.0, "B"], id="list"),
        pytest.param(None, id="none"),
    ])
    def test_invalid_record(self, data):
        with pytest.raises(InvalidSerializedInputError):
            from_dict(data)

    def test_negative_raw_requires_signed(self):
        record = {"raw": "-1536", "value": -1.5, "unit": "KiB"}
        with pytest.raises(InvalidSerializedInputError):
            from_dict(record)
        assert from_dict(record, signed=True) == PrettyDelta(-1536, -1.5, "KiB")

    def test_invalid_unit_system_is_configuration_error(self):
        with pytest.raises(InvalidConfigurationError):
            from_dict({"raw": "1", "value": 1.0, "unit": "B"}, "octal")

    def test_errors_are_value_errors(self):
        with pytest.raises(ValueError, match="Invalid raw byte count"):
            from_dict({"raw": "abc", "value": 1.0, "unit": "B"})

    @pytest.mark.parametrize("text", [
        pytest.param("{", id="truncated"),
        pytest.param("", id="empty"),
        pytest.param(b"\x80\x81\x82\x83", id="bad_bytes"),
        pytest.param('{"raw": "1", "value": ' + "1" * 5000 + ', "unit": "B"}', id="int_digit_limit"),
    ])
    def test_loads_invalid_json(self, text):
        with pytest.raises(InvalidSerializedInputError):
            loads(text)

    @pytest.mark.parametrize("literal", [
        pytest.param("1" + "0" * 400, id="int_beyond_float"),
        pytest.param("1e400", id="float_overflows_to_inf"),
    ])
    def test_loads_value_out_of_float_range(self, literal):
        with pytest.raises(InvalidSerializedInputError, match="value"):
            loads('{"raw": "1", "value": ' + literal + ', "unit": "B"}')


class TestDumps:

    def test_nested_document(self):
        """PrettyBytes values are encoded at any depth."""
        doc = {"files": [pretty_bytes(1500)], "total": pretty_bytes(2 ** 60, unit_system="binary")}
        assert json.loads(dumps(doc)) == {
            "files": [{"raw": "1500", "value": 1.5, "unit": "kB"}],
            "total": {"raw": "1152921504606846976", "value": 1.0, "unit": "EiB"},
        }

    def test_encoder_with_stdlib(self):
        text = json.dumps({"size": pretty_bytes(1500)}, cls=PrettyBytesEncoder)
        assert text == '{"size": {"raw": "1500", "value": 1.5, "unit": "kB"}}'

    def test_json_kwargs_pass_through(self):
        text = dumps(PrettyBytes(1, 1.0, "B"), sort_keys=True)
        assert text == '{"raw": "1", "unit": "B", "value": 1.0}'

    def test_unsupported_type(self):
        with pytest.raises(TypeError):
            dumps({"x": object()})
