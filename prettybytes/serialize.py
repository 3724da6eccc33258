"""
Serialization of PrettyBytes values for transports whose numbers are doubles.

The serialized record has exactly three fields::

    {"raw": "18446744073709551615", "value": 16.0, "unit": "EiB"}

``raw`` is a decimal digit string so that byte counts above 2**53 survive JSON parsers
that read every number as an IEEE-754 double. ``value`` stays a plain number (it is
always small) and ``unit`` is the unit symbol.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import json
import math
from collections.abc import Mapping
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidConfigurationError, InvalidSerializedInputError
from .numeric import U64_MAX, int_to_str, str_to_int
from .pretty import PrettyBytes, PrettyDelta
from .tools import fmt_type, fmt_value
from .units import UnitSystem, as_unit_system, find_unit_system, unit_index

FIELDS = ("raw", "value", "unit")


# Classes --------------------------------------------------------------------------------------------------------------

class PrettyBytesEncoder(json.JSONEncoder):
    """
    JSON encoder writing PrettyBytes and PrettyDelta values anywhere in a document as records.

    Examples:
        >>> json.dumps({"size": PrettyBytes(1500, 1.5, "kB")}, cls=PrettyBytesEncoder)
        '{"size": {"raw": "1500", "value": 1.5, "unit": "kB"}}'
    """

    def default(self, o: Any) -> Any:
        if isinstance(o, (PrettyBytes, PrettyDelta)):
            return to_dict(o)
        return super().default(o)


# Methods --------------------------------------------------------------------------------------------------------------

def to_dict(pb: PrettyBytes | PrettyDelta) -> dict[str, Any]:
    """Serialize to a plain dict with raw as a decimal string."""
    if not isinstance(pb, (PrettyBytes, PrettyDelta)):
        raise TypeError(f"PrettyBytes or PrettyDelta expected, got {fmt_type(pb)}")
    return {
        "raw": int_to_str(pb.raw),
        "value": pb.value,
        "unit": pb.unit,
    }


def from_dict(
        data: Mapping[str, Any],
        unit_system: UnitSystem | str | None = None,
        *,
        signed: bool = False,
) -> PrettyBytes | PrettyDelta:
    """
    Rebuild a PrettyBytes (or PrettyDelta when signed=True) from a serialized record.

    The raw field is parsed exactly; value and unit are taken as serialized.

    Args:
        data: Mapping with exactly the keys 'raw', 'value' and 'unit'.
        unit_system: Unit system the unit must belong to; None accepts a symbol of
                     either ladder.
        signed: Accept a negative raw and return PrettyDelta.

    Raises:
        InvalidSerializedInputError: missing or extra keys, raw not a valid non-negative
            (or signed) base-10 integer string within 64 bits, value not a finite number,
            unit not a symbol of the unit system.
        InvalidConfigurationError: unit_system itself is invalid.

    Examples:
        >>> from_dict({"raw": "18446744073709551615", "value": 16.0, "unit": "EiB"}).raw
        18446744073709551615
    """
    if unit_system is not None:
        unit_system = as_unit_system(unit_system)

    if not isinstance(data, Mapping):
        raise InvalidSerializedInputError(f"Serialized record must be a mapping, got {fmt_type(data)}")

    missing = [k for k in FIELDS if k not in data]
    if missing:
        raise InvalidSerializedInputError(f"Serialized record is missing field(s): {', '.join(missing)}")
    extra = sorted(str(k) for k in data if k not in FIELDS)
    if extra:
        raise InvalidSerializedInputError(f"Serialized record has unexpected field(s): {', '.join(extra)}")

    raw = _decode_raw(data["raw"], signed=signed)
    value = _decode_value(data["value"])
    unit_system = _decode_unit(data["unit"], unit_system)

    cls = PrettyDelta if signed else PrettyBytes
    return cls(raw=raw, value=value, unit=data["unit"], unit_system=unit_system)


def dumps(obj: Any, **kwargs) -> str:
    """
    Serialize obj to a JSON string, PrettyBytes values included at any depth.

    Keyword arguments are passed to json.dumps(); cls defaults to PrettyBytesEncoder.
    """
    kwargs.setdefault("cls", PrettyBytesEncoder)
    return json.dumps(obj, **kwargs)


def loads(
        text: str | bytes,
        unit_system: UnitSystem | str | None = None,
        *,
        signed: bool = False,
) -> PrettyBytes | PrettyDelta:
    """
    Parse a JSON string holding one serialized record.

    Raises:
        InvalidSerializedInputError: text is not valid JSON or the record is invalid.
    """
    try:
        data = json.loads(text)
    except ValueError as e:
        raise InvalidSerializedInputError(f"Serialized record is not valid JSON: {e}") from e
    return from_dict(data, unit_system, signed=signed)


def _decode_raw(raw: Any, signed: bool) -> int:
    if not isinstance(raw, str):
        raise InvalidSerializedInputError(
            f"raw must be a base-10 integer string, got {fmt_type(raw)}: {fmt_value(raw)}"
        )
    min_value = -U64_MAX if signed else 0
    try:
        return str_to_int(raw, min_value=min_value, max_value=U64_MAX)
    except ValueError as e:
        raise InvalidSerializedInputError(f"Invalid raw byte count: {e}") from e


def _decode_value(value: Any) -> float:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise InvalidSerializedInputError(f"value must be a number, got {fmt_type(value)}")
    try:
        number = float(value)
    except OverflowError as e:
        raise InvalidSerializedInputError(f"value is too large for a float: {e}") from e
    if not math.isfinite(number):
        raise InvalidSerializedInputError(f"value must be finite, got {fmt_value(number)}")
    return number


def _decode_unit(unit: Any, unit_system: UnitSystem | None) -> UnitSystem:
    if not isinstance(unit, str):
        raise InvalidSerializedInputError(f"unit must be a string, got {fmt_type(unit)}")
    try:
        if unit_system is None:
            return find_unit_system(unit)
        unit_index(unit_system, unit)
        return unit_system
    except InvalidConfigurationError as e:
        raise InvalidSerializedInputError(str(e)) from e
