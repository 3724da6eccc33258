#
# PrettyBytes Converter
#

# Standard library -----------------------------------------------------------------------------------------------------
import dataclasses
import math
from dataclasses import dataclass, field
from fractions import Fraction
from typing import ClassVar, Self

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import InvalidConfigurationError
from .numeric import U64_MAX, round_half_even, std_byte_count
from .tools import fmt_type, fmt_value
from .units import UnitSystem, UnitsConf
from .units import as_unit_system, base_numeric, find_unit_system, natural_exponent, parse_unit
from .units import scale_factor, unit_index, unit_symbol


# Classes --------------------------------------------------------------------------------------------------------------

@dataclass(frozen=True)
class PrettyConf:
    """
    Conversion policy for pretty_bytes().

    Attributes:
        unit_system: DECIMAL (base 1000, kB, MB...) or BINARY (base 1024, KiB, MiB...).
                     Accepts the enum member or its string value.
        precision: Digits kept after the decimal point, rounded half to even.
                   None disables rounding.
        minimum_unit: Lowest unit to display, a ladder index or a unit symbol; None for bytes.
        maximum_unit: Highest unit to display, a ladder index or a unit symbol; None for the
                      top of the ladder.
        signed: Show a leading '+' for zero and positive values. Display only.
        separator: Text between the number and the unit, " " by default, "" for "1.50kB".
                   Display only.

    Bounds given as symbols are normalized to ladder indices, so ``PrettyConf(minimum_unit="MB")``
    stores ``minimum_unit == 2``.

    All validation happens here; a constructed PrettyConf never makes a conversion fail.

    Raises:
        InvalidConfigurationError: unknown unit system, negative or non-int precision,
            a bound outside the ladder, minimum_unit > maximum_unit, or a non-str separator.

    Examples:
        >>> conf = PrettyConf(unit_system="binary", precision=1)
        >>> conf.unit_system is UnitSystem.BINARY, conf.precision
        (True, 1)
        >>> PrettyConf.decimal(0, minimum_unit="kB").unit_range
        (1, 6)
    """

    unit_system: UnitSystem | str = UnitSystem.DECIMAL
    precision: int | None = 2
    minimum_unit: int | str | None = None
    maximum_unit: int | str | None = None
    signed: bool = False
    separator: str = " "

    def __post_init__(self):
        unit_system = as_unit_system(self.unit_system)
        object.__setattr__(self, 'unit_system', unit_system)

        if self.precision is not None:
            if isinstance(self.precision, bool) or not isinstance(self.precision, int):
                raise InvalidConfigurationError(f"precision must be int or None, got {fmt_type(self.precision)}")
            if self.precision < 0:
                raise InvalidConfigurationError(f"precision must be >= 0, got {self.precision}")

        if not isinstance(self.signed, bool):
            raise InvalidConfigurationError(f"signed must be bool, got {fmt_type(self.signed)}")
        if not isinstance(self.separator, str):
            raise InvalidConfigurationError(f"separator must be str, got {fmt_type(self.separator)}")

        minimum_unit = None if self.minimum_unit is None else parse_unit(self.minimum_unit, unit_system)
        maximum_unit = None if self.maximum_unit is None else parse_unit(self.maximum_unit, unit_system)
        if minimum_unit is not None and maximum_unit is not None and minimum_unit > maximum_unit:
            raise InvalidConfigurationError(
                f"minimum_unit must not exceed maximum_unit, got "
                f"{unit_symbol(unit_system, minimum_unit)!r} > {unit_symbol(unit_system, maximum_unit)!r}"
            )
        object.__setattr__(self, 'minimum_unit', minimum_unit)
        object.__setattr__(self, 'maximum_unit', maximum_unit)

    @classmethod
    def decimal(
            cls,
            precision: int | None = 2,
            *,
            minimum_unit: int | str | None = None,
            maximum_unit: int | str | None = None,
            signed: bool = False,
            separator: str = " ",
    ) -> Self:
        """Create with the DECIMAL unit system: B, kB, MB, GB, TB, PB, EB."""
        return cls(UnitSystem.DECIMAL, precision, minimum_unit, maximum_unit, signed, separator)

    @classmethod
    def binary(
            cls,
            precision: int | None = 2,
            *,
            minimum_unit: int | str | None = None,
            maximum_unit: int | str | None = None,
            signed: bool = False,
            separator: str = " ",
    ) -> Self:
        """Create with the BINARY unit system: B, KiB, MiB, GiB, TiB, PiB, EiB."""
        return cls(UnitSystem.BINARY, precision, minimum_unit, maximum_unit, signed, separator)

    def replace(self, **changes) -> Self:
        """Return a copy with the given fields changed, validated like a fresh instance."""
        names = {f.name for f in dataclasses.fields(self)}
        unknown = sorted(set(changes) - names)
        if unknown:
            raise InvalidConfigurationError(f"Unknown PrettyConf field(s): {', '.join(unknown)}")
        return dataclasses.replace(self, **changes)

    @property
    def base(self) -> int:
        """Scale factor between adjacent units, 1000 or 1024."""
        return base_numeric(self.unit_system)

    @property
    def unit_range(self) -> tuple[int, int]:
        """Inclusive (lowest, highest) ladder indices a conversion may select."""
        low = 0 if self.minimum_unit is None else self.minimum_unit
        high = UnitsConf.MAX_INDEX if self.maximum_unit is None else self.maximum_unit
        return low, high


DEFAULT_CONF = PrettyConf()
"""Default conversion policy: DECIMAL units, 2 digits, full ladder, unsigned display."""


@dataclass(frozen=True)
class _PrettyValue:
    """
    Shared behavior of PrettyBytes and PrettyDelta.

    Equality and hashing use raw, value and unit only; precision, signed, separator and
    unit_system are display details carried from the configuration.
    """

    raw: int
    value: float
    unit: str

    precision: int | None = field(default=None, compare=False, repr=False)
    signed: bool = field(default=False, compare=False, repr=False)
    separator: str = field(default=" ", compare=False, repr=False)
    unit_system: UnitSystem | str | None = field(default=None, compare=False, repr=False)

    _min_raw: ClassVar[int] = 0

    def __post_init__(self):
        if isinstance(self.raw, bool) or not isinstance(self.raw, int):
            raise TypeError(f"raw must be int, got {fmt_type(self.raw)}")
        if not self._min_raw <= self.raw <= U64_MAX:
            raise ValueError(f"raw {self.raw} out of range [{self._min_raw}, {U64_MAX}]")

        if isinstance(self.value, bool) or not isinstance(self.value, (int, float)):
            raise TypeError(f"value must be int | float, got {fmt_type(self.value)}")
        if not math.isfinite(self.value):
            raise ValueError(f"value must be finite, got {fmt_value(self.value)}")
        object.__setattr__(self, 'value', float(self.value))

        if self.unit_system is None:
            object.__setattr__(self, 'unit_system', find_unit_system(self.unit))
        else:
            object.__setattr__(self, 'unit_system', as_unit_system(self.unit_system))
            unit_index(self.unit_system, self.unit)

        if not isinstance(self.separator, str):
            raise TypeError(f"separator must be str, got {fmt_type(self.separator)}")

    def __str__(self):
        return self.as_str

    def __format__(self, format_spec: str) -> str:
        """Apply format_spec to the number, e.g. ``f"{pb:.1f}"`` gives '1.5 kB'."""
        if not format_spec:
            return self.as_str
        return f"{self.value:{format_spec}}{self.separator}{self.unit}"

    def __int__(self) -> int:
        return self.raw

    @property
    def as_str(self) -> str:
        """
        Number with unit as a string.

        Fixed digits when precision is set ("1.50 kB"), otherwise whole values print as ints
        ("1 MiB") and fractions in the shortest float repr.
        """
        return f"{self._number_str}{self.separator}{self.unit}"

    @property
    def scale(self) -> int:
        """Exact number of bytes in one unit."""
        return scale_factor(self.unit_system, self.unit_index)

    @property
    def unit_index(self) -> int:
        """Ladder index of the unit, 0 for bytes."""
        return unit_index(self.unit_system, self.unit)

    @property
    def _number_str(self) -> str:
        value = self.value
        if self.precision is not None:
            number = f"{value:.{self.precision}f}"
        elif value.is_integer():
            number = str(int(value))
        else:
            number = repr(value)

        if self.signed and not number.startswith("-"):
            return f"+{number}"
        return number


@dataclass(frozen=True, eq=True)
class PrettyBytes(_PrettyValue):
    """
    A byte count prettified into a value and unit, keeping the exact byte count.

    Attributes:
        raw: The exact original byte count in [0, 2**64 - 1], never rounded.
        value: The scaled magnitude, rounded to the configured precision.
        unit: The unit symbol, a member of the ladder of unit_system.

    ``value * scale`` approximates raw within the rounding of value; raw is the source of truth.

    Examples:
        >>> pb = pretty_bytes(1500, precision=1)
        >>> pb
        PrettyBytes(raw=1500, value=1.5, unit='kB')
        >>> str(pb)
        '1.5 kB'
    """


@dataclass(frozen=True, eq=True)
class PrettyDelta(_PrettyValue):
    """
    A signed byte difference prettified into a value and unit.

    raw is in [-(2**64 - 1), 2**64 - 1]; unit selection and rounding use abs(raw),
    value carries the sign of raw.

    Examples:
        >>> str(pretty_delta(-1536, unit_system="binary", precision=1))
        '-1.5 KiB'
        >>> str(pretty_delta(1536, unit_system="binary", precision=1, signed=True))
        '+1.5 KiB'
    """

    _min_raw: ClassVar[int] = -U64_MAX


# Methods --------------------------------------------------------------------------------------------------------------

def pretty_bytes(raw: int, conf: PrettyConf | None = None, **overrides) -> PrettyBytes:
    """
    Convert a byte count into a PrettyBytes value.

    Args:
        raw: Byte count in [0, 2**64 - 1]. Floats are floored, see std_byte_count().
        conf: Conversion policy, DEFAULT_CONF if None.
        **overrides: PrettyConf fields applied on top of conf, e.g. ``precision=1``.

    Returns:
        PrettyBytes with the exact raw, the rounded value and the selected unit.

    Raises:
        InvalidConfigurationError: overrides produce an invalid configuration.
        TypeError, ValueError: raw is not a valid byte count.

    Algorithm:
        - Zero is always 0 B.
        - The unit is the largest one not exceeding raw, clamped into conf.unit_range.
        - raw / scale is rounded half to even in exact arithmetic.
        - When rounding reaches the base (999.995 kB -> 1000.00 kB) the next unit is used
          instead, within the same clamp.

    Examples:
        >>> pretty_bytes(1500, unit_system="decimal", precision=1)
        PrettyBytes(raw=1500, value=1.5, unit='kB')
        >>> pretty_bytes(1536, unit_system="binary", precision=0)
        PrettyBytes(raw=1536, value=2.0, unit='KiB')
        >>> pretty_bytes(999_995)
        PrettyBytes(raw=999995, value=1.0, unit='MB')
    """
    return _pretty_bytes(raw, _resolve_conf(conf, overrides), stacklevel=3)


def pretty_delta(delta: int, conf: PrettyConf | None = None, **overrides) -> PrettyDelta:
    """
    Convert a signed byte difference into a PrettyDelta value.

    Same unit selection and rounding as pretty_bytes() applied to abs(delta).
    """
    conf = _resolve_conf(conf, overrides)
    delta = std_byte_count(delta, signed=True, stacklevel=3)
    exponent, scaled = _scale(abs(delta), conf)
    value = float(scaled)
    if delta < 0 and value:
        value = -value
    return PrettyDelta(
        raw=delta,
        value=value,
        unit=unit_symbol(conf.unit_system, exponent),
        precision=conf.precision,
        signed=conf.signed,
        separator=conf.separator,
        unit_system=conf.unit_system,
    )


def pretty_bytes_decimal(raw: int, precision: int | None = None) -> PrettyBytes:
    """
    Convert with decimal units (kB, MB, GB), unrounded unless precision is given.

    Examples:
        >>> str(pretty_bytes_decimal(1_000_000))
        '1 MB'
        >>> str(pretty_bytes_decimal(3_564_234, 2))
        '3.56 MB'
    """
    return _pretty_bytes(raw, PrettyConf.decimal(precision), stacklevel=3)


def pretty_bytes_binary(raw: int, precision: int | None = None) -> PrettyBytes:
    """
    Convert with binary units (KiB, MiB, GiB), unrounded unless precision is given.

    Examples:
        >>> str(pretty_bytes_binary(1_048_576))
        '1 MiB'
        >>> str(pretty_bytes_binary(3_195_498, 2))
        '3.05 MiB'
    """
    return _pretty_bytes(raw, PrettyConf.binary(precision), stacklevel=3)


def _resolve_conf(conf: PrettyConf | None, overrides: dict) -> PrettyConf:
    if conf is None:
        conf = DEFAULT_CONF
    elif not isinstance(conf, PrettyConf):
        raise TypeError(f"conf must be PrettyConf or None, got {fmt_type(conf)}")
    return conf.replace(**overrides) if overrides else conf


def _scale(magnitude: int, conf: PrettyConf) -> tuple[int, Fraction]:
    """Select the ladder index for a non-negative magnitude and return it with the rounded value."""
    if magnitude == 0:
        return 0, Fraction(0)

    low, high = conf.unit_range
    base = conf.base
    exponent = min(max(natural_exponent(magnitude, conf.unit_system), low), high)
    scaled = round_half_even(Fraction(magnitude, base ** exponent), conf.precision)

    # Rounding up to the base means the next unit: 999.995 kB -> 1.00 MB, never 1000.00 kB.
    # One step is enough, the promoted value is about 1.
    if scaled >= base and exponent < high:
        exponent += 1
        scaled = round_half_even(Fraction(magnitude, base ** exponent), conf.precision)

    return exponent, scaled


def _pretty_bytes(raw, conf: PrettyConf, stacklevel: int) -> PrettyBytes:
    """stacklevel is relative to this function, as in warnings.warn()."""
    raw = std_byte_count(raw, stacklevel=stacklevel + 1)
    exponent, scaled = _scale(raw, conf)
    return PrettyBytes(
        raw=raw,
        value=float(scaled),
        unit=unit_symbol(conf.unit_system, exponent),
        precision=conf.precision,
        signed=conf.signed,
        separator=conf.separator,
        unit_system=conf.unit_system,
    )
