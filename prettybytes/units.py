#
# PrettyBytes Unit System
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import StrEnum, unique

# Local ----------------------------------------------------------------------------------------------------------------
from .collections import FrozenBiMap
from .errors import InvalidConfigurationError
from .tools import fmt_choices, fmt_type, fmt_value


# Classes --------------------------------------------------------------------------------------------------------------

@unique
class UnitSystem(StrEnum):
    """
    Unit systems for byte counts.

    Attributes:
        DECIMAL (str) : SI prefixes, base 1000 - B, kB, MB, GB, TB, PB, EB
        BINARY (str)  : IEC prefixes, base 1024 - B, KiB, MiB, GiB, TiB, PiB, EiB
    """
    DECIMAL = "decimal"
    BINARY = "binary"


# @formatter:off

class UnitsConf:
    """
    Unit ladder constants.

    Ladders map a ladder index to a unit symbol; index ``i`` has the scale factor ``BASES[system] ** i``.
    Index 0 is always bytes. ``MAX_INDEX`` is the top of both ladders: byte counts beyond it stay
    in the largest unit instead of inventing ZB/ZiB symbols.
    """
    BASES = {
        UnitSystem.DECIMAL: 1000,
        UnitSystem.BINARY: 1024,
    }

    LADDERS = {
        UnitSystem.DECIMAL: FrozenBiMap({
            0: "B", 1: "kB", 2: "MB", 3: "GB", 4: "TB", 5: "PB", 6: "EB",
        }),
        UnitSystem.BINARY: FrozenBiMap({
            0: "B", 1: "KiB", 2: "MiB", 3: "GiB", 4: "TiB", 5: "PiB", 6: "EiB",
        }),
    }

    MAX_INDEX = 6

# @formatter:on


# Methods --------------------------------------------------------------------------------------------------------------

def as_unit_system(unit_system: UnitSystem | str) -> UnitSystem:
    """
    Validate and return a UnitSystem member from a member or its string value.

    Raises:
        InvalidConfigurationError: unknown unit system name.
    """
    if isinstance(unit_system, UnitSystem):
        return unit_system
    if isinstance(unit_system, str):
        try:
            return UnitSystem(unit_system.lower())
        except ValueError:
            pass
        raise InvalidConfigurationError(
            f"Invalid unit system {fmt_value(unit_system)}, expected one of {fmt_choices(UnitSystem)}"
        )
    raise InvalidConfigurationError(f"unit_system must be a UnitSystem or str, got {fmt_type(unit_system)}")


def base_numeric(unit_system: UnitSystem | str) -> int:
    """Scale factor between adjacent units: 1000 for DECIMAL, 1024 for BINARY."""
    return UnitsConf.BASES[as_unit_system(unit_system)]


def ladder(unit_system: UnitSystem | str) -> tuple[str, ...]:
    """
    Ordered unit symbols of a unit system, from bytes upwards.

    Examples:
        >>> ladder("binary")
        ('B', 'KiB', 'MiB', 'GiB', 'TiB', 'PiB', 'EiB')
    """
    return tuple(UnitsConf.LADDERS[as_unit_system(unit_system)].values())


def ladder_size(unit_system: UnitSystem | str) -> int:
    """Number of entries in the ladder of a unit system."""
    return len(UnitsConf.LADDERS[as_unit_system(unit_system)])


def scale_factor(unit_system: UnitSystem | str, index: int) -> int:
    """
    Exact scale factor of the unit at ladder index: ``base_numeric(unit_system) ** index``.

    Raises:
        InvalidConfigurationError: index outside the ladder.
    """
    _check_index(index)
    return base_numeric(unit_system) ** index


def unit_symbol(unit_system: UnitSystem | str, index: int) -> str:
    """Unit symbol at ladder index."""
    _check_index(index)
    return UnitsConf.LADDERS[as_unit_system(unit_system)][index]


def unit_index(unit_system: UnitSystem | str, symbol: str) -> int:
    """
    Ladder index of a unit symbol, symbols are case-sensitive: 'kB' is valid, 'KB' is not.

    Raises:
        InvalidConfigurationError: symbol is not in the ladder of unit_system.
    """
    unit_system = as_unit_system(unit_system)
    units = UnitsConf.LADDERS[unit_system]
    if not isinstance(symbol, str) or not units.has_value(symbol):
        raise InvalidConfigurationError(
            f"Invalid {unit_system} unit {fmt_value(symbol)}, expected one of {fmt_choices(units.values())}"
        )
    return units.get_key(symbol)


def parse_unit(unit: int | str, unit_system: UnitSystem | str) -> int:
    """
    Resolve a unit given as a ladder index or a unit symbol into a ladder index.

    Examples:
        >>> parse_unit("MiB", "binary")
        2
        >>> parse_unit(3, "decimal")
        3
    """
    if isinstance(unit, bool):
        raise InvalidConfigurationError(f"Unit must be an int index or a str symbol, got {fmt_value(unit)}")
    if isinstance(unit, int):
        _check_index(unit)
        return unit
    if isinstance(unit, str):
        return unit_index(unit_system, unit)
    raise InvalidConfigurationError(f"Unit must be an int index or a str symbol, got {fmt_type(unit)}")


def find_unit_system(symbol: str) -> UnitSystem:
    """
    Return the unit system owning a unit symbol.

    'B' belongs to both ladders and resolves to DECIMAL.

    Raises:
        InvalidConfigurationError: symbol belongs to no ladder.
    """
    for unit_system, units in UnitsConf.LADDERS.items():
        if isinstance(symbol, str) and units.has_value(symbol):
            return unit_system
    known = [s for units in UnitsConf.LADDERS.values() for s in units.values()]
    raise InvalidConfigurationError(
        f"Unknown unit {fmt_value(symbol)}, expected one of {fmt_choices(dict.fromkeys(known))}"
    )


def natural_exponent(raw: int, unit_system: UnitSystem | str) -> int:
    """
    Largest ladder index e such that ``base ** e <= raw``, clamped to the top of the ladder.

    Uses exact integer arithmetic, so exact powers of the base land on their own unit
    (1000**5 is 1 PB, never 1000 TB). Returns 0 for raw < base, including raw == 0.
    """
    base = base_numeric(unit_system)
    exponent = 0
    scale = base
    while exponent < UnitsConf.MAX_INDEX and scale <= raw:
        exponent += 1
        scale *= base
    return exponent


def _check_index(index: int):
    if isinstance(index, bool) or not isinstance(index, int):
        raise InvalidConfigurationError(f"Unit index must be an int, got {fmt_type(index)}")
    if not 0 <= index <= UnitsConf.MAX_INDEX:
        raise InvalidConfigurationError(
            f"Unit index {fmt_value(index)} out of ladder range [0, {UnitsConf.MAX_INDEX}]"
        )


# Module Sanity Checks -------------------------------------------------------------------------------------------------

# Ensure both ladders share their index range and start at bytes.
for _system, _units in UnitsConf.LADDERS.items():
    if tuple(_units.keys()) != tuple(range(UnitsConf.MAX_INDEX + 1)) or _units[0] != "B":
        raise AssertionError(
            f"Configuration Error: the {_system} ladder must map indices 0..{UnitsConf.MAX_INDEX} and start at 'B'."
        )
if set(UnitsConf.BASES) != set(UnitsConf.LADDERS):
    raise AssertionError("Configuration Error: UnitsConf.BASES and UnitsConf.LADDERS must cover the same systems.")
