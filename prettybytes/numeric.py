"""
Numeric helpers for byte counts: input normalization, the rounding rule, and the
large-integer-as-string codec used to carry 64-bit values through double-only transports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
import operator
import re
import warnings
from decimal import Decimal
from fractions import Fraction

# Local ----------------------------------------------------------------------------------------------------------------
from .tools import fmt_type, fmt_value

U64_MAX = 2 ** 64 - 1

# Largest integer every IEEE-754 double consumer (e.g. JavaScript) holds exactly is 2**53 - 1
FLOAT_EXACT_MAX = 2 ** 53

_UNSIGNED_DIGITS = re.compile(r"[0-9]+")
_SIGNED_DIGITS = re.compile(r"-?[0-9]+")


def std_byte_count(value, *, signed: bool = False, stacklevel: int = 2) -> int:
    """
    Normalize a byte count to a Python int within the 64-bit range.

    Parameters
    ----------
    value : int, float, Decimal, Fraction or any type implementing __index__
        The byte count. Exact integer types pass unchanged, integer-valued Decimal and
        Fraction convert exactly, finite floats are floored (a fractional byte rounds down).

    signed : bool, default False
        If False the accepted range is [0, 2**64 - 1]; if True it is
        [-(2**64 - 1), 2**64 - 1], magnitudes stay within 64 bits.

    stacklevel : int, default 2
        Passed on to warnings.warn as seen from this function; wrappers add their own
        frames so the warning points at the code that supplied the float.

    Returns
    -------
    int

    Raises
    ------
    TypeError
        For bool, None, str and other non-numeric types.
    ValueError
        For NaN, infinities and values out of range.

    Warns
    -----
    RuntimeWarning
        For floats with magnitude >= 2**53: the float already lost the exact byte count.

    Examples
    --------
    >>> std_byte_count(1536)
    1536
    >>> std_byte_count(5.9)
    5
    >>> std_byte_count(Decimal("1e3"))
    1000
    """
    if isinstance(value, bool):
        raise TypeError(f"byte count must be an integer number, boolean values not supported: {fmt_value(value)}")

    if isinstance(value, int):
        count = value
    elif isinstance(value, float):
        count = _float_to_count(value, stacklevel + 1)
    elif isinstance(value, (Decimal, Fraction)):
        if isinstance(value, Decimal) and not value.is_finite():
            raise ValueError(f"byte count must be finite, got {fmt_value(value)}")
        count = math.floor(value)
    elif hasattr(value, "__index__"):
        # NumPy integers and similar exact integer types
        count = operator.index(value)
    else:
        raise TypeError(
            f"byte count must be int, float, Decimal, Fraction or implement __index__, "
            f"got {fmt_type(value)}"
        )

    lower = -U64_MAX if signed else 0
    if not lower <= count <= U64_MAX:
        raise ValueError(f"byte count {count} out of range [{lower}, {U64_MAX}]")
    return count


def round_half_even(value: int | float | Fraction, digits: int | None) -> Fraction:
    """
    Round value to a fixed number of digits after the decimal point, ties to even.

    The rounding is performed on the exact rational value, not on a float, so a tie
    such as 999.995 is seen as a tie and the result is identical on every platform.
    digits=None returns the value unrounded.

    Examples
    --------
    >>> round_half_even(Fraction(1536, 1024), 0)
    Fraction(2, 1)
    >>> round_half_even(Fraction(2500, 1000), 0)
    Fraction(2, 1)
    >>> round_half_even(Fraction(1125, 1000), 2)
    Fraction(28, 25)
    """
    if isinstance(value, float):
        value = Fraction(value)
    elif not isinstance(value, Fraction):
        value = Fraction(value)

    if digits is None:
        return value
    if isinstance(digits, bool) or not isinstance(digits, int) or digits < 0:
        raise ValueError(f"digits must be a non-negative int or None, got {fmt_value(digits)}")

    # Fraction.__round__ with ndigits rounds half to even in exact arithmetic
    return round(value, digits)


def int_to_str(value: int) -> str:
    """
    Encode an integer as a canonical decimal string for transports limited to doubles.

    Examples
    --------
    >>> int_to_str(18446744073709551615)
    '18446744073709551615'
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"int expected, got {fmt_type(value)}")
    return str(value)


def str_to_int(text: str, *, min_value: int = 0, max_value: int = U64_MAX) -> int:
    """
    Decode a decimal string produced by int_to_str, exactly.

    Only ASCII digits with an optional leading '-' (when min_value < 0) are accepted:
    no whitespace, '+' sign, underscores or non-ASCII digits, unlike int().
    Leading zeros are accepted.

    Raises
    ------
    TypeError
        text is not a str.
    ValueError
        Malformed text or a value outside [min_value, max_value].
    """
    if not isinstance(text, str):
        raise TypeError(f"str expected, got {fmt_type(text)}")

    pattern = _SIGNED_DIGITS if min_value < 0 else _UNSIGNED_DIGITS
    if not pattern.fullmatch(text):
        raise ValueError(f"not a valid base-10 integer string: {fmt_value(text)}")

    # Cap the digit count before converting to keep int() cheap on hostile input
    max_digits = len(str(max(abs(min_value), abs(max_value))))
    if len(text.lstrip("-").lstrip("0")) > max_digits:
        raise ValueError(f"integer string out of range [{min_value}, {max_value}]: {fmt_value(text)}")

    value = int(text)
    if not min_value <= value <= max_value:
        raise ValueError(f"integer string out of range [{min_value}, {max_value}]: {fmt_value(text)}")
    return value


def _float_to_count(value: float, stacklevel: int) -> int:
    if math.isnan(value):
        raise ValueError("NaN byte counts are not supported")
    if math.isinf(value):
        raise ValueError("Infinite byte counts are not supported")
    if abs(value) >= FLOAT_EXACT_MAX:
        warnings.warn(
            f"float byte count {value!r} exceeds 2**53 and may not be exact, pass an int instead",
            RuntimeWarning,
            stacklevel=stacklevel,
        )
    return math.floor(value)
