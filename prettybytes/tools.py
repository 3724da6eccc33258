#
# PrettyBytes Message Formatting Tools
#

# Standard library -----------------------------------------------------------------------------------------------------
from enum import Enum
from typing import Any, Iterable


# Methods --------------------------------------------------------------------------------------------------------------

def fmt_type(obj: Any) -> str:
    """Format the type of an object (or a type itself) for exception messages.

    Examples:
        >>> fmt_type(42)
        '<type: int>'
        >>> fmt_type(float)
        '<type: float>'
    """
    target_type = obj if isinstance(obj, type) else type(obj)
    type_name = getattr(target_type, "__name__", str(target_type))
    return f"<type: {type_name}>"


def fmt_value(x: Any, *, max_repr: int = 80) -> str:
    """
    Format a single value as a type-value pair for exception messages.

    Long reprs are truncated to ``max_repr`` characters, broken ``__repr__`` methods
    fall back to a placeholder instead of raising. Inner '>' is escaped so the token
    stays unambiguous inside the angle brackets.

    Examples:
        >>> fmt_value(1024)
        '<int: 1024>'
        >>> fmt_value("abc")
        "<str: 'abc'>"
        >>> fmt_value("9" * 100, max_repr=8)
        "<str: '9999'...>"
    """
    t = type(x).__name__
    try:
        base_repr = repr(x)
    except Exception as e:
        base_repr = f"<{t} object (repr failed: {type(e).__name__})>"

    base_repr = base_repr.replace(">", "\\>")
    return f"<{t}: {_fmt_truncate(base_repr, max_repr)}>"


def fmt_choices(choices: Iterable[Any]) -> str:
    """Format allowed values as a compact list, e.g. ``'B', 'kB', 'MB'``."""
    return ", ".join(repr(c.value if isinstance(c, Enum) else c) for c in choices)


def _fmt_truncate(s: str, max_len: int, ellipsis: str = "...") -> str:
    """
    Truncate s to at most max_len characters and append the ellipsis.

    Quoted reprs keep their quotes, the ellipsis goes after the closing quote.
    """
    if len(s) <= max_len:
        return s

    if len(s) >= 2 and s[0] in ("'", '"') and s[-1] == s[0]:
        inner = s[1:1 + max(1, max_len - 4)]
        return f"{s[0]}{inner}{s[0]}{ellipsis}"

    return s[:max(1, max_len)] + ellipsis
