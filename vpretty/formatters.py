"""
Leaf value formatters.

Renders the scalar shapes exactly as they appear in vpretty output: booleans as
true/false, integers in decimal, floats and complex numbers in fixed point with
six fractional digits, and strings as double-quoted literals with backslash and
numeric escapes. Also provides the short type-value tokens used in
exception messages across the package.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import math
from decimal import Decimal
from typing import Any

# Local ----------------------------------------------------------------------------------------------------------------
from .utils import class_name

# Escapes for characters with a dedicated backslash form
_ESCAPES = {
    "\a": "\\a",
    "\b": "\\b",
    "\f": "\\f",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\v": "\\v",
    "\\": "\\\\",
    '"': '\\"',
}


# Methods --------------------------------------------------------------------------------------------------------------


def fmt_bool(value: bool) -> str:
    """Format a boolean as `true` or `false`."""
    return "true" if value else "false"


def fmt_int(value: Any) -> str:
    """
    Format an integral value in decimal.

    Goes through Decimal, which is exact and not bound by the int-to-str digit limit.

    Examples:
        >>> fmt_int(-42)
        '-42'
        >>> len(fmt_int(10**5000))
        5001
    """
    return format(Decimal(int(value)), "f")


def fmt_float(value: Any) -> str:
    """
    Format a real number in fixed point with six fractional digits.

    Infinities and NaN use the spelling `+Inf`, `-Inf` and `NaN`. A real too large
    for a float, such as a huge Fraction, saturates to an infinity of its sign.

    Examples:
        >>> fmt_float(1.3838)
        '1.383800'
        >>> fmt_float(float("-inf"))
        '-Inf'
    """
    try:
        x = float(value)
    except OverflowError:
        return "+Inf" if value > 0 else "-Inf"
    if math.isnan(x):
        return "NaN"
    if math.isinf(x):
        return "+Inf" if x > 0 else "-Inf"
    return f"{x:f}"


def fmt_complex(value: Any) -> str:
    """
    Format a complex number as `(real+imagi)`.

    A `+` joins both parts unless the imaginary part already renders with a
    leading minus sign.

    Examples:
        >>> fmt_complex(3 + 5j)
        '(3.000000+5.000000i)'
        >>> fmt_complex(1 - 2j)
        '(1.000000-2.000000i)'
    """
    z = complex(value)
    real = fmt_float(z.real)
    imag = fmt_float(z.imag)
    if imag.startswith(("-", "+")):
        return f"({real}{imag}i)"
    return f"({real}+{imag}i)"


def fmt_str(value: str) -> str:
    """
    Quote a string for display.

    The result is wrapped in double quotes. Backslash, the double quote and the
    common control characters get their backslash escape. Other non-printable
    code points are escaped numerically: `\\xNN` below U+0020 and for U+007F,
    `\\uNNNN` in the Basic Multilingual Plane, `\\UNNNNNNNN` above it. Printable
    non-ASCII characters are kept as is.

    Examples:
        >>> print(fmt_str('say "hi"\\n'))
        "say \\"hi\\"\\n"
        >>> print(fmt_str("\\x1b[0m"))
        "\\x1b[0m"
    """
    parts = ['"']
    for ch in value:
        if ch in _ESCAPES:
            parts.append(_ESCAPES[ch])
        elif ch.isprintable():
            parts.append(ch)
        else:
            cp = ord(ch)
            if cp < 0x20 or cp == 0x7F:
                parts.append(f"\\x{cp:02x}")
            elif cp < 0x10000:
                parts.append(f"\\u{cp:04x}")
            else:
                parts.append(f"\\U{cp:08x}")
    parts.append('"')
    return "".join(parts)


def fmt_type(obj: Any) -> str:
    """
    Format type information for exception messages.

    Examples:
        >>> fmt_type(42)
        '<int>'
        >>> fmt_type(int)
        '<int>'
    """
    return f"<{class_name(obj)}>"


def fmt_value(obj: Any, *, max_repr: int = 120, ellipsis: str = "...") -> str:
    """
    Format a single value as a type-value token for exception messages.

    Handles broken __repr__ and overlong representations gracefully.

    Examples:
        >>> fmt_value(42)
        '<int: 42>'
        >>> fmt_value("hello world", max_repr=5)
        "<str: 'hel...>"
    """
    repr_ = _safe_repr(obj)
    if max_repr > 0 and len(repr_) > max_repr:
        repr_ = repr_[:max_repr - 1] + ellipsis
    return f"<{class_name(obj)}: {repr_}>"


# Private Methods ------------------------------------------------------------------------------------------------------


def _safe_repr(obj: Any) -> str:
    """
    Defensive repr() call - handle broken __repr__ methods gracefully
    """
    try:
        repr_ = repr(obj)
    except Exception as e:
        repr_ = f"<{type(obj).__name__} object (repr failed: {type(e).__name__})>"
    return repr_
