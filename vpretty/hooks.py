"""
Custom-format hook.

A value can opt out of structural traversal by rendering itself. Two sources are
consulted, in order, and at most one is used per value:

1. A pretty_print() method returning the display string (the PrettyPrinter protocol).
2. When PrettyOptions.stringify is on, a __str__ defined by the value's type or one
   of its bases outside the builtins module (Decimal, Path, datetime, Enum, ...).

The returned string is written verbatim by both renderers.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any, Protocol, runtime_checkable

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type
from .options import PrettyOptions


# Classes --------------------------------------------------------------------------------------------------------------


@runtime_checkable
class PrettyPrinter(Protocol):
    """Protocol for values that provide their own rendered form."""

    def pretty_print(self) -> str:
        """Return a string, overriding the structural rendering of this value."""
        ...


# Methods --------------------------------------------------------------------------------------------------------------


def custom_format(obj: Any, opts: PrettyOptions) -> str | None:
    """
    Return the self-rendered form of obj, or None if obj should be traversed.

    Classes are never self-rendered, even if they define pretty_print() or __str__:
    only instances are.

    Raises:
        TypeError: If pretty_print() returns something other than a str.
    """
    if isinstance(obj, type):
        return None

    if isinstance(obj, PrettyPrinter):
        text = obj.pretty_print()
        if not isinstance(text, str):
            raise TypeError(f"{fmt_type(obj)}.pretty_print() must return a str, but got {fmt_type(text)}")
        return text

    if opts.stringify and has_custom_str(obj):
        return str(obj)

    return None


def has_custom_str(obj: Any) -> bool:
    """
    Return True if the type of obj overrides __str__ outside the builtins.

    Builtin types (str, int, list, BaseException, ...) and classes that only define
    __repr__ report False.
    """
    for cls in type(obj).__mro__:
        if "__str__" in cls.__dict__:
            return cls is not object and cls.__module__ != "builtins"
    return False
