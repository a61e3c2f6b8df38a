"""
Vpretty utilities shared across the package.

Contains functions used by multiple modules to avoid circular imports.
"""

# Standard library -----------------------------------------------------------------------------------------------------
from typing import Any


# Methods --------------------------------------------------------------------------------------------------------------


def class_name(obj: Any, fully_qualified: bool = False) -> str:
    """
    Get the type tag of a value as shown in rendered output.

    Returns the class name whether given an instance or the class itself, so that
    `class_name(Point(1, 2))` and `class_name(Point)` both return 'Point'. Builtin
    names are never qualified: a dict always renders as 'dict'.

    Parameters:
        obj (Any): An object or a class.
        fully_qualified (bool): If true, prefix user classes with their module name.

    Returns:
        str: The type tag.

    Examples:
        >>> class_name({})
        'dict'

        >>> class Node: ...
        >>> class_name(Node())
        'Node'
        >>> class_name(Node, fully_qualified=True)
        '__main__.Node'
    """
    cls = obj if isinstance(obj, type) else type(obj)
    name = cls.__name__

    if not fully_qualified or cls.__module__ == "builtins":
        return name
    return f"{cls.__module__}.{name}"


def is_private(name: str) -> bool:
    """Return True if an attribute name is private by Python convention."""
    return name.startswith("_")
