"""
Sentinel objects for distinguishing between unset values, None, and other states.

Sentinels:
    UNSET: An optional argument the caller did not provide (distinct from None)
    MISSING: A declared member that holds no value, such as an unassigned __slots__ entry

All sentinels are singletons compared with 'is'. Both implement the PrettyPrinter
capability, so a rendered sentinel shows its name instead of an empty record.
"""

from typing import Any, Final

__all__ = [
    'UNSET',
    'MISSING',
    'UnsetType',
    'MissingType',
    'ifunset',
]


# Base Sentinel --------------------------------------------------------------------------------------------------------

class _SentinelBase:
    """
    Base class for all sentinel objects.

    Subclasses are singletons: every instantiation returns the same object.
    """
    __slots__ = ('_name',)

    _instances: dict[type, "_SentinelBase"] = {}

    def __new__(cls) -> "_SentinelBase":
        """Ensures singleton behavior per subclass."""
        if cls not in _SentinelBase._instances:
            _SentinelBase._instances[cls] = super().__new__(cls)
        return _SentinelBase._instances[cls]

    def __repr__(self) -> str:
        return f'<{self._name}>'

    def __eq__(self, other: Any) -> bool:
        return self is other

    def __hash__(self) -> int:
        return id(self)

    def __bool__(self) -> bool:
        """Sentinels are falsy."""
        return False

    def __reduce__(self) -> tuple:
        """Ensure pickling returns the singleton instance."""
        return (self.__class__, ())

    def pretty_print(self) -> str:
        return repr(self)


# Sentinel Types -------------------------------------------------------------------------------------------------------

class UnsetType(_SentinelBase):
    """Sentinel type for UNSET, a keyword argument left at its default."""
    __slots__ = ()

    def __init__(self) -> None:
        self._name = "UNSET"


class MissingType(_SentinelBase):
    """Sentinel type for MISSING, a declared member that was never assigned."""
    __slots__ = ()

    def __init__(self) -> None:
        self._name = "MISSING"


# Sentinel Instances ---------------------------------------------------------------------------------------------------

UNSET: Final[UnsetType] = UnsetType()
MISSING: Final[MissingType] = MissingType()


# Helper Functions -----------------------------------------------------------------------------------------------------

def ifunset(value: Any, default: Any) -> Any:
    """
    Return default if value is UNSET, otherwise return value.

    Example:
        >>> ifunset(UNSET, default="\\t")
        '\\t'
        >>> ifunset("  ", default="\\t")
        '  '
    """
    return default if value is UNSET else value
