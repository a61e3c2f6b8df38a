"""
Rendering configuration.

A PrettyOptions instance is passed explicitly to every render call. There is no
module-level default to mutate; callers that want different defaults keep their
own instance and derive variants with merge().
"""

# Standard library -----------------------------------------------------------------------------------------------------
from dataclasses import dataclass
from typing import Self

# Local ----------------------------------------------------------------------------------------------------------------
from .formatters import fmt_type, fmt_value
from .sentinels import UNSET, UnsetType, ifunset


# Classes --------------------------------------------------------------------------------------------------------------


@dataclass(frozen=True)
class PrettyOptions:
    """
    Options controlling the text and graph renderers.

    Attributes:
        indent: Indent unit appended once per nesting level. Default is one tab.
        ellipsis: Marker line written in place of hidden record members.
        stringify: If True, a value whose type defines its own __str__ (outside the
            builtins) renders as str(value) instead of being traversed.
        sort_keys: If True, map entries and set elements are emitted in sorted key
            order. If False, they keep their iteration order.
        include_private: If True, members whose names start with an underscore are
            rendered instead of elided.
        fully_qualified: If True, user type tags include the module name.

    Examples:
        >>> opts = PrettyOptions(indent="  ")
        >>> opts.merge(include_private=True).indent
        '  '

    Raises:
        TypeError: If indent or ellipsis is not a str, or a flag is not a bool.
    """

    indent: str = "\t"
    ellipsis: str = "…"
    stringify: bool = True
    sort_keys: bool = True
    include_private: bool = False
    fully_qualified: bool = False

    def __post_init__(self):
        """Validate fields"""
        for name in ("indent", "ellipsis"):
            val = getattr(self, name)
            if not isinstance(val, str):
                raise TypeError(f"PrettyOptions.{name} must be a str, but got {fmt_type(val)}")

        for name in ("stringify", "sort_keys", "include_private", "fully_qualified"):
            val = getattr(self, name)
            if not isinstance(val, bool):
                raise TypeError(f"PrettyOptions.{name} must be a bool, but got {fmt_value(val)}")

    @classmethod
    def ascii(cls) -> Self:
        """
        ASCII-only output: four-space indent and a three-dot ellipsis.

        Use when output goes to logs or terminals without tab stops or Unicode.
        """
        return cls(indent="    ", ellipsis="...")

    @classmethod
    def debug(cls) -> Self:
        """
        Show everything: private members are rendered and custom __str__ is ignored.

        Objects with a pretty_print() method still render through it.
        """
        return cls(stringify=False, include_private=True)

    def merge(self,
              indent: str | UnsetType = UNSET,
              ellipsis: str | UnsetType = UNSET,
              stringify: bool | UnsetType = UNSET,
              sort_keys: bool | UnsetType = UNSET,
              include_private: bool | UnsetType = UNSET,
              fully_qualified: bool | UnsetType = UNSET,
              ) -> "PrettyOptions":
        """
        Create a new PrettyOptions instance with merged configuration options.

        Parameters not provided (UNSET) are inherited from the current instance.

        Returns:
            New PrettyOptions instance with merged configuration.
        """
        return PrettyOptions(
            indent=ifunset(indent, self.indent),
            ellipsis=ifunset(ellipsis, self.ellipsis),
            stringify=ifunset(stringify, self.stringify),
            sort_keys=ifunset(sort_keys, self.sort_keys),
            include_private=ifunset(include_private, self.include_private),
            fully_qualified=ifunset(fully_qualified, self.fully_qualified),
        )


# Methods --------------------------------------------------------------------------------------------------------------


def resolve_options(opts: PrettyOptions | None) -> PrettyOptions:
    """
    Return opts, or the default PrettyOptions() if opts is None.

    Raises:
        TypeError: If opts is neither None nor a PrettyOptions instance.
    """
    if opts is None:
        return PrettyOptions()
    if not isinstance(opts, PrettyOptions):
        raise TypeError(f"opts must be a PrettyOptions instance, but found {fmt_type(opts)}")
    return opts
