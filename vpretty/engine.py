"""
Traversal engine shared by the text and graph renderers.

Every value is sorted into one of a closed set of shapes. Scalars, placeholders and
self-rendered values are leaves; sequences, maps and records are composites whose
children are enumerated in a fixed order; references are transparent and resolve to
the value they point at. Renderers subclass Traversal and supply the per-shape output.

Composite identity is id(value). Python objects are always reached by reference, so a
value that contains itself is a true cycle, while a shallow copy of it is not: the copy
renders one level deeper before meeting the original.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import asyncio
import collections.abc as abc
import ctypes
import functools
import inspect
import mmap
import numbers
import queue
import types
import weakref

from dataclasses import fields, is_dataclass
from decimal import Decimal
from enum import StrEnum, unique
from typing import Any, NamedTuple

# Local ----------------------------------------------------------------------------------------------------------------
from .errors import PrettyWriteError
from .formatters import fmt_bool, fmt_complex, fmt_float, fmt_int, fmt_str, fmt_type
from .hooks import custom_format
from .options import PrettyOptions
from .sentinels import MISSING
from .utils import class_name, is_private

NIL = "nil"
CYCLE = "<cycle>"

_CHANNEL_TYPES = (
    types.GeneratorType,
    types.CoroutineType,
    types.AsyncGeneratorType,
    abc.Iterator,
    abc.AsyncIterator,
    queue.Queue,
    queue.SimpleQueue,
    asyncio.Queue,
)
_CALLABLE_TYPES = (type, functools.partial, types.MethodWrapperType)
_POINTER_TYPES = (memoryview, mmap.mmap, ctypes._Pointer, ctypes.c_void_p)


# Classes --------------------------------------------------------------------------------------------------------------


@unique
class Shape(StrEnum):
    """Shape kinds a value can be classified into."""
    INVALID = "invalid"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    COMPLEX = "complex"
    STRING = "string"
    SEQUENCE = "sequence"
    REFERENCE = "reference"
    RECORD = "record"
    MAP = "map"
    CHANNEL = "channel"
    CALLABLE = "callable"
    POINTER = "pointer"


COMPOSITE_SHAPES = frozenset({Shape.SEQUENCE, Shape.MAP, Shape.RECORD})

_LEAF_FORMATTERS = {
    Shape.INVALID: lambda _: NIL,
    Shape.BOOL: fmt_bool,
    Shape.INT: fmt_int,
    Shape.FLOAT: fmt_float,
    Shape.COMPLEX: fmt_complex,
    Shape.STRING: fmt_str,
    Shape.CHANNEL: lambda _: "<chan>",
    Shape.CALLABLE: lambda _: "<function>",
    Shape.POINTER: lambda _: "<unsafe pointer>",
}


class Member(NamedTuple):
    """A record member in declaration order."""
    name: str
    value: Any
    hidden: bool


class Traversal:
    """
    Depth-first walk over an arbitrary value.

    visit() consults the custom-format hook, classifies the value and routes it to
    visit_leaf() or, for composites, through visit_composite() to visit_sequence(),
    visit_map() or visit_record(). Subclasses implement those four methods and may
    wrap visit_composite() to track identities.

    All output goes through write(), which turns a sink failure into PrettyWriteError.
    The traversal never mutates the value it walks.
    """

    def __init__(self, out: Any, opts: PrettyOptions):
        self.out = out
        self.opts = opts

    def write(self, text: str) -> None:
        """
        Write text to the output sink.

        Raises:
            PrettyWriteError: If the sink raises OSError or ValueError.
        """
        try:
            self.out.write(text)
        except (OSError, ValueError) as exc:
            raise PrettyWriteError(f"cannot write to {fmt_type(self.out)}: {exc}") from exc

    def type_tag(self, obj: Any) -> str:
        """Type name shown for records, maps and sequence nodes."""
        return class_name(obj, fully_qualified=self.opts.fully_qualified)

    def visit(self, obj: Any, indent: str = "") -> Any:
        text = custom_format(obj, self.opts)
        if text is not None:
            return self.visit_leaf(text, indent)

        shape = classify(obj)
        if shape is Shape.REFERENCE:
            # Transparent: the referent renders in place of the reference
            return self.visit(deref(obj), indent)
        if shape in COMPOSITE_SHAPES:
            return self.visit_composite(obj, shape, indent)
        return self.visit_leaf(leaf_text(obj, shape), indent)

    def visit_composite(self, obj: Any, shape: Shape, indent: str) -> Any:
        if shape is Shape.SEQUENCE:
            return self.visit_sequence(obj, indent)
        if shape is Shape.MAP:
            return self.visit_map(obj, indent)
        return self.visit_record(obj, indent)

    def visit_leaf(self, text: str, indent: str) -> Any:
        raise NotImplementedError

    def visit_sequence(self, obj: Any, indent: str) -> Any:
        raise NotImplementedError

    def visit_map(self, obj: Any, indent: str) -> Any:
        raise NotImplementedError

    def visit_record(self, obj: Any, indent: str) -> Any:
        raise NotImplementedError


# Methods --------------------------------------------------------------------------------------------------------------


def classify(obj: Any) -> Shape:
    """
    Classify a value into its Shape.

    Order matters: bool before int, named tuples and dataclasses before sequences,
    pointers (memoryview is a Sequence) before sequences, channels and callables
    before the generic record fallback. Anything not matched is a record.

    Examples:
        >>> classify(None)
        <Shape.INVALID: 'invalid'>
        >>> classify(True)
        <Shape.BOOL: 'bool'>
        >>> classify((1, 2))
        <Shape.SEQUENCE: 'sequence'>
    """
    if obj is None:
        return Shape.INVALID
    if isinstance(obj, bool):
        return Shape.BOOL
    if isinstance(obj, numbers.Integral):
        return Shape.INT
    if isinstance(obj, (numbers.Real, Decimal)):
        return Shape.FLOAT
    if isinstance(obj, numbers.Complex):
        return Shape.COMPLEX
    if isinstance(obj, str):
        return Shape.STRING
    if isinstance(obj, weakref.ref):
        return Shape.REFERENCE
    if isinstance(obj, _POINTER_TYPES):
        return Shape.POINTER
    if isinstance(obj, _CHANNEL_TYPES):
        return Shape.CHANNEL
    if inspect.isroutine(obj) or isinstance(obj, _CALLABLE_TYPES):
        return Shape.CALLABLE
    if _is_named_tuple(obj) or is_dataclass(obj):
        return Shape.RECORD
    if isinstance(obj, abc.Mapping):
        return Shape.MAP
    if isinstance(obj, (abc.Sequence, abc.Set, abc.MappingView)):
        return Shape.SEQUENCE
    return Shape.RECORD


def deref(ref: weakref.ref) -> Any:
    """Return the referent of a reference, or None if it no longer exists."""
    return ref()


def leaf_text(obj: Any, shape: Shape) -> str:
    """Render a non-composite value."""
    return _LEAF_FORMATTERS[shape](obj)


def order_key(key: Any) -> tuple:
    """
    Sort key giving a total order over map keys and set elements.

    Booleans come first (false before true), then numbers by value with NaN ahead of
    all other numbers, then strings by code point, then bytes. Keys of any other type
    sort last and keep their relative iteration order, since the sort is stable.

    Examples:
        >>> sorted([4, 1, 2], key=order_key)
        [1, 2, 4]
        >>> sorted(["b", True, 1.5, False], key=order_key)
        [False, True, 1.5, 'b']
    """
    if isinstance(key, bool):
        return (0, int(key))
    if isinstance(key, (numbers.Real, Decimal)):
        if key != key:
            return (1, 0, 0)
        return (1, 1, key)
    if isinstance(key, str):
        return (2, key)
    if isinstance(key, (bytes, bytearray)):
        return (3, bytes(key))
    return (4,)


def sequence_items(obj: Any, opts: PrettyOptions) -> list:
    """Elements of a sequence shape; sets and set-like views are sorted with order_key()."""
    if opts.sort_keys and isinstance(obj, abc.Set):
        return sorted(obj, key=order_key)
    return list(obj)


def map_items(obj: abc.Mapping, opts: PrettyOptions) -> list[tuple[Any, Any]]:
    """Key-value pairs of a mapping, sorted by key with order_key() unless disabled."""
    items = list(obj.items())
    if opts.sort_keys:
        items.sort(key=lambda kv: order_key(kv[0]))
    return items


def record_members(obj: Any, opts: PrettyOptions) -> list[Member]:
    """
    Members of a record in declaration order.

    Sources:
        - Named tuples: the tuple fields.
        - Dataclasses: the declared fields. A field with repr=False is hidden.
        - Exceptions: args, followed by the members of other objects.
        - Other objects: __slots__ from the base class down, then the instance __dict__.
          Unassigned slots are skipped.

    A member whose name starts with an underscore is hidden unless
    opts.include_private is set, which also reveals repr=False dataclass fields.
    """
    def hidden(name: str, shown: bool = True) -> bool:
        return not opts.include_private and (is_private(name) or not shown)

    if _is_named_tuple(obj):
        return [Member(name, value, hidden(name)) for name, value in zip(obj._fields, obj)]

    if is_dataclass(obj):
        members = []
        for f in fields(obj):
            value = getattr(obj, f.name, MISSING)
            if value is not MISSING:
                members.append(Member(f.name, value, hidden(f.name, f.repr)))
        return members

    members = []
    names = set()
    if isinstance(obj, BaseException):
        # The payload lives in args, outside __dict__
        names.add("args")
        members.append(Member("args", obj.args, False))

    for cls in reversed(type(obj).__mro__):
        slots = cls.__dict__.get("__slots__", ())
        if isinstance(slots, str):
            slots = (slots,)
        for slot in slots:
            if slot in ("__dict__", "__weakref__") or slot in names:
                continue
            value = getattr(obj, _mangle(cls, slot), MISSING)
            if value is not MISSING:
                names.add(slot)
                members.append(Member(slot, value, hidden(slot)))

    attrs = getattr(obj, "__dict__", None)
    if isinstance(attrs, abc.Mapping):
        for name, value in attrs.items():
            if name not in names:
                members.append(Member(name, value, hidden(name)))
    return members


# Private Methods ------------------------------------------------------------------------------------------------------


def _is_named_tuple(obj: Any) -> bool:
    return isinstance(obj, tuple) and isinstance(getattr(type(obj), "_fields", None), tuple)


def _mangle(cls: type, name: str) -> str:
    """Attribute name under which a class-private slot is stored."""
    if name.startswith("__") and not name.endswith("__"):
        return f"_{cls.__name__.lstrip('_')}{name}"
    return name
