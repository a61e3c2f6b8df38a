"""
Text renderer.

Produces a lightweight, brace-delimited rendering of any value: records as
`Name {` ... `}` with one `field: value` line per member, sequences in brackets,
maps with sorted keys. Commas and most type information are elided. The intent is
to show a data structure, such as an abstract syntax tree, without much clutter.

Example:
    >>> from dataclasses import dataclass
    >>> from typing import Any
    >>> @dataclass
    ... class Pair:
    ...     left: Any
    ...     right: Any
    >>> print(render(Pair(1, [2.5, "x"])))
    Pair {
    	left: 1
    	right: [
    		2.500000
    		"x"
    	]
    }

Cycles are pruned: a composite that is already being rendered further up the current
branch renders as `<cycle>`. The same value appearing twice on different branches is
rendered twice.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import logging
import sys
from typing import Any, IO

# Local ----------------------------------------------------------------------------------------------------------------
from .engine import CYCLE, Shape, Traversal, map_items, record_members, sequence_items
from .errors import PrettyWriteError
from .options import PrettyOptions, resolve_options

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------


class TextRenderer(Traversal):
    """
    Streams the indented text form of a value to a writable sink.

    The path holds the identities of the composites open on the recursion stack.
    An identity is added before its children are visited and removed right after,
    so only a value reappearing among its own ancestors is reported as a cycle.
    """

    def __init__(self, out: IO[str], opts: PrettyOptions):
        super().__init__(out, opts)
        self.path: set[int] = set()

    def visit_composite(self, obj: Any, shape: Shape, indent: str) -> None:
        key = id(obj)
        if key in self.path:
            self.write(CYCLE)
            return
        self.path.add(key)
        try:
            super().visit_composite(obj, shape, indent)
        finally:
            self.path.discard(key)

    def visit_leaf(self, text: str, indent: str) -> None:
        self.write(text)

    def visit_sequence(self, obj: Any, indent: str) -> None:
        inner = indent + self.opts.indent
        self.write("[")
        for item in sequence_items(obj, self.opts):
            self.write(inner)
            self.visit(item, inner)
        self.write(indent + "]")

    def visit_map(self, obj: Any, indent: str) -> None:
        inner = indent + self.opts.indent
        self.write(f"{self.type_tag(obj)} {{")
        for key, value in map_items(obj, self.opts):
            self.write(inner)
            self.visit(key, inner)
            self.write(": ")
            self.visit(value, inner)
        self.write(indent + "}")

    def visit_record(self, obj: Any, indent: str) -> None:
        name = self.type_tag(obj)
        members = record_members(obj, self.opts)
        if not members:
            self.write(f"{name}{{}}")
            return

        inner = indent + self.opts.indent
        self.write(f"{name} {{")
        for member in members:
            if member.hidden:
                continue
            self.write(f"{inner}{member.name}: ")
            self.visit(member.value, inner)
        if any(member.hidden for member in members):
            self.write(inner + self.opts.ellipsis)
        self.write(indent + "}")


# Methods --------------------------------------------------------------------------------------------------------------


def render_to(out: IO[str], obj: Any, *, opts: PrettyOptions | None = None) -> None:
    """
    Pretty-print a value to a writable text sink.

    Output is written as it is produced; nothing is buffered. A value implementing
    pretty_print() is rendered by that method instead of being traversed.

    Args:
        out: Any object with a write(str) method.
        obj: The value to render.
        opts: Rendering options, PrettyOptions() if None.

    Raises:
        PrettyWriteError: If the sink fails. Output written before the failure stays
            in the sink.
        TypeError: If opts is not a PrettyOptions instance.
    """
    _run(TextRenderer(out, resolve_options(opts)), obj)


def render(obj: Any, *, opts: PrettyOptions | None = None) -> str:
    """
    Pretty-print a value, returning it as a string.

    Examples:
        >>> render({4: "d", 1: "a", 2: "b"})
        'dict {\\n\\t1: "a"\\n\\t2: "b"\\n\\t4: "d"\\n}'
        >>> render(1.3838)
        '1.383800'
        >>> render(3 + 5j)
        '(3.000000+5.000000i)'
    """
    buf = io.StringIO()
    render_to(buf, obj, opts=opts)
    return buf.getvalue()


def pprint(obj: Any, *, opts: PrettyOptions | None = None, file: IO[str] | None = None) -> None:
    """Pretty-print a value to sys.stdout (or file), followed by a newline."""
    out = sys.stdout if file is None else file
    _run(TextRenderer(out, resolve_options(opts)), obj, end="\n")


# Private Methods ------------------------------------------------------------------------------------------------------


def _run(renderer: TextRenderer, obj: Any, end: str = "") -> None:
    # A top-level indent of a bare newline starts every nested line on its own line
    try:
        renderer.visit(obj, "\n")
        if end:
            renderer.write(end)
    except PrettyWriteError:
        logger.debug("text rendering aborted: output sink failed", exc_info=True)
        raise
