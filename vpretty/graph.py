"""
Graph renderer.

Writes a value as a directed graph in the Graphviz DOT language. Each distinct value
becomes a node labeled with its leaf rendering or its type name; each structural
relationship becomes an edge. Record edges are labeled with the member name, map
edges with the rendered key, sequence edges are unlabeled.

Example:
    >>> print(render_graph([1, "a"]))
    digraph {
    	n0 [label="list"]
    	n1 [label="1"]
    	n0 -> n1
    	n2 [label="\\"a\\""]
    	n0 -> n2
    }

Unlike the text renderer, which only prunes cycles on the current branch, the graph
renderer remembers every composite it has emitted during the call. A composite met a
second time, whether through a cycle or through shared structure, is not emitted again:
the edge points at its existing node.
"""

# Standard library -----------------------------------------------------------------------------------------------------
import io
import logging
from typing import Any, IO

# Local ----------------------------------------------------------------------------------------------------------------
from .engine import Shape, Traversal, map_items, record_members, sequence_items
from .errors import PrettyWriteError
from .formatters import fmt_str
from .options import PrettyOptions, resolve_options
from .text import render

logger = logging.getLogger(__name__)


# Classes --------------------------------------------------------------------------------------------------------------


class GraphRenderer(Traversal):
    """
    Streams DOT node and edge statements for a value.

    Node ids are sequential integers assigned in first-visit order. The seen map
    links each emitted composite's identity to its node id, and holds a reference
    to the composite so that its id() cannot be reused before the call ends.
    """

    def __init__(self, out: IO[str], opts: PrettyOptions):
        super().__init__(out, opts)
        self.seen: dict[int, tuple[int, Any]] = {}
        self.next_id = 0

    def node(self, label: str, obj: Any = None) -> int:
        """Emit a new node and return its id; a composite obj is recorded as seen."""
        n = self.next_id
        self.next_id += 1
        if obj is not None:
            self.seen[id(obj)] = (n, obj)
        self.write(f"\tn{n} [label={fmt_str(label)}]\n")
        return n

    def edge(self, src: int, dst: int, label: str | None = None) -> None:
        if label is None:
            self.write(f"\tn{src} -> n{dst}\n")
        else:
            self.write(f"\tn{src} -> n{dst} [label={fmt_str(label)}]\n")

    def visit_composite(self, obj: Any, shape: Shape, indent: str) -> int:
        entry = self.seen.get(id(obj))
        if entry is not None:
            return entry[0]
        return super().visit_composite(obj, shape, indent)

    def visit_leaf(self, text: str, indent: str) -> int:
        return self.node(text)

    def visit_sequence(self, obj: Any, indent: str) -> int:
        n = self.node(self.type_tag(obj), obj)
        for item in sequence_items(obj, self.opts):
            self.edge(n, self.visit(item))
        return n

    def visit_map(self, obj: Any, indent: str) -> int:
        n = self.node(self.type_tag(obj), obj)
        for key, value in map_items(obj, self.opts):
            self.edge(n, self.visit(value), render(key, opts=self.opts))
        return n

    def visit_record(self, obj: Any, indent: str) -> int:
        n = self.node(self.type_tag(obj), obj)
        for member in record_members(obj, self.opts):
            if not member.hidden:
                self.edge(n, self.visit(member.value), member.name)
        return n


# Methods --------------------------------------------------------------------------------------------------------------


def render_graph_to(out: IO[str], obj: Any, *, opts: PrettyOptions | None = None) -> None:
    """
    Write a value to a writable text sink as a DOT digraph.

    The output is `digraph {`, one statement per line, and a closing `}` with no
    trailing newline.

    Args:
        out: Any object with a write(str) method.
        obj: The value to render.
        opts: Rendering options, PrettyOptions() if None. The indent unit is unused.

    Raises:
        PrettyWriteError: If the sink fails. Output written before the failure stays
            in the sink.
        TypeError: If opts is not a PrettyOptions instance.
    """
    renderer = GraphRenderer(out, resolve_options(opts))
    try:
        renderer.write("digraph {\n")
        renderer.visit(obj)
        renderer.write("}")
    except PrettyWriteError:
        logger.debug("graph rendering aborted: output sink failed", exc_info=True)
        raise


def render_graph(obj: Any, *, opts: PrettyOptions | None = None) -> str:
    """Render a value as a DOT digraph, returning it as a string."""
    buf = io.StringIO()
    render_graph_to(buf, obj, opts=opts)
    return buf.getvalue()
