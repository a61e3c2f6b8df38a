#
# Vpretty - Graph Renderer Tests
#

# Standard library -----------------------------------------------------------------------------------------------------
import io
import re
import weakref
from dataclasses import dataclass
from typing import Any

# Third party ----------------------------------------------------------------------------------------------------------
import pytest

# Local ----------------------------------------------------------------------------------------------------------------
from vpretty.errors import PrettyWriteError
from vpretty.graph import GraphRenderer, render_graph, render_graph_to
from vpretty.options import PrettyOptions
from vpretty.text import render


# Classes --------------------------------------------------------------------------------------------------------------

class T:
    def __init__(self, X=None):
        self.X = X


@dataclass
class Inner:
    X: float
    Y: list
    Z: float


@dataclass
class Pair:
    left: Any
    right: Any


class Empty:
    pass


class Mixed:
    def __init__(self):
        self.visible = 1
        self._hidden = 2


class Box:
    def pretty_print(self) -> str:
        return "Box()"


def _dot(*lines: str) -> str:
    body = "".join(f"\t{line}\n" for line in lines)
    return "digraph {\n" + body + "}"


# Tests ----------------------------------------------------------------------------------------------------------------

class TestGraphLeaves:
    @pytest.mark.parametrize(
        "obj, label",
        [
            pytest.param(None, '"nil"', id="nil"),
            pytest.param(False, '"false"', id="bool"),
            pytest.param(42, '"42"', id="int"),
            pytest.param(1.3838, '"1.383800"', id="float"),
            pytest.param(3 + 5j, '"(3.000000+5.000000i)"', id="complex"),
            pytest.param("foo", '"\\"foo\\""', id="str_quoted_twice"),
            pytest.param(len, '"<function>"', id="function"),
            pytest.param(iter(()), '"<chan>"', id="chan"),
            pytest.param(memoryview(b""), '"<unsafe pointer>"', id="pointer"),
            pytest.param(Box(), '"Box()"', id="custom"),
        ],
    )
    def test_single_node(self, obj, label):
        assert render_graph(obj) == _dot(f"n0 [label={label}]")


class TestGraphStructure:
    def test_record(self):
        out = render_graph(Inner(X=0, Y=["foo"], Z=1.5))
        assert out == _dot(
            'n0 [label="Inner"]',
            'n1 [label="0"]',
            'n0 -> n1 [label="X"]',
            'n2 [label="list"]',
            'n3 [label="\\"foo\\""]',
            "n2 -> n3",
            'n0 -> n2 [label="Y"]',
            'n4 [label="1.500000"]',
            'n0 -> n4 [label="Z"]',
        )

    def test_sequence_edges_unlabeled(self):
        assert render_graph([1, 2]) == _dot(
            'n0 [label="list"]',
            'n1 [label="1"]',
            "n0 -> n1",
            'n2 [label="2"]',
            "n0 -> n2",
        )

    def test_map_edges_labeled_with_key(self):
        assert render_graph({"b": 2, "a": 1}) == _dot(
            'n0 [label="dict"]',
            'n1 [label="1"]',
            'n0 -> n1 [label="\\"a\\""]',
            'n2 [label="2"]',
            'n0 -> n2 [label="\\"b\\""]',
        )

    def test_huge_int_key(self):
        """Integers beyond the str() digit limit still label nodes and edges."""
        digits = "1" + "0" * 5000
        assert render_graph({10**5000: 10**5000}) == _dot(
            'n0 [label="dict"]',
            f'n1 [label="{digits}"]',
            f'n0 -> n1 [label="{digits}"]',
        )

    def test_empty_record_compact(self):
        assert render_graph(Empty()) == _dot('n0 [label="Empty"]')

    def test_hidden_members_skipped(self):
        assert render_graph(Mixed()) == _dot(
            'n0 [label="Mixed"]',
            'n1 [label="1"]',
            'n0 -> n1 [label="visible"]',
        )

    def test_reference_transparent(self):
        target = T(1)
        assert render_graph(weakref.ref(target)) == render_graph(target)

    def test_ids_sequential(self):
        out = render_graph([[1, 2], [3]])
        ids = [int(n) for n in re.findall(r"^\tn(\d+) \[", out, flags=re.MULTILINE)]
        assert ids == list(range(len(ids)))


class TestGraphSharing:
    def test_cycle_back_edge(self):
        """A value reached again points back at its existing node."""
        t = T()
        t.X = t
        assert render_graph(t) == _dot(
            'n0 [label="T"]',
            'n0 -> n0 [label="X"]',
        )

    def test_shared_subvalue_single_node(self):
        """Two members holding the same value share one node."""
        shared = T(1)
        out = render_graph(Pair(shared, shared))
        assert out == _dot(
            'n0 [label="Pair"]',
            'n1 [label="T"]',
            'n2 [label="1"]',
            'n1 -> n2 [label="X"]',
            'n0 -> n1 [label="left"]',
            'n0 -> n1 [label="right"]',
        )

    def test_text_renders_shared_twice(self):
        """The text renderer only prunes cycles, so shared values repeat."""
        shared = T(1)
        assert render(Pair(shared, shared)).count("T {") == 2

    def test_scalars_not_deduplicated(self):
        out = render_graph([7, 7])
        assert out.count('[label="7"]') == 2

    def test_seen_map_keeps_values(self):
        renderer = GraphRenderer(io.StringIO(), PrettyOptions())
        value = [[1]]
        renderer.visit(value)
        assert [entry[1] for entry in renderer.seen.values()] == [value, value[0]]


class TestGraphMatchesText:
    def test_same_fields_and_values(self):
        """Cycle-free values show the same member names and leaves in both renderers."""
        value = Inner(X=2.5, Y=["a", "b"], Z=-1.0)
        text = render(value)
        graph = render_graph(value)
        for name in ("X", "Y", "Z"):
            assert f"\t{name}: " in text
            assert f'[label="{name}"]' in graph
        for leaf in ("2.500000", "-1.000000"):
            assert leaf in text
            assert f'[label="{leaf}"]' in graph


class TestGraphSinks:
    def test_render_graph_to(self):
        buf = io.StringIO()
        render_graph_to(buf, None)
        assert buf.getvalue() == _dot('n0 [label="nil"]')

    def test_failure_stops(self, failing_sink):
        sink = failing_sink(budget=1)
        with pytest.raises(PrettyWriteError) as exc_info:
            render_graph_to(sink, [1, 2])
        assert sink.written == ["digraph {\n"]
        assert sink.attempts == 2
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_closed_stream(self, closed_stream):
        with pytest.raises(PrettyWriteError):
            render_graph_to(closed_stream, 1)
