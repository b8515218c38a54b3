"""Tests for the dependency graph builder."""

from pathlib import Path

from dep_linker.models import Module
from dep_linker.analysis.dependency_graph import DependencyGraphBuilder


# ── Helpers ───────────────────────────────────────────────────

def _make_module(name, deps=(), path=None):
    return Module(name=name, path=path or Path(f"/fake/{name}"), dependencies=tuple(deps))


def _modules_dict(*modules):
    return {m.name: m for m in modules}


# ── Build ─────────────────────────────────────────────────────

class TestBuild:
    def test_build_empty(self):
        graph = DependencyGraphBuilder().build({})
        assert len(graph) == 0

    def test_module_without_edges(self):
        graph = DependencyGraphBuilder().build(_modules_dict(_make_module("solo")))
        node = graph.nodes["solo"]
        assert node.depends_on == ()
        assert node.referenced_by == ()
        assert node.is_cyclic is False

    def test_forward_and_reverse_edges(self):
        modules = _modules_dict(
            _make_module("a"),
            _make_module("b", ["a"]),
            _make_module("c", ["a", "b"]),
        )
        graph = DependencyGraphBuilder().build(modules)
        assert graph.nodes["c"].depends_on == ("a", "b")
        assert graph.nodes["a"].referenced_by == ("b", "c")
        assert graph.nodes["b"].referenced_by == ("c",)
        assert graph.cyclic_names == []

    def test_external_dependencies_dropped(self):
        modules = _modules_dict(_make_module("a", ["lodash", "b", "q"]), _make_module("b"))
        graph = DependencyGraphBuilder().build(modules)
        assert graph.nodes["a"].depends_on == ("b",)

    def test_self_dependency_ignored(self):
        graph = DependencyGraphBuilder().build(_modules_dict(_make_module("a", ["a"])))
        assert graph.nodes["a"].depends_on == ()
        assert graph.nodes["a"].is_cyclic is False

    def test_mutual_pair_is_cyclic(self):
        modules = _modules_dict(
            _make_module("a", ["b"]),
            _make_module("b", ["a"]),
            _make_module("c", ["a"]),
        )
        graph = DependencyGraphBuilder().build(modules)
        assert graph.nodes["a"].is_cyclic
        assert graph.nodes["b"].is_cyclic
        assert not graph.nodes["c"].is_cyclic
        assert graph.cyclic_names == ["a", "b"]

    def test_longer_cycle_not_flagged(self):
        modules = _modules_dict(
            _make_module("a", ["b"]),
            _make_module("b", ["c"]),
            _make_module("c", ["a"]),
        )
        graph = DependencyGraphBuilder().build(modules)
        assert graph.cyclic_names == []

    def test_node_order_follows_modules(self):
        modules = _modules_dict(_make_module("z"), _make_module("a"), _make_module("m"))
        graph = DependencyGraphBuilder().build(modules)
        assert list(graph.nodes) == ["z", "a", "m"]

    def test_without_dependency_returns_copy(self):
        modules = _modules_dict(_make_module("a", ["b", "c"]), _make_module("b"), _make_module("c"))
        graph = DependencyGraphBuilder().build(modules)
        node = graph.nodes["a"]
        broken = node.without_dependency("b")
        assert broken.depends_on == ("c",)
        assert node.depends_on == ("b", "c")

    def test_without_dependency_keeps_other_fields(self):
        modules = _modules_dict(_make_module("a", ["b"]), _make_module("b", ["a"]))
        node = DependencyGraphBuilder().build(modules).nodes["a"]
        broken = node.without_dependency("b")
        assert broken.name == "a"
        assert broken.depends_on == ()
        assert broken.referenced_by == ("b",)
        assert broken.is_cyclic


# ── Cycle detection ───────────────────────────────────────────

class TestDetectCycles:
    def test_no_cycles(self):
        builder = DependencyGraphBuilder()
        graph = builder.build(_modules_dict(_make_module("a"), _make_module("b", ["a"])))
        assert builder.detect_cycles(graph) == []

    def test_three_cycle(self):
        builder = DependencyGraphBuilder()
        graph = builder.build(_modules_dict(
            _make_module("a", ["b"]),
            _make_module("b", ["c"]),
            _make_module("c", ["a"]),
        ))
        assert builder.detect_cycles(graph) == [["a", "b", "c", "a"]]

    def test_limited_to_subset(self):
        builder = DependencyGraphBuilder()
        graph = builder.build(_modules_dict(
            _make_module("a", ["b"]),
            _make_module("b", ["a"]),
            _make_module("c"),
        ))
        assert builder.detect_cycles(graph, among={"a", "c"}) == []
        assert builder.detect_cycles(graph, among={"a", "b"}) == [["a", "b", "a"]]
