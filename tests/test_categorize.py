"""Tests for categorizing data sources around a target form."""
import pytest

from form_prefill.categorize import build_registry, categorize_sources
from form_prefill.models import CategorizedSources, SourceCategory

from conftest import make_form


class TestCategorizeDiamond:

    def test_buckets(self, diamond_graph, global_data):
        result = categorize_sources("E", diamond_graph, global_data)
        assert [s.id for s in result.direct] == ["C", "D"]
        assert [s.id for s in result.transitive] == ["A", "B"]
        assert [s.id for s in result.global_sources] == [
            "global-action-properties",
            "global-org-properties",
        ]

    def test_direct_and_transitive_disjoint(self, diamond_graph):
        result = categorize_sources("E", diamond_graph)
        direct = {s.id for s in result.direct}
        transitive = {s.id for s in result.transitive}
        assert direct.isdisjoint(transitive)
        assert "E" not in direct | transitive

    def test_form_sources_use_form_name(self, diamond_graph):
        result = categorize_sources("B", diamond_graph)
        (source,) = result.direct
        assert source.name == "Form A"
        assert source.category == SourceCategory.FORM
        assert source.list_fields()[0].path == "Form A.Email"

    def test_graph_not_mutated(self, diamond_graph, global_data):
        before = dict(diamond_graph)
        categorize_sources("E", diamond_graph, global_data)
        assert diamond_graph == before

    def test_bucket_order_follows_declarations_not_graph_order(self):
        graph = {
            "A": make_form("A"),
            "B": make_form("B"),
            "Z": make_form("Z", dependencies=("Y",)),
            "Y": make_form("Y", dependencies=("X",)),
            "X": make_form("X"),
            "T": make_form("T", dependencies=("B", "A", "Z")),
        }
        result = categorize_sources("T", graph)
        assert [s.id for s in result.direct] == ["B", "A", "Z"]
        assert [s.id for s in result.transitive] == ["Y", "X"]


class TestNothingSelected:

    @pytest.mark.parametrize("target", [None, ""])
    def test_empty_buckets(self, diamond_graph, global_data, target):
        result = categorize_sources(target, diamond_graph, global_data)
        assert result == CategorizedSources()
        assert result.direct == ()
        assert result.transitive == ()
        assert result.global_sources == ()
        assert result.is_empty()


class TestGlobalSnapshot:

    def test_global_bucket_contents(self, diamond_graph, global_data):
        result = categorize_sources("A", diamond_graph, global_data)
        assert len(result.global_sources) == 2
        action = result.global_sources[0]
        paths = [f.path for f in action.list_fields()]
        assert paths == ["Action.Status", "Action.Created At"]

    def test_without_snapshot_global_bucket_empty(self, diamond_graph):
        result = categorize_sources("E", diamond_graph, None)
        assert result.global_sources == ()
        assert len(result.direct) == 2

    def test_unknown_target_still_lists_globals(self, diamond_graph, global_data):
        result = categorize_sources("nope", diamond_graph, global_data)
        assert result.direct == ()
        assert result.transitive == ()
        assert len(result.global_sources) == 2


class TestDanglingDependencies:

    def test_ghost_dropped_from_direct_bucket(self):
        graph = {
            "A": make_form("A"),
            "T": make_form("T", ["ghost", "A"]),
        }
        result = categorize_sources("T", graph)
        assert [s.id for s in result.direct] == ["A"]

    def test_ghost_dropped_from_transitive_bucket(self):
        graph = {
            "A": make_form("A", ["phantom"]),
            "T": make_form("T", ["A"]),
        }
        result = categorize_sources("T", graph)
        assert result.transitive == ()


class TestIdempotence:

    def test_repeated_calls_value_equal(self, diamond_graph, global_data):
        first = categorize_sources("E", diamond_graph, global_data)
        second = categorize_sources("E", diamond_graph, global_data)
        assert first == second
        assert first.direct[0] is not second.direct[0]

    def test_cyclic_graph(self, three_cycle_graph):
        result = categorize_sources("A", three_cycle_graph)
        assert [s.id for s in result.direct] == ["B"]
        assert [s.id for s in result.transitive] == ["C"]


class TestBuildRegistry:

    def test_registers_forms_then_globals(self, diamond_graph, global_data):
        registry = build_registry(diamond_graph, global_data)
        ids = [s.id for s in registry.get_all()]
        assert ids == ["A", "B", "C", "D", "E", "global-action-properties", "global-org-properties"]

    def test_non_mapping_graph_fails_fast(self):
        with pytest.raises(TypeError):
            categorize_sources("A", ["not", "a", "graph"])
