"""Tests for graph file loading and TOML export."""

import tomllib
from pathlib import Path

import pytest

from depsort import (
    ErrorCycle,
    ErrorNonexistent,
    GraphFileError,
    Sorted,
    export_components_to_toml,
    export_result_to_toml,
    load_graph,
)
from depsort._io import result_to_dict, toml_to_pairs


def _read(path: Path) -> dict:
    with path.open("rb") as f:
        return tomllib.load(f)


class TestLoadGraph:
    def test_loads_pairs_in_order(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text(
            """
[[node]]
name = "app"
depends = ["lib", "util"]

[[node]]
name = "lib"
depends = ["util"]

[[node]]
name = "util"
""",
        )

        assert load_graph(graph_file) == [("app", ["lib", "util"]), ("lib", ["util"]), ("util", [])]

    def test_repeated_nodes_are_kept(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text('[[node]]\nname = "a"\n\n[[node]]\nname = "a"\ndepends = ["b"]\n')

        assert load_graph(graph_file) == [("a", []), ("a", ["b"])]

    def test_integer_nodes(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text("[[node]]\nname = 1\ndepends = [2, 3]\n")

        assert load_graph(graph_file) == [(1, [2, 3])]

    def test_empty_file(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text("")

        assert load_graph(graph_file) == []

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(GraphFileError, match="not found"):
            load_graph(tmp_path / "nope.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text("[[node]\n")

        with pytest.raises(GraphFileError, match="Invalid TOML"):
            load_graph(graph_file)

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text('[[node]]\nname = "a"\nrequires = ["b"]\n')

        with pytest.raises(GraphFileError, match="Invalid graph definition"):
            load_graph(graph_file)

    def test_boolean_node_rejected(self, tmp_path: Path) -> None:
        graph_file = tmp_path / "graph.toml"
        graph_file.write_text('[[node]]\nname = "a"\ndepends = [true]\n')

        with pytest.raises(GraphFileError, match="Invalid graph definition"):
            load_graph(graph_file)

    def test_float_node_rejected(self) -> None:
        with pytest.raises(GraphFileError):
            toml_to_pairs({"node": [{"name": 1.5}]})

    def test_missing_name_rejected(self) -> None:
        with pytest.raises(GraphFileError):
            toml_to_pairs({"node": [{"depends": ["a"]}]})


class TestResultToDict:
    def test_sorted(self) -> None:
        assert result_to_dict(Sorted(["a", "b"])) == {"status": "sorted", "order": ["a", "b"]}

    def test_cycle(self) -> None:
        assert result_to_dict(ErrorCycle(["a"])) == {"status": "cycle", "residue": ["a"]}

    def test_nonexistent(self) -> None:
        assert result_to_dict(ErrorNonexistent([("a", ["x", "y"])])) == {
            "status": "nonexistent",
            "missing": [{"node": "a", "depends": ["x", "y"]}],
        }


class TestExport:
    def test_export_result(self, tmp_path: Path) -> None:
        output = tmp_path / "out" / "order.toml"

        export_result_to_toml(Sorted([3, 2, 1]), output)

        assert _read(output) == {"status": "sorted", "order": [3, 2, 1]}

    def test_export_components(self, tmp_path: Path) -> None:
        output = tmp_path / "components.toml"

        export_components_to_toml([["c"], ["a", "b"]], output)

        assert _read(output) == {"components": [["c"], ["a", "b"]]}
