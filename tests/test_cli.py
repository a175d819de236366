"""Tests for the depsort command line interface."""

import tomllib
from pathlib import Path

import pytest
from typer.testing import CliRunner

from depsort._cli.main import app

runner = CliRunner()

ACYCLIC = """
[[node]]
name = "app"
depends = ["lib"]

[[node]]
name = "lib"
depends = ["core"]

[[node]]
name = "core"
"""

CYCLIC = """
[[node]]
name = "alpha"
depends = ["beta"]

[[node]]
name = "beta"
depends = ["alpha", "ghost"]

[[node]]
name = "gamma"
depends = ["alpha"]
"""


@pytest.fixture
def workdir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Run each test from an empty directory so no outer pyproject.toml is picked up."""
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def acyclic_graph(workdir: Path) -> Path:
    path = workdir / "acyclic.toml"
    path.write_text(ACYCLIC)
    return path


@pytest.fixture
def cyclic_graph(workdir: Path) -> Path:
    path = workdir / "cyclic.toml"
    path.write_text(CYCLIC)
    return path


def _positions(output: str, *names: str) -> list[int]:
    return [output.index(name) for name in names]


class TestSortCommand:
    def test_sorts_graph(self, acyclic_graph: Path) -> None:
        result = runner.invoke(app, ["sort", "--graph", str(acyclic_graph)])

        assert result.exit_code == 0, result.output
        core, lib, app_ = _positions(result.output, "core", "lib", "app")
        assert core < lib < app_

    def test_writes_output_file(self, acyclic_graph: Path, workdir: Path) -> None:
        output = workdir / "order.toml"

        result = runner.invoke(app, ["sort", "-g", str(acyclic_graph), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"status": "sorted", "order": ["core", "lib", "app"]}

    def test_strict_reports_missing(self, cyclic_graph: Path) -> None:
        result = runner.invoke(app, ["sort", "-g", str(cyclic_graph)])

        assert result.exit_code == 1
        assert "undeclared" in result.output
        assert "ghost" in result.output

    def test_permissive_reports_cycle(self, cyclic_graph: Path, workdir: Path) -> None:
        output = workdir / "order.toml"

        result = runner.invoke(app, ["sort", "-g", str(cyclic_graph), "--policy", "permissive", "-o", str(output)])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"status": "cycle", "residue": ["alpha", "beta", "gamma"]}

    def test_policy_from_config(self, cyclic_graph: Path, workdir: Path) -> None:
        (workdir / "pyproject.toml").write_text(f"[tool.depsort]\ngraph = '{cyclic_graph.name}'\npolicy = 'permissive'\n")

        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 1
        assert "Cycle detected" in result.output

    def test_no_graph_given(self, workdir: Path) -> None:
        result = runner.invoke(app, ["sort"])

        assert result.exit_code == 1
        assert "No graph file given" in result.output

    def test_invalid_graph_file(self, workdir: Path) -> None:
        bad = workdir / "bad.toml"
        bad.write_text("[[node]]\nlabel = 'x'\n")

        result = runner.invoke(app, ["sort", "-g", str(bad)])

        assert result.exit_code == 1
        assert "Invalid graph definition" in result.output


class TestComponentCommands:
    def test_components(self, cyclic_graph: Path, workdir: Path) -> None:
        output = workdir / "components.toml"

        result = runner.invoke(app, ["components", "-g", str(cyclic_graph), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"components": [["alpha", "beta"], ["gamma"], ["ghost"]]}

    def test_sort_components(self, cyclic_graph: Path, workdir: Path) -> None:
        output = workdir / "components.toml"

        result = runner.invoke(app, ["sort-components", "-g", str(cyclic_graph), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"components": [["ghost"], ["alpha", "beta"], ["gamma"]]}


class TestDepsCommand:
    def test_lists_dependencies(self, acyclic_graph: Path, workdir: Path) -> None:
        output = workdir / "deps.toml"

        result = runner.invoke(app, ["deps", "app", "-g", str(acyclic_graph), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"dependencies": ["lib", "core"]}

    def test_node_without_dependencies(self, acyclic_graph: Path) -> None:
        result = runner.invoke(app, ["deps", "core", "-g", str(acyclic_graph)])

        assert result.exit_code == 0, result.output
        assert "no dependencies" in result.output

    def test_unknown_node(self, acyclic_graph: Path) -> None:
        result = runner.invoke(app, ["deps", "nothing", "-g", str(acyclic_graph)])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_integer_nodes_matched_by_text(self, workdir: Path) -> None:
        graph = workdir / "ints.toml"
        graph.write_text("[[node]]\nname = 1\ndepends = [2]\n")
        output = workdir / "deps.toml"

        result = runner.invoke(app, ["deps", "1", "-g", str(graph), "-o", str(output)])

        assert result.exit_code == 0, result.output
        with output.open("rb") as f:
            assert tomllib.load(f) == {"dependencies": [2]}


class TestDiagnosticCommands:
    def test_missing(self, cyclic_graph: Path) -> None:
        result = runner.invoke(app, ["missing", "-g", str(cyclic_graph)])

        assert result.exit_code == 0, result.output
        assert "ghost" in result.output

    def test_missing_none(self, acyclic_graph: Path) -> None:
        result = runner.invoke(app, ["missing", "-g", str(acyclic_graph)])

        assert result.exit_code == 0, result.output
        assert "All dependencies are declared" in result.output

    def test_check_valid(self, acyclic_graph: Path) -> None:
        result = runner.invoke(app, ["check", "-g", str(acyclic_graph)])

        assert result.exit_code == 0, result.output
        assert "Graph is valid" in result.output

    def test_check_reports_problems(self, cyclic_graph: Path) -> None:
        result = runner.invoke(app, ["check", "-g", str(cyclic_graph)])

        assert result.exit_code == 1
        assert "missing dependencies" in result.output
        assert "cycle" in result.output
