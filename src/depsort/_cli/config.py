"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from depsort._errors import ConfigError
from depsort._result import MissingPolicy


@dataclass(slots=True, frozen=True)
class DepsortConfig:
    """Configuration loaded from the ``[tool.depsort]`` section of pyproject.toml.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    graph: Path | None = None
    policy: MissingPolicy | None = None
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    if start_dir is None:
        start_dir = Path.cwd()

    current = start_dir.resolve()

    while True:
        candidate = current / "pyproject.toml"
        if candidate.is_file():
            return candidate
        parent = current.parent
        if parent == current:
            # Reached filesystem root
            return None
        current = parent


def _parse_policy(value: object) -> MissingPolicy:
    if not isinstance(value, str) or value not in {p.value for p in MissingPolicy}:
        choices = ", ".join(f"'{p}'" for p in MissingPolicy)
        msg = f"Invalid [tool.depsort].policy: expected one of {choices}, got {value!r}"
        raise ConfigError(msg)
    return MissingPolicy(value)


def _parse_graph_path(value: object, project_root: Path) -> Path:
    if not isinstance(value, str):
        msg = "Invalid [tool.depsort].graph: expected string path"
        raise ConfigError(msg)
    graph_path = Path(value)
    if not graph_path.is_absolute():
        graph_path = project_root / graph_path
    return graph_path


def load_config(pyproject_path: Path) -> DepsortConfig:
    """Load and validate [tool.depsort] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed DepsortConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("depsort", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.depsort]: expected a table"
        raise ConfigError(msg)

    unknown = sorted(set(section) - {"graph", "policy"})
    if unknown:
        msg = f"Unknown keys in [tool.depsort]: {', '.join(unknown)}"
        raise ConfigError(msg)

    graph_path = _parse_graph_path(section["graph"], project_root) if "graph" in section else None
    policy = _parse_policy(section["policy"]) if "policy" in section else None

    return DepsortConfig(graph=graph_path, policy=policy, project_root=project_root)


def get_config() -> DepsortConfig:
    """Get config from pyproject.toml in current directory or parents.

    Returns:
        DepsortConfig (may be empty if no pyproject.toml or no [tool.depsort] section)

    """
    pyproject_path = find_pyproject_toml()
    if pyproject_path is None:
        return DepsortConfig()
    return load_config(pyproject_path)
