from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Builders for throwaway C# solution trees used across unit and
   integration tests.
"""

import os
import sys
from pathlib import Path
from typing import Any, Callable, Dict, List

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from guext.infra.logging import shutdown_logging  # noqa: E402


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_guext_logging():
    """Detach handlers installed by the CLI so they never outlive a test's capture."""
    yield
    shutdown_logging()


@pytest.fixture
def write_lines() -> Callable[[Path, List[str]], Path]:
    """Return a helper that writes '\\n'-terminated lines to a file."""

    def _write(path: Path, lines: List[str]) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes("".join(f"{line}\n" for line in lines).encode("utf-8"))
        return path

    return _write


@pytest.fixture
def solution_tree(tmp_path: Path, write_lines: Callable[[Path, List[str]], Path]) -> Path:
    """
    Create a one-project solution with two source files.

    Structure:
    /solution
      /App
        App.csproj
        Program.cs     -> using System; / class X{}
        /Models
          Model.cs     -> using System; / using System.Linq; / class Y{}
    """
    solution = tmp_path / "solution"
    app = solution / "App"
    app.mkdir(parents=True)

    (app / "App.csproj").write_text("<Project Sdk=\"Microsoft.NET.Sdk\" />\n", encoding="utf-8")
    write_lines(app / "Program.cs", ["using System;", "class X{}"])
    write_lines(app / "Models" / "Model.cs", ["using System;", "using System.Linq;", "class Y{}"])

    return solution


@pytest.fixture
def pipeline_config() -> Callable[..., Dict[str, Any]]:
    """Return a factory for complete pipeline configuration dictionaries."""

    def _make(target: Path, **overrides: Any) -> Dict[str, Any]:
        cfg: Dict[str, Any] = {
            "target_dir": str(target),
            "disable_isolation": False,
            "staging_dir_name": ".guext-tmp",
            "descriptor_pattern": "*.csproj",
            "source_extension": ".cs",
            "directive_prefix": "using ",
            "aggregate_file_name": "GlobalUsings.cs",
            "global_marker": "global",
        }
        cfg.update(overrides)
        return cfg

    return _make
