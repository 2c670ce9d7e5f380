from __future__ import annotations

"""
Unit tests for the Workspace Isolation service.
"""

import os
from pathlib import Path
from unittest.mock import patch

import pytest

from guext.core.services.isolator import build_workspace_path, create_isolated_workspace
from guext.domain.errors import IsolationError


def test_workspace_path_is_sibling_staging_dir(tmp_path: Path) -> None:
    """The workspace lives in '<parent>/.guext-tmp/<id>'."""
    source = tmp_path / "solution"

    path = build_workspace_path(str(source), workspace_id="abc")

    assert path == str(tmp_path / ".guext-tmp" / "abc")


def test_workspace_path_uses_fresh_uuid(tmp_path: Path) -> None:
    """Two calls never produce the same path."""
    source = str(tmp_path / "solution")

    first = build_workspace_path(source)
    second = build_workspace_path(source)

    assert first != second
    assert os.path.dirname(first) == str(tmp_path / ".guext-tmp")


def test_create_copies_full_tree(solution_tree: Path) -> None:
    """Every file is copied and the original is left untouched."""
    original = (solution_tree / "App" / "Program.cs").read_bytes()

    workspace = Path(create_isolated_workspace(str(solution_tree)))

    assert workspace.parent == solution_tree.parent / ".guext-tmp"
    assert (workspace / "App" / "App.csproj").is_file()
    assert (workspace / "App" / "Program.cs").read_bytes() == original
    assert (workspace / "App" / "Models" / "Model.cs").is_file()


def test_create_failure_on_mkdir_raises(solution_tree: Path) -> None:
    """A directory creation failure becomes an IsolationError."""
    with patch("guext.core.services.isolator.safe_mkdir", side_effect=OSError("Read-only file system")):
        with pytest.raises(IsolationError) as exc_info:
            create_isolated_workspace(str(solution_tree))

    assert exc_info.value.operation == "Workspace creation"
    assert "Read-only file system" in str(exc_info.value)


def test_create_failure_on_copy_raises(solution_tree: Path) -> None:
    """A copy failure becomes an IsolationError."""
    with patch("guext.core.services.isolator.shutil.copytree", side_effect=OSError("No space left")):
        with pytest.raises(IsolationError) as exc_info:
            create_isolated_workspace(str(solution_tree))

    assert exc_info.value.stage == "isolation"
    assert exc_info.value.operation == "Workspace copy"
