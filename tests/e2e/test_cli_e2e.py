from __future__ import annotations

"""
End-to-End (E2E) CLI Tests.

Invokes the entry point script in a separate process and validates exit
codes, stream output and the filesystem side effects of a run.
"""

import os
import subprocess
import sys
from pathlib import Path
from typing import List

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent
SRC_DIR = PROJECT_ROOT / "src"
ENTRY_POINT = SRC_DIR / "guext" / "main.py"


def run_cli(args: List[str], home: Path) -> subprocess.CompletedProcess[str]:
    """
    Execute the CLI in a separate process.

    HOME points at a scratch directory so no persisted configuration of the
    developer running the tests leaks in.
    """
    env = os.environ.copy()
    env["PYTHONPATH"] = str(SRC_DIR) + os.pathsep + env.get("PYTHONPATH", "")
    env["HOME"] = str(home)
    env["LOCALAPPDATA"] = str(home)

    cmd = [sys.executable, str(ENTRY_POINT)] + args

    return subprocess.run(
        cmd,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8"
    )


def test_cli_isolated_run(tmp_path: Path, solution_tree: Path) -> None:
    """TC-01: Default run rewrites a copy and leaves the original intact."""
    result = run_cli(["-d", str(solution_tree)], tmp_path)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert "Processing '" in result.stderr
    assert (solution_tree / "App" / "Program.cs").read_text(encoding="utf-8") == (
        "using System;\nclass X{}\n"
    )

    workspaces = list((solution_tree.parent / ".guext-tmp").iterdir())
    assert len(workspaces) == 1
    aggregate = workspaces[0] / "App" / "GlobalUsings.cs"
    assert aggregate.read_text(encoding="utf-8") == (
        "global using System;\nglobal using System.Linq;\n"
    )


def test_cli_in_place_run(tmp_path: Path, solution_tree: Path) -> None:
    """TC-02: -disable-isolation rewrites the target tree itself."""
    result = run_cli(["-d", str(solution_tree), "-disable-isolation"], tmp_path)

    assert result.returncode == 0, f"CLI failed with stderr: {result.stderr}"
    assert (solution_tree / "App" / "Program.cs").read_text(encoding="utf-8") == "class X{}\n"
    assert not (solution_tree.parent / ".guext-tmp").exists()


def test_cli_without_directory(tmp_path: Path) -> None:
    """TC-03: Missing -d is a usage error with a user-facing message."""
    result = run_cli([], tmp_path)

    assert result.returncode == 2
    assert "You need to specify a project or solution directory." in result.stdout


def test_cli_no_projects(tmp_path: Path) -> None:
    """TC-04: A tree without .csproj files is reported, not crashed on."""
    target = tmp_path / "loose"
    target.mkdir()
    (target / "Loose.cs").write_text("using System;\n", encoding="utf-8")

    result = run_cli(["-d", str(target)], tmp_path)

    assert result.returncode == 3
    assert "does not contain any .csproj files" in result.stdout
    assert (target / "Loose.cs").read_text(encoding="utf-8") == "using System;\n"


def test_cli_version_report(tmp_path: Path) -> None:
    """TC-05: -version prints the build report and exits cleanly."""
    result = run_cli(["-version"], tmp_path)

    assert result.returncode == 0
    assert "guext version info:" in result.stdout
    assert "- Builder Arch:" in result.stdout
