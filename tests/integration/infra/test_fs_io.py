from __future__ import annotations

"""
Integration tests for FileSystem Infrastructure.

Validates path normalization, user data directory resolution and the
exact-text line I/O, including the atomic replacement guarantee.
"""

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest

from guext.infra.fs import (
    append_lines,
    get_user_data_dir,
    normalize_path,
    read_lines,
    safe_mkdir,
    write_lines_atomic,
)

# -----------------------------------------------------------------------------
# PATH RESOLUTION TESTS
# -----------------------------------------------------------------------------

def test_get_user_data_dir_unix() -> None:
    """TC-01: Verify resolution of ~/.guext on Unix-like systems."""
    with patch("os.name", "posix"):
        with patch("os.path.expanduser", return_value="/home/testuser"):
            path = get_user_data_dir()
    assert path.replace("\\", "/").endswith("/home/testuser/.guext")


def test_normalize_path_expansion() -> None:
    """TC-02: Environment variables are expanded, empty input stays empty."""
    with patch.dict(os.environ, {"GUEXT_TEST_VAR": "my_folder"}):
        path = normalize_path("$GUEXT_TEST_VAR/sub")
    assert path.endswith(os.path.join("my_folder", "sub"))
    assert os.path.isabs(path)
    assert normalize_path("   ") == ""
    assert normalize_path(None) == ""


def test_safe_mkdir_creates_hierarchy(tmp_path: Path) -> None:
    target = tmp_path / "deep" / "nested" / "dir"
    safe_mkdir(str(target))
    assert target.is_dir()

# -----------------------------------------------------------------------------
# LINE I/O TESTS
# -----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "raw, expected",
    [
        (b"", []),
        (b"a", ["a"]),
        (b"a\n", ["a"]),
        (b"a\r\nb\r\n", ["a", "b"]),
        (b"a\n\nb", ["a", "", "b"]),
        (b"a\rb\n", ["a\rb"]),
        (b"\n", [""]),
    ],
)
def test_read_lines_splitting(tmp_path: Path, raw: bytes, expected) -> None:
    """TC-03: Lines split on LF only; one CR before LF is dropped."""
    f = tmp_path / "in.txt"
    f.write_bytes(raw)
    assert read_lines(str(f)) == expected


def test_read_lines_has_no_length_limit(tmp_path: Path) -> None:
    f = tmp_path / "long.txt"
    f.write_bytes(b"x" * 200_000 + b"\n")
    assert read_lines(str(f)) == ["x" * 200_000]


def test_write_lines_atomic_terminates_each_line(tmp_path: Path) -> None:
    f = tmp_path / "out.txt"
    write_lines_atomic(str(f), ["a", "", "b"])
    assert f.read_bytes() == b"a\n\nb\n"


def test_write_lines_atomic_keeps_permissions(tmp_path: Path) -> None:
    f = tmp_path / "exec.sh"
    f.write_text("old\n", encoding="utf-8")
    os.chmod(f, 0o750)

    write_lines_atomic(str(f), ["new"])

    assert stat.S_IMODE(os.stat(f).st_mode) == 0o750


def test_write_lines_atomic_failure_keeps_original(tmp_path: Path) -> None:
    """TC-04: A failed write leaves the original content and no temp file."""
    f = tmp_path / "Program.cs"
    f.write_bytes(b"using System;\nclass P{}\n")

    def exploding_lines():
        yield "class P{}"
        raise OSError("No space left on device")

    with pytest.raises(OSError):
        write_lines_atomic(str(f), exploding_lines())

    assert f.read_bytes() == b"using System;\nclass P{}\n"
    assert sorted(p.name for p in tmp_path.iterdir()) == ["Program.cs"]


def test_append_lines_creates_and_appends(tmp_path: Path) -> None:
    f = tmp_path / "agg.txt"
    append_lines(str(f), ["a"])
    append_lines(str(f), ["b", "c"])
    assert f.read_bytes() == b"a\nb\nc\n"


def test_append_lines_repairs_missing_terminator(tmp_path: Path) -> None:
    """TC-05: Appending never glues onto an unterminated last line."""
    f = tmp_path / "agg.txt"
    f.write_bytes(b"a")
    append_lines(str(f), ["b"])
    assert f.read_bytes() == b"a\nb\n"
