from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides path normalization, user data directory resolution and the exact-text
line I/O used by every component that rewrites files in place. Lines are read
without decoding loss (undecodable bytes round-trip through 'surrogateescape')
and files are always replaced atomically so an interrupted write never leaves
a truncated file behind.
"""

import os
import stat
import tempfile
from typing import Iterable, List, Optional

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "guext"
UNIX_APP_DIR_NAME = ".guext"

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "surrogateescape"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_user_data_dir() -> str:
    """
    Resolve the standard OS-specific directory for persistent application data.

    Standards:
    - Windows: %LOCALAPPDATA%/guext
    - Linux/Mac: ~/.guext

    The directory is not created here; writers create it on demand.

    Returns:
        str: Absolute path to the application data directory.
    """
    path: str = ""

    if os.name == "nt":
        base = os.environ.get("LOCALAPPDATA") or os.environ.get("APPDATA")
        if base:
            path = os.path.join(base, APP_DIR_NAME)

    if not path:
        home = os.path.expanduser("~")
        path = os.path.join(home, UNIX_APP_DIR_NAME)

    return os.path.abspath(path)


def normalize_path(path: Optional[str]) -> str:
    """
    Normalize a directory path string into an absolute filesystem path.

    Handles environment variable expansion ($VAR/%VAR%) and user home
    shortcuts (~/). An empty input stays empty: the caller decides what a
    missing path means.

    Args:
        path: Raw input path string.

    Returns:
        str: Normalized absolute path, or "" if nothing was supplied.
    """
    p = (path or "").strip()
    if not p:
        return ""
    p = os.path.expandvars(os.path.expanduser(p))
    return os.path.abspath(p)


def safe_mkdir(path: str) -> None:
    """
    Recursively create a directory with standard permissions.

    Raises:
        OSError: If the hierarchy cannot be created.
    """
    os.makedirs(path, mode=0o777, exist_ok=True)

# -----------------------------------------------------------------------------
# EXACT-TEXT LINE I/O
# -----------------------------------------------------------------------------

def read_lines(file_path: str) -> List[str]:
    """
    Read a text file into a list of lines without their terminators.

    Lines are split on '\\n' only; a single '\\r' preceding the split point is
    dropped, so CRLF files are read as their logical lines. A final line
    without a terminator is still returned. There is no line-length limit.

    Args:
        file_path: Path of the file to read.

    Returns:
        List[str]: Logical lines in file order.

    Raises:
        OSError: If the file cannot be opened or read.
    """
    with open(file_path, "r", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as f:
        content = f.read()

    if not content:
        return []

    lines = content.split("\n")
    if content.endswith("\n"):
        lines.pop()

    return [line[:-1] if line.endswith("\r") else line for line in lines]


def write_lines_atomic(file_path: str, lines: Iterable[str]) -> None:
    """
    Replace a file's content with the given lines, each followed by '\\n'.

    The content is staged in a temporary file next to the target and moved
    over it with os.replace, so readers observe either the old or the new
    content. Permission bits of an existing target are carried over.

    Args:
        file_path: Destination file.
        lines: Lines to write, without terminators.

    Raises:
        OSError: If staging, writing or the final replace fails.
    """
    target = os.path.abspath(file_path)
    directory = os.path.dirname(target)

    try:
        mode = stat.S_IMODE(os.stat(target).st_mode)
    except FileNotFoundError:
        # mkstemp creates 0600 files; new files get the regular umask default
        umask = os.umask(0)
        os.umask(umask)
        mode = 0o666 & ~umask

    fd, tmp_path = tempfile.mkstemp(
        prefix=f".{os.path.basename(target)}.", suffix=".tmp", dir=directory
    )
    try:
        with os.fdopen(fd, "w", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as out:
            for line in lines:
                out.write(line)
                out.write("\n")
            out.flush()
            os.fsync(out.fileno())

        os.chmod(tmp_path, mode)

        os.replace(tmp_path, target)
    except BaseException:
        try:
            os.unlink(tmp_path)
        except OSError:
            pass
        raise


def append_lines(file_path: str, lines: Iterable[str]) -> None:
    """
    Append lines to a file, creating it if absent.

    An existing file whose last line lacks a terminator gets one first, so
    appended lines never merge into it.

    Raises:
        OSError: If the file cannot be opened or written.
    """
    needs_break = False
    try:
        with open(file_path, "rb") as f:
            f.seek(0, os.SEEK_END)
            if f.tell() > 0:
                f.seek(-1, os.SEEK_END)
                needs_break = f.read(1) != b"\n"
    except FileNotFoundError:
        pass

    with open(file_path, "a", encoding=TEXT_ENCODING, errors=TEXT_ERRORS, newline="") as out:
        if needs_break:
            out.write("\n")
        for line in lines:
            out.write(line)
            out.write("\n")
