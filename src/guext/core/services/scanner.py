from __future__ import annotations

"""
Project Discovery Service.

Walks a directory tree to find C# project roots (directories that directly
hold a project descriptor such as '*.csproj') and enumerates the source files
of a root. Traversal is pre-order and depth-first with the entries of each
directory visited in lexical order; symlinked directories are not followed.
Any unreadable directory aborts the walk with a DiscoveryError.
"""

import fnmatch
import logging
import os
from typing import Iterator, List, NoReturn, Tuple

from guext.domain.constants import DEFAULT_DESCRIPTOR_PATTERN, DEFAULT_SOURCE_EXTENSION
from guext.domain.errors import DiscoveryError

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API (DISCOVERY SERVICES)
# ==============================================================================

def find_project_roots(
        root_dir: str,
        descriptor_pattern: str = DEFAULT_DESCRIPTOR_PATTERN,
) -> List[str]:
    """
    Return every directory under root_dir that holds a project descriptor.

    Each directory is tested on its own: a matching directory nested inside
    another matching directory is reported as well.

    Args:
        root_dir: Directory to scan (included in the scan).
        descriptor_pattern: Case-sensitive glob matched against file names.

    Returns:
        List[str]: Absolute paths of the project roots in traversal order.
                   Empty if nothing matched.

    Raises:
        DiscoveryError: If root_dir or any directory below it cannot be read.
    """
    roots: List[str] = []

    for current, _dirs, files in _walk(root_dir):
        if any(fnmatch.fnmatchcase(name, descriptor_pattern) for name in files):
            roots.append(current)

    logger.debug(f"Found {len(roots)} project root(s) under '{root_dir}'")
    return roots


def yield_source_files(
        root_dir: str,
        extension: str = DEFAULT_SOURCE_EXTENSION,
) -> Iterator[str]:
    """
    Yield every regular file below root_dir whose extension equals extension.

    The walk is fully recursive, so files of nested project roots are
    yielded too.

    Args:
        root_dir: Project root to enumerate.
        extension: Exact, case-sensitive extension including the dot.

    Yields:
        str: Absolute file paths in traversal order.

    Raises:
        DiscoveryError: If a directory cannot be read.
    """
    for current, _dirs, files in _walk(root_dir):
        for file_name in files:
            if os.path.splitext(file_name)[1] == extension:
                yield os.path.join(current, file_name)


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _walk(root_dir: str) -> Iterator[Tuple[str, List[str], List[str]]]:
    """os.walk in lexical order that raises instead of skipping unreadable dirs."""
    root_abs = os.path.abspath(root_dir)

    if not os.path.isdir(root_abs):
        raise DiscoveryError(
            "Directory scan", root_abs, NotADirectoryError(f"Not a directory: '{root_abs}'")
        )

    for current, dirs, files in os.walk(root_abs, onerror=_raise_discovery_error):
        dirs.sort()
        files.sort()
        yield current, dirs, files


def _raise_discovery_error(err: OSError) -> NoReturn:
    raise DiscoveryError("Directory scan", err.filename or "", err)
