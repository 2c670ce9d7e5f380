from __future__ import annotations

"""
Line Deduplication Component.
"""

from typing import Iterable, List, Set

from guext.infra.fs import read_lines, write_lines_atomic


def dedupe_preserving_order(lines: Iterable[str]) -> List[str]:
    """Keep the first occurrence of each line (exact match), in order."""
    seen: Set[str] = set()
    ordered: List[str] = []
    for line in lines:
        if line not in seen:
            seen.add(line)
            ordered.append(line)
    return ordered


def remove_duplicate_lines(file_path: str) -> int:
    """
    Rewrite a text file without duplicate lines.

    Comparison is exact: case and whitespace both matter. Running this twice
    gives the same bytes as running it once.

    Args:
        file_path: File to deduplicate in place.

    Returns:
        int: Number of lines left in the file.

    Raises:
        OSError: If the file cannot be read or replaced.
    """
    unique = dedupe_preserving_order(read_lines(file_path))
    write_lines_atomic(file_path, unique)
    return len(unique)
