from __future__ import annotations

"""
Directive Extraction Component.

Removes per-file 'using ' directives from a C# source file. Detection is a
plain prefix test on the left-trimmed line; everything else is kept verbatim.
"""

import logging
from typing import Iterable, List, Tuple

from guext.domain.constants import DEFAULT_DIRECTIVE_PREFIX
from guext.infra.fs import read_lines, write_lines_atomic

logger = logging.getLogger(__name__)


def is_directive(line: str, prefix: str = DEFAULT_DIRECTIVE_PREFIX) -> bool:
    """Return True if the line, ignoring leading whitespace, starts with prefix."""
    return line.lstrip().startswith(prefix)


def split_directives(
        lines: Iterable[str],
        prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> Tuple[List[str], List[str]]:
    """
    Partition lines into directives and body, both in original order.

    Returns:
        Tuple[List[str], List[str]]: (directives, body).
    """
    directives: List[str] = []
    body: List[str] = []
    for line in lines:
        if is_directive(line, prefix):
            directives.append(line)
        else:
            body.append(line)
    return directives, body


def extract_and_remove_directives(
        file_path: str,
        prefix: str = DEFAULT_DIRECTIVE_PREFIX,
) -> List[str]:
    """
    Strip directive lines from a source file and return them.

    The file is rewritten with the remaining lines, each terminated by a
    single '\\n'. A file with no trailing newline gains one and CRLF line
    endings become LF.

    Args:
        file_path: Source file to rewrite in place.
        prefix: Directive prefix token.

    Returns:
        List[str]: Removed directive lines, untransformed.

    Raises:
        OSError: If the file cannot be read or replaced.
    """
    directives, body = split_directives(read_lines(file_path), prefix)
    write_lines_atomic(file_path, body)

    logger.debug(f"Extracted {len(directives)} directive(s) from '{file_path}'")
    return directives
