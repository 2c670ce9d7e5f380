from __future__ import annotations

"""
Aggregate Output Component.

Appends directives in their global form to a project root's aggregate file
and deduplicates the result. Directives already present from earlier runs
are removed in the same pass.
"""

import logging
import os
from typing import Iterable, Tuple

from guext.core.pipeline.components.deduplicator import remove_duplicate_lines
from guext.domain.constants import DEFAULT_AGGREGATE_FILE_NAME, DEFAULT_GLOBAL_MARKER
from guext.infra.fs import append_lines

logger = logging.getLogger(__name__)


def to_global_form(directive: str, marker: str = DEFAULT_GLOBAL_MARKER) -> str:
    """Prefix a directive with the global marker and one space."""
    return f"{marker} {directive}"


def write_global_directives(
        root_dir: str,
        directives: Iterable[str],
        aggregate_name: str = DEFAULT_AGGREGATE_FILE_NAME,
        marker: str = DEFAULT_GLOBAL_MARKER,
) -> Tuple[str, int]:
    """
    Append directives to the root's aggregate file and deduplicate it.

    The file is created when absent. Input order is preserved.

    Args:
        root_dir: Project root that owns the aggregate file.
        directives: Directive lines as extracted, in processing order.
        aggregate_name: File name of the aggregate inside root_dir.
        marker: Token prepended to every directive.

    Returns:
        Tuple[str, int]: (aggregate path, unique lines after deduplication).

    Raises:
        OSError: If the aggregate cannot be opened, written or rewritten.
    """
    aggregate_path = os.path.join(root_dir, aggregate_name)

    append_lines(aggregate_path, (to_global_form(d, marker) for d in directives))
    unique = remove_duplicate_lines(aggregate_path)

    logger.debug(f"Aggregate '{aggregate_path}' holds {unique} unique line(s)")
    return aggregate_path, unique
