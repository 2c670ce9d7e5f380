from __future__ import annotations

"""
Workspace Isolation Service.

Clones the target tree into '<parent>/.guext-tmp/<uuid4>' so the pipeline
mutates a copy and the original tree is never opened for writing. The copy is
left on disk after the run.
"""

import logging
import os
import shutil
import uuid

from guext.domain.constants import DEFAULT_STAGING_DIR_NAME
from guext.domain.errors import IsolationError
from guext.infra.fs import safe_mkdir

logger = logging.getLogger(__name__)


def build_workspace_path(
        source_dir: str,
        staging_dir_name: str = DEFAULT_STAGING_DIR_NAME,
        workspace_id: str = "",
) -> str:
    """
    Compute the isolated workspace path for a source directory.

    Args:
        source_dir: Directory that will be copied.
        staging_dir_name: Hidden staging directory created next to source_dir.
        workspace_id: Unique suffix; a fresh uuid4 when empty.

    Returns:
        str: Absolute, normalized workspace path.
    """
    suffix = workspace_id or str(uuid.uuid4())
    source_abs = os.path.abspath(source_dir)
    return os.path.normpath(os.path.join(source_abs, os.pardir, staging_dir_name, suffix))


def create_isolated_workspace(
        source_dir: str,
        staging_dir_name: str = DEFAULT_STAGING_DIR_NAME,
) -> str:
    """
    Copy source_dir into a freshly named workspace and return its path.

    Symlinks are copied as links, not followed.

    Args:
        source_dir: Directory tree to clone.
        staging_dir_name: Name of the staging directory next to source_dir.

    Returns:
        str: Absolute path of the populated workspace.

    Raises:
        IsolationError: If the workspace cannot be created or the copy fails.
                        A partial copy is left in place.
    """
    workspace = build_workspace_path(source_dir, staging_dir_name)

    try:
        safe_mkdir(workspace)
    except OSError as e:
        raise IsolationError("Workspace creation", workspace, e) from e

    logger.debug(f"Copying '{source_dir}' into isolated workspace '{workspace}'")
    try:
        shutil.copytree(source_dir, workspace, symlinks=True, dirs_exist_ok=True)
    except OSError as e:
        raise IsolationError("Workspace copy", workspace, e) from e

    logger.info(f"Working in isolated workspace: {workspace}")
    return workspace
