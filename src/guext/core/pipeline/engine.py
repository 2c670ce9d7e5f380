from __future__ import annotations

"""
Core orchestration pipeline.

This module coordinates the whole extraction workflow:
1. Validates the configuration and the target directory.
2. Discovers project roots in the target tree.
3. Clones the tree into an isolated workspace (unless disabled) and
   re-discovers the roots there.
4. Rewrites every source file of each root, collecting its directives.
5. Appends the directives to the root's aggregate file and deduplicates it.

Runs are strictly sequential: the order files are visited in decides the
order of the aggregate. Any failure aborts the run; files already rewritten
stay rewritten.
"""

import logging
import os
from typing import Any, Dict, List, Optional

from guext.core.pipeline.components.extractor import extract_and_remove_directives
from guext.core.pipeline.components.writer import write_global_directives
from guext.core.pipeline.stages.validator import validate_config
from guext.core.services.isolator import create_isolated_workspace
from guext.core.services.scanner import find_project_roots, yield_source_files
from guext.domain.errors import (
    AggregationError,
    GuextError,
    ProcessingError,
)
from guext.domain.pipeline_models import (
    PipelineResult,
    RootReport,
    create_error_result,
    create_no_projects_result,
    create_success_result,
)

logger = logging.getLogger(__name__)

MISSING_TARGET_MESSAGE = "You need to specify a project or solution directory."


def run_pipeline(config: Optional[Dict[str, Any]]) -> PipelineResult:
    """
    Execute the full extraction pipeline.

    Args:
        config: The configuration dictionary (raw or partial).

    Returns:
        PipelineResult: Status, discovered roots and per-root reports.
    """
    logger.debug("Pipeline execution started.")

    # -------------------------------------------------------------------------
    # 1) Init: config & target validation
    # -------------------------------------------------------------------------
    cfg, warnings = validate_config(config, strict=False)
    for warning in warnings:
        logger.warning(f"Configuration Warning: {warning}")

    target = cfg["target_dir"]
    if not target:
        logger.error(MISSING_TARGET_MESSAGE)
        return create_error_result(MISSING_TARGET_MESSAGE, "validation", target)

    if not os.path.isdir(target):
        msg = f"Invalid or non-existent target directory: {target}"
        logger.error(msg)
        return create_error_result(msg, "validation", target)

    pattern = cfg["descriptor_pattern"]
    isolate = not cfg["disable_isolation"]

    # -------------------------------------------------------------------------
    # 2) Scanning the target tree
    # -------------------------------------------------------------------------
    try:
        project_roots = find_project_roots(target, pattern)
    except GuextError as e:
        msg = f"Error getting project directories: {e}"
        logger.error(msg)
        return create_error_result(msg, e.stage, target)

    if not project_roots:
        logger.info(f"No '{pattern}' files found under '{target}'.")
        return create_no_projects_result(target)

    # -------------------------------------------------------------------------
    # 3) Isolation and re-discovery in the tree that will be mutated
    # -------------------------------------------------------------------------
    working_dir = target
    if isolate:
        try:
            working_dir = create_isolated_workspace(target, cfg["staging_dir_name"])
        except GuextError as e:
            msg = f"Error isolating working directory: {e}"
            logger.error(msg)
            return create_error_result(msg, e.stage, target, working_dir, isolate)

        try:
            project_roots = find_project_roots(working_dir, pattern)
        except GuextError as e:
            msg = f"Error getting project directories: {e}"
            logger.error(msg)
            return create_error_result(msg, e.stage, target, working_dir, isolate)
    else:
        logger.warning("Workspace isolation disabled: rewriting files in place.")

    # -------------------------------------------------------------------------
    # 4) Processing roots
    # -------------------------------------------------------------------------
    reports: List[RootReport] = []

    for root in project_roots:
        logger.info(f"Processing '{root}'...")
        try:
            reports.append(process_project_root(root, cfg))
        except GuextError as e:
            msg = f"Error: {e}"
            logger.error(msg)
            return create_error_result(
                msg, e.stage, target, working_dir, isolate, project_roots, reports
            )

    logger.info(f"Pipeline completed: {len(reports)} project root(s) processed.")
    return create_success_result(target, working_dir, isolate, project_roots, reports)


def process_project_root(root: str, cfg: Dict[str, Any]) -> RootReport:
    """
    Rewrite all source files of one root, then update its aggregate.

    Args:
        root: Project root directory.
        cfg: Validated configuration.

    Returns:
        RootReport: Counters for the processed root.

    Raises:
        DiscoveryError: If a directory of the root cannot be read.
        ProcessingError: If a source file cannot be rewritten.
        AggregationError: If the aggregate file cannot be written.
    """
    directives: List[str] = []
    files_processed = 0

    for file_path in yield_source_files(root, cfg["source_extension"]):
        # In place, a linked source is rewritten at its target and the link is kept.
        # In a workspace the link itself is replaced, so its target is never written.
        if cfg["disable_isolation"]:
            file_path = os.path.realpath(file_path)
        try:
            found = extract_and_remove_directives(file_path, cfg["directive_prefix"])
        except OSError as e:
            raise ProcessingError("Directive extraction", file_path, e) from e
        directives.extend(found)
        files_processed += 1

    try:
        aggregate_path, unique = write_global_directives(
            root,
            directives,
            aggregate_name=cfg["aggregate_file_name"],
            marker=cfg["global_marker"],
        )
    except OSError as e:
        aggregate_path = os.path.join(root, cfg["aggregate_file_name"])
        raise AggregationError("GlobalUsings file creation", aggregate_path, e) from e

    return RootReport(
        root=root,
        files_processed=files_processed,
        directives_extracted=len(directives),
        aggregate_path=aggregate_path,
        aggregate_lines=unique,
    )
