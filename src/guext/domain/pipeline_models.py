from __future__ import annotations

"""
Pipeline Domain Data Models.

Data structures and factory functions used to hand run outcomes from the
pipeline engine to the CLI.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

STATUS_SUCCESS = "success"
STATUS_NO_PROJECTS = "no_projects"
STATUS_ERROR = "error"

# -----------------------------------------------------------------------------
# CORE DATA MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class RootReport:
    """
    Outcome of processing one project root.

    Attributes:
        root: Absolute path of the project root.
        files_processed: Number of source files rewritten.
        directives_extracted: Directive lines removed from those files.
        aggregate_path: Path of the root's aggregate file.
        aggregate_lines: Unique lines in the aggregate after deduplication.
    """
    root: str
    files_processed: int
    directives_extracted: int
    aggregate_path: str
    aggregate_lines: int


@dataclass(frozen=True)
class PipelineResult:
    """
    Result of a complete pipeline execution.

    Attributes:
        ok: True unless the run was aborted by an error.
        status: One of 'success', 'no_projects' or 'error'.
        error: Descriptive message in case of failure.
        error_stage: Pipeline stage that failed ('' on success).
        target_path: Normalized directory supplied by the user.
        working_path: Directory actually mutated (target or isolated copy).
        isolated: Whether the run operated on an isolated copy.
        project_roots: Roots discovered in the working tree.
        reports: Per-root outcomes, in processing order.
        summary: Aggregated counters for rendering.
    """
    ok: bool
    status: str
    error: str

    target_path: str
    working_path: str = ""
    isolated: bool = False
    error_stage: str = ""

    project_roots: List[str] = field(default_factory=list)
    reports: List[RootReport] = field(default_factory=list)

    summary: Dict[str, Any] = field(default_factory=dict)

# -----------------------------------------------------------------------------
# FACTORY FUNCTIONS
# -----------------------------------------------------------------------------

def create_error_result(
        error: str,
        stage: str,
        target_path: str,
        working_path: str = "",
        isolated: bool = False,
        project_roots: Optional[List[str]] = None,
        reports: Optional[List[RootReport]] = None,
) -> PipelineResult:
    """
    Create a failed pipeline result.

    Roots and reports completed before the failure are kept so the caller can
    tell which files were already rewritten.
    """
    done = list(reports or [])
    return PipelineResult(
        ok=False,
        status=STATUS_ERROR,
        error=error,
        error_stage=stage,
        target_path=target_path,
        working_path=working_path,
        isolated=isolated,
        project_roots=list(project_roots or []),
        reports=done,
        summary=_summarize(done),
    )


def create_no_projects_result(target_path: str) -> PipelineResult:
    """Create the result of a run that found no project roots."""
    return PipelineResult(
        ok=True,
        status=STATUS_NO_PROJECTS,
        error="",
        target_path=target_path,
        working_path=target_path,
        summary=_summarize([]),
    )


def create_success_result(
        target_path: str,
        working_path: str,
        isolated: bool,
        project_roots: List[str],
        reports: List[RootReport],
) -> PipelineResult:
    """Create a successful pipeline result."""
    return PipelineResult(
        ok=True,
        status=STATUS_SUCCESS,
        error="",
        target_path=target_path,
        working_path=working_path,
        isolated=isolated,
        project_roots=list(project_roots),
        reports=list(reports),
        summary=_summarize(reports),
    )


def _summarize(reports: List[RootReport]) -> Dict[str, Any]:
    """Sum the per-root counters."""
    return {
        "roots_processed": len(reports),
        "files_processed": sum(r.files_processed for r in reports),
        "directives_extracted": sum(r.directives_extracted for r in reports),
        "aggregate_lines": sum(r.aggregate_lines for r in reports),
    }
