from __future__ import annotations

"""
Command Line Interface (CLI) Application Controller.

Orchestrates the CLI lifecycle: logging bootstrap, configuration resolution
(defaults, persisted file, command-line overrides), pipeline execution and
result rendering. Maps every outcome to a process exit code.
"""

import json
import sys
from dataclasses import asdict
from typing import Any, Dict, List, Optional

from guext.core.pipeline.engine import MISSING_TARGET_MESSAGE, run_pipeline
from guext.core.pipeline.stages.validator import validate_config
from guext.domain.build_info import format_build_info, load_build_info
from guext.domain.config import get_default_config, load_config, save_config
from guext.domain.constants import (
    EXIT_FAILURE,
    EXIT_INTERRUPTED,
    EXIT_NO_PROJECTS,
    EXIT_OK,
    EXIT_USAGE,
)
from guext.domain.pipeline_models import (
    STATUS_NO_PROJECTS,
    PipelineResult,
)
from guext.infra.logging import LoggingConfig, configure_logging, get_logger
from guext.interface.cli import args as cli_args

logger = get_logger(__name__)

# -----------------------------------------------------------------------------
# ENTRYPOINT ORCHESTRATOR
# -----------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> int:
    """
    Execute the main CLI application workflow.

    Args:
        argv: Optional list of command line arguments. Defaults to sys.argv.

    Returns:
        int: Process exit code.
    """
    # 1. Argument parsing phase
    parser = cli_args.build_parser()
    args = parser.parse_args(argv)

    # 2. Resolve configuration hierarchy
    base_conf = get_default_config() if args.use_defaults else load_config()
    raw_conf = _merge_config(base_conf, cli_args.args_to_overrides(args))
    clean_conf, warnings = validate_config(raw_conf, strict=False)

    # 3. Logging bootstrap (console on stderr, optional rotating file)
    configure_logging(LoggingConfig(
        level=clean_conf["log_level"],
        console=True,
        log_file=clean_conf["log_file"] or None,
    ))
    for w in warnings:
        logger.warning(f"Configuration Constraint: {w}")

    # 4. Version report; only ends the run when no directory was given
    if args.show_version:
        for line in format_build_info(load_build_info()):
            print(line)
        if not clean_conf["target_dir"]:
            return EXIT_OK

    if args.dump_config:
        print(json.dumps(clean_conf, ensure_ascii=False, indent=2))
        return EXIT_OK

    if args.save_config:
        try:
            save_config(clean_conf)
        except OSError as e:
            logger.warning(f"Could not persist configuration: {e}")

    # 5. Pre-flight: no directory operation without a target
    if not clean_conf["target_dir"]:
        print(MISSING_TARGET_MESSAGE)
        return EXIT_USAGE

    # 6. Pipeline execution phase
    try:
        result = run_pipeline(clean_conf)
    except KeyboardInterrupt:
        msg = "Interrupted. Files already rewritten keep their new content."
        logger.warning(msg)
        print(msg, file=sys.stderr)
        return EXIT_INTERRUPTED
    except Exception as e:
        msg = f"Pipeline failure: {e}"
        logger.critical(msg, exc_info=True)
        print(f"ERROR: {msg}", file=sys.stderr)
        return EXIT_FAILURE

    # 7. Output rendering phase
    if args.json_output:
        print(json.dumps(asdict(result), ensure_ascii=False, indent=2))
    else:
        _print_human_summary(result, clean_conf)

    return _exit_code(result)

# -----------------------------------------------------------------------------
# CONFIGURATION MERGING
# -----------------------------------------------------------------------------

def _merge_config(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """Shallow-merge non-None override values of known keys into base."""
    out = dict(base)
    for k, v in overrides.items():
        if k in out and v is not None:
            out[k] = v
    return out

# -----------------------------------------------------------------------------
# VIEW RENDERING (HUMAN READABLE)
# -----------------------------------------------------------------------------

def _print_human_summary(result: PipelineResult, cfg: Dict[str, Any]) -> None:
    """Print the run outcome to standard output (errors go to stderr)."""
    if not result.ok:
        print(f"ERROR: {result.error}", file=sys.stderr)
        return

    if result.status == STATUS_NO_PROJECTS:
        print(
            f"The specified directory does not contain any "
            f"{_pattern_label(cfg['descriptor_pattern'])} files."
        )
        return

    if result.isolated:
        print(f"Working directory: {result.working_path}")

    for report in result.reports:
        print(
            f"  - {report.root}: {report.files_processed} file(s), "
            f"{report.directives_extracted} directive(s) -> "
            f"{report.aggregate_path} ({report.aggregate_lines} line(s))"
        )

    summary = result.summary
    print(
        f"Done: {summary.get('roots_processed', 0)} project(s), "
        f"{summary.get('files_processed', 0)} file(s) rewritten."
    )


def _pattern_label(pattern: str) -> str:
    """Turn '*.csproj' into '.csproj' for user messages."""
    return pattern[1:] if pattern.startswith("*") else pattern


def _exit_code(result: PipelineResult) -> int:
    """Map a pipeline result to a process exit code."""
    if not result.ok:
        return EXIT_USAGE if result.error_stage == "validation" else EXIT_FAILURE
    if result.status == STATUS_NO_PROJECTS:
        return EXIT_NO_PROJECTS
    return EXIT_OK

# -----------------------------------------------------------------------------
# CLI ENTRYPOINT
# -----------------------------------------------------------------------------

if __name__ == "__main__":
    sys.exit(main())
