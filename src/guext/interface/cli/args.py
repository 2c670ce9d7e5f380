from __future__ import annotations

"""
CLI Argument Definition and Mapping.

Defines the command-line schema and translates the parsed namespace into
configuration overrides. Option names use a single dash ('-d',
'-disable-isolation', '-version'); they are part of the tool's external
contract.
"""

import argparse
from typing import Any, Dict

from guext.domain.constants import APP_NAME

# -----------------------------------------------------------------------------
# ARGUMENT DEFINITION
# -----------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """
    Construct the argument parser for the guext CLI.

    Returns:
        argparse.ArgumentParser: Configured parser instance.
    """
    p = argparse.ArgumentParser(
        prog=APP_NAME,
        description=(
            "Move the 'using' directives of every C# project under a directory "
            "into a single deduplicated GlobalUsings.cs per project."
        ),
        allow_abbrev=False,
    )

    # --- Target ---
    p.add_argument(
        "-d",
        dest="target_dir",
        default=None,
        help="Project or solution directory.",
    )
    p.add_argument(
        "-disable-isolation",
        dest="disable_isolation",
        action="store_true",
        help=(
            "(DANGEROUS, not recommended!) Disables copying the target files "
            "to a temporary working directory."
        ),
    )

    # --- Diagnostics ---
    p.add_argument(
        "-v", "-version",
        dest="show_version",
        action="store_true",
        help="Show version information.",
    )
    p.add_argument(
        "-debug",
        dest="debug",
        action="store_true",
        help="Elevate logging verbosity to DEBUG.",
    )
    p.add_argument(
        "-log-file",
        dest="log_file",
        default=None,
        help="Also write logs to this rotating file.",
    )

    # --- Configuration ---
    p.add_argument(
        "-use-defaults",
        dest="use_defaults",
        action="store_true",
        help="Ignore the persisted configuration file.",
    )
    p.add_argument(
        "-save-config",
        dest="save_config",
        action="store_true",
        help="Persist the logging preferences (-debug, -log-file) for later runs.",
    )
    p.add_argument(
        "-dump-config",
        dest="dump_config",
        action="store_true",
        help="Print the effective configuration as JSON and exit.",
    )

    # --- Format Selection ---
    p.add_argument(
        "-json",
        dest="json_output",
        action="store_true",
        help="Print the run result as JSON.",
    )

    return p

# -----------------------------------------------------------------------------
# ARGUMENT MAPPING
# -----------------------------------------------------------------------------

def args_to_overrides(args: argparse.Namespace) -> Dict[str, Any]:
    """
    Translate the argparse Namespace into configuration overrides.

    Diagnostics flags that were not given map to None so they never mask
    the persisted preferences. Isolation always comes from this run's
    command line.

    Args:
        args: Parsed command-line arguments.

    Returns:
        Dict[str, Any]: Configuration overrides subset.
    """
    overrides: Dict[str, Any] = {}

    overrides["target_dir"] = args.target_dir
    overrides["disable_isolation"] = bool(args.disable_isolation)
    overrides["log_level"] = "DEBUG" if args.debug else None
    overrides["log_file"] = args.log_file

    return overrides
