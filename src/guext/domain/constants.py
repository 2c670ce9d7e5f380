from __future__ import annotations

"""
Domain Constants.

File-format contracts of the C# global using extraction: which files mark a
project root, which files are rewritten, how a directive is recognized and
where its global form is collected.
"""

APP_NAME = "guext"
DISTRIBUTION_NAME = "guext"

DEFAULT_DESCRIPTOR_PATTERN = "*.csproj"
DEFAULT_SOURCE_EXTENSION = ".cs"
DEFAULT_DIRECTIVE_PREFIX = "using "
DEFAULT_AGGREGATE_FILE_NAME = "GlobalUsings.cs"
DEFAULT_GLOBAL_MARKER = "global"
DEFAULT_STAGING_DIR_NAME = ".guext-tmp"

DEFAULT_LOG_LEVEL = "INFO"

UNDEFINED = "undefined"

# Process exit codes
EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_USAGE = 2
EXIT_NO_PROJECTS = 3
EXIT_INTERRUPTED = 130
