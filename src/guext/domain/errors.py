from __future__ import annotations

"""
Pipeline Error Taxonomy.

Every fatal condition of a run maps to one of these exceptions. Each carries
the operation that failed, the path it was working on and the underlying
cause, so the message printed to the user names all three.
"""

from typing import Optional


class GuextError(Exception):
    """Base class for fatal pipeline errors."""

    stage: str = "pipeline"

    def __init__(self, operation: str, path: str, cause: Optional[BaseException] = None):
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(f"{operation} failed for '{path}'{detail}")


class DiscoveryError(GuextError):
    """A directory could not be read while scanning for project roots."""

    stage = "discovery"


class IsolationError(GuextError):
    """The isolated workspace could not be created or populated."""

    stage = "isolation"


class ProcessingError(GuextError):
    """A source or aggregate file could not be read or rewritten."""

    stage = "processing"


class AggregationError(ProcessingError):
    """The aggregate file could not be written or deduplicated."""

    stage = "aggregation"
