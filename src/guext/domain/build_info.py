from __future__ import annotations

"""
Build Metadata.

The version comes from the installed distribution metadata. Build time and
builder platform come from 'guext._build_info', a module the setup.py build
step generates inside built packages. Source checkouts and editable installs
have no such module and report "undefined".
"""

import importlib
from dataclasses import dataclass
from importlib import metadata
from typing import List

from guext.domain.constants import APP_NAME, DISTRIBUTION_NAME, UNDEFINED

BUILD_STAMP_MODULE = "guext._build_info"


@dataclass(frozen=True)
class BuildInfo:
    """Immutable build provenance report."""
    version: str = UNDEFINED
    build_time: str = UNDEFINED
    builder_os: str = UNDEFINED
    builder_arch: str = UNDEFINED


def load_build_info(stamp_module: str = BUILD_STAMP_MODULE) -> BuildInfo:
    """
    Collect the build metadata of the running package.

    Args:
        stamp_module: Dotted name of the generated build stamp module.

    Returns:
        BuildInfo: Metadata with 'undefined' for anything not stamped.
    """
    try:
        version = metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        version = UNDEFINED

    try:
        stamp = importlib.import_module(stamp_module)
    except ModuleNotFoundError:
        stamp = None

    return BuildInfo(
        version=version or UNDEFINED,
        build_time=getattr(stamp, "BUILD_TIME", "") or UNDEFINED,
        builder_os=getattr(stamp, "BUILDER_OS", "") or UNDEFINED,
        builder_arch=getattr(stamp, "BUILDER_ARCH", "") or UNDEFINED,
    )


def format_build_info(info: BuildInfo) -> List[str]:
    """Render the version report lines."""
    return [
        f"{APP_NAME} version info:",
        f"- Version: {info.version}",
        f"- Build time: {info.build_time}",
        f"- Builder OS: {info.builder_os}",
        f"- Builder Arch: {info.builder_arch}",
    ]
