"""Minimal version helper for the wheel_picker package."""

from importlib import metadata

DISTRIBUTION_NAME = "wheel-picker"
UNKNOWN_VERSION = "0.0.0"


def get_version() -> str:
    """
    Get version for the installed distribution.

    The version itself is written by ``setuptools_scm`` at build time.

    :return: Version number, ``0.0.0`` when running from an uninstalled tree.
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return UNKNOWN_VERSION


__all__ = ["get_version"]
