"""Path helpers for toolchain tools.

Clients usually run inside WSL and hand us paths such as ``/mnt/e/src/App.csproj``.
When the server runs on the Windows host those must become ``E:\\src\\App.csproj``
before they reach the toolchain.
"""

import os
import sys

from dotnet_build_mcp.log import get_logger

logger = get_logger(__name__)

WSL_MOUNT_PREFIX = "/mnt/"
_DRIVE_INDEX = len(WSL_MOUNT_PREFIX)
_SEPARATOR_INDEX = _DRIVE_INDEX + 1


def is_windows_host() -> bool:
    """Check if this process executes commands on a Windows host."""
    return sys.platform == "win32"


def translate_path(path: str | None, *, windows_host: bool | None = None) -> str | None:
    """Convert a WSL mount path to a Windows path when running on Windows.

    ``/mnt/c/path/to/file`` becomes ``C:\\path\\to\\file``. Anything that does not
    have that shape, including paths already in Windows form, is returned as-is.

    Args:
        path: Path supplied by the client. Empty or None values pass through.
        windows_host: Override host detection, mostly for tests.

    Returns:
        The translated path, or the input unchanged.

    """
    if not path:
        return path

    if windows_host is None:
        windows_host = is_windows_host()

    if not windows_host or not path.startswith(WSL_MOUNT_PREFIX):
        logger.debug("Path left unchanged: %r", path)
        return path

    if len(path) <= _SEPARATOR_INDEX or path[_SEPARATOR_INDEX] != "/":
        logger.debug("Path does not match the WSL mount format: %r", path)
        return path

    drive_letter = path[_DRIVE_INDEX].upper()
    remaining_path = path[_SEPARATOR_INDEX + 1 :].replace("/", "\\")
    converted = f"{drive_letter}:\\{remaining_path}"
    logger.debug("Translated path %r to %r", path, converted)
    return converted


def translate_paths(*paths: str | None) -> list[str | None]:
    """Translate several paths at once."""
    return [translate_path(path) for path in paths]


def existing_directory(path: str | None) -> str | None:
    """Return the path if it is an existing directory, otherwise None."""
    if path and os.path.isdir(path):
        return path
    return None


def project_directory(project_path: str | None) -> str | None:
    """Get the directory of a project file to run the toolchain in.

    Returns None when the directory cannot be determined or does not exist, in
    which case the caller's current directory is used.

    """
    if not project_path:
        return None
    return existing_directory(os.path.dirname(project_path))
