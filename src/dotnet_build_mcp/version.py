"""Installed version of the dotnet build server."""

from importlib.metadata import PackageNotFoundError, version

DISTRIBUTION_NAME = "dotnet-build-mcp"


def get_version() -> str:
    """Get the installed package version.

    Returns:
        Version string or "unknown" if the distribution metadata is missing or
        unreadable.

    """
    try:
        return version(DISTRIBUTION_NAME)
    except (PackageNotFoundError, ValueError):
        return "unknown"


def show_version() -> None:
    """Print the server name and version."""
    app_version = get_version()
    if app_version == "unknown":
        print(f"{DISTRIBUTION_NAME} (version unknown)")  # noqa: T201
    else:
        print(f"{DISTRIBUTION_NAME} {app_version}")  # noqa: T201
