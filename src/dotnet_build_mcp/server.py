"""MCP server exposing the dotnet CLI tools."""

import inspect

from mcp.server.fastmcp import FastMCP

from dotnet_build_mcp.log import get_logger
from dotnet_build_mcp.tools.dotnet_tool import TOOLS
from dotnet_build_mcp.tools.definitions.result import DEFAULT_SETTINGS, ToolchainSettings
from dotnet_build_mcp.utils.hide_args import hide_args

logger = get_logger(__name__)

SERVER_NAME = "dotnet-build"
SERVER_INSTRUCTIONS = (
    "Builds, runs, packages and tests .NET projects on the host machine. "
    "Project paths may be given as WSL paths (/mnt/e/...) or Windows paths (E:\\...)."
)


def create_server(
    settings: ToolchainSettings = DEFAULT_SETTINGS,
    host: str = "0.0.0.0",  # noqa: S104  # nosec B104 reachable from WSL by design
    port: int = 5000,
) -> FastMCP:
    """Create the MCP server with every dotnet tool registered.

    Args:
        settings: Toolchain settings injected into the tools.
        host: Interface to listen on for HTTP transports.
        port: Port to listen on for HTTP transports.

    Returns:
        Configured FastMCP server, not yet running.

    """
    server = FastMCP(
        SERVER_NAME,
        instructions=SERVER_INSTRUCTIONS,
        host=host,
        port=port,
    )
    for operation, tool in TOOLS.items():
        wrapped = hide_args(tool, settings=settings)
        server.add_tool(
            wrapped,
            name=operation.value,
            description=inspect.getdoc(wrapped),
            structured_output=False,
        )
    logger.info(
        "Registered %d tools",
        len(TOOLS),
        extra={"executable": settings.executable},
    )
    return server
