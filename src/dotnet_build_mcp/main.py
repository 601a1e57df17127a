"""dotnet build MCP server entry point."""

from pathlib import Path

from dotenv import load_dotenv

from dotnet_build_mcp.args import Args, bind_and_run
from dotnet_build_mcp.list_tools import list_available_tools
from dotnet_build_mcp.log import get_logger, init_logging
from dotnet_build_mcp.server import create_server
from dotnet_build_mcp.version import show_version


def run(args: Args) -> None:
    """Configure and run the server."""
    if args.version:
        show_version()
        return
    if args.list_tools:
        list_available_tools()
        return

    cwd = Path.cwd()
    if not cwd.is_dir():
        msg = f"Current working directory is not a directory: {cwd}"
        raise NotADirectoryError(msg)
    load_dotenv(
        dotenv_path=cwd / ".env",
        override=False,
    )  # Load environment variables from .env file in the current directory

    init_logging(verbose=args.verbose, log_file=args.log_file)
    logger = get_logger(__name__)

    settings = args.toolchain_settings
    server = create_server(
        settings,
        host=args.effective_host,
        port=args.effective_port,
    )
    if args.transport == "stdio":
        logger.info("dotnet build MCP server starting on stdio")
    else:
        logger.info(
            "dotnet build MCP server starting on http://%s:%s (%s)",
            args.effective_host,
            args.effective_port,
            args.transport,
        )
    try:
        server.run(transport=args.transport)
    except KeyboardInterrupt:
        logger.info("Server stopped")
    except Exception as app_err:
        msg = f"Critical error while serving: {app_err}"
        logger.exception(msg)
        raise


def main() -> None:
    """Entry point for the CLI."""
    bind_and_run(run)


if __name__ == "__main__":
    main()
