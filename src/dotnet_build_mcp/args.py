"""Parse and organize app args."""

import os
from collections.abc import Callable
from pathlib import Path
from typing import Annotated, Literal

import typer
from pydantic import BaseModel, ConfigDict

from dotnet_build_mcp.tools.definitions.result import ToolchainSettings

DEFAULT_HOST = "0.0.0.0"  # noqa: S104  # nosec B104 the WSL client connects over the network
DEFAULT_PORT = 5000
DEFAULT_EXECUTABLE = "dotnet"

Transport = Literal["sse", "streamable-http", "stdio"]


def _env_float(name: str) -> float | None:
    raw = os.environ.get(name)
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError as e:
        msg = f"Environment variable {name} must be a number of seconds, got '{raw}'"
        raise ValueError(msg) from e


class Args(BaseModel):
    """App args."""

    model_config = ConfigDict(frozen=True)

    host: str | None = None
    port: int | None = None
    transport: Transport = "sse"
    dotnet: str | None = None
    command_timeout: float | None = None
    run_timeout: float | None = None
    verbose: bool = False
    log_file: Path | None = None
    list_tools: bool = False
    version: bool = False

    @property
    def effective_host(self) -> str:
        """Get the interface to listen on."""
        return self.host or os.environ.get("DOTNET_MCP_HOST") or DEFAULT_HOST

    @property
    def effective_port(self) -> int:
        """Get the port to listen on."""
        if self.port is not None:
            return self.port
        raw = os.environ.get("DOTNET_MCP_PORT")
        if not raw:
            return DEFAULT_PORT
        try:
            return int(raw)
        except ValueError as e:
            msg = f"Environment variable DOTNET_MCP_PORT must be an integer, got '{raw}'"
            raise ValueError(msg) from e

    @property
    def toolchain_settings(self) -> ToolchainSettings:
        """Get the settings injected into the dotnet tools.

        Command-line values take precedence over environment variables.

        Returns:
            ToolchainSettings: executable and timeouts for toolchain commands.

        """
        executable = (
            self.dotnet or os.environ.get("DOTNET_MCP_DOTNET") or DEFAULT_EXECUTABLE
        )
        command_timeout = self.command_timeout
        if command_timeout is None:
            command_timeout = _env_float("DOTNET_MCP_COMMAND_TIMEOUT")
        run_timeout = self.run_timeout
        if run_timeout is None:
            run_timeout = _env_float("DOTNET_MCP_RUN_TIMEOUT")
        return ToolchainSettings(
            executable=executable,
            command_timeout=command_timeout,
            run_timeout=run_timeout,
        )


def build_app(app_main: Callable[[Args], None]) -> typer.Typer:
    """Create the command-line app that parses args and calls app_main."""
    app = typer.Typer(add_completion=False, no_args_is_help=False)

    @app.command()
    def serve(  # noqa: PLR0913
        host: Annotated[
            str | None,
            typer.Option(
                help=f"Interface to listen on (default: $DOTNET_MCP_HOST or {DEFAULT_HOST})",
            ),
        ] = None,
        port: Annotated[
            int | None,
            typer.Option(
                help=f"Port to listen on (default: $DOTNET_MCP_PORT or {DEFAULT_PORT})",
            ),
        ] = None,
        transport: Annotated[
            str,
            typer.Option(help="MCP transport: sse, streamable-http or stdio"),
        ] = "sse",
        dotnet: Annotated[
            str | None,
            typer.Option(help="dotnet executable (default: $DOTNET_MCP_DOTNET or dotnet)"),
        ] = None,
        command_timeout: Annotated[
            float | None,
            typer.Option(
                help=(
                    "Seconds before a dotnet command is killed "
                    "(default: $DOTNET_MCP_COMMAND_TIMEOUT or no limit)"
                ),
            ),
        ] = None,
        run_timeout: Annotated[
            float | None,
            typer.Option(
                help=(
                    "Seconds before `dotnet run` is killed "
                    "(default: $DOTNET_MCP_RUN_TIMEOUT or no limit)"
                ),
            ),
        ] = None,
        verbose: Annotated[
            bool,
            typer.Option("--verbose", help="Enables verbose (DEBUG) logging"),
        ] = False,
        log_file: Annotated[
            Path | None,
            typer.Option(help="Also write logs to this file"),
        ] = None,
        list_tools: Annotated[
            bool,
            typer.Option("--list-tools", help="List available tools and exit"),
        ] = False,
        version: Annotated[
            bool,
            typer.Option("--version", help="Show version and exit"),
        ] = False,
    ) -> None:
        if transport not in ("sse", "streamable-http", "stdio"):
            msg = f"unsupported transport '{transport}'"
            raise typer.BadParameter(msg, param_hint="--transport")
        app_main(
            Args(
                host=host,
                port=port,
                transport=transport,
                dotnet=dotnet,
                command_timeout=command_timeout,
                run_timeout=run_timeout,
                verbose=verbose,
                log_file=log_file,
                list_tools=list_tools,
                version=version,
            ),
        )

    return app


def bind_and_run(app_main: Callable[[Args], None]) -> None:
    """Parse args and run the app passing the parsed args."""
    build_app(app_main)()
