"""Plain-text reports returned to MCP clients."""

from dotnet_build_mcp.tools.definitions.result import CommandSpec, ExecutionResult

OUTPUT_HEADER = "--- Output ---"
ERRORS_HEADER = "--- Errors ---"


def format_report(
    spec: CommandSpec,
    result: ExecutionResult,
    timeout: float | None = None,
) -> str:
    """Render the command, its exit status and captured output as text."""
    lines = [f"Command: {spec.display}"]
    if result.timed_out:
        waited = f"{timeout:g} seconds" if timeout is not None else "the time limit"
        lines.append(f"Timed Out: process terminated after {waited}")
    else:
        lines.append(f"Exit Code: {result.exit_code}")

    if result.stdout:
        lines.extend(["", OUTPUT_HEADER, result.stdout])

    if result.stderr:
        lines.extend(["", ERRORS_HEADER, result.stderr])

    return "\n".join(lines) + "\n"
