"""List and display the tools the server exposes."""

import inspect

from rich.console import Console
from rich.table import Table

from dotnet_build_mcp.tools.dotnet_tool import TOOLS


def _summary(doc: str | None) -> str:
    if not doc:
        return ""
    return doc.strip().splitlines()[0]


def render_tool_table(console: Console) -> None:
    """Render every tool with its one-line summary as a formatted table."""
    table = Table(
        show_header=True,
        header_style="bold cyan",
        show_edge=False,
        show_lines=False,
        box=None,
    )
    table.add_column("Tool", style="green")
    table.add_column("Description", style="dim")

    for operation, tool in TOOLS.items():
        table.add_row(operation.value, _summary(inspect.getdoc(tool)))

    console.print(table)


def list_available_tools() -> None:
    """Print the tool table to stdout."""
    render_tool_table(Console())
