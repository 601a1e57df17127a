"""Tests for the MCP server wiring."""

import pytest
from mcp.server.fastmcp import FastMCP

from dotnet_build_mcp.server import SERVER_NAME, create_server
from dotnet_build_mcp.tools.definitions.commands import Operation
from dotnet_build_mcp.tools.definitions.result import ToolchainSettings


@pytest.fixture
def server() -> FastMCP:
    return create_server(ToolchainSettings(executable="dotnet"), port=5123)


class TestCreateServer:
    """Tool registration."""

    def test_server_identity(self, server: FastMCP) -> None:
        """Test the server name and port."""
        assert server.name == SERVER_NAME
        assert server.settings.port == 5123

    @pytest.mark.asyncio
    async def test_registers_every_operation(self, server: FastMCP) -> None:
        """Test that every operation is registered as a tool."""
        tools = await server.list_tools()
        assert {tool.name for tool in tools} == {op.value for op in Operation}

    @pytest.mark.asyncio
    async def test_settings_hidden_from_schema(self, server: FastMCP) -> None:
        """Test that the injected settings are not part of the schema."""
        tools = {tool.name: tool for tool in await server.list_tools()}

        build = tools["build_project"]
        properties = build.inputSchema["properties"]
        assert "settings" not in properties
        assert set(properties) == {
            "project_path",
            "configuration",
            "additional_args",
            "suppress_warnings",
        }
        assert build.inputSchema["required"] == ["project_path"]
        assert "settings" not in (build.description or "")

    @pytest.mark.asyncio
    async def test_descriptions_from_docstrings(self, server: FastMCP) -> None:
        """Test that tool descriptions come from docstrings."""
        tools = {tool.name: tool for tool in await server.list_tools()}

        assert tools["clean_project"].description.startswith(
            "Clean build artifacts",
        )
        assert "WSL" in tools["get_project_info"].description
