"""Allow `python -m dotnet_build_mcp`."""

from dotnet_build_mcp.main import main

main()
