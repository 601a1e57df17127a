"""Utility functions and helpers for the dotnet build server.

- hide_args: A decorator for modifying function signatures to hide specific parameters
"""

from dotnet_build_mcp.utils.hide_args import hide_args

__all__ = ["hide_args"]
