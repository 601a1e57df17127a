"""dotnet CLI tools exposed to MCP clients.

Every tool accepts WSL paths (/mnt/e/...) as well as Windows paths (E:\\...),
runs one `dotnet` process on a worker thread and returns a plain-text report.
Failures never escape a tool: they come back as an error message naming the
operation.
"""

import asyncio
from collections.abc import Callable
from typing import Any

import dotnet_build_mcp.tools.definitions.commands as cmd
import dotnet_build_mcp.tools.definitions.project_info as pi
from dotnet_build_mcp.log import get_logger
from dotnet_build_mcp.tools.definitions.commands import Operation
from dotnet_build_mcp.tools.definitions.process_runner import run_command
from dotnet_build_mcp.tools.definitions.report import format_report
from dotnet_build_mcp.tools.definitions.result import (
    DEFAULT_SETTINGS,
    CommandSpec,
    ToolchainSettings,
)

logger = get_logger(__name__)


async def _execute(
    operation: str,
    build_spec: Callable[[], CommandSpec],
    timeout: float | None,
) -> str:
    """Build the command, run it off the event loop and format the report."""
    try:
        spec = build_spec()
        logger.info("Executing %s: %s", operation, spec.display)
        result = await asyncio.to_thread(run_command, spec, timeout)
        return format_report(spec, result, timeout)
    except Exception as e:
        logger.exception("Error executing %s", operation)
        return f"Error executing {operation}: {e}"


async def build_project(
    project_path: str,
    configuration: str = "Release",
    additional_args: str | None = None,
    suppress_warnings: bool = False,  # noqa: FBT001, FBT002
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Build a .NET project using the dotnet build command.

    Provide the full path to a .csproj or .sln file. Supports both WSL paths
    (/mnt/e/...) and Windows paths (E:\\...). Set suppress_warnings=true to
    minimize output with --nologo -v q --property WarningLevel=0 /clp:ErrorsOnly.

    Args:
        project_path: Path to the .csproj or .sln file.
        configuration: Build configuration.
        additional_args: Extra arguments appended to the dotnet command.
        suppress_warnings: Only report errors.
        settings: Toolchain settings.

    """
    return await _execute(
        "build",
        lambda: cmd.build(
            project_path,
            configuration,
            additional_args,
            suppress_warnings=suppress_warnings,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def rebuild_project(
    project_path: str,
    configuration: str = "Release",
    additional_args: str | None = None,
    suppress_warnings: bool = False,  # noqa: FBT001, FBT002
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Rebuild a .NET project, ignoring incremental build state.

    Supports both WSL and Windows paths. Set suppress_warnings=true to minimize
    output with --nologo -v q --property WarningLevel=0 /clp:ErrorsOnly.

    Args:
        project_path: Path to the .csproj or .sln file.
        configuration: Build configuration.
        additional_args: Extra arguments appended to the dotnet command.
        suppress_warnings: Only report errors.
        settings: Toolchain settings.

    """
    return await _execute(
        "rebuild",
        lambda: cmd.rebuild(
            project_path,
            configuration,
            additional_args,
            suppress_warnings=suppress_warnings,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def clean_project(
    project_path: str,
    configuration: str = "Release",
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Clean build artifacts (bin/obj output) for a .NET project.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "clean",
        lambda: cmd.clean(
            project_path,
            configuration,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def run_project(
    project_path: str,
    arguments: str | None = None,
    configuration: str = "Debug",
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Run a .NET project using dotnet run, with optional program arguments.

    Waits for the program to exit. Supports both WSL and Windows paths.

    Args:
        project_path: Path to the .csproj file.
        arguments: Command-line arguments passed to the program.
        configuration: Build configuration.
        settings: Toolchain settings.

    """
    return await _execute(
        "run",
        lambda: cmd.run(
            project_path,
            arguments,
            configuration,
            executable=settings.executable,
        ),
        settings.run_timeout,
    )


async def publish_project(
    project_path: str,
    output_path: str | None = None,
    configuration: str = "Release",
    runtime: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Publish a .NET project for deployment.

    Creates a self-contained or framework-dependent deployment package. Supports
    both WSL and Windows paths.

    Args:
        project_path: Path to the .csproj file.
        output_path: Directory for the published output.
        configuration: Build configuration.
        runtime: Target runtime identifier, e.g. win-x64.
        settings: Toolchain settings.

    """
    return await _execute(
        "publish",
        lambda: cmd.publish(
            project_path,
            output_path,
            configuration,
            runtime,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


def get_project_info(project_path: str) -> str:
    """Get project information from a .csproj file.

    Reports the target framework, output type and UI toolkit. Supports both WSL
    and Windows paths.
    """
    try:
        return pi.get_project_info(project_path)
    except Exception as e:
        logger.exception("Error getting project info")
        return f"Error getting project info: {e}"


async def add_package(
    project_path: str,
    package_name: str,
    version: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Add a NuGet package to a .NET project, optionally at a specific version.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "add package",
        lambda: cmd.add_package(
            project_path,
            package_name,
            version,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def remove_package(
    project_path: str,
    package_name: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Remove a NuGet package from a .NET project.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "remove package",
        lambda: cmd.remove_package(
            project_path,
            package_name,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def list_packages(
    project_path: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """List the NuGet packages of a .NET project with requested and resolved versions.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "list packages",
        lambda: cmd.list_packages(project_path, executable=settings.executable),
        settings.command_timeout,
    )


async def restore_packages(
    project_path: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Restore the NuGet dependencies of a .NET project.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "restore",
        lambda: cmd.restore(project_path, executable=settings.executable),
        settings.command_timeout,
    )


async def add_migration(
    project_path: str,
    migration_name: str,
    db_context: str | None = None,
    output_dir: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Create a new Entity Framework migration.

    Generates migration files for database schema changes. Supports both WSL and
    Windows paths.

    Args:
        project_path: Path to the .csproj file.
        migration_name: Name of the new migration.
        db_context: DbContext class to use.
        output_dir: Directory for the migration files.
        settings: Toolchain settings.

    """
    return await _execute(
        "add migration",
        lambda: cmd.add_migration(
            project_path,
            migration_name,
            db_context,
            output_dir,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def remove_migration(
    project_path: str,
    db_context: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Remove the last Entity Framework migration.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "remove migration",
        lambda: cmd.remove_migration(
            project_path,
            db_context,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def list_migrations(
    project_path: str,
    db_context: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """List applied and pending Entity Framework migrations.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "list migrations",
        lambda: cmd.list_migrations(
            project_path,
            db_context,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def update_database(
    project_path: str,
    migration: str | None = None,
    db_context: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Apply Entity Framework migrations to the database.

    Updates to the latest migration, or to `migration` when given. Supports both
    WSL and Windows paths.
    """
    return await _execute(
        "update database",
        lambda: cmd.update_database(
            project_path,
            migration,
            db_context,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def create_project(
    project_type: str,
    project_name: str,
    output_path: str | None = None,
    framework: str | None = None,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Create a new .NET project from a template.

    Args:
        project_type: Template short name, e.g. wpf, console, classlib.
        project_name: Name of the new project.
        output_path: Directory to create the project in, WSL or Windows form.
        framework: Target framework, e.g. net8.0.
        settings: Toolchain settings.

    """
    return await _execute(
        "create project",
        lambda: cmd.create_project(
            project_type,
            project_name,
            output_path,
            framework,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def add_project_reference(
    project_path: str,
    referenced_project_path: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Add a reference from one project to another.

    Both paths support WSL and Windows formats.
    """
    return await _execute(
        "add project reference",
        lambda: cmd.add_reference(
            project_path,
            referenced_project_path,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def remove_project_reference(
    project_path: str,
    referenced_project_path: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Remove a reference from one project to another.

    Both paths support WSL and Windows formats.
    """
    return await _execute(
        "remove project reference",
        lambda: cmd.remove_reference(
            project_path,
            referenced_project_path,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


async def list_project_references(
    project_path: str,
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """List the projects referenced by a project.

    Supports both WSL and Windows paths.
    """
    return await _execute(
        "list project references",
        lambda: cmd.list_references(project_path, executable=settings.executable),
        settings.command_timeout,
    )


async def run_tests(
    project_path: str,
    configuration: str = "Debug",
    test_filter: str | None = None,
    collect_coverage: bool = False,  # noqa: FBT001, FBT002
    settings: ToolchainSettings = DEFAULT_SETTINGS,
) -> str:
    """Run the unit tests of a .NET test project.

    Supports both WSL and Windows paths.

    Args:
        project_path: Path to the test project or solution.
        configuration: Build configuration.
        test_filter: dotnet test filter expression.
        collect_coverage: Collect code coverage.
        settings: Toolchain settings.

    """
    return await _execute(
        "tests",
        lambda: cmd.run_tests(
            project_path,
            configuration,
            test_filter,
            collect_coverage=collect_coverage,
            executable=settings.executable,
        ),
        settings.command_timeout,
    )


TOOLS: dict[Operation, Callable[..., Any]] = {
    Operation.BUILD: build_project,
    Operation.REBUILD: rebuild_project,
    Operation.CLEAN: clean_project,
    Operation.RUN: run_project,
    Operation.PUBLISH: publish_project,
    Operation.GET_PROJECT_INFO: get_project_info,
    Operation.ADD_PACKAGE: add_package,
    Operation.REMOVE_PACKAGE: remove_package,
    Operation.LIST_PACKAGES: list_packages,
    Operation.RESTORE: restore_packages,
    Operation.ADD_MIGRATION: add_migration,
    Operation.REMOVE_MIGRATION: remove_migration,
    Operation.LIST_MIGRATIONS: list_migrations,
    Operation.UPDATE_DATABASE: update_database,
    Operation.CREATE_PROJECT: create_project,
    Operation.ADD_REFERENCE: add_project_reference,
    Operation.REMOVE_REFERENCE: remove_project_reference,
    Operation.LIST_REFERENCES: list_project_references,
    Operation.RUN_TESTS: run_tests,
}
"""Every tool the server exposes, one per operation."""


def get_tool(operation: Operation | str) -> Callable[..., Any]:
    """Look up the tool function for an operation or tool name.

    Raises:
        ValueError: If the name is not a known operation.

    """
    return TOOLS[Operation(operation)]
