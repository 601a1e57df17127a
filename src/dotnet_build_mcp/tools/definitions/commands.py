"""Build `dotnet` command lines for every supported operation.

Each builder translates its path-valued parameters once with `translate_path` and
wraps them in double quotes. Other flag values are interpolated as given.
"""

from enum import Enum

from dotnet_build_mcp.tools.definitions.path_utils import (
    existing_directory,
    project_directory,
    translate_path,
    translate_paths,
)
from dotnet_build_mcp.tools.definitions.result import CommandSpec

QUIET_ARGS: tuple[str, ...] = (
    "--nologo",
    "-v",
    "q",
    "--property",
    "WarningLevel=0",
    "/clp:ErrorsOnly",
)
"""Flags appended when the caller asks to suppress warnings."""

NO_INCREMENTAL = "--no-incremental"
COLLECT_COVERAGE = '--collect:"Code Coverage"'


class Operation(str, Enum):
    """Logical toolchain operations, valued by their tool name."""

    BUILD = "build_project"
    REBUILD = "rebuild_project"
    CLEAN = "clean_project"
    RUN = "run_project"
    PUBLISH = "publish_project"
    GET_PROJECT_INFO = "get_project_info"
    ADD_PACKAGE = "add_package"
    REMOVE_PACKAGE = "remove_package"
    LIST_PACKAGES = "list_packages"
    RESTORE = "restore_packages"
    ADD_MIGRATION = "add_migration"
    REMOVE_MIGRATION = "remove_migration"
    LIST_MIGRATIONS = "list_migrations"
    UPDATE_DATABASE = "update_database"
    CREATE_PROJECT = "create_project"
    ADD_REFERENCE = "add_project_reference"
    REMOVE_REFERENCE = "remove_project_reference"
    LIST_REFERENCES = "list_project_references"
    RUN_TESTS = "run_tests"


def quote(value: str | None) -> str:
    """Wrap a value that may contain spaces in double quotes.

    Backslashes that precede a double quote, including the closing one, are
    doubled and embedded double quotes are escaped, as `subprocess.list2cmdline`
    does, so `E:\\out\\` stays one argument.
    """
    quoted: list[str] = []
    backslashes = 0
    for char in value or "":
        if char == "\\":
            backslashes += 1
            continue
        if char == '"':
            quoted.append("\\" * (backslashes * 2 + 1) + char)
        else:
            quoted.append("\\" * backslashes + char)
        backslashes = 0
    quoted.append("\\" * (backslashes * 2))
    return '"' + "".join(quoted) + '"'


def _in_project_dir(
    args: list[str],
    project: str | None,
    executable: str,
) -> CommandSpec:
    return CommandSpec(
        executable=executable,
        arguments=tuple(args),
        working_directory=project_directory(project),
    )


def _with_context(args: list[str], db_context: str | None) -> list[str]:
    if db_context:
        args.extend(["--context", db_context])
    return args


def _build_like(
    project_path: str,
    configuration: str,
    additional_args: str | None,
    *,
    suppress_warnings: bool,
    no_incremental: bool,
    executable: str,
) -> CommandSpec:
    project = translate_path(project_path)
    args = ["build", quote(project), "--configuration", configuration]
    if no_incremental:
        args.append(NO_INCREMENTAL)
    if additional_args and additional_args.strip():
        args.append(additional_args.strip())
    if suppress_warnings:
        args.extend(QUIET_ARGS)
    return _in_project_dir(args, project, executable)


def build(
    project_path: str,
    configuration: str = "Release",
    additional_args: str | None = None,
    *,
    suppress_warnings: bool = False,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet build`."""
    return _build_like(
        project_path,
        configuration,
        additional_args,
        suppress_warnings=suppress_warnings,
        no_incremental=False,
        executable=executable,
    )


def rebuild(
    project_path: str,
    configuration: str = "Release",
    additional_args: str | None = None,
    *,
    suppress_warnings: bool = False,
    executable: str = "dotnet",
) -> CommandSpec:
    """Non-incremental `dotnet build`; the CLI has no rebuild verb."""
    return _build_like(
        project_path,
        configuration,
        additional_args,
        suppress_warnings=suppress_warnings,
        no_incremental=True,
        executable=executable,
    )


def clean(
    project_path: str,
    configuration: str = "Release",
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet clean`."""
    project = translate_path(project_path)
    args = ["clean", quote(project), "--configuration", configuration]
    return _in_project_dir(args, project, executable)


def run(
    project_path: str,
    arguments: str | None = None,
    configuration: str = "Debug",
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet run`, forwarding `arguments` to the application after `--`."""
    project = translate_path(project_path)
    args = ["run", "--project", quote(project), "--configuration", configuration]
    if arguments:
        args.extend(["--", arguments])
    return _in_project_dir(args, project, executable)


def publish(
    project_path: str,
    output_path: str | None = None,
    configuration: str = "Release",
    runtime: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet publish`."""
    project, output = translate_paths(project_path, output_path)
    args = ["publish", quote(project), "--configuration", configuration]
    if output:
        args.extend(["--output", quote(output)])
    if runtime:
        args.extend(["--runtime", runtime])
    return _in_project_dir(args, project, executable)


def add_package(
    project_path: str,
    package_name: str,
    version: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet add <project> package`."""
    project = translate_path(project_path)
    args = ["add", quote(project), "package", package_name]
    if version:
        args.extend(["--version", version])
    return _in_project_dir(args, project, executable)


def remove_package(
    project_path: str,
    package_name: str,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet remove <project> package`."""
    project = translate_path(project_path)
    args = ["remove", quote(project), "package", package_name]
    return _in_project_dir(args, project, executable)


def list_packages(project_path: str, *, executable: str = "dotnet") -> CommandSpec:
    """`dotnet list <project> package`."""
    project = translate_path(project_path)
    return _in_project_dir(["list", quote(project), "package"], project, executable)


def restore(project_path: str, *, executable: str = "dotnet") -> CommandSpec:
    """`dotnet restore`."""
    project = translate_path(project_path)
    return _in_project_dir(["restore", quote(project)], project, executable)


def add_migration(
    project_path: str,
    migration_name: str,
    db_context: str | None = None,
    output_dir: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet ef migrations add`."""
    project, output = translate_paths(project_path, output_dir)
    args = ["ef", "migrations", "add", migration_name, "--project", quote(project)]
    _with_context(args, db_context)
    if output:
        args.extend(["--output-dir", quote(output)])
    return _in_project_dir(args, project, executable)


def remove_migration(
    project_path: str,
    db_context: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet ef migrations remove`."""
    project = translate_path(project_path)
    args = ["ef", "migrations", "remove", "--project", quote(project)]
    return _in_project_dir(_with_context(args, db_context), project, executable)


def list_migrations(
    project_path: str,
    db_context: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet ef migrations list`."""
    project = translate_path(project_path)
    args = ["ef", "migrations", "list", "--project", quote(project)]
    return _in_project_dir(_with_context(args, db_context), project, executable)


def update_database(
    project_path: str,
    migration: str | None = None,
    db_context: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet ef database update`, optionally to a target migration."""
    project = translate_path(project_path)
    args = ["ef", "database", "update"]
    if migration:
        args.append(migration)
    args.extend(["--project", quote(project)])
    return _in_project_dir(_with_context(args, db_context), project, executable)


def create_project(
    project_type: str,
    project_name: str,
    output_path: str | None = None,
    framework: str | None = None,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet new`, run from the output directory when it already exists."""
    output = translate_path(output_path)
    args = ["new", project_type, "--name", project_name]
    if output:
        args.extend(["--output", quote(output)])
    if framework:
        args.extend(["--framework", framework])
    return CommandSpec(
        executable=executable,
        arguments=tuple(args),
        working_directory=existing_directory(output),
    )


def _reference(
    verb: str,
    project_path: str,
    referenced_project_path: str,
    executable: str,
) -> CommandSpec:
    project, referenced = translate_paths(project_path, referenced_project_path)
    args = [verb, quote(project), "reference", quote(referenced)]
    return _in_project_dir(args, project, executable)


def add_reference(
    project_path: str,
    referenced_project_path: str,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet add <project> reference <referenced>`."""
    return _reference("add", project_path, referenced_project_path, executable)


def remove_reference(
    project_path: str,
    referenced_project_path: str,
    *,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet remove <project> reference <referenced>`."""
    return _reference("remove", project_path, referenced_project_path, executable)


def list_references(project_path: str, *, executable: str = "dotnet") -> CommandSpec:
    """`dotnet list <project> reference`."""
    project = translate_path(project_path)
    return _in_project_dir(["list", quote(project), "reference"], project, executable)


def run_tests(
    project_path: str,
    configuration: str = "Debug",
    test_filter: str | None = None,
    *,
    collect_coverage: bool = False,
    executable: str = "dotnet",
) -> CommandSpec:
    """`dotnet test`."""
    project = translate_path(project_path)
    args = ["test", quote(project), "--configuration", configuration]
    if test_filter:
        args.extend(["--filter", quote(test_filter)])
    if collect_coverage:
        args.append(COLLECT_COVERAGE)
    return _in_project_dir(args, project, executable)
