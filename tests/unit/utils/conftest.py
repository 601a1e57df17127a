"""Fixtures for utility tests."""

import pytest

from dotnet_build_mcp.tools.definitions.result import ToolchainSettings


@pytest.fixture
def injected_settings() -> ToolchainSettings:
    return ToolchainSettings(executable="/opt/dotnet/dotnet", run_timeout=5.0)


@pytest.fixture
def describe_build():
    """Sync tool taking settings as its last parameter."""

    def describe_build(
        project_path: str,
        configuration: str = "Release",
        settings: ToolchainSettings | None = None,
    ) -> str:
        """Describe a build.

        Args:
            project_path: Path to the project file.
            configuration: Build configuration.
            settings: Toolchain settings.

        Returns:
            One line describing the build.

        """
        executable = settings.executable if settings else "dotnet"
        return f"{executable} build {project_path} --configuration {configuration}"

    return describe_build


@pytest.fixture
def describe_run():
    """Coroutine tool without a docstring."""

    async def describe_run(project_path: str, settings: ToolchainSettings) -> str:
        return f"{settings.executable} run --project {project_path} ({settings.run_timeout})"

    return describe_run
