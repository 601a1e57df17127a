import sys
import textwrap
from pathlib import Path

import pytest

import dotnet_build_mcp.tools.definitions.path_utils as path_utils
from dotnet_build_mcp.tools.definitions.result import ToolchainSettings

FAKE_DOTNET_SOURCE = """\
import json
import os
import sys
import time

print("ARGS:" + json.dumps(sys.argv[1:]), flush=True)
print("CWD:" + os.getcwd(), flush=True)
stderr_text = os.environ.get("FAKE_DOTNET_STDERR")
if stderr_text:
    print(stderr_text, file=sys.stderr, flush=True)
sleep_seconds = float(os.environ.get("FAKE_DOTNET_SLEEP", "0"))
if sleep_seconds:
    time.sleep(sleep_seconds)
sys.exit(int(os.environ.get("FAKE_DOTNET_EXIT", "0")))
"""


@pytest.fixture
def work_dir(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def windows_host(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make path translation behave as on a Windows host."""
    monkeypatch.setattr(path_utils, "is_windows_host", lambda: True)


@pytest.fixture
def posix_host(monkeypatch: pytest.MonkeyPatch) -> None:
    """Make path translation behave as on a non-Windows host."""
    monkeypatch.setattr(path_utils, "is_windows_host", lambda: False)


@pytest.fixture
def write_script(tmp_path: Path):
    """Write a Python script to tmp_path and return its path."""

    def _write(name: str, source: str) -> Path:
        script = tmp_path / name
        script.write_text(textwrap.dedent(source), encoding="utf-8")
        return script

    return _write


@pytest.fixture
def fake_dotnet(tmp_path: Path) -> Path:
    """Create an executable standing in for the dotnet CLI.

    It echoes its arguments and working directory, and its stderr text, sleep
    and exit code are controlled through FAKE_DOTNET_* environment variables.
    """
    if sys.platform == "win32":
        pytest.skip("fake dotnet executable relies on a shebang line")
    script = tmp_path / "bin" / "dotnet"
    script.parent.mkdir()
    script.write_text(f"#!{sys.executable}\n{FAKE_DOTNET_SOURCE}", encoding="utf-8")
    script.chmod(0o755)
    return script


@pytest.fixture
def fake_settings(fake_dotnet: Path) -> ToolchainSettings:
    return ToolchainSettings(executable=str(fake_dotnet))


@pytest.fixture
def project_file(work_dir: Path) -> Path:
    project_dir = work_dir / "src" / "App"
    project_dir.mkdir(parents=True)
    project = project_dir / "App.csproj"
    project.write_text(
        textwrap.dedent(
            """\
            <Project Sdk="Microsoft.NET.Sdk">
              <PropertyGroup>
                <OutputType>WinExe</OutputType>
                <TargetFramework>net8.0-windows</TargetFramework>
                <UseWPF>true</UseWPF>
              </PropertyGroup>
            </Project>
            """,
        ),
        encoding="utf-8",
    )
    return project
