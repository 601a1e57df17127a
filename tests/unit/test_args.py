"""Tests for argument and environment resolution."""

import pytest

from typer.testing import CliRunner

from dotnet_build_mcp.args import DEFAULT_HOST, DEFAULT_PORT, Args, build_app


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "DOTNET_MCP_HOST",
        "DOTNET_MCP_PORT",
        "DOTNET_MCP_DOTNET",
        "DOTNET_MCP_COMMAND_TIMEOUT",
        "DOTNET_MCP_RUN_TIMEOUT",
    ):
        monkeypatch.delenv(name, raising=False)


class TestArgs:
    """Effective settings."""

    def test_defaults(self) -> None:
        """Test the built-in defaults."""
        args = Args()

        assert args.effective_host == DEFAULT_HOST
        assert args.effective_port == DEFAULT_PORT
        settings = args.toolchain_settings
        assert settings.executable == "dotnet"
        assert settings.command_timeout is None
        assert settings.run_timeout is None

    def test_environment_fallbacks(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that environment variables fill unset options."""
        monkeypatch.setenv("DOTNET_MCP_HOST", "127.0.0.1")
        monkeypatch.setenv("DOTNET_MCP_PORT", "6000")
        monkeypatch.setenv("DOTNET_MCP_DOTNET", "C:\\dotnet\\dotnet.exe")
        monkeypatch.setenv("DOTNET_MCP_RUN_TIMEOUT", "90")

        args = Args()

        assert args.effective_host == "127.0.0.1"
        assert args.effective_port == 6000
        assert args.toolchain_settings.executable == "C:\\dotnet\\dotnet.exe"
        assert args.toolchain_settings.run_timeout == 90.0

    def test_arguments_override_environment(
        self,
        monkeypatch: pytest.MonkeyPatch,
    ) -> None:
        """Test that options take precedence over the environment."""
        monkeypatch.setenv("DOTNET_MCP_PORT", "6000")
        monkeypatch.setenv("DOTNET_MCP_COMMAND_TIMEOUT", "600")

        args = Args(port=7000, command_timeout=120.0, dotnet="/usr/bin/dotnet")

        assert args.effective_port == 7000
        assert args.toolchain_settings.command_timeout == 120.0
        assert args.toolchain_settings.executable == "/usr/bin/dotnet"

    def test_invalid_port(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-numeric port variable is rejected by name."""
        monkeypatch.setenv("DOTNET_MCP_PORT", "http")
        with pytest.raises(ValueError, match="DOTNET_MCP_PORT"):
            _ = Args().effective_port

    def test_invalid_timeout(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test that a non-numeric timeout variable is rejected by name."""
        monkeypatch.setenv("DOTNET_MCP_RUN_TIMEOUT", "forever")
        with pytest.raises(ValueError, match="DOTNET_MCP_RUN_TIMEOUT"):
            _ = Args().toolchain_settings


class TestCommandLine:
    """Options parsed by the command-line app."""

    def _parse(self, *argv: str) -> tuple[list[Args], object]:
        parsed: list[Args] = []
        result = CliRunner().invoke(build_app(parsed.append), list(argv))
        return parsed, result

    def test_no_options(self) -> None:
        """Test parsing an empty command line."""
        parsed, result = self._parse()

        assert result.exit_code == 0
        assert parsed == [Args()]

    def test_all_options(self, tmp_path) -> None:
        """Test parsing every option."""
        log_file = tmp_path / "server.log"
        parsed, result = self._parse(
            "--host",
            "127.0.0.1",
            "--port",
            "5100",
            "--transport",
            "stdio",
            "--dotnet",
            "/opt/dotnet/dotnet",
            "--command-timeout",
            "600",
            "--run-timeout",
            "30.5",
            "--verbose",
            "--log-file",
            str(log_file),
        )

        assert result.exit_code == 0
        (args,) = parsed
        assert args.effective_host == "127.0.0.1"
        assert args.effective_port == 5100
        assert args.transport == "stdio"
        assert args.verbose
        assert args.log_file == log_file
        assert args.toolchain_settings.executable == "/opt/dotnet/dotnet"
        assert args.toolchain_settings.command_timeout == 600.0
        assert args.toolchain_settings.run_timeout == 30.5

    def test_flags(self) -> None:
        """Test the informational flags."""
        parsed, result = self._parse("--list-tools", "--version")

        assert result.exit_code == 0
        assert parsed[0].list_tools
        assert parsed[0].version

    def test_unknown_transport_rejected(self) -> None:
        """Test that an unknown transport is a usage error."""
        parsed, result = self._parse("--transport", "carrier-pigeon")

        assert result.exit_code != 0
        assert parsed == []

    def test_invalid_port_rejected(self) -> None:
        """Test that a non-numeric port is a usage error."""
        parsed, result = self._parse("--port", "http")

        assert result.exit_code != 0
        assert parsed == []
