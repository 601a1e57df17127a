"""Tests for hiding injected parameters from tool signatures."""

import inspect

import pytest

from dotnet_build_mcp.utils import hide_args


class TestHideArgs:
    """Signature, docstring and call behaviour of wrapped tools."""

    def test_signature_drops_hidden_parameter(self, describe_build, injected_settings):
        """Test that the hidden parameter leaves the signature."""
        wrapped = hide_args(describe_build, settings=injected_settings)

        params = inspect.signature(wrapped).parameters
        assert list(params) == ["project_path", "configuration"]
        assert params["configuration"].default == "Release"

    def test_docstring_drops_hidden_parameter(self, describe_build, injected_settings):
        """Test that the hidden parameter leaves the docstring."""
        wrapped = hide_args(describe_build, settings=injected_settings)

        doc = inspect.getdoc(wrapped)
        assert doc
        assert "project_path: Path to the project file." in doc
        assert "configuration: Build configuration." in doc
        assert "settings:" not in doc
        assert "Toolchain settings" not in doc

    def test_injects_hidden_value(self, describe_build, injected_settings):
        """Test that the hidden value is passed on every call."""
        wrapped = hide_args(describe_build, settings=injected_settings)

        assert wrapped("App.csproj") == (
            "/opt/dotnet/dotnet build App.csproj --configuration Release"
        )
        assert wrapped("App.csproj", configuration="Debug").endswith(
            "--configuration Debug",
        )

    def test_hidden_parameter_cannot_be_passed(self, describe_build, injected_settings):
        """Test that callers cannot pass the hidden parameter."""
        wrapped = hide_args(describe_build, settings=injected_settings)

        with pytest.raises(TypeError):
            wrapped("App.csproj", settings=None)

    def test_unknown_names_return_original(self, describe_build):
        """Test that unknown names leave the function as is."""
        assert hide_args(describe_build, api_key="secret") is describe_build

    def test_preserves_name(self, describe_build, injected_settings):
        """Test that the function name is kept."""
        wrapped = hide_args(describe_build, settings=injected_settings)

        assert wrapped.__name__ == "describe_build"

    def test_original_is_untouched(self, describe_build, injected_settings):
        """Test that wrapping does not change the original."""
        _ = hide_args(describe_build, settings=injected_settings)

        assert "settings" in inspect.signature(describe_build).parameters
        assert describe_build("App.csproj") == (
            "dotnet build App.csproj --configuration Release"
        )


class TestHideArgsCoroutines:
    """Coroutine tools stay awaitable after wrapping."""

    def test_wrapper_is_coroutine_function(self, describe_run, injected_settings):
        """Test that a coroutine tool stays a coroutine function."""
        wrapped = hide_args(describe_run, settings=injected_settings)

        assert inspect.iscoroutinefunction(wrapped)
        assert list(inspect.signature(wrapped).parameters) == ["project_path"]

    @pytest.mark.asyncio
    async def test_awaits_with_injected_value(self, describe_run, injected_settings):
        """Test awaiting the wrapper with the injected value."""
        wrapped = hide_args(describe_run, settings=injected_settings)

        result = await wrapped("App.csproj")

        assert result == "/opt/dotnet/dotnet run --project App.csproj (5.0)"

    def test_missing_docstring(self, describe_run, injected_settings):
        """Test wrapping a tool without a docstring."""
        wrapped = hide_args(describe_run, settings=injected_settings)

        assert not wrapped.__doc__
