"""Command and execution result models shared by the toolchain tools."""

from pydantic import BaseModel, ConfigDict, Field


class CommandSpec(BaseModel):
    """A fully assembled toolchain invocation.

    Built fresh for every tool call and consumed once by the process runner.
    """

    model_config = ConfigDict(frozen=True)

    executable: str = "dotnet"
    arguments: tuple[str, ...] = Field(
        default=(),
        description="Ordered argument tokens, already quoted where required.",
    )
    working_directory: str | None = None

    @property
    def command_line(self) -> str:
        """Argument string passed to the executable."""
        return " ".join(self.arguments)

    @property
    def display(self) -> str:
        """Human readable command, as reported back to the caller."""
        if not self.arguments:
            return self.executable
        return f"{self.executable} {self.command_line}"


class ExecutionResult(BaseModel):
    """Outcome of one process run."""

    model_config = ConfigDict(frozen=True)

    exit_code: int | None
    stdout: str = ""
    stderr: str = ""
    timed_out: bool = False
    duration_seconds: float = 0.0

    @property
    def ok(self) -> bool:
        """Check if the process ran to completion with a zero exit code."""
        return not self.timed_out and self.exit_code == 0


class ToolchainSettings(BaseModel):
    """Server-wide settings injected into every toolchain tool."""

    model_config = ConfigDict(frozen=True)

    executable: str = "dotnet"
    command_timeout: float | None = Field(
        default=None,
        description="Seconds before a toolchain command is killed, None to wait.",
    )
    run_timeout: float | None = Field(
        default=None,
        description="Seconds before `dotnet run` is killed, None to wait.",
    )


DEFAULT_SETTINGS = ToolchainSettings()
