"""Run toolchain commands and capture their output."""

import os
import shlex
import signal
import subprocess  # nosec B404 commands are assembled from a fixed set of operations
import threading
import time
from typing import IO

from dotnet_build_mcp.log import get_logger
from dotnet_build_mcp.tools.definitions.result import CommandSpec, ExecutionResult

logger = get_logger(__name__)

DEFAULT_KILL_GRACE_SECONDS = 3.0
"""Seconds to wait after terminating a timed out process before killing it."""

_IS_WINDOWS = os.name == "nt"


class ToolchainError(Exception):
    """Base exception for toolchain execution errors."""


class ProcessLaunchError(ToolchainError):
    """The toolchain process could not be started at all."""

    def __init__(self, executable: str, reason: str) -> None:
        """Initialize the error with the executable that failed to start."""
        super().__init__(f"failed to start '{executable}': {reason}")
        self.executable = executable
        self.reason = reason


class CommandLineError(ToolchainError):
    """The argument string could not be split into arguments."""

    def __init__(self, command_line: str, reason: str) -> None:
        """Initialize the error with the offending argument string."""
        super().__init__(f"invalid command line '{command_line}': {reason}")
        self.command_line = command_line
        self.reason = reason


def split_arguments(command_line: str) -> list[str]:
    """Split an argument string into arguments, grouping on double quotes only.

    Only double quotes group words; single quotes are literal. Inside double
    quotes a backslash escapes a double quote or another backslash, so values
    produced by `quote` come back unchanged. Outside quotes a backslash escapes
    the next character, as in a POSIX shell.

    Raises:
        CommandLineError: If a double quote is left unclosed.

    """
    lexer = shlex.shlex(command_line, posix=True)
    lexer.whitespace_split = True
    lexer.commenters = ""
    lexer.quotes = '"'
    lexer.escapedquotes = '"'
    try:
        return list(lexer)
    except ValueError as e:
        raise CommandLineError(command_line, str(e)) from e


def _popen_args(spec: CommandSpec) -> str | list[str]:
    if _IS_WINDOWS:
        # CreateProcess parses the command line itself, pass it through verbatim
        executable = subprocess.list2cmdline([spec.executable])
        if not spec.arguments:
            return executable
        return f"{executable} {spec.command_line}"
    return [spec.executable, *split_arguments(spec.command_line)]


def _start_process(spec: CommandSpec) -> subprocess.Popen[str]:
    popen_args = _popen_args(spec)
    kwargs: dict[str, object] = {}
    if _IS_WINDOWS:
        kwargs["creationflags"] = getattr(subprocess, "CREATE_NO_WINDOW", 0)
    else:
        kwargs["start_new_session"] = True
    try:
        return subprocess.Popen(  # noqa: S603  # nosec B603
            popen_args,
            stdin=subprocess.DEVNULL,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            cwd=spec.working_directory,
            **kwargs,  # type: ignore[call-overload]
        )
    except OSError as e:
        raise ProcessLaunchError(spec.executable, e.strerror or str(e)) from e
    except ValueError as e:
        raise ProcessLaunchError(spec.executable, str(e)) from e


def _monitor(text_stream: IO[str] | None, lines_buffer: list[str]) -> threading.Thread:
    def pipe() -> None:
        if text_stream is None:
            return
        for line in iter(text_stream.readline, ""):
            lines_buffer.append(line)
        text_stream.close()

    t = threading.Thread(target=pipe, daemon=True)
    t.start()
    return t


def _signal_process(process: subprocess.Popen[str], *, force: bool) -> None:
    try:
        if _IS_WINDOWS:
            if process.poll() is not None:
                return
            if force:
                process.kill()
            else:
                process.terminate()
        else:
            # the group outlives the child while any grandchild is still in it
            os.killpg(process.pid, signal.SIGKILL if force else signal.SIGTERM)
    except ProcessLookupError:
        pass


def _terminate(process: subprocess.Popen[str], grace_seconds: float) -> None:
    _signal_process(process, force=False)
    try:
        process.wait(timeout=grace_seconds)
    except subprocess.TimeoutExpired:
        logger.warning("Process %s ignored termination, killing it", process.pid)
        _signal_process(process, force=True)
        process.wait()


def _join_readers(readers: list[threading.Thread], deadline: float | None) -> bool:
    """Wait for the readers until the deadline, True if all of them finished."""
    for reader in readers:
        remaining = None if deadline is None else max(0.0, deadline - time.monotonic())
        reader.join(timeout=remaining)
    return not any(reader.is_alive() for reader in readers)


def run_command(
    spec: CommandSpec,
    timeout: float | None = None,
    kill_grace_seconds: float = DEFAULT_KILL_GRACE_SECONDS,
) -> ExecutionResult:
    """Execute a toolchain command and return its exit code and output.

    Both output streams are read on their own threads while the process runs, so
    a child filling one pipe cannot block on the other. A non-zero exit code is a
    normal result.

    The timeout covers the whole call, including draining output. Grandchildren
    that keep the pipes open past it (a detached app, a reused build node) are
    killed with the process group where the platform allows, and the result is
    reported as timed out.

    Args:
        spec: The command to execute.
        timeout: Seconds to wait before terminating the process. None waits
            until the process exits and its output is closed.
        kill_grace_seconds: Seconds between terminate and kill on timeout.

    Returns:
        ExecutionResult with the exit code and both streams' text, trimmed.

    Raises:
        CommandLineError: If the arguments cannot be split.
        ProcessLaunchError: If the process could not be started.

    """
    stdout_lines: list[str] = []
    stderr_lines: list[str] = []

    logger.debug(
        "Starting process: %s",
        spec.display,
        extra={"cwd": spec.working_directory},
    )
    started = time.monotonic()
    deadline = None if timeout is None else started + timeout
    process = _start_process(spec)

    readers = [
        _monitor(process.stdout, stdout_lines),
        _monitor(process.stderr, stderr_lines),
    ]

    timed_out = False
    try:
        process.wait(timeout=timeout)
    except subprocess.TimeoutExpired:
        timed_out = True
        logger.warning("Process timed out after %s seconds: %s", timeout, spec.display)
        _terminate(process, kill_grace_seconds)

    if not timed_out and not _join_readers(readers, deadline):
        timed_out = True
        logger.warning(
            "Output still open after %s seconds, killing process group: %s",
            timeout,
            spec.display,
        )
        _signal_process(process, force=True)

    if timed_out and not _join_readers(readers, time.monotonic() + kill_grace_seconds):
        _signal_process(process, force=True)
        if not _join_readers(readers, time.monotonic() + kill_grace_seconds):
            logger.warning("Abandoning output of orphaned processes: %s", spec.display)

    duration = time.monotonic() - started
    exit_code = None if timed_out else process.returncode
    logger.info(
        "Process finished: %s (exit code %s, %.2fs)",
        spec.display,
        exit_code,
        duration,
    )
    return ExecutionResult(
        exit_code=exit_code,
        stdout="".join(stdout_lines).strip(),
        stderr="".join(stderr_lines).strip(),
        timed_out=timed_out,
        duration_seconds=duration,
    )
