"""Logging helper module."""

import sys
from logging import (
    DEBUG,
    INFO,
    WARNING,
    FileHandler,
    Formatter,
    Logger,
    StreamHandler,
    getLogger,
)
from pathlib import Path

_FILE_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
_CONSOLE_FORMAT = "%(levelname)s: %(message)s"

# chatty third-party loggers, kept at WARNING unless verbose
_NOISY_LOGGERS = ("mcp", "uvicorn", "uvicorn.access", "sse_starlette", "httpx")


def init_logging(*, verbose: bool = False, log_file: Path | None = None) -> None:
    """Initialize logging for the server.

    Should be called once when the application starts. Console output goes to
    stderr because stdout carries the protocol when serving over stdio.
    """
    root_logger = getLogger()
    root_logger.handlers.clear()

    console_handler = StreamHandler(sys.stderr)
    console_handler.setFormatter(Formatter(_CONSOLE_FORMAT))
    root_logger.addHandler(console_handler)

    if log_file:
        file_handler = FileHandler(log_file, mode="a", encoding="utf-8")
        file_handler.setFormatter(Formatter(_FILE_FORMAT))
        root_logger.addHandler(file_handler)

    root_logger.setLevel(DEBUG if verbose else INFO)
    configure_3p_loggers(verbose=verbose)
    if verbose:
        root_logger.debug("Debug logging enabled.")


def get_logger(name: str) -> Logger:
    """Proxy for logging.getLogger."""
    return getLogger(name)


def configure_3p_loggers(*, verbose: bool) -> None:
    """Quiet third-party loggers unless verbose logging is on."""
    for name in _NOISY_LOGGERS:
        getLogger(name).setLevel(DEBUG if verbose else WARNING)
