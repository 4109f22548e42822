"""Error types and CLI exit codes for document synthesis."""
from __future__ import annotations

import sys
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """CLI exit codes."""
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    NOT_FOUND = 6
    EMPTY_DOCUMENT = 7
    RENDER_FAILURE = 8
    INTERRUPTED = 130


class SynthesisError(Exception):
    """Base class for engine errors."""

    code: ExitCode = ExitCode.ERROR

    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        return self.message


class EmptyDocumentError(SynthesisError):
    """Raised when there is nothing to render."""

    code = ExitCode.EMPTY_DOCUMENT

    def __init__(self, message: str = "Nothing to render: resume structure is empty", hint: Optional[str] = None):
        super().__init__(message, hint)


class RenderFailure(SynthesisError):
    """The binary writer failed; wraps the underlying exception."""

    code = ExitCode.RENDER_FAILURE

    def __init__(self, fmt: str, message: str):
        super().__init__(f"{fmt} rendering failed: {message}")
        self.format = fmt


class ConfigError(SynthesisError):
    """Unknown template, color, format or malformed settings."""

    code = ExitCode.CONFIG_ERROR


def handle_error(error: BaseException, verbose: bool = False) -> int:
    """Print an error to stderr and return the exit code to use."""
    if isinstance(error, SynthesisError):
        print(f"Error: {error.message}", file=sys.stderr)
        if error.hint:
            print(f"Hint: {error.hint}", file=sys.stderr)
        if verbose and error.__cause__ is not None:
            print(f"Cause: {error.__cause__!r}", file=sys.stderr)
        return int(error.code)

    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return int(ExitCode.INTERRUPTED)

    if isinstance(error, FileNotFoundError):
        print(f"Error: file not found: {error.filename or error}", file=sys.stderr)
        return int(ExitCode.NOT_FOUND)

    print(f"Error: {error}", file=sys.stderr)
    if verbose:
        import traceback
        traceback.print_exc()
    return int(ExitCode.ERROR)
