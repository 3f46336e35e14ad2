"""
Unified CLI Error Handling
==========================

Provides consistent diagnostics and exit codes for the CLI.

Every diagnostic line goes to stderr and starts with the program name, so
output from several tools can be told apart in build logs:

    linasm: prog.asm:7: error: duplicate label 'loop'
    linasm: hint: 'loop' was first defined at prog.asm:3
"""

import sys
import traceback
from enum import IntEnum
from typing import NoReturn

import click

PROG_NAME = "linasm"


class ExitCode(IntEnum):
    """Standard exit codes for the CLI."""
    SUCCESS = 0
    FAILURE = 1          # Usage, read or assembly error
    INTERNAL_ERROR = 3   # Unexpected internal error


def echo_diagnostic(message: str) -> None:
    """Write a possibly multi-line message to stderr, one prefixed line each."""
    for line in message.splitlines() or [""]:
        click.echo(f"{PROG_NAME}: {line}", err=True)


def fail(message: str, code: ExitCode = ExitCode.FAILURE) -> NoReturn:
    """Report message and exit with code."""
    echo_diagnostic(message)
    sys.exit(code)


def handle_cli_exception(error: Exception, verbose: bool = False) -> NoReturn:
    """
    Unified exception handler for the CLI.

    Formats the error message, optionally prints the traceback for internal
    errors in verbose mode, and exits with the matching exit code.

    Raises:
        SystemExit: Always
    """
    from linasm.errors import LinasmError

    if isinstance(error, LinasmError):
        # Assembler errors already carry "file:line: error:" formatting
        fail(str(error))

    elif isinstance(error, OSError):
        # Writing an auxiliary output file failed
        fail(f"error: {error}")

    elif isinstance(error, ValueError):
        # Rejected configuration (environment or options)
        fail(f"error: invalid configuration: {error}")

    else:
        echo_diagnostic(f"internal error: {error}")
        if verbose:
            traceback.print_exc()
        sys.exit(ExitCode.INTERNAL_ERROR)
