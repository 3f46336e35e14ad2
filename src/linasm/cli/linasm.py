"""
linasm - Assembler Front End Command-Line Interface
===================================================

This module implements the command-line interface for the assembler front
end. It assembles exactly one source file and writes the resulting label
table to stderr.

Usage Examples
--------------
Basic run:
    $ linasm hello.asm

Also write a symbol file:
    $ linasm hello.asm -s hello.sym

Trace every mnemonic handler:
    $ linasm -v hello.asm

Exit Status
-----------
0 on success (including -h/--help). 1 on any usage error (missing or repeated
filename, unknown option, bad option value) and on any read or assembly
error. No label table is printed when assembly fails.
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from linasm import __version__
from linasm.assembler import Assembler
from linasm.cli.errors import ExitCode, PROG_NAME, echo_diagnostic, handle_cli_exception
from linasm.config import AssemblerConfig

logger = logging.getLogger(__name__)


def setup_logging(verbose: bool) -> None:
    """Configure logging based on verbosity."""
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(
        level=level,
        format=f"{PROG_NAME}: %(levelname)s: %(message)s" if verbose else f"{PROG_NAME}: %(message)s",
        stream=sys.stderr,
    )
    # basicConfig is a no-op when the root logger already has handlers
    logging.getLogger("linasm").setLevel(level)


class LinasmCommand(click.Command):
    """
    Click command whose usage errors exit with ExitCode.FAILURE.

    Click reports usage errors (unknown option, bad option value) with
    status 2; every fatal condition of linasm, usage included, exits 1.
    """

    def main(self, args=None, prog_name=None, complete_var=None,
             standalone_mode=True, **extra):
        try:
            rv = super().main(args, prog_name, complete_var,
                              standalone_mode=False, **extra)
        except click.UsageError as e:
            e.show()
            sys.exit(ExitCode.FAILURE)
        except click.ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except click.Abort:
            echo_diagnostic("aborted")
            sys.exit(ExitCode.FAILURE)

        if standalone_mode:
            sys.exit(rv if isinstance(rv, int) else ExitCode.SUCCESS)
        return rv


# =============================================================================
# CLI Definition
# =============================================================================

@click.command(cls=LinasmCommand, context_settings={"help_option_names": ["-h", "--help"]})
@click.argument(
    "filenames",
    nargs=-1,
    metavar="FILENAME",
    type=click.Path(path_type=Path),
)
@click.option(
    "-s", "--symbols",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Also write the symbol table to this file",
)
@click.option(
    "--max-line-length",
    type=click.IntRange(min=1),
    default=None,
    help="Reject source lines this long or longer "
         "(default: 1000, or $LINASM_MAX_LINE_LENGTH)",
)
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Log every label and mnemonic handler invocation",
)
@click.version_option(version=__version__, prog_name=PROG_NAME)
@click.pass_context
def main(
    ctx: click.Context,
    filenames: tuple[Path, ...],
    symbols: Optional[Path],
    max_line_length: Optional[int],
    verbose: bool,
) -> None:
    """
    Assemble FILENAME in a single pass and print its label table.

    Each line is read as [label:] [mnemonic] [operand]. Text after ';' is a
    comment unless it is inside a '...' string.

    \b
    Examples:
        linasm hello.asm                 # Print label table
        linasm hello.asm -s hello.sym    # Also write a symbol file
    """
    setup_logging(verbose)

    if not filenames:
        echo_diagnostic("missing filename")
        click.echo(ctx.get_usage())
        sys.exit(ExitCode.FAILURE)

    if len(filenames) > 1:
        echo_diagnostic(f"filename redefinition old={filenames[0]} new={filenames[1]}")
        click.echo(ctx.get_usage())
        sys.exit(ExitCode.FAILURE)

    input_file = filenames[0]

    try:
        config = AssemblerConfig.from_env()
        if max_line_length is not None:
            config.max_line_length = max_line_length
            config.validate()

        asm = Assembler(config)
        asm.assemble_file(input_file)

        for line in asm.get_symbol_report():
            echo_diagnostic(line)

        if symbols:
            asm.write_symbols(symbols)
            logger.debug(f"wrote symbols to {symbols}")

    except Exception as e:
        handle_cli_exception(e, verbose=verbose)


if __name__ == "__main__":
    main()
