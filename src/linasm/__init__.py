"""
linasm - Single-Pass Assembler Front End
========================================

This package reads line-oriented assembly source, splits every line into
label, mnemonic and operand, records labels with their address offsets, and
dispatches mnemonics to handlers that advance the address counter.

Instruction encoding and object file emission are not part of this package;
the mnemonic handlers only report their (placeholder) size contribution.

Quick Start
-----------
Assemble a file and list its labels:
    >>> from linasm import Assembler
    >>> asm = Assembler()
    >>> symbols = asm.assemble_file("hello.asm")
    >>> for sym in symbols.dump():
    ...     print(sym.name, sym.offset, sym.line)

Or use the command-line tool:
    $ linasm hello.asm
    $ linasm -s hello.sym hello.asm
"""

__version__ = "1.0.0"

# =============================================================================
# Public API Exports
# =============================================================================

from linasm.assembler import Assembler, assemble, assemble_file
from linasm.config import AssemblerConfig
from linasm.errors import (
    LinasmError,
    AssemblerError,
    SourceLocation,
    SourceReadError,
    LineTooLongError,
    AssemblySyntaxError,
    DuplicateLabelError,
    UnknownMnemonicError,
    OperandWithoutMnemonicError,
)

__all__ = [
    # Version info
    "__version__",
    # Assembler
    "Assembler",
    "assemble",
    "assemble_file",
    "AssemblerConfig",
    # Exception hierarchy
    "LinasmError",
    "AssemblerError",
    "SourceLocation",
    "SourceReadError",
    "LineTooLongError",
    "AssemblySyntaxError",
    "DuplicateLabelError",
    "UnknownMnemonicError",
    "OperandWithoutMnemonicError",
]
