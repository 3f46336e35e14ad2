"""
linasm Assembler Front End
==========================

Single-pass, line-oriented assembler front end. Each source line is split
into an optional label, an optional mnemonic and an optional operand; labels
are recorded with the current address offset, and mnemonics are dispatched
to handlers that advance the offset.

Main Components
---------------
- **Assembler**: Line driver that runs the pipeline over a source
- **LineNormalizer**: Removes comments (quote-aware) and trailing whitespace
- **parse_line**: Splits a normalized line into a ParsedLine
- **SymbolTable**: Append-only, case-insensitive table of labels
- **DispatchTable**: Case-insensitive mnemonic -> handler mapping
- **AssemblySession**: Per-run state (symbols, address counter, config)

Assembly Process
----------------
For every line, in order:

1. **Normalize**: reject over-long lines, strip the comment and the trailing
   whitespace
2. **Tokenize**: find the label, mnemonic and operand fields
3. **Resolve**: insert the label at the current address, then run the
   mnemonic's handler, which advances the address

The first error aborts the run.

Example Usage
-------------
>>> from linasm.assembler import Assembler
>>> asm = Assembler()
>>> symbols = asm.assemble_string("main: mov ax, bx\\nend: int 21h\\n")
>>> symbols.find("END").offset
4
"""

from linasm.assembler.assembler import (
    Assembler,
    assemble,
    assemble_file,
    format_symbol_table,
)
from linasm.assembler.lexer import LineNormalizer, normalize_line
from linasm.assembler.parser import ParsedLine, parse_line
from linasm.assembler.symbols import Symbol, SymbolTable
from linasm.assembler.mnemonics import (
    Mnemonic,
    MNEMONIC_SIZES,
    MnemonicHandler,
    DispatchTable,
    default_dispatch_table,
)
from linasm.assembler.session import AddressCounter, AssemblySession

__all__ = [
    # Main class and functions
    "Assembler",
    "assemble",
    "assemble_file",
    "format_symbol_table",
    # Normalizer
    "LineNormalizer",
    "normalize_line",
    # Tokenizer
    "ParsedLine",
    "parse_line",
    # Symbols
    "Symbol",
    "SymbolTable",
    # Mnemonics
    "Mnemonic",
    "MNEMONIC_SIZES",
    "MnemonicHandler",
    "DispatchTable",
    "default_dispatch_table",
    # Session
    "AddressCounter",
    "AssemblySession",
]
