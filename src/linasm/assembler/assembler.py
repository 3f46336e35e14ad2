"""
linasm Assembler - Line Driver
==============================

This module provides the Assembler class, which drives a single pass over
the source. For each physical line it runs:

    Read -> Normalize -> Tokenize -> Resolve

Resolve inserts the line's label (if any) at the current address-counter
value, then dispatches the mnemonic (if any) to its handler, which advances
the counter. Labels therefore record the address of whatever follows them,
and a label can only refer to code already seen: there is no second pass.

The first error stops the scan. Nothing after the failing line is read,
and the exception propagates to the caller unchanged.

Example Usage
-------------
>>> from linasm.assembler import Assembler
>>> asm = Assembler()
>>> symbols = asm.assemble_string('''
... start:
...     db 1
... next:  int 21h
... ''')
>>> [(sym.name, sym.offset) for sym in symbols.dump()]
[('start', 0), ('next', 1)]
>>> asm.get_address()
4
"""

import io
from pathlib import Path
from typing import Iterable, Optional
import logging

from linasm.assembler.lexer import normalize_line
from linasm.assembler.mnemonics import DispatchTable, default_dispatch_table
from linasm.assembler.parser import ParsedLine, parse_line
from linasm.assembler.session import AssemblySession
from linasm.assembler.symbols import Symbol, SymbolTable
from linasm.config import AssemblerConfig
from linasm.errors import (
    OperandWithoutMnemonicError,
    SourceLocation,
    SourceReadError,
    UnknownMnemonicError,
)

logger = logging.getLogger(__name__)


class Assembler:
    """
    Single-pass assembler front end.

    Each assemble_* call starts a new AssemblySession, so one Assembler can
    be reused for several sources. The accessors report on the most recent
    run.

    Attributes:
        config: Syntax characters and limits
        dispatch: Mnemonic dispatch table shared by all runs
    """

    def __init__(
        self,
        config: Optional[AssemblerConfig] = None,
        dispatch: Optional[DispatchTable] = None,
    ):
        self.config = config or AssemblerConfig()
        self.dispatch = dispatch or default_dispatch_table()
        self._session: Optional[AssemblySession] = None
        self._complete = False

    # =========================================================================
    # Assembly Methods
    # =========================================================================

    def assemble_file(self, filepath: str | Path) -> SymbolTable:
        """
        Assemble a source file.

        Line terminators are kept untranslated, so "\r\n" counts as two
        characters towards the line length limit.

        Returns:
            The symbol table of the run

        Raises:
            SourceReadError: If the file cannot be opened, read or decoded
            AssemblerError: On the first fatal condition in the source
        """
        filepath = Path(filepath)
        logger.debug(f"assembling {filepath}")

        try:
            with open(filepath, encoding=self.config.encoding, newline="") as source:
                return self.assemble_lines(source, str(filepath))
        except OSError as e:
            raise SourceReadError(str(filepath), e.strerror or str(e)) from e
        except UnicodeDecodeError as e:
            raise SourceReadError(str(filepath), str(e)) from e

    def assemble_string(self, source: str, filename: str = "<input>") -> SymbolTable:
        """
        Assemble source code held in a string.

        Lines are split exactly as assemble_file splits a file: at "\n",
        "\r" and "\r\n", with each terminator kept as part of its line.

        Args:
            source: Assembly source code
            filename: Virtual filename for error messages
        """
        return self.assemble_lines(io.StringIO(source, newline=""), filename)

    def assemble_lines(self, lines: Iterable[str], filename: str = "<input>") -> SymbolTable:
        """
        Run the line driver over raw lines, numbered from 1.

        Lines are consumed lazily; after a failure no further line is read.
        """
        session = AssemblySession(
            config=self.config,
            dispatch=self.dispatch,
            filename=filename,
        )
        self._session = session
        self._complete = False

        line_number = 0
        for line_number, raw in enumerate(lines, start=1):
            self._assemble_line(session, raw, line_number)

        self._complete = True
        logger.debug(
            f"{filename}: {line_number} lines, {len(session.symbols)} labels, "
            f"final address {session.address}"
        )
        return session.symbols

    def _assemble_line(self, session: AssemblySession, raw: str, line_number: int) -> None:
        text = normalize_line(raw, line_number, session.config, session.filename)
        parsed = parse_line(text, session.config, line_number, session.filename)
        if parsed.is_blank:
            return
        self.process_line(session, parsed, line_number, source_line=text)

    def process_line(
        self,
        session: AssemblySession,
        parsed: ParsedLine,
        line_number: int,
        source_line: Optional[str] = None,
    ) -> None:
        """
        Resolve one parsed line against the session.

        The label is inserted before the mnemonic runs, so it records the
        address of the line it sits on.

        Raises:
            DuplicateLabelError: If the label is already declared
            OperandWithoutMnemonicError: If there is an operand but no mnemonic
            UnknownMnemonicError: If the mnemonic is not in the dispatch table
        """
        location = SourceLocation(session.filename, line_number)

        if parsed.label is not None:
            session.symbols.insert(parsed.label, line_number, session.address, location)

        if parsed.mnemonic is None:
            if parsed.operand is not None:
                raise OperandWithoutMnemonicError(
                    parsed.operand,
                    location=location,
                    source_line=source_line,
                )
            return

        handler = session.dispatch.find(parsed.mnemonic)
        if handler is None:
            raise UnknownMnemonicError(
                parsed.mnemonic,
                location=location,
                source_line=source_line,
                similar_mnemonics=self._find_similar_mnemonics(parsed.mnemonic),
            )

        handler(session, parsed.operand, line_number)

    # =========================================================================
    # Results
    # =========================================================================

    @property
    def session(self) -> Optional[AssemblySession]:
        """Session of the most recent run (None before the first run)."""
        return self._session

    def is_complete(self) -> bool:
        """True if the most recent run reached the end of its input."""
        return self._complete

    def get_symbols(self) -> SymbolTable:
        """
        Get the symbol table of the most recent successful run.

        Raises:
            RuntimeError: If no run has completed
        """
        if self._session is None or not self._complete:
            raise RuntimeError("no completed assembly run")
        return self._session.symbols

    def get_address(self) -> int:
        """Final address-counter value of the most recent successful run."""
        self.get_symbols()
        return self._session.address

    def get_symbol_report(self) -> list[str]:
        """
        Get the end-of-run symbol dump, one line per record.
        """
        return format_symbol_table(self.get_symbols().dump())

    def write_symbols(self, filepath: str | Path) -> None:
        """
        Write the symbol table to a file.

        Format: name offset line (one per line, insertion order)
        """
        symbols = self.get_symbols()
        with open(filepath, "w", encoding=self.config.encoding) as f:
            f.write("# Symbol table\n")
            f.write("# Generated by linasm\n")
            for sym in symbols.dump():
                f.write(f"{sym.name} {sym.offset} {sym.line}\n")

    # =========================================================================
    # Hints
    # =========================================================================

    def _find_similar_mnemonics(self, name: str) -> list[str]:
        """
        Find keywords with similar spelling, for error hints.
        """
        name_lower = name.casefold()
        similar = []

        for keyword in self.dispatch.keywords():
            keyword_lower = keyword.casefold()
            if (
                abs(len(keyword_lower) - len(name_lower)) <= 1
                and _edit_distance(name_lower, keyword_lower) <= 2
            ):
                similar.append(keyword)

        return similar[:3]


def _edit_distance(s1: str, s2: str) -> int:
    """Levenshtein edit distance between two strings."""
    if len(s1) < len(s2):
        s1, s2 = s2, s1

    distances = range(len(s2) + 1)
    for i, c1 in enumerate(s1):
        new_distances = [i + 1]
        for j, c2 in enumerate(s2):
            if c1 == c2:
                new_distances.append(distances[j])
            else:
                new_distances.append(1 + min((
                    distances[j],
                    distances[j + 1],
                    new_distances[-1],
                )))
        distances = new_distances

    return distances[-1]


# =============================================================================
# Symbol Dump
# =============================================================================

def format_symbol_table(symbols: Iterable[Symbol]) -> list[str]:
    """
    Format the symbol dump.

    Returns:
        A header line followed by one line per symbol:
        "label=<name> offset=<offset> line_num=<line>"
    """
    lines = ["label table:"]
    for sym in symbols:
        lines.append(f"label={sym.name:<15} offset={sym.offset:4d} line_num={sym.line:03d}")
    return lines


# =============================================================================
# Convenience Functions
# =============================================================================

def assemble(source: str, filename: str = "<input>") -> SymbolTable:
    """
    Assemble source code held in a string with the default configuration.

    Raises:
        AssemblerError: On the first fatal condition
    """
    return Assembler().assemble_string(source, filename)


def assemble_file(filepath: str | Path) -> SymbolTable:
    """
    Assemble a source file with the default configuration.

    Raises:
        AssemblerError: On the first fatal condition
    """
    return Assembler().assemble_file(filepath)
