"""
linasm Error Hierarchy
======================

This module defines the exception hierarchy for the linasm assembler front
end. All exceptions inherit from LinasmError, allowing callers to catch every
assembler failure with a single except clause.

Exception Hierarchy
-------------------
LinasmError (base)
└── AssemblerError (assembler-related)
    ├── SourceReadError - source file cannot be opened or read
    ├── LineTooLongError - line length reaches the configured maximum
    ├── AssemblySyntaxError - malformed line (e.g. empty label name)
    ├── DuplicateLabelError - label declared more than once
    ├── UnknownMnemonicError - mnemonic not in the dispatch table
    └── OperandWithoutMnemonicError - operand on a line with no mnemonic

Every one of these conditions is fatal: the line driver stops at the first
error and no symbol table dump is produced.

Error messages follow this format:
    filename:line: error: description
        source_line_text
    hint: suggestion for fixing (when available)
"""

from dataclasses import dataclass
from typing import Optional


# =============================================================================
# Base Exception Class
# =============================================================================

class LinasmError(Exception):
    """
    Base exception for all linasm errors.

        try:
            assembler.assemble_file("program.asm")
        except LinasmError as e:
            print(f"Error: {e}")
    """
    pass


# =============================================================================
# Source Location Tracking
# =============================================================================

@dataclass(frozen=True)
class SourceLocation:
    """
    A line in a source file, used for error reporting and symbol records.

    Attributes:
        filename: Name of the source file (or "<input>" for string input)
        line: Line number (1-indexed)
    """
    filename: str
    line: int

    def __str__(self) -> str:
        """Format as 'filename:line' for error messages."""
        return f"{self.filename}:{self.line}"


# =============================================================================
# Assembler Exceptions
# =============================================================================

class AssemblerError(LinasmError):
    """
    Base exception for all assembler-related errors.

    Attributes:
        message: The error description
        location: Where in the source the error occurred (optional)
        hint: A suggestion for fixing the error (optional)
        source_line: The actual source text at the error location (optional)
    """

    def __init__(
        self,
        message: str,
        location: Optional[SourceLocation] = None,
        hint: Optional[str] = None,
        source_line: Optional[str] = None,
    ):
        self.message = message
        self.location = location
        self.hint = hint
        self.source_line = source_line
        super().__init__(self._format_message())

    @property
    def line(self) -> Optional[int]:
        """Line number of the error, if known."""
        return self.location.line if self.location else None

    def _format_message(self) -> str:
        """
        Format the error message with location, source context, and hint.

        Example output:
            hello.asm:15: error: unknown mnemonic 'mvo'
                mvo ax, bx
            hint: did you mean 'mov'?
        """
        parts = []

        if self.location:
            parts.append(f"{self.location}: error: {self.message}")
        else:
            parts.append(f"error: {self.message}")

        if self.source_line is not None:
            parts.append(f"    {self.source_line}")

        if self.hint:
            parts.append(f"hint: {self.hint}")

        return "\n".join(parts)


class SourceReadError(AssemblerError):
    """
    Source file cannot be opened, or reading failed before end of file.

    Wraps the underlying OSError (or UnicodeDecodeError), which stays
    available as __cause__.
    """

    def __init__(self, filename: str, reason: str):
        self.filename = filename
        self.reason = reason
        super().__init__(f"cannot read '{filename}': {reason}")


class LineTooLongError(AssemblerError):
    """
    Line length meets or exceeds the configured maximum.

    Raised by the normalizer before any tokenization of the line.
    """

    def __init__(
        self,
        length: int,
        limit: int,
        location: Optional[SourceLocation] = None,
    ):
        self.length = length
        self.limit = limit
        super().__init__(
            f"line too long: {length} characters (limit is {limit})",
            location=location,
            hint="split the line or raise --max-line-length",
        )


class AssemblySyntaxError(AssemblerError):
    """
    Malformed source line.

    Examples:
        - A label consisting only of the terminator (":")
    """
    pass


class DuplicateLabelError(AssemblerError):
    """
    Label declared more than once.

    Names are compared case-insensitively, so "Start:" and "START:" collide.
    Includes the original definition location when available.
    """

    def __init__(
        self,
        name: str,
        location: Optional[SourceLocation] = None,
        original_location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.name = name
        self.original_location = original_location

        hint = None
        if original_location:
            hint = f"'{name}' was first defined at {original_location}"

        super().__init__(
            f"duplicate label '{name}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class UnknownMnemonicError(AssemblerError):
    """
    Mnemonic does not match any entry of the dispatch table.

    The driver suggests similarly spelled keywords when it can.
    """

    def __init__(
        self,
        mnemonic: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
        similar_mnemonics: Optional[list[str]] = None,
    ):
        self.mnemonic = mnemonic
        self.similar_mnemonics = similar_mnemonics or []

        hint = None
        if self.similar_mnemonics:
            suggestions = ", ".join(f"'{m}'" for m in self.similar_mnemonics[:3])
            hint = f"did you mean {suggestions}?"

        super().__init__(
            f"unknown mnemonic '{mnemonic}'",
            location=location,
            hint=hint,
            source_line=source_line,
        )


class OperandWithoutMnemonicError(AssemblerError):
    """
    An operand reached the driver on a line that has no mnemonic.

    The tokenizer never produces such a line, so this signals an internal
    inconsistency between the tokenizer and the driver.
    """

    def __init__(
        self,
        operand: str,
        location: Optional[SourceLocation] = None,
        source_line: Optional[str] = None,
    ):
        self.operand = operand
        super().__init__(
            f"internal failure: operand '{operand}' without mnemonic",
            location=location,
            source_line=source_line,
        )
