"""
Source Line Tokenizer
=====================

This module splits a normalized source line into the three fields the line
driver works with:

    [label:] [mnemonic] [operand]

Field Rules
-----------
1. **Blank line**: no non-whitespace content; all fields are None.

2. **Label first**: the first field ends with the label terminator (":").
   The terminator is stripped from the label name. A second field becomes
   the mnemonic, and whatever follows it becomes the operand.
   ```asm
   start:                 ; label only
   start: mov ax, bx      ; label='start' mnemonic='mov' operand='ax, bx'
   ```

3. **Mnemonic first**: any other first field is the mnemonic, and the rest
   of the line is the operand.
   ```asm
   int 21h                ; mnemonic='int' operand='21h'
   ```

The operand is never split further; separators such as commas are left for
the handler to interpret.
"""

from dataclasses import dataclass
from typing import Optional

from linasm.config import AssemblerConfig
from linasm.errors import AssemblySyntaxError, SourceLocation


# =============================================================================
# Parsed Line
# =============================================================================

@dataclass(frozen=True)
class ParsedLine:
    """
    Fields of one source line. Each field is independently optional.

    Attributes:
        label: Label name without its terminator
        mnemonic: Mnemonic keyword, as written
        operand: Everything after the mnemonic, unsplit
    """
    label: Optional[str] = None
    mnemonic: Optional[str] = None
    operand: Optional[str] = None

    @property
    def is_blank(self) -> bool:
        """True when the line carries no field at all."""
        return self.label is None and self.mnemonic is None and self.operand is None


# =============================================================================
# Tokenizer
# =============================================================================

def _split_field(text: str) -> tuple[str, Optional[str]]:
    """
    Split off the first whitespace-delimited field.

    Returns the field and the remainder with leading whitespace removed,
    or None when nothing follows the field.
    """
    parts = text.split(None, 1)
    if len(parts) == 1:
        return parts[0], None
    return parts[0], parts[1]


def parse_line(
    text: str,
    config: Optional[AssemblerConfig] = None,
    line_number: int = 0,
    filename: str = "<input>",
) -> ParsedLine:
    """
    Split a normalized line into label, mnemonic and operand.

    Args:
        text: Normalized line (comment and trailing whitespace removed)
        config: Supplies the label terminator (defaults if omitted)
        line_number: 1-based line number (for error reporting)
        filename: Source name (for error reporting)

    Returns:
        ParsedLine with the fields found on the line

    Raises:
        AssemblySyntaxError: If the label field is only the terminator
    """
    config = config or AssemblerConfig()

    if not text.strip():
        return ParsedLine()

    first, rest = _split_field(text)

    if not first.endswith(config.label_terminator):
        return ParsedLine(mnemonic=first, operand=rest)

    label = first[: -len(config.label_terminator)]
    if not label:
        raise AssemblySyntaxError(
            "empty label name",
            location=SourceLocation(filename, line_number),
            source_line=text,
        )

    if rest is None:
        return ParsedLine(label=label)

    mnemonic, operand = _split_field(rest)
    return ParsedLine(label=label, mnemonic=mnemonic, operand=operand)
