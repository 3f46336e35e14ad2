"""
Source Line Normalizer
======================

This module prepares raw source lines for the tokenizer. A raw line, as read
from the file (terminator included), is checked against the configured length
limit, stripped of its end-of-line comment, and trimmed on the right.

Comments
--------
A comment starts at the comment character (";" by default) and runs to the
end of the line, unless the comment character sits inside a quoted span:

    mov 'a;b' ; trailing      ->  mov 'a;b'

Quoted Spans
------------
Spans are delimited by the quote character ("'" by default). Inside a span
the escape character ("\\" by default) suppresses the meaning of the
character that follows it, so an escaped quote does not close the span:

    db 'it\\'s;here'          ->  db 'it\\'s;here'

An unterminated span is not an error; the rest of the line is kept as-is.

Example
-------
>>> from linasm.assembler.lexer import normalize_line
>>> normalize_line("start: db 'x;y'  ; data\\n", 1)
"start: db 'x;y'"
"""

import logging
from typing import Optional

from linasm.config import AssemblerConfig
from linasm.errors import LineTooLongError, SourceLocation

logger = logging.getLogger(__name__)


class LineNormalizer:
    """
    Strips comments and trailing whitespace from one raw source line.

    The scan walks the line once, tracking whether it is inside a quoted
    span. It never validates span closure.

    Usage:
        normalizer = LineNormalizer(raw_line, config)
        text = normalizer.normalize()
    """

    def __init__(self, source: str, config: AssemblerConfig):
        self.source = source
        self.config = config

        self._pos = 0
        self._in_quote = False

    def normalize(self) -> str:
        """
        Return the line with its comment removed and the right side trimmed.
        """
        end = self._find_comment_start()
        return self.source[:end].rstrip()

    # =========================================================================
    # Character Access Methods
    # =========================================================================

    def _at_end(self) -> bool:
        return self._pos >= len(self.source)

    def _peek(self) -> str:
        if self._at_end():
            return ""
        return self.source[self._pos]

    def _advance(self) -> str:
        char = self._peek()
        self._pos += 1
        return char

    # =========================================================================
    # Scanning
    # =========================================================================

    def _find_comment_start(self) -> int:
        """
        Return the index where the comment begins, or the line length.
        """
        while not self._at_end():
            char = self._peek()

            if self._in_quote:
                if char == self.config.escape_char:
                    # Skip the escape and whatever it protects
                    self._advance()
                    self._advance()
                    continue
                if char == self.config.quote_char:
                    self._in_quote = False
            elif char == self.config.quote_char:
                self._in_quote = True
            elif char == self.config.comment_char:
                return self._pos

            self._advance()

        if self._in_quote:
            logger.debug(f"unterminated quoted span in {self.source.rstrip()!r}")

        return len(self.source)


def check_line_length(
    raw: str,
    line_number: int,
    config: AssemblerConfig,
    filename: str = "<input>",
) -> None:
    """
    Reject a raw line whose length reaches the configured maximum.

    The length includes the line terminator, if the line has one.

    Raises:
        LineTooLongError: If len(raw) >= config.max_line_length
    """
    if len(raw) >= config.max_line_length:
        raise LineTooLongError(
            len(raw),
            config.max_line_length,
            location=SourceLocation(filename, line_number),
        )


def normalize_line(
    raw: str,
    line_number: int,
    config: Optional[AssemblerConfig] = None,
    filename: str = "<input>",
) -> str:
    """
    Normalize one raw source line.

    Args:
        raw: Line as read from the source, possibly ending in a terminator
        line_number: 1-based line number (for error reporting)
        config: Syntax characters and limits (defaults if omitted)
        filename: Source name (for error reporting)

    Returns:
        The line without its comment and without trailing whitespace

    Raises:
        LineTooLongError: If the raw line reaches the length limit
    """
    config = config or AssemblerConfig()
    check_line_length(raw, line_number, config, filename)
    return LineNormalizer(raw, config).normalize()
