"""
linasm - Assembler Configuration
================================

Syntax characters and limits used by the normalizer, tokenizer and line
driver. Configuration can come from:
- Default values (defined here)
- Environment variables (AssemblerConfig.from_env)
- Command-line options (applied by the CLI on top of from_env)
"""

from dataclasses import dataclass
import codecs
import os


@dataclass
class AssemblerConfig:
    """
    Configuration for an assembly run.

    Attributes:
        comment_char: Starts an end-of-line comment outside quoted spans
        quote_char: Opens and closes a quoted span
        escape_char: Inside a quoted span, suppresses the next character
        label_terminator: Trailing character that marks a field as a label
        max_line_length: Raw lines this long or longer are rejected
        encoding: Text encoding of source files
    """

    comment_char: str = ";"
    quote_char: str = "'"
    escape_char: str = "\\"
    label_terminator: str = ":"

    max_line_length: int = 1000
    encoding: str = "utf-8"

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        """
        Check that the configuration is usable.

        Raises:
            ValueError: If a syntax character is not a single non-space
                character, if two syntax characters coincide, if the
                line limit is not positive, or if the encoding is unknown
        """
        chars = {
            "comment_char": self.comment_char,
            "quote_char": self.quote_char,
            "escape_char": self.escape_char,
            "label_terminator": self.label_terminator,
        }
        for name, value in chars.items():
            if len(value) != 1 or value.isspace():
                raise ValueError(f"{name} must be a single non-space character, got {value!r}")

        if len(set(chars.values())) != len(chars):
            raise ValueError("comment, quote, escape and label characters must differ")

        if self.max_line_length < 1:
            raise ValueError(f"max_line_length must be positive, got {self.max_line_length}")

        try:
            codecs.lookup(self.encoding)
        except LookupError:
            raise ValueError(f"unknown encoding {self.encoding!r}") from None

    @classmethod
    def from_env(cls) -> "AssemblerConfig":
        """
        Create AssemblerConfig from environment variables.

        Environment variables (all optional):
            LINASM_MAX_LINE_LENGTH: Line length limit (integer)
            LINASM_ENCODING: Source file encoding

        Raises:
            ValueError: If LINASM_MAX_LINE_LENGTH is not a positive integer
        """
        config = cls()

        if limit := os.environ.get("LINASM_MAX_LINE_LENGTH"):
            try:
                config.max_line_length = int(limit)
            except ValueError:
                raise ValueError(f"LINASM_MAX_LINE_LENGTH must be an integer, got {limit!r}") from None

        if encoding := os.environ.get("LINASM_ENCODING"):
            config.encoding = encoding

        config.validate()
        return config
