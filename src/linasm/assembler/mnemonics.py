"""
Mnemonic Dispatch Table
=======================

This module defines the mnemonics the assembler recognizes and the handlers
they dispatch to. Each handler's only effect on the assembly session is to
advance the address counter by its size contribution.

Reference Mnemonics
-------------------
| Keyword   | Meaning                        | Size |
|-----------|--------------------------------|------|
| db        | Data byte declaration          | 1    |
| equ       | Constant equation              | 2    |
| global    | Global symbol declaration      | 0    |
| int       | Interrupt invocation           | 3    |
| mov       | Register move                  | 4    |
| section   | Section/segment declaration    | 0    |

The sizes are fixed placeholders. They do not depend on the operand and do
not reflect any real instruction encoding.

Lookup
------
Keywords are case-folded once, when the table is built, and again for each
lookup, so "MOV", "Mov" and "mov" all find the same handler.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Iterable, Iterator, Optional
import logging

if TYPE_CHECKING:
    from linasm.assembler.session import AssemblySession

logger = logging.getLogger(__name__)


# =============================================================================
# Mnemonic Enumeration
# =============================================================================

class Mnemonic(Enum):
    """
    The reference mnemonic keywords.
    """
    DB = "db"            # Data byte declaration
    EQU = "equ"          # Constant equation
    GLOBAL = "global"    # Global symbol declaration
    INT = "int"          # Interrupt invocation
    MOV = "mov"          # Register move
    SECTION = "section"  # Section/segment declaration

    def __str__(self) -> str:
        return self.value


# Placeholder size contribution of each mnemonic, in address units
MNEMONIC_SIZES: dict[Mnemonic, int] = {
    Mnemonic.DB: 1,
    Mnemonic.EQU: 2,
    Mnemonic.GLOBAL: 0,
    Mnemonic.INT: 3,
    Mnemonic.MOV: 4,
    Mnemonic.SECTION: 0,
}


# =============================================================================
# Handlers
# =============================================================================

@dataclass(frozen=True)
class MnemonicHandler:
    """
    Handler bound to one keyword.

    Calling the handler advances the session's address counter by size.

    Attributes:
        keyword: Keyword as it should be written in source
        size: Fixed address-counter contribution
    """
    keyword: str
    size: int

    def __post_init__(self) -> None:
        if not self.keyword or any(c.isspace() for c in self.keyword):
            raise ValueError(f"invalid mnemonic keyword {self.keyword!r}")
        if self.size < 0:
            raise ValueError(f"mnemonic '{self.keyword}' has negative size {self.size}")

    def __call__(
        self,
        session: "AssemblySession",
        operand: Optional[str],
        line_number: int,
    ) -> int:
        """
        Handle one occurrence of the mnemonic.

        Args:
            session: Current assembly session
            operand: Operand text, unsplit (None if absent)
            line_number: 1-based source line

        Returns:
            The address-counter value after the handler ran
        """
        logger.debug(f"{self.keyword}: line={line_number} operand=[{operand or ''}] size={self.size}")
        return session.counter.advance(self.size)


# =============================================================================
# Dispatch Table
# =============================================================================

class DispatchTable:
    """
    Fixed, case-insensitive mapping from keyword to handler.

    Usage:
        table = default_dispatch_table()
        handler = table.find("MOV")
        if handler is not None:
            handler(session, "ax, bx", 12)
    """

    def __init__(self, handlers: Iterable[MnemonicHandler]):
        """
        Build the table.

        Raises:
            ValueError: If two handlers share a keyword (ignoring case)
        """
        self._handlers: dict[str, MnemonicHandler] = {}
        for handler in handlers:
            key = handler.keyword.casefold()
            if key in self._handlers:
                raise ValueError(f"duplicate mnemonic keyword '{handler.keyword}'")
            self._handlers[key] = handler

    @classmethod
    def from_sizes(cls, sizes: dict[str, int]) -> "DispatchTable":
        """Build a table from a keyword -> size mapping."""
        return cls(MnemonicHandler(keyword, size) for keyword, size in sizes.items())

    def __len__(self) -> int:
        return len(self._handlers)

    def __iter__(self) -> Iterator[MnemonicHandler]:
        return iter(self._handlers.values())

    def __contains__(self, keyword: object) -> bool:
        return isinstance(keyword, str) and self.find(keyword) is not None

    def find(self, keyword: str) -> Optional[MnemonicHandler]:
        """
        Look up the handler for keyword, ignoring case.

        Returns:
            The handler, or None if the keyword is unknown
        """
        return self._handlers.get(keyword.casefold())

    def keywords(self) -> list[str]:
        """All keywords, in table order."""
        return [handler.keyword for handler in self._handlers.values()]


def default_dispatch_table() -> DispatchTable:
    """
    Build the six-entry reference table.
    """
    return DispatchTable(
        MnemonicHandler(mnemonic.value, MNEMONIC_SIZES[mnemonic])
        for mnemonic in Mnemonic
    )
