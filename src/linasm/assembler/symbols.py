"""
Symbol Table
============

Labels declared in the source, each bound to the address-counter value at
the moment it was seen. The table is append-only:

- names are unique under case-insensitive comparison ("Start" == "START")
- records are never changed or removed once inserted
- iteration follows insertion order, which is also the dump order

Names are stored as written (without the label terminator); lookups fold
case on both sides.
"""

from dataclasses import dataclass
from typing import Iterator, Optional
import logging

from linasm.errors import DuplicateLabelError, SourceLocation

logger = logging.getLogger(__name__)


# =============================================================================
# Symbol Table Entry
# =============================================================================

@dataclass(frozen=True)
class Symbol:
    """
    Symbol table entry.

    Attributes:
        name: Label name as written in the source
        offset: Address-counter value when the label was declared
        line: Line number where the label was declared (1-based)
        location: Where the label was declared, for diagnostics
    """
    name: str
    offset: int
    line: int
    location: Optional[SourceLocation] = None

    @property
    def key(self) -> str:
        """Case-folded name used for comparisons."""
        return self.name.casefold()


# =============================================================================
# Symbol Table
# =============================================================================

class SymbolTable:
    """
    Append-only, insertion-ordered collection of Symbol records.

    Usage:
        table = SymbolTable()
        table.insert("start", line=1, offset=0)
        table.find("START")          # -> Symbol(name='start', ...)
        for sym in table.dump():
            print(sym.name, sym.offset)
    """

    def __init__(self) -> None:
        self._symbols: list[Symbol] = []
        self._index: dict[str, Symbol] = {}

    def __len__(self) -> int:
        return len(self._symbols)

    def __iter__(self) -> Iterator[Symbol]:
        return self.dump()

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def find(self, name: str) -> Optional[Symbol]:
        """
        Look up a symbol by name, ignoring case.

        Returns:
            The matching Symbol, or None if the name is not declared
        """
        return self._index.get(name.casefold())

    def insert(
        self,
        name: str,
        line: int,
        offset: int,
        location: Optional[SourceLocation] = None,
    ) -> Symbol:
        """
        Declare a new label.

        Args:
            name: Label name (terminator already removed)
            line: 1-based line of the declaration
            offset: Current address-counter value
            location: Source location (defaults to "<input>" at line)

        Returns:
            The new Symbol

        Raises:
            DuplicateLabelError: If a symbol with the same name, in any
                casing, is already in the table
        """
        if location is None:
            location = SourceLocation("<input>", line)

        existing = self.find(name)
        if existing is not None:
            raise DuplicateLabelError(
                name,
                location=location,
                original_location=existing.location,
            )

        symbol = Symbol(name=name, offset=offset, line=line, location=location)
        self._symbols.append(symbol)
        self._index[symbol.key] = symbol

        logger.debug(f"label {name!r} = {offset} (line {line})")
        return symbol

    def dump(self) -> Iterator[Symbol]:
        """
        Yield every symbol in insertion order.

        Each call returns a fresh iterator, so the dump can be replayed.
        """
        yield from self._symbols

    def as_dict(self) -> dict[str, int]:
        """Map each symbol name to its offset, in insertion order."""
        return {sym.name: sym.offset for sym in self._symbols}
