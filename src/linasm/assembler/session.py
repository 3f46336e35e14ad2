"""
Assembly Session
================

State of one assembly run: the symbol table, the address counter, the
dispatch table and the configuration. The line driver creates a fresh
session for every run and hands it to each mnemonic handler, so there is
no module-level state to reset between runs.
"""

from dataclasses import dataclass, field
import logging

from linasm.config import AssemblerConfig
from linasm.assembler.symbols import SymbolTable
from linasm.assembler.mnemonics import DispatchTable, default_dispatch_table

logger = logging.getLogger(__name__)


class AddressCounter:
    """
    Cumulative address offset. It starts at zero and never decreases.
    """

    def __init__(self, start: int = 0):
        if start < 0:
            raise ValueError(f"address counter cannot start below zero, got {start}")
        self._value = start

    @property
    def value(self) -> int:
        return self._value

    def advance(self, size: int) -> int:
        """
        Move the counter forward by size.

        Returns:
            The new counter value

        Raises:
            ValueError: If size is negative
        """
        if size < 0:
            raise ValueError(f"address counter cannot move backwards (size {size})")
        self._value += size
        return self._value

    def __int__(self) -> int:
        return self._value

    def __repr__(self) -> str:
        return f"AddressCounter({self._value})"


@dataclass
class AssemblySession:
    """
    Everything one assembly run reads and writes.

    Attributes:
        config: Syntax characters and limits
        dispatch: Mnemonic dispatch table (read-only during the run)
        filename: Name of the source being assembled
        symbols: Labels declared so far
        counter: Current address offset
    """
    config: AssemblerConfig = field(default_factory=AssemblerConfig)
    dispatch: DispatchTable = field(default_factory=default_dispatch_table)
    filename: str = "<input>"
    symbols: SymbolTable = field(default_factory=SymbolTable)
    counter: AddressCounter = field(default_factory=AddressCounter)

    @property
    def address(self) -> int:
        """Current address-counter value."""
        return self.counter.value
