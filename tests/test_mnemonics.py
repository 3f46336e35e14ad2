# =============================================================================
# test_mnemonics.py - Dispatch Table and Session Unit Tests
# =============================================================================
# Tests for the mnemonic dispatch table, handler side effects and the
# address counter.
# =============================================================================

import pytest
from linasm.assembler.mnemonics import (
    DispatchTable,
    Mnemonic,
    MNEMONIC_SIZES,
    MnemonicHandler,
    default_dispatch_table,
)
from linasm.assembler.session import AddressCounter, AssemblySession


class TestDefaultTable:
    """The six reference mnemonics."""

    def test_six_entries(self):
        table = default_dispatch_table()
        assert len(table) == 6
        assert table.keywords() == ["db", "equ", "global", "int", "mov", "section"]

    def test_case_insensitive_lookup(self):
        table = default_dispatch_table()
        for keyword in ("mov", "MOV", "Mov", "mOV"):
            assert table.find(keyword) is table.find("mov")
        assert "SECTION" in table

    def test_unknown_keyword(self):
        table = default_dispatch_table()
        assert table.find("foo") is None
        assert "foo" not in table

    def test_placeholder_sizes(self):
        table = default_dispatch_table()
        sizes = [table.find(m.value).size for m in Mnemonic]
        assert sizes == [1, 2, 0, 3, 4, 0]
        assert MNEMONIC_SIZES[Mnemonic.MOV] == 4

    def test_mnemonic_str(self):
        assert str(Mnemonic.GLOBAL) == "global"


class TestHandlers:
    """Handlers advance the session's address counter."""

    def test_handler_advances_counter(self):
        session = AssemblySession()
        handler = session.dispatch.find("int")
        assert handler(session, "21h", 1) == 3
        assert session.address == 3

    def test_zero_size_handler(self):
        session = AssemblySession()
        session.dispatch.find("section")(session, ".text", 1)
        assert session.address == 0

    def test_operand_optional(self):
        session = AssemblySession()
        session.dispatch.find("db")(session, None, 1)
        assert session.address == 1

    def test_invalid_handlers(self):
        with pytest.raises(ValueError):
            MnemonicHandler("nop", -1)
        with pytest.raises(ValueError):
            MnemonicHandler("", 1)
        with pytest.raises(ValueError):
            MnemonicHandler("two words", 1)


class TestCustomTables:
    """Tables built from explicit handlers."""

    def test_from_sizes(self):
        table = DispatchTable.from_sizes({"nop": 1, "jmp": 3})
        assert table.find("JMP").size == 3
        assert [h.keyword for h in table] == ["nop", "jmp"]

    def test_duplicate_keyword_rejected(self):
        with pytest.raises(ValueError):
            DispatchTable([MnemonicHandler("nop", 1), MnemonicHandler("NOP", 2)])


class TestAddressCounter:
    """The counter never moves backwards."""

    def test_starts_at_zero(self):
        assert AddressCounter().value == 0

    def test_advance(self):
        counter = AddressCounter()
        counter.advance(2)
        assert counter.advance(3) == 5
        assert int(counter) == 5

    def test_negative_advance_rejected(self):
        counter = AddressCounter(4)
        with pytest.raises(ValueError):
            counter.advance(-1)
        assert counter.value == 4

    def test_negative_start_rejected(self):
        with pytest.raises(ValueError):
            AddressCounter(-1)

    def test_sessions_are_independent(self):
        first = AssemblySession()
        second = AssemblySession()
        first.counter.advance(7)
        first.symbols.insert("x", line=1, offset=0)
        assert second.address == 0
        assert len(second.symbols) == 0
