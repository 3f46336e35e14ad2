# =============================================================================
# test_cli.py - linasm Command-Line Tests
# =============================================================================
# Tests for argument handling, exit codes and diagnostic output of the
# linasm command.
# =============================================================================

import logging
from pathlib import Path

import pytest
from click.testing import CliRunner

from linasm.cli.linasm import main


SOURCE = """\
; sample program
start:  section .text
        mov ax, 'a;b'   ; quoted separator
next:   int 21h
"""


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    monkeypatch.delenv("LINASM_MAX_LINE_LENGTH", raising=False)
    monkeypatch.delenv("LINASM_ENCODING", raising=False)


@pytest.fixture(autouse=True)
def reset_logging():
    yield
    logging.getLogger("linasm").setLevel(logging.NOTSET)


class TestArguments:
    """Exactly one filename is required."""

    def test_help(self, runner):
        result = runner.invoke(main, ["-h"])
        assert result.exit_code == 0
        assert "Usage:" in result.output

    def test_help_long(self, runner):
        result = runner.invoke(main, ["--help"])
        assert result.exit_code == 0

    def test_missing_filename(self, runner):
        result = runner.invoke(main, [])
        assert result.exit_code == 1
        assert "linasm: missing filename" in result.output
        assert "Usage:" in result.output

    def test_two_filenames(self, runner):
        result = runner.invoke(main, ["a.asm", "b.asm"])
        assert result.exit_code == 1
        assert "filename redefinition old=a.asm new=b.asm" in result.output

    def test_unknown_option(self, runner):
        result = runner.invoke(main, ["-x", "prog.asm"])
        assert result.exit_code == 1
        assert "No such option" in result.output

    def test_invalid_option_value(self, runner):
        result = runner.invoke(main, ["--max-line-length", "wide", "prog.asm"])
        assert result.exit_code == 1

    def test_version(self, runner):
        result = runner.invoke(main, ["--version"])
        assert result.exit_code == 0
        assert "linasm" in result.output


class TestAssembly:
    """Successful runs print the label table."""

    def test_label_table(self, runner):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["prog.asm"])

        assert result.exit_code == 0, result.output
        lines = [line for line in result.output.splitlines() if line.startswith("linasm: label")]
        assert lines[0] == "linasm: label table:"
        assert "label=start" in lines[1]
        assert "offset=   0" in lines[1]
        assert "line_num=002" in lines[1]
        assert "label=next" in lines[2]
        assert "offset=   4" in lines[2]

    def test_symbol_file(self, runner):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["prog.asm", "-s", "prog.sym"])
            assert result.exit_code == 0, result.output
            symbols = Path("prog.sym").read_text().splitlines()

        assert symbols[-2:] == ["start 0 2", "next 4 4"]

    def test_verbose(self, runner, caplog):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["-v", "prog.asm"])
        assert result.exit_code == 0, result.output
        dispatched = [
            record.getMessage()
            for record in caplog.records
            if record.name == "linasm.assembler.mnemonics" and record.levelno == logging.DEBUG
        ]
        assert "int: line=4 operand=[21h] size=3" in dispatched
        assert len(dispatched) == 3

    def test_quiet_by_default(self, runner, caplog):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["prog.asm"])
        assert result.exit_code == 0, result.output
        assert not [r for r in caplog.records if r.name.startswith("linasm.assembler")]


class TestFailures:
    """Fatal conditions exit with status 1 and print no label table."""

    def test_missing_file(self, runner):
        with runner.isolated_filesystem():
            result = runner.invoke(main, ["nope.asm"])
        assert result.exit_code == 1
        assert "cannot read 'nope.asm'" in result.output
        assert "label table" not in result.output

    def test_duplicate_label(self, runner):
        with runner.isolated_filesystem():
            Path("dup.asm").write_text("a: db 1\nA: db 2\n")
            result = runner.invoke(main, ["dup.asm"])
        assert result.exit_code == 1
        assert "linasm: dup.asm:2: error: duplicate label 'A'" in result.output
        assert "label table" not in result.output

    def test_unknown_mnemonic(self, runner):
        with runner.isolated_filesystem():
            Path("bad.asm").write_text("ok:\nfoo 1,2\nlater:\n")
            result = runner.invoke(main, ["bad.asm"])
        assert result.exit_code == 1
        assert "unknown mnemonic 'foo'" in result.output
        assert "bad.asm:2" in result.output
        assert "label=" not in result.output

    def test_max_line_length_option(self, runner):
        with runner.isolated_filesystem():
            Path("long.asm").write_text("db 'abcdefghij'\n")
            result = runner.invoke(main, ["--max-line-length", "8", "long.asm"])
        assert result.exit_code == 1
        assert "line too long" in result.output

    def test_max_line_length_from_env(self, runner):
        with runner.isolated_filesystem():
            Path("long.asm").write_text("db 'abcdefghij'\n")
            result = runner.invoke(main, ["long.asm"], env={"LINASM_MAX_LINE_LENGTH": "8"})
        assert result.exit_code == 1
        assert "line too long" in result.output

    def test_invalid_env(self, runner):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["prog.asm"], env={"LINASM_MAX_LINE_LENGTH": "wide"})
        assert result.exit_code == 1
        assert "invalid configuration" in result.output

    def test_unknown_encoding_env(self, runner):
        with runner.isolated_filesystem():
            Path("prog.asm").write_text(SOURCE)
            result = runner.invoke(main, ["prog.asm"], env={"LINASM_ENCODING": "no-such-codec"})
        assert result.exit_code == 1
        assert "invalid configuration" in result.output
        assert "no-such-codec" in result.output

    def test_directory_argument(self, runner):
        with runner.isolated_filesystem():
            Path("src").mkdir()
            result = runner.invoke(main, ["src"])
        assert result.exit_code == 1
        assert "cannot read 'src'" in result.output
        assert "label table" not in result.output
