"""
linasm Command-Line Interface
=============================

- **linasm**: single-pass assembler front end (label table dump)

The tool is a Click-based CLI application; exit codes are shared through
linasm.cli.errors.
"""

__all__ = ["linasm"]
