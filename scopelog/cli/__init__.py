"""scopelog CLI — Typer-based command-line interface.

Provides the ``scopelog`` command with subcommands for listing the level
table and emitting a single entry through a filtered console sink.

All output uses Rich for formatted terminal display.
"""
