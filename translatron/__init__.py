"""Assembler and disassembler for a subset of the MIPS instruction set."""

__version__ = "0.1.0"

__all__ = ["isa", "assembler", "disassembler", "cli"]