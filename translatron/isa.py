"""Instruction-set tables and shared types for the MIPS translator."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto

UNDEFINED = 0

MAX_5_BIT = 31
MAX_6_BIT = 63
MAX_16_BIT = 65535
MAX_26_BIT = 67108863

OPERAND_SLOTS = 4

REGISTERS: tuple[str, ...] = (
    "$zero", "$at", "$v0", "$v1", "$a0", "$a1", "$a2", "$a3",
    "$t0", "$t1", "$t2", "$t3", "$t4", "$t5", "$t6", "$t7",
    "$s0", "$s1", "$s2", "$s3", "$s4", "$s5", "$s6", "$s7",
    "$t8", "$t9", "$k0", "$k1", "$gp", "$sp", "$fp", "$ra",
)


class TranslationError(Exception):
    """Raised when an instruction cannot be assembled or disassembled."""


class OperandType(Enum):
    """The kinds of arguments an assembly instruction may carry."""

    REGISTER = auto()
    IMMEDIATE = auto()
    TARGET = auto()
    NONE = auto()


class InstructionType(Enum):
    """The MIPS instruction formats."""

    R_TYPE = auto()
    I_TYPE = auto()
    J_TYPE = auto()


class Part(Enum):
    """The fields of a machine instruction an operand can map to."""

    RD = auto()
    RS = auto()
    RT = auto()
    SA = auto()
    IMM = auto()
    TAR = auto()
    EMPTY = auto()


def bin_to_num(binary: str) -> int:
    """Read a string of binary digits as an unsigned 32-bit number.

    Every character shifts the value left; only '1' sets the low bit.
    """
    num = 0
    for char in binary:
        num = ((num << 1) | (char == "1")) & 0xFFFFFFFF
    return num


@dataclass(frozen=True)
class Instruction:
    """Definition of one supported instruction."""

    name: str
    type: InstructionType
    op_code: str
    funct_code: str | None
    parts: tuple[Part, Part, Part, Part]

    def op_value(self) -> int:
        """The op code as an integer."""
        return bin_to_num(self.op_code)

    def funct_value(self) -> int | None:
        """The funct code as an integer, or None when there is none."""
        if self.funct_code is None:
            return None
        return bin_to_num(self.funct_code)


_P = Part
_R = InstructionType.R_TYPE
_I = InstructionType.I_TYPE

INSTRUCTIONS: tuple[Instruction, ...] = (
    Instruction("ADD", _R, "000000", "100000", (_P.RD, _P.RS, _P.RT, _P.EMPTY)),
    Instruction("ADDI", _I, "001000", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
    Instruction("BNE", _I, "000101", None, (_P.RS, _P.RT, _P.IMM, _P.EMPTY)),
    Instruction("AND", _R, "000000", "100100", (_P.RD, _P.RS, _P.RT, _P.EMPTY)),
    Instruction("ANDI", _I, "001100", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
    Instruction("BEQ", _I, "000100", None, (_P.RS, _P.RT, _P.IMM, _P.EMPTY)),
    Instruction("DIV", _R, "000000", "011010", (_P.RS, _P.RT, _P.EMPTY, _P.EMPTY)),
    Instruction("LUI", _I, "001111", None, (_P.RT, _P.IMM, _P.EMPTY, _P.EMPTY)),
    Instruction("LW", _I, "100011", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
    Instruction("MFHI", _R, "000000", "010000", (_P.RD, _P.EMPTY, _P.EMPTY, _P.EMPTY)),
    Instruction("MFLO", _R, "000000", "010010", (_P.RD, _P.EMPTY, _P.EMPTY, _P.EMPTY)),
    Instruction("OR", _R, "000000", "100101", (_P.RD, _P.RS, _P.RT, _P.EMPTY)),
    Instruction("SLT", _R, "000000", "101010", (_P.RD, _P.RS, _P.RT, _P.EMPTY)),
    Instruction("SUB", _R, "000000", "100010", (_P.RD, _P.RS, _P.RT, _P.EMPTY)),
    Instruction("SW", _I, "101011", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
    Instruction("MULT", _R, "000000", "011000", (_P.RS, _P.RT, _P.EMPTY, _P.EMPTY)),
    Instruction("ORI", _I, "001101", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
    Instruction("SLTI", _I, "001010", None, (_P.RT, _P.RS, _P.IMM, _P.EMPTY)),
)


@dataclass(frozen=True)
class ParseResult:
    """An assembly instruction: its name and up to four typed operand values.

    Operand slots that are not given are filled with OperandType.NONE and
    UNDEFINED, so ``types`` and ``vals`` always hold four entries.
    """

    op_name: str
    types: tuple[OperandType, ...] = field(default=())
    vals: tuple[int, ...] = field(default=())

    def __post_init__(self) -> None:
        types = tuple(self.types)
        vals = tuple(self.vals)
        if len(types) != len(vals):
            raise ValueError("operand types and values differ in length")
        if len(types) > OPERAND_SLOTS:
            raise TranslationError("Too many arguments.")
        padding = OPERAND_SLOTS - len(types)
        object.__setattr__(self, "types", types + (OperandType.NONE,) * padding)
        object.__setattr__(self, "vals", vals + (UNDEFINED,) * padding)

    @property
    def operands(self) -> list[tuple[OperandType, int]]:
        """The operands that are present, in order."""
        pairs = []
        for kind, value in zip(self.types, self.vals):
            if kind is OperandType.NONE:
                break
            pairs.append((kind, value))
        return pairs


def find_by_name(name: str) -> Instruction:
    """Return the instruction with the given (upper-case) name."""
    for instruction in INSTRUCTIONS:
        if instruction.name == name:
            return instruction
    raise TranslationError("No instruction of given name.")


def find_by_code(op_code: int, funct_code: int) -> Instruction:
    """Return the instruction matching an op code, and funct code for R-type."""
    for instruction in INSTRUCTIONS:
        if instruction.op_value() != op_code:
            continue
        if instruction.type is InstructionType.R_TYPE and instruction.funct_value() != funct_code:
            continue
        return instruction
    raise TranslationError("No instruction of given op code or funct code.")


def register_index(name: str) -> int:
    """Return the number of the register with the given name."""
    try:
        return REGISTERS.index(name)
    except ValueError:
        raise TranslationError("Register not found.") from None