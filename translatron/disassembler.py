"""Disassembling: machine words into parsed instructions and assembly text."""

from __future__ import annotations

from translatron.isa import (
    MAX_5_BIT,
    MAX_6_BIT,
    MAX_16_BIT,
    MAX_26_BIT,
    REGISTERS,
    UNDEFINED,
    OperandType,
    ParseResult,
    Part,
    TranslationError,
    find_by_code,
)

_WORD_MASK = 0xFFFFFFFF


def decode(inst: int) -> ParseResult:
    """Decode a 32-bit machine word into a parsed instruction."""
    inst &= _WORD_MASK
    fields = {
        Part.RD: (OperandType.REGISTER, (inst >> 11) & MAX_5_BIT),
        Part.RS: (OperandType.REGISTER, (inst >> 21) & MAX_5_BIT),
        Part.RT: (OperandType.REGISTER, (inst >> 16) & MAX_5_BIT),
        Part.SA: (OperandType.REGISTER, (inst >> 6) & MAX_5_BIT),
        Part.IMM: (OperandType.IMMEDIATE, inst & MAX_16_BIT),
        Part.TAR: (OperandType.TARGET, inst & MAX_26_BIT),
        Part.EMPTY: (OperandType.NONE, UNDEFINED),
    }

    instruction = find_by_code((inst >> 26) & MAX_6_BIT, inst & MAX_6_BIT)
    operands = [fields[part] for part in instruction.parts]
    return ParseResult(
        instruction.name,
        tuple(kind for kind, _ in operands),
        tuple(value for _, value in operands),
    )


def _signed16(value: int) -> int:
    value &= MAX_16_BIT
    return value - 0x10000 if value & 0x8000 else value


def _format_operand(kind: OperandType, value: int) -> str:
    if kind is OperandType.REGISTER:
        if not 0 <= value < len(REGISTERS):
            raise TranslationError("Invalid register.")
        return REGISTERS[value]
    if kind is OperandType.IMMEDIATE:
        return f"#{_signed16(value)}"
    raise TranslationError("Generating assembly with targets is unsupported.")


def generate_assembly(parsed: ParseResult) -> str:
    """Render a parsed instruction as a line of assembly text."""
    args = [_format_operand(kind, value) for kind, value in parsed.operands]
    if not args:
        return parsed.op_name
    return f"{parsed.op_name} {', '.join(args)}"


def disassemble(inst: int) -> str:
    """Turn a 32-bit machine word into a line of assembly text."""
    return generate_assembly(decode(inst))