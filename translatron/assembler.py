"""Assembling: text assembly into parsed instructions and machine words."""

from __future__ import annotations

import re

from translatron.isa import (
    MAX_5_BIT,
    MAX_16_BIT,
    MAX_26_BIT,
    UNDEFINED,
    InstructionType,
    OperandType,
    ParseResult,
    Part,
    TranslationError,
    find_by_name,
    register_index,
)

_WORD_MASK = 0xFFFFFFFF
_LONG_MIN = -(2**63)
_LONG_MAX = 2**63 - 1

# Leading whitespace and an optional sign, as a base-10 strtol accepts them.
_DECIMAL = re.compile(r"[ \t\n\v\f\r]*([+-]?[0-9]+)")

_SHIFTS = {
    Part.RD: 11,
    Part.RS: 21,
    Part.RT: 16,
    Part.SA: 6,
    Part.IMM: 0,
    Part.TAR: 0,
}

_REGISTER_CHECK = (OperandType.REGISTER, MAX_5_BIT, "Missing register.", "Invalid register.")

_CHECKS = {
    Part.RD: _REGISTER_CHECK,
    Part.RS: _REGISTER_CHECK,
    Part.RT: _REGISTER_CHECK,
    Part.SA: _REGISTER_CHECK,
    Part.IMM: (OperandType.IMMEDIATE, MAX_16_BIT, "Missing immediate.", "Invalid immediate."),
    Part.TAR: (OperandType.TARGET, MAX_26_BIT, "Missing target.", "Invalid target."),
}


def _check_part(part: Part, kind: OperandType, value: int) -> None:
    if part is Part.EMPTY:
        if kind is not OperandType.NONE:
            raise TranslationError("Too many arguments.")
        return
    expected, limit, missing, invalid = _CHECKS[part]
    if kind is not expected:
        raise TranslationError(missing)
    if value > limit:
        raise TranslationError(invalid)


def encode(parsed: ParseResult) -> int:
    """Encode a parsed instruction as a 32-bit machine word."""
    instruction = find_by_name(parsed.op_name)

    result = instruction.op_value() << 26
    if instruction.type is InstructionType.R_TYPE:
        result |= instruction.funct_value() or 0

    for part, kind, value in zip(instruction.parts, parsed.types, parsed.vals):
        _check_part(part, kind, value)
        if part is not Part.EMPTY:
            result |= value << _SHIFTS[part]

    return result & _WORD_MASK


def _parse_immediate(token: str) -> int:
    digits = token.replace("#", "")
    match = _DECIMAL.fullmatch(digits)
    if match is None:
        raise TranslationError("Improperly formatted immediate.")
    value = min(max(int(match.group(1)), _LONG_MIN), _LONG_MAX)
    return value & MAX_16_BIT


def _parse_operand(token: str) -> tuple[OperandType, int]:
    first = token[:1]
    if first == "#" or first.isdigit() and first.isascii() or first == "-":
        return OperandType.IMMEDIATE, _parse_immediate(token)
    if first == "$":
        return OperandType.REGISTER, register_index(token)
    raise TranslationError(
        "Argument isn't register or immediate (targets not yet supported)."
    )


def parse_operands(line: str) -> ParseResult:
    """Split a line of assembly into its upper-cased name and typed operands."""
    split_at = line.find(" ")
    if split_at < 0:
        split_at = len(line)
    op_name = line[:split_at].upper()
    rest = line[split_at:]

    types: list[OperandType] = []
    vals: list[int] = []
    for token in (piece for piece in rest.split(",") if piece):
        kind, value = _parse_operand(token.replace(" ", ""))
        types.append(kind)
        vals.append(value)

    return ParseResult(op_name, tuple(types), tuple(vals))


def parse_assembly(line: str) -> int:
    """Assemble one line of assembly into a 32-bit machine word."""
    return encode(parse_operands(line))


__all__ = ["encode", "parse_operands", "parse_assembly", "UNDEFINED"]