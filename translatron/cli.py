"""Command-line front end: automatic batch mode and the interactive menus."""

from __future__ import annotations

import string
import sys
from dataclasses import dataclass
from enum import Enum, auto
from typing import Iterable, Iterator, TextIO

from translatron.assembler import parse_assembly
from translatron.disassembler import disassemble
from translatron.isa import TranslationError

LINE_BUFF_SIZE = 4096
_CHOICE_SIZE = 10
_WORD_MASK = 0xFFFFFFFF
_ULONG_MAX = 2**64 - 1
_C_SPACE = " \t\n\v\f\r"

_BANNER = "Welcome to the MIPS-Translatron 3000 Tool\n"

_ROOT_MENU = (
    "\nPlease enter an option:\n"
    "\t(1) Assembly to Machine Code\n"
    "\t(2) Machine Code to Assembly\n"
    "\t(3) Quit\n"
    "\t(4) Corrupted Code Inspector\n"
)
_MACH_MENU = (
    "\nPlease select an option:\n"
    "\t(1) Hexadecimal to Assembly\n"
    "\t(2) Binary to Assembly\n"
    "\t[3] Main Menu\n"
)


@dataclass
class Options:
    """Settings taken from the command line."""

    auto: bool = False
    reverse: bool = False
    in_filename: str | None = None
    out_filename: str | None = None


class _State(Enum):
    ROOT = auto()
    ASM_TO_MACH = auto()
    MACH_TO_ASM = auto()
    HEX_TO_ASM = auto()
    BIN_TO_ASM = auto()
    DEBUG = auto()


_MENUS = {
    _State.ROOT: (_ROOT_MENU, {"1": _State.ASM_TO_MACH, "2": _State.MACH_TO_ASM, "4": _State.DEBUG}),
    _State.MACH_TO_ASM: (
        _MACH_MENU,
        {"1": _State.HEX_TO_ASM, "2": _State.BIN_TO_ASM, "3": _State.ROOT},
    ),
}

# Prompt shown in each input state, and the state an empty line returns to.
_PROMPTS = {
    _State.ASM_TO_MACH: ("\n Enter a line of assembly:\n> ", _State.ROOT),
    _State.HEX_TO_ASM: ("\n Enter Hex:\n> ", _State.MACH_TO_ASM),
    _State.BIN_TO_ASM: ("\n Enter Binary:\n> ", _State.MACH_TO_ASM),
    _State.DEBUG: ("\n Enter Broken Binary:\n> ", _State.ROOT),
}


class _InvalidLine(Exception):
    """A line of automatic input ended without a newline."""


def parse_args(argv: list[str]) -> Options:
    """Read the flags -a and -r and up to two file names from the arguments."""
    options = Options()
    for arg in argv:
        if arg == "-a":
            options.auto = True
        elif arg == "-r":
            options.reverse = True
        elif options.in_filename is None:
            options.in_filename = arg
        elif options.out_filename is None:
            options.out_filename = arg
    return options


def format_binary(value: int, grouped: bool) -> str:
    """Render a 32-bit word as binary digits, optionally in groups of four."""
    bits = f"{value & _WORD_MASK:032b}"
    if not grouped:
        return bits
    return " ".join(bits[start:start + 4] for start in range(0, len(bits), 4))


def _strtoul(text: str, base: int) -> int:
    """Read an unsigned number the way the C library does, truncated to 32 bits."""
    rest = text.lstrip(_C_SPACE)
    negative = False
    if rest[:1] in ("+", "-") and rest:
        negative = rest[0] == "-"
        rest = rest[1:]

    valid = "01" if base == 2 else string.hexdigits
    if base == 16 and rest[:2].lower() == "0x" and rest[2:3] and rest[2] in valid:
        rest = rest[2:]

    digits = []
    for char in rest:
        if char not in valid:
            break
        digits.append(char)
    if not digits:
        return 0

    value = int("".join(digits), base)
    if value > _ULONG_MAX:
        value = _ULONG_MAX
    elif negative:
        value = -value % (_ULONG_MAX + 1)
    return value & _WORD_MASK


def assemble_line(line: str, interactive: bool) -> str:
    """Assemble a line and render the word for the interactive or automatic mode."""
    word = parse_assembly(line)
    if interactive:
        return f"Hex: 0x{word:08X} Binary:{format_binary(word, True)}"
    return format_binary(word, False)


def disassemble_line(line: str, base: int) -> str:
    """Read a machine word in the given base (2 or 16) and return its assembly."""
    return disassemble(_strtoul(line, base))


def run_auto(lines: Iterable[str], reverse: bool, out: TextIO) -> int:
    """Translate every non-blank line, writing one result or error per line."""
    for raw in lines:
        if raw == "\n":
            continue
        line = raw.split("\n", 1)[0]
        try:
            text = disassemble_line(line, 2) if reverse else assemble_line(line, False)
        except TranslationError as exc:
            text = str(exc)
        print(text, file=out)
    return 0


def _handle_line(state: _State, line: str, out: TextIO) -> _State:
    if state is _State.DEBUG:
        print(f"Broken Binary Received: {line}", file=out)
        print("Bonus Logic Not Yet Implemented. Returning to Root...", file=out)
        return _State.ROOT
    try:
        if state is _State.ASM_TO_MACH:
            print(assemble_line(line, True), file=out)
        else:
            base = 16 if state is _State.HEX_TO_ASM else 2
            print(disassemble_line(line, base) + "\n", file=out)
    except TranslationError as exc:
        print(exc, file=out)
    return state


def run_interactive(stdin: TextIO, out: TextIO) -> int:
    """Drive the menu-based session until the user quits or input ends."""
    out.write(_BANNER)
    state = _State.ROOT
    while True:
        if state in _MENUS:
            menu, choices = _MENUS[state]
            out.write(menu)
            out.write("\n> ")
            choice = stdin.readline(_CHOICE_SIZE - 1)
            if not choice:
                return 0
            if not choice.endswith("\n"):
                out.write("Invalid input")
                continue
            choice = choice[:-1]
            if state is _State.ROOT and choice == "3":
                return 0
            if choice in choices:
                state = choices[choice]
            else:
                out.write("Invalid input")
            continue

        prompt, back = _PROMPTS[state]
        out.write(prompt)
        line = stdin.readline(LINE_BUFF_SIZE - 1)
        if not line:
            return 0
        if not line.endswith("\n"):
            out.write("Invalid input")
            continue
        line = line[:-1]
        if not line:
            state = back
            continue
        state = _handle_line(state, line, out)


def _strict_lines(stream: TextIO) -> Iterator[str]:
    for line in stream:
        if "\n" not in line:
            raise _InvalidLine
        yield line


def main(argv: list[str] | None = None) -> int:
    """Run the tool; returns the process exit status."""
    options = parse_args(sys.argv[1:] if argv is None else argv)
    out = sys.stdout
    if not options.auto:
        return run_interactive(sys.stdin, out)
    try:
        if options.in_filename is not None:
            with open(options.in_filename, encoding="utf-8") as handle:
                return run_auto(handle, options.reverse, out)
        return run_auto(_strict_lines(sys.stdin), options.reverse, out)
    except (_InvalidLine, OSError):
        out.write("Invalid line")
        return 1


if __name__ == "__main__":
    raise SystemExit(main())