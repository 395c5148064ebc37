# translatron

`translatron` converts MIPS assembly to 32-bit machine code and back again.
It covers a small subset of the instruction set:

ADD, ADDI, AND, ANDI, BEQ, BNE, DIV, LUI, LW, MFHI, MFLO, MULT, OR, ORI, SLT, SLTI, SUB, SW

## Installation

```
pip install .
```

## Command line

Run it with no arguments to open the interactive menu:

```
translatron
```

The main menu offers four options:

1. **Assembly to Machine Code**: enter a line such as `add $t0, $s1, $s2`. The tool prints the word in hex and in binary, with the binary in groups of four digits:
   `Hex: 0x02324020 Binary:0000 0010 0011 0010 0100 0000 0010 0000`
2. **Machine Code to Assembly**: opens a submenu where you choose hexadecimal input (a `0x` prefix is optional) or binary input. The tool then prints the assembly for each word you enter.
3. **Quit**.
4. **Corrupted Code Inspector**: the tool echoes the binary line you enter and returns to the main menu. It does not analyse the input yet.

An empty line at an input prompt goes back to the menu it came from. When an instruction is invalid, the tool prints the error message and asks again. The session ends when you choose Quit or when input ends.

### Batch mode

With `-a`, the tool reads one instruction per line from the named file, or from standard input when no file is named. It skips blank lines and prints one line of output for each line of input. For valid input it prints 32 binary digits. For invalid input it prints the error message:

```
translatron -a program.s
echo "addi $t0, $zero, #5" | translatron -a
```

With `-r` as well, the tool reverses the direction. The input lines are binary words and the output is assembly:

```
translatron -a -r words.txt
```

Each line read from standard input must end with a newline. If one does not, or if the input file cannot be read, the tool prints `Invalid line` and exits with status 1.

## Syntax

- Mnemonics are not case-sensitive.
- Operands are separated by commas, and spaces inside operands are ignored.
- Registers use their conventional names (`$zero`, `$at`, `$v0` ... `$ra`).
- Immediates are decimal and may be negative. The leading `#` may be left out. Values are truncated to 16 bits.
- Operands follow the order of the instruction's fields. For example, `lw $t0, $s0, #4` loads from `$s0 + 4`. The `offset($base)` notation is not accepted.
- In disassembled output, immediates are written as signed values with a `#` in front, for example `ADDI $t0, $zero, #-1`.

## Library use

```python
from translatron.assembler import parse_assembly, parse_operands, encode
from translatron.disassembler import disassemble, decode, generate_assembly

word = parse_assembly("add $t0, $s1, $s2")
print(f"0x{word:08X}")        # 0x02324020
print(disassemble(word))      # ADD $t0, $s1, $s2

parsed = decode(word)         # a translatron.isa.ParseResult
print(parsed.operands)
print(generate_assembly(parsed))
```

`translatron.isa` holds the instruction table (`INSTRUCTIONS`), the register names (`REGISTERS`) and the lookups `find_by_name`, `find_by_code` and `register_index`.

When input is invalid, the functions raise `translatron.isa.TranslationError`. The exception carries a readable message, for example `No instruction of given name.` or `Register not found.`.

## Limitations

- Jump targets and J-type instructions are not supported.
- The corrupted-code inspector does not search for valid instructions near a damaged word. It only echoes the input.
- A second file name on the command line is accepted but ignored. Output always goes to standard output.