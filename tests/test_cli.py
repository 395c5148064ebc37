import io

import pytest

from translatron.assembler import parse_assembly
from translatron.cli import (
    Options,
    assemble_line,
    disassemble_line,
    format_binary,
    main,
    parse_args,
    run_auto,
    run_interactive,
)
from translatron.isa import TranslationError

ADD_LINE = "ADD $t0, $t1, $t2"
ADDI_LINE = "ADDI $t0, $t1, #-5"


def test_parse_args_flags_and_files():
    options = parse_args(["-a", "-r", "in.s", "out.txt", "extra"])
    assert options == Options(auto=True, reverse=True, in_filename="in.s", out_filename="out.txt")


def test_parse_args_defaults():
    options = parse_args([])
    assert options == Options(auto=False, reverse=False, in_filename=None, out_filename=None)


def test_format_binary_pinned_values():
    assert format_binary(0, False) == "0" * 32
    assert format_binary(0xFFFFFFFF, True) == " ".join(["1111"] * 8)


@pytest.mark.parametrize("value", [0, 1, 0x012A4020, 0x80000000, 0xDEADBEEF])
def test_format_binary_invariants(value):
    plain = format_binary(value, False)
    grouped = format_binary(value, True)
    assert len(plain) == 32
    assert int(plain, 2) == value
    assert grouped.replace(" ", "") == plain
    assert [len(group) for group in grouped.split(" ")] == [4] * 8


def test_assemble_line_interactive_consistent():
    text = assemble_line(ADD_LINE, True)
    assert text.startswith("Hex: 0x")
    hex_part, binary_part = text[len("Hex: 0x"):].split(" Binary:")
    word = parse_assembly(ADD_LINE)
    assert int(hex_part, 16) == word
    assert int(binary_part.replace(" ", ""), 2) == word
    assert hex_part == hex_part.upper()
    assert len(hex_part) == 8


def test_assemble_line_automatic_is_plain_bits():
    assert assemble_line(ADD_LINE, False) == format_binary(parse_assembly(ADD_LINE), False)


def test_assemble_line_error():
    with pytest.raises(TranslationError, match="No instruction of given name."):
        assemble_line("BOGUS $t0", False)


@pytest.mark.parametrize("line", [ADD_LINE, ADDI_LINE])
def test_binary_round_trip(line):
    bits = assemble_line(line, False)
    assert disassemble_line(bits, 2) == line


def test_hex_input_forms_agree():
    word = parse_assembly(ADD_LINE)
    plain = f"{word:08X}"
    assert disassemble_line(plain, 16) == ADD_LINE
    assert disassemble_line("0x" + plain, 16) == ADD_LINE
    assert disassemble_line("  0x" + plain.lower(), 16) == ADD_LINE


def test_disassemble_line_trailing_garbage_ignored():
    bits = assemble_line(ADD_LINE, False)
    assert disassemble_line(bits + "xyz", 2) == ADD_LINE


def test_disassemble_line_unknown_code():
    with pytest.raises(TranslationError, match="No instruction of given op code or funct code."):
        disassemble_line("0xFFFFFFFF", 16)


def test_disassemble_line_no_digits_reads_zero():
    with pytest.raises(TranslationError, match="No instruction of given op code or funct code."):
        disassemble_line("zzz", 16)


def test_run_auto_forward():
    out = io.StringIO()
    status = run_auto([ADD_LINE + "\n", "\n", "BOGUS $t0\n"], False, out)
    assert status == 0
    assert out.getvalue().splitlines() == [
        format_binary(parse_assembly(ADD_LINE), False),
        "No instruction of given name.",
    ]


def test_run_auto_reverse():
    out = io.StringIO()
    bits = assemble_line(ADDI_LINE, False)
    status = run_auto([bits + "\n", bits], True, out)
    assert status == 0
    assert out.getvalue().splitlines() == [ADDI_LINE, ADDI_LINE]


def test_interactive_assemble_then_quit():
    stdin = io.StringIO(f"1\n{ADD_LINE}\n\n3\n")
    out = io.StringIO()
    assert run_interactive(stdin, out) == 0
    text = out.getvalue()
    assert text.startswith("Welcome to the MIPS-Translatron 3000 Tool\n")
    assert assemble_line(ADD_LINE, True) + "\n" in text
    assert "Enter a line of assembly:" in text


def test_interactive_hex_and_binary():
    word = parse_assembly(ADDI_LINE)
    stdin = io.StringIO(f"2\n1\n{word:08X}\n\n2\n{format_binary(word, False)}\n\n3\n3\n")
    out = io.StringIO()
    assert run_interactive(stdin, out) == 0
    assert out.getvalue().count(ADDI_LINE + "\n\n") == 2


def test_interactive_reports_translation_error():
    stdin = io.StringIO("1\nBOGUS $t0\n\n3\n")
    out = io.StringIO()
    run_interactive(stdin, out)
    assert "No instruction of given name.\n" in out.getvalue()


def test_interactive_invalid_choice():
    stdin = io.StringIO("9\n3\n")
    out = io.StringIO()
    assert run_interactive(stdin, out) == 0
    assert "Invalid input" in out.getvalue()


def test_interactive_debug_returns_to_root():
    stdin = io.StringIO("4\n1010\n3\n")
    out = io.StringIO()
    assert run_interactive(stdin, out) == 0
    text = out.getvalue()
    assert "Broken Binary Received: 1010\n" in text
    after = text.split("Broken Binary Received: 1010\n", 1)[1]
    assert "Please enter an option:" in after


def test_interactive_stops_at_end_of_input():
    out = io.StringIO()
    assert run_interactive(io.StringIO("1\n"), out) == 0
    assert out.getvalue().endswith("\n Enter a line of assembly:\n> ")


def test_main_auto_from_file(tmp_path, capsys):
    source = tmp_path / "prog.s"
    source.write_text(f"{ADD_LINE}\n\n{ADDI_LINE}", encoding="utf-8")
    assert main(["-a", str(source)]) == 0
    assert capsys.readouterr().out.splitlines() == [
        assemble_line(ADD_LINE, False),
        assemble_line(ADDI_LINE, False),
    ]


def test_main_auto_reverse_from_file(tmp_path, capsys):
    source = tmp_path / "prog.bin"
    source.write_text(assemble_line(ADD_LINE, False) + "\n", encoding="utf-8")
    assert main(["-r", "-a", str(source)]) == 0
    assert capsys.readouterr().out.splitlines() == [ADD_LINE]


def test_main_auto_stdin_requires_newline(monkeypatch, capsys):
    monkeypatch.setattr("sys.stdin", io.StringIO(f"{ADD_LINE}\n{ADD_LINE}"))
    assert main(["-a"]) == 1
    output = capsys.readouterr().out
    assert output == assemble_line(ADD_LINE, False) + "\nInvalid line"


def test_main_missing_file(tmp_path, capsys):
    assert main(["-a", str(tmp_path / "missing.s")]) == 1
    assert capsys.readouterr().out == "Invalid line"