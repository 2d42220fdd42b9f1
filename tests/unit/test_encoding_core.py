import pytest
from src.acc32_asm.parser import parse
from src.acc32_asm.encoding import encode, encode_instruction, Word
from src.acc32_asm.ast import Instruction, Directive, Expr, Imm, Ind, Str, Sym
from src.acc32_asm.isa import Opcode
from src.acc32_asm.diagnostics import AsmSyntaxError, UnsupportedFeature

def _enc(src: str):
    return encode(parse(src))

def test_opcode_literal_and_indirect_forms():
    words = _enc("lac 0d5\nlaci 0x10\njmp [0x20]\njmpi [0x20]\nhlt\n")
    assert [w.value for w in words] == [0x7E000005, 0xFE000010, 0x91000020, 0x91000020, 0x7F000000]
    assert all(w.resolved and w.defines is None for w in words)

def test_label_operand_leaves_placeholder():
    words = _enc("$top:\njnei $top\n")
    (w,) = words
    assert w.value == 0x93000000
    assert w.ref == "top" and w.defines == "top" and not w.resolved

def test_data_string_one_word_per_char():
    words = _enc('$msg:\n.data "AB"\n')
    assert words == [Word(0x41, defines="msg", line=2), Word(0x42, line=2)]

def test_data_literal_label_and_zero():
    words = _enc("$z:\n.zero\n.data 0xCAFEBABE\n.data $z\n.data\n")
    assert [w.value for w in words] == [0, 0xCAFEBABE, 0, 0]
    assert words[0].defines == "z"
    assert words[2].ref == "z" and words[2].defines is None

def test_data_empty_string_emits_nothing():
    assert _enc('.data ""\n') == []

def test_only_first_operand_used():
    words = _enc("add 0d1, 0d2, 0d3\n")
    assert words[0].value == 0x04000001

def test_value_wider_than_field_is_truncated():
    words = _enc("lac 0x12345678\n")
    assert words[0].value == 0x7E345678

def test_data_indirect_is_invalid():
    with pytest.raises(AsmSyntaxError):
        _enc(".data [0x1]\n")

def test_string_on_opcode_is_invalid():
    with pytest.raises(AsmSyntaxError):
        _enc('out "x"\n')

def test_expression_operand_is_unsupported():
    ins = Instruction(Opcode.ADD, [Expr(Imm("0d1"))], line=9)
    with pytest.raises(UnsupportedFeature) as exc:
        encode_instruction(ins)
    assert exc.value.diagnostic.line == 9

def test_bad_literal_reports_line():
    with pytest.raises(UnsupportedFeature) as exc:
        _enc("nop\nlac abc\n")
    assert exc.value.diagnostic.line == 2
