import pytest
from src.acc32_asm.isa import Opcode, OPCODES, SPEC, spec, DIRECTIVES

EXPECTED = {
    "and": 0, "or": 1, "inc": 2, "dec": 3, "add": 4, "sub": 5, "xor": 6, "not": 7,
    "shr": 8, "ashr": 9, "ror": 10, "rcr": 11, "shl": 12, "ashl": 13, "rol": 14, "rcl": 15,
    "wac": 16, "jmp": 17, "je": 18, "jne": 19, "jg": 20, "jl": 21, "rac": 22,
    "nop": 121, "iof": 122, "ion": 123, "out": 124, "ltr": 125, "lac": 126, "hlt": 127,
}

def test_opcode_table_is_complete():
    assert OPCODES == EXPECTED
    assert len(Opcode) == 30
    assert all(0 <= v <= 127 for v in OPCODES.values())

@pytest.mark.parametrize("alias, base", [
    ("laci", Opcode.LAC), ("jmpi", Opcode.JMP), ("jei", Opcode.JE),
    ("jnei", Opcode.JNE), ("jgi", Opcode.JG), ("jli", Opcode.JL),
])
def test_indirect_aliases(alias, base):
    s = spec(alias)
    assert s.kind is base
    assert s.flags == frozenset({"i"})
    assert spec(base.name.lower()).flags == frozenset()

def test_directives_and_case_sensitivity():
    assert DIRECTIVES == {".zero", ".data"}
    assert spec(".data").kind == ".data"
    with pytest.raises(KeyError):
        spec("LAC")
    with pytest.raises(KeyError):
        spec("foo")
    assert len(SPEC) == 30 + 6 + 2
