import pytest
from src.acc32_asm.encoding import Word
from src.acc32_asm.linker import build_symtab, link, patch, finalize, MemoryImage
from src.acc32_asm.diagnostics import LinkError, CapacityError

def test_symtab_pointees_and_pointers():
    words = [Word(0x11000000, ref="b", defines="a"), Word(0, defines="b"), Word(0, ref="b")]
    st = build_symtab(words)
    assert st.pointees == {"a": 0, "b": 1}
    assert st.pointers == {"b": [0, 2]}

def test_link_patches_value_field():
    words = [Word(0x7E000005, defines="start"), Word(0x11000000, ref="start"), Word(0x93000000, ref="end"),
             Word(0, defines="end")]
    out = link(words)
    assert [w.value for w in out] == [0x7E000005, 0x11000000, 0x93000003, 0]
    assert all(w.resolved for w in out)
    # la entrada no se modifica
    assert not words[1].resolved

def test_duplicate_label_later_definition_wins():
    words = [Word(1, defines="a"), Word(2, defines="a"), Word(0, ref="a")]
    assert link(words)[2].value == 1

def test_patch_replaces_field_instead_of_or():
    w = Word(0x11000005, ref="x")
    assert patch(w, 0x2).value == 0x11000002
    with pytest.raises(ValueError):
        patch(Word(0), 3)

def test_undefined_label():
    with pytest.raises(LinkError) as exc:
        link([Word(0), Word(0x11000000, ref="nowhere", line=7)])
    assert exc.value.diagnostic.line == 7
    assert "nowhere" in exc.value.diagnostic.message

def test_finalize_pads_and_checks_capacity():
    img = finalize([Word(5), Word(6)], 4)
    assert isinstance(img, MemoryImage)
    assert img.words == (5, 6, 0, 0) and len(img) == 4
    assert finalize([Word(1)] * 3, 3).words == (1, 1, 1)
    with pytest.raises(CapacityError) as exc:
        finalize([Word(0)] * 5, 4)
    assert exc.value.generated == 5 and exc.value.length == 4

def test_finalize_rejects_unresolved_and_bad_length():
    with pytest.raises(LinkError):
        finalize([Word(0, ref="x")], 4)
    with pytest.raises(ValueError):
        finalize([], 0)
