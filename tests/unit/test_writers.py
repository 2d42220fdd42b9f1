from src.acc32_asm.writers import to_hex_lines, to_bin_lines, render_hex, write_hex, write_bin

def test_hex_and_bin_lines():
    assert to_hex_lines([0x7E000005, 0]) == ["7E000005", "00000000"]
    assert to_bin_lines([1]) == ["0" * 31 + "1"]

def test_render_has_trailing_newline():
    assert render_hex([0xA, 0xFFFFFFFF]) == "0000000A\nFFFFFFFF\n"
    assert render_hex([]) == ""

def test_write_files(tmp_path):
    hx = tmp_path / "out.hex"
    bn = tmp_path / "out.bin"
    write_hex([0x41, 0x42], str(hx))
    write_bin([2], str(bn))
    assert hx.read_text(encoding="utf-8") == "00000041\n00000042\n"
    assert bn.read_text(encoding="utf-8") == "0" * 30 + "10\n"
