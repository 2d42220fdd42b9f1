'''
bit-twiddling (u32, empaquetado de palabra), códec hexadecimal y literales numéricos
'''

from __future__ import annotations
import re

from .diagnostics import UnsupportedFeature

# Máscara para 32 bits sin signo
U32_MASK = 0xFFFFFFFF
# Campo de valor/dirección de una instrucción (bits 23..0)
VALUE_BITS = 24
VALUE_MASK = (1 << VALUE_BITS) - 1
OPCODE_MASK = 0x7F

HEX_DIGITS = "0123456789ABCDEF"
_DEC_RE = re.compile(r"^[0-9]+$")

def u32(x: int) -> int:
    """Fuerza el valor al rango de 32 bits sin signo."""
    return x & U32_MASK

def is_unsigned_nbit(x: int, n: int) -> bool:
    """Devuelve True si x está en [0, 2^n) (sin signo de n bits)."""
    if n <= 0:
        raise ValueError("n debe ser positivo")
    return 0 <= x < (1 << n)

def pack_word(value: int, opcode: int, indirect: bool) -> int:
    """Empaqueta una instrucción: bit 31 indirecto, 30..24 opcode, 23..0 valor."""
    return u32((int(bool(indirect)) << 31) |
               ((opcode & OPCODE_MASK) << VALUE_BITS) |
               (value & VALUE_MASK))

def split_word(word: int) -> tuple[int, int, int]:
    """Inverso de pack_word: (indirecto, opcode, valor)."""
    return (word >> 31) & 0x1, (word >> VALUE_BITS) & OPCODE_MASK, word & VALUE_MASK

# ---- Códec hexadecimal ----

def hex_encode(x: int) -> str:
    """8 dígitos hexadecimales en mayúsculas, nibble más significativo primero."""
    x = u32(x)
    return "".join(HEX_DIGITS[(x >> shift) & 0xF] for shift in range(28, -4, -4))

def hex_decode(text: str) -> int:
    """Decodifica hexadecimal con prefijo '0x' opcional; mayúsculas o minúsculas.

    Lanza ValueError si no hay dígitos o aparece un carácter no hexadecimal.
    """
    digits = text[2:] if text.startswith("0x") else text
    if not digits:
        raise ValueError("hexadecimal vacío")
    res = 0
    for ch in digits:
        d = HEX_DIGITS.find(ch.upper())
        if d < 0:
            raise ValueError(f"dígito hexadecimal inválido: {ch!r}")
        res = (res << 4) | d
    return res

def to_hex32(x: int) -> str:
    return hex_encode(x)

def to_bin32(x: int) -> str:
    """Representación binaria de 32 bits (cadena)."""
    return format(u32(x), "032b")

# ---- Literales numéricos ----

def parse_literal(text: str, *, line: int | None = None) -> int:
    """Convierte un literal a u32: '0x..' hexadecimal, '0d..' decimal, vacío -> 0."""
    t = text.strip()
    if not t:
        return 0
    if t.startswith("0x"):
        try:
            return u32(hex_decode(t))
        except ValueError as ex:
            raise UnsupportedFeature(f"formato de literal no reconocido: '{t}' ({ex})", line=line) from ex
    if t.startswith("0d"):
        digits = t[2:]
        if not _DEC_RE.match(digits):
            raise UnsupportedFeature(f"formato de literal no reconocido: '{t}'", line=line)
        value = int(digits, 10)
        if not is_unsigned_nbit(value, 32):
            raise UnsupportedFeature(f"literal decimal fuera de 32 bits: '{t}'", line=line)
        return value
    raise UnsupportedFeature(f"formato de literal no reconocido: '{t}'", line=line,
                             hint="use 0x para hexadecimal o 0d para decimal")
