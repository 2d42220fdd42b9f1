# src/acc32_asm/encoding.py
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional

from .ast import Instruction, Directive, Imm, Sym, Ind, Str, Expr, Operand
from .isa import Opcode
from .utils import pack_word, parse_literal, is_unsigned_nbit, VALUE_BITS
from .diagnostics import AsmSyntaxError, UnsupportedFeature

LOGGER = logging.getLogger("acc32_asm.encoding")

# ---------------- Resultado de codificación ----------------

@dataclass(frozen=True)
class Word:
    """Palabra de 32 bits de la imagen de memoria.

    ref:     etiqueta cuya dirección falta escribir en los bits 23..0 (sin resolver).
    defines: etiqueta que publica el índice de esta palabra como dirección.
    """
    value: int
    ref: Optional[str] = None
    defines: Optional[str] = None
    line: Optional[int] = None

    @property
    def resolved(self) -> bool:
        return self.ref is None

# ---------------- Helpers ----------------

def _first_operand(ins: Instruction) -> Operand:
    if len(ins.operands) > 1:
        LOGGER.warning("línea %d: sólo se usa el primer operando (%d ignorados)",
                       ins.line, len(ins.operands) - 1)
    # sin operando equivale al literal vacío (0)
    return ins.operands[0] if ins.operands else Imm("")

def _value24(text: str, ins: Instruction) -> int:
    value = parse_literal(text, line=ins.line)
    if not is_unsigned_nbit(value, VALUE_BITS):
        LOGGER.warning("línea %d: valor 0x%X truncado a %d bits", ins.line, value, VALUE_BITS)
    return value

def _encode_directive(ins: Instruction, name: str) -> List[Word]:
    if name == ".zero":
        return [Word(0, defines=ins.label, line=ins.line)]
    if name != ".data":
        raise AsmSyntaxError(f"directiva no soportada: {name}", line=ins.line)

    op = _first_operand(ins)
    if isinstance(op, Str):
        if not op.text:
            LOGGER.warning("línea %d: .data \"\" no genera palabras", ins.line)
        # un carácter por palabra; sólo la primera define la etiqueta
        return [Word(ord(ch) & 0xFF, defines=ins.label if idx == 0 else None, line=ins.line)
                for idx, ch in enumerate(op.text)]
    if isinstance(op, Sym):
        return [Word(0, ref=op.name, defines=ins.label, line=ins.line)]
    if isinstance(op, Imm):
        return [Word(parse_literal(op.text, line=ins.line), defines=ins.label, line=ins.line)]
    raise AsmSyntaxError(f"operando de .data inválido: {op!r}", line=ins.line,
                         hint="use un literal, una $etiqueta o una \"cadena\"")

def _encode_op(ins: Instruction, opcode: Opcode) -> Word:
    op = _first_operand(ins)
    if isinstance(op, Imm):
        return Word(pack_word(_value24(op.text, ins), opcode, ins.indirect),
                    defines=ins.label, line=ins.line)
    if isinstance(op, Ind):
        # [x] fuerza el bit indirecto
        return Word(pack_word(_value24(op.text, ins), opcode, True),
                    defines=ins.label, line=ins.line)
    if isinstance(op, Sym):
        # el campo de valor queda a 0 hasta el enlazado
        return Word(pack_word(0, opcode, ins.indirect), ref=op.name,
                    defines=ins.label, line=ins.line)
    if isinstance(op, Expr):
        raise UnsupportedFeature("operandos con expresión no soportados", line=ins.line)
    raise AsmSyntaxError(f"operando inválido para {opcode.name.lower()}: {op!r}", line=ins.line,
                         hint="las cadenas sólo se admiten en .data")

# ---------------- Codificador principal ----------------

def encode_instruction(ins: Instruction) -> List[Word]:
    if isinstance(ins.kind, Directive):
        return _encode_directive(ins, ins.kind.name)
    return [_encode_op(ins, ins.kind)]

def encode(instructions: Iterable[Instruction]) -> List[Word]:
    """Genera las palabras en orden de fuente, con referencias sin resolver."""
    words: List[Word] = []
    for ins in instructions:
        words.extend(encode_instruction(ins))
    LOGGER.debug("%d palabras generadas", len(words))
    return words
