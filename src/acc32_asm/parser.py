# src/acc32_asm/parser.py
from __future__ import annotations
import logging
from dataclasses import dataclass, replace
from functools import reduce
from typing import List, Optional, Tuple

from .lexer import (
    strip_comment,
    is_label_line,
    split_label,
    split_mnemonic_operands,
    split_operands,
)
from .ast import Directive, Instruction, Imm, Sym, Ind, Str, Operand
from .isa import spec as isa_spec, Opcode
from .diagnostics import AsmSyntaxError, UnsupportedFeature

LOGGER = logging.getLogger("acc32_asm.parser")

def classify_operand(token: str, *, line: int | None = None) -> Operand:
    """Convierte un token crudo en operando tipado (orden de prioridad fijo)."""
    t = token.strip()
    if t.startswith('%'):
        raise UnsupportedFeature(f"operando de registro no soportado: '{t}'", line=line)
    if t.startswith('$'):
        return Sym(t[1:].strip())
    if len(t) >= 2 and t.startswith('[') and t.endswith(']'):
        return Ind(t[1:-1])
    if len(t) >= 2 and t.startswith('"') and t.endswith('"'):
        return Str(t[1:-1])
    return Imm(t)

@dataclass(frozen=True)
class ParseState:
    """Acumulador del plegado línea a línea.

    pending: etiqueta '$name:' que espera a la siguiente instrucción.
    """
    instructions: Tuple[Instruction, ...] = ()
    pending: Optional[str] = None
    pending_line: Optional[int] = None

def parse_line(state: ParseState, lineno: int, raw: str) -> ParseState:
    """Procesa una línea y devuelve el nuevo estado (no muta `state`)."""
    core = strip_comment(raw)
    if not core:
        return state

    # 1) '$name:' deja una etiqueta pendiente
    if is_label_line(core):
        name, rest = split_label(core)
        if not name:
            raise AsmSyntaxError(f"línea de etiqueta mal formada: '{core}'", line=lineno,
                                 hint="se esperaba '$nombre:'")
        if rest:
            LOGGER.warning("línea %d: texto tras la etiqueta '%s' ignorado: '%s'", lineno, name, rest)
        if state.pending is not None:
            LOGGER.warning("línea %d: la etiqueta '%s' (línea %s) se descarta por '%s'",
                           lineno, state.pending, state.pending_line, name)
        return replace(state, pending=name, pending_line=lineno)

    # 2) mnemónico + operandos
    mnemonic, op_str = split_mnemonic_operands(core)
    try:
        ms = isa_spec(mnemonic)
    except KeyError:
        raise AsmSyntaxError(f"instrucción desconocida: '{mnemonic}'", line=lineno) from None

    operands: List[Operand] = [classify_operand(tok, line=lineno) for tok in split_operands(op_str)]
    kind = ms.kind if isinstance(ms.kind, Opcode) else Directive(ms.kind)
    ins = Instruction(kind=kind, operands=operands, flags=ms.flags,
                      label=state.pending, line=lineno)
    return ParseState(instructions=state.instructions + (ins,))

def parse(text: str, *, filename: Optional[str] = None) -> List[Instruction]:
    """
    Devuelve la lista ordenada de Instruction del fuente.

    Reglas:
      - Comentarios: '//' hasta fin de línea.
      - Etiquetas: '$name:' en su propia línea; se asigna a la siguiente instrucción.
      - Directivas: '.zero' y '.data <operando>'.
      - Instrucciones: mnemónico + operandos separados por comas (sólo cuenta el primero).
    Lanza AsmError con el primer problema encontrado.
    """
    try:
        final = reduce(lambda st, item: parse_line(st, *item),
                       enumerate(text.splitlines(), start=1), ParseState())
    except (AsmSyntaxError, UnsupportedFeature) as ex:
        raise ex.with_file(filename)
    if final.pending is not None:
        LOGGER.warning("etiqueta '%s' (línea %s) sin instrucción posterior; se ignora",
                       final.pending, final.pending_line)
    LOGGER.debug("%d instrucciones analizadas", len(final.instructions))
    return list(final.instructions)
