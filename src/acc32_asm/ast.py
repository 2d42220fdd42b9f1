'''
dataclases de AST (Instruction, Directive, Operand)
'''

from __future__ import annotations
from dataclasses import dataclass, field
from typing import FrozenSet, List, Optional, Union

from .isa import Opcode

# ---- Operandos ----

@dataclass(frozen=True)
class Imm:
    """Literal numérico aún sin convertir (p.ej. '0x1A', '0d10' o '')."""
    text: str

@dataclass(frozen=True)
class Sym:
    """Referencia a una etiqueta ('$loop')."""
    name: str

@dataclass(frozen=True)
class Ind:
    """Literal con direccionamiento indirecto ('[0x10]')."""
    text: str

@dataclass(frozen=True)
class Str:
    """Cadena entre comillas, con los escapes ya aplicados. Sólo válida en .data."""
    text: str

@dataclass(frozen=True)
class Expr:
    """Reservado para operandos aritméticos; cualquier uso es fatal."""
    inner: 'Operand'

Operand = Union[Imm, Sym, Ind, Str, Expr]

# ---- Nodos a nivel de fuente ----

@dataclass(frozen=True)
class Directive:
    """Directiva del ensamblador ('.zero' o '.data')."""
    name: str

InstructionKind = Union[Directive, Opcode]

@dataclass(frozen=True)
class Instruction:
    """Sentencia del fuente: tipo, modificadores, etiqueta pendiente y operandos."""
    kind: InstructionKind
    operands: List[Operand] = field(default_factory=list)
    flags: FrozenSet[str] = frozenset()
    label: Optional[str] = None
    line: int = 0
    col: int = 1

    @property
    def indirect(self) -> bool:
        return "i" in self.flags

    @property
    def is_directive(self) -> bool:
        return isinstance(self.kind, Directive)
