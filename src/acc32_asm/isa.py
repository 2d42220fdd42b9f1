'''
tabla formal del repertorio (opcodes de 7 bits, mnemónicos y alias indirectos)
'''

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, FrozenSet, Union

class Opcode(IntEnum):
    """Operaciones del acumulador; el valor es el campo de 7 bits (bits 30..24)."""
    AND  = 0
    OR   = 1
    INC  = 2
    DEC  = 3
    ADD  = 4
    SUB  = 5
    XOR  = 6
    NOT  = 7
    SHR  = 8
    ASHR = 9
    ROR  = 10
    RCR  = 11
    SHL  = 12
    ASHL = 13
    ROL  = 14
    RCL  = 15
    WAC  = 16   # escribe el acumulador en memoria[param0]
    JMP  = 17   # salto incondicional
    JE   = 18   # salta si zero == 1
    JNE  = 19   # salta si zero == 0
    JG   = 20   # salta si sign == 0
    JL   = 21   # salta si sign == 1
    RAC  = 22   # lee memoria[acumulador] al acumulador
    NOP  = 121
    IOF  = 122  # deshabilita interrupciones
    ION  = 123  # habilita interrupciones
    OUT  = 124  # acumulador -> registro de salida
    LTR  = 125  # carga el registro temporal
    LAC  = 126  # carga el acumulador
    HLT  = 127  # detiene el proceso

# Tabla inspeccionable nombre -> número, independiente del parser
OPCODES: Dict[str, int] = {op.name.lower(): int(op) for op in Opcode}

DIRECTIVES: FrozenSet[str] = frozenset({".zero", ".data"})

INDIRECT = "i"

@dataclass(frozen=True)
class MSpec:
    """Resultado de buscar un mnemónico: directiva u opcode, más sus modificadores."""
    kind: Union[str, Opcode]
    flags: FrozenSet[str] = frozenset()

# Mnemónicos (sensibles a mayúsculas)
SPEC: Dict[str, MSpec] = {}

def _add(name: str, kind: Union[str, Opcode], *flags: str):
    SPEC[name] = MSpec(kind, frozenset(flags))

for _d in sorted(DIRECTIVES):
    _add(_d, _d)

for _op in Opcode:
    _add(_op.name.lower(), _op)

# Alias que sólo activan el modificador indirecto
_add("laci", Opcode.LAC, INDIRECT)
_add("jmpi", Opcode.JMP, INDIRECT)
_add("jei",  Opcode.JE,  INDIRECT)
_add("jnei", Opcode.JNE, INDIRECT)
_add("jgi",  Opcode.JG,  INDIRECT)
_add("jli",  Opcode.JL,  INDIRECT)

def spec(mnemonic: str) -> MSpec:
    """Devuelve la especificación de un mnemónico."""
    if mnemonic not in SPEC:
        raise KeyError(f"Instrucción desconocida: {mnemonic}")
    return SPEC[mnemonic]
