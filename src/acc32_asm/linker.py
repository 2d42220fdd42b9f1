# src/acc32_asm/linker.py
from __future__ import annotations
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Iterator, List, Sequence, Tuple

from .encoding import Word
from .utils import VALUE_MASK, is_unsigned_nbit, VALUE_BITS
from .diagnostics import LinkError, CapacityError

LOGGER = logging.getLogger("acc32_asm.linker")

DEFAULT_LENGTH = 256

# ---------- Tabla de símbolos ----------

@dataclass
class SymbolTable:
    pointees: Dict[str, int] = field(default_factory=dict)        # etiqueta -> índice que la define
    pointers: Dict[str, List[int]] = field(default_factory=dict)  # etiqueta -> índices que la usan

def build_symtab(words: Sequence[Word]) -> SymbolTable:
    """Pasada 1: recorre las palabras y registra definiciones y referencias."""
    st = SymbolTable()
    for idx, w in enumerate(words):
        if w.defines is not None:
            if w.defines in st.pointees:
                # se conserva el comportamiento histórico: gana la última definición
                LOGGER.warning("etiqueta '%s' redefinida en la palabra %d (antes %d); gana la última",
                               w.defines, idx, st.pointees[w.defines])
            st.pointees[w.defines] = idx
        if w.ref is not None:
            st.pointers.setdefault(w.ref, []).append(idx)
    return st

def patch(word: Word, address: int) -> Word:
    """Escribe `address` en el campo de valor de una palabra sin resolver."""
    if word.resolved:
        raise ValueError("la palabra no tiene referencia pendiente")
    return replace(word, value=(word.value & ~VALUE_MASK) | (address & VALUE_MASK), ref=None)

def link(words: Sequence[Word], *, file: str | None = None) -> List[Word]:
    """Pasada 2: resuelve cada referencia con la dirección de su etiqueta."""
    st = build_symtab(words)
    out = list(words)
    for name, sites in st.pointers.items():
        if name not in st.pointees:
            raise LinkError(f"etiqueta no definida: '{name}'", line=words[sites[0]].line, file=file)
        address = st.pointees[name]
        if not is_unsigned_nbit(address, VALUE_BITS):
            raise CapacityError(len(words), 1 << VALUE_BITS, file=file)
        for idx in sites:
            out[idx] = patch(out[idx], address)
    LOGGER.debug("%d etiquetas resueltas (%d referencias)",
                 len(st.pointers), sum(len(s) for s in st.pointers.values()))
    return out

# ---------- Imagen final ----------

@dataclass(frozen=True)
class MemoryImage:
    """Imagen de memoria enlazada, de longitud fija; sin metadatos de etiquetas."""
    words: Tuple[int, ...]

    def __len__(self) -> int:
        return len(self.words)

    def __iter__(self) -> Iterator[int]:
        return iter(self.words)

def finalize(words: Sequence[Word], length: int = DEFAULT_LENGTH, *, file: str | None = None) -> MemoryImage:
    """Comprueba que el programa cabe en `length` palabras y rellena con ceros."""
    if length <= 0:
        raise ValueError("la longitud de memoria debe ser positiva")
    unresolved = [w.ref for w in words if not w.resolved]
    if unresolved:
        raise LinkError(f"referencia sin resolver: '{unresolved[0]}'", file=file)
    if len(words) > length:
        raise CapacityError(len(words), length, file=file)
    pad = length - len(words)
    if pad:
        LOGGER.debug("relleno con %d palabras a cero", pad)
    return MemoryImage(tuple(w.value for w in words) + (0,) * pad)
