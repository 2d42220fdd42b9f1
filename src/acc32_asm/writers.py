from __future__ import annotations
from typing import Iterable, List
from .utils import to_hex32, to_bin32

def to_hex_lines(words: Iterable[int]) -> List[str]:
    return [to_hex32(w) for w in words]

def to_bin_lines(words: Iterable[int]) -> List[str]:
    return [to_bin32(w) for w in words]

def render(lines: Iterable[str]) -> str:
    """Una palabra por línea, con salto de línea también tras la última."""
    return "".join(line + "\n" for line in lines)

def render_hex(words: Iterable[int]) -> str:
    return render(to_hex_lines(words))

def render_bin(words: Iterable[int]) -> str:
    return render(to_bin_lines(words))

def write_hex(words: Iterable[int], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_hex(words))

def write_bin(words: Iterable[int], path: str) -> None:
    with open(path, "w", encoding="utf-8") as f:
        f.write(render_bin(words))
