'''
clase Diagnostic, helpers (línea/columna) y jerarquía de errores fatales
'''

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Literal

# Severidad de los diagnósticos (en español)
Severity = Literal["error", "advertencia", "nota"]

_SEV_TO_LABEL = {
    "error": "ERROR",
    "advertencia": "ADVERTENCIA",
    "nota": "NOTA",
}

@dataclass(frozen=True)
class Diagnostic:
    """Estructura de un diagnóstico para reportar problemas.

    Abarca errores, advertencias y notas, con ubicación opcional (archivo, línea y columna)
    y un mensaje de ayuda (pista) para orientar la corrección.
    """
    severity: Severity
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    hint: Optional[str] = None
    file: Optional[str] = None

    def __str__(self) -> str:
        loc = ""
        if self.file is not None:
            loc += f"{self.file}:"
        if self.line is not None:
            loc += f"{self.line}"
            if self.col is not None:
                loc += f":{self.col}"
        if loc:
            loc += ": "
        sev = _SEV_TO_LABEL.get(self.severity, str(self.severity).upper())
        core = f"{sev}: {self.message}"
        if self.hint:
            core += f"  (pista: {self.hint})"
        return loc + core

def error(message: str, *, line: int | None = None, col: int | None = None,
          file: str | None = None, hint: str | None = None) -> Diagnostic:
    """Crea un diagnóstico de tipo error."""
    return Diagnostic("error", message, line, col, hint, file)

# ---- Errores fatales: el primero aborta todo el ensamblado ----

class AsmError(Exception):
    """Error fatal del ensamblador; transporta su Diagnostic."""

    def __init__(self, message: str, *, line: int | None = None, col: int | None = None,
                 file: str | None = None, hint: str | None = None) -> None:
        self.diagnostic = error(message, line=line, col=col, file=file, hint=hint)
        super().__init__(str(self.diagnostic))

    def with_file(self, file: str | None) -> "AsmError":
        """Completa el nombre de archivo del diagnóstico si aún no lo tiene."""
        if file is not None and self.diagnostic.file is None:
            d = self.diagnostic
            self.diagnostic = Diagnostic(d.severity, d.message, d.line, d.col, d.hint, file)
            self.args = (str(self.diagnostic),)
        return self

    def __str__(self) -> str:
        return str(self.diagnostic)

class AsmSyntaxError(AsmError):
    """Mnemónico desconocido, línea de etiqueta mal formada u operando inválido."""

class UnsupportedFeature(AsmError):
    """Registros, expresiones o formatos de literal no soportados."""

class LinkError(AsmError):
    """Una etiqueta referenciada no tiene definición."""

class CapacityError(AsmError):
    """El programa generado no cabe en la memoria configurada."""

    def __init__(self, generated: int, length: int, **kw) -> None:
        self.generated = generated
        self.length = length
        super().__init__(
            f"el binario generado ocupa {generated} palabras y la memoria tiene {length}",
            hint="aumente --len o reduzca el programa", **kw)
