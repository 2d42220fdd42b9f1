from __future__ import annotations
import argparse, logging, sys

from .parser import parse
from .encoding import encode
from .linker import link, finalize, MemoryImage, DEFAULT_LENGTH
from .writers import render_hex, render_bin
from .diagnostics import AsmError

LOGGER = logging.getLogger("acc32_asm.assembler")

def assemble_text(text: str, *, length: int = DEFAULT_LENGTH, filename: str | None = None) -> MemoryImage:
    """Parsea, genera palabras, enlaza (PASADA 1 y 2) y ajusta a `length` palabras.
    El primer AsmError aborta el proceso; no hay salida parcial."""
    if length <= 0:
        raise ValueError("la longitud de memoria debe ser positiva")
    try:
        insts = parse(text, filename=filename)
        words = encode(insts)
        linked = link(words, file=filename)
        return finalize(linked, length, file=filename)
    except AsmError as ex:
        raise ex.with_file(filename)

def assemble_hex(text: str, *, length: int = DEFAULT_LENGTH, filename: str | None = None) -> str:
    return render_hex(assemble_text(text, length=length, filename=filename))

def _positive_int(s: str) -> int:
    try:
        n = int(s)
    except ValueError:
        raise argparse.ArgumentTypeError(f"entero inválido: {s}") from None
    if n <= 0:
        raise argparse.ArgumentTypeError("debe ser un entero positivo")
    return n

def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Ensamblador de dos pasadas para la CPU de acumulador de 32 bits")
    ap.add_argument("-s", "--src", required=True, help="archivo fuente de entrada")
    ap.add_argument("-d", "--dest", help="archivo de salida; si se omite se imprime el resultado")
    ap.add_argument("-l", "--len", dest="length", type=_positive_int, default=DEFAULT_LENGTH,
                    help="longitud de la memoria en palabras (por defecto %(default)s)")
    ap.add_argument("-f", "--format", choices=("hex", "bin"), default="hex",
                    help="hex: 8 dígitos por palabra; bin: 32 dígitos binarios")
    ap.add_argument("-v", "--verbose", action="store_true", help="mensajes de depuración")
    args = ap.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format="%(levelname)s %(name)s: %(message)s", stream=sys.stderr)

    try:
        with open(args.src, "r", encoding="utf-8") as f:
            text = f.read()
    except OSError as ex:
        print(f"ERROR: no pude leer {args.src}: {ex}", file=sys.stderr)
        return 2

    try:
        image = assemble_text(text, length=args.length, filename=args.src)
    except AsmError as ex:
        print(ex.diagnostic, file=sys.stderr)
        return 1

    out = render_hex(image) if args.format == "hex" else render_bin(image)
    if args.dest is None:
        sys.stdout.write(out)
        return 0

    try:
        with open(args.dest, "w", encoding="utf-8") as f:
            f.write(out)
    except OSError as ex:
        print(f"ERROR al escribir salidas: {ex}", file=sys.stderr)
        return 3

    LOGGER.debug("%d palabras escritas en formato %s", len(image), args.format)
    print(f"OK: {len(image)} palabras → {args.dest}")
    return 0

if __name__ == "__main__":
    raise SystemExit(main())
