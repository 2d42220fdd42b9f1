from __future__ import annotations
from typing import List, Optional, Tuple

COMMENT = "//"

def strip_comment(line: str) -> str:
    """Remove a '//' comment (even inside quotes) and surrounding blanks"""
    idx = line.find(COMMENT)
    if idx >= 0:
        line = line[:idx]
    return line.strip()

def is_label_line(line: str) -> bool:
    return line.strip().startswith('$')

def split_label(line: str) -> Tuple[Optional[str], str]:
    """Return (label, rest) for '$name: rest'.

    label is None when there is no ':' after the '$'; an empty name is
    returned as '' so the caller can reject it.
    """
    s = line.strip()
    colon = s.find(':', 1)
    if not s.startswith('$') or colon < 0:
        return None, s
    return s[1:colon].strip(), s[colon+1:].strip()

def split_mnemonic_operands(line: str) -> Tuple[str, str]:
    s = line.strip()
    if not s:
        return "", ""
    parts = s.split(None, 1)
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1].strip()

def split_operands(op_str: str) -> List[str]:
    """Split by commas outside double quotes, applying backslash escapes.

    '\\"' keeps a quote without opening/closing the string, '\\n' becomes
    a newline, any other escaped char is kept as is.  Empty tokens are
    kept (they read as the literal 0).
    """
    if not op_str.strip():
        return []
    out: List[str] = []
    cur: List[str] = []
    in_str = False
    escape = False
    for ch in op_str:
        if escape:
            escape = False
            cur.append('\n' if ch == 'n' else ch)
            continue
        if ch == '\\':
            escape = True
            continue
        if ch == '"':
            in_str = not in_str
        elif ch == ',' and not in_str:
            out.append(''.join(cur).strip())
            cur = []
            continue
        cur.append(ch)
    if escape:
        cur.append('\\')
    out.append(''.join(cur).strip())
    return out
