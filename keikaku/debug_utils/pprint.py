from __future__ import annotations

from keikaku import LispValue
from keikaku.reader.parser import Located

# ----------------- Defaults -----------------
DEFAULT_OPTIONS = {
    "max_line_length": 80,
    "show_spans": False,
}


# ----------------- Pretty printer -----------------
def pprint_expr(expr: Located, indent: int = 0, options: dict | None = None) -> str:
    """Render a parsed form back as s-expression text.

    Lists that do not fit in `max_line_length` are broken one child per line.
    With `show_spans`, every node is suffixed with `@<span>`.
    """
    if options is None:
        options = DEFAULT_OPTIONS
    node, span = expr
    suffix = f"@{span}" if options.get("show_spans", False) else ""

    if not isinstance(node, list):
        return f"{node}{suffix}"

    if not node:
        return f"(){suffix}"

    parts = [pprint_expr(child, indent + 1, options) for child in node]

    single_line = "(" + " ".join(parts) + ")" + suffix
    if "\n" not in single_line and len(single_line) + indent * 2 <= options.get("max_line_length", 80):
        return single_line

    aligned_lines = ["(" + parts[0]]
    for part in parts[1:]:
        aligned_lines.append("  " * (indent + 1) + part)
    aligned_lines[-1] += ")" + suffix
    return "\n".join(aligned_lines)


def pprint_program(exprs: list[Located], options: dict | None = None) -> str:
    return "\n".join(pprint_expr(expr, 0, options) for expr in exprs)


def format_value(value: LispValue) -> str:
    """Printed form of a runtime value: ints, `()` for Nil, `#lambda(x y)#`, `#primop#`."""
    return str(value)
