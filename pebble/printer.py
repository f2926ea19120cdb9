"""Textual forms of Pebble values and expressions.

`to_string` is what `display` and the REPL show. `expr_to_string` turns parsed
syntax back into source text; unevaluated literals come back exactly as they
would be typed.
"""

from __future__ import annotations

from io import StringIO

from pebble import LispValue, SExpression
from pebble.reader.ast import Application, Define, If, LambdaExpr, PairLiteral
from pebble.types.char import Char
from pebble.types.lambda_fn import Lambda
from pebble.types.nil import NilType
from pebble.types.pair import Pair
from pebble.types.symbol import Symbol

_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\t": "\\t"}
_CHAR_NAMES = {" ": "space", "\n": "newline", "\t": "tab"}


def _atom_to_string(x: LispValue) -> str | None:
    if isinstance(x, bool):
        return "#t" if x else "#f"
    if isinstance(x, int):
        return str(x)
    if isinstance(x, float):
        return repr(x)
    if isinstance(x, Char):
        return str(x)
    if isinstance(x, NilType):
        return "()"
    if isinstance(x, Symbol):
        return x.id
    return None


def to_string(value: LispValue) -> str:
    """Render a runtime value; pairs always use dotted notation."""
    with StringIO() as buffer:
        _write_value(buffer, value)
        return buffer.getvalue()


def _write_value(buffer: StringIO, value: LispValue) -> None:
    # Explicit work stack of (is_text, item), so nesting in either car or cdr
    # never touches the host stack
    pending: list[tuple[bool, LispValue]] = [(False, value)]
    while pending:
        is_text, item = pending.pop()
        if is_text:
            buffer.write(item)
            continue
        if isinstance(item, Pair):
            buffer.write("(")
            pending.append((True, ")"))
            pending.append((False, item.cdr))
            pending.append((True, " . "))
            pending.append((False, item.car))
            continue
        atom = _atom_to_string(item)
        if atom is not None:
            buffer.write(atom)
        elif isinstance(item, str):
            buffer.write(item)
        elif isinstance(item, Lambda):
            buffer.write("function")
        else:
            buffer.write(str(item))


def quote_string(text: str) -> str:
    return '"' + "".join(_ESCAPES.get(c, c) for c in text) + '"'


def expr_to_string(expr: SExpression) -> str:
    """Render parsed syntax as source text."""
    if isinstance(expr, Char) and expr.ch in _CHAR_NAMES:
        return "#\\" + _CHAR_NAMES[expr.ch]
    atom = _atom_to_string(expr)
    if atom is not None:
        return atom
    if isinstance(expr, str):
        return quote_string(expr)
    match expr:
        case Application(head, args):
            parts = [expr_to_string(head), *(expr_to_string(a) for a in args)]
            return "(" + " ".join(parts) + ")"
        case LambdaExpr(params, body):
            return f"(lambda ({' '.join(p.id for p in params)}) {expr_to_string(body)})"
        case Define(name, value):
            return f"(define {name.id} {expr_to_string(value)})"
        case If(condition, consequent, alternative):
            return (
                f"(if {expr_to_string(condition)} {expr_to_string(consequent)} "
                f"{expr_to_string(alternative)})"
            )
        case PairLiteral():
            items = []
            cell: SExpression = expr
            while isinstance(cell, PairLiteral):
                items.append(expr_to_string(cell.car))
                cell = cell.cdr
            return "'(" + " ".join(items) + ")"
    return str(expr)
