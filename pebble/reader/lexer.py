"""
  Pebble Lexer

Single left-to-right scan producing (token_type, value) tuples:

    - ( ) '      -> lparen / rparen / quote, always one character each
    - "..."      -> string (escapes \\n \\t \\\\ \\" decoded, others dropped)
    - #t #f      -> true / false
    - #\\c       -> char
    - 12 -3      -> integer
    - 1.5 1e3    -> float
    - lambda define if -> keyword tokens of the same name
    - anything else    -> symbol

The lexer never raises: an unclassifiable lexeme is a symbol and later stages
decide whether it means anything.
"""

from __future__ import annotations

import re
from typing import Iterator

from pebble.types.char import Char


INTEGER_RE = re.compile(r"[+-]?\d+", re.ASCII)
FLOAT_RE = re.compile(
    r"[+-]?(?:"
    r"\d+\.\d*(?:[eE][+-]?\d+)?"  # 1. 1.5 1.5e3
    r"|\.\d+(?:[eE][+-]?\d+)?"  # .5
    r"|\d+[eE][+-]?\d+"  # 1e3
    r"|inf|infinity|nan"
    r")",
    re.IGNORECASE | re.ASCII,
)

KEYWORDS = frozenset({"lambda", "define", "if"})

NAMED_CHARS: dict[str, str] = {
    "space": " ",
    "newline": "\n",
    "tab": "\t",
}

STRING_ESCAPES: dict[str, str] = {
    "n": "\n",
    "t": "\t",
    "\\": "\\",
    '"': '"',
}

SINGLE_CHAR_TOKENS: dict[str, str] = {
    "(": "lparen",
    ")": "rparen",
    "'": "quote",
}


def classify(lexeme: str) -> tuple[str, object]:
    """Classify one whitespace-delimited lexeme."""
    if lexeme == "#t":
        return "true", True
    if lexeme == "#f":
        return "false", False
    if lexeme.startswith("#\\"):
        body = lexeme[2:]
        if len(body) == 1:
            return "char", Char(body)
        if body.lower() in NAMED_CHARS:
            return "char", Char(NAMED_CHARS[body.lower()])
    if INTEGER_RE.fullmatch(lexeme):
        return "integer", int(lexeme)
    if FLOAT_RE.fullmatch(lexeme):
        return "float", float(lexeme)
    if lexeme in KEYWORDS:
        return lexeme, lexeme
    return "symbol", lexeme


def lex(source: str) -> Iterator[tuple[str, object]]:
    """Token generator: yields (token_type, token_value) tuples."""
    pos = 0
    n = len(source)
    lexeme: list[str] = []

    while pos < n:
        c = source[pos]

        # A lone "#\" is waiting for its character, which may be ; or "
        if c in ';"' and lexeme == ["#", "\\"]:
            lexeme.append(c)
            pos += 1
            continue

        if c in SINGLE_CHAR_TOKENS or c.isspace() or c in ';"':
            if lexeme:
                yield classify("".join(lexeme))
                lexeme = []

        if c in SINGLE_CHAR_TOKENS:
            yield SINGLE_CHAR_TOKENS[c], c
            pos += 1
        elif c.isspace():
            pos += 1
        elif c == ";":
            # comment to end of line
            end = source.find("\n", pos)
            pos = n if end == -1 else end + 1
        elif c == '"':
            text, pos = _read_string(source, pos + 1)
            yield "string", text
        else:
            lexeme.append(c)
            pos += 1

    if lexeme:
        yield classify("".join(lexeme))


def _read_string(source: str, pos: int) -> tuple[str, int]:
    """Read a string body starting after the opening quote.

    Returns the decoded text and the position after the closing quote. An
    unterminated string runs to the end of the source.
    """
    out: list[str] = []
    n = len(source)
    while pos < n:
        c = source[pos]
        if c == '"':
            return "".join(out), pos + 1
        if c == "\\":
            if pos + 1 < n:
                escaped = STRING_ESCAPES.get(source[pos + 1])
                if escaped is not None:
                    out.append(escaped)
            pos += 2
            continue
        out.append(c)
        pos += 1
    return "".join(out), pos
