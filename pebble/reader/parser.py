"""
  Pebble Parser

Recursive descent over the token stream with one token of lookahead.
Emits Python primitives for literals and dataclass nodes for compound forms:

    - integer -> int, float -> float, #t/#f -> bool
    - string  -> str, #\\c -> Char, ()  -> Nil
    - symbols -> Symbol
    - (if c t e)              -> If
    - (define name expr)      -> Define
    - (lambda (p ...) body)   -> LambdaExpr
    - '(a b ...)              -> PairLiteral chain ending in Nil
    - (head arg ...)          -> Application
"""

from __future__ import annotations

import logging
from typing import Iterator, Optional, Iterable

from pebble import SExpression
from pebble.errors import PebbleSyntaxError
from pebble.reader.ast import Application, Define, If, LambdaExpr, PairLiteral
from pebble.reader.lexer import lex
from pebble.types.nil import Nil
from pebble.types.symbol import Symbol

logger = logging.getLogger(__name__)

# Token types whose value is already the literal
LITERAL_TOKENS = frozenset({"integer", "float", "true", "false", "char", "string"})
KEYWORD_TOKENS = frozenset({"lambda", "define", "if"})


class TokenStream:
    def __init__(self, token_iter: Iterable[tuple[str, object]]):
        self.tokens = iter(token_iter)
        self.buffer: list[tuple[str, object]] = []

    def peek(self) -> tuple[Optional[str], object]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None, None
        return self.buffer[0]

    def advance(self) -> tuple[Optional[str], object]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, (None, None))

    def expect_more(self) -> tuple[str, object]:
        """Consume the next token, failing if the input is exhausted."""
        tok_type, tok_val = self.advance()
        if tok_type is None:
            raise PebbleSyntaxError("Unexpected end of input", incomplete=True)
        return tok_type, tok_val

    def expect_rparen(self, form: str) -> None:
        tok_type, tok_val = self.expect_more()
        if tok_type != "rparen":
            raise PebbleSyntaxError(f"Expected ')' to close {form}, got {tok_val!r}")

    def parse_expr(self) -> SExpression:
        """Parse one expression; returns None when the input is exhausted."""
        tok_type, _ = self.peek()
        if tok_type is None:
            return None
        try:
            return self._parse_required()
        except RecursionError:
            raise PebbleSyntaxError("Expression nested too deeply") from None

    def _parse_required(self) -> SExpression:
        tok_type, tok_val = self.expect_more()

        if tok_type in LITERAL_TOKENS:
            return tok_val

        if tok_type == "symbol":
            return Symbol(tok_val)

        if tok_type == "rparen":
            raise PebbleSyntaxError("Unexpected ')'")

        if tok_type in KEYWORD_TOKENS:
            raise PebbleSyntaxError(f"'{tok_val}' not expected in this position")

        if tok_type == "quote":
            return self._parse_quoted_list()

        if tok_type == "lparen":
            return self._parse_form()

        raise PebbleSyntaxError(f"Unknown token: {tok_type} {tok_val!r}")

    def _parse_form(self) -> SExpression:
        """Parse what follows an opening paren."""
        tok_type, _ = self.peek()
        if tok_type is None:
            raise PebbleSyntaxError("Unexpected end of input", incomplete=True)

        if tok_type == "rparen":
            self.advance()
            return Nil

        if tok_type == "if":
            self.advance()
            condition = self._parse_required()
            consequent = self._parse_required()
            alternative = self._parse_required()
            self.expect_rparen("if")
            return If(condition, consequent, alternative)

        if tok_type == "define":
            self.advance()
            name_type, name = self.expect_more()
            if name_type != "symbol":
                raise PebbleSyntaxError(f"Expected identifier after define, got {name!r}")
            value = self._parse_required()
            self.expect_rparen("define")
            return Define(Symbol(name), value)

        if tok_type == "lambda":
            self.advance()
            open_type, open_val = self.expect_more()
            if open_type != "lparen":
                raise PebbleSyntaxError(f"Expected '(' after 'lambda', got {open_val!r}")
            params: list[Symbol] = []
            while True:
                p_type, p_val = self.expect_more()
                if p_type == "rparen":
                    break
                if p_type != "symbol":
                    raise PebbleSyntaxError(f"Invalid parameter {p_val!r} in lambda list")
                params.append(Symbol(p_val))
            body = self._parse_required()
            self.expect_rparen("lambda")
            return LambdaExpr(tuple(params), body)

        head = self._parse_required()
        return Application(head, tuple(self._parse_until_rparen()))

    def _parse_until_rparen(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                raise PebbleSyntaxError("Unexpected end of input", incomplete=True)
            if tok_type == "rparen":
                self.advance()
                return
            yield self._parse_required()

    def _parse_quoted_list(self) -> SExpression:
        tok_type, tok_val = self.expect_more()
        if tok_type != "lparen":
            raise PebbleSyntaxError(
                f"Quote must be followed by a list, got {tok_val!r}"
            )
        items = list(self._parse_until_rparen())
        result: SExpression = Nil
        for item in reversed(items):
            result = PairLiteral(item, result)
        return result

    def parse_all(self) -> Iterator[SExpression]:
        while True:
            tok_type, _ = self.peek()
            if tok_type is None:
                break
            yield self.parse_expr()


def parse(source: str) -> list[SExpression]:
    """Parse every top-level expression in `source`."""
    exprs = list(TokenStream(lex(source)).parse_all())
    logger.debug("parsed %d top-level form(s)", len(exprs))
    return exprs
