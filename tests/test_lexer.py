import pytest
from hypothesis import given, strategies as st

from pebble.reader.lexer import lex, classify
from pebble.types.char import Char


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(+ 1 2)", [("lparen", "("), ("symbol", "+"), ("integer", 1), ("integer", 2), ("rparen", ")")]),
        ("'(a)", [("quote", "'"), ("lparen", "("), ("symbol", "a"), ("rparen", ")")]),
        ("#t #f", [("true", True), ("false", False)]),
        ("#\\a", [("char", Char("a"))]),
        ("#\\space #\\newline", [("char", Char(" ")), ("char", Char("\n"))]),
        ("#\\;", [("char", Char(";"))]),
        ("3.5 -2 +7 1e3 .5", [("float", 3.5), ("integer", -2), ("integer", 7), ("float", 1000.0), ("float", 0.5)]),
        ("lambda define if", [("lambda", "lambda"), ("define", "define"), ("if", "if")]),
        ("- ... abc null?", [("symbol", "-"), ("symbol", "..."), ("symbol", "abc"), ("symbol", "null?")]),
        ("foo(bar)", [("symbol", "foo"), ("lparen", "("), ("symbol", "bar"), ("rparen", ")")]),
        ("don't", [("symbol", "don"), ("quote", "'"), ("symbol", "t")]),
        ("a ; comment (ignored\n b", [("symbol", "a"), ("symbol", "b")]),
        ('ab"cd"', [("symbol", "ab"), ("string", "cd")]),
        ("", []),
        ("   \n\t ", []),
    ]
)
def test_lexer_basic(source, expected):
    assert list(lex(source)) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ('"hello"', "hello"),
        ('"a\\nb"', "a\nb"),
        ('"tab\\there"', "tab\there"),
        ('"back\\\\slash"', "back\\slash"),
        ('"say \\"hi\\""', 'say "hi"'),
        ('"x\\qy"', "xy"),  # unknown escapes are dropped
        ('"(not a list)"', "(not a list)"),
        ('"; not a comment"', "; not a comment"),
        ('"unterminated', "unterminated"),
    ]
)
def test_lexer_strings(source, expected):
    assert list(lex(source)) == [("string", expected)]


def test_integer_is_tried_before_float():
    tok_type, value = classify("42")
    assert tok_type == "integer"
    assert isinstance(value, int)


def test_keyword_text_inside_symbol_is_a_symbol():
    assert classify("define!") == ("symbol", "define!")
    assert classify("iffy") == ("symbol", "iffy")


def test_hash_backslash_needs_exactly_one_character():
    # "#\ab" is not a character literal and falls back to a symbol
    assert classify("#\\ab") == ("symbol", "#\\ab")


@given(st.text(max_size=200))
def test_lexer_never_raises(source):
    for tok_type, _ in lex(source):
        assert tok_type is not None
