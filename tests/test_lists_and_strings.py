import pytest

from pebble.errors import PebbleArityError, PebbleTypeError
from pebble.types.char import Char
from pebble.types.nil import Nil
from pebble.types.pair import Pair


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(car (cons 1 2))", 1),
        ("(cdr (cons 1 2))", 2),
        ("(cons 1 2)", Pair(1, 2)),
        ("(list 1 2 3)", Pair(1, Pair(2, Pair(3, Nil)))),
        ("(list)", Nil),
        ("(car (list 1 2))", 1),
        ("(cdr (list 1 2))", Pair(2, Nil)),
        ("(car (cdr '(1 2 3)))", 2),
        ("(cons 1 (cons 2 '()))", Pair(1, Pair(2, Nil))),
        ('(string->list "hi")', Pair(Char("h"), Pair(Char("i"), Nil))),
        ('(string->list "")', Nil),
        ('(list->string (string->list "hi"))', "hi"),
        ("(list->string (list #\\a #\\b))", "ab"),
        ("(list->string '())", ""),
        # an improper tail ends the walk after the last pair
        ("(list->string (cons #\\a #\\b))", "a"),
        ("(list->string (cons #\\a (cons #\\b 5)))", "ab"),
    ]
)
def test_list_operations(run, source, expected):
    assert run(source) == expected


@pytest.mark.parametrize(
    "source,expected",
    [
        ("(null? (list))", True),
        ("(null? '())", True),
        ("(null? ())", True),
        ("(null? (list 1))", False),
        ("(null? 0)", False),
    ]
)
def test_null_predicate(run, source, expected):
    assert run(source) is expected


@pytest.mark.parametrize(
    "source,error,message",
    [
        ("(car 5)", PebbleTypeError, "5 is not a pair"),
        ("(cdr '())", PebbleTypeError, "() is not a pair"),
        ("(car)", PebbleArityError, "car requires exactly 1 argument"),
        ("(cons 1)", PebbleArityError, "cons requires exactly 2 arguments"),
        ("(null? 1 2)", PebbleArityError, "null? requires exactly 1 argument"),
        ("(string->list 5)", PebbleTypeError, "5 is not a string"),
        ("(string->list #\\a)", PebbleTypeError, "is not a string"),
        ("(list->string (list 1 2))", PebbleTypeError, "1 is not a character"),
        ('(list->string "ab")', PebbleTypeError, "ab is not a list"),
    ]
)
def test_list_errors(run, source, error, message):
    with pytest.raises(error) as excinfo:
        run(source)
    assert message in str(excinfo.value)


def test_list_sum_by_recursion(run):
    run("(define sum (lambda (xs) (if (null? xs) 0 (+ (car xs) (sum (cdr xs))))))")
    assert run("(sum (list 1 2 3 4))") == 10


def test_reverse_string(run):
    run("""
    (define rev (lambda (xs acc)
      (if (null? xs) acc (rev (cdr xs) (cons (car xs) acc)))))
    """)
    assert run('(list->string (rev (string->list "abc") \'()))') == "cba"
