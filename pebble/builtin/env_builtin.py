"""Built-in procedures for the Pebble runtime.

This module defines arithmetic over the {int, float} numeric tower,
comparison, predicates, pair and list processing, string conversion, and
output. Every built-in takes the calling environment and the list of already
evaluated arguments. Built-in names are resolved before the environment, so
they cannot be shadowed by definitions.
"""
from __future__ import annotations

import math

from pebble import BuiltinFn, LispValue
from pebble.errors import PebbleArithmeticError, PebbleArityError, PebbleTypeError
from pebble.printer import to_string
from pebble.types.char import Char
from pebble.types.environment import Environment
from pebble.types.nil import Nil
from pebble.types.pair import Pair
from pebble.types.symbol import Symbol


def is_number(x: LispValue) -> bool:
    """True for int and float values; bool is not a number here."""
    return isinstance(x, (int, float)) and not isinstance(x, bool)


def _check_numbers(name: str, args: list[LispValue]) -> None:
    for x in args:
        if not is_number(x):
            raise PebbleTypeError(f"{to_string(x)} is not a number (in {name})")


def _expect_arity(name: str, args: list[LispValue], n: int) -> None:
    if len(args) != n:
        plural = "argument" if n == 1 else "arguments"
        raise PebbleArityError(f"{name} requires exactly {n} {plural}, got {len(args)}")


def _expect_at_least(name: str, args: list[LispValue], n: int) -> None:
    if len(args) < n:
        plural = "argument" if n == 1 else "arguments"
        raise PebbleArityError(f"{name} requires at least {n} {plural}, got {len(args)}")


# -------------------------------
# Arithmetic
# -------------------------------
def add(env: Environment, args: list[LispValue]) -> LispValue:
    """Sum of all arguments; int stays int unless a float is involved."""
    _check_numbers("+", args)
    result: LispValue = 0
    for x in args:
        result = result + x
    return result


def mul(env: Environment, args: list[LispValue]) -> LispValue:
    """Product of all arguments; (*) is 1."""
    _check_numbers("*", args)
    result: LispValue = 1
    for x in args:
        result = result * x
    return result


def sub(env: Environment, args: list[LispValue]) -> LispValue:
    """Subtract all subsequent numbers from the first; unary negation for one arg."""
    _expect_at_least("-", args, 1)
    _check_numbers("-", args)
    if len(args) == 1:
        return -args[0]
    result = args[0]
    for x in args[1:]:
        result = result - x
    return result


def _float_div(a: float, b: float) -> float:
    # IEEE semantics: x/0 is a signed infinity and 0/0 is nan
    if b == 0:
        if a == 0 or math.isnan(a):
            return math.nan
        return math.copysign(math.inf, a) * math.copysign(1.0, b)
    return a / b


def div(env: Environment, args: list[LispValue]) -> float:
    """Divide left-to-right in floating point; with one arg returns the reciprocal."""
    _expect_at_least("/", args, 1)
    _check_numbers("/", args)
    try:
        operands = [float(x) for x in args]
    except OverflowError:
        raise PebbleArithmeticError("Numeric overflow in /") from None
    if len(operands) == 1:
        return _float_div(1.0, operands[0])
    result = operands[0]
    for x in operands[1:]:
        result = _float_div(result, x)
    return result


# -------------------------------
# Comparison
# -------------------------------
def lt(env: Environment, args: list[LispValue]) -> bool:
    """Chained < as a fold that poisons to zero.

    The running value starts at the first argument. Once it is zero the chain
    stays zero; otherwise it advances to the next argument while increasing
    and drops to zero on the first failure. Nonzero at the end is #t, so a
    chain that starts at or passes through zero is #f.
    """
    _expect_at_least("<", args, 1)
    _check_numbers("<", args)
    running = args[0]
    for x in args[1:]:
        if running == 0:
            running = 0
        elif running < x:
            running = x
        else:
            running = 0
    return running != 0


def equals(env: Environment, args: list[LispValue]) -> bool:
    """#t if every argument numerically equals the first."""
    _expect_at_least("=", args, 1)
    _check_numbers("=", args)
    first = args[0]
    return all(x == first for x in args[1:])


# -------------------------------
# Predicates
# -------------------------------
def logical_not(env: Environment, args: list[LispValue]) -> bool:
    """#t only for #f; every other value, boolean or not, gives #f."""
    _expect_arity("not", args, 1)
    return args[0] is False


def is_int(env: Environment, args: list[LispValue]) -> bool:
    """#t if every argument is an integer or a float with no fractional part."""
    for x in args:
        if isinstance(x, bool):
            return False
        if isinstance(x, int):
            continue
        if isinstance(x, float) and x.is_integer():
            continue
        return False
    return True


def null(env: Environment, args: list[LispValue]) -> bool:
    _expect_arity("null?", args, 1)
    return args[0] is Nil


# -------------------------------
# Output
# -------------------------------
def display(env: Environment, args: list[LispValue]) -> LispValue:
    """Print the textual form of one value without a trailing newline; returns Nil."""
    _expect_arity("display", args, 1)
    print(to_string(args[0]), end="", flush=True)
    return Nil


def newline(env: Environment, args: list[LispValue]) -> LispValue:
    _expect_arity("newline", args, 0)
    print(flush=True)
    return Nil


# -------------------------------
# Pairs and lists
# -------------------------------
def cons(env: Environment, args: list[LispValue]) -> Pair:
    _expect_arity("cons", args, 2)
    return Pair(args[0], args[1])


def _expect_pair(name: str, args: list[LispValue]) -> Pair:
    _expect_arity(name, args, 1)
    x = args[0]
    if not isinstance(x, Pair):
        raise PebbleTypeError(f"{to_string(x)} is not a pair (in {name})")
    return x


def car(env: Environment, args: list[LispValue]) -> LispValue:
    return _expect_pair("car", args).car


def cdr(env: Environment, args: list[LispValue]) -> LispValue:
    return _expect_pair("cdr", args).cdr


def list_builtin(env: Environment, args: list[LispValue]) -> LispValue:
    return Pair.from_iterable(args)


# -------------------------------
# Strings
# -------------------------------
def string_to_list(env: Environment, args: list[LispValue]) -> LispValue:
    """(string->list "hi") -> (#\\h . (#\\i . ()))"""
    _expect_arity("string->list", args, 1)
    s = args[0]
    if not isinstance(s, str):
        raise PebbleTypeError(f"{to_string(s)} is not a string (in string->list)")
    return Pair.from_iterable(Char(c) for c in s)


def list_to_string(env: Environment, args: list[LispValue]) -> str:
    """Join the characters of a list into a string.

    Walks the spine and stops after the first cell whose cdr is not a pair, so
    an improper tail is ignored rather than rejected.
    """
    _expect_arity("list->string", args, 1)
    lst = args[0]
    if lst is Nil:
        return ""
    if not isinstance(lst, Pair):
        raise PebbleTypeError(f"{to_string(lst)} is not a list (in list->string)")
    chars: list[str] = []
    for cell in lst.cells():
        if not isinstance(cell.car, Char):
            raise PebbleTypeError(
                f"{to_string(cell.car)} is not a character (in list->string)"
            )
        chars.append(cell.car.ch)
    return "".join(chars)


BUILTINS: dict[Symbol, BuiltinFn] = {}


def register(table: dict[Symbol, BuiltinFn]) -> None:
    """Register all builtin procedures into the given table."""
    table.update(
        {
            Symbol("+"): add,
            Symbol("-"): sub,
            Symbol("*"): mul,
            Symbol("/"): div,
            Symbol("<"): lt,
            Symbol("="): equals,
            Symbol("not"): logical_not,
            Symbol("int"): is_int,
            Symbol("display"): display,
            Symbol("newline"): newline,
            Symbol("cons"): cons,
            Symbol("car"): car,
            Symbol("cdr"): cdr,
            Symbol("list"): list_builtin,
            Symbol("null?"): null,
            Symbol("string->list"): string_to_list,
            Symbol("list->string"): list_to_string,
        }
    )


register(BUILTINS)
