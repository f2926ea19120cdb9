# Core type aliases for Pebble's data model.
# Literal values are plain Python types (int, float, bool, str) plus a few small
# classes (Symbol, Char, Nil, Pair, Lambda). Compound syntax (applications and
# special forms) is represented by the dataclasses in pebble.reader.ast.
#
# Naming guidance:
# - SExpression: Use in reader/parser code to denote syntactic forms.
# - LispValue:  Use in evaluator/runtime code to denote evaluated values.

from typing import Any, Callable

__version__ = "0.3.0"

# Runtime value alias
LispValue = Any
# Parsed expression alias
SExpression = Any

# Evaluator function type, passed to special forms
EvaluatorFn = Callable[..., LispValue]

# Built-in procedure type: (env, evaluated args) -> value
BuiltinFn = Callable[[Any, list], LispValue]
