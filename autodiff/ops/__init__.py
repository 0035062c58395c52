# autodiff/ops/__init__.py

# Convenience re-exports so users can do: from autodiff.ops import mul, exp, ...
from .arithmetic import add, sub, mul, div, neg, pow
from .transcendental import (
    exp, log, sqrt,
    sin, cos, tan,
    asin, acos, atan,
    sinh, cosh, tanh,
)
from .special import abs, maximum, minimum

__all__ = [
    "add", "sub", "mul", "div", "neg", "pow",
    "exp", "log", "sqrt",
    "sin", "cos", "tan",
    "asin", "acos", "atan",
    "sinh", "cosh", "tanh",
    "abs", "maximum", "minimum",
]
