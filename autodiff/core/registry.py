# autodiff/core/registry.py
"""
Operation registry: the closed set of elementary operations.

Every operation is an immutable `Operation` built from a row of `_RULES`:
its arity, a forward rule `f(*operands)` and a backward rule
`(upstream, *operands) -> tuple of per-operand contributions`. Rules are pure
functions evaluated at the operands' forward values.

Domain violations are not special-cased. Rules run under
`np.errstate(all="ignore")`, so log(0), 1/0, sqrt(-1), ... produce IEEE
Inf/NaN which then flow through the backward pass unchanged.
"""

from __future__ import annotations
import enum
from dataclasses import dataclass
from functools import lru_cache
from typing import Callable, Dict, Optional, Tuple

import numpy as np

from .config import get_config
from .errors import OperationMismatch


class OpKind(enum.Enum):
    IDENTITY = "identity"
    NEGATE = "negate"
    ADD = "add"
    SUBTRACT = "subtract"
    MULTIPLY = "multiply"
    DIVIDE = "divide"
    POWER = "power"
    LOG = "log"
    EXP = "exp"
    SQRT = "sqrt"
    ABS = "abs"
    SIN = "sin"
    COS = "cos"
    TAN = "tan"
    ASIN = "asin"
    ACOS = "acos"
    ATAN = "atan"
    SINH = "sinh"
    COSH = "cosh"
    TANH = "tanh"


def _sign(a):
    # sign(0) := 1; NaN stays NaN
    if a >= 0:
        return 1.0
    if a < 0:
        return -1.0
    return np.nan


def _no_forward():
    raise OperationMismatch("identity", 0, 0, "leaves carry their own value")


# kind -> (arity, forward, backward)
_RULES: Dict[OpKind, Tuple[int, Callable, Callable]] = {
    OpKind.IDENTITY: (0, _no_forward, lambda u: ()),
    OpKind.NEGATE:   (1, lambda a: -a,         lambda u, a: (-u,)),
    OpKind.ADD:      (2, lambda a, b: a + b,   lambda u, a, b: (u, u)),
    OpKind.SUBTRACT: (2, lambda a, b: a - b,   lambda u, a, b: (u, -u)),
    OpKind.MULTIPLY: (2, lambda a, b: a * b,   lambda u, a, b: (u * b, u * a)),
    OpKind.DIVIDE:   (2, lambda a, b: a / b,   lambda u, a, b: (u / b, -u * a / (b * b))),
    OpKind.POWER:    (2, lambda a, b: a ** b,
                      lambda u, a, b: (u * b * a ** (b - 1.0), u * a ** b * np.log(a))),
    OpKind.LOG:      (1, np.log,  lambda u, a: (u / a,)),
    OpKind.EXP:      (1, np.exp,  lambda u, a: (u * np.exp(a),)),
    OpKind.SQRT:     (1, np.sqrt, lambda u, a: (u / (2.0 * np.sqrt(a)),)),
    OpKind.ABS:      (1, np.abs,  lambda u, a: (u * _sign(a),)),
    OpKind.SIN:      (1, np.sin,  lambda u, a: (u * np.cos(a),)),
    OpKind.COS:      (1, np.cos,  lambda u, a: (-u * np.sin(a),)),
    OpKind.TAN:      (1, np.tan,  lambda u, a: (u / (np.cos(a) * np.cos(a)),)),
    OpKind.ASIN:     (1, np.arcsin, lambda u, a: (u / np.sqrt(1.0 - a * a),)),
    OpKind.ACOS:     (1, np.arccos, lambda u, a: (-u / np.sqrt(1.0 - a * a),)),
    OpKind.ATAN:     (1, np.arctan, lambda u, a: (u / (1.0 + a * a),)),
    OpKind.SINH:     (1, np.sinh, lambda u, a: (u * np.cosh(a),)),
    OpKind.COSH:     (1, np.cosh, lambda u, a: (u * np.sinh(a),)),
    OpKind.TANH:     (1, np.tanh, lambda u, a: (u / (np.cosh(a) * np.cosh(a)),)),
}


@dataclass(frozen=True)
class Operation:
    """
    Stateless descriptor of one elementary operation.

    Attributes
    ----------
    kind  : OpKind
    arity : int          0 for identity (leaf), 1 unary, 2 binary.
    dtype : type         Result type (e.g. np.float64).
    """
    kind: OpKind
    arity: int
    dtype: type
    _forward: Callable
    _backward: Callable

    @property
    def name(self) -> str:
        return self.kind.value

    @property
    def is_leaf(self) -> bool:
        return self.kind is OpKind.IDENTITY

    def _coerce(self, operands) -> tuple:
        if len(operands) != self.arity:
            raise OperationMismatch(self.name, self.arity, len(operands))
        # plain Python floats would turn (-8) ** (1/3) into a complex number
        return tuple(self.dtype(o) for o in operands)

    def forward(self, *operands):
        """value = f(operands)"""
        operands = self._coerce(operands)
        with np.errstate(all="ignore"):
            return self.dtype(self._forward(*operands))

    def backward(self, upstream, *operands) -> tuple:
        """One gradient contribution per operand: upstream * df/d(operand_i)."""
        operands = self._coerce(operands)
        upstream = self.dtype(upstream)
        with np.errstate(all="ignore"):
            return tuple(self.dtype(g) for g in self._backward(upstream, *operands))


class Registry:
    """All operations for one numeric dtype, looked up by kind."""

    def __init__(self, dtype: type = np.float64):
        missing = [k.value for k in OpKind if k not in _RULES]
        if missing:
            raise OperationMismatch(", ".join(missing), -1, 0, "no rule registered")
        self.dtype = dtype
        self._ops = {
            kind: Operation(kind, arity, dtype, fwd, bwd)
            for kind, (arity, fwd, bwd) in _RULES.items()
        }

    def __getitem__(self, kind: OpKind) -> Operation:
        return self._ops[kind]

    def __iter__(self):
        return iter(self._ops.values())

    def __len__(self) -> int:
        return len(self._ops)


@lru_cache(maxsize=None)
def _registry_for(dtype: type) -> Registry:
    return Registry(dtype)


def get_registry(dtype: Optional[type] = None) -> Registry:
    """Process-wide registry per dtype (default: the configured one), built on first use."""
    return _registry_for(dtype if dtype is not None else get_config().dtype)


def lookup(kind: OpKind, dtype: Optional[type] = None) -> Operation:
    return get_registry(dtype)[kind]
