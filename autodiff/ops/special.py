# autodiff/ops/special.py
from ..core.registry import OpKind
from ..core.var import Variable
from .arithmetic import _apply, _as_var


def abs(x):
    """
    Primitive: |x|, with local partial sign(x) where sign(0) := 1.
    """
    return _apply(OpKind.ABS, x)


def maximum(a, b):
    """Return a copy of the handle holding the larger value (b on ties)."""
    a, b = _as_var(a), _as_var(b)
    return Variable(a if a > b else b)


def minimum(a, b):
    """Return a copy of the handle holding the smaller value (b on ties)."""
    a, b = _as_var(a), _as_var(b)
    return Variable(a if a < b else b)
