# autodiff/ops/transcendental.py
from ..core.registry import OpKind
from .arithmetic import _apply


def exp(x):  return _apply(OpKind.EXP, x)
def log(x):  return _apply(OpKind.LOG, x)
def sqrt(x): return _apply(OpKind.SQRT, x)

def sin(x): return _apply(OpKind.SIN, x)
def cos(x): return _apply(OpKind.COS, x)
def tan(x): return _apply(OpKind.TAN, x)

def asin(x):
    """Inverse sine; derivative 1/sqrt(1 - x^2), NaN outside [-1, 1]."""
    return _apply(OpKind.ASIN, x)

def acos(x):
    """Inverse cosine; derivative -1/sqrt(1 - x^2), NaN outside [-1, 1]."""
    return _apply(OpKind.ACOS, x)

def atan(x): return _apply(OpKind.ATAN, x)

def sinh(x): return _apply(OpKind.SINH, x)
def cosh(x): return _apply(OpKind.COSH, x)
def tanh(x): return _apply(OpKind.TANH, x)
