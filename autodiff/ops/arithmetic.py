# autodiff/ops/arithmetic.py
from ..core.node import Node
from ..core.registry import OpKind, lookup
from ..core.var import Variable


def _as_var(x):
    """Ensure x is a Variable; otherwise wrap it as a constant leaf."""
    return x if isinstance(x, Variable) else Variable(x)


def _apply(kind, *args):
    """
    Generic primitive:
      - wraps plain numbers as leaves
      - computes the forward value eagerly from the operand values
      - returns a new handle owning a node whose children are the operand nodes
    """
    operands = [_as_var(a) for a in args]
    node = Node.apply(lookup(kind), *(v._live_node() for v in operands))
    return Variable._adopt(node)


def add(x, y): return _apply(OpKind.ADD, x, y)
def sub(x, y): return _apply(OpKind.SUBTRACT, x, y)
def mul(x, y): return _apply(OpKind.MULTIPLY, x, y)
def div(x, y): return _apply(OpKind.DIVIDE, x, y)
def neg(x):    return _apply(OpKind.NEGATE, x)


def pow(x, y):
    """
    Power:
      out = x ** y
      ∂out/∂x = y * x^(y-1)
      ∂out/∂y = x^y * log(x)   (NaN for x <= 0; not special-cased)
    """
    return _apply(OpKind.POWER, x, y)
