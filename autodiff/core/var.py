# autodiff/core/var.py
from __future__ import annotations
from typing import Any, Optional

import numpy as np

from . import engine
from .config import get_config
from .errors import UseAfterRelease
from .node import Node

_NUMERIC = (int, float, np.integer, np.floating)


class Variable:
    """
    User-facing handle on a graph node (reverse-mode AD scalar).

    A handle owns one reference to its node. Copying a handle shares the node
    and adds a reference; moving transfers it; releasing (or the handle being
    garbage collected) drops it. When a node's count reaches zero it is freed
    and its children lose a reference in turn.

    Examples
    --------
        x, y = Variable(2.0), Variable(3.0)
        z = x * y + sin(x)
        dx, dy = z.derivative(x, y)
    """

    def __init__(self, val: Any = 0.0, *, name: Optional[str] = None):
        if isinstance(val, Variable):
            node = val._live_node()
            node.add_ref()
            self._node = node
            return
        if not isinstance(val, _NUMERIC):
            raise TypeError(
                f"Variable only accepts real scalars (int, float, numpy scalar), "
                f"but got {type(val)}"
            )
        self._node = Node.leaf(val, name=name)

    @classmethod
    def _adopt(cls, node: Node) -> "Variable":
        """Wrap a node whose reference for this handle is already counted."""
        obj = cls.__new__(cls)
        obj._node = node
        return obj

    def _live_node(self) -> Node:
        node = self._node
        if node is None:
            raise UseAfterRelease("handle is empty (released or moved from)")
        if node.released:
            raise UseAfterRelease(f"node #{node.id} has already been released")
        return node

    def __del__(self):
        node = getattr(self, "_node", None)
        if node is not None and not node.released:
            self._node = None
            node.remove_ref()

    # ------------------------------------------------------------------ #
    # ownership
    # ------------------------------------------------------------------ #
    @property
    def node(self) -> Node:
        return self._live_node()

    @property
    def released(self) -> bool:
        return self._node is None or self._node.released

    @property
    def ref_count(self) -> int:
        return self._live_node().ref_count

    @property
    def name(self) -> Optional[str]:
        return self._live_node().name

    def copy(self) -> "Variable":
        return Variable(self)

    __copy__ = copy

    def move(self) -> "Variable":
        """Transfer ownership to a new handle; this one becomes empty."""
        node = self._live_node()
        self._node = None
        return Variable._adopt(node)

    def assign(self, other: "Variable") -> "Variable":
        """Copy-assignment: share `other`'s node, dropping the current one."""
        node = other._live_node()
        if node is self._node:
            return self
        node.add_ref()
        old, self._node = self._node, node
        if old is not None and not old.released:
            old.remove_ref()
        return self

    def release(self) -> None:
        node = self._live_node()
        self._node = None
        node.remove_ref()

    # ------------------------------------------------------------------ #
    # values and gradients
    # ------------------------------------------------------------------ #
    def raw(self):
        return self._live_node().value

    @property
    def val(self):
        return self._live_node().value

    @val.setter
    def val(self, new_value):
        # optimizers update parameter leaves in place
        node = self._live_node()
        node.value = node.op.dtype(new_value)

    def grad(self):
        return self._live_node().grad

    def clear(self) -> None:
        self._live_node().clear()

    def propagate(self, retain: Optional[bool] = None) -> None:
        """
        Seed this node with 1.0 and run the reverse pass over its graph.

        Unless `retain` is true (default: `Config.retain_graph`, False), the
        graph below this node is torn down afterwards; intermediate handles
        still keep their own nodes alive.
        """
        node = self._live_node()
        if retain is None:
            retain = get_config().retain_graph
        engine.propagate(node, 1.0)
        if not retain:
            engine.teardown(node)

    def derivative(self, *args: "Variable") -> tuple:
        """propagate(), then the gradient of each argument, in order."""
        self.propagate()
        return tuple(a.grad() for a in args)

    # ------------------------------------------------------------------ #
    # comparison by value, with absolute tolerance
    # ------------------------------------------------------------------ #
    @staticmethod
    def _other_value(other):
        if isinstance(other, Variable):
            return other.raw()
        if isinstance(other, _NUMERIC):
            return other
        return None

    def __eq__(self, other):
        o = self._other_value(other)
        if o is None:
            return NotImplemented
        return bool(abs(self.raw() - o) < get_config().eq_tolerance)

    def __ne__(self, other):
        eq = self.__eq__(other)
        return eq if eq is NotImplemented else not eq

    def __lt__(self, other):
        o = self._other_value(other)
        if o is None:
            return NotImplemented
        return bool(self.raw() < o - get_config().eq_tolerance)

    def __le__(self, other):
        o = self._other_value(other)
        if o is None:
            return NotImplemented
        return bool(self.raw() < o + get_config().eq_tolerance)

    def __gt__(self, other):
        o = self._other_value(other)
        if o is None:
            return NotImplemented
        return bool(self.raw() > o + get_config().eq_tolerance)

    def __ge__(self, other):
        o = self._other_value(other)
        if o is None:
            return NotImplemented
        return bool(self.raw() > o - get_config().eq_tolerance)

    __hash__ = None

    def __float__(self):
        return float(self.raw())

    def __format__(self, spec):
        return format(self.raw(), spec)

    def __repr__(self):
        if self.released:
            return "Variable(<released>)"
        node = self._node
        return f"Variable({node.value!r}, grad={node.grad!r}, name={node.name!r})"

    # Operator overloading for arithmetic operations
    def __add__(self, other):
        from ..ops.arithmetic import add
        return add(self, other)

    def __radd__(self, other):
        from ..ops.arithmetic import add
        return add(other, self)

    def __sub__(self, other):
        from ..ops.arithmetic import sub
        return sub(self, other)

    def __rsub__(self, other):
        from ..ops.arithmetic import sub
        return sub(other, self)

    def __mul__(self, other):
        from ..ops.arithmetic import mul
        return mul(self, other)

    def __rmul__(self, other):
        from ..ops.arithmetic import mul
        return mul(other, self)

    def __truediv__(self, other):
        from ..ops.arithmetic import div
        return div(self, other)

    def __rtruediv__(self, other):
        from ..ops.arithmetic import div
        return div(other, self)

    def __neg__(self):
        from ..ops.arithmetic import neg
        return neg(self)

    def __pos__(self):
        return self.copy()

    def __abs__(self):
        from ..ops.special import abs
        return abs(self)

    def __pow__(self, other):
        from ..ops.arithmetic import pow
        return pow(self, other)

    def __rpow__(self, other):
        from ..ops.arithmetic import pow
        return pow(other, self)

    # `^` reads as power in math notation; mind Python's lower precedence
    __xor__ = __pow__
    __rxor__ = __rpow__
