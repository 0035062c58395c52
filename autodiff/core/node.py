# autodiff/core/node.py
from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from . import tape as tape_mod  # Use module access for use_tape() compatibility
from .errors import UseAfterRelease
from .registry import OpKind, Operation, lookup


@dataclass(eq=False)
class Node:
    """
    One evaluated sub-expression of the computation graph.

    Attributes
    ----------
    op        : Operation
        `identity` for leaves, otherwise the unary/binary operation applied.
    value     : numeric
        Forward value, computed once at construction.
    children  : Tuple[Node, ...]
        Owned operand nodes (0..2). The same node may appear twice (x*x).
    grad      : numeric
        Gradient accumulator, filled by propagation.
    ref_count : int
        Owning references alive: parent edges plus live handles.
    consumed  : bool
        True once the graph below this node was torn down by a non-retained
        propagation; the node then acts as a constant leaf.
    """
    op: Operation
    value: Any
    children: Tuple["Node", ...] = ()
    grad: Any = 0.0
    ref_count: int = 1
    name: Optional[str] = None
    id: int = -1
    tape: Optional[tape_mod.Tape] = field(default=None, repr=False)
    released: bool = False
    consumed: bool = False

    @classmethod
    def leaf(cls, value, *, name: Optional[str] = None) -> "Node":
        op = lookup(OpKind.IDENTITY)
        return cls._record(op, op.dtype(value), (), name)

    @classmethod
    def apply(cls, op: Operation, *children: "Node", name: Optional[str] = None) -> "Node":
        """Build the node `op(children)`; forward value is computed eagerly."""
        for child in children:
            if child.released:
                raise UseAfterRelease(f"operand node #{child.id} has already been released")
        value = op.forward(*(child.value for child in children))
        for child in children:
            child.ref_count += 1
        return cls._record(op, value, tuple(children), name)

    @classmethod
    def _record(cls, op, value, children, name) -> "Node":
        tape = tape_mod.global_tape
        node = cls(op=op, value=value, children=children, grad=op.dtype(0.0),
                   name=name, id=tape.next_id(), tape=tape)
        tape.push_node(node)
        return node

    @property
    def is_leaf(self) -> bool:
        return self.op.is_leaf

    def clear(self) -> None:
        self.grad = self.op.dtype(0.0)

    def add_ref(self) -> None:
        if self.released:
            raise UseAfterRelease(f"node #{self.id} has already been released")
        self.ref_count += 1

    def remove_ref(self) -> int:
        """
        Drop one owning reference. At zero the node is released and its
        children lose one reference each, cascading. Returns the number of
        nodes released.
        """
        if self.released or self.ref_count <= 0:
            raise UseAfterRelease(f"node #{self.id} has already been released")
        self.ref_count -= 1
        if self.ref_count == 0:
            return _release_cascade(self)
        return 0

    def detach_children(self) -> int:
        """
        Drop every edge below this node (the node itself stays alive) and
        turn it into a leaf. Returns the number of nodes released.
        """
        children, self.children = self.children, ()
        self.op = lookup(OpKind.IDENTITY, self.op.dtype)
        freed = 0
        for child in children:
            freed += child.remove_ref()
        return freed


def _release_cascade(node: Node) -> int:
    # iterative: long chains (e.g. running sums) would overflow recursion
    stack: List[Node] = [node]
    freed = 0
    while stack:
        cur = stack.pop()
        cur.released = True
        if cur.tape is not None:
            cur.tape.discard(cur)
        freed += 1
        children, cur.children = cur.children, ()
        for child in children:
            child.ref_count -= 1
            if child.ref_count == 0:
                stack.append(child)
    return freed
