# autodiff/core/tape.py
from __future__ import annotations
import itertools
import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING, Dict, Iterator, Optional

if TYPE_CHECKING:
    from .node import Node

logger = logging.getLogger(__name__)


class Tape:
    """
    Registry of the live nodes of one graph context, in creation order.

    A node is pushed when it is built and discarded when its reference count
    drops to zero, so `len(tape)` is always the number of live nodes.
    """
    def __init__(self):
        self.nodes: Dict[int, Node] = {}
        self._ids = itertools.count()

    def __len__(self) -> int:
        return len(self.nodes)

    def __iter__(self) -> Iterator[Node]:
        return iter(list(self.nodes.values()))

    def __contains__(self, node) -> bool:
        return self.nodes.get(getattr(node, "id", None)) is node

    def next_id(self) -> int:
        return next(self._ids)

    def push_node(self, node: Node) -> int:
        self.nodes[node.id] = node
        return node.id

    def discard(self, node: Node) -> None:
        self.nodes.pop(node.id, None)

    def reset(self):
        """Forget every node without touching reference counts."""
        self.nodes.clear()


# Global singleton tape (simple and practical for a first implementation)
global_tape = Tape()


@contextmanager
def use_tape(tape: Optional[Tape] = None):
    """
    Context manager to temporarily use a fresh tape:
        with use_tape() as t:
            ... build computation ...
            y.propagate()
    """
    from . import tape as _tape_mod  # local import to avoid cycles
    prev = _tape_mod.global_tape
    try:
        _tape_mod.global_tape = tape if tape is not None else Tape()
        yield _tape_mod.global_tape
    finally:
        leftover = len(_tape_mod.global_tape)
        if leftover:
            logger.debug("use_tape: leaving context with %d live node(s)", leftover)
        _tape_mod.global_tape = prev
