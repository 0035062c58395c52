# autodiff/core/engine.py
from __future__ import annotations
import logging
from collections import deque
from typing import Dict, List, Optional

from . import tape as tape_mod
from .errors import UseAfterRelease
from .node import Node

logger = logging.getLogger(__name__)


def reachable(root: Node) -> Dict[Node, int]:
    """
    Discover every node reachable from `root` and count its pending in-degree:
    the number of edges into it from reachable parents, counted per edge, so
    `x*x` contributes 2 to x.

    Returns a dict node -> in-degree in discovery order (root first).
    """
    indeg: Dict[Node, int] = {root: 0}
    stack: List[Node] = [root]
    while stack:
        cur = stack.pop()
        for child in cur.children:
            if child not in indeg:
                indeg[child] = 0
                stack.append(child)
            indeg[child] += 1
    return indeg


def propagate(root: Node, seed=1.0) -> int:
    """
    Run one reverse pass from `root`, accumulating d(root)/d(node) into the
    `grad` of every reachable node.

    A node pushes its gradient into its children only once all of its own
    incoming edges are resolved (Kahn-style order), which is what makes the
    sum over several paths (diamonds, x*x) correct.

    Interior nodes are zeroed before the pass; leaf gradients accumulate
    across calls until cleared.

    Returns the number of nodes visited.
    """
    if root.released:
        raise UseAfterRelease(f"cannot propagate from released node #{root.id}")
    if root.consumed:
        raise UseAfterRelease(
            f"graph of node #{root.id} was torn down by a previous propagate(); "
            "pass retain=True to propagate more than once"
        )

    indeg = reachable(root)
    for node in indeg:
        if node is not root and not node.is_leaf:
            node.clear()

    root.grad = root.op.dtype(seed)
    queue = deque([root])
    visited = 0
    while queue:
        cur = queue.popleft()
        visited += 1
        if cur.is_leaf:
            continue
        children = cur.children
        contribs = cur.op.backward(cur.grad, *(c.value for c in children))
        for child, g in zip(children, contribs):
            child.grad = child.grad + g
            indeg[child] -= 1
        # dict.fromkeys: enqueue x only once for x*x
        for child in dict.fromkeys(children):
            if indeg[child] == 0:
                queue.append(child)

    logger.debug("propagate: root #%d, %d node(s) visited", root.id, visited)
    return visited


def teardown(root: Node) -> int:
    """
    Release the graph below `root`: every node owned only through it is freed.
    The root keeps its value and gradient, becomes a leaf, and is marked
    consumed. Returns the number of nodes released.
    """
    if root.released:
        raise UseAfterRelease(f"cannot tear down released node #{root.id}")
    had_graph = bool(root.children)
    freed = root.detach_children()
    if had_graph:
        root.consumed = True
    logger.debug("teardown: root #%d, %d node(s) released", root.id, freed)
    return freed


def zero_adjoints(tape: Optional[tape_mod.Tape] = None):
    """
    Set the gradient of every live node on the tape (default: the active one)
    to zero.
    """
    tape = tape if tape is not None else tape_mod.global_tape
    for node in tape:
        node.clear()


def live_nodes(tape: Optional[tape_mod.Tape] = None) -> int:
    tape = tape if tape is not None else tape_mod.global_tape
    return len(tape)
