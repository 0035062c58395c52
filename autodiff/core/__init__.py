# autodiff/core/__init__.py

"""
Core public API for the autodiff package.

This module exposes the minimal set of symbols that users of the engine
should import from `autodiff.core`. Keeping this surface small makes it easier
to change internals (node layout, registry) without breaking user code.

Exports:
    Variable          : Handle on a graph node; operators build new nodes.
    Node              : One evaluated sub-expression (value, grad, children, refs).
    OpKind, Operation : The closed operation set and its descriptors.
    get_registry      : Process-wide operation registry for a dtype.
    global_tape       : The default registry of live nodes.
    use_tape          : Context manager to temporarily switch the active tape.
    propagate         : Run one reverse pass from a node.
    teardown          : Release the graph below a node.
    zero_adjoints     : Reset all gradients on the active tape to zero.
    grad, grads       : Convenience: derivative(s) of a function at a point.
    value             : Convenience: numeric value of a Variable.
"""

from .errors import AutodiffError, OperationMismatch, UseAfterRelease
from .config import Config, configure, get_config, using_config
from .registry import OpKind, Operation, get_registry, lookup
from .node import Node
from .tape import Tape, global_tape, use_tape
from .engine import propagate, teardown, zero_adjoints, live_nodes
from .var import Variable
from .seeds import grad, grads, grads_list, value, derivative, clear

__all__ = [
    "AutodiffError", "OperationMismatch", "UseAfterRelease",
    "Config", "configure", "get_config", "using_config",
    "OpKind", "Operation", "get_registry", "lookup",
    "Node",
    "Tape", "global_tape", "use_tape",
    "propagate", "teardown", "zero_adjoints", "live_nodes",
    "Variable",
    "grad", "grads", "grads_list", "value", "derivative", "clear",
]
