# autodiff/core/errors.py

"""
Exceptions raised by the autodiff engine.

Both errors signal programmer misuse rather than recoverable runtime
conditions, so callers are expected to let them propagate. Arithmetic domain
problems (log of a non-positive number, division by zero, ...) are NOT errors:
they flow through the graph as NaN/Inf.
"""


class AutodiffError(RuntimeError):
    """Base class for every error raised by the engine."""


class OperationMismatch(AutodiffError):
    """
    Raised when an operation is evaluated with the wrong number of operands.

    Attributes
    ----------
    op : str
        Name of the operation (e.g. "add", "log").
    expected : int
        Arity declared by the operation.
    got : int
        Number of operands actually supplied.
    """

    def __init__(self, op: str, expected: int, got: int, detail: str = "") -> None:
        msg = f"operation '{op}' expects {expected} operand(s), got {got}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.op = op
        self.expected = expected
        self.got = got


class UseAfterRelease(AutodiffError):
    """
    Raised when a handle or node is used after its node has been released.

    This covers handles emptied by `release()` or `move()`, nodes whose
    reference count already reached zero, and propagating a root whose graph
    was torn down by a previous non-retained `propagate()`.
    """
