# autodiff/core/seeds.py

#-----------------------------------------------------------------------------
# We "plant" a seed (dy/dy = 1) at the scalar output and let gradients grow
# backwards through the graph.
#-----------------------------------------------------------------------------
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Union

from .var import Variable
from .tape import use_tape

Number = Union[int, float]


def value(x: Any) -> Any:
    """Return the numeric value of a Variable; pass through plain numbers unchanged."""
    return x.raw() if isinstance(x, Variable) else x


def _ensure_var(v: Any, *, name: str) -> Variable:
    """Wrap a plain value as Variable if needed; otherwise return the Variable itself."""
    return v if isinstance(v, Variable) else Variable(v, name=name)


def _as_output(y: Any) -> Variable:
    # a function that ignores its inputs still yields a (constant) output
    return y if isinstance(y, Variable) else Variable(y, name="y")


def clear(*vs: Variable) -> None:
    """Reset the gradient of every given handle."""
    for v in vs:
        v.clear()


def derivative(y: Variable, *args: Variable) -> tuple:
    """Functional form of `y.derivative(*args)`."""
    return y.derivative(*args)


# ----------------------------- single-input grad ----------------------------- #
def grad(f: Callable[[Variable], Variable], x0: Number) -> float:
    """
    Derivative of a scalar function y=f(x) at x0 (single input).
    Runs one reverse pass within a fresh, isolated tape.
    """
    with use_tape():
        x = _ensure_var(x0, name="x")
        y = _as_output(f(x))
        (dx,) = y.derivative(x)
        return dx


# ----------------------------- multi-input grads ----------------------------- #
def grads(f: Callable[[Dict[str, Variable]], Variable],
          inputs: Dict[str, Number]) -> Dict[str, float]:
    """
    Gradient of a scalar function y=f(vars) w.r.t. ALL inputs (dict form).
    Performs ONE reverse pass to obtain all ∂y/∂var simultaneously.

    Parameters
    ----------
    f       : function taking a dict {name: Variable} and returning a Variable
    inputs  : dict {name: numeric}

    Returns
    -------
    dict {name: numeric}  # gradients in the same key order as `inputs`
    """
    with use_tape():
        vars_ad: Dict[str, Variable] = {
            k: _ensure_var(v, name=k) for k, v in inputs.items()
        }
        y = _as_output(f(vars_ad))
        partials = y.derivative(*vars_ad.values())
        return dict(zip(inputs.keys(), partials))


def grads_list(f: Callable[[List[Variable]], Variable],
               x0_list: Iterable[Number]) -> List[float]:
    """
    Same as grads(), but the inputs are provided as a list and the result is a list
    of partials in the same order.

    Example
    -------
    f = lambda xs: xs[0]*xs[0] + 3*xs[1]
    grads_list(f, [2.0, 4.0]) -> [4.0, 3.0]
    """
    with use_tape():
        xs: List[Variable] = [
            _ensure_var(v, name=f"x{i}") for i, v in enumerate(x0_list)
        ]
        y = _as_output(f(xs))
        return list(y.derivative(*xs))
