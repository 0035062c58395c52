# autodiff/core/config.py
"""
Engine-wide settings.

The active configuration is a frozen `Config` held at module level, in the
same spirit as the module-level `global_tape`: read it with `get_config()`,
replace it with `configure(...)`, or swap it temporarily with
`using_config(...)`.
"""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, fields, replace
from typing import Any, Iterator

import numpy as np


@dataclass(frozen=True)
class Config:
    """
    Attributes
    ----------
    dtype : type
        NumPy scalar type used for node values and gradients.
    eq_tolerance : float
        Absolute tolerance used by `Variable` equality and ordering.
    retain_graph : bool
        Default for `Variable.propagate(retain=None)`. False tears the graph
        down after each propagation.
    """
    dtype: type = np.float64
    eq_tolerance: float = 1e-10
    retain_graph: bool = False


_active = Config()


def get_config() -> Config:
    return _active


def configure(**overrides: Any) -> Config:
    """Replace the active configuration, keeping fields not mentioned."""
    global _active
    known = {f.name for f in fields(Config)}
    unknown = set(overrides) - known
    if unknown:
        raise TypeError(f"unknown config option(s): {sorted(unknown)}")
    _active = replace(_active, **overrides)
    return _active


@contextmanager
def using_config(**overrides: Any) -> Iterator[Config]:
    """
    Temporarily override settings:
        with using_config(retain_graph=True):
            y.propagate()
    """
    global _active
    prev = _active
    try:
        yield configure(**overrides)
    finally:
        _active = prev
