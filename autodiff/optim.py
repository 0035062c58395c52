"""
Optimizers for scalar parameters.

Optimizers only use the public handle contract: read `p.grad()`, write the new
value through `p.val`, then `p.clear()` so the next propagation starts from a
zero gradient. They make no assumption about how the gradients were produced.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List

import numpy as np

from .core.var import Variable

logger = logging.getLogger(__name__)


class Optimizer:
    """
    Base class holding the distinct parameter handles to update.

    Parameters
    ----------
    params : Iterable[Variable]
        Handles to optimize. Duplicates (the same handle object) are kept once,
        in first-seen order.

    Raises
    ------
    ValueError
        If no parameters are given.
    TypeError
        If an item is not a `Variable`.
    """

    def __init__(self, params: Iterable[Variable]) -> None:
        seen = set()
        self.params: List[Variable] = []
        for p in params:
            if not isinstance(p, Variable):
                raise TypeError(f"optimizer parameters must be Variables, got {type(p)}")
            if id(p) in seen:
                continue
            seen.add(id(p))
            self.params.append(p)
        if not self.params:
            raise ValueError("optimizer got an empty parameter list")

    def zero_grad(self) -> None:
        for p in self.params:
            p.clear()

    def step(self) -> None:
        raise NotImplementedError


class GradientDescent(Optimizer):
    """
    Plain gradient descent: ``p <- p - learning_rate * grad``.
    """

    def __init__(self, params: Iterable[Variable], learning_rate: float) -> None:
        super().__init__(params)
        self.learning_rate = float(learning_rate)
        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")

    def step(self) -> None:
        for p in self.params:
            p.val = p.raw() - self.learning_rate * p.grad()
            p.clear()


class Adam(Optimizer):
    """
    Adam optimizer (Kingma & Ba, 2015).

    Update rule
    -----------
    For each parameter ``p`` with gradient ``g`` at step ``t``:

    - ``m <- beta1 * m + (1 - beta1) * g``
    - ``v <- beta2 * v + (1 - beta2) * g^2``
    - ``m_hat = m / (1 - beta1^t)``, ``v_hat = v / (1 - beta2^t)``
    - ``p <- p - learning_rate * m_hat / (sqrt(v_hat) + epsilon)``

    Parameters
    ----------
    params : Iterable[Variable]
    learning_rate : float
        Must be > 0.
    beta1, beta2 : float
        Moment decay rates, each in [0, 1). Defaults 0.9 and 0.999.
    epsilon : float
        Numerical stability term, must be > 0. Defaults to 1e-8.
    """

    def __init__(
        self,
        params: Iterable[Variable],
        learning_rate: float,
        beta1: float = 0.9,
        beta2: float = 0.999,
        epsilon: float = 1e-8,
    ) -> None:
        super().__init__(params)
        self.learning_rate = float(learning_rate)
        self.beta1 = float(beta1)
        self.beta2 = float(beta2)
        self.epsilon = float(epsilon)

        if self.learning_rate <= 0.0:
            raise ValueError(f"learning_rate must be > 0, got {self.learning_rate}")
        if not (0.0 <= self.beta1 < 1.0):
            raise ValueError(f"beta1 must be in [0, 1), got {self.beta1}")
        if not (0.0 <= self.beta2 < 1.0):
            raise ValueError(f"beta2 must be in [0, 1), got {self.beta2}")
        if self.epsilon <= 0.0:
            raise ValueError(f"epsilon must be > 0, got {self.epsilon}")

        self.t = 0
        # keyed by id(handle): handles compare by value and are unhashable
        self._m: Dict[int, float] = {id(p): 0.0 for p in self.params}
        self._v: Dict[int, float] = {id(p): 0.0 for p in self.params}

    def step(self) -> None:
        self.t += 1
        bc1 = 1.0 - self.beta1 ** self.t
        bc2 = 1.0 - self.beta2 ** self.t
        for p in self.params:
            g = p.grad()
            key = id(p)
            m = self.beta1 * self._m[key] + (1.0 - self.beta1) * g
            v = self.beta2 * self._v[key] + (1.0 - self.beta2) * g * g
            self._m[key], self._v[key] = m, v
            m_hat = m / bc1
            v_hat = v / bc2
            p.val = p.raw() - self.learning_rate * m_hat / (np.sqrt(v_hat) + self.epsilon)
            p.clear()
        logger.debug("adam: step %d over %d parameter(s)", self.t, len(self.params))
