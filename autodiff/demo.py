"""
Demos: least-squares line fitting and a tiny XOR network.

Run from the command line:
    python -m autodiff fit --iterations 50
    python -m autodiff xor --epochs 1000
"""

import argparse
import logging
from dataclasses import dataclass
from typing import List, Sequence, Tuple

import numpy as np

from .core.var import Variable
from .ops import exp, log
from .optim import Adam, GradientDescent

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Line fitting
# ---------------------------------------------------------------------------
def make_line_data(n: int = 100, k0: float = 10.0, b0: float = -5.0,
                   noise: float = 1.0, seed: int = 42) -> Tuple[np.ndarray, np.ndarray]:
    """n points on [-10, 10] from y = k0*x + b0 + N(0, noise^2)."""
    rng = np.random.default_rng(seed)
    xs = np.linspace(-10.0, 10.0, n)
    ys = k0 * xs + b0 + rng.normal(0.0, noise, size=n)
    return xs, ys


@dataclass
class FitResult:
    k: float
    b: float
    loss: float


def fit_line(xs: Sequence[float], ys: Sequence[float], iterations: int = 50,
             optimizer: str = "adam", learning_rate: float = 1.0) -> FitResult:
    """
    Fit y = k*x + b by minimizing the mean squared error, building the full
    loss graph and propagating it once per iteration.
    """
    k, b = Variable(0.0, name="k"), Variable(0.0, name="b")
    if optimizer == "adam":
        opt = Adam([k, b], learning_rate)
    elif optimizer == "gd":
        opt = GradientDescent([k, b], learning_rate)
    else:
        raise ValueError(f"unknown optimizer {optimizer!r} (expected 'adam' or 'gd')")

    n = len(xs)
    loss = float("nan")
    for it in range(iterations):
        total_loss = Variable(0.0)
        for x, y in zip(xs, ys):
            diff = (k * float(x) + b) - float(y)
            total_loss = total_loss + diff * diff
        total_loss = total_loss / n
        loss = float(total_loss)

        total_loss.propagate()
        opt.step()
        logger.debug("fit: iter %d loss=%.6f k=%.4f b=%.4f", it, loss, k.raw(), b.raw())

    return FitResult(k=float(k), b=float(b), loss=loss)


# ---------------------------------------------------------------------------
# XOR network
# ---------------------------------------------------------------------------
def sigmoid(x):
    return 1 / (1 + exp(-x))


class Layer:
    """Fully connected layer without bias, Xavier/Glorot uniform init."""

    def __init__(self, input_size: int, output_size: int, rng: np.random.Generator):
        limit = np.sqrt(6.0 / (input_size + output_size))
        self.weights: List[List[Variable]] = [
            [Variable(rng.uniform(-limit, limit)) for _ in range(input_size)]
            for _ in range(output_size)
        ]

    def forward(self, inputs: Sequence) -> List[Variable]:
        output = []
        for w_row in self.weights:
            total = Variable(0.0)
            for w, x in zip(w_row, inputs):
                total = total + w * x
            output.append(total)
        return output

    def parameters(self) -> List[Variable]:
        return [w for w_row in self.weights for w in w_row]


class XORModel:
    DATA = [((0, 0), 0), ((0, 1), 1), ((1, 0), 1), ((1, 1), 0)]

    def __init__(self, hidden_size: int = 8, seed: int = 0):
        rng = np.random.default_rng(seed)
        self.layer1 = Layer(2, hidden_size, rng)
        self.layer2 = Layer(hidden_size, 1, rng)

    def parameters(self) -> List[Variable]:
        return self.layer1.parameters() + self.layer2.parameters()

    def forward(self, x1, x2) -> Variable:
        hidden = [sigmoid(h) for h in self.layer1.forward([x1, x2])]
        return sigmoid(self.layer2.forward(hidden)[0])

    def fit(self, max_epoch: int, learning_rate: float = 0.1) -> float:
        """Per-sample Adam updates on binary cross-entropy; returns last epoch's mean loss."""
        optimizer = Adam(self.parameters(), learning_rate)
        epoch_loss = float("nan")
        for epoch in range(max_epoch):
            total = 0.0
            for (x1, x2), y in self.DATA:
                output = self.forward(x1, x2)
                loss = -(y * log(output) + (1 - y) * log(1 - output))
                total += float(loss)
                loss.propagate()
                optimizer.step()
            epoch_loss = total / len(self.DATA)
            if epoch % 100 == 0:
                logger.debug("xor: epoch %d loss=%.6f", epoch, epoch_loss)
        return epoch_loss

    def predict(self, x1, x2) -> float:
        return float(self.forward(x1, x2))


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------
def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="autodiff",
        description='Reverse-mode autodiff demos',
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    parser.add_argument('--verbose', action='store_true',
                        help='Log per-iteration progress')
    sub = parser.add_subparsers(dest='command', required=True)

    fit = sub.add_parser('fit', help='Fit y = k*x + b to noisy samples',
                         formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    fit.add_argument('--samples', type=int, default=100, help='Number of samples')
    fit.add_argument('--k0', type=float, default=10.0, help='True slope')
    fit.add_argument('--b0', type=float, default=-5.0, help='True intercept')
    fit.add_argument('--iterations', type=int, default=50, help='Optimizer steps')
    fit.add_argument('--optimizer', choices=['adam', 'gd'], default='adam')
    fit.add_argument('--lr', type=float, default=1.0, help='Learning rate')
    fit.add_argument('--seed', type=int, default=42, help='Noise seed')

    xor = sub.add_parser('xor', help='Train a 2-layer sigmoid network on XOR',
                         formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    xor.add_argument('--hidden', type=int, default=8, help='Hidden units')
    xor.add_argument('--epochs', type=int, default=1000, help='Training epochs')
    xor.add_argument('--lr', type=float, default=0.1, help='Learning rate')
    xor.add_argument('--seed', type=int, default=0, help='Weight init seed')
    return parser.parse_args(argv)


def main(argv=None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if args.command == 'fit':
        xs, ys = make_line_data(args.samples, args.k0, args.b0, seed=args.seed)
        result = fit_line(xs, ys, args.iterations, args.optimizer, args.lr)
        print(f"fit result: (k0, b0) = ({args.k0}, {args.b0}), "
              f"(k, b) = ({result.k:.4f}, {result.b:.4f}), loss = {result.loss:.4f}")
    else:
        model = XORModel(args.hidden, seed=args.seed)
        loss = model.fit(args.epochs, args.lr)
        print(f"final loss = {loss:.6f}")
        for x1 in (0, 1):
            for x2 in (0, 1):
                print(f"XOR({x1}, {x2}) = {model.predict(x1, x2):.4f}")
    return 0
