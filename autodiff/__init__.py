# autodiff/__init__.py
# Reverse-mode automatic differentiation over scalars

from .core.var import Variable
from .core.tape import Tape, global_tape, use_tape
from .core.errors import AutodiffError, OperationMismatch, UseAfterRelease
from .core.config import Config, configure, get_config, using_config
from .core.engine import (
    propagate,
    teardown,
    zero_adjoints,
    live_nodes,
)
from .core.seeds import grad, grads, grads_list, value, derivative, clear

from .ops import (
    add, sub, mul, div, neg, pow,
    exp, log, sqrt,
    sin, cos, tan,
    asin, acos, atan,
    sinh, cosh, tanh,
    abs, maximum, minimum,
)

# Optimizers
from . import optim
from .optim import GradientDescent, Adam

var = Variable

__all__ = [
    # Core
    'Variable',
    'var',
    'Tape',
    'global_tape',
    'use_tape',
    'AutodiffError',
    'OperationMismatch',
    'UseAfterRelease',
    'Config',
    'configure',
    'get_config',
    'using_config',
    # Engine
    'propagate',
    'teardown',
    'zero_adjoints',
    'live_nodes',
    'grad',
    'grads',
    'grads_list',
    'value',
    'derivative',
    'clear',
    # Functions
    'add', 'sub', 'mul', 'div', 'neg', 'pow',
    'exp', 'log', 'sqrt',
    'sin', 'cos', 'tan',
    'asin', 'acos', 'atan',
    'sinh', 'cosh', 'tanh',
    'abs', 'maximum', 'minimum',
    # Optimizers
    'optim',
    'GradientDescent',
    'Adam',
]
