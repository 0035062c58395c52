import math

import pytest

from autodiff import Variable, clear, derivative, grad, grads, grads_list, value, sin, log


def test_value_passes_numbers_through():
    assert value(Variable(2.5)) == 2.5
    assert value(3) == 3


def test_grad_single_input():
    assert grad(lambda x: x * x * x, 2.0) == pytest.approx(12.0)
    assert grad(sin, 0.0) == pytest.approx(1.0)


def test_grad_of_constant_function_is_zero():
    assert grad(lambda x: 7.0, 1.0) == 0.0


def test_grad_of_identity_function():
    assert grad(lambda x: x, 4.0) == 1.0


def test_grads_dict_form():
    out = grads(lambda v: v["a"] * v["b"] + log(v["a"]), {"a": 2.0, "b": 5.0})
    assert list(out) == ["a", "b"]
    assert out["a"] == pytest.approx(5.0 + 0.5)
    assert out["b"] == pytest.approx(2.0)


def test_grads_list_form():
    f = lambda xs: xs[0] * xs[0] + 3 * xs[1]
    assert grads_list(f, [2.0, 4.0]) == pytest.approx([4.0, 3.0])


def test_helpers_run_on_isolated_tape(tape):
    x = Variable(1.0)
    grads_list(lambda xs: xs[0] * xs[1], [2.0, 3.0])
    assert len(tape) == 1
    assert x.ref_count == 1


def test_derivative_functional_form():
    x, y = Variable(math.pi / 2), Variable(2.0)
    z = sin(x) * y
    dx, dy = derivative(z, x, y)
    assert dx == pytest.approx(0.0, abs=1e-12)
    assert dy == pytest.approx(1.0)


def test_clear_many():
    x, y = Variable(1.0), Variable(2.0)
    z = x * y
    z.propagate()
    clear(x, y)
    assert x.grad() == 0.0
    assert y.grad() == 0.0
