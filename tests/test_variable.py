import math

import numpy as np
import pytest

from autodiff import Variable, var, maximum, minimum, using_config


@pytest.mark.parametrize("value", [1, 2.5, np.float32(0.25), np.int64(3), -0.0])
def test_construct_from_numeric_literals(value):
    x = Variable(value)
    assert x.raw() == pytest.approx(float(value))
    assert isinstance(x.raw(), np.float64)
    assert x.grad() == 0.0


@pytest.mark.parametrize("value", ["1", [1.0, 2.0], None, np.array([1.0, 2.0]), 1 + 2j])
def test_construct_rejects_non_scalars(value):
    with pytest.raises(TypeError):
        Variable(value)


def test_var_alias_and_name():
    x = var(2.0, name="x")
    assert isinstance(x, Variable)
    assert x.name == "x"


def test_compare():
    nan_number = Variable(math.nan)
    a, b, c = Variable(1.0), Variable(1.0), Variable(2.0)
    assert a == b
    assert nan_number != a
    assert a < c
    assert a <= c
    assert c > a
    assert c >= a
    assert not (nan_number == nan_number)


def test_compare_uses_absolute_tolerance():
    a = Variable(1.0)
    assert a == 1.0 + 1e-12
    assert a != 1.0 + 1e-6
    assert not (a < 1.0 + 1e-12)
    assert a <= 1.0 - 1e-12
    assert a >= 1.0 + 1e-12
    with using_config(eq_tolerance=1e-3):
        assert a == 1.0005


def test_compare_with_unrelated_type():
    assert (Variable(1.0) == "1.0") is False


def test_handles_are_unhashable():
    with pytest.raises(TypeError):
        {Variable(1.0)}


def test_copy_arithmetic():
    a, b = Variable(1.0), Variable(2.0)
    c = a + b
    assert a != c
    assert a != b
    assert c.raw() == pytest.approx(3.0)
    c = c + a
    assert c.raw() == pytest.approx(4.0)


def test_float_format_and_repr():
    x = Variable(2.5, name="x")
    assert float(x) == 2.5
    assert f"{x:.2f}" == "2.50"
    assert "name='x'" in repr(x)
    x.release()
    assert repr(x) == "Variable(<released>)"


def test_val_setter_updates_leaf_in_place():
    x = Variable(1.0)
    node = x.node
    x.val = 5
    assert x.raw() == 5.0
    assert isinstance(x.raw(), np.float64)
    assert x.node is node


def test_reflected_operators_with_numbers():
    x = Variable(2.0)
    assert (2 - x).raw() == 0.0
    assert (3 / x).raw() == 1.5
    assert (5 * x).raw() == 10.0
    assert (1 + x).raw() == 3.0
    y = 2 ** x
    y.propagate()
    assert y.raw() == pytest.approx(4.0)
    assert x.grad() == pytest.approx(4.0 * math.log(2.0))


def test_unary_plus_and_minus():
    x = Variable(2.0)
    p = +x
    assert p.node is x.node
    n = -x
    n.propagate()
    assert n.raw() == -2.0
    assert x.grad() == -1.0


def test_caret_is_power():
    x = Variable(2.0)
    y = x ^ 3
    assert y.raw() == pytest.approx(8.0)
    y.propagate()
    assert x.grad() == pytest.approx(12.0)


def test_builtin_abs_builds_node():
    x = Variable(0.0)
    y = abs(x)
    y.propagate()
    assert y.raw() == 0.0
    assert x.grad() == 1.0  # sign(0) := 1

    x = Variable(-3.0)
    y = abs(x)
    y.propagate()
    assert x.grad() == -1.0


def test_maximum_and_minimum_return_copies():
    a, b = Variable(1.0), Variable(2.0)
    hi = maximum(a, b)
    lo = minimum(a, b)
    assert hi.node is b.node
    assert lo.node is a.node
    assert b.ref_count == 2


def test_maximum_minimum_ties_pick_second():
    a, b = Variable(1.0), Variable(1.0)
    assert maximum(a, b).node is b.node
    assert minimum(a, b).node is b.node


def test_gradient_flows_through_maximum():
    x, y = Variable(3.0), Variable(1.0)
    z = maximum(x, y) * 2
    z.propagate()
    assert x.grad() == 2.0
    assert y.grad() == 0.0
