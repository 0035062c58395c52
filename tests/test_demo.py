import numpy as np
import pytest

from autodiff.demo import XORModel, main, make_line_data, parse_args, sigmoid
from autodiff import Variable


def test_make_line_data_shape_and_range():
    xs, ys = make_line_data(20, 1.0, 0.0, noise=0.0)
    assert xs.shape == (20,) and ys.shape == (20,)
    assert xs[0] == -10.0 and xs[-1] == 10.0
    np.testing.assert_allclose(ys, xs)


def test_sigmoid_gradient():
    x = Variable(0.0)
    y = sigmoid(x)
    y.propagate()
    assert y.raw() == pytest.approx(0.5)
    assert x.grad() == pytest.approx(0.25)


def test_xor_model_trains_and_predicts_probabilities(tape):
    model = XORModel(hidden_size=4, seed=1)
    assert len(model.parameters()) == 2 * 4 + 4 * 1
    before = model.fit(1)
    after = model.fit(20)
    assert np.isfinite(before) and np.isfinite(after)
    for x1 in (0, 1):
        for x2 in (0, 1):
            assert 0.0 < model.predict(x1, x2) < 1.0
    # only the parameter leaves outlive training
    assert len(tape) == len(model.parameters())


def test_cli_fit(capsys):
    assert main(["fit", "--iterations", "3", "--samples", "10"]) == 0
    out = capsys.readouterr().out
    assert "fit result" in out


def test_cli_xor(capsys):
    assert main(["xor", "--epochs", "2", "--hidden", "2"]) == 0
    out = capsys.readouterr().out
    assert "XOR(1, 1)" in out


def test_cli_requires_command():
    with pytest.raises(SystemExit):
        parse_args([])
