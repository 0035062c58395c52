import pytest

from autodiff import Variable, use_tape

EPS = 1e-6


@pytest.fixture(autouse=True)
def tape():
    """Every test builds its graph on a fresh tape."""
    with use_tape() as t:
        yield t


def numeric_partials(f, args, eps=EPS):
    """Central-difference estimate of each partial of f at args."""
    out = []
    for i in range(len(args)):
        up = [a + eps if j == i else a for j, a in enumerate(args)]
        dn = [a - eps if j == i else a for j, a in enumerate(args)]
        f_up = float(f(*[Variable(a) for a in up]))
        f_dn = float(f(*[Variable(a) for a in dn]))
        out.append((f_up - f_dn) / (2 * eps))
    return out


def analytic_partials(f, args):
    xs = [Variable(a) for a in args]
    y = f(*xs)
    return list(y.derivative(*xs))


def check_partials(f, *args, tol=1e-4):
    analytic = analytic_partials(f, args)
    numeric = numeric_partials(f, args)
    for i, (a, n) in enumerate(zip(analytic, numeric)):
        assert a == pytest.approx(n, abs=tol, rel=1e-6), (
            f"d/darg{i}: autodiff {a} numeric {n} at args={args}"
        )
