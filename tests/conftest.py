"""Shared fixtures: the free variable and a finite-difference derivative check."""

import numpy as np
import pytest

from symbolic_diff import Expression, VariableNode, derivative

EPS = 1e-8
STEP = 0.08


@pytest.fixture
def z():
    return VariableNode('z')


@pytest.fixture
def check_derivative():
    """Return a callable comparing the symbolic derivative against a forward difference.

    The returned function has signature ``check(fn, start=0.0, stop=5.0, atol=1e-5)``,
    builds ``f`` from the lambda ``fn``, and asserts on every grid point in
    ``[start, stop)`` that ``f'(x)`` matches ``(f(x + eps) - f(x)) / eps``.
    Points where both sides are NaN count as equal. It returns the derivative.
    """
    def _check(fn, start: float = 0.0, stop: float = 5.0, atol: float = 1e-5) -> Expression:
        f = Expression.from_function(fn, 'z')
        df = derivative(f)

        x = np.round(np.arange(start, stop, STEP), 5)
        with np.errstate(all='ignore'):
            numeric = (f.evaluate(x + EPS) - f.evaluate(x)) / EPS
        np.testing.assert_allclose(
            df.evaluate(x), numeric, rtol=0, atol=atol, equal_nan=True,
            err_msg=f"Error on function {f}")
        return df
    return _check
