import numpy as np
import pytest


@pytest.fixture
def rng():
    return np.random.default_rng(1234)


def _numerical_gradient(f, x, eps=1e-6):
    """Central finite differences of the scalar function f w.r.t. the array x (modified in place)."""
    grad = np.zeros_like(x)
    for idx in np.ndindex(x.shape):
        original = x[idx]
        x[idx] = original + eps
        f_plus = f()
        x[idx] = original - eps
        f_minus = f()
        x[idx] = original
        grad[idx] = (f_plus - f_minus) / (2 * eps)
    return grad


@pytest.fixture
def numerical_gradient():
    return _numerical_gradient
