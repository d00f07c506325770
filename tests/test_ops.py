import numpy as np

from dbnlayers import ops


def naive_valid(x, w):
    n, c, h, wd = x.shape
    k, _, f_h, f_w = w.shape
    out = np.zeros((n, k, h - f_h + 1, wd - f_w + 1))
    for b in range(n):
        for f in range(k):
            for i in range(out.shape[2]):
                for j in range(out.shape[3]):
                    out[b, f, i, j] = np.sum(x[b, :, i:i + f_h, j:j + f_w] * w[f])
    return out


def test_valid_matches_sliding_window_loops(rng):
    x = rng.standard_normal((2, 3, 7, 6))
    w = rng.standard_normal((4, 3, 3, 2))

    out = ops.conv_4d_valid_flipped(x, w)

    assert out.shape == (2, 4, 5, 5)
    np.testing.assert_allclose(out, naive_valid(x, w), atol=1e-12)


def test_full_is_adjoint_of_valid(rng):
    """<valid(x, w), e> == <x, full(e, w)> for every x, e."""
    x = rng.standard_normal((2, 3, 6, 5))
    w = rng.standard_normal((4, 3, 2, 3))
    e = rng.standard_normal((2, 4, 5, 3))

    lhs = np.sum(ops.conv_4d_valid_flipped(x, w) * e)
    d_x = ops.conv_4d_full_flipped(e, w)

    assert d_x.shape == x.shape
    np.testing.assert_allclose(lhs, np.sum(x * d_x), rtol=1e-10)


def test_filter_conv_is_weight_gradient(rng):
    """<valid(x, w), e> is linear in w with gradient filter(x, e)."""
    x = rng.standard_normal((3, 2, 5, 5))
    w = rng.standard_normal((2, 2, 3, 3))
    e = rng.standard_normal((3, 2, 3, 3))

    d_w = ops.conv_4d_valid_filter_flipped(x, e)

    assert d_w.shape == w.shape
    np.testing.assert_allclose(np.sum(ops.conv_4d_valid_flipped(x, w) * e), np.sum(w * d_w), rtol=1e-10)


def test_rep_and_rep_l():
    b = np.array([1., 2.])

    r = ops.rep(b, 2, 3)
    assert r.shape == (2, 2, 3)
    assert np.all(r[0] == 1.) and np.all(r[1] == 2.)

    rl = ops.rep_l(r, 4)
    assert rl.shape == (4, 2, 2, 3)
    rl[0, 0, 0, 0] = 10.
    assert rl[1, 0, 0, 0] == 1.


def test_pool_windows_drops_incomplete_windows():
    x = np.arange(1 * 1 * 5 * 4, dtype=float).reshape(1, 1, 5, 4)

    windows = ops.pool_windows(x, 2, 2)

    assert windows.shape == (1, 1, 2, 2, 4)
    np.testing.assert_array_equal(windows[0, 0, 0, 0], [0., 1., 4., 5.])
    np.testing.assert_array_equal(windows[0, 0, 1, 1], [10., 11., 14., 15.])
