import numpy as np
import pytest

from pcspline.tdma import is_cyclic_1, solve_1, tdma, tdma_1, tdma_cyclic_1

rng = np.random.default_rng(42)


def make_system(n, m, a0=0.0, cn=0.0):
    # Diagonally dominant: |b| >= 4 > |a| + |c|
    a = rng.uniform(-1, 1, n)
    b = 4.0 + rng.uniform(0, 1, n)
    c = rng.uniform(-1, 1, n)
    a[0] = a0
    c[-1] = cn
    d = rng.normal(size=(n, m))
    return a, b, c, d


def dense(a, b, c):
    n = b.size
    A = np.diag(b) + np.diag(a[1:], -1) + np.diag(c[:-1], 1)
    A[0, n - 1] += a[0]
    A[n - 1, 0] += c[n - 1]
    return A


@pytest.mark.parametrize("n,m", [(2, 1), (3, 2), (10, 3), (50, 1)])
def test_tdma(n, m):
    a, b, c, d = make_system(n, m)
    x_true = np.linalg.solve(dense(a, b, c), d)

    x = d.copy()
    tdma_1(a.copy(), b.copy(), c.copy(), x)

    assert np.allclose(x, x_true)


@pytest.mark.parametrize("n", [2, 3, 4, 10, 50])
@pytest.mark.parametrize("a0,cn", [(1.0, 0.0), (0.0, 1.0), (1.0, 1.0), (-0.5, 0.3)])
def test_tdma_cyclic(n, a0, cn):
    a, b, c, d = make_system(n, 2, a0, cn)
    x_true = np.linalg.solve(dense(a, b, c), d)

    x = d.copy()
    tdma_cyclic_1(a.copy(), b.copy(), c.copy(), x)

    assert np.allclose(x, x_true)


def test_is_cyclic():
    a, b, c, d = make_system(5, 1)
    assert not is_cyclic_1(a, c)
    a[0] = 1.0
    assert is_cyclic_1(a, c)
    a[0] = 0.0
    c[-1] = 1.0
    assert is_cyclic_1(a, c)


@pytest.mark.parametrize("a0,cn,cyclic", [(0.0, 0.0, False), (1.0, 1.0, True)])
def test_solve(a0, cn, cyclic):
    a, b, c, d = make_system(8, 3, a0, cn)
    x_true = np.linalg.solve(dense(a, b, c), d)

    x = d.copy()
    assert solve_1(a.copy(), b.copy(), c.copy(), x) == cyclic
    assert np.allclose(x, x_true)


def test_zero_rhs():
    a, b, c, d = make_system(6, 2, 1.0, 1.0)
    x = np.zeros_like(d)
    solve_1(a, b, c, x)
    assert np.array_equal(x, np.zeros_like(d))


def test_tdma_universal():
    # Several systems stacked along a leading dimension, some cyclic
    n, m, k = 7, 2, 4
    systems = [make_system(n, m, *corners) for corners in [(0, 0), (1, 0), (0, 1), (1, 1)]]
    a, b, c, d = (np.stack(x) for x in zip(*systems))
    a0, b0, c0, d0 = (x.copy() for x in (a, b, c, d))

    x = tdma(a, b, c, d)

    assert x.shape == (k, n, m)
    for i in range(k):
        assert np.allclose(x[i], np.linalg.solve(dense(a[i], b[i], c[i]), d[i]))

    # Inputs untouched
    for y, y0 in zip((a, b, c, d), (a0, b0, c0, d0)):
        assert np.array_equal(y, y0)


def test_tdma_universal_single_column():
    a, b, c, d = make_system(6, 1)
    x = tdma(a, b, c, d[:, 0])
    assert x.shape == (6,)
    assert np.allclose(x, np.linalg.solve(dense(a, b, c), d[:, 0]))
