import numpy as np
import pytest
from scipy.interpolate import CubicSpline

from pcspline.bc import NATURAL, HERMITE
from pcspline.moments import cubic_moments_1
from pcspline.splval import segment_1, splval, splval_1, splval_n

P4 = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
T11 = np.linspace(0, 1, 11)

# Reference values at t = 0, 0.1, ..., 1 for the knots P4
EXPECTED_NATURAL = np.array(
    [
        [1.0000, 0.0000],
        [0.1634, -0.1274],
        [-0.5328, -0.1792],
        [-0.9482, -0.0798],
        [-0.9600, 0.2320],
        [-0.6500, 0.6500],
        [-0.2320, 0.9600],
        [0.0798, 0.9482],
        [0.1792, 0.5328],
        [0.1274, -0.1634],
        [0.0000, -1.0000],
    ]
)
EXPECTED_HERMITE = np.array(
    [
        [1.0000, 0.0000],
        [0.6352, -0.2268],
        [-0.1424, -0.2784],
        [-0.8576, -0.1116],
        [-1.0731, 0.3003],
        [-0.7917, 0.7917],
        [-0.3003, 1.0731],
        [0.1116, 0.8576],
        [0.2784, 0.1424],
        [0.2268, -0.6352],
        [0.0000, -1.0000],
    ]
)

rng = np.random.default_rng(1)
K = 8
PR = rng.normal(size=(K, 3))
MR = cubic_moments_1(PR, NATURAL, NATURAL, np.zeros(3), np.zeros(3))


@pytest.mark.parametrize("n", [2, 3, 5, 9, 17])
def test_segment_monotonic(n):
    # n - 1 a power of 2, so segment edges k / (n-1) are exact
    for k in range(n - 1):
        for frac in (0.0, 0.25, 0.5, 0.999):
            i, s = segment_1((k + frac) / (n - 1), n)
            assert i == k
            assert s == pytest.approx(frac)


@pytest.mark.parametrize("n", [2, 4, 11])
def test_segment_end(n):
    assert segment_1(1.0, n) == (n - 2, 1.0)
    assert segment_1(0.0, n) == (0, 0.0)


@pytest.mark.parametrize(
    "left_bc,right_bc,lt,rt,expected",
    [
        (NATURAL, NATURAL, [0.0, 0.0], [0.0, 0.0], EXPECTED_NATURAL),
        (HERMITE, HERMITE, [0.0, -1.0], [-1.0, 0.0], EXPECTED_HERMITE),
    ],
)
def test_reference_tables(left_bc, right_bc, lt, rt, expected):
    M = cubic_moments_1(P4, left_bc, right_bc, np.array(lt), np.array(rt))
    y = splval_n(T11, P4, M)
    assert np.max(np.abs(y - expected)) < 1e-3


def test_knots_interpolated():
    t = np.arange(K) / (K - 1)
    assert np.allclose(splval_n(t, PR, MR), PR)
    assert np.array_equal(splval_1(0.0, PR, MR), PR[0])
    assert np.allclose(splval_1(1.0, PR, MR), PR[-1])


@pytest.mark.parametrize("d", [0, 1, 2, 3])
def test_derivatives_vs_scipy(d):
    # Sites strictly inside segments, where all derivatives are continuous
    t = (np.arange(K - 1) + rng.uniform(0.05, 0.95, K - 1)) / (K - 1)
    cs = CubicSpline(np.arange(K), PR, bc_type="natural")
    y_scipy = cs(t * (K - 1), d) * (K - 1) ** d
    assert np.allclose(splval_n(t, PR, MR, d), y_scipy)


def test_high_derivative_is_zero():
    assert np.array_equal(splval_1(0.3, PR, MR, 4), np.zeros(3))


@pytest.mark.parametrize("t", [-0.01, 1.01, np.nan])
def test_out_of_range(t):
    assert np.all(np.isnan(splval_1(t, PR, MR)))


def test_batch_order():
    # Unsorted sites, with repeats
    t = np.array([0.9, 0.1, 0.5, 0.1, 1.0, 0.0])
    y = splval_n(t, PR, MR)
    for k in range(t.size):
        assert np.array_equal(y[k], splval_1(t[k], PR, MR))


def test_float32():
    P = P4.astype(np.float32)
    M = cubic_moments_1(P, NATURAL, NATURAL, np.zeros(2, np.float32), np.zeros(2, np.float32))
    assert M.dtype == np.float32
    y = splval_n(T11, P, M)
    assert y.dtype == np.float32
    assert np.max(np.abs(y - EXPECTED_NATURAL)) < 1e-3


def test_splval_universal():
    y = splval(T11, PR, MR)
    assert y.shape == (11, 3)
    assert np.allclose(y, splval_n(T11, PR, MR))

    # Many splines, each evaluated at its own site
    P = rng.normal(size=(5, K, 2))
    M = np.stack([cubic_moments_1(p, NATURAL, NATURAL, np.zeros(2), np.zeros(2)) for p in P])
    t = rng.uniform(0, 1, 5)
    y = splval(t, P, M, 1)
    for i in range(5):
        assert np.allclose(y[i], splval_1(t[i], P[i], M[i], 1))

    with pytest.raises(ValueError):
        splval(0.5, PR, MR, -1)
