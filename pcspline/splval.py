"""
Evaluate parametric cubic splines, given their knots and moments.

The parameter `t` runs over [0, 1], with knot `i` of `n` at `t = i / (n-1)`.
"""

import numpy as np
import numba as nb


@nb.njit
def segment_1(t, n):
    """
    Locate `t` among `n` uniformly spaced knots.

    Returns
    -------
    i : int
        Index of the segment, `0 <= i <= n - 2`, such that
        `i <= t * (n - 1) < i + 1`, except at `t == 1` where `i = n - 2`.

    s : float
        Position of `t` within segment `i`, `0 <= s <= 1`.
    """
    x = t * (n - 1)
    i = int(np.floor(x))
    s = x - i
    if i >= n - 1:
        # t == 1: reuse the last segment rather than run past the end
        i = n - 2
        s = 1.0
    return i, s


@nb.njit
def _splval_1(t, P, M, d, y):
    """Write the value (or `d`'th derivative) at `t` into `y`."""
    n, D = P.shape

    if np.isnan(t) or t < 0.0 or t > 1.0:
        for j in range(D):
            y[j] = np.nan
        return

    i, s = segment_1(t, n)

    if d == 0:
        s0 = s ** 3
        s1 = (1.0 - s) ** 3
        for j in range(D):
            c = (P[i + 1, j] - P[i, j]) - (M[i + 1, j] - M[i, j]) / 6.0
            d0 = P[i, j] - M[i, j] / 6.0
            y[j] = (s1 * M[i, j] + s0 * M[i + 1, j]) / 6.0 + c * s + d0
        return

    # Derivatives w.r.t. s, scaled to derivatives w.r.t. t
    h = float(n - 1) ** d
    if d == 1:
        s0 = s ** 2
        s1 = (1.0 - s) ** 2
        for j in range(D):
            c = (P[i + 1, j] - P[i, j]) - (M[i + 1, j] - M[i, j]) / 6.0
            y[j] = h * ((s0 * M[i + 1, j] - s1 * M[i, j]) / 2.0 + c)
    elif d == 2:
        for j in range(D):
            y[j] = h * ((1.0 - s) * M[i, j] + s * M[i + 1, j])
    elif d == 3:
        for j in range(D):
            y[j] = h * (M[i + 1, j] - M[i, j])
    else:
        for j in range(D):
            y[j] = 0.0


@nb.njit
def splval_1(t, P, M, d=0):
    """
    Evaluate a single parametric cubic spline at a single site.

    Parameters
    ----------
    t : float
        Evaluation site, in [0, 1].

    P : ndarray, 2d
        Knots, of shape `(n, D)`.

    M : ndarray, 2d
        Moments, as from `cubic_moments_1`, same shape as `P`.

    d : int, Default 0
        Number of derivatives (with respect to `t`) to take.
        If 0, simply evaluate the spline.

    Returns
    -------
    y : ndarray, 1d
        The point on the spline (or its `d`'th derivative) at `t`, of length
        `D`.  All NaN if `t` is NaN or outside [0, 1].
    """
    y = np.empty(P.shape[1], dtype=P.dtype)
    _splval_1(t, P, M, d, y)
    return y


@nb.njit
def splval_n(t, P, M, d=0):
    """
    Evaluate a single parametric cubic spline at many sites.

    As `splval_1`, but `t` is a 1D array, and the output `y` is a 2D array of
    shape `(len(t), D)` whose row `k` is the evaluation at `t[k]`.
    The sites need not be sorted nor distinct.
    """
    y = np.empty((t.size, P.shape[1]), dtype=P.dtype)
    for k in range(t.size):
        _splval_1(t[k], P, M, d, y[k])
    return y


@nb.guvectorize(
    [(nb.f8, nb.f8[:, :], nb.f8[:, :], nb.i8, nb.f8[:])],
    "(),(n,m),(n,m),()->(m)",
)
def _splval(t, P, M, d, y):
    _splval_1(t, P, M, d, y)


def splval(t, P, M, d=0):
    """
    Evaluate parametric cubic splines

    Parameters
    ----------
    t : float or ndarray

        Evaluation sites, in [0, 1].  Must be broadcastable to the shape of
        `P` less its final two dimensions.

    P : ndarray

        Knots.  The last two dimensions are `(n, D)`; any leading dimensions
        index independent splines.

    M : ndarray

        Moments, as from `cubic_moments`.  Same shape as `P`.

    d : int, Default 0

        Number of derivatives (with respect to `t`) to take.

    Returns
    -------
    y : ndarray

        The point on each spline (or its `d`'th derivative) at `t`, with
        final dimension of length `D`.

    Notes
    -----
    With a single spline, `P` of shape `(n, D)`, and a 1D `t`, the output has
    shape `(len(t), D)`, as for `splval_n`.
    """
    if d < 0:
        raise ValueError(f"Expected a non-negative derivative order; got {d}")
    return _splval(t, P, M, d)
