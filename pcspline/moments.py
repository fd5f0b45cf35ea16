"""
Moments (second derivatives at the knots) of a parametric cubic spline.

The knots `P[0], ..., P[n-1]` are spaced one unit apart in the segment
parameter, so the moments `M` of the interpolating cubic spline solve the
tridiagonal system

    M[i-1] + 4 M[i] + M[i+1] = 6 (P[i+1] - 2 P[i] + P[i-1])

at interior knots, closed by one equation at each end chosen by the boundary
condition there.  Each of the `D` coordinates is an independent right-hand
side of the same system.
"""

import numpy as np
import numba as nb

from .bc import NATURAL, HERMITE, PERIODIC, NOT_A_KNOT, parse_bc
from .lib import as_tangent
from .tdma import solve_1


@nb.njit
def encode_1(P, left_bc, right_bc, left_tangent, right_tangent):
    """
    Build the banded system whose solution is the spline moments.

    Parameters
    ----------
    P : ndarray, 2d
        Knots, of shape `(n, D)` with `n >= 2`.

    left_bc, right_bc : int
        Boundary condition codes, from `pcspline.bc`, at the first and last
        knot.

    left_tangent, right_tangent : ndarray, 1d
        Length `D` tangents, only used for Hermite boundary conditions.

    Returns
    -------
    a, b, c : ndarray, 1d
        Sub-, main- and super-diagonal, each of length `n`.

    d : ndarray, 2d
        Right-hand side, of shape `(n, D)`.

    Notes
    -----
    A periodic end makes `a[0]` or `c[n-1]` nonzero, which is how the
    solver recognises a cyclic system.
    """
    n, D = P.shape

    a = np.empty(n, dtype=P.dtype)
    b = np.empty(n, dtype=P.dtype)
    c = np.empty(n, dtype=P.dtype)
    d = np.empty((n, D), dtype=P.dtype)

    # Interior knots
    for i in range(1, n - 1):
        a[i] = 1.0
        b[i] = 4.0
        c[i] = 1.0
        for j in range(D):
            d[i, j] = 6.0 * ((P[i + 1, j] - P[i, j]) - (P[i, j] - P[i - 1, j]))

    # First knot
    if left_bc == HERMITE:
        a[0] = 0.0
        b[0] = 2.0
        c[0] = 1.0
        for j in range(D):
            d[0, j] = 6.0 * ((P[1, j] - P[0, j]) - left_tangent[j])
    elif left_bc == PERIODIC:
        a[0] = 1.0
        b[0] = 4.0
        c[0] = 1.0
        for j in range(D):
            d[0, j] = 6.0 * ((P[1, j] - P[0, j]) - (P[0, j] - P[n - 1, j]))
    elif left_bc == NOT_A_KNOT:
        raise NotImplementedError("not-a-knot boundary condition")
    else:  # NATURAL
        a[0] = 0.0
        b[0] = 1.0
        c[0] = 0.0
        for j in range(D):
            d[0, j] = 0.0

    # Last knot
    k = n - 1
    if right_bc == HERMITE:
        a[k] = 1.0
        b[k] = 2.0
        c[k] = 0.0
        for j in range(D):
            d[k, j] = 6.0 * (right_tangent[j] - (P[k, j] - P[k - 1, j]))
    elif right_bc == PERIODIC:
        a[k] = 1.0
        b[k] = 4.0
        c[k] = 1.0
        for j in range(D):
            d[k, j] = 6.0 * ((P[0, j] - P[k, j]) - (P[k, j] - P[k - 1, j]))
    elif right_bc == NOT_A_KNOT:
        raise NotImplementedError("not-a-knot boundary condition")
    else:  # NATURAL
        a[k] = 0.0
        b[k] = 1.0
        c[k] = 0.0
        for j in range(D):
            d[k, j] = 0.0

    return a, b, c, d


@nb.njit
def is_closed_1(P):
    """True when the last knot repeats the first, exactly."""
    n, D = P.shape
    for j in range(D):
        if P[0, j] != P[n - 1, j]:
            return False
    return True


@nb.njit
def cubic_moments_1(P, left_bc, right_bc, left_tangent, right_tangent):
    """
    Moments of a single parametric cubic spline.

    Parameters
    ----------
    P, left_bc, right_bc, left_tangent, right_tangent :
        As for `encode_1`.

    Returns
    -------
    M : ndarray, 2d
        Second derivatives, with respect to the segment parameter, of the
        spline at each knot.  Same shape and dtype as `P`.

    Notes
    -----
    If both ends are periodic and the knots are closed (the last knot equals
    the first), the last knot is taken as the repeat of the first: the cyclic
    system is solved on the distinct knots `P[:-1]`, and the moment of the
    last knot is that of the first.  The resulting curve is then twice
    continuously differentiable across `t = 0` and `t = 1`.
    """
    n, D = P.shape

    closed = left_bc == PERIODIC and right_bc == PERIODIC and n >= 3 and is_closed_1(P)
    k = n - 1 if closed else n

    a, b, c, d = encode_1(P[:k], left_bc, right_bc, left_tangent, right_tangent)
    solve_1(a, b, c, d)
    if not closed:
        return d

    M = np.empty((n, D), dtype=P.dtype)
    M[:k] = d
    M[k] = d[0]
    return M


@nb.guvectorize(
    [(nb.f8[:, :], nb.i8, nb.i8, nb.f8[:], nb.f8[:], nb.f8[:, :])],
    "(n,m),(),(),(m),(m)->(n,m)",
)
def _cubic_moments(P, left_bc, right_bc, left_tangent, right_tangent, M):
    M[:, :] = cubic_moments_1(P, left_bc, right_bc, left_tangent, right_tangent)


def cubic_moments(P, left_bc="natural", right_bc="natural", left_tangent=None, right_tangent=None):
    """
    Moments of one or many parametric cubic splines

    Parameters
    ----------
    P : ndarray

        Knots.  The last two dimensions are `(n, D)`: `n >= 2` knots, each a
        point in `D` dimensions.  Any leading dimensions index independent
        splines.

    left_bc, right_bc : BoundaryCondition or str or int, Default "natural"

        Boundary condition at the first and last knot, shared by all splines.

    left_tangent, right_tangent : array-like, optional

        Tangents for Hermite boundary conditions, broadcastable to
        `P.shape[:-2] + (D,)`.  Default is the zero vector.

    Returns
    -------
    M : ndarray

        Moments, same shape as `P`.

    Examples
    --------
    >>> P = np.array([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
    >>> M = cubic_moments(P, "hermite", "hermite", [0.0, -1.0], [-1.0, 0.0])
    >>> y = splval(0.25, P, M)
    """
    P = np.asarray(P, dtype=np.float64)
    if P.ndim < 2 or P.shape[-2] < 2 or P.shape[-1] < 1:
        raise ValueError(
            f"Expected `P` with at least 2 knots and 1 dimension; got shape {P.shape}"
        )
    D = P.shape[-1]
    left_bc, right_bc = parse_bc(left_bc), parse_bc(right_bc)
    left_tangent = as_tangent(left_tangent, D, np.float64, broadcast=True)
    right_tangent = as_tangent(right_tangent, D, np.float64, broadcast=True)

    return _cubic_moments(P, int(left_bc), int(right_bc), left_tangent, right_tangent)
