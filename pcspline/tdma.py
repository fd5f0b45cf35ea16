"""
Solvers for tridiagonal and cyclic tridiagonal linear systems.

A system is described by three 1D arrays `a`, `b`, `c` of length `n` giving
the sub-, main- and super-diagonal, and a 2D right-hand side `d` of shape
`(n, m)`; the `m` columns are solved together with the same elimination.
Row `i` reads

    a[i] * x[i-1] + b[i] * x[i] + c[i] * x[i+1] = d[i]

so `a[0]` and `c[n-1]` are the corner entries coupling the first and last
unknowns.  When either is nonzero the system is cyclic, and is solved with a
Sherman-Morrison correction on top of two Thomas passes.

No pivoting is done.  Diagonally dominant systems, such as those arising from
cubic spline moments, never hit a zero pivot.
"""

import numpy as np
import numba as nb


@nb.njit
def is_cyclic_1(a, c):
    """True when the corner entries `a[0]` or `c[-1]` are nonzero."""
    return a[0] != 0 or c[c.size - 1] != 0


@nb.njit
def tdma_1(a, b, c, d):
    """
    Solve a tridiagonal system with the Thomas algorithm, in place.

    Parameters
    ----------
    a, b, c : ndarray, 1d
        Sub-, main- and super-diagonal, each of length `n`.
        `a[0]` and `c[n-1]` are ignored.
        `b` is overwritten by the eliminated diagonal.

    d : ndarray, 2d
        Right-hand side of shape `(n, m)`, overwritten by the solution.
    """
    n, m = d.shape

    # Forward elimination
    for i in range(1, n):
        f = a[i] / b[i - 1]
        b[i] = b[i] - f * c[i - 1]
        for j in range(m):
            d[i, j] = d[i, j] - f * d[i - 1, j]

    # Backward substitution
    for j in range(m):
        d[n - 1, j] = d[n - 1, j] / b[n - 1]
    for i in range(n - 2, -1, -1):
        for j in range(m):
            d[i, j] = (d[i, j] - c[i] * d[i + 1, j]) / b[i]


@nb.njit
def tdma_cyclic_1(a, b, c, d):
    """
    Solve a cyclic tridiagonal system, in place.

    Inputs are as for `tdma_1`, but the corner entries `a[0]` and `c[n-1]`
    are honoured.  All of `a`, `b`, `c` are overwritten.

    Notes
    -----
    The matrix is split into a tridiagonal part plus a rank-one term
    `u v'` with `u = [-b[0], 0, ..., 0, c[n-1]]` and
    `v = [1, 0, ..., 0, -a[0]/b[0]]`.  The tridiagonal part is solved for `d`
    and for `u` in one pass, then the Sherman-Morrison formula recovers the
    solution of the full system.
    """
    n, m = d.shape

    vn = a[0] / b[0]

    # Solve for d and the correction vector q together, q in the last column
    y = np.zeros((n, m + 1), dtype=d.dtype)
    y[:, :m] = d
    y[0, m] = -b[0]
    y[n - 1, m] = c[n - 1]

    # Remove the rank-one term, leaving a strictly tridiagonal matrix
    b[0] = 2 * b[0]
    b[n - 1] = b[n - 1] + c[n - 1] * vn
    a[0] = 0
    c[n - 1] = 0

    tdma_1(a, b, c, y)

    vq = y[0, m] - y[n - 1, m] * vn
    for j in range(m):
        vy = y[0, j] - y[n - 1, j] * vn
        k = vy / (1 + vq)
        for i in range(n):
            d[i, j] = y[i, j] - k * y[i, m]


@nb.njit
def solve_1(a, b, c, d):
    """
    Solve a tridiagonal system, cyclic or not, in place.

    Dispatches to `tdma_cyclic_1` when the corner entries are nonzero, and to
    `tdma_1` otherwise.  Returns True if the cyclic solver was used.
    """
    if is_cyclic_1(a, c):
        tdma_cyclic_1(a, b, c, d)
        return True
    tdma_1(a, b, c, d)
    return False


@nb.guvectorize(
    [(nb.f8[:], nb.f8[:], nb.f8[:], nb.f8[:, :], nb.f8[:, :])],
    "(n),(n),(n),(n,m)->(n,m)",
)
def _tdma(a, b, c, d, x):
    x[:, :] = d
    solve_1(a.copy(), b.copy(), c.copy(), x)


def tdma(a, b, c, d):
    """
    Solve many (possibly cyclic) tridiagonal systems.

    Parameters
    ----------
    a, b, c : ndarray
        Sub-, main- and super-diagonals, with the last dimension of length `n`
        and leading dimensions broadcastable to those of `d`.

    d : ndarray
        Right-hand sides.  A 1D array of length `n` is a single column.
        Otherwise, the last two dimensions are `(n, m)`.

    Returns
    -------
    x : ndarray
        Solution, same shape as `d`.  The inputs are not modified.
    """
    d = np.asarray(d, dtype=np.float64)
    if d.ndim == 1:
        return _tdma(a, b, c, d[:, None])[..., 0]
    return _tdma(a, b, c, d)
