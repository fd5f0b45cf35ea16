"""Parametric cubic spline through an ordered sequence of knots"""

import numpy as np
from time import time

from .bc import PERIODIC, parse_bc
from .lib import as_knots, as_tangent, check_sizes, _xr_in, _xr_out
from .moments import cubic_moments_1
from .splval import splval_1, splval_n
from .storage import make_storage

__all__ = ["Spline", "cubic_interp"]

_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


class Spline:
    """
    Parametric cubic spline, uniformly parametrized over [0, 1].

    The spline passes through `n` knots in `D` dimensions, knot `i` being
    reached at `t = i / (n - 1)`.  Build it empty, bind knots with `set`,
    then evaluate with `eval` as often as needed.

    Parameters
    ----------
    num_points : int, optional
        Number of knots, if known in advance.  Must be at least 2.

    num_dims : int, optional
        Number of dimensions of each knot, if known in advance.  Must be at
        least 1.  When both `num_points` and `num_dims` are given, the moments
        are stored in a buffer allocated once, here.

    dtype : data-type, Default np.float64
        Floating point type of the knots and moments: float32 or float64.

    Examples
    --------
    >>> spline = Spline()
    >>> spline.set([[1.0, 0.0], [-1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
    >>> y = spline.eval(0.5)  # close to [-0.65, 0.65]
    >>> y = spline.eval(np.linspace(0, 1, 11))  # shape (11, 2)
    """

    def __init__(self, num_points=None, num_dims=None, dtype=np.float64):
        dtype = np.dtype(dtype)
        if dtype not in _DTYPES:
            raise TypeError(f"Expected dtype float32 or float64; got {dtype}")
        check_sizes(num_points, num_dims)

        self._dtype = dtype
        self._fixed = (num_points, num_dims)
        self._moments = make_storage(num_points, num_dims, dtype)
        self._points = None
        self._xr = None
        self._left_bc = self._right_bc = None
        self._left_tangent = self._right_tangent = None

    def set(
        self,
        points,
        num_points=None,
        num_dims=None,
        left_bc="natural",
        right_bc="natural",
        left_tangent=None,
        right_tangent=None,
        verbose=False,
    ):
        """
        Bind knots and boundary conditions, and compute the moments.

        Parameters
        ----------
        points : array-like
            Knots, as a 2D array of shape `(num_points, num_dims)` or a flat
            array of `num_points * num_dims` values, one knot after another.
            An `xarray.DataArray` of knots labels the outputs of `eval`.

            The spline keeps a reference to `points` (not a copy, unless
            a conversion to `dtype` is needed).  Do not modify it while the
            spline is in use.

        num_points, num_dims : int, optional
            Number of knots and of dimensions.  Default to the values given
            when building the spline, or else to the shape of `points`.

        left_bc, right_bc : BoundaryCondition or str or int, Default "natural"
            Boundary condition at the first and last knot: "natural",
            "hermite", or "periodic".

        left_tangent, right_tangent : array-like, optional
            Tangent (derivative with respect to the segment parameter, i.e.
            `1 / (n - 1)` times the derivative with respect to `t`) at the
            first and last knot, of length `num_dims`.  Only used with
            Hermite boundary conditions.  Default is the zero vector.

        verbose : bool, Default False
            If True, print a summary of the computation.

        Notes
        -----
        Every input is checked before anything changes: if an exception is
        raised, the spline keeps its previous knots and moments.
        """
        if verbose:
            timer = time()

        num_points = _merge_size("num_points", num_points, self._fixed[0])
        num_dims = _merge_size("num_dims", num_dims, self._fixed[1])

        P = as_knots(points, num_points, num_dims, self._dtype)
        n, D = P.shape
        left_bc, right_bc = parse_bc(left_bc), parse_bc(right_bc)
        left_tangent = as_tangent(left_tangent, D, self._dtype)
        right_tangent = as_tangent(right_tangent, D, self._dtype)

        M = cubic_moments_1(P, int(left_bc), int(right_bc), left_tangent, right_tangent)

        # Commit
        self._moments.resize(M.shape)
        self._moments[:, :] = M
        self._points = P
        self._xr = _xr_in(points)
        self._left_bc, self._right_bc = left_bc, right_bc
        self._left_tangent, self._right_tangent = left_tangent, right_tangent

        if verbose:
            print(
                f"moments done | {n:6d} knots | {D:3d} dims"
                f" | {'cyclic' if self.is_cyclic else 'tridiagonal'} solve"
                f" | {time() - timer:.3f} sec"
            )

    def eval(self, t, d=0, out=None):
        """
        Evaluate the spline.

        Parameters
        ----------
        t : float or array-like, 1d
            Evaluation site(s), in [0, 1].  Sites need not be sorted.

        d : int, Default 0
            Number of derivatives (with respect to `t`) to take.
            If 0, simply evaluate the spline.

        out : ndarray, optional
            Array to write the result into; must have the shape of the
            result.

        Returns
        -------
        y : ndarray
            Point on the spline (or its `d`'th derivative): shape `(D,)` for
            scalar `t`, else `(len(t), D)`.  Rows for `t` outside [0, 1] are
            NaN.  A DataArray if the knots were.
        """
        if self._points is None:
            raise RuntimeError("Spline.set() must be called before Spline.eval()")
        if d < 0:
            raise ValueError(f"Expected a non-negative derivative order; got {d}")

        P, M = self._points, self._moments.data
        if np.ndim(t) == 0:
            y = splval_1(float(t), P, M, d)
        else:
            t = np.asarray(t, dtype=np.float64)
            if t.ndim != 1:
                raise ValueError(f"Expected `t` to be a scalar or 1D; got {t.ndim}D")
            y = splval_n(t, P, M, d)

        if out is not None:
            if out.shape != y.shape:
                raise ValueError(
                    f"Expected `out` of shape {y.shape}; got {out.shape}"
                )
            out[...] = y
            return out

        return _xr_out(y, self._xr, t)

    @property
    def num_points(self):
        """Number of knots, or None before `set`"""
        return None if self._points is None else self._points.shape[0]

    @property
    def num_dims(self):
        """Number of dimensions, or None before `set`"""
        return None if self._points is None else self._points.shape[1]

    @property
    def dtype(self):
        return self._dtype

    @property
    def points(self):
        """The knots, as a 2D array"""
        return self._points

    @property
    def moments(self):
        """Read-only view of the moments, or None before `set`"""
        if self._points is None:
            return None
        M = self._moments.data.view()
        M.flags.writeable = False
        return M

    @property
    def left_bc(self):
        return self._left_bc

    @property
    def right_bc(self):
        return self._right_bc

    @property
    def left_tangent(self):
        return self._left_tangent

    @property
    def right_tangent(self):
        return self._right_tangent

    @property
    def is_cyclic(self):
        """True if the moments came from a cyclic (periodic) system"""
        return PERIODIC in (self._left_bc, self._right_bc)

    def __repr__(self):
        if self._points is None:
            return "Spline(<unset>)"
        return (
            f"Spline(num_points={self.num_points}, num_dims={self.num_dims},"
            f" left_bc={self._left_bc.name}, right_bc={self._right_bc.name},"
            f" dtype={self._dtype})"
        )


def _merge_size(name, given, fixed):
    # Size from `set`'s argument, else from the constructor; they must agree
    if given is None:
        return fixed
    if fixed is not None and given != fixed:
        raise ValueError(f"{name} = {given} given, but spline was built for {fixed}")
    return given


def cubic_interp(
    t,
    points,
    left_bc="natural",
    right_bc="natural",
    left_tangent=None,
    right_tangent=None,
    d=0,
):
    """
    Interpolate knots with a parametric cubic spline, in one go.

    Builds a `Spline` through `points`, with the given boundary conditions
    and tangents (see `Spline.set`), and evaluates it (or its `d`'th
    derivative) at `t` (see `Spline.eval`).  When evaluating the same spline
    repeatedly, build a `Spline` once instead.
    """
    spline = Spline(dtype=np.float64)
    spline.set(
        points,
        left_bc=left_bc,
        right_bc=right_bc,
        left_tangent=left_tangent,
        right_tangent=right_tangent,
    )
    return spline.eval(t, d)
