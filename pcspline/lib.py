"""Library of simple functions for pcspline"""

import numpy as np
import xarray as xr


def xr_to_np(S):
    """Convert xarray into numpy array"""
    if hasattr(S, "values"):
        S = S.values
    return S


def as_knots(points, num_points=None, num_dims=None, dtype=np.float64):
    """
    Knots as a 2D array of shape `(num_points, num_dims)`

    Parameters
    ----------
    points : array-like
        Either a 2D array of shape `(num_points, num_dims)`, or a flat array of
        `num_points * num_dims` values holding one knot after another.

    num_points, num_dims : int, optional
        Number of knots and number of dimensions.  Required, at least one of
        them, for flat `points`.  For 2D `points`, checked against its shape.

    dtype : data-type, Default np.float64

    Returns
    -------
    P : ndarray
        A view of `points` when no conversion is needed, else a copy.
    """
    P = np.asarray(xr_to_np(points), dtype=dtype)

    if P.ndim == 2:
        n, D = P.shape
        if num_points is not None and num_points != n:
            raise ValueError(
                f"Expected {num_points} knots; `points` has {n} (shape {P.shape})"
            )
        if num_dims is not None and num_dims != D:
            raise ValueError(
                f"Expected {num_dims} dimensions; `points` has {D} (shape {P.shape})"
            )
    elif P.ndim == 1:
        if num_points is None and num_dims is None:
            raise ValueError(
                "Flat `points` need `num_points` or `num_dims` to be given"
            )
        if num_points is None:
            num_points = P.size // num_dims if num_dims > 0 else 0
        elif num_dims is None:
            num_dims = P.size // num_points if num_points > 0 else 0
        n, D = num_points, num_dims
        if n * D != P.size or n * D == 0:
            raise ValueError(
                f"Cannot arrange {P.size} values as {n} knots of {D} dimensions"
            )
        P = P.reshape((n, D))
    else:
        raise ValueError(f"Expected `points` to be 1D or 2D; got {P.ndim}D")

    check_sizes(n, D)
    return P


def check_sizes(num_points, num_dims):
    """Raise ValueError unless there are at least 2 knots in at least 1 dimension"""
    if num_points is not None and num_points < 2:
        raise ValueError(f"Expected at least 2 knots; got {num_points}")
    if num_dims is not None and num_dims < 1:
        raise ValueError(f"Expected at least 1 dimension; got {num_dims}")


def as_tangent(tangent, num_dims, dtype=np.float64, broadcast=False):
    """
    Tangent vector for a Hermite boundary condition

    `None` gives the zero vector.  Otherwise `tangent` must have length
    `num_dims` in its last dimension; unless `broadcast` is True, it must
    be 1D.
    """
    if tangent is None:
        return np.zeros(num_dims, dtype=dtype)

    tangent = np.asarray(xr_to_np(tangent), dtype=dtype)
    if tangent.ndim == 0 or tangent.shape[-1] != num_dims:
        raise ValueError(
            f"Expected tangent of length {num_dims}; got shape {tangent.shape}"
        )
    if not broadcast and tangent.ndim != 1:
        raise ValueError(f"Expected a 1D tangent; got shape {tangent.shape}")
    return tangent


def _xr_in(points):
    # Remember the last dimension (the coordinates) of a knot DataArray, so
    # evaluated points can be labelled the same way
    if isinstance(points, xr.core.dataarray.DataArray) and points.ndim == 2:
        dim = points.dims[-1]
        coords = points.coords[dim] if dim in points.coords else None
        return dim, coords
    else:
        return None


def _xr_out(y, template, t=None):
    # Return a DataArray if the knots were a DataArray
    if template is None:
        return y

    dim, coords = template
    coords = {} if coords is None else {dim: coords.values}
    if y.ndim == 1:
        return xr.DataArray(y, dims=(dim,), coords=coords)
    coords["t"] = np.asarray(t)
    return xr.DataArray(y, dims=("t", dim), coords=coords)
