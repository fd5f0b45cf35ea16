"""
Parametric cubic splines.

A parametric cubic spline passes through an ordered sequence of knots (points
in any number of dimensions), uniformly parametrized by `t` over [0, 1].

Interpolation is split into two steps:
    1. Compute the moments (second derivatives at the knots), by solving a
       tridiagonal system, or a cyclic one for periodic boundary conditions,
    2. Evaluate the spline from its knots and moments.

The `Spline` class does both, computing moments once in `Spline.set` and
evaluating them with `Spline.eval`.  The lower level functions are also
available: `cubic_moments_1` and `splval_1` handle one spline, and are
`numba.njit`ed so they can be called from other `numba.njit`ed code, while
`cubic_moments` and `splval` are "universal", looping over many splines
stacked in the leading dimensions of their inputs.
"""

__version__ = "0.1.0"

import importlib as _importlib

from .bc import BoundaryCondition, parse_bc
from .moments import cubic_moments, cubic_moments_1
from .splval import splval, splval_1, splval_n
from .spline import Spline, cubic_interp

# List of modules not explicitly imported above
modules = ["lib", "storage", "tdma"]

__all__ = modules + [
    k for (k, v) in locals().items() if not k.startswith("_") and k != "modules"
]  # all local, public names


def __dir__():
    return __all__


# Lazy load of modules
def __getattr__(name):
    if name in modules:
        return _importlib.import_module(f"pcspline.{name}")
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(f"Module 'pcspline' has no attribute '{name}'")
