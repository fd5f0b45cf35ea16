"""Boundary conditions for parametric cubic splines"""

from enum import IntEnum
from numbers import Integral

# Plain ints, so numba treats them as compile-time constants
NATURAL = 0
HERMITE = 1
PERIODIC = 2
NOT_A_KNOT = 3


class BoundaryCondition(IntEnum):
    """Condition imposed at one end of a spline.

    NATURAL
        Second derivative (moment) is zero at the end.
    HERMITE
        First derivative equals a given tangent (zero if none is given).
    PERIODIC
        The curve wraps around, using the knot at the other end as neighbour.
    NOT_A_KNOT
        Declared but not supported; requesting it raises NotImplementedError.
    """

    NATURAL = NATURAL
    HERMITE = HERMITE
    PERIODIC = PERIODIC
    NOT_A_KNOT = NOT_A_KNOT


_NAMES = {
    "natural": BoundaryCondition.NATURAL,
    "hermite": BoundaryCondition.HERMITE,
    "clamped": BoundaryCondition.HERMITE,
    "periodic": BoundaryCondition.PERIODIC,
    "not-a-knot": BoundaryCondition.NOT_A_KNOT,
    "not_a_knot": BoundaryCondition.NOT_A_KNOT,
    "notaknot": BoundaryCondition.NOT_A_KNOT,
}


def parse_bc(bc):
    """Convert `bc` into a supported `BoundaryCondition`.

    Parameters
    ----------
    bc : BoundaryCondition or int or str
        A member of `BoundaryCondition`, its integer value, or its name
        (case insensitive), e.g. "natural", "hermite", "periodic".

    Returns
    -------
    bc : BoundaryCondition

    Raises
    ------
    ValueError
        If `bc` names no known boundary condition.
    TypeError
        If `bc` is neither a str nor an int.
    NotImplementedError
        If `bc` is the not-a-knot condition.
    """
    if isinstance(bc, str):
        try:
            bc = _NAMES[bc.strip().lower()]
        except KeyError:
            raise ValueError(
                f"Expected boundary condition in {tuple(_NAMES)}; got {bc!r}"
            )
    elif isinstance(bc, Integral) and not isinstance(bc, bool):
        try:
            bc = BoundaryCondition(int(bc))
        except ValueError:
            raise ValueError(f"Unknown boundary condition value {bc!r}")
    else:
        raise TypeError(
            f"Expected boundary condition as str or int; got {type(bc).__name__}"
        )

    if bc == BoundaryCondition.NOT_A_KNOT:
        raise NotImplementedError(
            "The not-a-knot boundary condition is not supported"
        )

    return bc
