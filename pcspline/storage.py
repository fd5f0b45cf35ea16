"""
Buffers holding the moments of a spline.

A spline whose number of knots and dimensions are known when it is built
allocates its moments once, in a `FixedStorage`; otherwise a `DynamicStorage`
is reallocated to fit each new set of knots.  Both are indexed like the
underlying 2D array.
"""

import numpy as np


class FixedStorage:
    """Moment buffer of a shape fixed at construction"""

    def __init__(self, shape, dtype=np.float64):
        self._data = np.zeros(shape, dtype=dtype)

    @property
    def shape(self):
        return self._data.shape

    @property
    def data(self):
        return self._data

    def resize(self, shape):
        """Check that `shape` is the fixed shape; nothing is reallocated."""
        if tuple(shape) != self._data.shape:
            raise ValueError(
                f"Storage is fixed at shape {self._data.shape}; cannot resize to {tuple(shape)}"
            )

    def __getitem__(self, key):
        return self._data[key]

    def __setitem__(self, key, value):
        self._data[key] = value

    def __len__(self):
        return len(self._data)


class DynamicStorage(FixedStorage):
    """Moment buffer that is reallocated whenever its shape changes"""

    def __init__(self, dtype=np.float64):
        super().__init__((0, 0), dtype)

    def resize(self, shape):
        shape = tuple(shape)
        if shape != self._data.shape:
            self._data = np.zeros(shape, dtype=self._data.dtype)


def make_storage(num_points=None, num_dims=None, dtype=np.float64):
    """Fixed storage if both `num_points` and `num_dims` are given, else dynamic"""
    if num_points is None or num_dims is None:
        return DynamicStorage(dtype)
    return FixedStorage((num_points, num_dims), dtype)
