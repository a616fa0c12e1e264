"""
Density ordering.

Orders point ids by descending density so the quantile partitioner can
accumulate density mass from the densest point outwards.
"""

from dataclasses import dataclass
from typing import List, Optional

import numpy as np

from ..errors import MalformedInputError


@dataclass(frozen=True)
class DensityValue:
    """
    A density paired with the id (row index) of its point.

    Ordering is by density descending: ``a < b`` iff ``a.density > b.density``,
    so a plain ascending sort puts the densest point first.
    """
    density: float
    id: int

    def __lt__(self, other: "DensityValue") -> bool:
        return self.density > other.density


def validate_density(density, n_points: Optional[int] = None) -> np.ndarray:
    """
    Coerce a density column to a 1-D float64 array and check it.

    Parameters
    ----------
    density : array-like
        Per-point density values.
    n_points : int, optional
        Expected number of values (the number of points).

    Returns
    -------
    np.ndarray
        Density values of shape (N,).

    Raises
    ------
    MalformedInputError
        If the data is not 1-D, does not match ``n_points``, or holds
        non-finite or negative values.
    """
    try:
        density = np.asarray(density, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Density values are not numeric: {e}") from e

    if density.ndim != 1:
        raise MalformedInputError(f"Expected density of shape (N,), got {density.shape}")

    if n_points is not None and len(density) != n_points:
        raise MalformedInputError(
            f"Density has {len(density)} values but there are {n_points} points"
        )

    if not np.all(np.isfinite(density)):
        raise MalformedInputError("Density values must be finite")

    # The early exit of the partitioner relies on a monotonic cumulative sum
    if np.any(density < 0):
        raise MalformedInputError("Density values must be non-negative")

    return density


def density_order(density: np.ndarray) -> np.ndarray:
    """
    Indices that sort ``density`` strictly descending.

    Uses a stable sort on the negated values so the order is reproducible;
    equal densities keep their row order.
    """
    density = np.asarray(density, dtype=np.float64)
    return np.argsort(-density, kind='stable')


def sort_by_density(density: np.ndarray) -> List[DensityValue]:
    """
    Pair each density with its row id and sort densest first.

    Returns
    -------
    list of DensityValue
        Empty for empty input.
    """
    density = np.asarray(density, dtype=np.float64)
    return [DensityValue(float(density[i]), int(i)) for i in density_order(density)]
