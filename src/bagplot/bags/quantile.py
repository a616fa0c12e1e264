"""
Quantile Partitioner

Walks points in descending density order while accumulating density mass,
and splits them into:
- the median set: points reached while the running mass is below 50%
- the outer set: points reached while the running mass is below 99%

The walk stops at the first point whose running mass reaches the outer
threshold; no later point enters either set.
"""

from dataclasses import dataclass
import logging

import numpy as np

from ..config import MEDIAN_FRACTION, OUTER_FRACTION
from ..core.density import density_order, validate_density
from ..core.geometry import planar
from ..errors import MalformedInputError

logger = logging.getLogger(__name__)


def check_fractions(median_fraction: float, outer_fraction: float) -> None:
    """
    Check that ``0 < median_fraction <= outer_fraction <= 1``.

    Raises
    ------
    MalformedInputError
        If the fractions are out of range or out of order.
    """
    if not 0 < median_fraction <= outer_fraction <= 1:
        raise MalformedInputError(
            f"Need 0 < median_fraction <= outer_fraction <= 1, "
            f"got {median_fraction} and {outer_fraction}"
        )


@dataclass
class BagPartition:
    """
    Result of partitioning points by cumulative density mass.

    Attributes
    ----------
    median_points : np.ndarray
        Points of the median set, shape (M, 2), densest first.
    outer_points : np.ndarray
        Points of the outer set, shape (Q, 2), densest first.
    median_ids : np.ndarray
        Row indices of the median points.
    outer_ids : np.ndarray
        Row indices of the outer points.
    median_mass : float
        Summed density of the median set.
    outer_mass : float
        Summed density of the outer set.
    total_mass : float
        Summed density of all points.
    """
    median_points: np.ndarray
    outer_points: np.ndarray
    median_ids: np.ndarray
    outer_ids: np.ndarray
    median_mass: float
    outer_mass: float
    total_mass: float


def partition_by_density(
    points: np.ndarray,
    density: np.ndarray,
    median_fraction: float = MEDIAN_FRACTION,
    outer_fraction: float = OUTER_FRACTION
) -> BagPartition:
    """
    Split points into the median and outer sets by cumulative density.

    The running sum is updated with a point's density before the threshold
    tests. The two tests are independent: a point joins the median set when
    ``sum < median_fraction * total`` and the outer set when
    ``sum < outer_fraction * total``; the walk stops at the first point
    failing the outer test.

    Parameters
    ----------
    points : np.ndarray
        Array of shape (N, 2) or (N, 3). Any z component is ignored.
    density : np.ndarray
        Non-negative densities of shape (N,).
    median_fraction : float
        Mass fraction for the median set. Default 0.5.
    outer_fraction : float
        Mass fraction for the outer set. Default 0.99.

    Returns
    -------
    BagPartition
        Both point sets with their ids and masses.
    """
    check_fractions(median_fraction, outer_fraction)

    points = planar(points)
    density = validate_density(density, n_points=len(points))

    total = float(np.sum(density))
    median_threshold = median_fraction * total
    outer_threshold = outer_fraction * total

    order = density_order(density)
    cumulative = np.cumsum(density[order])

    # First position whose running mass reaches the outer threshold
    reached = np.flatnonzero(cumulative >= outer_threshold)
    stop = int(reached[0]) if len(reached) else len(order)

    outer_ids = order[:stop]
    median_ids = outer_ids[cumulative[:stop] < median_threshold]

    logger.debug(
        "Partitioned %d points (mass %.6g): %d median, %d outer",
        len(order), total, len(median_ids), len(outer_ids)
    )

    return BagPartition(
        median_points=points[median_ids],
        outer_points=points[outer_ids],
        median_ids=median_ids,
        outer_ids=outer_ids,
        median_mass=float(np.sum(density[median_ids])),
        outer_mass=float(np.sum(density[outer_ids])),
        total_mass=total,
    )
