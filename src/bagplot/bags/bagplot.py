"""
Bagplot Module

Computes the two bags of a bagplot from a 2D point cloud and a per-point
density supplied by the caller:
- the median bag: convex hull of the densest points holding < 50% of the mass
- the outer bag: convex hull of the densest points holding < 99% of the mass

Density is not estimated here; it is an input.
"""

from dataclasses import dataclass
import logging

import numpy as np

from ..config import MEDIAN_FRACTION, OUTER_FRACTION
from ..core.geometry import contains, polygon_area
from ..errors import MalformedInputError
from .contour import HullContour, build_contour
from .quantile import BagPartition, partition_by_density

logger = logging.getLogger(__name__)


@dataclass
class BagResult:
    """
    Container for the bagplot computation results.

    Attributes
    ----------
    median : HullContour
        Contour of the median bag.
    outer : HullContour
        Contour of the outer bag.
    partition : BagPartition
        The point sets the contours were built from.
    """
    median: HullContour
    outer: HullContour
    partition: BagPartition


def _as_points(points) -> np.ndarray:
    try:
        points = np.asarray(points, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise MalformedInputError(f"Point coordinates are not numeric: {e}") from e

    if points.size == 0:
        return np.empty((0, 2), dtype=np.float64)

    if points.ndim != 2 or points.shape[1] not in (2, 3):
        raise MalformedInputError(f"Expected points of shape (N, 2) or (N, 3), got {points.shape}")

    if not np.all(np.isfinite(points[:, :2])):
        raise MalformedInputError("Point coordinates must be finite")

    return points[:, :2]


def compute_bags(
    points: np.ndarray,
    density: np.ndarray,
    median_fraction: float = MEDIAN_FRACTION,
    outer_fraction: float = OUTER_FRACTION
) -> BagResult:
    """
    Compute the median and outer bag contours.

    This is the main entry point of the pipeline:
    1. Orders points by descending density
    2. Partitions them by cumulative density mass
    3. Builds the convex hull contour of each set

    Parameters
    ----------
    points : np.ndarray
        Array of shape (N, 2) or (N, 3). Any z component is ignored.
    density : np.ndarray
        Non-negative density per point, shape (N,).
    median_fraction : float
        Mass fraction enclosed by the median bag. Default 0.5.
    outer_fraction : float
        Mass fraction enclosed by the outer bag. Default 0.99.

    Returns
    -------
    BagResult
        Both contours and the underlying partition.

    Raises
    ------
    MalformedInputError
        If points or densities are malformed or their lengths differ.
    """
    points = _as_points(points)

    partition = partition_by_density(
        points,
        density,
        median_fraction=median_fraction,
        outer_fraction=outer_fraction
    )

    median = build_contour(partition.median_points)
    outer = build_contour(partition.outer_points)

    logger.debug(
        "Computed bags for %d points: median contour %d, outer contour %d",
        len(points), len(median), len(outer)
    )

    return BagResult(median=median, outer=outer, partition=partition)


def bag_stats(result: BagResult, points: np.ndarray) -> dict:
    """
    Compute diagnostic statistics for a bagplot.

    Parameters
    ----------
    result : BagResult
        Result from compute_bags().
    points : np.ndarray
        Data points of shape (N, 2).

    Returns
    -------
    dict
        Statistics including:
        - median_vertices / outer_vertices: Contour sizes
        - median_area / outer_area: Bag areas (0 for points and segments)
        - median_fraction_contained / outer_fraction_contained:
          Fraction of points inside each bag
        - median_mass / outer_mass / total_mass: Density mass of each set
    """
    points = np.atleast_2d(np.asarray(points, dtype=np.float64))
    n_points = len(points) if points.size else 0

    stats = {}
    for name, contour in (('median', result.median), ('outer', result.outer)):
        if n_points:
            inside = contains(contour.points, points)
            fraction = float(np.mean(inside))
        else:
            fraction = 0.0
        stats[f'{name}_vertices'] = len(contour)
        stats[f'{name}_area'] = polygon_area(contour.points)
        stats[f'{name}_fraction_contained'] = fraction

    stats['median_mass'] = result.partition.median_mass
    stats['outer_mass'] = result.partition.outer_mass
    stats['total_mass'] = result.partition.total_mass
    return stats
