"""
Core geometry operations for bag contours.

Contains utility functions for:
- Convex hull construction (Andrew's monotone chain)
- Point-in-polygon testing
- Polygon area calculation (signed and unsigned)
- Vertex ordering (CCW)
"""

from typing import Sequence

import numpy as np
from shapely.geometry import Polygon, Point


# Numerical tolerance for floating point comparisons
EPS = 1e-10


def cross(o: Sequence[float], a: Sequence[float], b: Sequence[float]) -> float:
    """
    2D cross product of the vectors OA and OB.

    Positive for a counter-clockwise turn O -> A -> B, negative for a
    clockwise turn and zero when the three points are collinear.
    """
    return (a[0] - o[0]) * (b[1] - o[1]) - (a[1] - o[1]) * (b[0] - o[0])


def planar(points: np.ndarray) -> np.ndarray:
    """
    Project points onto the z=0 plane.

    Parameters
    ----------
    points : np.ndarray
        Points of shape (M, 2) or (M, 3).

    Returns
    -------
    np.ndarray
        Float64 array of shape (M, 2).
    """
    points = np.asarray(points, dtype=np.float64)
    if points.size == 0:
        return np.empty((0, 2), dtype=np.float64)
    if points.ndim != 2 or points.shape[1] < 2:
        raise ValueError(f"Expected points of shape (M, 2) or (M, 3), got {points.shape}")
    # Adding 0.0 folds -0.0 into 0.0 so duplicates merge reliably
    return points[:, :2] + 0.0


def convex_hull(points: np.ndarray) -> np.ndarray:
    """
    Compute the convex hull of the planar projection of a point set.

    Uses Andrew's monotone chain, which is deterministic and runs in
    O(M log M). Duplicate points are merged and collinear points on hull
    edges are dropped.

    Parameters
    ----------
    points : np.ndarray
        Points of shape (M, 2) or (M, 3). Any z component is ignored.

    Returns
    -------
    np.ndarray
        Hull vertices of shape (H, 2) in counter-clockwise order, starting
        at the vertex with the lowest x (then lowest y). The polygon is not
        closed. For all-collinear input H == 2 (the extreme endpoints); for
        all-identical input H == 1.
    """
    unique = np.unique(planar(points), axis=0)

    if len(unique) < 3:
        return unique

    sorted_points = [tuple(p) for p in unique.tolist()]

    lower = []
    for p in sorted_points:
        while len(lower) >= 2 and cross(lower[-2], lower[-1], p) <= 0:
            lower.pop()
        lower.append(p)

    upper = []
    for p in reversed(sorted_points):
        while len(upper) >= 2 and cross(upper[-2], upper[-1], p) <= 0:
            upper.pop()
        upper.append(p)

    # Last point of each chain is the first point of the other
    return np.array(lower[:-1] + upper[:-1], dtype=np.float64)


def contains(poly: np.ndarray, points: np.ndarray) -> np.ndarray:
    """
    Test if points are inside or on a polygon.

    Uses Shapely for robust point-in-polygon testing. The polygon may be
    given open or explicitly closed (first vertex repeated at the end).

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).
    points : np.ndarray
        Points to test of shape (N, 2) or (2,).

    Returns
    -------
    np.ndarray
        Boolean array of shape (N,) indicating containment.
    """
    points = np.atleast_2d(points)

    n_points = len(points)

    if len(poly) < 3:
        return np.zeros(n_points, dtype=bool)

    shapely_poly = Polygon(np.asarray(poly)[:, :2])

    if not shapely_poly.is_valid:
        shapely_poly = shapely_poly.buffer(0)

    inside = np.zeros(n_points, dtype=bool)
    for i, pt in enumerate(points):
        shapely_point = Point(pt[0], pt[1])
        # contains() checks interior, touches() checks boundary
        inside[i] = shapely_poly.contains(shapely_point) or shapely_poly.touches(shapely_point)

    return inside


def signed_area(poly: np.ndarray) -> float:
    """
    Signed shoelace area: positive for CCW, negative for CW vertex order.

    A repeated closing vertex contributes a zero-length edge and does not
    change the result.
    """
    poly = np.asarray(poly, dtype=np.float64)
    if len(poly) < 3:
        return 0.0

    x = poly[:, 0]
    y = poly[:, 1]
    return float(0.5 * np.sum(x * np.roll(y, -1) - np.roll(x, -1) * y))


def polygon_area(poly: np.ndarray) -> float:
    """
    Compute the area of a polygon using the shoelace formula.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2).

    Returns
    -------
    float
        Area of the polygon.
    """
    return abs(signed_area(poly))


def ensure_ccw(poly: np.ndarray) -> np.ndarray:
    """
    Ensure polygon vertices are in counter-clockwise order.

    Parameters
    ----------
    poly : np.ndarray
        Polygon vertices of shape (M, 2), open or closed.

    Returns
    -------
    np.ndarray
        Polygon vertices in CCW order.
    """
    poly = np.asarray(poly, dtype=np.float64)
    if signed_area(poly) < 0:
        # Clockwise, reverse to make CCW
        return poly[::-1].copy()
    return poly
