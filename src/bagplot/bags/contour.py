"""
Hull contours for the median and outer bags.
"""

from dataclasses import dataclass, field

import numpy as np

from ..core.geometry import convex_hull, ensure_ccw, planar


@dataclass(frozen=True, eq=False)
class HullContour:
    """
    Ordered point loop of a bag.

    Attributes
    ----------
    points : np.ndarray
        Contour points of shape (K, 2). For a polygon (K >= 4) the first
        point is repeated at the end; a single point (K == 1) or a segment
        (K == 2) is left open.
    """
    points: np.ndarray = field(default_factory=lambda: np.empty((0, 2)))

    def __len__(self) -> int:
        return len(self.points)

    @property
    def is_empty(self) -> bool:
        return len(self.points) == 0

    @property
    def is_polygon(self) -> bool:
        return len(self.points) > 2

    @property
    def closed(self) -> bool:
        return self.is_polygon and bool(np.array_equal(self.points[0], self.points[-1]))

    @property
    def points_3d(self) -> np.ndarray:
        """Contour points of shape (K, 3) with z fixed at 0."""
        return np.column_stack([self.points, np.zeros(len(self.points))])

    def equals(self, other: "HullContour") -> bool:
        """Exact, element-wise equality of two contours."""
        return self.points.shape == other.points.shape and bool(np.array_equal(self.points, other.points))


def build_contour(points: np.ndarray) -> HullContour:
    """
    Build the contour of a point set.

    - 0 points: empty contour.
    - 1 or 2 points: the points as given, no closure.
    - 3 or more: the CCW convex hull with its first vertex appended again.
      If the hull degenerates (collinear or coincident points) the 1- or
      2-vertex hull is returned unclosed.

    Parameters
    ----------
    points : np.ndarray
        Points of shape (M, 2) or (M, 3). Any z component is ignored.

    Returns
    -------
    HullContour
    """
    points = planar(points)

    if len(points) < 3:
        return HullContour(points.copy())

    hull = ensure_ccw(convex_hull(points))
    if len(hull) < 3:
        return HullContour(hull)

    return HullContour(np.vstack([hull, hull[:1]]))
