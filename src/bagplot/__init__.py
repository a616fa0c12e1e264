"""
Bagplot - Density bags for 2D point data.

This package computes the two nested contours of a bagplot from points and
a per-point density supplied by the caller:
- a median bag enclosing the densest points holding < 50% of the density mass
- an outer bag enclosing the densest points holding < 99% of the mass

Main Functions
--------------
compute_bags : Compute both bag contours from points and densities
bag_stats : Diagnostic statistics for computed bags
convex_hull : Counter-clockwise convex hull of a 2D point set
BagPlot : Plot item with a cached pair of bags, drawn with matplotlib

Example
-------
>>> import numpy as np
>>> from bagplot import compute_bags

>>> points = np.random.randn(100, 2)
>>> density = np.exp(-0.5 * np.sum(points ** 2, axis=1))
>>> result = compute_bags(points, density)
>>> result.median.closed
True
"""

from .errors import BagplotError, MissingInputError, MalformedInputError
from .core.geometry import convex_hull, contains, ensure_ccw, polygon_area
from .core.density import DensityValue, sort_by_density
from .bags.quantile import BagPartition, partition_by_density
from .bags.contour import HullContour, build_contour
from .bags.bagplot import BagResult, compute_bags, bag_stats
from .plot.plot_bag import BagCache, BagPlot, CacheState
from .plot.style import Color, Pen, Brush
from .visualization.plotting import draw_bags, plot_bagplot
from .logging_config import setup_logging

__all__ = [
    # Errors
    'BagplotError',
    'MissingInputError',
    'MalformedInputError',
    # Core geometry
    'convex_hull',
    'contains',
    'polygon_area',
    'ensure_ccw',
    'DensityValue',
    'sort_by_density',
    # Bags
    'BagPartition',
    'partition_by_density',
    'HullContour',
    'build_contour',
    'BagResult',
    'compute_bags',
    'bag_stats',
    # Plot item
    'BagCache',
    'BagPlot',
    'CacheState',
    'Color',
    'Pen',
    'Brush',
    # Visualization
    'draw_bags',
    'plot_bagplot',
    # Logging
    'setup_logging',
]
