"""
Core geometry and density operations.
"""

from .geometry import (
    EPS,
    cross,
    planar,
    convex_hull,
    contains,
    signed_area,
    polygon_area,
    ensure_ccw,
)
from .density import DensityValue, validate_density, density_order, sort_by_density

__all__ = [
    'EPS',
    'cross',
    'planar',
    'convex_hull',
    'contains',
    'signed_area',
    'polygon_area',
    'ensure_ccw',
    'DensityValue',
    'validate_density',
    'density_order',
    'sort_by_density',
]
