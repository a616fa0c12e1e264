"""
Bag computation: quantile partitioning and hull contours.
"""

from .quantile import BagPartition, check_fractions, partition_by_density
from .contour import HullContour, build_contour
from .bagplot import BagResult, compute_bags, bag_stats

__all__ = [
    'BagPartition',
    'check_fractions',
    'partition_by_density',
    'HullContour',
    'build_contour',
    'BagResult',
    'compute_bags',
    'bag_stats',
]
