"""
Plot items for a 2D chart.
"""

from .style import Color, Pen, Brush
from .series import PlotItem, PointSeries
from .plot_bag import BagCache, BagPlot, CacheState

__all__ = [
    'Color',
    'Pen',
    'Brush',
    'PlotItem',
    'PointSeries',
    'BagCache',
    'BagPlot',
    'CacheState',
]
