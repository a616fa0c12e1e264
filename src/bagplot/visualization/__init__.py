"""
Visualization utilities.
"""

from .plotting import draw_bags, draw_legend_swatch, plot_bagplot

__all__ = ['draw_bags', 'draw_legend_swatch', 'plot_bagplot']
