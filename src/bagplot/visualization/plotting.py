"""
Visualization utilities for bagplot drawing.

Contains plotting functions for:
- Drawing the two bags onto matplotlib axes
- Drawing a legend swatch for a bag plot
- A one-call 2D bagplot figure
"""

from typing import List, Optional, Tuple

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.artist import Artist
from matplotlib.patches import Polygon as MplPolygon, Rectangle

from ..bags.bagplot import bag_stats, compute_bags
from ..bags.contour import HullContour
from ..config import MEDIAN_BAG_OPACITY, OUTER_BAG_OPACITY
from ..plot.style import Brush, Pen, default_line_pen


def _draw_contour(ax: plt.Axes, contour: HullContour, brush: Brush, pen: Pen,
                  zorder: int) -> Optional[Artist]:
    if contour.is_polygon:
        patch = MplPolygon(
            contour.points,
            closed=True,
            facecolor=brush.color.to_mpl(),
            edgecolor=pen.color.to_mpl(),
            linewidth=pen.width,
            zorder=zorder
        )
        ax.add_patch(patch)
        return patch
    if len(contour) == 2:
        line, = ax.plot(
            contour.points[:, 0], contour.points[:, 1],
            color=pen.color.to_mpl(),
            linewidth=pen.width,
            zorder=zorder
        )
        return line
    return None


def draw_bags(
    ax: plt.Axes,
    median: HullContour,
    outer: HullContour,
    brush: Brush = Brush(),
    line_pen: Optional[Pen] = None
) -> List[Artist]:
    """
    Draw the outer and median bags.

    The outer bag is filled with the brush color at half intensity and full
    opacity; the median bag on top of it uses the brush color at half
    opacity. Segments are drawn as lines, single points are skipped.

    Parameters
    ----------
    ax : plt.Axes
        Matplotlib axes to draw on.
    median : HullContour
        Median bag contour.
    outer : HullContour
        Outer bag contour.
    brush : Brush
        Base fill style.
    line_pen : Pen, optional
        Outline style. Defaults to a thin black pen.

    Returns
    -------
    list of Artist
        The artists added to the axes.
    """
    if line_pen is None:
        line_pen = default_line_pen()

    outer_brush = brush.halved().with_opacity(OUTER_BAG_OPACITY)
    median_brush = brush.with_opacity(MEDIAN_BAG_OPACITY)

    artists = []
    for contour, fill, zorder in ((outer, outer_brush, 1), (median, median_brush, 2)):
        artist = _draw_contour(ax, contour, fill, line_pen, zorder)
        if artist is not None:
            artists.append(artist)

    ax.autoscale_view()
    return artists


def draw_legend_swatch(
    ax: plt.Axes,
    rect: Tuple[float, float, float, float],
    brush: Brush = Brush(),
    line_pen: Optional[Pen] = None
) -> List[Rectangle]:
    """
    Draw a legend swatch: the outer-bag color over the whole rectangle and
    the median-bag color over its right half.

    Parameters
    ----------
    rect : tuple
        (x, y, width, height) in data coordinates of ``ax``.
    """
    if line_pen is None:
        line_pen = default_line_pen()

    x, y, width, height = rect
    outer_brush = brush.halved().with_opacity(OUTER_BAG_OPACITY)
    median_brush = brush.with_opacity(MEDIAN_BAG_OPACITY)

    swatches = [
        Rectangle((x, y), width, height,
                  facecolor=outer_brush.color.to_mpl(),
                  edgecolor=line_pen.color.to_mpl(),
                  linewidth=line_pen.width),
        Rectangle((x + width / 2.0, y), width / 2.0, height,
                  facecolor=median_brush.color.to_mpl(),
                  edgecolor=line_pen.color.to_mpl(),
                  linewidth=line_pen.width),
    ]
    for swatch in swatches:
        ax.add_patch(swatch)
    return swatches


def plot_bagplot(
    points: np.ndarray,
    density: np.ndarray,
    ax: Optional[plt.Axes] = None,
    title: str = "Bagplot",
    show_stats: bool = True,
    brush: Brush = Brush()
) -> plt.Axes:
    """
    Compute and visualize a bagplot in 2D.

    Parameters
    ----------
    points : np.ndarray
        Data points of shape (N, 2).
    density : np.ndarray
        Density per point, shape (N,).
    ax : plt.Axes, optional
        Matplotlib axes to plot on. Creates new figure if None.
    title : str
        Plot title.
    show_stats : bool
        Whether to show bag statistics.
    brush : Brush
        Base fill style of the bags.

    Returns
    -------
    plt.Axes
        The matplotlib axes object.
    """
    if ax is None:
        fig, ax = plt.subplots(1, 1, figsize=(8, 8))

    points = np.atleast_2d(np.asarray(points, dtype=np.float64))
    result = compute_bags(points, density)

    draw_bags(ax, result.median, result.outer, brush=brush)

    ax.scatter(points[:, 0], points[:, 1], c='black', s=10, zorder=3, label='Points')

    if show_stats:
        stats = bag_stats(result, points)
        stats_text = (
            f"Median bag: {stats['median_fraction_contained']:.1%} of points\n"
            f"Outer bag: {stats['outer_fraction_contained']:.1%} of points\n"
            f"Vertices: {stats['median_vertices']} / {stats['outer_vertices']}\n"
            f"Areas: {stats['median_area']:.2f} / {stats['outer_area']:.2f}"
        )
        ax.text(
            0.02, 0.98, stats_text,
            transform=ax.transAxes,
            verticalalignment='top',
            fontfamily='monospace',
            fontsize=9,
            bbox=dict(boxstyle='round', facecolor='white', alpha=0.8)
        )

    ax.set_xlabel('X')
    ax.set_ylabel('Y')
    ax.set_title(title)
    ax.legend(loc='upper right')
    ax.grid(True, alpha=0.3)

    return ax
