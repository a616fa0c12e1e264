"""
Bag Plot Item

A plot item that binds a column table (x, y and density columns), caches
the median and outer bag contours, and draws them under the point markers.

The cache is either STALE or FRESH. Binding new input or calling
``modified()`` makes it STALE; a successful ``update_cache()`` makes it
FRESH. While the cache is STALE only the point markers are drawn.
"""

from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple
import logging

import matplotlib.pyplot as plt

from ..bags.bagplot import compute_bags
from ..bags.contour import HullContour
from ..config import (
    DEFAULT_TOOLTIP_FORMAT,
    MEDIAN_FRACTION,
    OUTER_FRACTION,
    TOOLTIP_COLUMN_NAME,
    TOOLTIP_PRECISION,
)
from ..bags.quantile import check_fractions
from ..errors import BagplotError, MissingInputError
from ..visualization.plotting import draw_bags, draw_legend_swatch
from .series import ColumnRef, PointSeries, Table, table_column
from .style import Brush, Pen, default_line_pen
from .tooltip import format_number, format_tooltip

logger = logging.getLogger(__name__)


class CacheState(Enum):
    STALE = "stale"
    FRESH = "fresh"


@dataclass(frozen=True, eq=False)
class BagCache:
    """
    Published bag contours.

    Attributes
    ----------
    median : HullContour
        Median bag contour.
    outer : HullContour
        Outer bag contour.
    build_time : int
        Modification time of the input the contours were built from.
    """
    median: HullContour
    outer: HullContour
    build_time: int


class BagPlot:
    """
    Bagplot item for a 2D chart.

    Point handling (table binding, x/y columns, markers) is delegated to a
    composed PointSeries; this class adds the density column, the bag
    cache, bag drawing, legend swatch and tooltips.
    """

    def __init__(
        self,
        median_fraction: float = MEDIAN_FRACTION,
        outer_fraction: float = OUTER_FRACTION
    ) -> None:
        check_fractions(median_fraction, outer_fraction)
        self.series = PointSeries()
        self._median_fraction = median_fraction
        self._outer_fraction = outer_fraction

        self.brush = Brush()
        self.line_pen: Pen = default_line_pen()
        self.bag_visible = True

        self.labels: Optional[List[str]] = None
        self.indexed_labels: Optional[List[str]] = None
        self.tooltip_label_format = ""
        self.tooltip_default_label_format = DEFAULT_TOOLTIP_FORMAT
        self.tooltip_precision = TOOLTIP_PRECISION

        self._auto_labels: Optional[List[str]] = None
        self._mtime = 0
        self._cache: Optional[BagCache] = None

    # ------------------------------------------------------------------
    # Input binding

    def set_input_data(self, table: Optional[Table], *columns: ColumnRef) -> bool:
        """
        Bind an input table.

        Call forms:
        - ``set_input_data(table)``: x, y and density are the first three
          columns.
        - ``set_input_data(table, y, density)``: x is the row index. The y
          and density columns must exist and have the same number of rows,
          otherwise the call is rejected and the previous binding is kept.
        - ``set_input_data(table, x, y, density)``.

        Columns may be given by name or position. Passing ``None`` unbinds
        the current table.

        Returns
        -------
        bool
            False if the input was rejected.
        """
        if table is None or len(columns) == 0:
            self.series.bind(table)
        elif len(columns) == 2:
            y_column, density_column = columns
            logger.debug("Setting input, Y column = %r, Density column = %r",
                         y_column, density_column)
            y = table_column(table, y_column)
            density = table_column(table, density_column)
            if y is None or density is None or len(y) != len(density):
                logger.error("Input table not correctly initialized: Y column %r and "
                             "density column %r are missing or differ in length",
                             y_column, density_column)
                return False
            self.series.bind(table, y_column, y_column, density_column, use_index_for_x=True)
        elif len(columns) == 3:
            x_column, y_column, density_column = columns
            logger.debug("Setting input, X column = %r, Y column = %r, Density column = %r",
                         x_column, y_column, density_column)
            self.series.bind(table, x_column, y_column, density_column)
        else:
            raise TypeError(
                f"set_input_data() takes a table and 0, 2 or 3 columns, got {len(columns)}"
            )

        self._auto_labels = None
        self.modified()
        return True

    @property
    def median_fraction(self) -> float:
        return self._median_fraction

    @median_fraction.setter
    def median_fraction(self, value: float) -> None:
        self._median_fraction = value
        self.modified()

    @property
    def outer_fraction(self) -> float:
        return self._outer_fraction

    @outer_fraction.setter
    def outer_fraction(self, value: float) -> None:
        self._outer_fraction = value
        self.modified()

    @property
    def table(self) -> Optional[Table]:
        return self.series.table

    @property
    def visible(self) -> bool:
        return self.series.visible

    @visible.setter
    def visible(self, value: bool) -> None:
        self.series.visible = value

    @property
    def marker_pen(self) -> Pen:
        return self.series.marker_pen

    @marker_pen.setter
    def marker_pen(self, pen: Pen) -> None:
        self.series.marker_pen = pen

    # ------------------------------------------------------------------
    # Cache

    def modified(self) -> None:
        """Mark the input as changed; the cache becomes STALE."""
        self._mtime += 1
        self.series.points = None

    @property
    def state(self) -> CacheState:
        cache = self._cache
        if cache is not None and cache.build_time == self._mtime:
            return CacheState.FRESH
        return CacheState.STALE

    @property
    def is_fresh(self) -> bool:
        return self.state is CacheState.FRESH

    @property
    def median_contour(self) -> HullContour:
        cache = self._cache
        return cache.median if cache is not None else HullContour()

    @property
    def outer_contour(self) -> HullContour:
        cache = self._cache
        return cache.outer if cache is not None else HullContour()

    def update_cache(self) -> bool:
        """
        Recompute the bag contours from the bound input.

        Failures (no table, missing density column, malformed data) are
        logged and reported as False; the cache is cleared and stays STALE.

        Returns
        -------
        bool
            True if the cache is FRESH afterwards.
        """
        build_time = self._mtime
        try:
            points = self.series.update_points()
            density = self.series.density()
            if density is None:
                raise MissingInputError("Update event called with no density column set")
            result = compute_bags(
                points,
                density,
                median_fraction=self.median_fraction,
                outer_fraction=self.outer_fraction
            )
        except BagplotError as e:
            logger.warning("Bag cache not updated: %s", e)
            self._cache = None
            return False

        # Single assignment publishes both contours together
        self._cache = BagCache(result.median, result.outer, build_time)
        logger.debug("Bag cache updated: median %d points, outer %d points",
                     len(result.median), len(result.outer))
        return True

    # ------------------------------------------------------------------
    # Drawing

    def paint(self, ax: plt.Axes) -> bool:
        """
        Draw the bags (if ``bag_visible``) and the point markers.

        The bags are skipped while the cache is STALE; the markers are
        still drawn when the last recompute could read the points.

        Returns
        -------
        bool
            False if nothing was drawn because the item is hidden or its
            points are not available.
        """
        logger.debug("Paint event called in BagPlot.")

        if not self.visible or self.table is None or self.series.points is None:
            return False

        cache = self._cache
        if cache is None or cache.build_time != self._mtime:
            logger.debug("Bag cache is not ready; drawing points only")
        elif self.bag_visible:
            draw_bags(ax, cache.median, cache.outer, brush=self.brush, line_pen=self.line_pen)

        return self.series.paint(ax)

    def paint_legend(self, ax: plt.Axes, rect: Tuple[float, float, float, float]) -> bool:
        draw_legend_swatch(ax, rect, brush=self.brush, line_pen=self.line_pen)
        return True

    # ------------------------------------------------------------------
    # Labels

    def get_labels(self) -> Optional[List[str]]:
        """Explicit labels, else the density column name, else None."""
        if self.labels:
            return self.labels
        if self._auto_labels is not None:
            return self._auto_labels
        if self.table is not None:
            name = self.series.density_name()
            self._auto_labels = [name] if name is not None else []
            return self._auto_labels
        return None

    def get_label(self, index: int = 0) -> str:
        labels = self.get_labels()
        if labels and 0 <= index < len(labels):
            return str(labels[index])
        return ""

    def get_tooltip_label(
        self,
        plot_pos: Sequence[float],
        series_index: int,
        segment_index: int = -1
    ) -> str:
        """
        Build the tooltip for a hovered point.

        Tags: ``%x``/``%y`` position, ``%z`` density of the row, ``%i``
        indexed label, ``%l`` series label, ``%c`` row index, ``%C`` value
        of the ``ColName`` column.
        """
        template = self.tooltip_label_format or self.tooltip_default_label_format
        density = self.series.density()

        def density_value() -> str:
            if density is None or not 0 <= series_index < len(density):
                return "?"
            return str(density[series_index])

        def indexed_label() -> str:
            if self.indexed_labels is not None and 0 <= series_index < len(self.indexed_labels):
                return str(self.indexed_labels[series_index])
            return ""

        def column_name_value() -> str:
            table = self.table
            if table is None or TOOLTIP_COLUMN_NAME not in table:
                return "?"
            values = table[TOOLTIP_COLUMN_NAME]
            if not 0 <= series_index < len(values):
                return "?"
            return str(values[series_index])

        handlers = {
            'x': lambda: format_number(plot_pos[0], self.tooltip_precision),
            'y': lambda: format_number(plot_pos[1], self.tooltip_precision),
            'z': density_value,
            'i': indexed_label,
            'l': self.get_label,
            'c': lambda: str(series_index),
            'C': column_name_value,
        }
        return format_tooltip(template, handlers)
