"""
Point series: the generic scatter-plot behaviour a bag plot is built on.

A PointSeries binds a column table (any mapping of column name to
array-like), resolves the x and y columns and draws the point markers.
BagPlot composes one instead of inheriting from it.
"""

from typing import Any, Mapping, Optional, Protocol, Sequence, Tuple, Union
import logging

import numpy as np
import matplotlib.pyplot as plt

from ..errors import MalformedInputError, MissingInputError
from .style import Pen, default_marker_pen

logger = logging.getLogger(__name__)

Table = Mapping[str, Any]
ColumnRef = Union[str, int]


def resolve_column(table: Table, ref: ColumnRef) -> Optional[str]:
    """Resolve a column name or position to a column name, or None if absent."""
    if isinstance(ref, (int, np.integer)):
        names = list(table.keys())
        return names[ref] if 0 <= ref < len(names) else None
    return ref if ref in table else None


def table_column(table: Table, ref: ColumnRef) -> Optional[np.ndarray]:
    """Column values as a 1-D array, or None if the column is absent."""
    name = resolve_column(table, ref)
    if name is None:
        return None
    return np.asarray(table[name]).ravel()


class PlotItem(Protocol):
    """Capabilities a chart expects from a plot item."""

    def update_cache(self) -> bool: ...

    def paint(self, ax: plt.Axes) -> bool: ...

    def paint_legend(self, ax: plt.Axes, rect: Tuple[float, float, float, float]) -> bool: ...

    def get_tooltip_label(self, plot_pos: Sequence[float], series_index: int,
                          segment_index: int = -1) -> str: ...


class PointSeries:
    """
    Table binding and marker drawing for a 2D point series.

    Columns may be referenced by name or by position. Unset column
    references fall back to the table's first, second and third columns
    for x, y and density respectively.
    """

    def __init__(self) -> None:
        self.table: Optional[Table] = None
        self.x_column: Optional[ColumnRef] = None
        self.y_column: Optional[ColumnRef] = None
        self.density_column: Optional[ColumnRef] = None
        self.use_index_for_x = False
        self.visible = True
        self.marker_pen: Pen = default_marker_pen()
        self.points: Optional[np.ndarray] = None

    def bind(
        self,
        table: Optional[Table],
        x_column: Optional[ColumnRef] = None,
        y_column: Optional[ColumnRef] = None,
        density_column: Optional[ColumnRef] = None,
        use_index_for_x: bool = False
    ) -> None:
        self.table = table
        self.x_column = x_column
        self.y_column = y_column
        self.density_column = density_column
        self.use_index_for_x = use_index_for_x
        self.points = None
        if table is None:
            logger.debug("Unbound input table")
        else:
            logger.debug("Bound table with columns %s", list(table.keys()))

    def column_name(self, ref: Optional[ColumnRef], default_position: int) -> Optional[str]:
        if self.table is None:
            return None
        return resolve_column(self.table, default_position if ref is None else ref)

    def column(self, ref: Optional[ColumnRef], default_position: int) -> Optional[np.ndarray]:
        if self.table is None:
            return None
        return table_column(self.table, default_position if ref is None else ref)

    def density(self) -> Optional[np.ndarray]:
        return self.column(self.density_column, 2)

    def density_name(self) -> Optional[str]:
        return self.column_name(self.density_column, 2)

    def update_points(self) -> np.ndarray:
        """
        Rebuild the (N, 2) point array from the bound columns.

        Raises
        ------
        MissingInputError
            If no table is bound or the y (or x) column is absent.
        MalformedInputError
            If the x and y columns differ in length or are not numeric.
        """
        self.points = None
        if self.table is None:
            raise MissingInputError("No input table is bound")

        y = self.column(self.y_column, 1)
        if y is None:
            raise MissingInputError(f"Y column {self.y_column!r} is not in the input table")

        if self.use_index_for_x:
            x = np.arange(len(y), dtype=np.float64)
        else:
            x = self.column(self.x_column, 0)
            if x is None:
                raise MissingInputError(f"X column {self.x_column!r} is not in the input table")

        if len(x) != len(y):
            raise MalformedInputError(f"X column has {len(x)} rows but Y column has {len(y)}")

        try:
            self.points = np.column_stack([x, y]).astype(np.float64)
        except (TypeError, ValueError) as e:
            raise MalformedInputError(f"X/Y columns are not numeric: {e}") from e

        return self.points

    def paint(self, ax: plt.Axes) -> bool:
        """Draw the point markers with the marker pen."""
        if not self.visible or self.points is None:
            return False
        if len(self.points):
            ax.scatter(
                self.points[:, 0], self.points[:, 1],
                s=self.marker_pen.width ** 2,
                color=[self.marker_pen.color.to_mpl()],
                zorder=3
            )
        return True
