"""
Configuration & Defaults
========================
Central registry for the numeric thresholds and style defaults used by the
bagplot pipeline and the BagPlot item.

Exports:
    MEDIAN_FRACTION (float): Cumulative density fraction enclosed by the median bag.
    OUTER_FRACTION (float): Cumulative density fraction enclosed by the outer bag.
    DEFAULT_TOOLTIP_FORMAT (str): Tooltip template used when none is set.
"""
from typing import Tuple

# Quantile cutoffs on the cumulative density mass
MEDIAN_FRACTION: float = 0.5
OUTER_FRACTION: float = 0.99

# Tooltip
DEFAULT_TOOLTIP_FORMAT: str = "%C, %l (%x, %y): %z"
TOOLTIP_PRECISION: int = 6
TOOLTIP_COLUMN_NAME: str = "ColName"

# Bag fill opacities (0-255)
OUTER_BAG_OPACITY: int = 255
MEDIAN_BAG_OPACITY: int = 128

# Style defaults (RGB 0-255)
DEFAULT_BRUSH_COLOR: Tuple[int, int, int] = (255, 0, 0)
DEFAULT_PEN_COLOR: Tuple[int, int, int] = (0, 0, 0)
DEFAULT_MARKER_WIDTH: float = 5.0
DEFAULT_LINE_WIDTH: float = 1.0
