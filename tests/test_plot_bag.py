"""
Tests for the BagPlot item: input binding, cache state, drawing, labels
and tooltips.
"""

import logging

import numpy as np
import pytest
import matplotlib.pyplot as plt
from matplotlib.patches import Polygon as MplPolygon, Rectangle

from bagplot import BagPlot, Brush, CacheState, Color
from bagplot.plot.series import PlotItem


@pytest.fixture
def table():
    rng = np.random.default_rng(1)
    x = rng.normal(size=200)
    y = rng.normal(size=200)
    return {
        'x': x,
        'y': y,
        'density': np.exp(-0.5 * (x ** 2 + y ** 2)),
        'ColName': [f"row{i}" for i in range(200)],
    }


@pytest.fixture
def ax():
    fig, ax = plt.subplots()
    yield ax
    plt.close(fig)


class TestCacheState:
    """Stale/Fresh transitions of the bag cache."""

    def test_starts_stale(self):
        plot = BagPlot()
        assert plot.state is CacheState.STALE
        assert not plot.is_fresh
        assert plot.median_contour.is_empty

    def test_update_makes_fresh(self, table):
        plot = BagPlot()
        assert plot.set_input_data(table, 'x', 'y', 'density')
        assert plot.update_cache()
        assert plot.state is CacheState.FRESH
        assert plot.median_contour.closed
        assert plot.outer_contour.closed

    def test_rebinding_makes_stale(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        plot.set_input_data(table, 'y', 'x', 'density')
        assert plot.state is CacheState.STALE

    def test_modified_makes_stale(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        table['density'] = table['density'] ** 2
        plot.modified()
        assert not plot.is_fresh
        assert plot.update_cache()
        assert plot.is_fresh

    def test_fraction_change_makes_stale(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()
        outer = plot.outer_contour

        plot.outer_fraction = 0.5
        assert not plot.is_fresh
        assert plot.update_cache()
        assert len(plot.outer_contour) <= len(outer)
        assert plot.outer_fraction == 0.5

    def test_recompute_is_identical(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()
        median, outer = plot.median_contour, plot.outer_contour

        plot.modified()
        plot.update_cache()
        assert median.equals(plot.median_contour)
        assert outer.equals(plot.outer_contour)

    def test_empty_input_is_fresh(self):
        plot = BagPlot()
        plot.set_input_data({'x': [], 'y': [], 'density': []})
        assert plot.update_cache()
        assert plot.is_fresh
        assert plot.median_contour.is_empty
        assert plot.outer_contour.is_empty


class TestFailures:
    """Missing and malformed input never raises out of update_cache()."""

    def test_no_table(self, caplog):
        plot = BagPlot()
        with caplog.at_level(logging.WARNING, logger="bagplot"):
            assert not plot.update_cache()
        assert plot.state is CacheState.STALE
        assert "No input table" in caplog.text

    def test_missing_density_column(self):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0, 2.0], 'y': [0.0, 1.0, 0.0]})
        assert not plot.update_cache()
        assert plot.state is CacheState.STALE
        assert plot.outer_contour.is_empty

    def test_named_density_column_absent(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'weights')
        assert not plot.update_cache()
        assert not plot.is_fresh

    def test_negative_density(self):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0], 'y': [0.0, 1.0], 'd': [1.0, -1.0]})
        assert not plot.update_cache()
        assert not plot.is_fresh

    def test_failure_clears_previous_contours(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        plot.set_input_data(table, 'x', 'y', 'missing')
        assert not plot.update_cache()
        assert plot.median_contour.is_empty

    def test_unbind_with_none(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        assert plot.set_input_data(None)
        assert plot.table is None
        assert not plot.is_fresh
        assert not plot.update_cache()

    def test_none_table_with_columns(self):
        plot = BagPlot()
        assert plot.set_input_data(None, 'y', 'density')
        assert not plot.update_cache()

    def test_invalid_fractions_rejected_at_construction(self):
        with pytest.raises(ValueError):
            BagPlot(median_fraction=0.6, outer_fraction=0.5)

    def test_out_of_order_fractions_reported(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.median_fraction = 0.995
        assert not plot.update_cache()
        assert plot.state is CacheState.STALE

    def test_bad_column_count(self, table):
        plot = BagPlot()
        with pytest.raises(TypeError):
            plot.set_input_data(table, 'x')


class TestInputBinding:
    """The set_input_data() call forms."""

    def test_table_only_uses_first_three_columns(self, table):
        explicit = BagPlot()
        explicit.set_input_data(table, 'x', 'y', 'density')
        explicit.update_cache()

        positional = BagPlot()
        positional.set_input_data(table)
        positional.update_cache()

        assert explicit.outer_contour.equals(positional.outer_contour)

    def test_column_positions(self, table):
        by_name = BagPlot()
        by_name.set_input_data(table, 'x', 'y', 'density')
        by_name.update_cache()

        by_index = BagPlot()
        by_index.set_input_data(table, 0, 1, 2)
        by_index.update_cache()

        assert by_name.median_contour.equals(by_index.median_contour)

    def test_convenience_path_uses_row_index(self):
        plot = BagPlot()
        data = {'y': [0.0, 5.0, 1.0, 4.0], 'd': [1.0, 1.0, 1.0, 1.0]}
        assert plot.set_input_data(data, 'y', 'd')
        assert plot.update_cache()
        np.testing.assert_array_equal(plot.series.points[:, 0], [0.0, 1.0, 2.0, 3.0])

    def test_convenience_path_rejects_mismatch(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        bad = {'y': [1.0, 2.0, 3.0], 'd': [1.0, 2.0]}
        assert not plot.set_input_data(bad, 'y', 'd')

        assert plot.table is table
        assert plot.series.density_column == 'density'
        assert plot.is_fresh

    def test_convenience_path_rejects_missing_column(self, table, caplog):
        plot = BagPlot()
        with caplog.at_level(logging.ERROR, logger="bagplot"):
            assert not plot.set_input_data(table, 'y', 'nope')
        assert plot.table is None
        assert "not correctly initialized" in caplog.text

    def test_xy_length_mismatch(self):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0], 'y': [0.0, 1.0, 2.0], 'd': [1.0, 1.0, 1.0]})
        assert not plot.update_cache()


class TestPaint:
    """Drawing onto matplotlib axes."""

    def test_paint_requires_fresh_cache(self, table, ax):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        assert not plot.paint(ax)
        assert len(ax.patches) == 0

    def test_failed_update_still_draws_points(self, ax):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0, 2.0], 'y': [0.0, 1.0, 0.0]})
        assert not plot.update_cache()

        assert plot.paint(ax)
        assert len(ax.collections) == 1
        assert len(ax.patches) == 0
        assert len(ax.lines) == 0

    def test_modified_without_update_draws_nothing(self, table, ax):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()
        plot.modified()

        assert not plot.paint(ax)
        assert len(ax.collections) == 0

    def test_paint_draws_two_bags_and_points(self, table, ax):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        assert plot.paint(ax)
        polygons = [p for p in ax.patches if isinstance(p, MplPolygon)]
        assert len(polygons) == 2
        assert len(ax.collections) == 1

    def test_bag_colors(self, table, ax):
        plot = BagPlot()
        plot.brush = Brush(Color(200, 100, 50))
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()
        plot.paint(ax)

        outer, median = ax.patches
        np.testing.assert_allclose(outer.get_facecolor(), (100 / 255, 50 / 255, 25 / 255, 1.0))
        np.testing.assert_allclose(median.get_facecolor(), (200 / 255, 100 / 255, 50 / 255, 128 / 255))
        # The item's own brush is untouched
        assert plot.brush == Brush(Color(200, 100, 50))

    def test_hidden_bag(self, table, ax):
        plot = BagPlot()
        plot.bag_visible = False
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()

        assert plot.paint(ax)
        assert len(ax.patches) == 0
        assert len(ax.collections) == 1

    def test_invisible(self, table, ax):
        plot = BagPlot()
        plot.visible = False
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.update_cache()
        assert not plot.paint(ax)

    def test_segment_drawn_as_line(self, ax):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0, 2.0], 'y': [0.0, 1.0, 0.0], 'd': [10.0, 5.0, 5.0]})
        plot.update_cache()

        assert plot.paint(ax)
        assert len(ax.patches) == 0
        assert len(ax.lines) == 1
        line = ax.lines[0]
        np.testing.assert_allclose(line.get_color(), (0.0, 0.0, 0.0, 1.0))
        assert line.get_linewidth() == plot.line_pen.width

    def test_paint_legend(self, ax):
        plot = BagPlot()
        assert plot.paint_legend(ax, (0.0, 0.0, 2.0, 1.0))

        full, half = [p for p in ax.patches if isinstance(p, Rectangle)]
        assert full.get_width() == 2.0
        assert half.get_x() == 1.0
        assert half.get_width() == 1.0

    def test_is_plot_item(self):
        plot = BagPlot()
        item: PlotItem = plot
        assert callable(item.update_cache)
        assert callable(item.get_tooltip_label)


class TestLabels:
    """Series labels and tooltips."""

    def test_auto_label_is_density_column(self, table):
        plot = BagPlot()
        assert plot.get_labels() is None
        plot.set_input_data(table, 'x', 'y', 'density')
        assert plot.get_labels() == ['density']

    def test_explicit_labels_win(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        plot.labels = ['Bag']
        assert plot.get_label() == 'Bag'

    def test_default_tooltip(self, table):
        plot = BagPlot()
        plot.set_input_data(table, 'x', 'y', 'density')
        label = plot.get_tooltip_label((1.5, -2.0), 3)
        assert label == f"row3, density (1.5, -2): {table['density'][3]}"

    def test_tooltip_tags(self):
        plot = BagPlot()
        plot.set_input_data({'x': [0.0, 1.0], 'y': [0.0, 1.0], 'd': [0.25, 0.75]})
        plot.indexed_labels = ['first', 'second']
        plot.tooltip_label_format = "%i #%c z=%z %q 100%%"
        assert plot.get_tooltip_label((0.0, 0.0), 1) == "second #1 z=0.75 %q 100%%"

    def test_tooltip_unknown_values(self):
        plot = BagPlot()
        plot.tooltip_label_format = "%C %z %i."
        assert plot.get_tooltip_label((0.0, 0.0), 0) == "? ? ."

    def test_trailing_percent_dropped(self):
        plot = BagPlot()
        plot.tooltip_label_format = "%x%"
        assert plot.get_tooltip_label((2.0, 0.0), 0) == "2"
