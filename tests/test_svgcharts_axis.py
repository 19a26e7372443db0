from __future__ import annotations

import unittest

from svgcharts.axis import AxisPosition, layout_axis
from svgcharts.components import Orientation
from svgcharts.errors import ChartConfigError
from svgcharts.scales import BandScale, LinearScale, ScaleKind
from svgcharts.style import resolve_chart_style


class AxisLayoutTests(unittest.TestCase):
    def test_bottom_band_axis_ticks_sit_at_band_centres(self) -> None:
        scale = BandScale(domain=("A", "B", "C"), range=(0, 700))
        axis = layout_axis(scale, AxisPosition.BOTTOM)
        self.assertEqual(axis.scale_kind, ScaleKind.BAND)
        self.assertEqual(axis.orientation, Orientation.HORIZONTAL)
        self.assertEqual([t.label for t in axis.ticks], ["A", "B", "C"])
        for tick, category in zip(axis.ticks, "ABC"):
            self.assertAlmostEqual(tick.offset, scale.scale(category) + scale.bandwidth() / 2)
            self.assertEqual(tick.y, 0.0)
            self.assertEqual(tick.x, tick.offset)
        tick = axis.ticks[0]
        self.assertEqual(tick.line_end, (0.0, 6.0))
        self.assertEqual((tick.label_x, tick.label_y), (0.0, 16.0))
        self.assertEqual(tick.anchor, "middle")
        self.assertEqual(axis.line, (0.0, 0.0, 700.0, 0.0))

    def test_top_axis_mirrors_bottom(self) -> None:
        axis = layout_axis(BandScale(domain=("A",), range=(0, 100)), AxisPosition.TOP)
        tick = axis.ticks[0]
        self.assertEqual(tick.line_end, (0.0, -6.0))
        self.assertEqual((tick.label_x, tick.label_y), (0.0, -16.0))
        self.assertEqual(tick.anchor, "middle")

    def test_left_linear_axis(self) -> None:
        scale = LinearScale(domain=(0, 100), range=(500, 0))
        axis = layout_axis(scale, AxisPosition.LEFT)
        self.assertEqual(axis.orientation, Orientation.VERTICAL)
        self.assertEqual(len(axis.ticks), 11)
        self.assertEqual(axis.ticks[0].label, "0")
        self.assertEqual(axis.ticks[-1].label, "100")
        self.assertEqual(axis.ticks[0].y, 500.0)
        self.assertEqual(axis.ticks[0].x, 0.0)
        self.assertEqual(axis.ticks[0].line_end, (-6.0, 0.0))
        self.assertEqual((axis.ticks[0].label_x, axis.ticks[0].label_y), (-16.0, 0.0))
        self.assertEqual(axis.ticks[0].anchor, "end")
        self.assertEqual(axis.line, (0.0, 0.0, 0.0, 500.0))

    def test_right_axis_labels_are_left_aligned(self) -> None:
        axis = layout_axis(LinearScale(domain=(0, 10), range=(100, 0)), AxisPosition.RIGHT)
        tick = axis.ticks[0]
        self.assertEqual(tick.line_end, (6.0, 0.0))
        self.assertEqual((tick.label_x, tick.label_y), (16.0, 0.0))
        self.assertEqual(tick.anchor, "start")

    def test_rotated_tick_labels_change_anchor(self) -> None:
        scale = BandScale(domain=("A",), range=(0, 100))
        bottom = layout_axis(scale, AxisPosition.BOTTOM, tick_label_rotation=-45)
        top = layout_axis(scale, AxisPosition.TOP, tick_label_rotation=-45)
        self.assertEqual(bottom.ticks[0].anchor, "end")
        self.assertEqual(bottom.ticks[0].rotation, -45.0)
        self.assertEqual(top.ticks[0].anchor, "start")
        self.assertEqual(layout_axis(scale, AxisPosition.BOTTOM, tick_label_rotation=30).ticks[0].anchor, "start")

    def test_format_only_changes_label_text(self) -> None:
        scale = LinearScale(domain=(0, 2000), range=(0, 400))
        plain = layout_axis(scale, AxisPosition.BOTTOM)
        formatted = layout_axis(scale, AxisPosition.BOTTOM, tick_label_format=".2s")
        self.assertEqual(formatted.ticks[-1].label, "2.0k")
        self.assertEqual(formatted.ticks[0].label, "0")
        self.assertEqual([t.offset for t in plain.ticks], [t.offset for t in formatted.ticks])
        self.assertEqual([t.value for t in plain.ticks], [t.value for t in formatted.ticks])

    def test_format_is_ignored_for_band_axis(self) -> None:
        axis = layout_axis(BandScale(domain=("A", "B")), AxisPosition.BOTTOM, tick_label_format=".2s")
        self.assertEqual([t.label for t in axis.ticks], ["A", "B"])

    def test_axis_label_placement_and_flag(self) -> None:
        scale = LinearScale(domain=(0, 10), range=(300, 0))
        unlabeled = layout_axis(scale, AxisPosition.LEFT)
        self.assertFalse(unlabeled.has_label)

        left = layout_axis(scale, AxisPosition.LEFT, label="Revenue")
        self.assertTrue(left.has_label)
        self.assertEqual((left.label_x, left.label_y, left.label_rotation), (-42.0, 150.0, -90.0))

        bottom = layout_axis(LinearScale(domain=(0, 10), range=(0, 300)), AxisPosition.BOTTOM, label="Year")
        self.assertEqual((bottom.label_x, bottom.label_y, bottom.label_rotation), (150.0, 42.0, 0.0))

    def test_style_drives_tick_geometry(self) -> None:
        style = resolve_chart_style({"tick_size": 10, "tick_label_offset": 20})
        axis = layout_axis(BandScale(domain=("A",)), AxisPosition.BOTTOM, style=style)
        self.assertEqual(axis.ticks[0].line_end, (0.0, 10.0))
        self.assertEqual(axis.ticks[0].label_y, 20.0)

    def test_invalid_inputs(self) -> None:
        with self.assertRaises(ChartConfigError):
            layout_axis(LinearScale(), AxisPosition.LEFT, tick_label_format="nope")
        with self.assertRaises(ChartConfigError):
            layout_axis(LinearScale(), AxisPosition.LEFT, tick_label_rotation=float("nan"))

    def test_empty_band_domain_warns(self) -> None:
        with self.assertLogs("svgcharts.axis", level="WARNING"):
            axis = layout_axis(BandScale(), AxisPosition.BOTTOM)
        self.assertEqual(axis.ticks, ())


if __name__ == "__main__":
    unittest.main()
