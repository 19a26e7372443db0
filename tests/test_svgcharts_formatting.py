from __future__ import annotations

import unittest

import numpy as np

from svgcharts.errors import ChartConfigError
from svgcharts.formatting import (
    FormatSpec,
    format_tick,
    format_ticks_for_axis,
    format_value,
    parse_format_spec,
    round_label,
)


class TickFormattingTests(unittest.TestCase):
    def test_tick_formatting_uses_consistent_decimals_from_step(self) -> None:
        ticks = np.asarray([1.5, 2.0, 2.5, 3.0], dtype=np.float64)
        self.assertEqual(format_ticks_for_axis(ticks), ["1.5", "2", "2.5", "3"])

    def test_tick_formatting_preserves_integer_trailing_zeros(self) -> None:
        self.assertEqual(format_ticks_for_axis([20.0, 30.0, 40.0]), ["20", "30", "40"])

    def test_tick_formatting_snaps_near_zero(self) -> None:
        labels = format_ticks_for_axis([-1.0, -4.4409e-16, 1.0])
        self.assertEqual(labels[1], "0")

    def test_single_tick_and_empty_input(self) -> None:
        self.assertEqual(format_ticks_for_axis([5.0]), ["5"])
        self.assertEqual(format_ticks_for_axis([]), [])

    def test_format_tick_trims_fraction_only(self) -> None:
        self.assertEqual(format_tick(100.0), "100")
        self.assertEqual(format_tick(0.25), "0.25")


class FormatSpecTests(unittest.TestCase):
    def test_parse_supported_specs(self) -> None:
        self.assertEqual(parse_format_spec(".2s"), FormatSpec(kind="s", precision=2, group_thousands=False))
        self.assertEqual(parse_format_spec(",.1f"), FormatSpec(kind="f", precision=1, group_thousands=True))
        self.assertEqual(parse_format_spec("d"), FormatSpec(kind="d", precision=None, group_thousands=False))

    def test_parse_rejects_unknown_specs(self) -> None:
        for bad in ("", "x", ".2q", "%%", ".0s"):
            with self.subTest(spec=bad):
                with self.assertRaises(ChartConfigError):
                    parse_format_spec(bad)

    def test_si_prefix(self) -> None:
        self.assertEqual(format_value(1500, "s"), "1.5k")
        self.assertEqual(format_value(0, "s"), "0")
        self.assertEqual(format_value(250, "s"), "250")

    def test_si_prefix_with_significant_digits(self) -> None:
        self.assertEqual(format_value(1234567, ".2s"), "1.2M")
        self.assertEqual(format_value(2000, ".2s"), "2.0k")
        self.assertEqual(format_value(-42000, ".3s"), "-42.0k")

    def test_fixed_percent_and_integer(self) -> None:
        self.assertEqual(format_value(3.14159, ".2f"), "3.14")
        self.assertEqual(format_value(0.25, ".1%"), "25.0%")
        self.assertEqual(format_value(3.7, "d"), "4")

    def test_thousands_grouping(self) -> None:
        self.assertEqual(format_value(1234567.891, ",.2f"), "1,234,567.89")
        self.assertEqual(format_value(-9876543, ",d"), "-9,876,543")

    def test_format_applies_per_tick(self) -> None:
        labels = format_ticks_for_axis([0.0, 1000.0, 2000.0], ".2s")
        self.assertEqual(labels, ["0", "1.0k", "2.0k"])


class RoundLabelTests(unittest.TestCase):
    def test_round_label(self) -> None:
        self.assertEqual(round_label(3.14159, 2), "3.14")
        self.assertEqual(round_label(70.0, 1), "70.0")
        self.assertEqual(round_label(70.0, None), "70")


if __name__ == "__main__":
    unittest.main()
