from __future__ import annotations

import unittest

from svgcharts.colors import CATEGORY_10, DARK_8, TABLEAU_10, Color, coerce_palette
from svgcharts.style import DEFAULT_STYLE, resolve_chart_style


class ChartStyleTests(unittest.TestCase):
    def test_defaults(self) -> None:
        self.assertEqual(DEFAULT_STYLE.tick_size, 6.0)
        self.assertEqual(DEFAULT_STYLE.tick_label_offset, 16.0)
        self.assertEqual(DEFAULT_STYLE.legend_gap, 10.0)
        self.assertEqual(DEFAULT_STYLE.legend_row_height, 20.0)
        self.assertEqual(resolve_chart_style(), DEFAULT_STYLE)

    def test_overrides_are_merged(self) -> None:
        style = resolve_chart_style({"axis_color": "#000", "legend_gap": 4})
        self.assertEqual(style.axis_color, "#000")
        self.assertEqual(style.legend_gap, 4.0)
        self.assertEqual(style.tick_size, DEFAULT_STYLE.tick_size)

    def test_unknown_token_is_rejected(self) -> None:
        with self.assertRaisesRegex(ValueError, "Unknown style token"):
            resolve_chart_style({"background_music": "#fff"})

    def test_invalid_values_are_rejected(self) -> None:
        for overrides in (
            {"axis_color": "grey"},
            {"font_family": "  "},
            {"tick_size": 0},
            {"legend_row_height": -3},
            {"legend_gap": True},
            {"line_width": "2"},
        ):
            with self.subTest(overrides=overrides):
                with self.assertRaises(ValueError):
                    resolve_chart_style(overrides)


class PaletteTests(unittest.TestCase):
    def test_palette_sizes(self) -> None:
        self.assertEqual(len(CATEGORY_10), 10)
        self.assertEqual(len(TABLEAU_10), 10)
        self.assertEqual(len(DARK_8), 8)
        self.assertEqual(CATEGORY_10[0].as_hex(), "#1f77b4")

    def test_color_validation(self) -> None:
        self.assertEqual(Color.from_hex_strings(["#abc", "#A0B1C2"])[1].as_hex(), "#A0B1C2")
        with self.assertRaises(ValueError):
            Color("red")
        with self.assertRaises(ValueError):
            Color.from_hex_strings([])
        self.assertEqual(coerce_palette(["#123456", Color("#654321")])[1], Color("#654321"))


if __name__ == "__main__":
    unittest.main()
