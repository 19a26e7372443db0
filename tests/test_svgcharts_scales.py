from __future__ import annotations

import dataclasses
import unittest

import numpy as np

from svgcharts.errors import ScaleConfigError, UnknownCategoryError
from svgcharts.scales import (
    BandScale,
    LinearScale,
    ScaleKind,
    band_center,
    generate_nice_ticks,
    nice_tick_increment,
    tick_step,
)


class BandScaleTests(unittest.TestCase):
    def test_three_categories_over_700px(self) -> None:
        scale = BandScale(domain=("A", "B", "C"), range=(0, 700))
        step = 700 / 3.1
        self.assertAlmostEqual(scale.step, step)
        self.assertAlmostEqual(scale.bandwidth(), step * 0.9)
        self.assertAlmostEqual(scale.scale("A"), step * 0.1)
        self.assertAlmostEqual(scale.scale("B") - scale.scale("A"), step)
        self.assertAlmostEqual(scale.scale("C") - scale.scale("B"), step)

    def test_offsets_match_domain_length_and_step_is_constant(self) -> None:
        scale = BandScale(domain=tuple("abcdefg"), range=(10, 410)).with_padding(inner=0.2, outer=0.05)
        self.assertEqual(len(scale.offsets), len(scale.domain))
        diffs = np.diff(np.asarray(scale.offsets))
        self.assertTrue(np.allclose(diffs, scale.step))
        self.assertLessEqual(scale.bandwidth(), scale.step)

    def test_duplicates_keep_first_occurrence(self) -> None:
        scale = BandScale(domain=("A", "B", "A", "C", "B"), range=(0, 300))
        self.assertEqual(scale.domain, ("A", "B", "C"))
        self.assertEqual(len(scale.offsets), 3)
        self.assertEqual(scale.index_of("C"), 2)

    def test_unknown_category_fails_loudly(self) -> None:
        scale = BandScale(domain=("A", "B"), range=(0, 100))
        with self.assertRaises(UnknownCategoryError) as ctx:
            scale.scale("Z")
        self.assertEqual(ctx.exception.category, "Z")
        self.assertIsInstance(ctx.exception, LookupError)

    def test_reversed_range_mirrors_offsets(self) -> None:
        forward = BandScale(domain=("A", "B", "C"), range=(0, 700))
        backward = forward.with_range(700, 0)
        self.assertTrue(backward.is_range_reversed())
        self.assertEqual(backward.range_start(), 700.0)
        self.assertAlmostEqual(backward.scale("A"), forward.scale("C"))
        self.assertAlmostEqual(backward.scale("C"), forward.scale("A"))
        self.assertAlmostEqual(backward.bandwidth(), forward.bandwidth())

    def test_rescale_is_idempotent(self) -> None:
        scale = BandScale(domain=("x", "y"), range=(0, 200))
        again = scale.with_range(0, 200).with_domain(("x", "y"))
        self.assertEqual(scale, again)
        self.assertEqual(scale.offsets, again.offsets)
        self.assertEqual(scale.bandwidth(), again.bandwidth())

    def test_builders_return_new_instances(self) -> None:
        scale = BandScale(domain=("A",), range=(0, 100))
        moved = scale.with_align(0.0)
        self.assertEqual(scale.align, 0.5)
        self.assertEqual(moved.align, 0.0)
        with self.assertRaises(dataclasses.FrozenInstanceError):
            scale.align = 1.0  # type: ignore[misc]

    def test_empty_domain_has_no_ticks(self) -> None:
        scale = BandScale()
        self.assertEqual(scale.offsets, ())
        self.assertEqual(list(scale.ticks()), [])

    def test_invalid_padding_is_rejected(self) -> None:
        with self.assertRaises(ScaleConfigError):
            BandScale(domain=("A",), padding_inner=1.0)
        with self.assertRaises(ScaleConfigError):
            BandScale(domain=("A",), align=1.5)
        with self.assertRaises(ScaleConfigError):
            BandScale(domain="ABC")

    def test_ticks_are_the_domain(self) -> None:
        scale = BandScale(domain=("A", "B"), range=(0, 100))
        self.assertEqual(scale.kind, ScaleKind.BAND)
        self.assertEqual(list(scale.ticks()), ["A", "B"])


class LinearScaleTests(unittest.TestCase):
    def test_endpoints_are_exact(self) -> None:
        scale = LinearScale(domain=(0, 100), range=(500, 0))
        self.assertEqual(scale.scale(0), 500.0)
        self.assertEqual(scale.scale(100), 0.0)
        self.assertTrue(scale.is_range_reversed())
        self.assertIsNone(scale.bandwidth())

    def test_monotonic_mapping(self) -> None:
        scale = LinearScale(domain=(0, 100), range=(500, 0))
        pixels = [scale.scale(v) for v in range(0, 101, 5)]
        self.assertTrue(all(a > b for a, b in zip(pixels, pixels[1:])))

    def test_degenerate_domain_maps_to_midpoint(self) -> None:
        scale = LinearScale(domain=(5, 5), range=(0, 100))
        self.assertEqual(scale.scale(5), 50.0)
        self.assertEqual(scale.scale(123), 50.0)

    def test_invert_round_trips_pixels(self) -> None:
        scale = LinearScale(domain=(0, 100), range=(500, 0))
        self.assertAlmostEqual(scale.invert(250), 50.0)

    def test_ticks_for_0_to_100(self) -> None:
        scale = LinearScale(domain=(0, 100), range=(0, 500))
        self.assertEqual(list(scale.ticks(10)), [float(v) for v in range(0, 101, 10)])
        self.assertEqual(scale.tick_step(10), 10.0)

    def test_nice_extends_domain_to_round_values(self) -> None:
        scale = LinearScale(domain=(0.5, 97.3), range=(0, 500)).nice()
        self.assertEqual(scale.domain, (0.0, 100.0))
        self.assertEqual(scale.range, (0.0, 500.0))

    def test_non_numeric_domain_is_rejected(self) -> None:
        with self.assertRaises(ScaleConfigError):
            LinearScale(domain=("a", "b"))
        with self.assertRaises(ScaleConfigError):
            LinearScale(domain=(0, float("inf")))
        with self.assertRaises(ScaleConfigError):
            LinearScale(range=(0, 1, 2))  # type: ignore[arg-type]

    def test_band_center_adds_half_bandwidth(self) -> None:
        band = BandScale(domain=("A", "B"), range=(0, 200))
        linear = LinearScale(domain=(0, 10), range=(0, 100))
        self.assertAlmostEqual(band_center(band, "B"), band.scale("B") + band.bandwidth() / 2)
        self.assertEqual(band_center(linear, 5), 50.0)


class NiceTickTests(unittest.TestCase):
    def test_increment_snaps_to_1_2_5(self) -> None:
        self.assertEqual(nice_tick_increment(0, 100, 10), 10.0)
        self.assertEqual(nice_tick_increment(0, 1000, 5), 200.0)
        self.assertEqual(nice_tick_increment(0, 97, 10), 10.0)

    def test_small_steps_are_returned_as_negative_inverse(self) -> None:
        self.assertEqual(nice_tick_increment(0, 1, 5), -5.0)
        self.assertAlmostEqual(tick_step(0, 1, 5), 0.2)

    def test_fractional_ticks_are_exact(self) -> None:
        ticks = generate_nice_ticks(0, 1, 5)
        self.assertEqual(ticks.tolist(), [0.0, 0.2, 0.4, 0.6, 0.8, 1.0])

    def test_reversed_domain_gives_descending_ticks(self) -> None:
        ticks = generate_nice_ticks(100, 0, 10)
        self.assertEqual(ticks.tolist(), [float(v) for v in range(100, -1, -10)])

    def test_equal_bounds_give_single_tick(self) -> None:
        self.assertEqual(generate_nice_ticks(5, 5).tolist(), [5.0])

    def test_ticks_stay_inside_domain(self) -> None:
        ticks = generate_nice_ticks(3.3, 47.1, 10)
        self.assertGreaterEqual(ticks[0], 3.3)
        self.assertLessEqual(ticks[-1], 47.1)
        self.assertTrue(np.allclose(np.diff(ticks), 5.0))

    def test_invalid_count_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            nice_tick_increment(0, 1, 0)
        with self.assertRaises(ValueError):
            generate_nice_ticks(0, 1, 0)


if __name__ == "__main__":
    unittest.main()
