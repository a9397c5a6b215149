from __future__ import annotations

import math
import unittest

import numpy as np

from graphclip import InvalidRangeError, Viewport


class ViewportTests(unittest.TestCase):
    def test_contains_is_inclusive(self) -> None:
        vp = Viewport(0.0, 100.0, -1.0, 1.0)
        self.assertTrue(vp.contains(0.0, -1.0))
        self.assertTrue(vp.contains(100.0, 1.0))
        self.assertFalse(vp.contains(100.0001, 0.0))
        self.assertFalse(vp.contains(50.0, 1.5))

    def test_invalid_bounds_raise(self) -> None:
        with self.assertRaises(InvalidRangeError):
            Viewport(1.0, 1.0, 0.0, 1.0)
        with self.assertRaises(InvalidRangeError):
            Viewport(0.0, 1.0, 5.0, 2.0)
        with self.assertRaises(InvalidRangeError):
            Viewport(0.0, math.inf, 0.0, 1.0)

    def test_invalid_range_error_is_value_error(self) -> None:
        with self.assertRaises(ValueError):
            Viewport(0.0, 1.0, 1.0, 0.0)

    def test_clamp_x_range_truncates_to_bounds(self) -> None:
        vp = Viewport(0.0, 100.0, 0.0, 100.0)
        self.assertEqual(vp.clamp_x_range((-20.0, 150.0)), (0.0, 100.0))
        self.assertEqual(vp.clamp_x_range((10.0, 20.0)), (10.0, 20.0))

    def test_contains_mask_matches_scalar_contains(self) -> None:
        vp = Viewport(0.0, 10.0, 0.0, 10.0)
        x = np.asarray([-1.0, 0.0, 5.0, 10.0, 11.0])
        y = np.asarray([5.0, 5.0, 20.0, 10.0, 5.0])
        mask = vp.contains_mask(x, y)
        self.assertEqual(mask.tolist(), [vp.contains(a, b) for a, b in zip(x, y)])
        self.assertEqual(mask.tolist(), [False, True, False, True, False])

    def test_viewport_is_immutable(self) -> None:
        vp = Viewport(0.0, 1.0, 0.0, 1.0)
        with self.assertRaises(AttributeError):
            vp.x_min = 0.5  # type: ignore[misc]
