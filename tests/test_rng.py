import math
import unittest

import numpy as np

from rsim.core.rng import Mulberry32, create_rng, normalise_seed


class Mulberry32Tests(unittest.TestCase):
    def test_same_seed_repeats_sequence(self) -> None:
        first = Mulberry32(25)
        second = Mulberry32(25)
        self.assertEqual([first.random() for _ in range(500)], [second.random() for _ in range(500)])

    def test_different_seeds_diverge(self) -> None:
        a = [Mulberry32(1).random() for _ in range(5)]
        b = [Mulberry32(2).random() for _ in range(5)]
        self.assertNotEqual(a, b)

    def test_values_in_unit_interval(self) -> None:
        rng = Mulberry32(12345)
        values = [rng.random() for _ in range(10_000)]
        self.assertTrue(all(0.0 <= v < 1.0 for v in values))
        self.assertAlmostEqual(sum(values) / len(values), 0.5, delta=0.02)

    def test_negative_seed_wraps_to_unsigned(self) -> None:
        self.assertEqual(Mulberry32(-1).state, 0xFFFFFFFF)
        self.assertEqual(Mulberry32(-1).random(), Mulberry32(0xFFFFFFFF).random())


class CreateRngTests(unittest.TestCase):
    def test_finite_seed_is_truncated(self) -> None:
        rng = create_rng(3.9)
        self.assertIsInstance(rng, Mulberry32)
        self.assertEqual(rng.random(), Mulberry32(3).random())

    def test_missing_or_non_finite_seed_falls_back(self) -> None:
        for seed in (None, math.nan, math.inf, -math.inf, "abc"):
            with self.subTest(seed=seed):
                rng = create_rng(seed)
                self.assertIsInstance(rng, np.random.Generator)
                value = rng.random()
                self.assertTrue(0.0 <= value < 1.0)

    def test_normalise_seed(self) -> None:
        self.assertEqual(normalise_seed(25), 25)
        self.assertEqual(normalise_seed(-2.7), -2)
        self.assertEqual(normalise_seed("7"), 7)
        self.assertIsNone(normalise_seed(True))
        self.assertIsNone(normalise_seed(math.nan))


if __name__ == "__main__":
    unittest.main()
