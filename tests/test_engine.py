import math
import unittest

import numpy as np

from rsim.core.simulation_validation import validate_result
from rsim.engine import run_simulation
from rsim.models.bucket import Bucket, BucketType
from rsim.models.config import ProgressiveExposure, SimulationConfig


class ReproducibilityTests(unittest.TestCase):
    def setUp(self) -> None:
        self.config = SimulationConfig(n_paths=60, n_trades=120, seed=25, trades_per_month=25)

    def test_same_seed_gives_identical_results(self) -> None:
        first = run_simulation(self.config)
        second = run_simulation(self.config)
        self.assertEqual(first.final_equity, second.final_equity)
        for a, b in zip(first.equity_paths, second.equity_paths):
            np.testing.assert_array_equal(a, b)
        for a, b in zip(first.r_paths, second.r_paths):
            np.testing.assert_array_equal(a, b)
        self.assertEqual(
            (first.median_idx, first.best_idx, first.worst_idx),
            (second.median_idx, second.best_idx, second.worst_idx),
        )
        self.assertEqual(first.stats, second.stats)
        self.assertEqual(first.monthly_tables, second.monthly_tables)
        self.assertEqual(first.histograms, second.histograms)

    def test_progressive_runs_are_reproducible(self) -> None:
        config = self.config.model_copy(update={"progressive": ProgressiveExposure()})
        self.assertEqual(run_simulation(config).final_equity, run_simulation(config).final_equity)

    def test_different_seeds_differ(self) -> None:
        other = self.config.model_copy(update={"seed": 26})
        self.assertNotEqual(run_simulation(self.config).final_equity, run_simulation(other).final_equity)

    def test_unseeded_run_still_completes(self) -> None:
        result = run_simulation(SimulationConfig(n_paths=5, n_trades=10, seed=None))
        self.assertEqual(result.n_paths, 5)
        self.assertIsNone(result.seed)


class AggregateTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls) -> None:
        cls.config = SimulationConfig(n_paths=200, n_trades=150, seed=7, trades_per_month=40, histogram_bins=25)
        cls.result = run_simulation(cls.config)

    def test_shapes(self) -> None:
        result = self.result
        self.assertEqual(len(result.equity_paths), 200)
        self.assertTrue(all(path.size == 150 for path in result.equity_paths))
        self.assertEqual(len(result.final_equity), 200)
        self.assertEqual(len(result.drawdowns["median"]), 150)

    def test_representatives_match_extremes(self) -> None:
        finals = self.result.final_equity
        self.assertEqual(self.result.best_idx, int(np.argmax(finals)))
        self.assertEqual(self.result.worst_idx, int(np.argmin(finals)))
        target = self.result.stats.final50
        closest = min(abs(v - target) for v in finals)
        self.assertEqual(abs(finals[self.result.median_idx] - target), closest)

    def test_summary_ordering_and_signs(self) -> None:
        s = self.result.stats
        self.assertLessEqual(s.final5, s.final50)
        self.assertLessEqual(s.final50, s.final95)
        self.assertLessEqual(s.dd95, 0.0)
        self.assertTrue(all(dd <= 0 for dd in self.result.max_drawdowns))

    def test_equity_bounds(self) -> None:
        stacked = np.vstack(self.result.equity_paths)
        self.assertEqual(self.result.equity_min, float(stacked.min()))
        self.assertEqual(self.result.equity_max, float(stacked.max()))

    def test_histogram_counts(self) -> None:
        for name in ("drawdown", "final_equity"):
            hist = self.result.histograms[name]
            self.assertEqual(len(hist.counts), 25)
            self.assertEqual(hist.total, 200)

    def test_monthly_returns_compound_to_path_return(self) -> None:
        for name in ("median", "best", "worst"):
            idx = self.result.representative_index(name)
            rows = self.result.monthly_tables[name]
            self.assertEqual(len(rows), math.ceil(150 / 40))
            product = math.prod(1 + row.return_value for row in rows)
            expected = self.result.final_equity[idx] / self.config.start_equity
            self.assertAlmostEqual(product, expected, delta=1e-9)

    def test_representative_losses_match_paths(self) -> None:
        for name in ("median", "best", "worst"):
            idx = self.result.representative_index(name)
            self.assertEqual(self.result.representative_losses[name], self.result.max_consecutive_losses[idx])

    def test_risk_of_ruin_is_a_probability(self) -> None:
        self.assertGreaterEqual(self.result.risk_of_ruin, 0.0)
        self.assertLessEqual(self.result.risk_of_ruin, 1.0)

    def test_frames(self) -> None:
        self.assertEqual(len(self.result.monthly_frame("worst")), 4)
        self.assertEqual(self.result.summary_frame()["metric"].tolist()[0], "final_equity")
        ladder = self.result.percentile_table([5, 50, 95])
        self.assertAlmostEqual(ladder["final_equity"].iloc[1], self.result.stats.final50)
        with self.assertRaises(KeyError):
            self.result.monthly_frame("mean")

    def test_percentile_path_lookup(self) -> None:
        self.assertEqual(self.result.percentile_path_index(50), self.result.median_idx)
        path = self.result.percentile_path(100)
        self.assertEqual(float(path[-1]), max(self.result.final_equity))

    def test_result_passes_sanity_checks(self) -> None:
        self.assertEqual(validate_result(self.result).status, "PASS")


class ScenarioTests(unittest.TestCase):
    def test_single_losing_bucket(self) -> None:
        config = SimulationConfig(
            start_equity=10_000.0,
            n_trades=10,
            n_paths=1,
            risk_fraction=0.01,
            buckets=[Bucket(id="loss", p=1.0, type=BucketType.POINT, v=-1)],
        )
        result = run_simulation(config)
        self.assertAlmostEqual(result.final_equity[0], 10_000.0 * 0.99**10, places=6)
        self.assertAlmostEqual(result.max_drawdowns[0], -1 + 0.99**10, places=12)
        self.assertEqual(result.max_consecutive_losses[0], 10)

    def test_single_scratch_bucket(self) -> None:
        config = SimulationConfig(
            n_trades=30,
            n_paths=3,
            buckets=[Bucket(id="flat", p=1.0, type=BucketType.POINT, v=0)],
        )
        result = run_simulation(config)
        for path in result.equity_paths:
            self.assertTrue(np.all(path == config.start_equity))
        self.assertEqual(result.max_drawdowns, [0.0, 0.0, 0.0])
        self.assertEqual(result.max_consecutive_losses, [0, 0, 0])
        self.assertEqual(result.histograms["final_equity"].counts[0], 3)

    def test_degenerate_counts_are_coerced(self) -> None:
        config = SimulationConfig(n_trades=0, n_paths=-3, seed=float("nan"))
        self.assertEqual((config.n_trades, config.n_paths), (1, 1))
        self.assertIsNone(config.seed)
        result = run_simulation(config)
        self.assertEqual(result.n_paths, 1)
        self.assertEqual(result.n_trades, 1)
        self.assertEqual(result.median_idx, 0)

    def test_all_zero_weights_still_run(self) -> None:
        config = SimulationConfig(
            n_trades=5,
            n_paths=2,
            risk_fraction=0.1,
            buckets=[Bucket(id="a", p=0, v=-1), Bucket(id="b", p=0, v=1)],
        )
        result = run_simulation(config)
        self.assertTrue(all(np.all(r == 1.0) for r in result.r_paths))


class ResultCheckTests(unittest.TestCase):
    def test_wiped_out_equity_is_flagged_as_warning(self) -> None:
        config = SimulationConfig(
            start_equity=1_000.0,
            n_trades=3,
            n_paths=5,
            risk_fraction=1.0,
            buckets=[Bucket(id="loss", p=1.0, type=BucketType.POINT, v=-1)],
        )
        check = validate_result(run_simulation(config))
        self.assertEqual(check.status, "PASS")
        self.assertIn("non_positive_equity", check.warnings)
        self.assertIn("few_paths", check.warnings)
        self.assertEqual(check.to_dict()["failed_checks"], [])


if __name__ == "__main__":
    unittest.main()
