import math
import unittest

import numpy as np

from rsim.core.path_metrics import (
    metrics_frame,
    path_metrics,
    percentile_path_metrics,
    risk_of_ruin,
    trade_returns,
)


class RiskOfRuinTests(unittest.TestCase):
    def test_share_of_paths_breaching_threshold(self) -> None:
        self.assertAlmostEqual(risk_of_ruin([-0.1, -0.3, -0.5], 30), 2 / 3)

    def test_threshold_sign_is_ignored(self) -> None:
        self.assertEqual(risk_of_ruin([-0.1, -0.3], -30), risk_of_ruin([-0.1, -0.3], 30))

    def test_empty(self) -> None:
        self.assertEqual(risk_of_ruin([], 30), 0.0)


class PathMetricsTests(unittest.TestCase):
    def test_trade_returns_relative_to_previous_equity(self) -> None:
        returns = trade_returns([110.0, 99.0, 99.0], 100.0)
        np.testing.assert_allclose(returns, [0.1, -0.1, 0.0])

    def test_flat_path_has_zero_ratios(self) -> None:
        metrics = path_metrics([100.0] * 12, 100.0, 12)
        self.assertEqual(metrics.annualized_return, 0.0)
        self.assertEqual(metrics.sharpe, 0.0)
        self.assertEqual(metrics.calmar, 0.0)
        self.assertEqual(metrics.max_drawdown, 0.0)

    def test_annualisation(self) -> None:
        # 24 trades, 12 per year: total +21% compounds to 10% a year
        equity = 100.0 * np.cumprod(np.full(24, 1.21 ** (1 / 24)))
        metrics = path_metrics(equity, 100.0, 12)
        self.assertAlmostEqual(metrics.annualized_return, 0.10, places=9)
        self.assertEqual(metrics.max_drawdown, 0.0)
        self.assertEqual(metrics.calmar, 0.0)

    def test_sharpe_and_calmar_signs(self) -> None:
        equity = [110.0, 99.0, 108.9, 119.79]
        metrics = path_metrics(equity, 100.0, 48)
        self.assertGreater(metrics.sharpe, 0)
        self.assertAlmostEqual(metrics.max_drawdown, -0.1)
        self.assertGreater(metrics.calmar, 0)
        self.assertTrue(math.isfinite(metrics.annualized_std))

    def test_percentile_path_metrics_picks_actual_paths(self) -> None:
        paths = [np.array([100.0, v]) for v in (90.0, 100.0, 110.0, 120.0, 130.0)]
        finals = [float(p[-1]) for p in paths]
        rows = percentile_path_metrics(paths, finals, 100.0, 12, percentiles=[0, 50, 100])
        self.assertEqual([row.path_index for row in rows], [0, 2, 4])
        frame = metrics_frame(rows)
        self.assertEqual(len(frame), 3)
        self.assertIn("sharpe", frame.columns)


if __name__ == "__main__":
    unittest.main()
