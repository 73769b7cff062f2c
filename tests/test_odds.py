import unittest

from scratchcore.core.diagnostics import DiagnosticLog
from scratchcore.core.layouts import DEFAULT_LAYOUTS
from scratchcore.core.models import PrizeConfig, RevealMechanic, ScratchAreaConfig, TicketLayout, WinCondition
from scratchcore.core.odds import (
    OddsEstimator,
    binomial_tail,
    compute_odds,
    format_odds,
    format_percentage,
    match_probability,
)


def make_layout(condition, area_count=3, prizes=(), **kwargs):
    return TicketLayout(
        id="odds-test",
        scratch_areas=[ScratchAreaConfig(id=f"area-{i + 1}") for i in range(area_count)],
        win_condition=condition,
        prize_configs=[PrizeConfig(prize_id=p, weight=w) for p, w in prizes],
        **kwargs,
    )


class TestFormatting(unittest.TestCase):

    def test_format_percentage_bands(self):
        self.assertEqual(format_percentage(0.5), "50.0%")
        self.assertEqual(format_percentage(0.05), "5.00%")
        self.assertEqual(format_percentage(0.005), "0.500%")
        self.assertEqual(format_percentage(0.0005), "0.0500%")

    def test_format_odds(self):
        self.assertEqual(format_odds(0), "N/A")
        self.assertEqual(format_odds(0.6), "~1 in 1")
        self.assertEqual(format_odds(0.25), "1 in 4")
        self.assertEqual(format_odds(1 / 250), "1 in 250")
        self.assertEqual(format_odds(1 / 1234), "1 in 1200")


class TestPrizeProbabilities(unittest.TestCase):

    def setUp(self):
        self.diagnostics = DiagnosticLog(forward_to_logger=False)

    def test_single_prize_is_certain(self):
        layout = make_layout(WinCondition.MATCH_THREE, prizes=[("grand-prize", 100)])
        odds = compute_odds(layout, diagnostics=self.diagnostics)
        self.assertEqual(len(odds.prizes), 1)
        self.assertEqual(odds.prizes[0].probability, 1.0)
        self.assertEqual(odds.prizes[0].odds_str, "~1 in 1")
        self.assertEqual(odds.win_probability, 1.0)
        self.assertEqual(odds.win_probability_str, "100.0%")

    def test_invalid_entries_are_skipped(self):
        layout = make_layout(
            WinCondition.MATCH_TWO,
            prizes=[("shield", 1), ("ghost", 5), ("crown", 0), ("diamond", 3)],
        )
        odds = compute_odds(layout, diagnostics=self.diagnostics)
        self.assertEqual([p.prize_id for p in odds.prizes], ["shield", "diamond"])
        self.assertEqual(odds.total_weight, 4)
        self.assertAlmostEqual(odds.prizes[1].probability, 0.75)
        self.assertEqual(self.diagnostics.codes(), ["prize-not-found", "non-positive-weight"])

    def test_nan_weight_is_skipped(self):
        layout = make_layout(WinCondition.MATCH_TWO, prizes=[("crown", 1)])
        layout.prize_configs.insert(0, PrizeConfig.model_construct(prize_id="shield", weight=float("nan")))
        odds = compute_odds(layout, diagnostics=self.diagnostics)
        self.assertEqual([p.prize_id for p in odds.prizes], ["crown"])
        self.assertEqual(odds.total_weight, 1)
        self.assertEqual(odds.prizes[0].odds_str, "~1 in 1")
        self.assertEqual(odds.win_probability, 1.0)
        self.assertEqual(self.diagnostics.codes(), ["non-positive-weight"])

    def test_no_valid_prizes(self):
        layout = make_layout(WinCondition.NO_WIN_CONDITION, prizes=[("ghost", 1)])
        odds = compute_odds(layout, diagnostics=self.diagnostics)
        self.assertEqual(odds.prizes, [])
        self.assertEqual(odds.win_probability, 0.0)
        self.assertEqual(odds.total_weight, 0)


class TestWinProbability(unittest.TestCase):

    def setUp(self):
        self.diagnostics = DiagnosticLog(forward_to_logger=False)

    def win(self, layout):
        return compute_odds(layout, diagnostics=self.diagnostics).win_probability

    def test_always_win_conditions(self):
        for condition in (
            WinCondition.NO_WIN_CONDITION,
            WinCondition.REVEAL_ANY_AREA,
            WinCondition.REVEAL_ALL_AREAS,
            WinCondition.PROGRESSIVE_REVEAL,
        ):
            layout = make_layout(condition, prizes=[("shield", 1), ("crown", 9)])
            self.assertEqual(self.win(layout), 1.0, condition)

    def test_match_two_sums_binomial_tails(self):
        layout = make_layout(WinCondition.MATCH_TWO, area_count=2, prizes=[("shield", 1), ("crown", 1)])
        self.assertAlmostEqual(self.win(layout), 0.5)

    def test_match_sum_is_clamped(self):
        layout = make_layout(WinCondition.MATCH_TWO, area_count=4, prizes=[("shield", 1), ("crown", 1)])
        self.assertEqual(self.win(layout), 1.0)

    def test_match_needs_enough_areas(self):
        layout = make_layout(WinCondition.MATCH_THREE, area_count=2, prizes=[("shield", 1)])
        self.assertEqual(self.win(layout), 0.0)
        self.assertEqual(match_probability([1.0], 2, 3), 0.0)

    def test_match_all_uses_area_count(self):
        layout = make_layout(WinCondition.MATCH_ALL, area_count=4, prizes=[("shield", 1), ("crown", 1)])
        self.assertAlmostEqual(self.win(layout), 2 * 0.5 ** 4)

    def test_match_symbols_follows_reveal_mechanic(self):
        prizes = [("shield", 1), ("crown", 1)]
        two = make_layout(WinCondition.MATCH_SYMBOLS, prizes=prizes, reveal_mechanic=RevealMechanic.MATCH_TWO)
        three = make_layout(WinCondition.MATCH_SYMBOLS, prizes=prizes, reveal_mechanic=RevealMechanic.MATCH_THREE)
        self.assertAlmostEqual(self.win(two), min(1.0, 2 * binomial_tail(3, 2, 0.5)))
        self.assertAlmostEqual(self.win(three), 2 * 0.5 ** 3)

    def test_find_one_dynamic(self):
        layout = make_layout(
            WinCondition.FIND_ONE_DYNAMIC,
            area_count=4,
            prizes=[("shield", 1), ("crown", 1)],
            winning_symbol_area_id="area-1",
        )
        self.assertAlmostEqual(self.win(layout), 0.875)

    def test_find_one_is_exact(self):
        layout = make_layout(
            WinCondition.FIND_ONE,
            prizes=[("crown", 1), ("shield", 3)],
            target_prize_id="crown",
        )
        self.assertAlmostEqual(self.win(layout), 0.578125)

    def test_find_one_without_target(self):
        layout = make_layout(WinCondition.FIND_ONE, prizes=[("crown", 1)])
        self.assertEqual(self.win(layout), 0.0)
        self.assertEqual(self.diagnostics.codes(), ["missing-target-prize"])

    def test_total_value_is_exact(self):
        layout = make_layout(
            WinCondition.TOTAL_VALUE_THRESHOLD,
            area_count=2,
            prizes=[("shield", 1), ("crown", 1)],
            value_threshold=225,
        )
        # 25+200, 200+25 and 200+200 reach the threshold
        self.assertAlmostEqual(self.win(layout), 0.75)

    def test_total_value_without_threshold(self):
        layout = make_layout(WinCondition.TOTAL_VALUE_THRESHOLD, prizes=[("crown", 1)])
        self.assertEqual(self.win(layout), 0.0)
        self.assertEqual(self.diagnostics.codes(), ["missing-value-threshold"])

    def test_default_grid_layout(self):
        estimator = OddsEstimator()
        odds = estimator.compute_odds(DEFAULT_LAYOUTS["grid"], diagnostics=self.diagnostics)
        self.assertEqual(odds.scratch_area_count, 9)
        self.assertEqual(odds.win_condition, WinCondition.MATCH_THREE)
        self.assertTrue(0 < odds.win_probability <= 1)
        self.assertAlmostEqual(sum(p.probability for p in odds.prizes), 1.0)
        self.assertIn("9 areas", odds.win_condition_explanation)


if __name__ == "__main__":
    unittest.main()
