import unittest
from collections import Counter

from pydantic import ValidationError

from scratchcore.core.catalog import prize_catalog
from scratchcore.core.diagnostics import DiagnosticLog
from scratchcore.core.exceptions import NoPrizeConfiguration, NoValidPrizes
from scratchcore.core.models import PrizeConfig, ScratchAreaConfig, TicketLayout, WinCondition
from scratchcore.core.prize_pool import PrizePool, get_prize_gold_value, validate_prize_configs
from scratchcore.core.rng import SeededRNG


class FixedRNG:
    """Returns the given floats in turn, repeating the last one."""

    def __init__(self, *values):
        self.values = list(values)

    def random_float(self):
        if len(self.values) > 1:
            return self.values.pop(0)
        return self.values[0]


def configs(*pairs):
    return [PrizeConfig(prize_id=prize_id, weight=weight) for prize_id, weight in pairs]


class TestDrawPrize(unittest.TestCase):

    def setUp(self):
        self.diagnostics = DiagnosticLog(forward_to_logger=False)

    def test_empty_configuration_fails(self):
        pool = PrizePool(rng=FixedRNG(0.5))
        with self.assertRaises(NoPrizeConfiguration):
            pool.draw_prize([], diagnostics=self.diagnostics)

    def test_all_entries_invalid_fails(self):
        pool = PrizePool(rng=FixedRNG(0.5))
        with self.assertRaises(NoValidPrizes):
            pool.draw_prize(configs(("does-not-exist", 5), ("diamond", 0)), diagnostics=self.diagnostics)
        self.assertEqual(self.diagnostics.codes(), ["prize-not-found", "non-positive-weight"])

    def test_invalid_entries_are_skipped_not_fatal(self):
        pool = PrizePool(rng=FixedRNG(0.0))
        prize = pool.draw_prize(
            configs(("ghost", 10), ("shield", -3), ("crown", 2)), diagnostics=self.diagnostics
        )
        self.assertEqual(prize.id, "crown")
        self.assertEqual(len(self.diagnostics), 2)

    def test_linear_scan_in_config_order(self):
        entries = configs(("shield", 1), ("crown", 1), ("diamond", 2))
        # total 4: [0, 1] -> shield, (1, 2] -> crown, (2, 4) -> diamond
        self.assertEqual(PrizePool(rng=FixedRNG(0.0)).draw_prize(entries).id, "shield")
        self.assertEqual(PrizePool(rng=FixedRNG(0.25)).draw_prize(entries).id, "shield")
        self.assertEqual(PrizePool(rng=FixedRNG(0.4)).draw_prize(entries).id, "crown")
        self.assertEqual(PrizePool(rng=FixedRNG(0.6)).draw_prize(entries).id, "diamond")
        self.assertEqual(PrizePool(rng=FixedRNG(0.999999)).draw_prize(entries).id, "diamond")

    def test_last_survivor_is_fallback(self):
        # A source misbehaving past the total still yields a prize
        pool = PrizePool(rng=FixedRNG(1.5))
        prize = pool.draw_prize(configs(("shield", 1), ("crown", 1), ("ghost", 4)), diagnostics=self.diagnostics)
        self.assertEqual(prize.id, "crown")

    def test_non_finite_weights_are_rejected_on_load(self):
        with self.assertRaises(ValidationError):
            PrizeConfig.model_validate_json('{"prizeId": "shield", "weight": NaN}')
        with self.assertRaises(ValidationError):
            PrizeConfig(prize_id="shield", weight=float("inf"))

    def test_nan_weight_is_skipped_when_drawing(self):
        # Built without validation, as a caller mutating configs could
        entries = [
            PrizeConfig.model_construct(prize_id="shield", weight=float("nan")),
            PrizeConfig(prize_id="crown", weight=1),
        ]
        pool = PrizePool(rng=SeededRNG(3))
        draws = {pool.draw_prize(entries, diagnostics=self.diagnostics).id for _ in range(50)}
        self.assertEqual(draws, {"crown"})
        self.assertEqual(set(self.diagnostics.codes()), {"non-positive-weight"})

    def test_frequencies_follow_weights(self):
        pool = PrizePool(rng=SeededRNG(42))
        entries = configs(("shield", 1), ("crown", 3))
        draws = Counter(pool.draw_prize(entries).id for _ in range(20000))
        self.assertAlmostEqual(draws["shield"] / 20000, 0.25, delta=0.02)
        self.assertAlmostEqual(draws["crown"] / 20000, 0.75, delta=0.02)

    def test_seeded_pools_are_reproducible(self):
        entries = configs(("shield", 1), ("crown", 1), ("diamond", 1), ("grand-prize", 1))
        first = PrizePool(rng=SeededRNG(7))
        second = PrizePool(rng=SeededRNG(7))
        self.assertEqual(
            [first.draw_prize(entries).id for _ in range(50)],
            [second.draw_prize(entries).id for _ in range(50)],
        )


class TestDrawAreaPrizes(unittest.TestCase):

    def test_one_draw_per_area_with_replacement(self):
        layout = TicketLayout(
            id="three",
            scratch_areas=[ScratchAreaConfig(id=f"a{i}") for i in range(3)],
            win_condition=WinCondition.MATCH_THREE,
            prize_configs=configs(("grand-prize", 1)),
        )
        area_prizes = PrizePool(rng=SeededRNG(1)).draw_area_prizes(layout)
        self.assertEqual(list(area_prizes), ["a0", "a1", "a2"])
        self.assertTrue(all(p.id == "grand-prize" for p in area_prizes.values()))

    def test_layout_without_prizes_fails(self):
        layout = TicketLayout(
            id="empty",
            scratch_areas=[ScratchAreaConfig(id="a")],
            win_condition=WinCondition.REVEAL_ANY_AREA,
        )
        with self.assertRaises(NoPrizeConfiguration) as ctx:
            PrizePool(rng=SeededRNG(1)).draw_area_prizes(layout)
        self.assertEqual(ctx.exception.layout_id, "empty")


class TestPrizeHelpers(unittest.TestCase):

    def test_gold_value(self):
        self.assertEqual(get_prize_gold_value(prize_catalog.get_prize_by_id("grand-prize")), 1000)
        self.assertEqual(get_prize_gold_value(prize_catalog.get_prize_by_id("golden-key")), 0)
        self.assertEqual(get_prize_gold_value(prize_catalog.get_prize_by_id("hand-gold-boost")), 0)
        self.assertEqual(get_prize_gold_value(prize_catalog.get_prize_by_id("no-prize")), 0)

    def test_validate_prize_configs(self):
        self.assertEqual(validate_prize_configs(configs(("shield", 1))), [])

        messages = validate_prize_configs(configs(("ghost", 1), ("shield", 0)))
        self.assertIn('ERROR: Prize with ID "ghost" does not exist.', messages)
        self.assertTrue(any(
            m.startswith('WARNING: Prize "shield" has non-positive weight') for m in messages
        ))
        self.assertEqual(messages[-1], "ERROR: No valid prizes with positive weights configured.")

        self.assertTrue(validate_prize_configs([])[0].startswith("ERROR: No prize configurations"))


if __name__ == "__main__":
    unittest.main()
