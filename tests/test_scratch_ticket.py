import unittest

from scratchcore.core.catalog import PrizeCatalog
from scratchcore.core.diagnostics import DiagnosticLog
from scratchcore.core.exceptions import UnknownLayoutError
from scratchcore.core.games.scratch_ticket import ScratchTicketGame
from scratchcore.core.layouts import BETTING_TICKET
from scratchcore.core.models import BetOption, BettingConfig
from scratchcore.core.prize_pool import PrizePool
from scratchcore.core.win_evaluator import WinEvaluator


class FixedRNG:
    def __init__(self, value):
        self.value = value

    def random_float(self):
        return self.value


def make_game(value):
    catalog = PrizeCatalog()
    return ScratchTicketGame(
        pool=PrizePool(catalog=catalog, rng=FixedRNG(value)),
        evaluator=WinEvaluator(),
        catalog=catalog,
    )


class TestScratchTicketGame(unittest.TestCase):

    def setUp(self):
        self.diagnostics = DiagnosticLog(forward_to_logger=False)

    def test_grid_jackpot(self):
        # First weight always drawn: nine grand prizes
        result = make_game(0.0).play("grid", diagnostics=self.diagnostics)
        self.assertTrue(result["success"])
        self.assertTrue(result["win"])
        self.assertEqual(result["prize_id"], "grand-prize")
        self.assertEqual(result["payout"], 1000)
        self.assertEqual(len(result["winning_areas"]), 9)
        self.assertEqual(result["hand_ticket"].gold_value, 1000)

    def test_partial_reveal_does_not_win(self):
        result = make_game(0.0).play("grid", ["grid-1-1", "grid-1-2"], diagnostics=self.diagnostics)
        self.assertFalse(result["win"])
        self.assertEqual(result["payout"], 0)
        self.assertIsNone(result["hand_ticket"])

    def test_match_layout_hides_names(self):
        result = make_game(0.0).play("grid", diagnostics=self.diagnostics)
        self.assertEqual(result["display"][0], {"emoji": "🏆", "name": "", "value": ""})

    def test_unknown_layout(self):
        with self.assertRaises(UnknownLayoutError):
            make_game(0.0).play("no-such-layout")

    def test_betting_requires_bet(self):
        result = make_game(0.0).play("betting", diagnostics=self.diagnostics)
        self.assertFalse(result["success"])
        self.assertIn("bet option", result["error"])

    def test_bet_multiplies_win(self):
        result = make_game(0.0).play("betting", bet_order=1, diagnostics=self.diagnostics)
        self.assertTrue(result["win"])
        self.assertEqual(result["payout"], 2000)
        self.assertTrue(result["multiplier_applied"])
        self.assertEqual(result["bet"], 5)

    def test_losing_bet_is_refunded(self):
        # Last weight drawn: no prize
        result = make_game(0.999999).play("betting", bet_order=1, diagnostics=self.diagnostics)
        self.assertEqual(result["prize_id"], "no-prize")
        self.assertEqual(result["payout"], 0)
        self.assertEqual(result["refund"], 5)

        result = make_game(0.999999).play("betting", bet_order=3, diagnostics=self.diagnostics)
        self.assertEqual(result["refund"], 0)
        self.assertEqual(result["net"], -30)

    def test_invalid_betting_config_is_rejected(self):
        layout = BETTING_TICKET.model_copy(update={
            "betting_config": BettingConfig(bet_options=[BetOption(order=1, bet_amount=5)])
        })
        result = make_game(0.0).play(layout, bet_order=1, diagnostics=self.diagnostics)
        self.assertFalse(result["success"])
        self.assertTrue(result["errors"])

    def test_hand_layout_yields_effect_ticket(self):
        # Hand booster weights: magic-potion first
        result = make_game(0.0).play("hand-boost", diagnostics=self.diagnostics)
        self.assertTrue(result["win"])
        self.assertEqual(result["prize_id"], "magic-potion")
        self.assertEqual(result["hand_ticket"].gold_value, 50)

        result = make_game(0.999999).play("hand-boost", diagnostics=self.diagnostics)
        self.assertEqual(result["prize_id"], "hand-mega-multiplier")
        self.assertEqual(result["payout"], 0)
        self.assertEqual(result["hand_ticket"].hand_effect.amount, 10)


if __name__ == "__main__":
    unittest.main()
