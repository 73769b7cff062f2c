"""
Scratch Tickets - draw a prize per area, reveal, evaluate, settle.
Any catalog layout can be played; betting layouts take a bet option.
"""

from typing import Dict, Iterable, Mapping, Optional, Union

from scratchcore.core.betting import get_sorted_bet_options, settle_bet, validate_betting_config
from scratchcore.core.catalog import PrizeCatalog, prize_catalog
from scratchcore.core.diagnostics import DiagnosticLog, ensure_diagnostics
from scratchcore.core.hand import hand_ticket_from_prize
from scratchcore.core.models import Prize, TicketLayout, WinCondition
from scratchcore.core.prize_pool import PrizePool, get_prize_gold_value, prize_pool
from scratchcore.core.reveal import get_prize_display_for_area
from scratchcore.core.win_evaluator import WinEvaluator, win_evaluator


class ScratchTicketGame:
    """
    One-shot ticket resolution for the presentation layer.
    Pays the winning prize, or the revealed total for value-threshold tickets.
    """

    def __init__(
        self,
        pool: PrizePool = None,
        evaluator: WinEvaluator = None,
        catalog: PrizeCatalog = None,
    ):
        self.pool = pool or prize_pool
        self.evaluator = evaluator or win_evaluator
        self.catalog = catalog or prize_catalog

    def _resolve_layout(self, layout: Union[str, TicketLayout]) -> TicketLayout:
        if isinstance(layout, TicketLayout):
            return layout
        return self.catalog.require_layout(layout)

    def winning_prize(
        self,
        layout: TicketLayout,
        revealed_area_ids: Iterable[str],
        area_prizes: Mapping[str, Prize],
    ) -> Optional[Prize]:
        """
        The prize a winning ticket pays out. None for value-threshold
        tickets, which pay the sum of everything revealed.
        """
        if layout.win_condition == WinCondition.TOTAL_VALUE_THRESHOLD:
            return None
        if layout.win_condition == WinCondition.FIND_ONE_DYNAMIC:
            return area_prizes.get(layout.winning_symbol_area_id)

        winning_areas = self.evaluator.winning_area_ids(
            layout, revealed_area_ids, area_prizes, diagnostics=DiagnosticLog(forward_to_logger=False)
        )
        if not winning_areas:
            return None
        if layout.win_condition in (WinCondition.MATCH_TWO, WinCondition.MATCH_THREE, WinCondition.MATCH_ALL):
            # Prizes sharing an emoji match each other; pay the richest one
            return max((area_prizes[a] for a in winning_areas), key=get_prize_gold_value)
        return area_prizes[winning_areas[0]]

    def play(
        self,
        layout: Union[str, TicketLayout],
        revealed_area_ids: Optional[Iterable[str]] = None,
        bet_order: Optional[int] = None,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> Dict:
        """
        Draw and resolve a ticket.

        Args:
            layout: Layout or layout id
            revealed_area_ids: Areas uncovered; defaults to all of them
            bet_order: Chosen bet option (1-3) on betting layouts
            diagnostics: Sink for skipped prizes and missing parameters

        Returns:
            Dict with area prizes, win status, payout and a bankable hand ticket
        """
        layout = self._resolve_layout(layout)
        diagnostics = ensure_diagnostics(diagnostics, "scratch_ticket")

        bet_option = None
        if layout.betting_config is not None and layout.betting_config.enabled:
            errors = validate_betting_config(layout.betting_config)
            if errors:
                return {"success": False, "error": "Invalid betting configuration", "errors": errors}
            options = {option.order: option for option in get_sorted_bet_options(layout.betting_config)}
            if bet_order not in options:
                return {"success": False, "error": "A bet option (1, 2 or 3) is required"}
            bet_option = options[bet_order]

        area_prizes = self.pool.draw_area_prizes(layout, diagnostics=diagnostics)
        revealed = list(revealed_area_ids) if revealed_area_ids is not None else layout.area_ids

        win = self.evaluator.is_winner(layout, revealed, area_prizes, diagnostics=diagnostics)
        winning_areas = self.evaluator.winning_area_ids(
            layout, revealed, area_prizes, diagnostics=DiagnosticLog(forward_to_logger=False)
        )

        prize = None
        prize_value = 0
        if win:
            prize = self.winning_prize(layout, revealed, area_prizes)
            if prize is not None:
                prize_value = get_prize_gold_value(prize)
            else:
                prize_value = sum(get_prize_gold_value(area_prizes[a]) for a in winning_areas)

        result = {
            "success": True,
            "layout_id": layout.id,
            "area_prizes": {area_id: p.id for area_id, p in area_prizes.items()},
            "display": [
                get_prize_display_for_area(layout, index, area_prizes[area.id])
                for index, area in enumerate(layout.scratch_areas)
            ],
            "revealed": revealed,
            "win": win,
            "winning_areas": winning_areas,
            "prize_id": prize.id if prize else None,
            "payout": prize_value,
            "hand_ticket": hand_ticket_from_prize(layout.id, prize) if prize else None,
            "diagnostics": diagnostics.messages(),
        }

        if bet_option is not None:
            settlement = settle_bet(bet_option, prize_value, win)
            result["bet"] = bet_option.bet_amount
            result["bet_order"] = bet_option.order
            result["payout"] = settlement["payout"]
            result["refund"] = settlement["refund"]
            result["multiplier_applied"] = settlement["multiplier_applied"]
            result["net"] = settlement["net"]

        return result


# Singleton instance
scratch_ticket_game = ScratchTicketGame()
