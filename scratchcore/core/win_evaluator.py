"""
Win evaluation for scratch tickets.

Every check works on the prizes of the revealed areas, taken in layout order
(not reveal order). Missing condition parameters never raise: the ticket is
reported as not winning and a diagnostic explains why, so a game in progress
is never aborted.
"""

from collections import Counter
from typing import Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from scratchcore.core.diagnostics import DiagnosticLog, ensure_diagnostics
from scratchcore.core.models import Prize, RevealMechanic, TicketLayout, WinCondition
from scratchcore.core.prize_pool import get_prize_gold_value

RevealedPrizes = List[Tuple[str, Prize]]


def revealed_prizes(
    layout: TicketLayout,
    revealed_area_ids: Iterable[str],
    area_prizes: Optional[Mapping[str, Prize]] = None,
) -> RevealedPrizes:
    """(area_id, prize) for every revealed area that has a prize, in layout order."""
    revealed = set(revealed_area_ids)
    if not area_prizes:
        return []
    return [
        (area.id, area_prizes[area.id])
        for area in layout.scratch_areas
        if area.id in revealed and area.id in area_prizes
    ]


def emoji_counts(prizes: RevealedPrizes) -> Counter:
    return Counter(prize.emoji for _, prize in prizes)


def max_emoji_count(prizes: RevealedPrizes) -> int:
    counts = emoji_counts(prizes)
    return max(counts.values()) if counts else 0


class WinEvaluator:
    """Decides win/lose for a layout's declared win condition."""

    def __init__(self):
        self._rules: Dict[WinCondition, Callable] = {
            WinCondition.NO_WIN_CONDITION: self._any_area_revealed,
            WinCondition.MATCH_TWO: self._match_two,
            WinCondition.MATCH_THREE: self._match_three,
            WinCondition.MATCH_ALL: self._match_all,
            WinCondition.FIND_ONE: self._find_one,
            WinCondition.FIND_ONE_DYNAMIC: self._find_one_dynamic,
            WinCondition.TOTAL_VALUE_THRESHOLD: self._total_value_threshold,
            WinCondition.REVEAL_ALL_AREAS: self._all_areas_revealed,
            WinCondition.REVEAL_ANY_AREA: self._any_area_revealed,
            WinCondition.MATCH_SYMBOLS: self._match_symbols,
            WinCondition.PROGRESSIVE_REVEAL: self._last_area_revealed,
        }

    def is_winner(
        self,
        layout: TicketLayout,
        revealed_area_ids: Iterable[str],
        area_prizes: Optional[Mapping[str, Prize]] = None,
        match_count: Optional[int] = None,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> bool:
        """
        Args:
            layout: Ticket layout whose win condition applies
            revealed_area_ids: Areas the player has uncovered so far
            area_prizes: Prize drawn for each area, keyed by area id
            match_count: Externally counted matches, used only by the
                legacy match-symbols condition
            diagnostics: Sink for missing-configuration reports

        Returns:
            True if the revealed state is a winning one
        """
        diagnostics = ensure_diagnostics(diagnostics, "win_evaluator")
        layout_area_ids = set(layout.area_ids)
        revealed = {area_id for area_id in revealed_area_ids if area_id in layout_area_ids}
        prizes = revealed_prizes(layout, revealed, area_prizes)

        rule = self._rules.get(layout.win_condition)
        if rule is None:
            diagnostics.warn(
                "unknown-win-condition",
                f"Layout '{layout.id}' has unsupported win condition {layout.win_condition}",
                layout_id=layout.id,
            )
            return False

        return rule(
            layout=layout,
            revealed=revealed,
            prizes=prizes,
            area_prizes=area_prizes or {},
            match_count=match_count,
            diagnostics=diagnostics,
        )

    def winning_area_ids(
        self,
        layout: TicketLayout,
        revealed_area_ids: Iterable[str],
        area_prizes: Optional[Mapping[str, Prize]] = None,
        match_count: Optional[int] = None,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> List[str]:
        """
        Areas that make up the win, for highlighting. Empty when not winning.
        Match conditions return the areas of the best matching symbol (highest
        gold value on ties), find conditions the areas showing the target,
        everything else all revealed areas.
        """
        revealed_area_ids = list(revealed_area_ids)
        if not self.is_winner(layout, revealed_area_ids, area_prizes, match_count, diagnostics):
            return []

        prizes = revealed_prizes(layout, revealed_area_ids, area_prizes)
        condition = layout.win_condition

        if condition in (WinCondition.MATCH_TWO, WinCondition.MATCH_THREE, WinCondition.MATCH_ALL):
            counts = emoji_counts(prizes)
            best_count = max(counts.values())
            candidates = [(area_id, prize) for area_id, prize in prizes
                          if counts[prize.emoji] == best_count]
            best = max(candidates, key=lambda item: get_prize_gold_value(item[1]))[1]
            return [area_id for area_id, prize in prizes if prize.emoji == best.emoji]

        if condition == WinCondition.FIND_ONE:
            return [area_id for area_id, prize in prizes if prize.id == layout.target_prize_id]

        if condition == WinCondition.FIND_ONE_DYNAMIC:
            symbol_area = layout.winning_symbol_area_id
            target = area_prizes[symbol_area].emoji
            return [area_id for area_id, prize in prizes
                    if area_id != symbol_area and prize.emoji == target]

        revealed = set(revealed_area_ids)
        return [area_id for area_id in layout.area_ids if area_id in revealed]

    # ==================== Rules ====================

    def _any_area_revealed(self, revealed, **_) -> bool:
        return len(revealed) > 0

    def _all_areas_revealed(self, layout, revealed, **_) -> bool:
        return len(layout.scratch_areas) > 0 and len(revealed) == len(layout.scratch_areas)

    def _last_area_revealed(self, layout, revealed, **_) -> bool:
        if not layout.scratch_areas:
            return False
        return layout.scratch_areas[-1].id in revealed

    def _match_two(self, prizes, **_) -> bool:
        return max_emoji_count(prizes) >= 2

    def _match_three(self, prizes, **_) -> bool:
        return max_emoji_count(prizes) >= 3

    def _match_all(self, layout, revealed, prizes, **_) -> bool:
        if not self._all_areas_revealed(layout, revealed):
            return False
        # An area without a drawn prize cannot take part in the match
        if len(prizes) != len(layout.scratch_areas):
            return False
        return len(emoji_counts(prizes)) == 1

    def _find_one(self, layout, prizes, diagnostics, **_) -> bool:
        if not layout.target_prize_id:
            diagnostics.warn(
                "missing-target-prize",
                f"find-one layout '{layout.id}' has no target prize configured",
                layout_id=layout.id,
            )
            return False
        return any(prize.id == layout.target_prize_id for _, prize in prizes)

    def _find_one_dynamic(self, layout, revealed, prizes, area_prizes, diagnostics, **_) -> bool:
        symbol_area = layout.winning_symbol_area_id
        if not symbol_area:
            diagnostics.warn(
                "missing-winning-symbol-area",
                f"find-one-dynamic layout '{layout.id}' has no winning symbol area configured",
                layout_id=layout.id,
            )
            return False
        if symbol_area not in layout.area_ids:
            diagnostics.warn(
                "unknown-winning-symbol-area",
                f"Winning symbol area '{symbol_area}' is not an area of layout '{layout.id}'",
                layout_id=layout.id,
                area_id=symbol_area,
            )
            return False

        if symbol_area not in revealed:
            return False

        target_prize = area_prizes.get(symbol_area)
        if target_prize is None:
            diagnostics.warn(
                "missing-winning-symbol-prize",
                f"No prize drawn for winning symbol area '{symbol_area}'",
                layout_id=layout.id,
                area_id=symbol_area,
            )
            return False

        return any(
            area_id != symbol_area and prize.emoji == target_prize.emoji
            for area_id, prize in prizes
        )

    def _total_value_threshold(self, layout, prizes, diagnostics, **_) -> bool:
        if layout.value_threshold is None:
            diagnostics.warn(
                "missing-value-threshold",
                f"total-value-threshold layout '{layout.id}' has no threshold configured",
                layout_id=layout.id,
            )
            return False
        total = sum(get_prize_gold_value(prize) for _, prize in prizes)
        return total >= layout.value_threshold

    def _match_symbols(self, layout, match_count, diagnostics, **_) -> bool:
        if match_count is None:
            diagnostics.warn(
                "missing-match-count",
                f"match-symbols layout '{layout.id}' evaluated without a match count",
                layout_id=layout.id,
            )
            return False
        if layout.reveal_mechanic == RevealMechanic.MATCH_THREE:
            return match_count >= 3
        if layout.reveal_mechanic == RevealMechanic.MATCH_TWO:
            return match_count >= 2
        return False


# Singleton instance
win_evaluator = WinEvaluator()


def is_winner(
    layout: TicketLayout,
    revealed_area_ids: Iterable[str],
    area_prizes: Optional[Mapping[str, Prize]] = None,
    match_count: Optional[int] = None,
    diagnostics: Optional[DiagnosticLog] = None,
) -> bool:
    return win_evaluator.is_winner(layout, revealed_area_ids, area_prizes, match_count, diagnostics)
