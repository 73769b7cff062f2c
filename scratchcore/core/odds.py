"""
Odds disclosure for ticket layouts.

Probabilities come from the same prize weights the prize pool draws with and
assume every area draws independently. Match conditions sum per-symbol
binomial tails, which over-counts tickets matching on two symbols at once;
the sum is clamped to 1. The dynamic symbol estimate has the same
per-prize form. Both treat every prize as its own symbol.
"""

import math
from collections import defaultdict
from typing import Dict, List, Optional

from pydantic import BaseModel

from scratchcore.core.catalog import PrizeCatalog, prize_catalog
from scratchcore.core.diagnostics import DiagnosticLog, ensure_diagnostics
from scratchcore.core.models import RevealMechanic, TicketLayout, WinCondition
from scratchcore.core.prize_pool import get_prize_gold_value, valid_prize_weights


class PrizeOdds(BaseModel):
    prize_id: str
    name: str
    emoji: str
    value: str
    probability: float
    percentage_str: str
    odds_str: str
    weight: float


class TicketOdds(BaseModel):
    prizes: List[PrizeOdds]
    total_weight: float
    scratch_area_count: int
    win_condition: WinCondition
    win_probability: float
    win_probability_str: str
    win_condition_explanation: str


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def format_percentage(probability: float) -> str:
    """More decimals as the percentage shrinks."""
    percent = probability * 100
    if percent >= 10:
        return f"{percent:.1f}%"
    elif percent >= 1:
        return f"{percent:.2f}%"
    elif percent >= 0.1:
        return f"{percent:.3f}%"
    return f"{percent:.4f}%"


def format_odds(probability: float) -> str:
    """'1 in N', rounded to 1 below 100, to 10 below 1000, to 100 above."""
    if probability <= 0:
        return "N/A"

    one_in = 1 / probability

    if one_in < 2:
        return "~1 in 1"
    elif one_in < 100:
        return f"1 in {_round_half_up(one_in)}"
    elif one_in < 1000:
        return f"1 in {_round_half_up(one_in / 10) * 10}"
    return f"1 in {_round_half_up(one_in / 100) * 100}"


def get_win_condition_explanation(win_condition: WinCondition, scratch_area_count: int) -> str:
    explanations = {
        WinCondition.NO_WIN_CONDITION: "Every ticket is a winner! Scratch to reveal your prize.",
        WinCondition.MATCH_TWO: f"Match 2 identical symbols out of {scratch_area_count} areas to win.",
        WinCondition.MATCH_THREE: f"Match 3 identical symbols out of {scratch_area_count} areas to win.",
        WinCondition.MATCH_ALL: f"All {scratch_area_count} areas must show the same symbol to win (Jackpot!).",
        WinCondition.FIND_ONE: "Find the target prize in any scratch area to win.",
        WinCondition.FIND_ONE_DYNAMIC: (
            "Reveal the winning symbol area first, then find that symbol in another area to win."
        ),
        WinCondition.TOTAL_VALUE_THRESHOLD: (
            "Combined value of revealed prizes must reach the threshold to win."
        ),
        WinCondition.REVEAL_ALL_AREAS: f"Reveal all {scratch_area_count} areas to win.",
        WinCondition.REVEAL_ANY_AREA: "Reveal any scratch area to win.",
        WinCondition.MATCH_SYMBOLS: "Match the required number of symbols to win.",
        WinCondition.PROGRESSIVE_REVEAL: "Reveal areas in order to unlock the final prize.",
    }
    return explanations.get(win_condition, "Scratch to reveal your prizes!")


def binomial_probability(n: int, k: int, p: float) -> float:
    """P(X = k) for X ~ Binomial(n, p)."""
    return math.comb(n, k) * (p ** k) * ((1 - p) ** (n - k))


def binomial_tail(n: int, k: int, p: float) -> float:
    """P(X >= k) for X ~ Binomial(n, p)."""
    return sum(binomial_probability(n, i, p) for i in range(max(k, 0), n + 1))


def match_probability(probabilities: List[float], num_areas: int, required_matches: int) -> float:
    """Summed per-symbol chance of at least `required_matches` equal symbols, clamped to 1."""
    if num_areas < required_matches:
        return 0.0
    if required_matches <= 1:
        return 1.0
    total = sum(binomial_tail(num_areas, required_matches, p) for p in probabilities)
    return min(1.0, total)


def find_one_dynamic_probability(probabilities: List[float], num_areas: int) -> float:
    """Σ p · (1 - (1 - p)^(k - 1)) over symbols."""
    if num_areas < 2:
        return 0.0
    others = num_areas - 1
    return min(1.0, sum(p * (1 - (1 - p) ** others) for p in probabilities))


def find_one_probability(target_probability: float, num_areas: int) -> float:
    """Chance the target shows up in at least one of the areas."""
    if num_areas < 1 or target_probability <= 0:
        return 0.0
    return 1 - (1 - target_probability) ** num_areas


def total_value_probability(
    value_probabilities: Dict[int, float], num_areas: int, threshold: float
) -> float:
    """Exact chance that the gold of all areas together reaches the threshold."""
    distribution = {0: 1.0}
    for _ in range(num_areas):
        step = defaultdict(float)
        for subtotal, p_subtotal in distribution.items():
            for value, p_value in value_probabilities.items():
                step[subtotal + value] += p_subtotal * p_value
        distribution = step
    return min(1.0, sum(p for subtotal, p in distribution.items() if subtotal >= threshold))


class OddsEstimator:
    """Derives display-ready odds from a layout's static configuration."""

    def __init__(self, catalog: PrizeCatalog = None):
        self.catalog = catalog or prize_catalog

    def prize_probabilities(
        self, layout: TicketLayout, diagnostics: Optional[DiagnosticLog] = None
    ) -> List[PrizeOdds]:
        valid = valid_prize_weights(layout.prize_configs, self.catalog, diagnostics)
        if not valid:
            return []

        total_weight = sum(weight for _, weight in valid)
        odds = []
        for prize, weight in valid:
            probability = weight / total_weight
            odds.append(PrizeOdds(
                prize_id=prize.id,
                name=prize.name,
                emoji=prize.emoji,
                value=prize.value,
                probability=probability,
                percentage_str=format_percentage(probability),
                odds_str=format_odds(probability),
                weight=weight,
            ))
        return odds

    def win_probability(
        self,
        layout: TicketLayout,
        prize_odds: List[PrizeOdds],
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> float:
        if not prize_odds:
            return 0.0

        diagnostics = ensure_diagnostics(diagnostics, "odds")
        condition = layout.win_condition
        num_areas = len(layout.scratch_areas)

        if condition in (
            WinCondition.NO_WIN_CONDITION,
            WinCondition.REVEAL_ANY_AREA,
            WinCondition.REVEAL_ALL_AREAS,
            WinCondition.PROGRESSIVE_REVEAL,
        ):
            return 1.0

        symbols = [odds.probability for odds in prize_odds]

        if condition == WinCondition.MATCH_TWO:
            return match_probability(symbols, num_areas, 2)
        if condition == WinCondition.MATCH_THREE:
            return match_probability(symbols, num_areas, 3)
        if condition == WinCondition.MATCH_ALL:
            return match_probability(symbols, num_areas, num_areas)
        if condition == WinCondition.MATCH_SYMBOLS:
            required = 2 if layout.reveal_mechanic == RevealMechanic.MATCH_TWO else 3
            return match_probability(symbols, num_areas, required)
        if condition == WinCondition.FIND_ONE_DYNAMIC:
            return find_one_dynamic_probability(symbols, num_areas)

        if condition == WinCondition.FIND_ONE:
            if not layout.target_prize_id:
                diagnostics.warn(
                    "missing-target-prize",
                    f"Cannot estimate find-one odds for '{layout.id}' without a target prize",
                    layout_id=layout.id,
                )
                return 0.0
            target = sum(o.probability for o in prize_odds if o.prize_id == layout.target_prize_id)
            return find_one_probability(target, num_areas)

        if condition == WinCondition.TOTAL_VALUE_THRESHOLD:
            if layout.value_threshold is None:
                diagnostics.warn(
                    "missing-value-threshold",
                    f"Cannot estimate total-value odds for '{layout.id}' without a threshold",
                    layout_id=layout.id,
                )
                return 0.0
            value_probabilities = defaultdict(float)
            for odds in prize_odds:
                gold = get_prize_gold_value(self.catalog.get_prize_by_id(odds.prize_id))
                value_probabilities[gold] += odds.probability
            return total_value_probability(value_probabilities, num_areas, layout.value_threshold)

        return 0.0

    def compute_odds(
        self, layout: TicketLayout, diagnostics: Optional[DiagnosticLog] = None
    ) -> TicketOdds:
        diagnostics = ensure_diagnostics(diagnostics, "odds")
        prize_odds = self.prize_probabilities(layout, diagnostics)
        win_probability = self.win_probability(layout, prize_odds, diagnostics)
        num_areas = len(layout.scratch_areas)

        return TicketOdds(
            prizes=prize_odds,
            total_weight=sum(o.weight for o in prize_odds),
            scratch_area_count=num_areas,
            win_condition=layout.win_condition,
            win_probability=win_probability,
            win_probability_str=format_percentage(win_probability),
            win_condition_explanation=get_win_condition_explanation(layout.win_condition, num_areas),
        )


# Singleton instance
odds_estimator = OddsEstimator()


def compute_odds(layout: TicketLayout, diagnostics: Optional[DiagnosticLog] = None) -> TicketOdds:
    return odds_estimator.compute_odds(layout, diagnostics)
