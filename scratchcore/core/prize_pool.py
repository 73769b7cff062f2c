"""
Weighted prize draws for ticket layouts.

Weights are relative, so [1, 1, 1] gives equal probability. Entries that
reference an unknown prize or carry a weight of zero or less are skipped
with a diagnostic; only a pool with nothing left to draw from is an error.
"""

import math
from collections import OrderedDict
from typing import Dict, List, Optional, Sequence, Tuple

from scratchcore.config import settings
from scratchcore.core.catalog import PrizeCatalog, prize_catalog
from scratchcore.core.diagnostics import DiagnosticLog, ensure_diagnostics
from scratchcore.core.exceptions import NoPrizeConfiguration, NoValidPrizes
from scratchcore.core.models import Prize, PrizeConfig, StateValueOperation, TicketLayout
from scratchcore.core.prizes import GOLD_FIELD
from scratchcore.core.rng import create_rng


def get_prize_gold_value(prize: Optional[Prize]) -> int:
    """Economy value of a prize: its gold `add` effect, else 0."""
    if prize is None or prize.effects is None:
        return 0
    for effect in prize.effects.state_effects:
        if effect.field == GOLD_FIELD and effect.operation == StateValueOperation.ADD:
            if isinstance(effect.value, (int, float)) and math.isfinite(effect.value):
                return max(0, int(effect.value))
    return 0


def _is_usable_weight(weight: float) -> bool:
    # NaN compares False both ways, so test for the positive case
    return math.isfinite(weight) and weight > 0


def valid_prize_weights(
    configs: Sequence[PrizeConfig],
    catalog: PrizeCatalog,
    diagnostics: Optional[DiagnosticLog] = None,
) -> List[Tuple[Prize, float]]:
    """
    Resolve configs against the catalog, keeping config order.
    Unknown prizes and weights that are not finite positive numbers are dropped.
    """
    valid = []
    for config in configs:
        prize = catalog.get_prize_by_id(config.prize_id)
        if prize is None:
            if diagnostics is not None:
                diagnostics.warn(
                    "prize-not-found",
                    f'Prize with ID "{config.prize_id}" not found. Skipping this prize configuration.',
                    prize_id=config.prize_id,
                )
            continue
        if not _is_usable_weight(config.weight):
            if diagnostics is not None:
                diagnostics.warn(
                    "non-positive-weight",
                    f'Prize "{config.prize_id}" has non-positive weight ({config.weight}). Skipping this prize.',
                    prize_id=config.prize_id,
                    weight=config.weight,
                )
            continue
        valid.append((prize, config.weight))
    return valid


def validate_prize_configs(configs: Sequence[PrizeConfig], catalog: PrizeCatalog = None) -> List[str]:
    """
    Check a layout's prize configuration without drawing.

    Returns:
        ERROR:/WARNING: prefixed messages, empty when everything is valid
    """
    catalog = catalog or prize_catalog
    messages = []

    if not configs:
        messages.append(
            "ERROR: No prize configurations provided. "
            "Ticket layouts require explicit prize associations."
        )
        return messages

    has_valid_prize = False
    for config in configs:
        if catalog.get_prize_by_id(config.prize_id) is None:
            messages.append(f'ERROR: Prize with ID "{config.prize_id}" does not exist.')
            continue
        if not _is_usable_weight(config.weight):
            messages.append(
                f'WARNING: Prize "{config.prize_id}" has non-positive weight ({config.weight}).'
            )
        else:
            has_valid_prize = True

    if not has_valid_prize:
        messages.append("ERROR: No valid prizes with positive weights configured.")

    return messages


class PrizePool:
    """
    Draws prizes from a layout's weighted prize configuration.
    The random source is injectable; anything with `random_float()` works.
    """

    def __init__(self, catalog: PrizeCatalog = None, rng=None):
        self.catalog = catalog or prize_catalog
        self.rng = rng if rng is not None else create_rng(settings.rng.seed)

    def draw_prize(
        self,
        configs: Sequence[PrizeConfig],
        diagnostics: Optional[DiagnosticLog] = None,
        layout_id: str = None,
    ) -> Prize:
        """
        Draw one prize, each valid entry with probability weight / total.

        Raises:
            NoPrizeConfiguration: configs is empty
            NoValidPrizes: every entry was skipped
        """
        if not configs:
            raise NoPrizeConfiguration(layout_id)

        diagnostics = ensure_diagnostics(diagnostics, "prize_pool")
        valid = valid_prize_weights(configs, self.catalog, diagnostics)
        if not valid:
            raise NoValidPrizes(skipped=len(configs))

        total_weight = sum(weight for _, weight in valid)
        remaining = self.rng.random_float() * total_weight

        for prize, weight in valid:
            remaining -= weight
            if remaining <= 0:
                return prize

        # Floating point can leave a sliver of remainder
        return valid[-1][0]

    def draw_area_prizes(
        self,
        layout: TicketLayout,
        diagnostics: Optional[DiagnosticLog] = None,
    ) -> Dict[str, Prize]:
        """One independent draw per scratch area, in layout order."""
        diagnostics = ensure_diagnostics(diagnostics, "prize_pool")
        area_prizes = OrderedDict()
        for area in layout.scratch_areas:
            area_prizes[area.id] = self.draw_prize(
                layout.prize_configs, diagnostics=diagnostics, layout_id=layout.id
            )
        return area_prizes


# Singleton instance
prize_pool = PrizePool()
