"""
Built-in ticket layouts.
"""

from typing import Dict, List

from scratchcore.core.models import (
    BetOption,
    BettingConfig,
    PrizeConfig,
    RevealMechanic,
    ScratchAreaConfig,
    TicketLayout,
    TicketType,
    WinCondition,
)


def _weights(*pairs) -> List[PrizeConfig]:
    return [PrizeConfig(prize_id=prize_id, weight=weight) for prize_id, weight in pairs]


def grid_areas(
    rows: int,
    cols: int,
    canvas_width: int,
    canvas_height: int,
    reveal_threshold: float = 50,
) -> List[ScratchAreaConfig]:
    """Evenly spaced areas named grid-<row>-<col>, row-major."""
    areas = []
    for row in range(rows):
        for col in range(cols):
            areas.append(ScratchAreaConfig(
                id=f"grid-{row + 1}-{col + 1}",
                top_percent=round(row / rows, 3),
                left_percent=round(col / cols, 3),
                width_percent=round(1 / cols, 3),
                height_percent=round(1 / rows, 3),
                canvas_width=canvas_width,
                canvas_height=canvas_height,
                reveal_threshold=reveal_threshold,
            ))
    return areas


CLASSIC_TICKET = TicketLayout(
    id="classic",
    name="Classic Scratch Ticket",
    description="Three horizontal scratch areas - reveal all to win",
    gold_cost=5,
    scratch_areas=[
        ScratchAreaConfig(id="area-1", top_percent=0, height_percent=0.333,
                          canvas_width=400, canvas_height=90),
        ScratchAreaConfig(id="area-2", top_percent=0.333, height_percent=0.333,
                          canvas_width=400, canvas_height=90),
        ScratchAreaConfig(id="area-3", top_percent=0.666, height_percent=0.334,
                          canvas_width=400, canvas_height=90),
    ],
    reveal_mechanic=RevealMechanic.REVEAL_ALL,
    win_condition=WinCondition.REVEAL_ALL_AREAS,
    prize_configs=_weights(
        ("grand-prize", 1),
        ("gold-coins", 2),
        ("diamond", 5),
        ("treasure-chest", 3),
        ("magic-potion", 10),
        ("lucky-star", 4),
        ("golden-key", 2),
        ("fire-sword", 6),
        ("shield", 15),
        ("crown", 2),
    ),
)

GRID_TICKET = TicketLayout(
    id="grid",
    name="Grid Ticket",
    description="Nine areas in a 3x3 grid - match three to win",
    gold_cost=10,
    scratch_areas=grid_areas(3, 3, canvas_width=130, canvas_height=90, reveal_threshold=60),
    reveal_mechanic=RevealMechanic.MATCH_THREE,
    win_condition=WinCondition.MATCH_THREE,
    prize_configs=_weights(
        ("grand-prize", 2),
        ("gold-coins", 4),
        ("diamond", 6),
        ("treasure-chest", 5),
        ("crown", 3),
    ),
)

SINGLE_AREA_TICKET = TicketLayout(
    id="single",
    name="Single Area Ticket",
    description="One large scratch area - reveal to win",
    gold_cost=3,
    scratch_areas=[ScratchAreaConfig(id="single-area")],
    reveal_mechanic=RevealMechanic.REVEAL_ONE,
    win_condition=WinCondition.REVEAL_ANY_AREA,
    prize_configs=_weights(
        ("magic-potion", 10),
        ("shield", 15),
        ("fire-sword", 8),
        ("diamond", 3),
        ("golden-key", 2),
    ),
)

DYNAMIC_SYMBOL_TICKET = TicketLayout(
    id="dynamic-symbol",
    name="Dynamic Symbol Finder",
    description="Reveal the winning symbol, then find it in another area to win!",
    gold_cost=8,
    scratch_areas=[
        ScratchAreaConfig(id="winning-symbol", top_percent=0.05, left_percent=0.25,
                          width_percent=0.5, height_percent=0.25,
                          canvas_width=250, canvas_height=75),
        ScratchAreaConfig(id="area-1", top_percent=0.4, left_percent=0.05,
                          width_percent=0.27, height_percent=0.5,
                          canvas_width=135, canvas_height=150, reveal_threshold=60),
        ScratchAreaConfig(id="area-2", top_percent=0.4, left_percent=0.365,
                          width_percent=0.27, height_percent=0.5,
                          canvas_width=135, canvas_height=150, reveal_threshold=60),
        ScratchAreaConfig(id="area-3", top_percent=0.4, left_percent=0.68,
                          width_percent=0.27, height_percent=0.5,
                          canvas_width=135, canvas_height=150, reveal_threshold=60),
    ],
    win_condition=WinCondition.FIND_ONE_DYNAMIC,
    winning_symbol_area_id="winning-symbol",
    prize_configs=_weights(
        ("grand-prize", 1),
        ("gold-coins", 3),
        ("diamond", 5),
        ("treasure-chest", 4),
        ("magic-potion", 8),
        ("lucky-star", 5),
        ("golden-key", 3),
        ("fire-sword", 6),
        ("shield", 10),
        ("crown", 2),
    ),
)

HAND_TICKET = TicketLayout(
    id="hand-boost",
    name="Hand Booster",
    description="A hand ticket with special effects - requires an active hand to scratch",
    type=TicketType.HAND,
    gold_cost=8,
    scratch_areas=[
        ScratchAreaConfig(id="single-area", top_percent=0.2, left_percent=0.15,
                          width_percent=0.7, height_percent=0.6,
                          canvas_width=350, canvas_height=180),
    ],
    win_condition=WinCondition.NO_WIN_CONDITION,
    prize_configs=_weights(
        ("magic-potion", 5),
        ("shield", 8),
        ("hand-gold-boost", 10),
        ("hand-prior-multiply", 10),
        ("hand-diff-conditional", 4),
        ("hand-mega-multiplier", 1),
    ),
)

BETTING_TICKET = TicketLayout(
    id="betting",
    name="Betting Ticket",
    description="Place your bet, scratch to win - test your luck with multipliers!",
    gold_cost=0,
    scratch_areas=[ScratchAreaConfig(id="single-area")],
    win_condition=WinCondition.NO_WIN_CONDITION,
    prize_configs=_weights(
        ("grand-prize", 1),
        ("gold-coins", 2),
        ("crown", 3),
        ("treasure-chest", 4),
        ("lucky-star", 5),
        ("diamond", 6),
        ("fire-sword", 8),
        ("magic-potion", 10),
        ("shield", 12),
        ("no-prize", 15),
    ),
    betting_config=BettingConfig(
        bet_options=[
            BetOption(order=1, bet_amount=5, description="Double any win",
                      min_prize_threshold=0, win_multiplier=2,
                      is_refundable=True, badge="Safe Bet"),
            BetOption(order=2, bet_amount=10, description="Triple wins ≥ 100 gold",
                      min_prize_threshold=100, win_multiplier=3),
            BetOption(order=3, bet_amount=30, description="5x wins ≥ 200 gold",
                      min_prize_threshold=200, win_multiplier=5, badge="High Roller"),
        ],
        insufficient_funds_message="You need at least 5 gold to play this ticket!",
    ),
)


DEFAULT_LAYOUTS: Dict[str, TicketLayout] = {
    layout.id: layout
    for layout in (
        CLASSIC_TICKET,
        GRID_TICKET,
        SINGLE_AREA_TICKET,
        DYNAMIC_SYMBOL_TICKET,
        HAND_TICKET,
        BETTING_TICKET,
    )
}
