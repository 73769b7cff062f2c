"""
Betting tickets: three bet options ordered 1-3, each with a stake, a minimum
prize that unlocks its multiplier, and optionally a refund when the ticket
loses. Unlike win conditions, a betting configuration is checked up front and
must be rejected when invalid.
"""

import math
from typing import Dict, List, Optional

from scratchcore.core.models import BetOption, BettingConfig

REQUIRED_BET_OPTIONS = 3
REQUIRED_ORDERS = (1, 2, 3)


def validate_betting_config(config: Optional[BettingConfig]) -> List[str]:
    """
    Every violated invariant of a betting configuration.

    Returns:
        Error messages, empty when the configuration is valid
    """
    if config is None:
        return ["Betting configuration is missing"]

    errors = []
    options = config.bet_options

    if len(options) != REQUIRED_BET_OPTIONS:
        errors.append(
            f"Betting requires exactly {REQUIRED_BET_OPTIONS} bet options, got {len(options)}"
        )

    orders = [option.order for option in options]
    for order in REQUIRED_ORDERS:
        count = orders.count(order)
        if count == 0:
            errors.append(f"Missing bet option with order {order}")
        elif count > 1:
            errors.append(f"Bet option order {order} appears {count} times")
    for order in sorted(set(orders) - set(REQUIRED_ORDERS)):
        errors.append(f"Bet option order {order} is invalid (must be 1, 2 or 3)")

    for option in options:
        if option.bet_amount <= 0:
            errors.append(f"Bet option {option.order}: bet amount must be positive")
        if option.min_prize_threshold < 0:
            errors.append(f"Bet option {option.order}: minimum prize threshold cannot be negative")
        if option.win_multiplier <= 0:
            errors.append(f"Bet option {option.order}: win multiplier must be positive")

    return errors


def get_sorted_bet_options(config: BettingConfig) -> List[BetOption]:
    return sorted(config.bet_options, key=lambda option: option.order)


def get_affordable_bet_options(config: BettingConfig, player_gold: float) -> List[BetOption]:
    return [option for option in get_sorted_bet_options(config) if player_gold >= option.bet_amount]


def settle_bet(option: BetOption, prize_value: int, is_winner: bool) -> Dict:
    """
    Payout of a ticket played with a bet.

    A win at or above the option's threshold pays prize × multiplier; a win
    below it pays the plain prize. A loss (or a win worth nothing) refunds
    the stake on refundable options.
    """
    prize_value = max(0, int(prize_value))

    if is_winner and prize_value > 0:
        if prize_value >= option.min_prize_threshold:
            payout = max(0, math.ceil(prize_value * option.win_multiplier))
            return {
                "payout": payout,
                "multiplier_applied": True,
                "refund": 0,
                "net": payout - option.bet_amount,
            }
        return {
            "payout": prize_value,
            "multiplier_applied": False,
            "refund": 0,
            "net": prize_value - option.bet_amount,
        }

    refund = option.bet_amount if option.is_refundable else 0
    return {
        "payout": 0,
        "multiplier_applied": False,
        "refund": refund,
        "net": refund - option.bet_amount,
    }
