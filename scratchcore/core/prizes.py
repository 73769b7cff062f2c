"""
Built-in prize catalog and helpers for building prize effects.
"""

from typing import List

from scratchcore.core.models import (
    ConditionType,
    HandEffect,
    HandEffectCondition,
    HandEffectOperation,
    HandEffectTarget,
    Prize,
    PrizeEffect,
    StateEffect,
    StateValueOperation,
)

GOLD_FIELD = "currentGold"
TICKETS_FIELD = "availableTickets"


def create_gold_effect(amount: int) -> StateEffect:
    return StateEffect(field=GOLD_FIELD, operation=StateValueOperation.ADD, value=amount)


def create_ticket_effect(amount: int) -> StateEffect:
    return StateEffect(field=TICKETS_FIELD, operation=StateValueOperation.ADD, value=amount)


def create_hand_add_gold_effect(amount: float) -> HandEffect:
    """Adds gold to the whole hand, spread proportionally over its tickets."""
    return HandEffect(
        operation=HandEffectOperation.ADD, target=HandEffectTarget.HAND, amount=amount
    )


def create_hand_multiply_effect(target: HandEffectTarget, multiplier: float) -> HandEffect:
    return HandEffect(
        operation=HandEffectOperation.MULTIPLY, target=target, amount=multiplier
    )


def create_hand_diff_effect(conditions: List[HandEffectCondition]) -> HandEffect:
    # Diff picks its target from the matching condition
    return HandEffect(
        operation=HandEffectOperation.DIFF,
        target=HandEffectTarget.SELF,
        amount=0,
        conditions=conditions,
    )


def _gold_prize(prize_id, name, gold, emoji, achievement_id=None) -> Prize:
    return Prize(
        id=prize_id,
        name=name,
        value=f"{gold} Gold",
        emoji=emoji,
        effects=PrizeEffect(
            state_effects=[create_gold_effect(gold)], achievement_id=achievement_id
        ),
    )


NO_PRIZE = Prize(
    id="no-prize",
    name="No Prize",
    value="Better luck next time",
    emoji="❌",
)


DEFAULT_PRIZES: List[Prize] = [
    _gold_prize("grand-prize", "Grand Prize", 1000, "🏆", achievement_id="jackpot"),
    _gold_prize("gold-coins", "Gold Coins", 500, "🪙", achievement_id="big-winner"),
    _gold_prize("diamond", "Diamond", 100, "💎", achievement_id="lucky-streak"),
    _gold_prize("treasure-chest", "Treasure Chest", 250, "🎁"),
    _gold_prize("magic-potion", "Magic Potion", 50, "🧪"),
    _gold_prize("lucky-star", "Lucky Star", 150, "⭐"),
    Prize(
        id="golden-key",
        name="Golden Key",
        value="Free Ticket",
        emoji="🔑",
        effects=PrizeEffect(state_effects=[create_ticket_effect(1)]),
    ),
    _gold_prize("fire-sword", "Fire Sword", 75, "⚔️"),
    _gold_prize("shield", "Shield", 25, "🛡️"),
    _gold_prize("crown", "Crown", 200, "👑"),
    # Hand effect prizes modify the hand calculation instead of paying gold
    Prize(
        id="hand-gold-boost",
        name="Gold Boost",
        value="+100 to Hand",
        emoji="💰",
        effects=PrizeEffect(hand_effect=create_hand_add_gold_effect(100)),
    ),
    Prize(
        id="hand-prior-multiply",
        name="Prior Boost",
        value="×1.5 Prior",
        emoji="⚡",
        effects=PrizeEffect(
            hand_effect=create_hand_multiply_effect(HandEffectTarget.PRIOR, 1.5)
        ),
    ),
    Prize(
        id="hand-diff-conditional",
        name="Risk & Reward",
        value="Diff Effect",
        emoji="🎲",
        effects=PrizeEffect(
            hand_effect=create_hand_diff_effect([
                HandEffectCondition(
                    type=ConditionType.GREATER,
                    target=HandEffectTarget.NEXT,
                    operation=HandEffectOperation.MULTIPLY,
                    amount=2,
                ),
                HandEffectCondition(
                    type=ConditionType.LESS,
                    target=HandEffectTarget.HAND,
                    operation=HandEffectOperation.SUBTRACT,
                    amount=200,
                ),
            ])
        ),
    ),
    Prize(
        id="hand-mega-multiplier",
        name="Mega Multiplier",
        value="×10 Hand",
        emoji="💎",
        effects=PrizeEffect(
            hand_effect=create_hand_multiply_effect(HandEffectTarget.HAND, 10)
        ),
    ),
    NO_PRIZE,
]
