"""
Hand value calculation.

A hand is resolved over a value buffer with one slot per ticket, seeded with
each ticket's base gold value. Ticket effects run strictly in hand order and
may target the ticket itself, its prior or next neighbour, or the whole hand.
A whole-hand change is spread over every slot by a common ratio. Every slot
write is rounded up and floored at zero so no fractional gold accumulates.
"""

import math
from typing import List, Optional, Sequence, Tuple

from scratchcore.core.logger import get_logger
from scratchcore.core.models import (
    ConditionType,
    HandEffect,
    HandEffectOperation,
    HandEffectTarget,
    HandResult,
    HandTicket,
    TicketCalculation,
)

logger = get_logger("hand_engine")

# Buffer index standing for the whole hand rather than one slot
HAND_TARGET_INDEX = -1

# Float noise (e.g. 100.00000000001) must not round up to an extra gold
_ROUNDING_DIGITS = 9


def settle_gold(value: float) -> int:
    """Round up to whole gold, never below zero. Overflowed values settle to zero."""
    if not math.isfinite(value):
        return 0
    return max(0, math.ceil(round(value, _ROUNDING_DIGITS)))


def resolve_target_index(target: HandEffectTarget, index: int, length: int) -> Optional[int]:
    """Buffer index for a target, HAND_TARGET_INDEX for the hand, None if missing."""
    if target == HandEffectTarget.SELF:
        return index
    if target == HandEffectTarget.PRIOR:
        return index - 1 if index > 0 else None
    if target == HandEffectTarget.NEXT:
        return index + 1 if index < length - 1 else None
    if target == HandEffectTarget.HAND:
        return HAND_TARGET_INDEX
    return None


def apply_operation(operation: HandEffectOperation, current: float, amount: float) -> float:
    if operation == HandEffectOperation.MULTIPLY:
        return current * amount
    if operation == HandEffectOperation.ADD:
        return current + amount
    if operation == HandEffectOperation.SUBTRACT:
        return current - amount
    if operation == HandEffectOperation.SET:
        return amount
    raise ValueError(f"{operation} is not a value operation")


def rescale_buffer(values: Sequence[int], ratio: float) -> List[int]:
    """Proportional rescale: every slot times the same ratio, settled to gold."""
    return [settle_gold(value * ratio) for value in values]


def apply_to_hand(
    values: Sequence[int], operation: HandEffectOperation, amount: float
) -> Tuple[List[int], int, float]:
    """
    Apply an operation to the hand aggregate and redistribute it.

    Returns:
        (new buffer, old aggregate, new aggregate before rounding)
    """
    old_total = sum(values)
    new_total = apply_operation(operation, old_total, amount)
    ratio = new_total / max(old_total, 1)
    return rescale_buffer(values, ratio), old_total, new_total


def _missing_target_note(target: HandEffectTarget) -> str:
    if target == HandEffectTarget.PRIOR:
        return "No prior ticket available"
    if target == HandEffectTarget.NEXT:
        return "No next ticket available"
    return "Target not available"


def _operation_note(operation, target, amount, old_value, new_value) -> str:
    target_str = "this ticket" if target == HandEffectTarget.SELF else target.value
    amount_str = f"{amount:g}"
    if operation == HandEffectOperation.MULTIPLY:
        return f"{target_str} × {amount_str} ({old_value} → {new_value})"
    if operation == HandEffectOperation.ADD:
        return f"{target_str} + {amount_str} ({old_value} → {new_value})"
    if operation == HandEffectOperation.SUBTRACT:
        return f"{target_str} - {amount_str} ({old_value} → {new_value})"
    if operation == HandEffectOperation.SET:
        return f"{target_str} set to {amount_str}"
    return f"Applied {operation.value} to {target_str}"


class HandEngine:
    """Turns an ordered list of hand tickets into one payout."""

    def resolve_hand(self, tickets: Sequence[HandTicket]) -> HandResult:
        """
        Resolve every ticket's hand effect in order.

        Returns:
            HandResult with the hand total and, per ticket, whether its
            effect completed, its final value and a note for display
        """
        if not tickets:
            return HandResult(total_value=0, tickets=[])

        values: List[int] = [ticket.gold_value for ticket in tickets]
        outcomes: List[Tuple[bool, Optional[HandEffect], Optional[str]]] = []

        for index, ticket in enumerate(tickets):
            effect = ticket.hand_effect
            if effect is None:
                outcomes.append((True, None, None))
                continue

            if effect.operation == HandEffectOperation.DIFF:
                values, complete, note = self._apply_diff(effect, values, index)
            else:
                values, complete, note = self._apply_effect(
                    effect.operation, effect.target, effect.amount, values, index
                )
            outcomes.append((complete, effect, note))
            logger.debug(f"Hand ticket {index} ({ticket.prize_id}): {note}")

        total_value = settle_gold(sum(values))

        calculations = [
            TicketCalculation(
                index=index,
                layout_id=ticket.layout_id,
                prize_id=ticket.prize_id,
                base_value=ticket.gold_value,
                complete=complete,
                calculated_value=values[index],
                applied_effect=effect,
                notes=note,
            )
            for index, (ticket, (complete, effect, note)) in enumerate(zip(tickets, outcomes))
        ]
        return HandResult(total_value=total_value, tickets=calculations)

    def _apply_effect(
        self,
        operation: HandEffectOperation,
        target: HandEffectTarget,
        amount: float,
        values: List[int],
        index: int,
    ) -> Tuple[List[int], bool, str]:
        """Apply a value operation to one slot or the whole hand."""
        target_index = resolve_target_index(target, index, len(values))

        if target_index is None:
            return values, False, _missing_target_note(target)

        if target_index == HAND_TARGET_INDEX:
            new_values, old_total, new_total = apply_to_hand(values, operation, amount)
            note = (
                f"Applied {operation.value} to entire hand "
                f"({old_total} → {settle_gold(new_total)})"
            )
            return new_values, True, note

        old_value = values[target_index]
        new_value = settle_gold(apply_operation(operation, old_value, amount))
        new_values = list(values)
        new_values[target_index] = new_value
        return new_values, True, _operation_note(operation, target, amount, old_value, new_value)

    def _apply_diff(
        self, effect: HandEffect, values: List[int], index: int
    ) -> Tuple[List[int], bool, str]:
        """Pick the first condition matching prior - next and apply its effect."""
        prior_index = index - 1
        next_index = index + 1

        if prior_index < 0 or next_index >= len(values):
            return values, False, "Diff requires both prior and next tickets"

        prior_value = values[prior_index]
        next_value = values[next_index]
        diff = prior_value - next_value

        for condition in effect.conditions:
            if (
                (condition.type == ConditionType.GREATER and diff > 0)
                or (condition.type == ConditionType.LESS and diff < 0)
                or (condition.type == ConditionType.EQUAL and diff == 0)
            ):
                new_values, complete, note = self._apply_effect(
                    condition.operation, condition.target, condition.amount, values, index
                )
                if not complete:
                    return values, False, "Diff condition target invalid"
                return new_values, True, f"Diff: prior {condition.type.value} next, {note}"

        return values, True, f"Diff: prior={prior_value}, next={next_value}, no condition met"


# Singleton instance
hand_engine = HandEngine()


def resolve_hand(tickets: Sequence[HandTicket]) -> HandResult:
    return hand_engine.resolve_hand(tickets)
