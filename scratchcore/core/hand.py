"""
Hand lifecycle: a hand is created when the first ticket is banked, grows by
append up to the configured size, and is emptied on cash out or discard.
"""

from datetime import datetime
from typing import Dict, Optional

import pytz

from scratchcore.config import settings
from scratchcore.core.hand_engine import resolve_hand
from scratchcore.core.logger import get_logger
from scratchcore.core.models import Hand, HandTicket, Prize
from scratchcore.core.prize_pool import get_prize_gold_value

logger = get_logger("hand")


def _now() -> datetime:
    return datetime.now(pytz.timezone(settings.hand.timezone))


def get_max_hand_size() -> int:
    return settings.hand.max_hand_size


def new_hand() -> Hand:
    return Hand(created_at=_now())


def hand_ticket_from_prize(layout_id: str, prize: Prize) -> HandTicket:
    """Bankable ticket for a resolved prize, carrying its hand effect if any."""
    hand_effect = prize.effects.hand_effect if prize.effects else None
    return HandTicket(
        layout_id=layout_id,
        prize_id=prize.id,
        gold_value=get_prize_gold_value(prize),
        added_at=_now(),
        hand_effect=hand_effect,
    )


def is_hand_full(hand: Optional[Hand]) -> bool:
    return hand is not None and len(hand.tickets) >= get_max_hand_size()


def add_ticket_to_hand(hand: Optional[Hand], ticket: HandTicket) -> Dict:
    """
    Append a ticket, creating the hand if there is none yet.

    Returns:
        Dict with success flag, the hand and its size, or an error
    """
    if hand is None:
        hand = new_hand()

    if is_hand_full(hand):
        return {
            "success": False,
            "error": f"Hand is full ({get_max_hand_size()} tickets max)",
            "hand": hand,
        }

    hand.tickets.append(ticket)
    logger.debug(f"Ticket {ticket.prize_id} added to hand {hand.id} ({len(hand.tickets)} tickets)")

    return {"success": True, "hand": hand, "hand_size": len(hand.tickets)}


def get_hand_total_value(hand: Optional[Hand]) -> int:
    if hand is None:
        return 0
    return resolve_hand(hand.tickets).total_value


def cash_out_hand(hand: Optional[Hand]) -> Dict:
    """
    Settle the hand and empty it. The economy collaborator credits `total`.

    Returns:
        Dict with the payout total, ticket count and per-ticket breakdown
    """
    if hand is None or not hand.tickets:
        return {"success": False, "error": "No hand to cash out", "total": 0}

    result = resolve_hand(hand.tickets)
    ticket_count = len(hand.tickets)
    hand.tickets.clear()

    logger.info(f"Hand {hand.id} cashed out: {ticket_count} tickets for {result.total_value} gold")

    return {
        "success": True,
        "hand_id": hand.id,
        "total": result.total_value,
        "ticket_count": ticket_count,
        "tickets": result.tickets,
    }


def discard_hand(hand: Optional[Hand]) -> Dict:
    if hand is None:
        return {"success": False, "error": "No hand to discard", "discarded": 0}

    discarded = len(hand.tickets)
    hand.tickets.clear()
    logger.info(f"Hand {hand.id} discarded ({discarded} tickets)")
    return {"success": True, "hand_id": hand.id, "discarded": discarded}
