"""What each scratch area shows once uncovered. Has no effect on winning."""

from typing import Dict

from scratchcore.core.models import Prize, RevealMechanic, TicketLayout


def get_prize_display_for_area(layout: TicketLayout, area_index: int, prize: Prize) -> Dict[str, str]:
    full = {"emoji": prize.emoji, "name": prize.name, "value": prize.value}

    if layout.reveal_mechanic == RevealMechanic.PROGRESSIVE:
        # Each further area discloses a bit more of the prize
        if area_index == 0:
            return {"emoji": prize.emoji, "name": "", "value": ""}
        if area_index == 1:
            return {"emoji": prize.emoji, "name": prize.name, "value": ""}
        return full

    if layout.reveal_mechanic in (RevealMechanic.MATCH_THREE, RevealMechanic.MATCH_TWO):
        return {"emoji": prize.emoji, "name": "", "value": ""}

    return full
