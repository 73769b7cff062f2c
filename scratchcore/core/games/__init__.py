"""Game modules built on the scratch ticket core."""

from .scratch_ticket import ScratchTicketGame, scratch_ticket_game

__all__ = [
    "ScratchTicketGame",
    "scratch_ticket_game",
]
