from dataclasses import dataclass
from typing import Optional

from leastcount.models import Player, Room, Status


@dataclass
class RoundOutcome:
    cycle_complete: bool
    eliminated: Optional[Player] = None
    winner: Optional[Player] = None


def complete_round(room: Room) -> RoundOutcome:
    """Close the round that a show just ended.

    When the elimination cycle is complete the active player with the highest
    total is knocked out (earliest seat wins a tie for elimination) and the
    round counter resets. One active player left means the game is won;
    otherwise the room returns to the lobby for the host to deal again.
    """
    outcome = RoundOutcome(cycle_complete=room.current_round >= room.round_limit)
    if outcome.cycle_complete:
        active = room.active_players()
        if active:
            # max() keeps the first of equal totals, i.e. the earliest seat
            worst = max(active, key=lambda p: p.total_score)
            worst.eliminated = True
            worst.hand = []
            worst.current_drawn_card = None
            outcome.eliminated = worst
        room.current_round = 1
    else:
        room.current_round += 1

    remaining = room.active_players()
    if len(remaining) <= 1:
        room.status = Status.WINNER
        outcome.winner = remaining[0] if remaining else None
    else:
        room.status = Status.LOBBY
    return outcome
