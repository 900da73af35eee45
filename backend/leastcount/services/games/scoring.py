from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from config import Config

from leastcount.errors import GameOver, NotPlaying, PlayerEliminated, PlayerNotFound
from leastcount.models import Card, Room, Status

FACE_RANKS = ('J', 'Q', 'K')


def card_value(card: Card, open_joker_rank: Optional[str], face_value: int = Config.FACE_CARD_VALUE) -> int:
    if card.is_joker or card.rank == open_joker_rank:
        return 0
    if card.rank in FACE_RANKS:
        return face_value
    if card.rank == 'A':
        return 1
    return int(card.rank)


def hand_score(hand: Iterable[Card], open_joker_rank: Optional[str], face_value: int = Config.FACE_CARD_VALUE) -> int:
    return sum(card_value(card, open_joker_rank, face_value) for card in hand)


@dataclass
class ShowResult:
    caller_id: str
    caller_score: int
    success: bool
    penalty: int = 0
    scores: Dict[str, int] = field(default_factory=dict)

    def to_dict(self):
        return {
            'callerScore': self.caller_score,
            'success': self.success,
            'penalty': self.penalty,
            'scores': dict(self.scores),
        }


def resolve_show(
    room: Room,
    caller_id: str,
    face_value: int = Config.FACE_CARD_VALUE,
    penalty_floor: int = Config.BLUFF_PENALTY_FLOOR,
) -> ShowResult:
    """Adjudicate a show declared by ``caller_id``.

    The caller wins only with a hand strictly lower than every other active
    hand; each other active player then adds their own hand to their total.
    Otherwise the bluff fails and the caller adds ``max(score, penalty_floor)``.
    Staged cards are discarded either way since the round is over.
    """
    if room.status == Status.WINNER:
        raise GameOver()
    if room.status != Status.PLAYING or room.open_joker is None:
        raise NotPlaying()
    caller = room.find_player(caller_id)
    if caller is None:
        raise PlayerNotFound()
    if caller.eliminated:
        raise PlayerEliminated()

    joker_rank = room.open_joker.rank
    active = room.active_players()
    scores = {p.id: hand_score(p.hand, joker_rank, face_value) for p in active}
    caller_score = scores[caller.id]
    others = [score for pid, score in scores.items() if pid != caller.id]
    success = all(caller_score < score for score in others)

    result = ShowResult(caller_id=caller.id, caller_score=caller_score, success=success, scores=scores)
    if success:
        for player in active:
            if player is not caller:
                player.total_score += scores[player.id]
    else:
        result.penalty = max(caller_score, penalty_floor)
        caller.total_score += result.penalty

    for player in room.players:
        player.current_drawn_card = None
    return result
