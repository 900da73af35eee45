from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, List, Optional
import random
import string

SUITS = ('♠', '♣', '♥', '♦')
RANKS = ('A', '2', '3', '4', '5', '6', '7', '8', '9', '10', 'J', 'Q', 'K')
JOKER_SUIT = '🃏'
JOKER_RANK = 'Joker'
HAND_SIZE = 3

ROOM_CODE_ALPHABET = string.ascii_uppercase + string.digits
CARD_ID_ALPHABET = string.ascii_lowercase + string.digits
CARD_ID_LENGTH = 9

_rng = random.SystemRandom()


def generate_code(length: int, taken: Iterable[str] = (), alphabet: str = ROOM_CODE_ALPHABET) -> str:
    """Generate a short code that does not collide with any in ``taken``."""
    taken = taken if isinstance(taken, (set, frozenset, dict)) else set(taken)
    while True:
        code = ''.join(_rng.choices(alphabet, k=length))
        if code not in taken:
            return code


class Status(str, Enum):
    LOBBY = 'LOBBY'
    PLAYING = 'PLAYING'
    WINNER = 'WINNER'


@dataclass(frozen=True)
class Card:
    suit: str
    rank: str
    id: str

    @property
    def is_joker(self) -> bool:
        return self.rank == JOKER_RANK

    def to_dict(self):
        return {'suit': self.suit, 'rank': self.rank, 'id': self.id}


@dataclass
class Player:
    id: str
    username: str
    hand: List[Card] = field(default_factory=list)
    total_score: int = 0
    eliminated: bool = False
    current_drawn_card: Optional[Card] = None

    def to_dict(self):
        return {
            'id': self.id,
            'username': self.username,
            'hand': [c.to_dict() for c in self.hand],
            'totalScore': self.total_score,
            'eliminated': self.eliminated,
            'currentDrawnCard': self.current_drawn_card.to_dict() if self.current_drawn_card else None,
        }


@dataclass
class Room:
    """Session state for one room. Seat order in ``players`` is turn order."""
    room_id: str
    host_id: str
    round_limit: int = 5
    players: List[Player] = field(default_factory=list)
    deck: List[Card] = field(default_factory=list)
    open_joker: Optional[Card] = None
    turn: int = 0
    status: Status = Status.LOBBY
    current_round: int = 1

    def find_player(self, player_id: str) -> Optional[Player]:
        return next((p for p in self.players if p.id == player_id), None)

    def player_index(self, player_id: str) -> Optional[int]:
        return next((i for i, p in enumerate(self.players) if p.id == player_id), None)

    def active_players(self) -> List[Player]:
        return [p for p in self.players if not p.eliminated]

    @property
    def current_player(self) -> Optional[Player]:
        if 0 <= self.turn < len(self.players):
            return self.players[self.turn]
        return None

    def card_ids_in_play(self) -> set:
        ids = {c.id for p in self.players for c in p.hand}
        ids.update(p.current_drawn_card.id for p in self.players if p.current_drawn_card)
        if self.open_joker:
            ids.add(self.open_joker.id)
        return ids

    def to_dict(self):
        return {
            'roomId': self.room_id,
            'players': [p.to_dict() for p in self.players],
            'deckCount': len(self.deck),
            'openJoker': self.open_joker.to_dict() if self.open_joker else None,
            'turn': self.turn,
            'status': self.status.value,
            'hostId': self.host_id,
            'roundLimit': self.round_limit,
            'currentRound': self.current_round,
        }
