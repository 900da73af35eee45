import random
from typing import Iterable, List, Optional

from config import Config

from leastcount.errors import EmptyDeck
from leastcount.models import (
    CARD_ID_ALPHABET,
    CARD_ID_LENGTH,
    JOKER_RANK,
    JOKER_SUIT,
    RANKS,
    SUITS,
    Card,
    generate_code,
)

_rng = random.SystemRandom()


def canonical_size(joker_count: int = Config.JOKER_COUNT) -> int:
    return len(SUITS) * len(RANKS) + joker_count


def build(joker_count: int = Config.JOKER_COUNT, taken_ids: Iterable[str] = (), rng: Optional[random.Random] = None) -> List[Card]:
    """Build a shuffled deck of 52 ranked cards plus ``joker_count`` jokers.

    Card ids are unique within the deck and never reuse an id from
    ``taken_ids`` (cards still in play when the deck is rebuilt).
    """
    used = set(taken_ids)
    deck = []
    for suit in SUITS:
        for rank in RANKS:
            deck.append(Card(suit=suit, rank=rank, id=_new_card_id(used)))
    for _ in range(joker_count):
        deck.append(Card(suit=JOKER_SUIT, rank=JOKER_RANK, id=_new_card_id(used)))
    shuffle(deck, rng)
    return deck


def shuffle(deck: List[Card], rng: Optional[random.Random] = None) -> None:
    """Fisher-Yates shuffle in place."""
    rng = rng or _rng
    for i in range(len(deck) - 1, 0, -1):
        j = rng.randint(0, i)
        deck[i], deck[j] = deck[j], deck[i]


def draw(deck: List[Card]) -> Card:
    """Pop the top card. Raises ``EmptyDeck`` when nothing is left."""
    if not deck:
        raise EmptyDeck()
    return deck.pop()


def _new_card_id(used: set) -> str:
    card_id = generate_code(CARD_ID_LENGTH, used, alphabet=CARD_ID_ALPHABET)
    used.add(card_id)
    return card_id
