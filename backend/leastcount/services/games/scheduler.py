from typing import Optional, Tuple

from config import Config

from leastcount.errors import (
    CardAlreadyDrawn,
    CardNotInHand,
    EmptyDeck,
    GameInProgress,
    GameOver,
    NoStagedCard,
    NotEnoughPlayers,
    NotHost,
    NotPlaying,
    NotYourTurn,
)
from leastcount.models import HAND_SIZE, Card, Player, Room, Status
from . import deck


def start_game(room: Room, requester_id: str, joker_count: int = Config.JOKER_COUNT, min_players: int = Config.MIN_PLAYERS) -> None:
    """Deal a fresh round.

    - Only the host may start, and only from the lobby
    - Rebuilds the deck and turns up the open joker
    - Deals HAND_SIZE cards to each active player; eliminated hands are cleared
    - Gives the turn to the first active seat
    """
    if requester_id != room.host_id:
        raise NotHost()
    if room.status == Status.WINNER:
        raise GameOver()
    if room.status != Status.LOBBY:
        raise GameInProgress()
    active = room.active_players()
    if len(active) < min_players:
        raise NotEnoughPlayers(f'At least {min_players} players are required to start')

    room.deck = deck.build(joker_count)
    room.open_joker = deck.draw(room.deck)
    for player in room.players:
        player.current_drawn_card = None
        if player.eliminated:
            player.hand = []
        else:
            player.hand = [_draw_or_rebuild(room, joker_count)[0] for _ in range(HAND_SIZE)]
    room.status = Status.PLAYING
    room.turn = room.players.index(active[0])


def draw_card(room: Room, requester_id: str, joker_count: int = Config.JOKER_COUNT) -> Tuple[Card, bool]:
    """Stage the top card for the current player.

    Returns the card and whether the deck had to be rebuilt to serve it.
    """
    player = _require_turn(room, requester_id)
    if player.current_drawn_card is not None:
        raise CardAlreadyDrawn()
    card, rebuilt = _draw_or_rebuild(room, joker_count)
    player.current_drawn_card = card
    return card, rebuilt


def replace_card(room: Room, requester_id: str, discard_card_id: str) -> Card:
    """Swap the staged card into the hand and pass the turn. Returns the discard."""
    player = _require_turn(room, requester_id)
    staged = player.current_drawn_card
    if staged is None:
        raise NoStagedCard()
    slot = next((i for i, c in enumerate(player.hand) if c.id == discard_card_id), None)
    if slot is None:
        raise CardNotInHand()

    discarded = player.hand[slot]
    player.hand[slot] = staged
    player.current_drawn_card = None
    next_turn = next_active_index(room, room.turn)
    if next_turn is not None:
        room.turn = next_turn
    return discarded


def next_active_index(room: Room, start: int, include_start: bool = False) -> Optional[int]:
    """Index of the next non-eliminated seat after ``start``, wrapping around.

    Looks at most ``len(players)`` seats; returns None when everyone is out.
    """
    count = len(room.players)
    first = 0 if include_start else 1
    for step in range(first, count + first):
        index = (start + step) % count
        if not room.players[index].eliminated:
            return index
    return None


def reseat_after_departure(room: Room, departed_index: int) -> None:
    """Keep ``turn`` pointing at the right seat after a player has been removed."""
    if not room.players:
        room.turn = 0
        return
    if departed_index < room.turn:
        room.turn -= 1
    elif departed_index == room.turn:
        # The seat that slid into the departed index is next in line.
        next_turn = next_active_index(room, departed_index % len(room.players), include_start=True)
        room.turn = next_turn if next_turn is not None else 0
    # A game is under way once it is dealt or someone has been knocked out.
    under_way = room.status == Status.PLAYING or any(p.eliminated for p in room.players)
    if under_way and room.status != Status.WINNER and len(room.active_players()) < 2:
        for player in room.players:
            player.current_drawn_card = None
        room.status = Status.WINNER


def _require_turn(room: Room, requester_id: str) -> Player:
    if room.status == Status.WINNER:
        raise GameOver()
    if room.status != Status.PLAYING:
        raise NotPlaying()
    current = room.current_player
    if current is None or current.id != requester_id:
        raise NotYourTurn()
    return current


def _draw_or_rebuild(room: Room, joker_count: int) -> Tuple[Card, bool]:
    try:
        return deck.draw(room.deck), False
    except EmptyDeck:
        room.deck = deck.build(joker_count, taken_ids=room.card_ids_in_play())
        return deck.draw(room.deck), True
