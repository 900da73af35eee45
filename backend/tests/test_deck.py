import random

import pytest

from leastcount.errors import EmptyDeck
from leastcount.models import JOKER_RANK, RANKS, SUITS
from leastcount.services.games import deck


def test_build_has_canonical_size_and_unique_ids():
    cards = deck.build()
    assert len(cards) == deck.canonical_size() == 53
    assert len({c.id for c in cards}) == len(cards)


def test_build_contains_every_rank_of_every_suit_once():
    cards = deck.build(joker_count=2)
    ranked = {(c.suit, c.rank) for c in cards if c.rank != JOKER_RANK}
    assert ranked == {(s, r) for s in SUITS for r in RANKS}
    assert sum(1 for c in cards if c.is_joker) == 2


def test_build_avoids_ids_already_in_play():
    first = deck.build()
    taken = {c.id for c in first[:10]}
    second = deck.build(taken_ids=taken)
    assert taken.isdisjoint(c.id for c in second)


def test_shuffle_is_a_permutation():
    cards = deck.build(rng=random.Random(7))
    before = list(cards)
    deck.shuffle(cards, random.Random(11))
    assert sorted(c.id for c in cards) == sorted(c.id for c in before)


def test_shuffle_moves_every_position():
    # Every card should be able to land in the first slot.
    rng = random.Random(3)
    items = list(range(5))
    seen_first = set()
    for _ in range(500):
        trial = list(items)
        deck.shuffle(trial, rng)
        seen_first.add(trial[0])
    assert seen_first == set(items)


def test_draw_pops_top_card():
    cards = deck.build()
    top = cards[-1]
    assert deck.draw(cards) is top
    assert len(cards) == 52
    assert top not in cards


def test_draw_from_empty_deck_raises():
    with pytest.raises(EmptyDeck):
        deck.draw([])
