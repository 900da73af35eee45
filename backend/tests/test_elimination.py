from conftest import make_room
from leastcount.models import Status
from leastcount.services.games.elimination import complete_round
from leastcount.services.games.scoring import resolve_show


def test_round_counter_advances_before_cycle_end():
    room = make_room(['A'] * 3, ['9'] * 3, round_limit=3, current_round=1)
    outcome = complete_round(room)
    assert not outcome.cycle_complete
    assert outcome.eliminated is None
    assert room.current_round == 2
    assert room.status == Status.LOBBY


def test_cycle_end_eliminates_highest_total():
    room = make_room(['A'] * 3, ['9'] * 3, ['5'] * 3, round_limit=2, current_round=2)
    room.players[0].total_score = 10
    room.players[1].total_score = 40
    room.players[2].total_score = 30
    outcome = complete_round(room)
    assert outcome.eliminated is room.players[1]
    assert room.players[1].eliminated
    assert room.players[1].hand == []
    assert room.current_round == 1
    assert room.status == Status.LOBBY
    assert outcome.winner is None


def test_tie_at_top_eliminates_earliest_seat_only():
    room = make_room(['A'] * 3, ['9'] * 3, ['5'] * 3, round_limit=1)
    room.players[1].total_score = 30
    room.players[2].total_score = 30
    outcome = complete_round(room)
    assert outcome.eliminated is room.players[1]
    assert not room.players[2].eliminated
    assert len(room.active_players()) == 2


def test_last_player_standing_wins():
    room = make_room(['A'] * 3, ['9'] * 3, round_limit=1)
    room.players[1].total_score = 5
    outcome = complete_round(room)
    assert room.status == Status.WINNER
    assert outcome.winner is room.players[0]


def test_active_count_never_increases():
    room = make_room(['A'] * 3, ['9'] * 3, ['5'] * 3, ['7'] * 3, round_limit=1)
    counts = [len(room.active_players())]
    while room.status != Status.WINNER:
        room.status = Status.PLAYING
        complete_round(room)
        counts.append(len(room.active_players()))
    assert counts == sorted(counts, reverse=True)
    assert counts[-1] == 1


def test_show_then_round_close_scenario():
    # Scores 5 and 9 in a room that has rounds left.
    room = make_room(['A', '2', '2'], ['4', '4', 'A'], open_joker='K', round_limit=3)
    resolve_show(room, 'p0')
    complete_round(room)
    assert room.players[0].total_score == 0
    assert room.players[1].total_score == 9
    assert room.status == Status.LOBBY
    assert room.current_round == 2
