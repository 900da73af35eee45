import os
import sys
import pytest

# Ensure the backend root (containing the `leastcount` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from config import Config
from leastcount import create_app, socketio
from leastcount.models import Card, Player, Room, Status


class TestConfig(Config):
    TESTING = True
    SECRET_KEY = 'test-secret'


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        yield application


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def registry(flask_app):
    return flask_app.extensions['rooms']


@pytest.fixture()
def sio_factory(flask_app):
    """Build connected Socket.IO test clients, disconnecting them afterwards."""
    clients = []

    def make():
        test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
        test_client.get_received()  # flush the connect greeting
        clients.append(test_client)
        return test_client

    yield make
    for test_client in clients:
        if test_client.is_connected():
            test_client.disconnect()


def make_card(rank, card_id, suit='♠'):
    if rank == 'Joker':
        suit = '🃏'
    return Card(suit=suit, rank=rank, id=card_id)


def make_room(*hands, open_joker='2', status=Status.PLAYING, round_limit=5, current_round=1):
    """Room seated p0..pN with the given ranks in hand and ``open_joker`` turned up."""
    room = Room(room_id='TEST', host_id='p0', round_limit=round_limit, current_round=current_round)
    for seat, ranks in enumerate(hands):
        hand = [make_card(rank, f'p{seat}-c{i}') for i, rank in enumerate(ranks)]
        room.players.append(Player(id=f'p{seat}', username=f'player{seat}', hand=hand))
    room.open_joker = make_card(open_joker, 'open-joker', suit='♥') if open_joker else None
    room.status = status
    return room
