"""Game rule violations raised by the domain services.

Each error carries a human readable ``reason`` that the socket layer
relays to the requesting client as ``error_msg``.
"""


class GameError(Exception):
    reason = 'Request rejected'

    def __init__(self, reason=None):
        if reason:
            self.reason = reason
        super().__init__(self.reason)


class InvalidRequest(GameError):
    reason = 'Invalid request'


class RoomNotFound(GameError):
    reason = 'Room not found'


class GameInProgress(GameError):
    reason = 'Game in progress'


class GameOver(GameError):
    reason = 'Game is over'


class NotPlaying(GameError):
    reason = 'No round in progress'


class NotHost(GameError):
    reason = 'Only the host can start the game'


class NotEnoughPlayers(GameError):
    reason = 'Not enough players to start'


class NotYourTurn(GameError):
    reason = 'Not your turn'


class NoStagedCard(GameError):
    reason = 'Draw a card before replacing'


class CardAlreadyDrawn(GameError):
    reason = 'You already drew a card this turn'


class CardNotInHand(GameError):
    reason = 'That card is not in your hand'


class EmptyDeck(GameError):
    reason = 'The deck is empty'


class PlayerNotFound(GameError):
    reason = 'You are not in this room'


class PlayerEliminated(GameError):
    reason = 'You have been eliminated'
