import os


def _origins(raw):
    return [o.strip() for o in raw.split(',') if o.strip()]


class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    # Comma separated browser origins allowed to reach the HTTP and socket endpoints
    CORS_ORIGINS = _origins(os.environ.get('CORS_ORIGINS', 'http://localhost:5173,http://127.0.0.1:5173'))
    SOCKETIO_NAMESPACE = os.environ.get('SOCKETIO_NAMESPACE', '/')
    ROOM_CODE_LENGTH = int(os.environ.get('ROOM_CODE_LENGTH', '4'))
    # Rounds per elimination cycle when the creator does not pick one
    DEFAULT_ROUND_LIMIT = int(os.environ.get('DEFAULT_ROUND_LIMIT', '5'))
    # Minimum active players required to deal
    MIN_PLAYERS = int(os.environ.get('MIN_PLAYERS', '2'))
    JOKER_COUNT = int(os.environ.get('JOKER_COUNT', '1'))
    FACE_CARD_VALUE = int(os.environ.get('FACE_CARD_VALUE', '15'))
    # Failed show costs max(hand score, floor)
    BLUFF_PENALTY_FLOOR = int(os.environ.get('BLUFF_PENALTY_FLOOR', '25'))
