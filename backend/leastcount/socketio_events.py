from functools import wraps

from flask import current_app, request
from flask_socketio import emit, join_room, leave_room

from leastcount import socketio
from leastcount.errors import GameError, RoomNotFound
from leastcount.messages import CreateRoom, JoinRoom, ReplaceCard, RoomAction
from leastcount.models import Room
from leastcount.services.games.elimination import complete_round
from leastcount.services.games.registry import RoomRegistry
from leastcount.services.games.scheduler import draw_card, replace_card, start_game
from leastcount.services.games.scoring import resolve_show


def _registry() -> RoomRegistry:
    return current_app.extensions['rooms']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def _broadcast(room: Room) -> None:
    emit('room_data', room.to_dict(), to=room.room_id)


def _guarded(handler):
    """Turn rule violations into a targeted ``error_msg``; nothing is broadcast."""
    @wraps(handler)
    def wrapper(data=None):
        try:
            return handler(data)
        except GameError as exc:
            current_app.logger.info(f"[rejected] sid={_get_sid()} event={handler.__name__} reason={exc.reason}")
            emit('error_msg', {'reason': exc.reason})
    return wrapper


def _depart(sid: str) -> None:
    """Remove ``sid`` from whatever room it sits in and tell the others."""
    rooms = _registry()
    room_id = rooms.room_of(sid)
    if not room_id:
        return
    leave_room(room_id)
    try:
        with rooms.locked(room_id):
            room = rooms.leave(room_id, sid)
            if not room.players:
                current_app.logger.info(f"[room-deleted] room={room_id}")
                return
            current_app.logger.info(f"[room-left] room={room_id} sid={sid} host={room.host_id} status={room.status.value}")
            _broadcast(room)
    except RoomNotFound:
        pass


def handle_connect(auth=None):
    emit('connected', {'sid': _get_sid()})


def handle_disconnect(reason=None):
    _depart(_get_sid())


@_guarded
def handle_create_room(data):
    msg = CreateRoom.parse(data)
    sid = _get_sid()
    _depart(sid)
    rooms = _registry()
    round_limit = msg.round_limit or current_app.config['DEFAULT_ROUND_LIMIT']
    room = rooms.create(sid, msg.username, round_limit)
    with rooms.locked(room.room_id) as room:
        join_room(room.room_id)
        current_app.logger.info(f"[room-created] room={room.room_id} host={sid} round_limit={room.round_limit}")
        emit('room_created', {'roomId': room.room_id, 'room': room.to_dict()})


@_guarded
def handle_join_room(data):
    msg = JoinRoom.parse(data)
    sid = _get_sid()
    rooms = _registry()
    if rooms.room_of(sid) not in (None, msg.room_id):
        # Refuse before leaving the current room so a failed join changes nothing.
        rooms.check_joinable(msg.room_id)
        _depart(sid)
    with rooms.locked(msg.room_id):
        room = rooms.join(msg.room_id, sid, msg.username)
        join_room(room.room_id)
        current_app.logger.info(f"[room-joined] room={room.room_id} sid={sid} players={len(room.players)}")
        _broadcast(room)


@_guarded
def handle_start_game(data):
    msg = RoomAction.parse(data)
    cfg = current_app.config
    with _registry().locked(msg.room_id) as room:
        start_game(
            room,
            _get_sid(),
            joker_count=cfg['JOKER_COUNT'],
            min_players=cfg['MIN_PLAYERS'],
        )
        current_app.logger.info(
            f"[game-start] room={room.room_id} round={room.current_round}/{room.round_limit} "
            f"active={len(room.active_players())} open_joker={room.open_joker.rank}"
        )
        _broadcast(room)


@_guarded
def handle_draw_card(data):
    msg = RoomAction.parse(data)
    with _registry().locked(msg.room_id) as room:
        card, rebuilt = draw_card(room, _get_sid(), joker_count=current_app.config['JOKER_COUNT'])
        if rebuilt:
            current_app.logger.warning(f"[deck-rebuild] room={room.room_id} deck exhausted, dealt from a fresh deck")
        # room_data carries the same card in currentDrawnCard; card_drawn lets the
        # drawer render it without diffing the snapshot.
        emit('card_drawn', card.to_dict())
        _broadcast(room)


@_guarded
def handle_replace_card(data):
    msg = ReplaceCard.parse(data)
    with _registry().locked(msg.room_id) as room:
        replace_card(room, _get_sid(), msg.card_to_discard_id)
        _broadcast(room)


@_guarded
def handle_declare_show(data):
    msg = RoomAction.parse(data)
    cfg = current_app.config
    with _registry().locked(msg.room_id) as room:
        result = resolve_show(
            room,
            _get_sid(),
            face_value=cfg['FACE_CARD_VALUE'],
            penalty_floor=cfg['BLUFF_PENALTY_FLOOR'],
        )
        outcome = complete_round(room)
        current_app.logger.info(
            f"[show] room={room.room_id} caller={result.caller_id} score={result.caller_score} "
            f"success={result.success} penalty={result.penalty}"
        )
        emit('celebration' if result.success else 'penalty', result.to_dict())
        if outcome.eliminated:
            current_app.logger.info(f"[eliminated] room={room.room_id} username={outcome.eliminated.username}")
            emit('player_eliminated', {'username': outcome.eliminated.username}, to=room.room_id)
        if outcome.winner:
            current_app.logger.info(f"[winner] room={room.room_id} username={outcome.winner.username}")
        _broadcast(room)


@_guarded
def handle_leave_room(data):
    _depart(_get_sid())
    emit('left', {})


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('create_room', handle_create_room, namespace=namespace)
    socketio.on_event('join_room', handle_join_room, namespace=namespace)
    socketio.on_event('start_game', handle_start_game, namespace=namespace)
    socketio.on_event('draw_card', handle_draw_card, namespace=namespace)
    socketio.on_event('replace_card', handle_replace_card, namespace=namespace)
    socketio.on_event('declare_show', handle_declare_show, namespace=namespace)
    socketio.on_event('leave_room', handle_leave_room, namespace=namespace)
