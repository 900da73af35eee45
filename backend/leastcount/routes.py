from flask import Blueprint, current_app, jsonify

from leastcount.errors import RoomNotFound

main = Blueprint('main', __name__)


@main.route('/')
def index():
    return jsonify({'message': 'Welcome to the Least Count game server!'})


@main.route('/api/rooms/<string:room_id>')
def get_room_state(room_id):
    """Return the current snapshot of a room."""
    try:
        with current_app.extensions['rooms'].locked(room_id.upper()) as room:
            return jsonify(room.to_dict())
    except RoomNotFound as exc:
        return jsonify({'error': exc.reason}), 404
