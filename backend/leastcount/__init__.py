from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from config import Config

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)
    origins = flask_app.config.get('CORS_ORIGINS') or []

    CORS(flask_app, supports_credentials=True, origins=origins)
    socketio.init_app(flask_app, cors_allowed_origins=origins)

    # One registry per app so each test app starts with no rooms
    from leastcount.services.games.registry import RoomRegistry
    flask_app.extensions['rooms'] = RoomRegistry(code_length=flask_app.config['ROOM_CODE_LENGTH'])

    from leastcount.routes import main
    flask_app.register_blueprint(main)

    from leastcount.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/'))

    return flask_app
