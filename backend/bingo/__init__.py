import logging
import random

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO

from config import Config
from bingo.room import RoomStateMachine

socketio = SocketIO(async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    allowed_origins = flask_app.config.get('CORS_ORIGINS', [])
    CORS(flask_app, supports_credentials=True, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    logging.getLogger('bingo').setLevel(flask_app.config.get('LOG_LEVEL', 'INFO'))

    # One room per process, owned by the app rather than a module global
    flask_app.extensions['bingo_room'] = RoomStateMachine(
        room_id=flask_app.config.get('ROOM_ID', 'BINGO-ROOM'),
        rng=random.Random(flask_app.config.get('RANDOM_SEED')),
        default_letter=flask_app.config.get('DEFAULT_LETTER'),
    )

    from bingo.main import main
    flask_app.register_blueprint(main)

    from bingo.api.room import room
    flask_app.register_blueprint(room, url_prefix='/api/room')

    # Importing here ensures the handlers bind to the initialized socketio instance
    from bingo.socketio_events import register_socketio_handlers
    register_socketio_handlers(namespace=flask_app.config.get('SOCKETIO_NAMESPACE', '/ws'))

    return flask_app


def get_room(flask_app) -> RoomStateMachine:
    return flask_app.extensions['bingo_room']
