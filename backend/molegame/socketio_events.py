from flask_socketio import emit
from flask import current_app

from molegame import socketio
from molegame.api.game import parse_hole_id
from molegame.games import get_game


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})
    emit('state_update', get_game(current_app).snapshot())


def handle_disconnect():
    current_app.logger.debug("[ws] client disconnected")


def handle_start_game(data=None):
    get_game(current_app).view.dispatch_start()


def handle_whack(data=None):
    if not isinstance(data, dict) or 'hole_id' not in data:
        emit('error', {'message': 'hole_id is required'})
        return
    hole_id = parse_hole_id(data.get('hole_id'))
    if hole_id is None:
        # malformed ids are ignored like out-of-range ones
        return
    get_game(current_app).view.dispatch_hole_click(hole_id)


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    # Primary namespace
    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('disconnect', handle_disconnect, namespace='/ws')
    socketio.on_event('start_game', handle_start_game, namespace='/ws')
    socketio.on_event('whack', handle_whack, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        socketio.on_event('connect', handle_connect, namespace='/')
        socketio.on_event('disconnect', handle_disconnect, namespace='/')
        socketio.on_event('start_game', handle_start_game, namespace='/')
        socketio.on_event('whack', handle_whack, namespace='/')
        socketio.on_event('ping', handle_ping, namespace='/')
