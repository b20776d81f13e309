from flask import Blueprint, jsonify, request, current_app
import time

from molegame.games import get_game


game_api = Blueprint('game_api', __name__)

_last_controller_action: dict[str, float] = {}


def parse_hole_id(raw):
    """Coerce a wire value to a hole id. Returns None when it is not an integer."""
    if raw is None or isinstance(raw, bool):
        return None
    if isinstance(raw, float) and not raw.is_integer():
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


@game_api.route('/state', methods=['GET'])
def get_game_state():
    return jsonify(get_game(current_app).snapshot())


@game_api.route('/start', methods=['POST'])
def start_game():
    # Debounce
    try:
        debounce_ms = int(current_app.config.get('CONTROLLER_DEBOUNCE_MS', 0))
    except (TypeError, ValueError):
        debounce_ms = 0
    if debounce_ms > 0:
        key = f"start:{request.remote_addr}"
        now = time.time() * 1000.0
        last = _last_controller_action.get(key, 0)
        if now - last < debounce_ms:
            return jsonify({'message': 'debounced'}), 202
        _last_controller_action[key] = now

    game = get_game(current_app)
    game.view.dispatch_start()
    return jsonify(game.snapshot())


@game_api.route('/stop', methods=['POST'])
def stop_game():
    game = get_game(current_app)
    game.controller.stop_game()
    return jsonify(game.snapshot())


@game_api.route('/whack', methods=['POST'])
def whack():
    data = request.get_json(silent=True) or {}
    if 'hole_id' not in data:
        return jsonify({'error': 'hole_id is required'}), 400
    hole_id = parse_hole_id(data.get('hole_id'))
    if hole_id is None:
        return jsonify({'error': 'hole_id must be an integer'}), 400

    game = get_game(current_app)
    hit = bool(game.view.dispatch_hole_click(hole_id))
    return jsonify({'hit': hit, 'score': game.state.score})
