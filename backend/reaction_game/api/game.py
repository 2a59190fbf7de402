from flask import Blueprint, jsonify, request, current_app
from reaction_game.services.game import get_controller


game = Blueprint('game', __name__)


def _payload(feedback=None):
    payload = get_controller().to_dict()
    if feedback is not None:
        payload['feedback'] = feedback
    return payload


@game.route('/state', methods=['GET'])
def get_state():
    return jsonify(_payload())


@game.route('/start', methods=['POST'])
def start_game():
    patterns = get_controller().start_game()
    return jsonify(_payload(patterns))


@game.route('/react', methods=['POST'])
def react():
    # Reacting while idle or finished is ignored, not an error
    patterns = get_controller().handle_reaction()
    return jsonify(_payload(patterns))


@game.route('/reset', methods=['POST'])
def reset_game():
    get_controller().reset_game()
    return jsonify(_payload())


@game.route('/rankings', methods=['GET'])
def get_rankings():
    return jsonify({'rankings': _payload()['rankings']})


@game.route('/rankings/clear', methods=['POST'])
def clear_rankings():
    data = request.get_json(silent=True) or {}
    confirmed = data.get('confirmed')
    if not isinstance(confirmed, bool):
        return jsonify({'error': 'confirmed must be true or false'}), 400
    cleared = get_controller().clear_rankings(confirmed)
    current_app.logger.info(f"[rankings-clear] via=http confirmed={confirmed} cleared={cleared}")
    payload = _payload()
    payload['cleared'] = cleared
    return jsonify(payload)
