from flask_socketio import emit
from reaction_game.services.game import get_controller


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})
    emit('state_update', get_controller().to_dict())


def handle_start_game(data=None):
    # The controller broadcasts state_update and feedback itself
    get_controller().start_game()


def handle_react(data=None):
    get_controller().handle_reaction()


def handle_reset_game(data=None):
    get_controller().reset_game()


def handle_clear_rankings(data=None):
    confirmed = (data or {}).get('confirmed')
    if not isinstance(confirmed, bool):
        emit('error', {'message': 'confirmed must be true or false'})
        return
    if not confirmed:
        # Declined: nothing is broadcast, so answer the caller directly
        get_controller().clear_rankings(False)
        emit('state_update', get_controller().to_dict())
        return
    get_controller().clear_rankings(True)


def handle_ping(data):
    emit('pong', data or {})


_HANDLERS = {
    'connect': handle_connect,
    'start_game': handle_start_game,
    'react': handle_react,
    'reset_game': handle_reset_game,
    'clear_rankings': handle_clear_rankings,
    'ping': handle_ping,
}


def register_socketio_handlers(testing: bool = False) -> None:
    """Register Socket.IO event handlers.

    Always register on namespace '/ws'. When testing is True, also mirror
    handlers on the default namespace '/' to accommodate the test harness.
    """
    from reaction_game import socketio

    for name, handler in _HANDLERS.items():
        socketio.on_event(name, handler, namespace='/ws')

    if testing:
        # Test-only mirror on default namespace
        for name, handler in _HANDLERS.items():
            socketio.on_event(name, handler, namespace='/')
