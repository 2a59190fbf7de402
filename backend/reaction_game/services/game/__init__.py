"""Game domain services: state machine, leaderboard and cue timer.

This package holds the core game mechanics. HTTP routes, socket handlers
and CLI commands reach them through the one controller installed on the
app, keeping transport concerns out of the game logic.
"""

from flask import current_app

from reaction_game import socketio

EXTENSION_KEY = 'reaction_game'


def _emit(event, payload):
    socketio.emit(event, payload, namespace='/ws')


def install_controller(app, **overrides):
    """Create the app's GameController. Keyword arguments replace the defaults (tests pass fakes)."""
    from .controller import GameController
    from .scheduler import CueTimer
    from .store import RankingStore

    previous = app.extensions.get(EXTENSION_KEY)
    if previous is not None:
        previous.close()

    size = int(app.config.get('RANKING_SIZE', 10))
    kwargs = {
        'store': RankingStore(app.config.get('RANKINGS_STORAGE_KEY', 'reactionGameRankings'), limit=size),
        'timer': CueTimer(app),
        'notify': _emit,
        'delay_range': (int(app.config.get('CUE_DELAY_MIN_MS', 1000)), int(app.config.get('CUE_DELAY_MAX_MS', 5000))),
        'ranking_size': size,
    }
    kwargs.update(overrides)
    controller = GameController(**kwargs)
    app.extensions[EXTENSION_KEY] = controller
    return controller


def get_controller(app=None):
    app = app or current_app._get_current_object()
    return app.extensions[EXTENSION_KEY]
