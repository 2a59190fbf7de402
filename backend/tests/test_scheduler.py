import time

from flask import current_app

from reaction_game.services.game.scheduler import CueTimer


def _wait_for(predicate, timeout=2.0):
    deadline = time.time() + timeout
    while time.time() < deadline:
        if predicate():
            return True
        time.sleep(0.01)
    return predicate()


def test_cue_fires_inside_app_context(flask_app):
    fired = []
    timer = CueTimer(flask_app)
    timer.schedule(20, lambda gen: fired.append((gen, current_app.name)), 7)
    assert timer.pending
    assert _wait_for(lambda: fired)
    assert fired == [(7, flask_app.name)]
    assert not timer.pending


def test_cancelled_cue_never_fires(flask_app):
    fired = []
    timer = CueTimer(flask_app)
    timer.schedule(50, fired.append, 1)
    timer.cancel()
    assert not timer.pending
    time.sleep(0.2)
    assert fired == []


def test_rescheduling_replaces_pending_cue(flask_app):
    fired = []
    timer = CueTimer(flask_app)
    timer.schedule(50, fired.append, 'first')
    timer.schedule(80, fired.append, 'second')
    assert _wait_for(lambda: fired)
    time.sleep(0.1)
    assert fired == ['second']
