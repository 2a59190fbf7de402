"""Reaction round state machine.

``apply(snapshot, event)`` is a pure function: it never reads the clock,
touches storage or starts timers. Callers pass timestamps in the events and
carry out the returned effects.

Every transition that invalidates a pending cue bumps ``generation``; a
``CueElapsed`` carrying an older generation is ignored, so a timer that
fires after a reset or a restart cannot flip the round to ready.
"""

import random
from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from typing import List, Optional, Tuple, Union

from reaction_game.services.game import feedback
from reaction_game.services.game.outcome import FalseStart, Outcome, Success
from reaction_game.services.game.ranking import RankingEntry

CUE_DELAY_MIN_MS = 1000
CUE_DELAY_MAX_MS = 5000


class GameState(str, Enum):
    IDLE = "idle"
    WAITING = "waiting"
    READY = "ready"
    FINISHED = "finished"


@dataclass(frozen=True)
class Snapshot:
    state: GameState = GameState.IDLE
    generation: int = 0
    started_at_ms: Optional[int] = None
    outcome: Optional[Outcome] = None


# ---- Events ----

@dataclass(frozen=True)
class StartGame:
    delay_ms: int


@dataclass(frozen=True)
class CueElapsed:
    generation: int
    now_ms: int


@dataclass(frozen=True)
class React:
    now_ms: int
    achieved_at: datetime


@dataclass(frozen=True)
class Reset:
    pass


Event = Union[StartGame, CueElapsed, React, Reset]


# ---- Effects ----

@dataclass(frozen=True)
class ScheduleCue:
    delay_ms: int
    generation: int


@dataclass(frozen=True)
class CancelCue:
    pass


@dataclass(frozen=True)
class RecordRanking:
    entry: RankingEntry


@dataclass(frozen=True)
class Vibrate:
    pattern: Tuple[int, ...]


Effect = Union[ScheduleCue, CancelCue, RecordRanking, Vibrate]


@dataclass(frozen=True)
class Transition:
    snapshot: Snapshot
    effects: List[Effect] = field(default_factory=list)


def sample_cue_delay(rng: random.Random, min_ms: int = CUE_DELAY_MIN_MS,
                     max_ms: int = CUE_DELAY_MAX_MS) -> int:
    """Uniform integer delay in [min_ms, max_ms)."""
    if max_ms <= min_ms:
        raise ValueError(f"empty cue delay range [{min_ms}, {max_ms})")
    return rng.randrange(min_ms, max_ms)


def _start(snap: Snapshot, event: StartGame) -> Transition:
    generation = snap.generation + 1
    nxt = Snapshot(state=GameState.WAITING, generation=generation)
    return Transition(nxt, [
        CancelCue(),
        ScheduleCue(delay_ms=event.delay_ms, generation=generation),
        Vibrate(tuple(feedback.ROUND_START)),
    ])


def _cue(snap: Snapshot, event: CueElapsed) -> Transition:
    if snap.state != GameState.WAITING or event.generation != snap.generation:
        return Transition(snap)
    nxt = replace(snap, state=GameState.READY, started_at_ms=event.now_ms)
    return Transition(nxt, [Vibrate(tuple(feedback.CUE_SHOWN))])


def _react(snap: Snapshot, event: React) -> Transition:
    if snap.state == GameState.READY:
        elapsed = max(0, event.now_ms - snap.started_at_ms)
        nxt = replace(snap, state=GameState.FINISHED, outcome=Success(elapsed))
        return Transition(nxt, [
            RecordRanking(RankingEntry(time_ms=elapsed, achieved_at=event.achieved_at)),
            Vibrate(tuple(feedback.success_pattern(elapsed))),
        ])
    if snap.state == GameState.WAITING:
        nxt = Snapshot(state=GameState.IDLE, generation=snap.generation + 1, outcome=FalseStart())
        return Transition(nxt, [CancelCue(), Vibrate(tuple(feedback.FALSE_START))])
    # idle / finished: nothing to react to
    return Transition(snap)


def _reset(snap: Snapshot, event: Reset) -> Transition:
    nxt = Snapshot(state=GameState.IDLE, generation=snap.generation + 1)
    return Transition(nxt, [CancelCue()])


_HANDLERS = {
    StartGame: _start,
    CueElapsed: _cue,
    React: _react,
    Reset: _reset,
}


def apply(snapshot: Snapshot, event: Event) -> Transition:
    try:
        handler = _HANDLERS[type(event)]
    except KeyError:
        raise TypeError(f"unknown game event {event!r}") from None
    return handler(snapshot, event)
