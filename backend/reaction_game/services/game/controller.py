"""GameController: owns the round snapshot, the cue timer and the leaderboard.

Transport layers (HTTP routes, socket handlers, CLI) call the public
methods; the controller runs the pure state machine and carries out the
effects it returns.
"""

import random
import threading
import time
from datetime import datetime, timezone
from typing import Callable, List, Optional, Tuple

from flask import current_app

from reaction_game.services.game.machine import (CUE_DELAY_MAX_MS, CUE_DELAY_MIN_MS, CancelCue, CueElapsed,
                                                 Event, GameState, React, RecordRanking, Reset, ScheduleCue,
                                                 Snapshot, StartGame, Vibrate, apply, sample_cue_delay)
from reaction_game.services.game.messages import result_message
from reaction_game.services.game.outcome import Outcome, Success
from reaction_game.services.game.ranking import DEFAULT_RANKING_SIZE, RankingEntry, update_rankings

Notify = Callable[[str, dict], None]


def monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class GameController:
    def __init__(self, store, timer, clock: Callable[[], int] = monotonic_ms,
                 now: Callable[[], datetime] = utcnow, rng: Optional[random.Random] = None,
                 notify: Optional[Notify] = None,
                 delay_range: Tuple[int, int] = (CUE_DELAY_MIN_MS, CUE_DELAY_MAX_MS),
                 ranking_size: int = DEFAULT_RANKING_SIZE):
        self.store = store
        self.timer = timer
        self.clock = clock
        self.now = now
        self.rng = rng or random.Random()
        self.notify = notify
        self.delay_range = delay_range
        self.ranking_size = ranking_size
        self._lock = threading.RLock()
        self._snapshot = Snapshot()
        self._rankings: Optional[List[RankingEntry]] = None
        self._current_entry: Optional[RankingEntry] = None

    # ---- read side ----
    @property
    def state(self) -> GameState:
        with self._lock:
            return self._snapshot.state

    @property
    def outcome(self) -> Optional[Outcome]:
        with self._lock:
            return self._snapshot.outcome

    @property
    def snapshot(self) -> Snapshot:
        with self._lock:
            return self._snapshot

    @property
    def rankings(self) -> List[RankingEntry]:
        with self._lock:
            return list(self._load_rankings())

    def to_dict(self) -> dict:
        with self._lock:
            snap = self._snapshot
            rankings = self._load_rankings()
            return {
                'state': snap.state.value,
                'outcome': snap.outcome.to_dict() if snap.outcome else None,
                'message': result_message(snap.outcome),
                'rankings': [
                    {
                        'rank': idx,
                        **entry.to_dict(),
                        'is_current': entry is self._current_entry,
                    }
                    for idx, entry in enumerate(rankings, 1)
                ],
                'delay_range_ms': list(self.delay_range),
            }

    # ---- operations ----
    def start_game(self) -> List[List[int]]:
        delay_ms = sample_cue_delay(self.rng, *self.delay_range)
        return self._dispatch(lambda: StartGame(delay_ms=delay_ms))

    def handle_reaction(self) -> List[List[int]]:
        return self._dispatch(lambda: React(now_ms=self.clock(), achieved_at=self.now()))

    def reset_game(self) -> List[List[int]]:
        return self._dispatch(Reset)

    def fire_cue(self, generation: int) -> List[List[int]]:
        return self._dispatch(lambda: CueElapsed(generation=generation, now_ms=self.clock()))

    def clear_rankings(self, confirmed: bool) -> bool:
        """Empty the leaderboard. Does nothing unless the user confirmed."""
        if not confirmed:
            current_app.logger.info("[rankings-clear] declined")
            return False
        with self._lock:
            self._rankings = []
            self._current_entry = None
            self.store.clear()
        self._publish([])
        return True

    def close(self) -> None:
        self.timer.cancel()

    # ---- internals ----
    def _load_rankings(self) -> List[RankingEntry]:
        if self._rankings is None:
            self._rankings = self.store.load()
        return self._rankings

    def _dispatch(self, make_event: Callable[[], Event]) -> List[List[int]]:
        with self._lock:
            # Timestamps are taken under the lock so a cue cannot land between
            # reading the clock and applying the reaction
            event = make_event()
            before = self._snapshot
            transition = apply(before, event)
            self._snapshot = transition.snapshot
            if transition.snapshot is before:
                current_app.logger.debug(f"[ignored] event={type(event).__name__} state={before.state.value}")
                return []
            if not isinstance(self._snapshot.outcome, Success):
                # the highlighted result belongs to the round that just ended
                self._current_entry = None
            current_app.logger.info(
                f"[transition] event={type(event).__name__} {before.state.value} -> {self._snapshot.state.value} "
                f"generation={self._snapshot.generation}"
            )
            patterns = self._run_effects(transition.effects)
        self._publish(patterns)
        return patterns

    def _run_effects(self, effects) -> List[List[int]]:
        patterns: List[List[int]] = []
        for effect in effects:
            if isinstance(effect, CancelCue):
                self.timer.cancel()
            elif isinstance(effect, ScheduleCue):
                self.timer.schedule(effect.delay_ms, self.fire_cue, effect.generation)
            elif isinstance(effect, RecordRanking):
                self._record(effect.entry)
            elif isinstance(effect, Vibrate):
                patterns.append(list(effect.pattern))
        return patterns

    def _record(self, entry: RankingEntry) -> None:
        self._rankings = update_rankings(self._load_rankings(), entry, limit=self.ranking_size)
        self._current_entry = entry
        rank = next((idx for idx, e in enumerate(self._rankings, 1) if e is entry), 'unranked')
        current_app.logger.info(f"[react] time={entry.time_ms}ms rank={rank}")
        self.store.save(self._rankings)

    def _publish(self, patterns: List[List[int]]) -> None:
        if self.notify is None:
            return
        self.notify('state_update', self.to_dict())
        for pattern in patterns:
            self.notify('feedback', {'pattern': pattern})
