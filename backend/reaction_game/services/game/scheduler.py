import threading
from typing import Any, Callable, Optional

from reaction_game import socketio


class _PendingCue:
    def __init__(self, delay_ms: int):
        self.delay_ms = delay_ms
        self.cancelled = False


class CueTimer:
    """One-shot timer for the waiting -> ready cue.

    At most one cue is pending: scheduling a new one cancels the previous
    handle. A cancelled worker still wakes up but returns without calling
    back. The callback runs inside an app context.
    """

    def __init__(self, app):
        self._app = app
        self._lock = threading.Lock()
        self._pending: Optional[_PendingCue] = None

    @property
    def pending(self) -> bool:
        return self._pending is not None

    def schedule(self, delay_ms: int, callback: Callable[..., Any], *args: Any) -> None:
        handle = _PendingCue(delay_ms)
        with self._lock:
            if self._pending is not None:
                self._pending.cancelled = True
            self._pending = handle
        self._app.logger.info(f"[cue-set] delay={delay_ms}ms args={args}")
        socketio.start_background_task(self._worker, handle, callback, args)

    def cancel(self) -> None:
        with self._lock:
            handle, self._pending = self._pending, None
        if handle is not None and not handle.cancelled:
            handle.cancelled = True
            self._app.logger.info(f"[cue-cancel] delay={handle.delay_ms}ms")

    def _worker(self, handle: _PendingCue, callback: Callable[..., Any], args: tuple) -> None:
        socketio.sleep(handle.delay_ms / 1000.0)
        with self._lock:
            fire = not handle.cancelled
            if self._pending is handle:
                self._pending = None
        if not fire:
            self._app.logger.info(f"[cue-abort] delay={handle.delay_ms}ms cancelled before firing")
            return
        with self._app.app_context():
            self._app.logger.info(f"[cue-fire] delay={handle.delay_ms}ms args={args}")
            callback(*args)
