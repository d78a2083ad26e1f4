"""
Background computer-move helper for interactive front ends.
"""
from __future__ import annotations

import logging
import threading
import time
from typing import Callable, Optional

from .engine import GameEngine
from .types import Move

logger = logging.getLogger(__name__)

MoveCallback = Callable[[Optional[Move], float], None]


class EngineIntegration:
    """Runs GameEngine.computer_move() off the caller's thread.

    Search cannot be interrupted. cancel() and reset() bump a generation
    counter so that a result arriving for an older request is dropped
    instead of being delivered.
    """

    def __init__(self, engine: GameEngine):
        self.engine = engine
        self.is_thinking = False
        self._generation = 0
        self._lock = threading.RLock()
        self._worker: Optional[threading.Thread] = None

    def request_computer_move(self, on_complete: MoveCallback) -> bool:
        """Start a search; on_complete(move, elapsed) runs on the worker thread.

        The callback runs while the integration lock is held, so it may call
        cancel(), reset() or request_computer_move() but must not wait on a
        thread that does. Returns False if a search is already running or a
        human has the turn.
        """
        with self._lock:
            if self.is_thinking or not self.engine.is_current_player_computer():
                return False
            self.is_thinking = True
            generation = self._generation

        def worker():
            start_time = time.time()
            try:
                move = self.engine.computer_move()
            finally:
                with self._lock:
                    self.is_thinking = False
            elapsed_time = time.time() - start_time
            # cancel() waits on the lock, so it cannot slip in before delivery
            with self._lock:
                if generation != self._generation:
                    logger.debug("Discarding stale computer move %s", move)
                    return
                on_complete(move, elapsed_time)

        self._worker = threading.Thread(target=worker, daemon=True)
        self._worker.start()
        return True

    def cancel(self) -> None:
        """Forget any in-flight request; its result will not be delivered."""
        with self._lock:
            self._generation += 1

    def wait(self, timeout: Optional[float] = None) -> None:
        """Block until the current worker (if any) has finished."""
        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join(timeout)

    def reset(self) -> None:
        """Cancel pending work, wait for it to stop, then reset the game."""
        self.cancel()
        self.wait()
        self.engine.reset()
