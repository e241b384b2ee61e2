from __future__ import annotations

import logging
import threading
from typing import Optional, Union

from .models import (
    DealResult,
    ErrorKind,
    FoldResult,
    GameError,
    Move,
    MoveResult,
    SessionSnapshot,
    ShowdownResult,
)
from .session import PokerSession

LOGGER = logging.getLogger("poker_worker")


class PokerWorker:
    """Owns the session and ties it to the node's tip notifications.

    The worker runs once: ``start`` arms it, ``stop`` disarms it for good and
    releases anyone blocked in ``wait_shutdown``.
    """

    def __init__(self, session: Optional[PokerSession] = None) -> None:
        self.session = session or PokerSession()
        self._state_lock = threading.Lock()
        self._running = False
        self._started = False
        self._shutdown = threading.Event()

    # Lifecycle ---------------------------------------------------------

    def start(self) -> bool:
        with self._state_lock:
            if self._started:
                LOGGER.info("PokerWorker already started")
                return False
            self._started = True
            self._running = True
        LOGGER.info("PokerWorker started")
        return True

    def stop(self) -> None:
        """Disarm the worker for good, including one that was never started.

        Does not wait on the session lock: a move or reseed that passed the
        running check just before this call still completes afterwards.
        """
        with self._state_lock:
            was_running = self._running
            self._running = False
            self._started = True
        if was_running:
            LOGGER.info("Stopping PokerWorker")
        self._shutdown.set()

    def wait_shutdown(self, timeout: Optional[float] = None) -> bool:
        return self._shutdown.wait(timeout)

    @property
    def running(self) -> bool:
        with self._state_lock:
            return self._running

    # Node notifications ------------------------------------------------

    def on_tip_change(self, new_tip_id: str, is_bulk_replay: bool = False) -> Optional[SessionSnapshot]:
        if is_bulk_replay or not self.running:
            return None
        snapshot = self.session.reseed(new_tip_id)
        LOGGER.info("Deck reseeded from block %s", new_tip_id)
        return snapshot

    # Player moves ------------------------------------------------------

    def deal(self) -> Union[DealResult, GameError]:
        if not self.running:
            return _not_running()
        return self.session.deal()

    def play(self) -> Union[ShowdownResult, GameError]:
        if not self.running:
            return _not_running()
        return self.session.showdown()

    def fold(self) -> Union[FoldResult, GameError]:
        if not self.running:
            return _not_running()
        return self.session.fold()

    def handle_move(self, move: str) -> Union[MoveResult, GameError]:
        try:
            parsed = Move(move.strip().lower())
        except ValueError:
            return GameError(ErrorKind.UNKNOWN_MOVE, "Unknown move, use 'deal', 'play', or 'fold'")

        if parsed == Move.DEAL:
            return self.deal()
        if parsed == Move.PLAY:
            return self.play()
        return self.fold()

    def snapshot(self) -> SessionSnapshot:
        return self.session.snapshot()


def _not_running() -> GameError:
    return GameError(ErrorKind.ENGINE_NOT_RUNNING, "Poker worker is not running")
