from __future__ import annotations

import threading
from typing import List, Optional, Tuple, Union

from .cards import Card, build_ordered_deck, deal, seed_bytes, shuffle_deck
from .evaluator import HAND_SIZE, describe_score, evaluate_hand
from .models import DealResult, ErrorKind, FoldResult, GameError, SessionSnapshot, ShowdownResult

# PokerSession owns the deck, both hands and the round counter. Every
# transition holds the same lock for its whole body, so a reseed coming from
# the node thread can never interleave with a move from a player.

CARDS_PER_DEAL = HAND_SIZE * 2


class PokerSession:
    """Single heads-up session against the house, seeded from block hashes."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._deck: List[Card] = []
        self._player_hand: List[Card] = []
        self._opponent_hand: List[Card] = []
        self._round = 1
        self._bound_block_id: Optional[str] = None

    # Transitions -----------------------------------------------------

    def reseed(self, block_id: str) -> SessionSnapshot:
        deck = shuffle_deck(build_ordered_deck(), seed_bytes(block_id))
        with self._lock:
            self._deck = deck
            self._bound_block_id = block_id
            self._round = 1
            self._player_hand.clear()
            self._opponent_hand.clear()
            return self._snapshot_locked()

    def deal(self) -> Union[DealResult, GameError]:
        with self._lock:
            if len(self._deck) < CARDS_PER_DEAL:
                return GameError(
                    ErrorKind.INSUFFICIENT_CARDS,
                    "Not enough cards to deal. Wait for the next block!",
                )
            if self._player_hand:
                return GameError(ErrorKind.ALREADY_DEALT, "Player cards are already dealt")

            for _ in range(HAND_SIZE):
                self._player_hand.extend(deal(self._deck, 1))
                self._opponent_hand.extend(deal(self._deck, 1))

            return DealResult(
                bound_block_id=self._bound_block_id,
                round=self._round,
                player_hand=tuple(self._player_hand),
                opponent_hand=tuple(self._opponent_hand),
                deck_size=len(self._deck),
            )

    def showdown(self) -> Union[ShowdownResult, GameError]:
        with self._lock:
            if not self._player_hand:
                return GameError(
                    ErrorKind.NO_ACTIVE_HAND,
                    "Player cards are not dealt! (Or a new block has been mined)",
                )

            player_score = evaluate_hand(self._player_hand)
            opponent_score = evaluate_hand(self._opponent_hand)
            # Equal scores go to the house; there is no split.
            result = ShowdownResult(
                bound_block_id=self._bound_block_id,
                round=self._round,
                player_hand=tuple(self._player_hand),
                opponent_hand=tuple(self._opponent_hand),
                player_score=player_score,
                opponent_score=opponent_score,
                player_description=describe_score(player_score),
                opponent_description=describe_score(opponent_score),
                winner=player_score > opponent_score,
            )
            self._finish_round_locked()
            return result

    def fold(self) -> Union[FoldResult, GameError]:
        with self._lock:
            if not self._player_hand:
                return GameError(ErrorKind.NO_ACTIVE_HAND, "Already folded, or cards not dealt")
            folded_round = self._round
            self._finish_round_locked()
            return FoldResult(
                bound_block_id=self._bound_block_id,
                round=folded_round,
                next_round=self._round,
            )

    def _finish_round_locked(self) -> None:
        self._round += 1
        self._player_hand.clear()
        self._opponent_hand.clear()

    # Read-only views ---------------------------------------------------

    def snapshot(self) -> SessionSnapshot:
        with self._lock:
            return self._snapshot_locked()

    def _snapshot_locked(self) -> SessionSnapshot:
        return SessionSnapshot(
            bound_block_id=self._bound_block_id,
            round=self._round,
            deck_size=len(self._deck),
            player_hand=tuple(self._player_hand),
            opponent_hand=tuple(self._opponent_hand),
        )

    @property
    def round(self) -> int:
        with self._lock:
            return self._round

    @property
    def bound_block_id(self) -> Optional[str]:
        with self._lock:
            return self._bound_block_id

    @property
    def deck_size(self) -> int:
        with self._lock:
            return len(self._deck)

    @property
    def player_hand(self) -> Tuple[Card, ...]:
        with self._lock:
            return tuple(self._player_hand)

    @property
    def opponent_hand(self) -> Tuple[Card, ...]:
        with self._lock:
            return tuple(self._opponent_hand)

    @property
    def has_active_hand(self) -> bool:
        with self._lock:
            return bool(self._player_hand)

    def remaining_deck(self) -> Tuple[Card, ...]:
        with self._lock:
            return tuple(self._deck)
