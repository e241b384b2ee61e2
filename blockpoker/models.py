from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Optional, Tuple, Union

from .cards import Card, cards_to_labels


class ErrorKind(str, Enum):
    INSUFFICIENT_CARDS = "INSUFFICIENT_CARDS"
    ALREADY_DEALT = "ALREADY_DEALT"
    NO_ACTIVE_HAND = "NO_ACTIVE_HAND"
    ENGINE_NOT_RUNNING = "ENGINE_NOT_RUNNING"
    UNKNOWN_MOVE = "UNKNOWN_MOVE"


class Move(str, Enum):
    DEAL = "deal"
    PLAY = "play"
    FOLD = "fold"


@dataclass(frozen=True)
class GameError:
    kind: ErrorKind
    msg: str

    def payload(self) -> Dict[str, object]:
        return {"code": self.kind.value, "msg": self.msg}


@dataclass(frozen=True)
class SessionSnapshot:
    bound_block_id: Optional[str]
    round: int
    deck_size: int
    player_hand: Tuple[Card, ...]
    opponent_hand: Tuple[Card, ...]

    @property
    def has_active_hand(self) -> bool:
        return bool(self.player_hand)

    def payload(self) -> Dict[str, object]:
        # The opponent's cards stay hidden until showdown.
        return {
            "block": self.bound_block_id,
            "round": self.round,
            "deck_size": self.deck_size,
            "in_hand": self.has_active_hand,
            "hand": cards_to_labels(self.player_hand),
            "opponent_cards": len(self.opponent_hand),
        }


@dataclass(frozen=True)
class DealResult:
    bound_block_id: Optional[str]
    round: int
    player_hand: Tuple[Card, ...]
    opponent_hand: Tuple[Card, ...]
    deck_size: int

    def payload(self) -> Dict[str, object]:
        return {
            "block": self.bound_block_id,
            "round": self.round,
            "hand": cards_to_labels(self.player_hand),
            "opponent_cards": len(self.opponent_hand),
            "deck_size": self.deck_size,
        }


@dataclass(frozen=True)
class ShowdownResult:
    bound_block_id: Optional[str]
    round: int
    player_hand: Tuple[Card, ...]
    opponent_hand: Tuple[Card, ...]
    player_score: int
    opponent_score: int
    player_description: str
    opponent_description: str
    winner: bool

    def payload(self) -> Dict[str, object]:
        return {
            "block": self.bound_block_id,
            "round": self.round,
            "hand": cards_to_labels(self.player_hand),
            "opponent_hand": cards_to_labels(self.opponent_hand),
            "score": self.player_score,
            "opponent_score": self.opponent_score,
            "description": self.player_description,
            "opponent_description": self.opponent_description,
            "winner": self.winner,
        }


@dataclass(frozen=True)
class FoldResult:
    bound_block_id: Optional[str]
    round: int
    next_round: int

    def payload(self) -> Dict[str, object]:
        return {
            "block": self.bound_block_id,
            "round": self.round,
            "next_round": self.next_round,
        }


MoveResult = Union[DealResult, ShowdownResult, FoldResult]
