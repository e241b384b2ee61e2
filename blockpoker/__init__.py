"""Block-seeded three-card poker engine."""

from .cards import Card, build_ordered_deck, deal, parse_cards, parse_label, seed_bytes, shuffle_deck
from .evaluator import HandCategory, describe_score, evaluate_hand, score_category
from .models import (
    DealResult,
    ErrorKind,
    FoldResult,
    GameError,
    Move,
    SessionSnapshot,
    ShowdownResult,
)
from .session import PokerSession
from .worker import PokerWorker

__all__ = [
    "Card",
    "build_ordered_deck",
    "deal",
    "parse_cards",
    "parse_label",
    "seed_bytes",
    "shuffle_deck",
    "HandCategory",
    "describe_score",
    "evaluate_hand",
    "score_category",
    "DealResult",
    "ErrorKind",
    "FoldResult",
    "GameError",
    "Move",
    "SessionSnapshot",
    "ShowdownResult",
    "PokerSession",
    "PokerWorker",
]
