from __future__ import annotations

from enum import IntEnum
from typing import List, Sequence

from .cards import Card, rank_name

HAND_SIZE = 3

CATEGORY_SHIFT = 28
RANK_SHIFTS = (24, 20, 16)
FIELD_MASK = 0xF

WHEEL = [14, 3, 2]
WHEEL_SCORED = [3, 2, 1]


class HandCategory(IntEnum):
    HIGH_CARD = 1
    PAIR = 2
    FLUSH = 3
    STRAIGHT = 4
    THREE_OF_A_KIND = 5
    STRAIGHT_FLUSH = 6

    @property
    def label(self) -> str:
        return _CATEGORY_LABELS[self]


_CATEGORY_LABELS = {
    HandCategory.HIGH_CARD: "High Card",
    HandCategory.PAIR: "Pair",
    HandCategory.FLUSH: "Flush",
    HandCategory.STRAIGHT: "Straight",
    HandCategory.THREE_OF_A_KIND: "Three of a Kind",
    HandCategory.STRAIGHT_FLUSH: "Straight Flush",
}


def evaluate_hand(cards: Sequence[Card]) -> int:
    """Score a 3-card hand as a single integer. Higher is strictly better.

    The top four bits hold the category; the tiebreak ranks follow in 4-bit
    fields. A-3-2 counts as a straight with the ace played low, so it is
    scored as 3-2-1 and sorts below 4-3-2.
    """
    if len(cards) != HAND_SIZE:
        raise ValueError(f"Hand must contain exactly {HAND_SIZE} cards, got {len(cards)}")

    ranks = sorted((card.rank for card in cards), reverse=True)
    is_flush = len({card.suit for card in cards}) == 1

    is_straight = False
    if ranks[0] - 1 == ranks[1] and ranks[1] - 1 == ranks[2]:
        is_straight = True
    elif ranks == WHEEL:
        is_straight = True
        ranks = list(WHEEL_SCORED)

    if is_straight and is_flush:
        category = HandCategory.STRAIGHT_FLUSH
    elif ranks[0] == ranks[1] == ranks[2]:
        category = HandCategory.THREE_OF_A_KIND
    elif is_straight:
        category = HandCategory.STRAIGHT
    elif is_flush:
        category = HandCategory.FLUSH
    elif ranks[0] == ranks[1] or ranks[1] == ranks[2]:
        category = HandCategory.PAIR
    else:
        category = HandCategory.HIGH_CARD

    score = int(category) << CATEGORY_SHIFT
    if category == HandCategory.PAIR:
        if ranks[0] == ranks[1]:
            paired, kicker = ranks[0], ranks[2]
        else:
            paired, kicker = ranks[1], ranks[0]
        score |= (paired << RANK_SHIFTS[0]) | (kicker << RANK_SHIFTS[1])
    else:
        for rank, shift in zip(ranks, RANK_SHIFTS):
            score |= rank << shift
    return score


def score_category(score: int) -> int:
    return (score >> CATEGORY_SHIFT) & FIELD_MASK


def score_ranks(score: int) -> List[int]:
    return [(score >> shift) & FIELD_MASK for shift in RANK_SHIFTS]


def describe_score(score: int) -> str:
    """Render a score from :func:`evaluate_hand` as e.g. ``Pair (of Ks with 5 kicker)``."""
    try:
        category = HandCategory(score_category(score))
    except ValueError:
        return "Unknown hand"

    first, second, third = (rank_name(rank) for rank in score_ranks(score))
    if category in (HandCategory.STRAIGHT_FLUSH, HandCategory.STRAIGHT):
        detail = f"high {first}"
    elif category == HandCategory.THREE_OF_A_KIND:
        detail = f"{first}s"
    elif category == HandCategory.PAIR:
        detail = f"of {first}s with {second} kicker"
    else:
        detail = f"{first}-{second}-{third}"
    return f"{category.label} ({detail})"
