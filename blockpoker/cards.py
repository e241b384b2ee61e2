from __future__ import annotations

import random
from dataclasses import dataclass
from typing import List, Sequence

# Rank 14 is the Ace. Suits are numbered in the order decks are built.
RANKS = range(2, 15)
SUITS = range(4)

RANK_LABELS = {10: "T", 11: "J", 12: "Q", 13: "K", 14: "A"}
RANK_NAMES = {10: "10", 11: "J", 12: "Q", 13: "K", 14: "A"}
SUIT_LABELS = "hdsc"
SUIT_SYMBOLS = "♥♦♠♣"

DECK_SIZE = 52


@dataclass(frozen=True)
class Card:
    rank: int
    suit: int

    def __post_init__(self) -> None:
        if self.rank not in RANKS:
            raise ValueError(f"Invalid rank: {self.rank}")
        if self.suit not in SUITS:
            raise ValueError(f"Invalid suit: {self.suit}")

    @property
    def label(self) -> str:
        return f"{RANK_LABELS.get(self.rank, str(self.rank))}{SUIT_LABELS[self.suit]}"

    @property
    def rank_name(self) -> str:
        return rank_name(self.rank)

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self.suit]

    def __str__(self) -> str:
        return f"{self.rank_name}{self.symbol}"


def rank_name(rank: int) -> str:
    return RANK_NAMES.get(rank, str(rank))


def build_ordered_deck() -> List[Card]:
    """Return the 52-card deck in canonical order: suit-major, ranks ascending."""
    return [Card(rank, suit) for suit in SUITS for rank in RANKS]


def seed_bytes(block_id: str) -> bytes:
    return block_id.encode("utf-8")


def shuffle_deck(deck: Sequence[Card], seed: bytes) -> List[Card]:
    """Return a permutation of ``deck`` fully determined by ``seed``.

    ``random.Random`` hashes bytes seeds with SHA-512 before seeding the
    Mersenne Twister, so every byte of the seed matters and the result does
    not depend on the interpreter's hash randomization.
    """
    rng = random.Random(bytes(seed))
    shuffled = list(deck)
    rng.shuffle(shuffled)
    return shuffled


def deal(deck: List[Card], count: int) -> List[Card]:
    if len(deck) < count:
        raise ValueError("Not enough cards left in deck")
    cards = deck[:count]
    del deck[:count]
    return cards


def cards_to_labels(cards: Sequence[Card]) -> List[str]:
    return [card.label for card in cards]


def parse_label(label: str) -> Card:
    if len(label) != 2:
        raise ValueError(f"Invalid card label: {label}")
    rank_char, suit_char = label[0].upper(), label[1].lower()
    if rank_char.isdigit():
        rank = int(rank_char)
    else:
        rank = next((value for value, char in RANK_LABELS.items() if char == rank_char), 0)
    if suit_char not in SUIT_LABELS:
        raise ValueError(f"Invalid suit: {label[1]}")
    return Card(rank, SUIT_LABELS.index(suit_char))


def parse_cards(labels: Sequence[str]) -> List[Card]:
    return [parse_label(label) for label in labels]
