from __future__ import annotations

from typing import Sequence

from blockpoker.cards import parse_cards
from blockpoker.session import PokerSession
from blockpoker.worker import PokerWorker

BLOCK_A = "00000000000000000002a7c4c1e48d76c5a37902165a270156b7a8d72728a054"
BLOCK_B = "000000000000000000013b8ab2cd513b0261a14096412195a72a0c4827d229dc"


def create_session(block_id: str = BLOCK_A) -> PokerSession:
    """Session already shuffled from ``block_id``."""
    session = PokerSession()
    session.reseed(block_id)
    return session


def create_worker(block_id: str = BLOCK_A) -> PokerWorker:
    worker = PokerWorker()
    assert worker.start()
    worker.on_tip_change(block_id, False)
    return worker


def rig_hands(session: PokerSession, player: Sequence[str], opponent: Sequence[str]) -> None:
    """Replace both hands with known cards so showdowns are predictable."""
    session._player_hand = parse_cards(player)
    session._opponent_hand = parse_cards(opponent)
