from __future__ import annotations

from typing import Optional, Sequence

from blockpoker.cards import Card
from blockpoker.models import DealResult, FoldResult, GameError, SessionSnapshot, ShowdownResult

# Text rendering for terminals. Nothing here touches engine state; it only
# formats the structured results the worker hands back.

CARD_LINES = 7
HIDDEN_ROW = "│ ******* │"


def render_cards(cards: Sequence[Card]) -> str:
    lines = [""] * CARD_LINES
    for card in cards:
        rank = card.rank_name
        top = rank.ljust(8)
        bottom = rank.rjust(8)
        lines[0] += "┌─────────┐"
        lines[1] += f"│ {top}│"
        lines[2] += "│         │"
        lines[3] += f"│    {card.symbol}    │"
        lines[4] += "│         │"
        lines[5] += f"│{bottom} │"
        lines[6] += "└─────────┘"
    return "".join(line + "\n" for line in lines)


def render_hidden_cards(count: int = 3) -> str:
    lines = ["┌─────────┐" * count]
    lines.extend(HIDDEN_ROW * count for _ in range(CARD_LINES - 2))
    lines.append("└─────────┘" * count)
    return "".join(line + "\n" for line in lines)


def _header(block_id: Optional[str], round_no: int) -> str:
    return f"[Poker Game Details]\n[Block: {block_id or 'none'}]\n[Round: {round_no}]\n\n"


def render_deal(result: DealResult) -> str:
    return (
        _header(result.bound_block_id, result.round)
        + "Your Hand:\n"
        + render_cards(result.player_hand)
        + "Satoshi's Hand:\n"
        + render_hidden_cards(len(result.opponent_hand))
        + "\n"
        + "Do you want to play or fold? (moves: 'play' or 'fold')\n"
    )


def render_showdown(result: ShowdownResult) -> str:
    outcome = "You won!" if result.winner else "You lost!"
    return (
        _header(result.bound_block_id, result.round)
        + f"Your Hand: {result.player_description}\n"
        + render_cards(result.player_hand)
        + f"Satoshi's Hand: {result.opponent_description}\n"
        + render_cards(result.opponent_hand)
        + f"Result: {outcome}\n"
    )


def render_fold(result: FoldResult) -> str:
    return f"You folded round {result.round}!! (use move 'deal' to deal cards again)"


def render_snapshot(snapshot: SessionSnapshot) -> str:
    text = _header(snapshot.bound_block_id, snapshot.round) + f"Cards left: {snapshot.deck_size}\n"
    if snapshot.has_active_hand:
        text += "Your Hand:\n" + render_cards(snapshot.player_hand)
    return text


def render_error(error: GameError) -> str:
    return f"error: {error.msg}"


def render_result(result: object) -> str:
    if isinstance(result, DealResult):
        return render_deal(result)
    if isinstance(result, ShowdownResult):
        return render_showdown(result)
    if isinstance(result, FoldResult):
        return render_fold(result)
    if isinstance(result, GameError):
        return render_error(result)
    if isinstance(result, SessionSnapshot):
        return render_snapshot(result)
    raise TypeError(f"Cannot render {type(result).__name__}")
