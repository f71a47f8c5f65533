"""Per-seat views of a game state.

A view is a plain dict a host can hand to a client: the seat's own hand is
shown in full, other hands only as counts, and the undealt deck is hidden.
"""

from typing import Any

from pidro.models.card import to_notations
from pidro.models.enums import Position
from pidro.models.game_state import GameState
from pidro.models.trick import Trick


def _trick(trick: Trick | None) -> dict[str, Any] | None:
    if trick is None:
        return None
    return {
        "number": trick.number,
        "leader": trick.leader.value,
        "plays": [{"position": play.position.value, "card": play.card.notation} for play in trick.plays],
        "winner": trick.winner.value if trick.winner else None,
        "points": trick.points,
    }


def _public(state: GameState) -> dict[str, Any]:
    return {
        "phase": state.phase.value,
        "hand_number": state.hand_number,
        "current_dealer": state.current_dealer.value if state.current_dealer else None,
        "current_turn": state.current_turn.value if state.current_turn else None,
        "trump_suit": state.trump_suit.value if state.trump_suit else None,
        "bids": [{"position": entry.position.value, "amount": entry.amount} for entry in state.bids],
        "highest_bid": (
            {"position": state.highest_bid[0].value, "amount": state.highest_bid[1]} if state.highest_bid else None
        ),
        "bidding_team": state.bidding_team.value if state.bidding_team else None,
        "deck_count": len(state.deck),
        "killed_cards": {position.value: to_notations(cards) for position, cards in state.killed_cards.items()},
        "current_trick": _trick(state.current_trick),
        "tricks": [_trick(trick) for trick in state.tricks],
        "hand_points": {team.value: points for team, points in state.hand_points.items()},
        "cumulative_scores": {team.value: score for team, score in state.cumulative_scores.items()},
        "winner": state.winner.value if state.winner else None,
    }


def _player(state: GameState, position: Position, show_hand: bool) -> dict[str, Any]:
    player = state.players[position]
    view: dict[str, Any] = {
        "position": position.value,
        "team": player.team.value,
        "hand_count": len(player.hand),
        "eliminated": player.eliminated,
        "revealed_cards": to_notations(player.revealed_cards),
        "tricks_won": player.tricks_won,
    }
    if show_hand:
        view["hand"] = to_notations(player.hand)
    return view


def for_player(state: GameState, position: Position) -> dict[str, Any]:
    """View of the game as seen from ``position``."""
    seat = Position(position)
    view = _public(state)
    view["viewer"] = seat.value
    view["players"] = {p.value: _player(state, p, show_hand=p == seat) for p in Position}
    return view


def for_spectator(state: GameState) -> dict[str, Any]:
    """View with every hand hidden."""
    view = _public(state)
    view["viewer"] = None
    view["players"] = {p.value: _player(state, p, show_hand=False) for p in Position}
    return view
