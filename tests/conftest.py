"""Shared fixtures for building game states in a chosen phase."""

import pytest

from pidro.config import GameConfig
from pidro.models.bid import BidEntry
from pidro.models.card import Card, all_cards, parse_cards
from pidro.models.enums import Phase, Position, Suit
from pidro.models.game_state import GameState


def build_table(
    trumps: dict[Position, list[str]],
    trump: Suit,
    hand_size: int = 9,
    deck_first: list[str] | None = None,
) -> tuple[dict[Position, list[Card]], list[Card]]:
    """Deal hands holding exactly the given trump cards, padded with non-trump.

    Args:
        trumps: Trump cards (notation) per seat
        trump: Trump suit used to tell trump from filler
        hand_size: Cards per hand
        deck_first: Cards (notation) to put on top of the remaining deck

    Returns:
        (hands, deck) covering all 52 cards

    """
    used = {card for notations in trumps.values() for card in parse_cards(notations)}
    top = parse_cards(deck_first or [])
    fillers = [card for card in all_cards() if not card.is_trump(trump) and card not in used and card not in top]
    hands: dict[Position, list[Card]] = {}
    for position in Position:
        hand = parse_cards(trumps.get(position, []))
        while len(hand) < hand_size:
            hand.append(fillers.pop(0))
        hands[position] = hand
    dealt = {card for hand in hands.values() for card in hand}
    rest = [card for card in all_cards() if card not in dealt and card not in top]
    return hands, top + rest


def make_state(
    phase: Phase,
    hands: dict[Position, list[Card]] | None = None,
    *,
    dealer: Position = Position.WEST,
    turn: Position | None = None,
    trump: Suit | None = None,
    bidder: Position | None = None,
    bid: int = 8,
    deck: list[Card] | None = None,
    config: GameConfig | None = None,
) -> GameState:
    """Build a state positioned in ``phase`` without going through the engine."""
    state = GameState(config=config or GameConfig(), seed=1)
    state.phase = phase
    state.current_dealer = dealer
    state.current_turn = turn
    state.trump_suit = trump
    state.deck = list(deck or [])
    for position, cards in (hands or {}).items():
        state.players[position].hand = list(cards)
    if bidder is not None:
        state.bids = [
            BidEntry(position, bid if position == bidder else None) for position in dealer.next.clockwise()
        ]
        state.highest_bid = (bidder, bid)
        state.bidding_team = bidder.team
    return state


@pytest.fixture
def state_factory():
    """Factory for states in a given phase."""
    return make_state


@pytest.fixture
def table_factory():
    """Factory for full 52-card tables with chosen trump holdings."""
    return build_table


@pytest.fixture
def config() -> GameConfig:
    return GameConfig()
