"""Automatic card selection for a dealer robbing the pack."""

from pidro.constants import ACE, FINAL_HAND_SIZE, JACK, KING, QUEEN
from pidro.models.card import Card
from pidro.models.enums import Suit

_HIGH_TRUMP_RANKS = (KING, QUEEN)
_HIGH_OFF_RANKS = (ACE, KING, QUEEN, JACK)


def _bucket(card: Card, trump: Suit) -> int:
    if card.is_trump(trump):
        if card.is_point_card(trump):
            return 0
        if card.suit == trump and card.rank in _HIGH_TRUMP_RANKS:
            return 1
        return 2
    if card.rank in _HIGH_OFF_RANKS:
        return 3
    return 4


def select_best_cards(pool: list[Card], trump: Suit, count: int = FINAL_HAND_SIZE) -> list[Card]:
    """Pick the dealer's cards from the pooled hand and deck.

    Priority buckets: trump point cards, trump K/Q, other trump, non-trump
    A/K/Q/J, other non-trump. Within a bucket higher ranks come first
    (suit order breaks ties).

    Args:
        pool: Dealer's hand plus the remaining deck
        trump: Declared trump suit
        count: Number of cards to keep

    Returns:
        ``min(count, len(pool))`` cards, best first

    """
    suit_order = list(Suit)
    ranked = sorted(
        pool,
        key=lambda card: (_bucket(card, trump), -card.trump_rank(trump), -card.rank, suit_order.index(card.suit)),
    )
    return ranked[:count]
