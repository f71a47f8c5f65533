"""Deck model for shuffling and dealing cards."""

import random

from pidro.models.card import Card, all_cards


class Deck:
    """
    An ordered 52-card deck.

    Dealing always takes cards from the front, so a deck's order fully
    determines every deal made from it.
    """

    def __init__(self, cards: list[Card] | None = None) -> None:
        """Initialize a deck, full and in suit/rank order by default."""
        self.cards: list[Card] = list(cards) if cards is not None else all_cards()

    def __len__(self) -> int:
        return len(self.cards)

    def shuffle(self, rng: random.Random | None = None) -> None:
        """Shuffle the deck in place.

        Args:
            rng: Random source; a seeded ``random.Random`` makes the order reproducible

        """
        (rng or random.Random()).shuffle(self.cards)

    def deal(self, count: int) -> list[Card]:
        """
        Remove and return cards from the top of the deck.

        Args:
            count: Number of cards requested

        Returns:
            The first ``min(count, remaining)`` cards
        """
        dealt = self.cards[:count]
        self.cards = self.cards[count:]
        return dealt

    @classmethod
    def shuffled(cls, rng: random.Random | None = None) -> "Deck":
        """Create a full deck and shuffle it."""
        deck = cls()
        deck.shuffle(rng)
        return deck
