"""Player model."""

from dataclasses import dataclass, field

from pidro.models.card import Card
from pidro.models.enums import Position, Suit, Team


@dataclass
class Player:
    """A seat at the table and its hand for the current deal.

    Attributes:
        position: Seat at the table
        hand: Cards currently held
        eliminated: True once the seat has gone cold this hand
        revealed_cards: Non-trump cards shown when going cold
        tricks_won: Tricks won this hand

    """

    position: Position
    hand: list[Card] = field(default_factory=list)
    eliminated: bool = False
    revealed_cards: list[Card] = field(default_factory=list)
    tricks_won: int = 0

    @property
    def team(self) -> Team:
        return self.position.team

    def has_card(self, card: Card) -> bool:
        return card in self.hand

    def remove_card(self, card: Card) -> None:
        """Remove a card from the hand (raises ValueError if not held)."""
        self.hand.remove(card)

    def trump_count(self, trump: Suit) -> int:
        return sum(1 for card in self.hand if card.is_trump(trump))

    def has_trump(self, trump: Suit) -> bool:
        return any(card.is_trump(trump) for card in self.hand)

    def reset_for_new_hand(self) -> None:
        """Clear all hand-scoped state."""
        self.hand = []
        self.eliminated = False
        self.revealed_cards = []
        self.tricks_won = 0
