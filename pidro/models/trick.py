"""Trick model for a single trick within a hand."""

from dataclasses import dataclass, field

from pidro.models.card import Card
from pidro.models.enums import Position, Suit


@dataclass(frozen=True)
class Play:
    """A card played by a seat in a trick."""

    position: Position
    card: Card


@dataclass
class Trick:
    """A single trick.

    Only trump cards are ever played, so the winner is simply the highest
    trump. A trick holds at most one play per active seat.

    Attributes:
        number: Trick number within the hand (1-indexed)
        leader: Seat that led the trick
        plays: Cards played so far, in order
        winner: Seat that won the trick, once complete
        points: Points captured, once complete

    """

    number: int
    leader: Position
    plays: list[Play] = field(default_factory=list)
    winner: Position | None = None
    points: int = 0

    def has_played(self, position: Position) -> bool:
        """Check if a seat already played in this trick."""
        return any(play.position == position for play in self.plays)

    def add_play(self, position: Position, card: Card) -> bool:
        """Add a play to this trick.

        Returns:
            True if the play was added, False if the seat already played.

        """
        if self.has_played(position):
            return False
        self.plays.append(Play(position, card))
        return True

    def cards(self) -> list[Card]:
        return [play.card for play in self.plays]

    def winning_play(self, trump: Suit) -> Play | None:
        """Return the play with the highest trump rank."""
        if not self.plays:
            return None
        return max(self.plays, key=lambda play: play.card.trump_rank(trump))

    def point_total(self, trump: Suit) -> int:
        """Sum of point values of every card in the trick."""
        return sum(play.card.point_value(trump) for play in self.plays)
