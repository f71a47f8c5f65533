"""Enums for seats, teams, suits and game phases."""

from enum import Enum


class Suit(str, Enum):
    """Card suits."""

    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    @property
    def same_color(self) -> "Suit":
        """The other suit of the same colour (hearts/diamonds, clubs/spades)."""
        return _SAME_COLOR[self]

    @property
    def is_red(self) -> bool:
        return self in (Suit.HEARTS, Suit.DIAMONDS)

    @property
    def symbol(self) -> str:
        """Single-letter notation symbol."""
        return self.value[0]

    @classmethod
    def from_symbol(cls, symbol: str) -> "Suit":
        """Look up a suit by its notation letter (h, d, c, s)."""
        for suit in cls:
            if suit.symbol == symbol.lower():
                return suit
        raise ValueError(f"Unknown suit symbol: {symbol!r}")


_SAME_COLOR = {
    Suit.HEARTS: Suit.DIAMONDS,
    Suit.DIAMONDS: Suit.HEARTS,
    Suit.CLUBS: Suit.SPADES,
    Suit.SPADES: Suit.CLUBS,
}


class Team(str, Enum):
    """Partnerships. Partners sit across from each other."""

    NORTH_SOUTH = "north_south"
    EAST_WEST = "east_west"

    @property
    def opponent(self) -> "Team":
        return Team.EAST_WEST if self is Team.NORTH_SOUTH else Team.NORTH_SOUTH

    @property
    def positions(self) -> tuple["Position", "Position"]:
        """Seats belonging to this team."""
        if self is Team.NORTH_SOUTH:
            return (Position.NORTH, Position.SOUTH)
        return (Position.EAST, Position.WEST)

    @property
    def display_name(self) -> str:
        return "North/South" if self is Team.NORTH_SOUTH else "East/West"


class Position(str, Enum):
    """Seats at the table, listed clockwise."""

    NORTH = "north"
    EAST = "east"
    SOUTH = "south"
    WEST = "west"

    @property
    def next(self) -> "Position":
        """Clockwise successor (the seat to the left)."""
        seats = list(Position)
        return seats[(seats.index(self) + 1) % len(seats)]

    @property
    def partner(self) -> "Position":
        return self.next.next

    @property
    def team(self) -> Team:
        if self in (Position.NORTH, Position.SOUTH):
            return Team.NORTH_SOUTH
        return Team.EAST_WEST

    def clockwise(self) -> list["Position"]:
        """All four seats in clockwise order starting from this one."""
        seats = [self]
        while len(seats) < 4:
            seats.append(seats[-1].next)
        return seats


class Phase(str, Enum):
    """Phases of a hand, in play order."""

    DEALER_SELECTION = "dealer_selection"
    DEALING = "dealing"
    BIDDING = "bidding"
    DECLARING = "declaring"
    DISCARDING = "discarding"
    SECOND_DEAL = "second_deal"
    PLAYING = "playing"
    SCORING = "scoring"
    HAND_COMPLETE = "hand_complete"
    COMPLETE = "complete"


class GameEventType(str, Enum):
    """Types of events emitted by the engine."""

    # Dealing
    DEALER_SELECTED = "dealer_selected"
    CARDS_DEALT = "cards_dealt"

    # Bidding
    BID_MADE = "bid_made"
    PLAYER_PASSED = "player_passed"
    BIDDING_COMPLETE = "bidding_complete"

    # Trump and redeal
    TRUMP_DECLARED = "trump_declared"
    CARDS_DISCARDED = "cards_discarded"
    SECOND_DEAL_COMPLETE = "second_deal_complete"
    DEALER_ROBBED_PACK = "dealer_robbed_pack"
    CARDS_KILLED = "cards_killed"

    # Card play
    CARD_PLAYED = "card_played"
    TRICK_WON = "trick_won"
    PLAYER_WENT_COLD = "player_went_cold"

    # Scoring
    HAND_SCORED = "hand_scored"
    GAME_WON = "game_won"
