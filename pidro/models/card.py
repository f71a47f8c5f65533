"""Card model and trump logic."""

from dataclasses import dataclass

from pidro.constants import (
    ACE,
    FIVE,
    JACK,
    KING,
    NON_TRUMP_RANK,
    QUEEN,
    RIGHT_FIVE_RANK,
    TEN,
    TWO,
    WRONG_FIVE_RANK,
)
from pidro.models.enums import Suit

RANK_SYMBOLS = {10: "T", JACK: "J", QUEEN: "Q", KING: "K", ACE: "A"}
RANK_NAMES = {JACK: "Jack", QUEEN: "Queen", KING: "King", ACE: "Ace"}
_SYMBOL_RANKS = {symbol: rank for rank, symbol in RANK_SYMBOLS.items()}


@dataclass(frozen=True)
class Card:
    """A playing card.

    Attributes:
        rank: 2-14 (Jack=11, Queen=12, King=13, Ace=14)
        suit: Card suit

    """

    rank: int
    suit: Suit

    def __post_init__(self) -> None:
        if not isinstance(self.rank, int) or not 2 <= self.rank <= ACE:
            raise ValueError(f"Invalid rank: {self.rank!r}")
        if not isinstance(self.suit, Suit):
            raise ValueError(f"Invalid suit: {self.suit!r}")

    def __str__(self) -> str:
        return self.notation

    @property
    def notation(self) -> str:
        """Two-character notation, e.g. ``Ah``, ``Td``, ``5c``."""
        return f"{RANK_SYMBOLS.get(self.rank, str(self.rank))}{self.suit.symbol}"

    @property
    def display_name(self) -> str:
        """Human-readable name, e.g. ``Ace of Hearts``."""
        name = RANK_NAMES.get(self.rank, str(self.rank))
        return f"{name} of {self.suit.value.capitalize()}"

    @classmethod
    def parse(cls, text: str) -> "Card":
        """Parse card notation.

        Args:
            text: Rank symbol (2-9, T, J, Q, K, A) followed by suit letter (h, d, c, s)

        Returns:
            The parsed card

        Raises:
            ValueError: If the notation is malformed

        """
        if not isinstance(text, str) or len(text) != 2:
            raise ValueError(f"Invalid card notation: {text!r}")
        rank_symbol, suit_symbol = text[0].upper(), text[1]
        if rank_symbol.isdigit() and rank_symbol not in ("0", "1"):
            rank = int(rank_symbol)
        elif rank_symbol in _SYMBOL_RANKS:
            rank = _SYMBOL_RANKS[rank_symbol]
        else:
            raise ValueError(f"Invalid card notation: {text!r}")
        return cls(rank, Suit.from_symbol(suit_symbol))

    def is_trump(self, trump: Suit) -> bool:
        """Check trump membership: the trump suit plus the same-colour five."""
        if self.suit == trump:
            return True
        return self.rank == FIVE and self.suit == trump.same_color

    def is_right_five(self, trump: Suit) -> bool:
        return self.rank == FIVE and self.suit == trump

    def is_wrong_five(self, trump: Suit) -> bool:
        return self.rank == FIVE and self.suit == trump.same_color

    def trump_rank(self, trump: Suit) -> float:
        """Strength of this card within the trump ordering.

        A > K > Q > J > 10 > 9 > 8 > 7 > 6 > right 5 > wrong 5 > 4 > 3 > 2.
        Non-trump cards rank below every trump.
        """
        if not self.is_trump(trump):
            return NON_TRUMP_RANK
        if self.is_right_five(trump):
            return RIGHT_FIVE_RANK
        if self.is_wrong_five(trump):
            return WRONG_FIVE_RANK
        return float(self.rank)

    def point_value(self, trump: Suit) -> int:
        """Points this card is worth when captured in a trick."""
        if not self.is_trump(trump):
            return 0
        if self.rank == FIVE:
            return 5
        if self.rank in (ACE, JACK, TEN, TWO):
            return 1
        return 0

    def is_point_card(self, trump: Suit) -> bool:
        return self.point_value(trump) > 0


def parse_cards(notations: list[str]) -> list[Card]:
    """Parse a list of card notations."""
    return [Card.parse(text) for text in notations]


def to_notations(cards: list[Card]) -> list[str]:
    """Convert cards to their notation strings."""
    return [card.notation for card in cards]


def all_cards() -> list[Card]:
    """Return the 52 cards of a standard deck in suit/rank order."""
    return [Card(rank, suit) for suit in Suit for rank in range(2, ACE + 1)]


def trump_cards(cards: list[Card], trump: Suit) -> list[Card]:
    return [card for card in cards if card.is_trump(trump)]


def non_trump_cards(cards: list[Card], trump: Suit) -> list[Card]:
    return [card for card in cards if not card.is_trump(trump)]


def non_point_trumps(cards: list[Card], trump: Suit) -> list[Card]:
    """Trump cards that carry no points (the only cards that may be killed)."""
    return [card for card in cards if card.is_trump(trump) and not card.is_point_card(trump)]


def sort_by_trump_rank(cards: list[Card], trump: Suit, descending: bool = True) -> list[Card]:
    """Sort cards by trump strength, ties broken by suit order for determinism."""
    suit_order = list(Suit)
    return sorted(
        cards,
        key=lambda card: (card.trump_rank(trump), card.rank, -suit_order.index(card.suit)),
        reverse=descending,
    )


def highest_trump(cards: list[Card], trump: Suit) -> Card | None:
    """Return the strongest trump among the cards, or None if none is trump."""
    trumps = trump_cards(cards, trump)
    if not trumps:
        return None
    return max(trumps, key=lambda card: card.trump_rank(trump))
