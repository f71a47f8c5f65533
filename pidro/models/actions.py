"""Actions a seat can submit to the engine."""

from dataclasses import dataclass

from pidro.models.card import Card
from pidro.models.enums import Suit


@dataclass(frozen=True)
class Bid:
    """Bid ``amount`` points."""

    amount: int


@dataclass(frozen=True)
class Pass:
    """Pass in the bidding round."""


@dataclass(frozen=True)
class DeclareTrump:
    """Name the trump suit (winning bidder only)."""

    suit: Suit


@dataclass(frozen=True)
class PlayCard:
    """Play a trump card to the current trick."""

    card: Card


@dataclass(frozen=True)
class SelectHand:
    """Dealer keeps these cards after robbing the pack."""

    cards: tuple[Card, ...]

    def __post_init__(self) -> None:
        object.__setattr__(self, "cards", tuple(self.cards))


Action = Bid | Pass | DeclareTrump | PlayCard | SelectHand


def action_name(action: object) -> str:
    """Snake-case name of an action, used in error messages and logs."""
    return {
        Bid: "bid",
        Pass: "pass",
        DeclareTrump: "declare_trump",
        PlayCard: "play_card",
        SelectHand: "select_hand",
    }.get(type(action), type(action).__name__)
