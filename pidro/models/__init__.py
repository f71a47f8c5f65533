"""Game domain models."""

from pidro.models.actions import Action, Bid, DeclareTrump, Pass, PlayCard, SelectHand
from pidro.models.bid import BidEntry
from pidro.models.card import Card
from pidro.models.deck import Deck
from pidro.models.enums import GameEventType, Phase, Position, Suit, Team
from pidro.models.game_event import GameEvent
from pidro.models.game_state import GameState
from pidro.models.player import Player
from pidro.models.trick import Play, Trick

__all__ = [
    "Action",
    "Bid",
    "BidEntry",
    "Card",
    "DeclareTrump",
    "Deck",
    "GameEvent",
    "GameEventType",
    "GameState",
    "Pass",
    "Phase",
    "Play",
    "PlayCard",
    "Player",
    "Position",
    "SelectHand",
    "Suit",
    "Team",
    "Trick",
]
