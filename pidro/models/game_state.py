"""Game state, the aggregate root of a Pidro game."""

import copy
import random
from dataclasses import dataclass, field

from pidro.config import GameConfig
from pidro.models.bid import BidEntry
from pidro.models.card import Card
from pidro.models.enums import Phase, Position, Suit, Team
from pidro.models.game_event import GameEvent
from pidro.models.player import Player
from pidro.models.trick import Trick


def _empty_scores() -> dict[Team, int]:
    return {Team.NORTH_SOUTH: 0, Team.EAST_WEST: 0}


def _new_players() -> dict[Position, Player]:
    return {position: Player(position) for position in Position}


@dataclass
class GameState:
    """Complete state of one game.

    States are treated as values: the engine never mutates a state it was
    given, it works on a ``clone()`` and returns that.

    Attributes:
        config: Rule configuration for this game
        seed: Shuffle seed, None for system randomness
        phase: Current phase
        hand_number: 1-indexed hand counter
        current_dealer: Dealer for the current hand
        current_turn: Seat expected to act, None when nobody may act
        deck: Undealt cards, top first
        discarded_cards: Discards, robbed-pack leftovers and cold reveals
        killed_cards: Excess non-point trumps set aside per seat
        players: Seats keyed by position
        bids: Bidding entries in order
        highest_bid: (seat, amount) of the best bid so far
        bidding_team: Team that won the bidding
        trump_suit: Declared trump
        current_trick: Trick in progress
        tricks: Completed tricks of this hand
        trick_number: Number of completed tricks this hand
        cards_requested: Cards dealt per seat in the second deal, None before it
        dealer_pool_size: Size of the dealer's pool when robbing
        hand_points: Points captured per team this hand
        cumulative_scores: Game scores per team
        hand_scores: Score change per team once the hand is scored
        winner: Winning team once the game is complete
        events: Append-only event log

    """

    config: GameConfig = field(default_factory=GameConfig)
    seed: int | None = None
    phase: Phase = Phase.DEALER_SELECTION
    hand_number: int = 1
    current_dealer: Position | None = None
    current_turn: Position | None = None
    deck: list[Card] = field(default_factory=list)
    discarded_cards: list[Card] = field(default_factory=list)
    killed_cards: dict[Position, list[Card]] = field(default_factory=dict)
    players: dict[Position, Player] = field(default_factory=_new_players)
    bids: list[BidEntry] = field(default_factory=list)
    highest_bid: tuple[Position, int] | None = None
    bidding_team: Team | None = None
    trump_suit: Suit | None = None
    current_trick: Trick | None = None
    tricks: list[Trick] = field(default_factory=list)
    trick_number: int = 0
    cards_requested: dict[Position, int] | None = None
    dealer_pool_size: int | None = None
    hand_points: dict[Team, int] = field(default_factory=_empty_scores)
    cumulative_scores: dict[Team, int] = field(default_factory=_empty_scores)
    hand_scores: dict[Team, int] | None = None
    winner: Team | None = None
    events: list[GameEvent] = field(default_factory=list)

    def clone(self) -> "GameState":
        """Deep copy of this state."""
        return copy.deepcopy(self)

    def active_positions(self) -> list[Position]:
        """Seats that have not gone cold, in clockwise order from north."""
        return [position for position in Position if not self.players[position].eliminated]

    def next_active_after(self, position: Position) -> Position | None:
        """First non-eliminated seat strictly clockwise of ``position``.

        Wraps around to ``position`` itself if every other seat is cold and
        returns None when all four seats are cold.
        """
        for candidate in position.next.clockwise():
            if not self.players[candidate].eliminated:
                return candidate
        return None

    def rng(self, salt: str) -> random.Random:
        """Random source for this hand, reproducible when a seed is set."""
        if self.seed is None:
            return random.Random()
        return random.Random(f"{self.seed}:{self.hand_number}:{salt}")

    def card_count(self) -> int:
        """Cards accounted for across deck, hands, discards, kills and tricks."""
        in_tricks = sum(len(trick.plays) for trick in self.tricks)
        if self.current_trick is not None:
            in_tricks += len(self.current_trick.plays)
        return (
            len(self.deck)
            + sum(len(player.hand) for player in self.players.values())
            + len(self.discarded_cards)
            + sum(len(cards) for cards in self.killed_cards.values())
            + in_tricks
        )

    def reset_hand(self) -> None:
        """Clear everything scoped to a single hand."""
        self.current_turn = None
        self.deck = []
        self.discarded_cards = []
        self.killed_cards = {}
        self.bids = []
        self.highest_bid = None
        self.bidding_team = None
        self.trump_suit = None
        self.current_trick = None
        self.tricks = []
        self.trick_number = 0
        self.cards_requested = None
        self.dealer_pool_size = None
        self.hand_points = _empty_scores()
        self.hand_scores = None
        for player in self.players.values():
            player.reset_for_new_hand()
