"""Cache for legal-action enumeration.

The cache is owned by whoever creates it (a bot, a search, a server
session); the engine itself keeps no global caches. Entries are keyed by a
fingerprint of everything that influences the legal actions of a seat.
"""

import hashlib
import logging
from collections import OrderedDict

from pidro.game.engine import legal_actions
from pidro.models.actions import Action
from pidro.models.card import to_notations
from pidro.models.enums import Position
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 10_000


def state_fingerprint(state: GameState, position: Position) -> str:
    """Stable hash of the parts of a state that decide ``position``'s actions."""
    trick = state.current_trick
    parts = [
        state.phase.value,
        position.value,
        state.current_turn.value if state.current_turn else "-",
        state.current_dealer.value if state.current_dealer else "-",
        state.trump_suit.value if state.trump_suit else "-",
        ",".join(f"{entry.position.value}:{entry.amount}" for entry in state.bids),
        ",".join(to_notations(state.deck)),
        ",".join(f"{play.position.value}:{play.card.notation}" for play in trick.plays) if trick else "-",
        "dealt" if state.cards_requested is not None else "-",
        repr(state.config),
    ]
    for seat in Position:
        player = state.players[seat]
        parts.append(f"{seat.value}:{int(player.eliminated)}:{','.join(to_notations(player.hand))}")
    return hashlib.sha256("|".join(parts).encode()).hexdigest()


class MoveCache:
    """LRU cache of ``legal_actions`` results."""

    def __init__(self, max_entries: int = DEFAULT_MAX_ENTRIES) -> None:
        self.max_entries = max_entries
        self._entries: OrderedDict[str, list[Action]] = OrderedDict()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def legal_actions(self, state: GameState, position: Position) -> list[Action]:
        """Cached equivalent of ``engine.legal_actions``."""
        key = state_fingerprint(state, Position(position))
        cached = self._entries.get(key)
        if cached is not None:
            self.hits += 1
            self._entries.move_to_end(key)
            return list(cached)

        self.misses += 1
        result = legal_actions(state, position)
        self._entries[key] = result
        if len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return list(result)

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def stats(self) -> dict[str, int | float]:
        """Hit/miss counters and hit rate."""
        lookups = self.hits + self.misses
        return {
            "entries": len(self._entries),
            "hits": self.hits,
            "misses": self.misses,
            "hit_rate": self.hits / lookups if lookups else 0.0,
        }
