"""Tests for the legal-action cache."""

import pytest

from pidro.config import GameConfig
from pidro.game.engine import apply_action, legal_actions, start_game
from pidro.models.actions import Pass
from pidro.models.enums import Position
from pidro.services.move_cache import MoveCache, state_fingerprint


@pytest.fixture
def game():
    return start_game(GameConfig(), seed=9)


class TestFingerprint:
    """Test state fingerprints."""

    def test_stable_across_copies(self, game):
        assert state_fingerprint(game, Position.NORTH) == state_fingerprint(game.clone(), Position.NORTH)

    def test_differs_per_seat(self, game):
        assert state_fingerprint(game, Position.NORTH) != state_fingerprint(game, Position.EAST)

    def test_changes_after_action(self, game):
        seat = game.current_turn
        after = apply_action(game, seat, Pass()).unwrap()
        assert state_fingerprint(game, seat) != state_fingerprint(after, seat)

    def test_ignores_event_timestamps(self, game):
        """Replaying the same history gives the same fingerprint."""
        again = start_game(GameConfig(), seed=9)
        assert state_fingerprint(game, Position.SOUTH) == state_fingerprint(again, Position.SOUTH)


class TestMoveCache:
    """Test cache hits, misses and eviction."""

    def test_matches_engine(self, game):
        cache = MoveCache()
        seat = game.current_turn
        assert cache.legal_actions(game, seat) == legal_actions(game, seat)

    def test_hit_on_second_lookup(self, game):
        cache = MoveCache()
        cache.legal_actions(game, game.current_turn)
        cache.legal_actions(game.clone(), game.current_turn)
        assert cache.stats() == {"entries": 1, "hits": 1, "misses": 1, "hit_rate": 0.5}

    def test_returned_list_is_a_copy(self, game):
        cache = MoveCache()
        seat = game.current_turn
        first = cache.legal_actions(game, seat)
        first.clear()
        assert cache.legal_actions(game, seat) == legal_actions(game, seat)

    def test_lru_eviction(self, game):
        cache = MoveCache(max_entries=2)
        for position in Position:
            cache.legal_actions(game, position)
        assert len(cache) == 2

    def test_clear(self, game):
        cache = MoveCache()
        cache.legal_actions(game, Position.NORTH)
        cache.clear()
        assert len(cache) == 0
        assert cache.stats()["misses"] == 0
        assert cache.stats()["hit_rate"] == 0.0
