"""Tests for the deck model."""

import random

from hypothesis import given, settings
from hypothesis import strategies as st

from pidro.models.card import all_cards
from pidro.models.deck import Deck


class TestDeck:
    """Test deck construction, shuffling and dealing."""

    def test_new_deck_has_52_unique_cards(self):
        deck = Deck()
        assert len(deck) == 52
        assert len(set(deck.cards)) == 52

    def test_seeded_shuffle_is_reproducible(self):
        first = Deck.shuffled(random.Random(42))
        second = Deck.shuffled(random.Random(42))
        assert first.cards == second.cards
        assert first.cards != Deck().cards

    def test_deal_takes_from_the_top(self):
        deck = Deck()
        top = deck.cards[:3]
        assert deck.deal(3) == top
        assert len(deck) == 49
        assert top[0] not in deck.cards

    def test_deal_more_than_remaining(self):
        """Dealing past the end returns whatever is left."""
        deck = Deck(all_cards()[:2])
        assert len(deck.deal(5)) == 2
        assert deck.deal(1) == []

    @given(seed=st.integers(0, 100000))
    @settings(max_examples=50, deadline=None)
    def test_shuffle_preserves_cards(self, seed: int) -> None:
        """Shuffling never adds, drops or duplicates a card."""
        deck = Deck.shuffled(random.Random(seed))
        assert sorted(deck.cards, key=str) == sorted(all_cards(), key=str)

    @given(seed=st.integers(0, 100000), count=st.integers(0, 60))
    @settings(max_examples=50, deadline=None)
    def test_deal_splits_the_deck(self, seed: int, count: int) -> None:
        """Dealt cards plus remaining cards are the original deck."""
        deck = Deck.shuffled(random.Random(seed))
        before = list(deck.cards)
        dealt = deck.deal(count)
        assert len(dealt) == min(count, 52)
        assert dealt + deck.cards == before
