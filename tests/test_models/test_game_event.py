"""Tests for game events, bids and tricks."""

from datetime import UTC, datetime, timedelta

from pidro.models.bid import BidEntry
from pidro.models.card import Card
from pidro.models.enums import GameEventType, Position, Suit
from pidro.models.game_event import GameEvent
from pidro.models.trick import Trick


class TestGameEvent:
    """Test event serialization and equality."""

    def test_to_dict_and_back(self):
        event = GameEvent(
            GameEventType.CARD_PLAYED,
            hand_number=3,
            position=Position.EAST,
            data={"card": "Ah"},
        )
        restored = GameEvent.from_dict(event.to_dict())
        assert restored == event
        assert restored.timestamp == event.timestamp

    def test_to_dict_shape(self):
        event = GameEvent(GameEventType.TRUMP_DECLARED, data={"suit": "hearts"})
        payload = event.to_dict()
        assert payload["event_type"] == "trump_declared"
        assert payload["position"] is None
        assert payload["data"] == {"suit": "hearts"}

    def test_timestamp_ignored_in_equality(self):
        now = datetime.now(UTC)
        first = GameEvent(GameEventType.PLAYER_PASSED, position=Position.NORTH, timestamp=now)
        second = GameEvent(GameEventType.PLAYER_PASSED, position=Position.NORTH, timestamp=now + timedelta(seconds=5))
        assert first == second


class TestBidEntry:
    """Test bid records."""

    def test_pass_entry(self):
        assert BidEntry(Position.NORTH, None).is_pass
        assert not BidEntry(Position.NORTH, 7).is_pass

    def test_timestamp_ignored_in_equality(self):
        earlier = datetime(2024, 1, 1, tzinfo=UTC)
        assert BidEntry(Position.WEST, 9, earlier) == BidEntry(Position.WEST, 9)


class TestTrick:
    """Test trick bookkeeping."""

    def test_one_play_per_seat(self):
        trick = Trick(number=1, leader=Position.NORTH)
        assert trick.add_play(Position.NORTH, Card.parse("Ah"))
        assert not trick.add_play(Position.NORTH, Card.parse("Kh"))
        assert trick.has_played(Position.NORTH)
        assert not trick.has_played(Position.EAST)

    def test_highest_trump_wins(self):
        trick = Trick(number=1, leader=Position.NORTH)
        trick.add_play(Position.NORTH, Card.parse("5h"))
        trick.add_play(Position.EAST, Card.parse("6h"))
        trick.add_play(Position.SOUTH, Card.parse("5d"))
        assert trick.winning_play(Suit.HEARTS).position == Position.EAST
        assert trick.point_total(Suit.HEARTS) == 10

    def test_empty_trick_has_no_winner(self):
        assert Trick(number=1, leader=Position.NORTH).winning_play(Suit.HEARTS) is None
