"""Tests for trump declaration, discarding, the second deal and robbing the pack."""

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

from pidro.config import GameConfig
from pidro.game import discard
from pidro.game.dealer_rob import select_best_cards
from pidro.game.engine import apply_action, legal_actions
from pidro.game.errors import ErrorCode, GameError
from pidro.game.trump import declare_trump
from pidro.models.actions import DeclareTrump, SelectHand
from pidro.models.card import Card, all_cards, parse_cards, to_notations
from pidro.models.enums import GameEventType, Phase, Position, Suit

# Dealer east, south won the bid. Diamonds will be trump.
TRUMPS = {
    Position.NORTH: ["Ad", "2d"],
    Position.SOUTH: ["Kd", "Qd", "Jd"],
    Position.WEST: ["5h"],
    Position.EAST: ["Td", "9d", "8d", "7d"],
}


@pytest.fixture
def declaring_state(state_factory, table_factory):
    """South must declare; the deck holds 16 cards after the first deal."""

    def _build(auto_rob: bool = False):
        hands, deck = table_factory(TRUMPS, Suit.DIAMONDS)
        return state_factory(
            Phase.DECLARING,
            hands,
            dealer=Position.EAST,
            turn=Position.SOUTH,
            bidder=Position.SOUTH,
            bid=8,
            deck=deck,
            config=GameConfig(auto_dealer_rob=auto_rob),
        )

    return _build


def hand(state, position):
    return to_notations(state.players[position].hand)


# =============================================================================
# DECLARING
# =============================================================================


class TestDeclareTrump:
    """Test trump declaration."""

    def test_only_bidder_declares(self, declaring_state):
        state = declaring_state()
        result = apply_action(state, Position.NORTH, DeclareTrump(Suit.DIAMONDS))
        assert result.error.code == ErrorCode.NOT_YOUR_TURN
        assert legal_actions(state, Position.SOUTH) == [DeclareTrump(suit) for suit in Suit]
        assert legal_actions(state, Position.NORTH) == []

    def test_invalid_suit(self, declaring_state):
        result = apply_action(declaring_state(), Position.SOUTH, DeclareTrump("stars"))
        assert result.error.code == ErrorCode.INVALID_SUIT

    def test_declaring_twice_is_rejected(self, declaring_state):
        state = declaring_state()
        declare_trump(state, Position.SOUTH, Suit.DIAMONDS)
        with pytest.raises(GameError) as exc_info:
            declare_trump(state, Position.SOUTH, Suit.HEARTS)
        assert exc_info.value.code == ErrorCode.TRUMP_ALREADY_DECLARED


# =============================================================================
# DISCARD AND SECOND DEAL
# =============================================================================


class TestDiscardAndSecondDeal:
    """Test the automatic discard and the refill to six cards."""

    def test_non_trumps_are_discarded(self, declaring_state):
        state = apply_action(declaring_state(), Position.SOUTH, DeclareTrump(Suit.DIAMONDS)).unwrap()

        discards = [e for e in state.events if e.event_type == GameEventType.CARDS_DISCARDED]
        assert {e.position for e in discards} == set(Position)
        north = next(e for e in discards if e.position == Position.NORTH)
        assert len(north.data["cards"]) == 7

    def test_second_deal_fills_non_dealers_to_six(self, declaring_state):
        """Served clockwise from the dealer's left: south, west, north."""
        state = apply_action(declaring_state(), Position.SOUTH, DeclareTrump(Suit.DIAMONDS)).unwrap()

        assert hand(state, Position.SOUTH) == ["Kd", "Qd", "Jd", "3d", "4d", "5d"]
        assert hand(state, Position.WEST) == ["5h", "6d", "3s", "4s", "5s", "6s"]
        assert hand(state, Position.NORTH) == ["Ad", "2d", "7s", "8s", "9s", "Ts"]
        assert state.cards_requested == {Position.SOUTH: 3, Position.WEST: 5, Position.NORTH: 4}

    def test_dealer_waits_to_rob(self, declaring_state):
        """Without auto-rob the dealer picks six of the pooled cards."""
        state = apply_action(declaring_state(), Position.SOUTH, DeclareTrump(Suit.DIAMONDS)).unwrap()

        assert state.phase == Phase.SECOND_DEAL
        assert state.current_turn == Position.EAST
        assert to_notations(state.deck) == ["Js", "Qs", "Ks", "As"]
        options = legal_actions(state, Position.EAST)
        assert len(options) == 28  # 8 choose 6
        assert all(isinstance(option, SelectHand) for option in options)

    def test_seats_at_six_are_skipped(self, state_factory):
        hands = {
            Position.NORTH: parse_cards(["Ah", "Kh", "Qh", "Jh", "Th", "9h", "8h"]),
            Position.EAST: parse_cards(["2h"]),
            Position.SOUTH: parse_cards(["3h"]),
            Position.WEST: parse_cards(["4h"]),
        }
        deck = parse_cards(["2c", "3c", "4c", "5c", "6c", "7c", "8c", "9c", "Tc", "Jc"])
        state = state_factory(Phase.SECOND_DEAL, hands, dealer=Position.WEST, trump=Suit.HEARTS, deck=deck)
        discard.second_deal(state)

        assert len(state.players[Position.NORTH].hand) == 7
        assert state.cards_requested[Position.NORTH] == 0
        assert hand(state, Position.EAST) == ["2h", "2c", "3c", "4c", "5c", "6c"]
        assert hand(state, Position.SOUTH) == ["3h", "7c", "8c", "9c", "Tc", "Jc"]
        assert state.deck == []

    def test_short_deck_stops_early(self, state_factory):
        hands = {position: parse_cards([f"{rank}h"]) for position, rank in zip(Position, "2345", strict=True)}
        deck = parse_cards(["2c", "3c", "4c", "5c", "6c", "7c", "8c"])
        state = state_factory(Phase.SECOND_DEAL, hands, dealer=Position.WEST, trump=Suit.HEARTS, deck=deck)
        discard.second_deal(state)

        assert len(state.players[Position.NORTH].hand) == 6
        assert len(state.players[Position.EAST].hand) == 3
        assert len(state.players[Position.SOUTH].hand) == 1
        assert state.cards_requested[Position.SOUTH] == 5


# =============================================================================
# ROBBING THE PACK
# =============================================================================


class TestDealerRob:
    """Test the dealer's choice from hand plus deck."""

    @pytest.fixture
    def robbing_state(self, declaring_state):
        return apply_action(declaring_state(), Position.SOUTH, DeclareTrump(Suit.DIAMONDS)).unwrap()

    def test_select_hand(self, robbing_state):
        keep = parse_cards(["Td", "9d", "8d", "7d", "As", "Ks"])
        state = apply_action(robbing_state, Position.EAST, SelectHand(keep)).unwrap()

        assert state.phase == Phase.PLAYING
        assert state.players[Position.EAST].hand == keep
        assert state.deck == []
        assert state.dealer_pool_size == 8
        assert Card.parse("Qs") in state.discarded_cards
        assert state.card_count() == 52

    def test_bidder_leads_first_trick(self, robbing_state):
        keep = parse_cards(["Td", "9d", "8d", "7d", "As", "Ks"])
        state = apply_action(robbing_state, Position.EAST, SelectHand(keep)).unwrap()
        assert state.current_turn == Position.SOUTH

    def test_wrong_card_count(self, robbing_state):
        result = apply_action(robbing_state, Position.EAST, SelectHand(parse_cards(["Td", "9d"])))
        assert result.error.code == ErrorCode.INVALID_CARD_COUNT
        assert result.error.details == {"expected": 6, "actual": 2}

    def test_card_outside_pool(self, robbing_state):
        keep = parse_cards(["Td", "9d", "8d", "7d", "As", "Ah"])
        result = apply_action(robbing_state, Position.EAST, SelectHand(keep))
        assert result.error.code == ErrorCode.CARD_NOT_IN_HAND

    def test_duplicates(self, robbing_state):
        keep = parse_cards(["Td", "Td", "8d", "7d", "As", "Ks"])
        result = apply_action(robbing_state, Position.EAST, SelectHand(keep))
        assert result.error.code == ErrorCode.DUPLICATE_CARDS

    def test_select_hand_by_notation(self, robbing_state):
        keep = ["Td", "9d", "8d", "7d", "As", "Ks"]
        state = apply_action(robbing_state, Position.EAST, SelectHand(keep)).unwrap()
        assert hand(state, Position.EAST) == keep

    def test_malformed_notation(self, robbing_state):
        result = apply_action(robbing_state, Position.EAST, SelectHand(["zz", "9d", "8d", "7d", "As", "Ks"]))
        assert result.error.code == ErrorCode.INVALID_CARD
        assert result.error.details == {"card": "zz"}
        assert to_notations(robbing_state.deck) == ["Js", "Qs", "Ks", "As"]

    def test_non_dealer_cannot_rob(self, robbing_state):
        keep = parse_cards(["Td", "9d", "8d", "7d", "As", "Ks"])
        result = apply_action(robbing_state, Position.SOUTH, SelectHand(keep))
        assert result.error.code == ErrorCode.NOT_YOUR_TURN

    def test_auto_rob_scenario(self, declaring_state):
        """With auto-rob every hand ends at six, the deck is empty and play starts."""
        state = apply_action(declaring_state(auto_rob=True), Position.SOUTH, DeclareTrump(Suit.DIAMONDS)).unwrap()

        assert state.phase == Phase.PLAYING
        assert state.deck == []
        assert all(len(player.hand) == 6 for player in state.players.values())
        assert hand(state, Position.EAST) == ["Td", "9d", "8d", "7d", "As", "Ks"]
        assert state.current_turn == Position.SOUTH
        robbed = [e for e in state.events if e.event_type == GameEventType.DEALER_ROBBED_PACK]
        assert robbed[0].data["discarded"] == ["Js", "Qs"]

    def test_small_pool_taken_whole(self, state_factory):
        """A pool of six or fewer cards leaves the dealer nothing to choose."""
        hands = {
            Position.NORTH: parse_cards(["Ah", "Kh", "Qh", "Jh", "Th", "9h"]),
            Position.EAST: parse_cards(["8h", "7h", "6h", "5h", "4h", "3h"]),
            Position.SOUTH: parse_cards(["2h", "5d", "Ac", "Kc", "Qc", "Jc"]),
            Position.WEST: parse_cards(["As"]),
        }
        state = state_factory(
            Phase.SECOND_DEAL,
            hands,
            dealer=Position.WEST,
            trump=Suit.HEARTS,
            bidder=Position.NORTH,
            deck=parse_cards(["2s", "3s"]),
        )
        discard.second_deal(state)
        assert not discard.needs_dealer_choice(state)
        discard.auto_rob(state)
        assert hand(state, Position.WEST) == ["As", "3s", "2s"]
        assert state.deck == []


class TestSelectBestCards:
    """Test the automatic selection heuristic."""

    def test_priority_order(self):
        pool = parse_cards(["3c", "Ah", "Kh", "4h", "Ac", "5d", "Qh", "7h", "Jc"])
        picked = select_best_cards(pool, Suit.HEARTS)
        assert to_notations(picked) == ["Ah", "5d", "Kh", "Qh", "7h", "4h"]

    def test_point_cards_first(self):
        pool = parse_cards(["Kh", "2h", "Th", "Qh", "9h", "8h", "Jh"])
        picked = select_best_cards(pool, Suit.HEARTS)
        assert to_notations(picked[:3]) == ["Jh", "Th", "2h"]

    def test_non_trump_fill(self):
        pool = parse_cards(["Ah", "2c", "Kc", "7s", "Qs", "3d"])
        picked = select_best_cards(pool + parse_cards(["4c"]), Suit.HEARTS)
        assert to_notations(picked) == ["Ah", "Kc", "Qs", "7s", "4c", "3d"]

    def test_small_pool_returns_everything(self):
        pool = parse_cards(["Ah", "2c"])
        assert sorted(select_best_cards(pool, Suit.HEARTS), key=str) == sorted(pool, key=str)

    @given(
        pool=st.lists(st.sampled_from(all_cards()), unique=True, max_size=20),
        trump=st.sampled_from(list(Suit)),
        data=st.data(),
    )
    @settings(max_examples=200, deadline=None)
    def test_selection_properties(self, pool, trump, data):
        """Six trump whenever the pool holds them, independent of pool order."""
        picked = select_best_cards(pool, trump)

        assert len(picked) == min(6, len(pool))
        assert all(card in pool for card in picked)
        if sum(1 for card in pool if card.is_trump(trump)) >= 6:
            assert all(card.is_trump(trump) for card in picked)
        shuffled = data.draw(st.permutations(pool))
        assert select_best_cards(shuffled, trump) == picked
