"""Event application: the only code that mutates a game state.

Rule modules validate an action, then call ``record`` with the events it
causes. ``apply_event`` is shared by live play and replay, so a state rebuilt
from its event log is identical to the live one.
"""

import logging
from collections.abc import Callable
from typing import Any

from pidro.game.errors import ErrorCode, GameError
from pidro.models.bid import BidEntry
from pidro.models.card import Card, parse_cards, to_notations
from pidro.models.enums import GameEventType, Position, Suit, Team
from pidro.models.game_event import GameEvent
from pidro.models.game_state import GameState
from pidro.models.trick import Trick

logger = logging.getLogger(__name__)


def record(
    state: GameState,
    event_type: GameEventType,
    position: Position | None = None,
    **data: Any,
) -> GameEvent:
    """Create an event for the current hand, apply it and append it to the log."""
    event = GameEvent(
        event_type=event_type,
        hand_number=state.hand_number,
        position=position,
        data=data,
    )
    apply_event(state, event)
    state.events.append(event)
    logger.debug("Event %s (hand %s, %s): %s", event_type.value, state.hand_number, position, data)
    return event


def apply_event(state: GameState, event: GameEvent) -> None:
    """Apply an event's effect to the state in place (does not append it).

    Raises:
        GameError: INVALID_EVENT if the event is malformed or inconsistent
            with the state

    """
    handler = _HANDLERS.get(event.event_type)
    if handler is None:
        raise GameError(ErrorCode.INVALID_EVENT, f"Unknown event type: {event.event_type}")
    try:
        handler(state, event)
    except (KeyError, ValueError, TypeError) as e:
        raise GameError(
            ErrorCode.INVALID_EVENT,
            f"Cannot apply {event.event_type.value}: {e}",
            event_type=event.event_type,
        ) from e


# =============================================================================
# Encoding helpers for event payloads
# =============================================================================


def cards_by_seat(mapping: dict[Position, list[Card]]) -> dict[str, list[str]]:
    return {position.value: to_notations(cards) for position, cards in mapping.items()}


def _seat_cards(data: dict[str, list[str]]) -> dict[Position, list[Card]]:
    return {Position(seat): parse_cards(cards) for seat, cards in data.items()}


def _require_position(event: GameEvent) -> Position:
    if event.position is None:
        raise ValueError("event has no position")
    return event.position


def _remove_cards(cards: list[Card], to_remove: list[Card]) -> None:
    for card in to_remove:
        cards.remove(card)


# =============================================================================
# Handlers
# =============================================================================


def _dealer_selected(state: GameState, event: GameEvent) -> None:
    state.current_dealer = _require_position(event)


def _cards_dealt(state: GameState, event: GameEvent) -> None:
    for position, cards in _seat_cards(event.data["hands"]).items():
        state.players[position].hand = cards
    state.deck = parse_cards(event.data["deck"])
    if state.current_dealer is not None:
        state.current_turn = state.current_dealer.next


def _bid_made(state: GameState, event: GameEvent) -> None:
    position = _require_position(event)
    amount = int(event.data["amount"])
    state.bids.append(BidEntry(position, amount, event.timestamp))
    state.highest_bid = (position, amount)
    state.current_turn = position.next


def _player_passed(state: GameState, event: GameEvent) -> None:
    position = _require_position(event)
    state.bids.append(BidEntry(position, None, event.timestamp))
    state.current_turn = position.next


def _bidding_complete(state: GameState, event: GameEvent) -> None:
    position = _require_position(event)
    state.highest_bid = (position, int(event.data["amount"]))
    state.bidding_team = position.team
    state.current_turn = position


def _trump_declared(state: GameState, event: GameEvent) -> None:
    state.trump_suit = Suit(event.data["suit"])
    state.current_turn = None


def _cards_discarded(state: GameState, event: GameEvent) -> None:
    cards = parse_cards(event.data["cards"])
    _remove_cards(state.players[_require_position(event)].hand, cards)
    state.discarded_cards.extend(cards)


def _second_deal_complete(state: GameState, event: GameEvent) -> None:
    for position, cards in _seat_cards(event.data["dealt"]).items():
        _remove_cards(state.deck, cards)
        state.players[position].hand.extend(cards)
    state.cards_requested = {Position(seat): int(n) for seat, n in event.data["requested"].items()}
    if state.deck:
        state.current_turn = state.current_dealer
    else:
        state.current_turn = state.highest_bid[0] if state.highest_bid else None


def _dealer_robbed_pack(state: GameState, event: GameEvent) -> None:
    dealer = state.players[_require_position(event)]
    kept = parse_cards(event.data["kept"])
    discarded = parse_cards(event.data["discarded"])
    pool = dealer.hand + state.deck
    if sorted(kept + discarded, key=str) != sorted(pool, key=str):
        raise ValueError("kept and discarded cards do not match the dealer's pool")
    dealer.hand = kept
    state.deck = []
    state.discarded_cards.extend(discarded)
    state.dealer_pool_size = len(pool)
    state.current_turn = state.highest_bid[0] if state.highest_bid else None


def _cards_killed(state: GameState, event: GameEvent) -> None:
    for position, cards in _seat_cards(event.data["killed"]).items():
        _remove_cards(state.players[position].hand, cards)
        state.killed_cards[position] = cards


def _card_played(state: GameState, event: GameEvent) -> None:
    position = _require_position(event)
    card = Card.parse(event.data["card"])
    state.players[position].remove_card(card)
    if state.current_trick is None:
        state.current_trick = Trick(number=state.trick_number + 1, leader=position)
    if not state.current_trick.add_play(position, card):
        raise ValueError(f"{position.value} already played in trick {state.current_trick.number}")
    state.current_turn = state.next_active_after(position)


def _player_went_cold(state: GameState, event: GameEvent) -> None:
    position = _require_position(event)
    player = state.players[position]
    revealed = parse_cards(event.data["revealed"])
    _remove_cards(player.hand, revealed)
    state.discarded_cards.extend(revealed)
    player.revealed_cards = revealed
    player.eliminated = True
    if state.current_turn == position:
        state.current_turn = state.next_active_after(position)


def _trick_won(state: GameState, event: GameEvent) -> None:
    winner = _require_position(event)
    trick = state.current_trick
    if trick is None:
        raise ValueError("no trick in progress")
    trick.winner = winner
    trick.points = int(event.data["points"])
    state.tricks.append(trick)
    state.current_trick = None
    state.trick_number += 1
    for team, points in event.data["awarded"].items():
        state.hand_points[Team(team)] += int(points)
    state.players[winner].tricks_won += 1
    if state.players[winner].eliminated:
        state.current_turn = state.next_active_after(winner)
    else:
        state.current_turn = winner


def _hand_scored(state: GameState, event: GameEvent) -> None:
    scores = {Team(team): int(delta) for team, delta in event.data["scores"].items()}
    for team, delta in scores.items():
        state.cumulative_scores[team] += delta
    state.hand_scores = scores
    state.current_turn = None


def _game_won(state: GameState, event: GameEvent) -> None:
    state.winner = Team(event.data["team"])
    state.current_turn = None


_HANDLERS: dict[GameEventType, Callable[[GameState, GameEvent], None]] = {
    GameEventType.DEALER_SELECTED: _dealer_selected,
    GameEventType.CARDS_DEALT: _cards_dealt,
    GameEventType.BID_MADE: _bid_made,
    GameEventType.PLAYER_PASSED: _player_passed,
    GameEventType.BIDDING_COMPLETE: _bidding_complete,
    GameEventType.TRUMP_DECLARED: _trump_declared,
    GameEventType.CARDS_DISCARDED: _cards_discarded,
    GameEventType.SECOND_DEAL_COMPLETE: _second_deal_complete,
    GameEventType.DEALER_ROBBED_PACK: _dealer_robbed_pack,
    GameEventType.CARDS_KILLED: _cards_killed,
    GameEventType.CARD_PLAYED: _card_played,
    GameEventType.TRICK_WON: _trick_won,
    GameEventType.PLAYER_WENT_COLD: _player_went_cold,
    GameEventType.HAND_SCORED: _hand_scored,
    GameEventType.GAME_WON: _game_won,
}
