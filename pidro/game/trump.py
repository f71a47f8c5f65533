"""Trump declaration and trump-related hand analysis."""

import logging

from pidro.constants import FINAL_HAND_SIZE
from pidro.game.errors import ErrorCode, GameError, invalid_phase
from pidro.game.events import record
from pidro.models.card import Card, non_point_trumps, non_trump_cards, trump_cards
from pidro.models.enums import GameEventType, Phase, Position, Suit
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def declare_trump(state: GameState, position: Position, suit: Suit) -> None:
    """Declare the trump suit for this hand.

    Only the winning bidder reaches this point (the engine checks the turn).

    Raises:
        GameError: INVALID_PHASE, INVALID_SUIT or TRUMP_ALREADY_DECLARED

    """
    if state.phase != Phase.DECLARING:
        raise invalid_phase(Phase.DECLARING, state.phase)
    try:
        suit = Suit(suit)
    except ValueError:
        raise GameError(ErrorCode.INVALID_SUIT, f"Invalid suit: {suit!r}", suit=suit) from None
    if state.trump_suit is not None:
        raise GameError(
            ErrorCode.TRUMP_ALREADY_DECLARED,
            f"Trump has already been declared as {state.trump_suit.value}",
            suit=state.trump_suit,
        )

    record(state, GameEventType.TRUMP_DECLARED, position, suit=suit.value)
    logger.info("%s declares %s trump (hand %s)", position.value, suit.value, state.hand_number)


def coerce_card(card: Card | str) -> Card:
    """Accept a Card or its notation.

    Raises:
        GameError: INVALID_CARD for unparseable notation

    """
    if isinstance(card, Card):
        return card
    try:
        return Card.parse(card)
    except ValueError:
        raise GameError(ErrorCode.INVALID_CARD, f"Invalid card: {card!r}", card=card) from None


def categorize_hand(hand: list[Card], trump: Suit) -> dict[str, list[Card]]:
    """Split a hand into trump and non-trump cards."""
    return {"trump": trump_cards(hand, trump), "non_trump": non_trump_cards(hand, trump)}


def count_trump(hand: list[Card], trump: Suit) -> int:
    return len(trump_cards(hand, trump))


def can_kill_to_six(hand: list[Card], trump: Suit, hand_size: int = FINAL_HAND_SIZE) -> bool:
    """Whether a seat over the trump limit has enough non-point trumps to shed the excess."""
    excess = count_trump(hand, trump) - hand_size
    if excess <= 0:
        return True
    return len(non_point_trumps(hand, trump)) >= excess


def validate_kill_cards(hand: list[Card], cards: list[Card], trump: Suit) -> None:
    """Check that ``cards`` may be killed from ``hand``.

    Raises:
        GameError: CARD_NOT_IN_HAND, CAN_ONLY_KILL_TRUMP or CANNOT_KILL_POINT_CARDS

    """
    missing = [card for card in cards if card not in hand]
    if missing:
        raise GameError(
            ErrorCode.CARD_NOT_IN_HAND,
            f"Cards not in hand: {', '.join(card.notation for card in missing)}",
            cards=missing,
        )
    if any(not card.is_trump(trump) for card in cards):
        raise GameError(ErrorCode.CAN_ONLY_KILL_TRUMP, "Only trump cards can be killed")
    if any(card.is_point_card(trump) for card in cards):
        raise GameError(ErrorCode.CANNOT_KILL_POINT_CARDS, "Point cards cannot be killed")
