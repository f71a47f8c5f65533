"""Discarding, the second deal and the dealer robbing the pack."""

import logging

from pidro.game.dealer_rob import select_best_cards
from pidro.game.dealing import deal_order
from pidro.game.errors import (
    ErrorCode,
    GameError,
    invalid_card_count,
    invalid_phase,
    not_dealer_turn,
)
from pidro.game.events import cards_by_seat, record
from pidro.game.trump import categorize_hand, coerce_card
from pidro.models.card import Card, to_notations
from pidro.models.enums import GameEventType, Phase, Position, Suit
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def _require_trump(state: GameState) -> Suit:
    if state.trump_suit is None:
        raise GameError(ErrorCode.TRUMP_NOT_DECLARED, "Trump suit has not been declared")
    return state.trump_suit


def discard_non_trumps(state: GameState) -> None:
    """Every seat sheds all of its non-trump cards."""
    if state.phase != Phase.DISCARDING:
        raise invalid_phase(Phase.DISCARDING, state.phase)
    trump = _require_trump(state)

    for position in Position:
        discards = categorize_hand(state.players[position].hand, trump)["non_trump"]
        if discards:
            record(state, GameEventType.CARDS_DISCARDED, position, cards=to_notations(discards))
            logger.debug("%s discards %s cards", position.value, len(discards))


def second_deal(state: GameState) -> None:
    """Fill every non-dealer seat up to the final hand size.

    Seats are served clockwise from the dealer's left. Seats already holding
    the final hand size or more receive nothing. Dealing stops early if the
    deck runs out.
    """
    if state.phase != Phase.SECOND_DEAL:
        raise invalid_phase(Phase.SECOND_DEAL, state.phase)
    if state.current_dealer is None:
        raise GameError(ErrorCode.NO_DEALER, "No dealer has been selected")

    target = state.config.final_hand_size
    remaining = list(state.deck)
    dealt: dict[Position, list[Card]] = {}
    requested: dict[str, int] = {}
    for position in deal_order(state.current_dealer):
        if position == state.current_dealer:
            continue
        need = max(0, target - len(state.players[position].hand))
        cards, remaining = remaining[:need], remaining[need:]
        requested[position.value] = need
        if cards:
            dealt[position] = cards

    record(state, GameEventType.SECOND_DEAL_COMPLETE, dealt=cards_by_seat(dealt), requested=requested)
    logger.debug("Second deal complete, %s cards left for the dealer", len(state.deck))


def dealer_pool(state: GameState) -> list[Card]:
    """Cards available to the dealer when robbing: own hand plus the deck."""
    if state.current_dealer is None:
        return []
    return state.players[state.current_dealer].hand + state.deck


def needs_dealer_choice(state: GameState) -> bool:
    """True while the dealer still has to pick a hand from the pool."""
    return (
        state.phase == Phase.SECOND_DEAL
        and state.cards_requested is not None
        and bool(state.deck)
        and len(dealer_pool(state)) > state.config.final_hand_size
    )


def dealer_rob_pack(state: GameState, position: Position, selected: list[Card | str]) -> None:
    """Dealer keeps ``selected`` from the pool, the rest is discarded.

    Raises:
        GameError: INVALID_PHASE, NO_DEALER, NOT_DEALER_TURN, INVALID_CARD,
            INVALID_CARD_COUNT, DUPLICATE_CARDS or CARD_NOT_IN_HAND

    """
    if state.phase != Phase.SECOND_DEAL:
        raise invalid_phase(Phase.SECOND_DEAL, state.phase)
    dealer = state.current_dealer
    if dealer is None:
        raise GameError(ErrorCode.NO_DEALER, "No dealer has been selected")
    if position != dealer or state.current_turn != dealer:
        raise not_dealer_turn(dealer, state.current_turn)

    selected = [coerce_card(card) for card in selected]
    pool = dealer_pool(state)
    keep = min(state.config.final_hand_size, len(pool))
    if len(selected) != keep:
        raise invalid_card_count(keep, len(selected))
    if len(set(selected)) != len(selected):
        raise GameError(ErrorCode.DUPLICATE_CARDS, "Selected cards contain duplicates")
    missing = [card for card in selected if card not in pool]
    if missing:
        raise GameError(
            ErrorCode.CARD_NOT_IN_HAND,
            f"Card {missing[0].notation} is not in the dealer's pool",
            card=missing[0],
        )

    _rob(state, dealer, selected)


def auto_rob(state: GameState) -> None:
    """Rob the pack with the automatic selection heuristic."""
    dealer = state.current_dealer
    if dealer is None:
        raise GameError(ErrorCode.NO_DEALER, "No dealer has been selected")
    trump = _require_trump(state)
    _rob(state, dealer, select_best_cards(dealer_pool(state), trump, state.config.final_hand_size))


def _rob(state: GameState, dealer: Position, kept: list[Card]) -> None:
    pool = dealer_pool(state)
    discarded = list(pool)
    for card in kept:
        discarded.remove(card)
    record(
        state,
        GameEventType.DEALER_ROBBED_PACK,
        dealer,
        received=to_notations(state.deck),
        kept=to_notations(kept),
        discarded=to_notations(discarded),
    )
    logger.info("Dealer %s robbed the pack: kept %s of %s cards", dealer.value, len(kept), len(pool))
