"""Dealer selection and the initial deal."""

import logging

from pidro.constants import DEAL_BATCH_SIZE, NUM_SEATS
from pidro.game.errors import ErrorCode, GameError, invalid_phase
from pidro.game.events import cards_by_seat, record
from pidro.models.card import Card, to_notations
from pidro.models.deck import Deck
from pidro.models.enums import GameEventType, Phase, Position
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def select_dealer(state: GameState) -> Position:
    """Cut for dealer.

    Each seat, north first and clockwise, draws a card from a shuffled deck.
    The highest rank deals; tied seats draw again until one remains.

    Returns:
        The selected dealer

    """
    if state.phase != Phase.DEALER_SELECTION:
        raise invalid_phase(Phase.DEALER_SELECTION, state.phase)

    deck = Deck.shuffled(state.rng("cut"))
    contenders = list(Position)
    draws: dict[Position, Card] = {}
    while True:
        draws = {position: deck.deal(1)[0] for position in contenders}
        best = max(card.rank for card in draws.values())
        contenders = [position for position in contenders if draws[position].rank == best]
        if len(contenders) == 1 or len(deck) < len(contenders):
            break

    dealer = contenders[0]
    record(state, GameEventType.DEALER_SELECTED, dealer, cut_card=draws[dealer].notation)
    logger.info("Dealer selected: %s (cut %s)", dealer.value, draws[dealer].display_name)
    return dealer


def deal_order(dealer: Position) -> list[Position]:
    """Seats in dealing order: clockwise starting left of the dealer."""
    return dealer.next.clockwise()


def deal_initial(state: GameState) -> None:
    """Shuffle a fresh deck and deal 3 batches of 3 cards to each seat.

    Raises:
        GameError: NO_DEALER if no dealer was selected

    """
    if state.phase != Phase.DEALING:
        raise invalid_phase(Phase.DEALING, state.phase)
    if state.current_dealer is None:
        raise GameError(ErrorCode.NO_DEALER, "No dealer has been selected")

    deck = Deck.shuffled(state.rng("deal"))
    hands: dict[Position, list[Card]] = {position: [] for position in deal_order(state.current_dealer)}
    batches = state.config.initial_hand_size // DEAL_BATCH_SIZE
    for _ in range(batches):
        for position in hands:
            hands[position].extend(deck.deal(DEAL_BATCH_SIZE))
    # Hand sizes that are not a multiple of the batch size get the rest one by one
    for _ in range(state.config.initial_hand_size % DEAL_BATCH_SIZE):
        for position in hands:
            hands[position].extend(deck.deal(1))

    record(
        state,
        GameEventType.CARDS_DEALT,
        hands=cards_by_seat(hands),
        deck=to_notations(deck.cards),
    )
    logger.debug("Dealt %s cards to %s seats, %s remain", state.config.initial_hand_size, NUM_SEATS, len(deck))
