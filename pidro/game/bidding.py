"""Bidding round.

Each seat acts exactly once, clockwise from the dealer's left. A bid must be
in range and beat the current highest bid. The dealer may not pass when the
other three seats all passed. The round closes after four entries.
"""

import logging

from pidro.game.errors import ErrorCode, GameError, invalid_phase
from pidro.game.events import record
from pidro.models import actions
from pidro.models.enums import GameEventType, Phase, Position
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def validate_bid_amount(state: GameState, amount: int) -> GameError | None:
    """Return an error if ``amount`` is outside the configured bid range."""
    config = state.config
    if not isinstance(amount, int) or isinstance(amount, bool) or not config.min_bid <= amount <= config.max_bid:
        return GameError(
            ErrorCode.INVALID_BID_AMOUNT,
            f"Invalid bid amount: {amount}. Must be between {config.min_bid} and {config.max_bid}",
            amount=amount,
        )
    return None


def has_acted(state: GameState, position: Position) -> bool:
    return any(entry.position == position for entry in state.bids)


def minimum_bid(state: GameState) -> int:
    """Lowest amount that would currently be accepted."""
    if state.highest_bid is None:
        return state.config.min_bid
    return state.highest_bid[1] + 1


def dealer_must_bid(state: GameState, position: Position) -> bool:
    """True if ``position`` is the dealer and all three other seats passed."""
    if position != state.current_dealer:
        return False
    others = [entry for entry in state.bids if entry.position != position]
    return len(others) == 3 and all(entry.is_pass for entry in others)


def bidding_complete(state: GameState) -> bool:
    """The round closes after exactly four entries, whatever their timestamps."""
    return len(state.bids) == 4


def _check_can_act(state: GameState, position: Position) -> None:
    if state.phase != Phase.BIDDING:
        raise invalid_phase(Phase.BIDDING, state.phase)
    for entry in state.bids:
        if entry.position == position:
            if entry.is_pass:
                raise GameError(ErrorCode.ALREADY_PASSED, "Player has already passed", position=position)
            raise GameError(ErrorCode.ALREADY_BID, "Player has already bid", position=position)


def apply_bid(state: GameState, position: Position, action: actions.Bid) -> None:
    """Record a bid.

    Raises:
        GameError: INVALID_BID_AMOUNT, ALREADY_BID, ALREADY_PASSED or BID_TOO_LOW

    """
    error = validate_bid_amount(state, action.amount)
    if error is not None:
        raise error
    _check_can_act(state, position)
    if state.highest_bid is not None and action.amount <= state.highest_bid[1]:
        needed = minimum_bid(state)
        raise GameError(
            ErrorCode.BID_TOO_LOW,
            f"Bid too low. Minimum bid is {needed}",
            minimum=needed,
            amount=action.amount,
        )

    record(state, GameEventType.BID_MADE, position, amount=action.amount)
    logger.debug("%s bids %s", position.value, action.amount)
    _finish_if_complete(state)


def apply_pass(state: GameState, position: Position) -> None:
    """Record a pass.

    Raises:
        GameError: ALREADY_BID, ALREADY_PASSED or DEALER_MUST_BID

    """
    _check_can_act(state, position)
    if dealer_must_bid(state, position):
        raise GameError(
            ErrorCode.DEALER_MUST_BID,
            "Dealer must bid when all other players have passed",
            position=position,
        )

    record(state, GameEventType.PLAYER_PASSED, position)
    logger.debug("%s passes", position.value)
    _finish_if_complete(state)


def _finish_if_complete(state: GameState) -> None:
    if not bidding_complete(state) or state.highest_bid is None:
        return
    bidder, amount = state.highest_bid
    record(state, GameEventType.BIDDING_COMPLETE, bidder, amount=amount)
    logger.info("Bidding won by %s with %s (hand %s)", bidder.value, amount, state.hand_number)


def legal_bidding_actions(state: GameState, position: Position) -> list[actions.Action]:
    """Every bid or pass ``position`` may make now."""
    if state.phase != Phase.BIDDING or has_acted(state, position):
        return []
    options: list[actions.Action] = [
        actions.Bid(amount) for amount in range(minimum_bid(state), state.config.max_bid + 1)
    ]
    if not dealer_must_bid(state, position):
        options.append(actions.Pass())
    return options
