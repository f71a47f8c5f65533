"""Rule errors and the result type returned by the engine."""

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pidro.models.game_state import GameState


class ErrorCode(StrEnum):
    """Machine-readable rule violation codes."""

    # Phase / action
    INVALID_PHASE = "invalid_phase"
    INVALID_ACTION = "invalid_action"
    GAME_ALREADY_COMPLETE = "game_already_complete"

    # Seat
    INVALID_POSITION = "invalid_position"
    NOT_YOUR_TURN = "not_your_turn"
    PLAYER_ELIMINATED = "player_eliminated"

    # Bidding
    INVALID_BID_AMOUNT = "invalid_bid_amount"
    BID_TOO_LOW = "bid_too_low"
    ALREADY_BID = "already_bid"
    ALREADY_PASSED = "already_passed"
    DEALER_MUST_BID = "dealer_must_bid"

    # Trump
    INVALID_SUIT = "invalid_suit"
    TRUMP_ALREADY_DECLARED = "trump_already_declared"
    TRUMP_NOT_DECLARED = "trump_not_declared"

    # Cards
    INVALID_CARD = "invalid_card"
    CARD_NOT_IN_HAND = "card_not_in_hand"
    CANNOT_PLAY_NON_TRUMP = "cannot_play_non_trump"
    CAN_ONLY_KILL_TRUMP = "can_only_kill_trump"
    CANNOT_KILL_POINT_CARDS = "cannot_kill_point_cards"
    DUPLICATE_CARDS = "duplicate_cards"

    # Redeal
    NO_DEALER = "no_dealer"
    NOT_DEALER_TURN = "not_dealer_turn"
    INVALID_CARD_COUNT = "invalid_card_count"

    # Replay
    NO_HISTORY = "no_history"
    INVALID_EVENT = "invalid_event"


class GameError(Exception):
    """A rule violation.

    Raised inside the rule modules and returned (never raised) by the public
    engine and replay entry points.

    Attributes:
        code: Error category
        message: Human-readable description
        details: Structured context (expected/actual values and the like)

    """

    def __init__(self, code: ErrorCode, message: str, **details: Any) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameError):
            return NotImplemented
        return (self.code, self.message, self.details) == (other.code, other.message, other.details)

    def __hash__(self) -> int:
        return hash((self.code, self.message))

    def __repr__(self) -> str:
        return f"GameError({self.code.value!r}, {self.message!r})"

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "message": self.message,
            "details": {key: _plain(value) for key, value in self.details.items()},
        }


def _plain(value: Any) -> Any:
    if isinstance(value, list | tuple):
        return [_plain(item) for item in value]
    if hasattr(value, "notation"):
        return value.notation
    return getattr(value, "value", value)


@dataclass(frozen=True)
class Result:
    """Outcome of an engine call: a new state or an error, never both."""

    state: "GameState | None" = None
    error: GameError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    def unwrap(self) -> "GameState":
        """Return the state, raising the error if the call failed."""
        if self.error is not None:
            raise self.error
        assert self.state is not None
        return self.state


# =============================================================================
# Error constructors
# =============================================================================


def invalid_phase(expected, actual) -> GameError:
    return GameError(
        ErrorCode.INVALID_PHASE,
        f"Invalid phase: expected {expected.value}, but game is in {actual.value}",
        expected=expected,
        actual=actual,
    )


def invalid_action(action: str, phase) -> GameError:
    return GameError(
        ErrorCode.INVALID_ACTION,
        f"Action {action} is not valid in phase {phase.value}",
        action=action,
        phase=phase,
    )


def not_your_turn(current) -> GameError:
    turn = current.value if current else "nobody"
    return GameError(ErrorCode.NOT_YOUR_TURN, f"Not your turn, current turn: {turn}", current=current)


def not_dealer_turn(dealer, turn) -> GameError:
    return GameError(
        ErrorCode.NOT_DEALER_TURN,
        f"It is not the dealer's turn (dealer: {dealer.value}, turn: {turn.value if turn else 'nobody'})",
        dealer=dealer,
        turn=turn,
    )


def invalid_card_count(expected: int, actual: int) -> GameError:
    return GameError(
        ErrorCode.INVALID_CARD_COUNT,
        f"Invalid card count: expected {expected}, got {actual}",
        expected=expected,
        actual=actual,
    )
