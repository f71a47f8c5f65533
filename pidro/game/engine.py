"""Game engine: the public entry points for hosting code.

``apply_action`` validates an action against the current state, applies it
to a copy of the state and then runs every automatic phase that follows
(dealing, discarding, the second deal, kills, scoring) until a seat has to
act again or the game is over.
"""

import logging
from collections.abc import Callable
from itertools import combinations

from pidro.config import GameConfig
from pidro.game import bidding, dealing, discard, play, scoring, trump
from pidro.game.errors import ErrorCode, GameError, Result, invalid_action, not_your_turn
from pidro.game.state_machine import can_advance, next_phase, transition
from pidro.models import actions
from pidro.models.card import Card
from pidro.models.enums import Phase, Position, Suit, Team
from pidro.models.game_state import GameState
from pidro.services.log_service import LogService

logger = logging.getLogger(__name__)
log_service = LogService()

Handler = Callable[[GameState, Position, actions.Action], None]

ROUTES: dict[tuple[Phase, type], Handler] = {
    (Phase.BIDDING, actions.Bid): lambda state, position, action: bidding.apply_bid(state, position, action),
    (Phase.BIDDING, actions.Pass): lambda state, position, _action: bidding.apply_pass(state, position),
    (Phase.DECLARING, actions.DeclareTrump): lambda state, position, action: trump.declare_trump(
        state, position, action.suit
    ),
    (Phase.SECOND_DEAL, actions.SelectHand): lambda state, position, action: discard.dealer_rob_pack(
        state, position, list(action.cards)
    ),
    (Phase.PLAYING, actions.PlayCard): lambda state, position, action: play.play_card(state, position, action.card),
}


def new_state(config: GameConfig | None = None, seed: int | None = None) -> GameState:
    """Fresh game waiting for dealer selection (also the starting point of replay)."""
    return GameState(config=config or GameConfig.from_settings(), seed=seed)


def start_game(config: GameConfig | None = None, seed: int | None = None) -> GameState:
    """Create a game, cut for dealer and deal the first hand.

    Args:
        config: Rule configuration, defaults to the values from settings
        seed: Shuffle seed for reproducible games

    Returns:
        A state in the bidding phase

    """
    state = new_state(config, seed)
    _enter_phase(state)
    advance(state)
    log_service.info({"action": "start_game", "dealer": state.current_dealer.value, "seed": seed})
    return state


def _resolve_position(position: Position | str) -> Position:
    try:
        return Position(position)
    except ValueError:
        raise GameError(ErrorCode.INVALID_POSITION, f"Invalid position: {position!r}", position=position) from None


def _authorize(state: GameState, position: Position | str) -> Position:
    if state.phase == Phase.COMPLETE:
        raise GameError(ErrorCode.GAME_ALREADY_COMPLETE, "Game is already complete")
    seat = _resolve_position(position)
    if state.players[seat].eliminated:
        raise GameError(ErrorCode.PLAYER_ELIMINATED, "Player has been eliminated (went cold)", position=seat)
    if state.current_turn is None or state.current_turn != seat:
        raise not_your_turn(state.current_turn)
    return seat


def apply_action(state: GameState, position: Position | str, action: actions.Action) -> Result:
    """Apply an action for a seat.

    The given state is never modified; on success the result holds a new
    state that already includes every automatic phase that follows.

    Args:
        state: Current game state
        position: Acting seat
        action: Action to apply

    Returns:
        ``Result(state=...)`` on success, ``Result(error=...)`` otherwise

    """
    try:
        seat = _authorize(state, position)
        handler = ROUTES.get((state.phase, type(action)))
        if handler is None:
            raise invalid_action(actions.action_name(action), state.phase)
        updated = state.clone()
        handler(updated, seat, action)
        advance(updated)
    except GameError as e:
        log_service.debug(
            {"action": actions.action_name(action), "position": position, "phase": state.phase.value, "error": e.code}
        )
        return Result(error=e)

    log_service.debug(
        {"action": actions.action_name(action), "position": seat.value, "phase": updated.phase.value}
    )
    return Result(state=updated)


def advance(state: GameState) -> None:
    """Run automatic phases until a seat must act or the game is complete."""
    while can_advance(state):
        target = next_phase(state)
        if target is None:
            return
        transition(state, target)
        _enter_phase(state)


def _enter_phase(state: GameState) -> None:
    phase = state.phase
    if phase == Phase.DEALER_SELECTION and state.current_dealer is None:
        dealing.select_dealer(state)
    elif phase == Phase.DEALING:
        dealing.deal_initial(state)
    elif phase == Phase.DISCARDING:
        discard.discard_non_trumps(state)
    elif phase == Phase.SECOND_DEAL:
        discard.second_deal(state)
        if state.deck and (state.config.auto_dealer_rob or not discard.needs_dealer_choice(state)):
            discard.auto_rob(state)
    elif phase == Phase.PLAYING:
        play.start_play(state)
    elif phase == Phase.SCORING:
        scoring.score_hand(state)
    elif phase == Phase.COMPLETE:
        logger.info("Game complete after %s hands, winner %s", state.hand_number, state.winner)


def legal_actions(state: GameState, position: Position | str) -> list[actions.Action]:
    """Every action ``position`` may take now.

    Each returned action succeeds if passed to ``apply_action`` on the same
    state. Seats that may not act get an empty list.
    """
    try:
        seat = _authorize(state, position)
    except GameError:
        return []

    if state.phase == Phase.BIDDING:
        return bidding.legal_bidding_actions(state, seat)
    if state.phase == Phase.DECLARING and state.trump_suit is None:
        return [actions.DeclareTrump(suit) for suit in Suit]
    if state.phase == Phase.SECOND_DEAL and discard.needs_dealer_choice(state) and seat == state.current_dealer:
        pool = sorted(discard.dealer_pool(state), key=_card_sort_key)
        return [actions.SelectHand(cards) for cards in combinations(pool, state.config.final_hand_size)]
    if state.phase == Phase.PLAYING:
        return [actions.PlayCard(card) for card in play.legal_plays(state, seat)]
    return []


def _card_sort_key(card: Card) -> tuple[int, int]:
    return (list(Suit).index(card.suit), card.rank)


def game_over(state: GameState) -> bool:
    return state.phase == Phase.COMPLETE


def winner(state: GameState) -> Team | None:
    """Winning team, None while the game is still running."""
    return state.winner
