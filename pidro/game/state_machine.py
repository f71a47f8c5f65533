"""Phase graph, readiness guards and transition effects."""

import logging

from pidro.game.errors import ErrorCode, GameError
from pidro.models.enums import Phase
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)

TRANSITIONS: dict[Phase, frozenset[Phase]] = {
    Phase.DEALER_SELECTION: frozenset({Phase.DEALING}),
    Phase.DEALING: frozenset({Phase.BIDDING}),
    Phase.BIDDING: frozenset({Phase.DECLARING}),
    Phase.DECLARING: frozenset({Phase.DISCARDING}),
    Phase.DISCARDING: frozenset({Phase.SECOND_DEAL}),
    Phase.SECOND_DEAL: frozenset({Phase.PLAYING}),
    Phase.PLAYING: frozenset({Phase.SCORING}),
    Phase.SCORING: frozenset({Phase.HAND_COMPLETE, Phase.COMPLETE}),
    Phase.HAND_COMPLETE: frozenset({Phase.DEALER_SELECTION}),
    Phase.COMPLETE: frozenset(),
}


def valid_transition(source: Phase, target: Phase) -> bool:
    """Check whether ``source -> target`` is an edge of the phase graph."""
    return target in TRANSITIONS[source]


def threshold_reached(state: GameState) -> bool:
    """True once either team has reached the winning score."""
    threshold = state.config.winning_score
    return any(score >= threshold for score in state.cumulative_scores.values())


def next_phase(state: GameState) -> Phase | None:
    """The phase that follows the current one, None for the terminal phase."""
    if state.phase == Phase.SCORING:
        return Phase.COMPLETE if threshold_reached(state) else Phase.HAND_COMPLETE
    successors = TRANSITIONS[state.phase]
    return next(iter(successors)) if successors else None


def can_advance(state: GameState) -> bool:
    """Readiness guard: has the current phase finished its work?"""
    phase = state.phase
    players = state.players.values()
    if phase == Phase.DEALER_SELECTION:
        return state.current_dealer is not None
    if phase == Phase.DEALING:
        return all(len(p.hand) == state.config.initial_hand_size for p in players)
    if phase == Phase.BIDDING:
        return state.bidding_team is not None
    if phase == Phase.DECLARING:
        return state.trump_suit is not None
    if phase == Phase.DISCARDING:
        trump = state.trump_suit
        return trump is not None and all(card.is_trump(trump) for p in players for card in p.hand)
    if phase == Phase.SECOND_DEAL:
        return state.cards_requested is not None and not state.deck
    if phase == Phase.PLAYING:
        return state.current_trick is None and all(p.eliminated or not p.hand for p in players)
    if phase == Phase.SCORING:
        if state.hand_scores is None:
            return False
        # A finished game waits here until the winner is recorded.
        return not threshold_reached(state) or state.winner is not None
    if phase == Phase.HAND_COMPLETE:
        return True
    return False


def transition(state: GameState, target: Phase) -> None:
    """Move to ``target`` and run its deterministic entry effects.

    Entering hand_complete clears the finished hand, rotates the dealer
    clockwise and bumps the hand number. These effects produce no events and
    run the same way during replay.

    Raises:
        GameError: INVALID_PHASE if the edge is not part of the graph

    """
    if not valid_transition(state.phase, target):
        raise GameError(
            ErrorCode.INVALID_PHASE,
            f"Cannot transition from {state.phase.value} to {target.value}",
            expected=target,
            actual=state.phase,
        )
    logger.debug("Phase %s -> %s (hand %s)", state.phase.value, target.value, state.hand_number)
    state.phase = target
    if target == Phase.HAND_COMPLETE:
        state.reset_hand()
        if state.current_dealer is not None:
            state.current_dealer = state.current_dealer.next
        state.hand_number += 1


def settle(state: GameState) -> None:
    """Follow every transition whose guard already holds, without side work.

    Used by replay: the automatic work of each phase is already captured as
    events in the log being replayed.
    """
    while can_advance(state):
        target = next_phase(state)
        if target is None:
            return
        transition(state, target)
