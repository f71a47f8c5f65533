"""Event replay, undo and redo.

A state is rebuilt by applying its events, in order, to a fresh state and
following the phase transitions their guards allow. Live play mutates state
through the same ``apply_event`` primitive, so a replayed state equals the
state that produced the log.
"""

import logging
from datetime import datetime
from typing import Any

from pidro.config import GameConfig
from pidro.game.errors import ErrorCode, GameError, Result
from pidro.game.events import apply_event
from pidro.game.state_machine import settle
from pidro.models.game_event import GameEvent
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)


def _as_event(event: GameEvent | dict[str, Any]) -> GameEvent:
    if isinstance(event, GameEvent):
        return event
    try:
        return GameEvent.from_dict(event)
    except (KeyError, ValueError, TypeError) as e:
        raise GameError(ErrorCode.INVALID_EVENT, f"Malformed event: {e}") from e


def _apply(state: GameState, event: GameEvent) -> None:
    apply_event(state, event)
    state.events.append(event)
    settle(state)


def replay(
    events: list[GameEvent | dict[str, Any]],
    config: GameConfig | None = None,
    seed: int | None = None,
) -> Result:
    """Rebuild a state from an event log.

    Args:
        events: Events (or their ``to_dict`` form) in the order they happened
        config: Rule configuration of the original game
        seed: Seed of the original game, carried over to the rebuilt state

    Returns:
        ``Result(state=...)`` or ``Result(error=...)`` for a malformed log

    """
    state = GameState(config=config or GameConfig.from_settings(), seed=seed)
    try:
        for event in events:
            _apply(state, _as_event(event))
    except GameError as e:
        logger.warning("Replay failed after %s events: %s", len(state.events), e.message)
        return Result(error=e)
    return Result(state=state)


def undo(state: GameState) -> Result:
    """State as it was before the last event."""
    if not state.events:
        return Result(error=GameError(ErrorCode.NO_HISTORY, "No events to undo"))
    return replay(state.events[:-1], state.config, state.seed)


def redo(state: GameState, event: GameEvent | dict[str, Any]) -> Result:
    """Apply one more event to a copy of the state."""
    updated = state.clone()
    try:
        _apply(updated, _as_event(event))
    except GameError as e:
        return Result(error=e)
    return Result(state=updated)


def history_length(state: GameState) -> int:
    return len(state.events)


def last_event(state: GameState) -> GameEvent | None:
    return state.events[-1] if state.events else None


def events_since(state: GameState, timestamp: datetime) -> list[GameEvent]:
    """Events recorded strictly after ``timestamp``."""
    return [event for event in state.events if event.timestamp > timestamp]
