"""Random playouts driven purely by ``legal_actions``.

Used by the test suite to walk whole games through the engine and by
``scripts/simulate_games.py``. Choices are uniform over the legal actions,
except that bidding only ever considers passing or the cheapest bid: random
high bids keep both teams below zero and games would never end.
"""

import logging
import random
from collections.abc import Callable
from dataclasses import dataclass

from pidro.config import GameConfig
from pidro.game.engine import apply_action, legal_actions, start_game
from pidro.models.actions import Action, Bid
from pidro.models.enums import Phase, Position
from pidro.models.game_state import GameState

logger = logging.getLogger(__name__)

StepCallback = Callable[[GameState, Position, Action, GameState], None]


class SimulationError(RuntimeError):
    """Raised when a playout gets stuck or a legal action is rejected."""


@dataclass
class SimulationResult:
    """Outcome of one simulated game."""

    seed: int
    state: GameState
    actions_taken: int

    @property
    def hands_played(self) -> int:
        return self.state.hand_number


def acting_seat(state: GameState) -> Position | None:
    """The seat that has at least one legal action, if any."""
    if state.current_turn is not None and legal_actions(state, state.current_turn):
        return state.current_turn
    return None


def choose_action(rng: random.Random, options: list[Action]) -> Action:
    """Pick a random action, limiting bids to the cheapest one."""
    bids = [option for option in options if isinstance(option, Bid)]
    if bids:
        cheapest = min(bids, key=lambda bid: bid.amount)
        options = [option for option in options if not isinstance(option, Bid)] + [cheapest]
    return rng.choice(options)


def play_random_game(
    seed: int,
    config: GameConfig | None = None,
    max_actions: int = 10_000,
    on_step: StepCallback | None = None,
) -> SimulationResult:
    """Play one game with uniformly random legal actions.

    Args:
        seed: Seeds both the deals and the action choices
        config: Rule configuration
        max_actions: Safety limit on the number of actions
        on_step: Called with (before, seat, action, after) for every action

    Returns:
        The finished game

    Raises:
        SimulationError: If no seat can act before the game completes, an
            action from ``legal_actions`` is rejected, or the limit is hit

    """
    rng = random.Random(seed)
    state = start_game(config or GameConfig(), seed=seed)
    taken = 0
    while state.phase != Phase.COMPLETE:
        if taken >= max_actions:
            raise SimulationError(f"Game {seed} did not finish within {max_actions} actions")
        seat = acting_seat(state)
        if seat is None:
            raise SimulationError(f"Game {seed} stuck in {state.phase.value} with no legal action")
        action = choose_action(rng, legal_actions(state, seat))
        result = apply_action(state, seat, action)
        if not result.ok:
            raise SimulationError(f"Legal action {action} rejected for {seat.value}: {result.error.message}")
        if on_step is not None:
            on_step(state, seat, action, result.state)
        state = result.state
        taken += 1

    logger.debug("Game %s finished after %s actions, winner %s", seed, taken, state.winner)
    return SimulationResult(seed=seed, state=state, actions_taken=taken)
