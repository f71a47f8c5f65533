"""Rules engine for Finnish Pidro."""

from pidro.game.engine import apply_action, game_over, legal_actions, new_state, start_game, winner
from pidro.game.errors import ErrorCode, GameError, Result

__all__ = [
    "ErrorCode",
    "GameError",
    "Result",
    "apply_action",
    "game_over",
    "legal_actions",
    "new_state",
    "start_game",
    "winner",
]
