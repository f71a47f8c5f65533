#!/usr/bin/env python3
"""Run random Pidro games through the engine and summarise them.

Every game is checked for card conservation and replay equivalence.

Usage:
    python scripts/simulate_games.py --games 20 --seed 7 --auto-rob
"""

import argparse
import logging
import time

from rich.console import Console
from rich.table import Table

from pidro.config import GameConfig, settings
from pidro.services.log_service import configure_logging
from pidro.services.replay import replay
from pidro.services.simulation import SimulationError, play_random_game

console = Console()
logger = logging.getLogger(__name__)


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Simulate random Pidro games")
    parser.add_argument("--games", type=int, default=10, help="Number of games to play")
    parser.add_argument("--seed", type=int, default=0, help="Seed of the first game")
    parser.add_argument("--winning-score", type=int, default=settings.winning_score, help="Score that ends a game")
    parser.add_argument("--auto-rob", action="store_true", help="Let the engine choose the dealer's hand")
    parser.add_argument("--log-level", default=settings.log_level, help="Log level")
    return parser.parse_args()


def main() -> int:
    args = parse_args()
    configure_logging(args.log_level)
    config = GameConfig(winning_score=args.winning_score, auto_dealer_rob=args.auto_rob)

    table = Table(title="Simulated Games")
    table.add_column("Seed", justify="right")
    table.add_column("Hands", justify="right")
    table.add_column("Actions", justify="right")
    table.add_column("North/South", justify="right")
    table.add_column("East/West", justify="right")
    table.add_column("Winner")
    table.add_column("Replay")

    failures = 0
    started = time.perf_counter()
    for seed in range(args.seed, args.seed + args.games):
        try:
            result = play_random_game(seed, config)
        except SimulationError as e:
            failures += 1
            console.print(f"[red]Game {seed} failed: {e}[/red]")
            continue

        state = result.state
        rebuilt = replay(state.events, state.config, state.seed)
        replay_ok = rebuilt.ok and rebuilt.state == state
        if not replay_ok:
            failures += 1
        scores = [str(score) for score in state.cumulative_scores.values()]
        table.add_row(
            str(seed),
            str(result.hands_played),
            str(result.actions_taken),
            *scores,
            state.winner.display_name if state.winner else "-",
            "[green]ok[/green]" if replay_ok else "[red]mismatch[/red]",
        )

    console.print(table)
    console.print(f"[dim]{args.games} games in {time.perf_counter() - started:.2f}s, {failures} failures[/dim]")
    return 1 if failures else 0


if __name__ == "__main__":
    raise SystemExit(main())
