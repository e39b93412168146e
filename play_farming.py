#!/usr/bin/env python3
"""
Minimal CLI for simulating farming games.

Runs games between computer farmers from the native roster. Each player
rolls, resolves the tile, and may exercise an Option to Buy while still
inside the early-year window.
"""

import argparse
import json
import logging
from typing import List, Optional

from farming import GameConfig, GameState, create_game, native_players
from farming.events import map_events, render_events
from farming.settings import get_simulation_settings

logger = logging.getLogger(__name__)


def print_game_state(game: GameState) -> None:
    """Print the scoreboard."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}  ({game.phase.value})")
    print("=" * 60)

    for row in game.scoreboard():
        tile = game.board.get_tile(row.position)
        print(
            f"{row.name:<18} cash ${row.cash:>7,} | debt ${row.debt:>6,} | "
            f"net worth ${row.net_worth:>8,} | year {row.year} | at {tile.name}"
        )


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER" if game.game_over else "TURN LIMIT REACHED")
    print("=" * 60)

    winner = game.winner()
    if winner is not None:
        print(f"\nWinner: {winner.name}")
        print(f"Net Worth: ${winner.net_worth:,}")

    print("\nFinal Standings:")
    for row in game.scoreboard():
        print(f"  {row.name}: ${row.net_worth:,}")
    leased = [status for status in game.all_ridge_status() if status.leased_by is not None]
    for status in leased:
        print(f"  {status.name} Ridge leased by {status.lessee_name}")

    print(f"\nTotal Turns: {game.turn_number}")


def simulate_game(
    num_players: int = 4,
    seed: Optional[int] = None,
    verbose: bool = True,
    max_turns: int = 2000,
    log_file: Optional[str] = None,
) -> GameState:
    """
    Simulate a complete game.

    Args:
        num_players: Number of native farmers (1-6)
        seed: Random seed for reproducibility
        verbose: Whether to print turn-by-turn output
        max_turns: Turn cap, counted across all players
        log_file: Path to a JSONL event log (None = no file)
    """
    players = native_players(num_players)
    game = create_game(GameConfig(seed=seed), players)
    names = {p.player_id: p.name for p in players}

    if verbose:
        print(f"Starting game with {num_players} farmers")
        print(f"Seed: {seed}")

    flushed = 0
    while not game.game_over and game.turn_number < max_turns:
        player = game.current_player()
        game.resolve_turn(player.player_id, game.roll_die())
        if not game.game_over:
            game.offer_options(player.player_id)

        if verbose:
            for line in render_events(game.event_log.events_since(flushed), names):
                print(f"  {line}")
        if log_file is not None:
            _append_jsonl(log_file, map_events(game.event_log.events_since(flushed)))
        flushed = len(game.event_log)

        if verbose and game.turn_number % 25 == 0:
            print_game_state(game)
        game.end_turn()

    if not game.game_over:
        logger.warning("Game stopped at the %s turn cap without a winner", max_turns)
    if verbose:
        print_game_summary(game)
    return game


def _append_jsonl(path: str, records: List[dict]) -> None:
    with open(path, "a") as f:
        for record in records:
            f.write(json.dumps(record) + "\n")


def main():
    """Main entry point for CLI."""
    settings = get_simulation_settings()

    parser = argparse.ArgumentParser(description="Simulate a farming game")
    parser.add_argument(
        "--players",
        type=int,
        default=settings.num_players,
        choices=range(1, 7),
        help="Number of farmers (1-6)",
    )
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--games", type=int, default=settings.num_games, help="Games to play")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument(
        "--max-turns",
        type=int,
        default=settings.max_turns,
        help="Maximum number of turns per game",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default=settings.log_file,
        help="Path to JSONL event log",
    )

    args = parser.parse_args()
    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    wins = {}
    for index in range(args.games):
        seed = None if args.seed is None else args.seed + index
        game = simulate_game(
            num_players=args.players,
            seed=seed,
            verbose=not args.quiet,
            max_turns=args.max_turns,
            log_file=args.log_file,
        )
        winner = game.winner()
        key = winner.name if winner else "no winner"
        wins[key] = wins.get(key, 0) + 1

    if args.games > 1:
        print("\nResults:")
        for name, count in sorted(wins.items(), key=lambda item: -item[1]):
            print(f"  {name}: {count}")


if __name__ == "__main__":
    main()
