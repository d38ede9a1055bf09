#!/usr/bin/env python3
"""
Command-line driver for Tycoon games.

Runs a game with human players answering on stdin and AI players deciding
on their own. By default every second player is an AI, as in the classic
console version; --all-ai runs an unattended simulation.
"""

import argparse
import logging
from dataclasses import replace
from typing import List, Optional, Sequence

from tycoon.config import GameConfig
from tycoon.game import GameState, create_game
from tycoon.io import ConsoleDisplay, ConsoleInputProvider, RandomDice
from tycoon.player import Player
from tycoon.settings import get_settings
from tycoon.snapshot import load_game, save_game

logger = logging.getLogger(__name__)

HELP_TEXT = """
--- HOW TO PLAY ---
1. Each turn, you roll a die and move forward on the board.
2. If you land on a property:
   - If no one owns it, you can buy it (or it goes to auction).
   - If another player owns it, you must pay them rent.
3. If your balance drops below zero, you are bankrupt and out of the game.
4. Human players may then take one action:
   (u) Upgrade a property you own (raises its rent).
   (m) Mortgage a property for quick cash.
   (s) Skip.
   (e) End the game immediately.
5. Random events may occur each turn if enabled.
6. The game ends when nobody is left, the turn limit is reached, or a
   player chooses to end it.
"""


def print_settings(config: GameConfig) -> None:
    """Print the active game rules."""
    print("\n--- Game Settings ---")
    print(f"Logging: {'Enabled' if config.enable_logging else 'Disabled'}")
    print(f"Random Events: {'Enabled' if config.enable_random_events else 'Disabled'}")
    print(f"Starting Money: ${config.starting_money}")
    print(f"Property Cost: ${config.property_cost}")
    print(f"Base Rent: ${config.base_rent}")
    print(f"Rent Multiplier: {config.rent_multiplier}")
    print(f"Turn Limit: {config.turn_limit}")


def print_game_state(game: GameState) -> None:
    """Print every player's account."""
    print("\n" + "=" * 60)
    print(f"TURN {game.turn_number}")
    print("=" * 60)

    for player_id in game.turn_order:
        player = game.players[player_id]
        status = "BANKRUPT" if player.is_bankrupt else f"at space {player.position}"
        upgrades = ", ".join(f"{name} ({player.upgrades[name]})" for name in sorted(player.properties))
        print(
            f"{player.name}{' (AI)' if player.is_ai else ''}: ${player.cash} | "
            f"{len(player.properties)} properties | {status}"
        )
        if upgrades:
            print(f"    {upgrades}")


def print_game_summary(game: GameState) -> None:
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER")
    print("=" * 60)

    if game.winner is not None:
        winner = game.players[game.winner]
        print(f"\nWinner: {winner.name}")
        print(f"Final Cash: ${winner.cash}")
        print(f"Properties Owned: {len(winner.properties)}")
        print(f"Improvements: {winner.total_upgrades()}")

    print("\nFinal Standings:")
    for rank, player in enumerate(game.rankings(), start=1):
        print(f"  {rank}. {player.name}: ${player.cash}")
    for player_id in game.turn_order:
        if game.players[player_id].is_bankrupt:
            print(f"  -  {game.players[player_id].name}: BANKRUPT")

    print("\n--- Game Statistics ---")
    for key, value in game.stats.as_dict().items():
        print(f"{key.replace('_', ' ').title()}: {value}")


def build_players(names: Sequence[str], all_ai: bool) -> List[Player]:
    """Odd-indexed players are AI unless every player is."""
    return [Player(i, name, is_ai=all_ai or i % 2 == 1) for i, name in enumerate(names)]


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main entry point for CLI."""
    settings = get_settings()

    parser = argparse.ArgumentParser(description="Play a Tycoon game")
    parser.add_argument(
        "names",
        nargs="*",
        default=["Alice", "Bob", "Charlie", "Diana"],
        help="Player names in turn order",
    )
    parser.add_argument("--all-ai", action="store_true", help="Make every player an AI")
    parser.add_argument("--seed", type=int, default=settings.seed, help="Random seed")
    parser.add_argument("--max-turns", type=int, default=settings.turn_limit, help="Turn limit")
    parser.add_argument("--no-random-events", action="store_true", help="Disable random events")
    parser.add_argument("--no-log", action="store_true", help="Disable the JSONL audit trail")
    parser.add_argument("--log-file", type=str, default=settings.log_file, help="Path to JSONL audit file")
    parser.add_argument("--save", type=str, nargs="?", const=settings.save_file, default=settings.save_file,
                        help="Save the final state to this file (default: %(default)s)")
    parser.add_argument("--no-save", action="store_true", help="Do not save the final state")
    parser.add_argument("--load", type=str, nargs="?", const=settings.save_file, default=None,
                        help="Resume from this save file")
    parser.add_argument("--quiet", action="store_true", help="Do not print events")
    parser.add_argument("--rules", action="store_true", help="Print the rules and exit")

    args = parser.parse_args(argv)

    logging.basicConfig(level=settings.log_level, format="%(levelname)s %(name)s: %(message)s")

    if args.rules:
        print(HELP_TEXT)
        return 0

    config = replace(
        settings.to_game_config(),
        seed=args.seed,
        turn_limit=args.max_turns,
        log_file=args.log_file,
        enable_random_events=settings.enable_random_events and not args.no_random_events,
        enable_logging=settings.enable_logging and not args.no_log,
    )
    input_provider = ConsoleInputProvider(RandomDice(config.seed))

    game: Optional[GameState] = None
    if args.load:
        game = load_game(args.load, config, input_provider=input_provider)
        if game is None:
            print(f"No save file found at {args.load}, starting a new game.")
    if game is None:
        game = create_game(config, build_players(args.names, args.all_ai), input_provider=input_provider)

    if not args.quiet:
        game.event_log.subscribe(ConsoleDisplay())
        print(HELP_TEXT)
        print_settings(config)
        print_game_state(game)

    game.play()
    game.ledger.check_consistency()

    print_game_state(game)
    print_game_summary(game)

    if not args.no_save:
        save_game(game, args.save)
        print(f"Game saved to {args.save}")

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
