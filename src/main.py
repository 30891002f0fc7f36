"""
Main entry point for playing word search in a terminal.

Usage:
    python -m src.main
    python -m src.main config.yaml --category fruits --seed 7
    python -m src.main config.yaml --play --verbose
"""

import argparse
import logging
import sys
import time
from pathlib import Path
from typing import Optional

import yaml

from .environment import GameConfig, GameCoordinator, WordSearchSession, WORDS_BY_CATEGORY
from .wordsearch import Coordinate, render_grid


def load_config(config_path: Optional[str]) -> GameConfig:
    """Load game configuration from a YAML file (defaults when no path is given)."""
    if not config_path:
        return GameConfig()

    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return GameConfig(**data)


def print_board(session: WordSearchSession) -> None:
    size = len(session.grid)
    print("    " + " ".join(f"{c % 10}" for c in range(size)))
    for r, line in enumerate(render_grid(session.grid, highlight_found=True).split("\n")):
        print(f"{r:>2}  {line}")
    print()
    remaining = [w for w in session.words if w not in session.found_words]
    print(f"Words ({len(session.found_words)}/{len(session.words)}): {' '.join(remaining)}")
    print(f"Score: {session.score}   Time: {session.time_remaining // 60}:{session.time_remaining % 60:02d}"
          f"   Hints left: {session.hints_remaining}")


def play(session: WordSearchSession, stream=None) -> None:
    """
    Interactive loop: each line is "r1 c1 r2 c2", "hint" or "quit".

    Wall-clock time between lines is charged to the session countdown.
    """
    stream = stream or sys.stdin
    last = time.monotonic()
    print_board(session)

    while session.is_running:
        print("> ", end="", flush=True)
        line = stream.readline()
        if not line:
            break

        now = time.monotonic()
        session.tick(int(now - last))
        last = now
        if not session.is_running:
            break

        command = line.strip().lower()
        if command in ("q", "quit", "exit"):
            break

        if command == "hint":
            hint = session.use_hint()
            if hint.cells:
                print("Hint: " + ", ".join(f"({c.row}, {c.col})" for c in hint.cells))
            else:
                print("No hints available")
            continue

        parts = command.split()
        if len(parts) != 4 or not all(p.lstrip("-").isdigit() for p in parts):
            print("Enter a selection as: row col row col")
            continue

        r1, c1, r2, c2 = (int(p) for p in parts)
        result = session.select(Coordinate(r1, c1), Coordinate(r2, c2))
        if result.matched:
            print(f"Found {result.matched}! +{result.points}")
        elif result.already_found:
            print(f"{result.forward} already found")
        else:
            print(f"'{result.forward}' is not one of the words")
        print_board(session)


def main():
    parser = argparse.ArgumentParser(
        description="Play a word search puzzle",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  store_path: records.json
  session:
    category: animals
    grid_size: 12
    time_limit: 300
    max_hints: 2
    seed: 42
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--category", "-c",
        choices=sorted(WORDS_BY_CATEGORY),
        help="Word category (overrides the config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for a reproducible grid"
    )
    parser.add_argument(
        "--play",
        action="store_true",
        help="Play interactively on stdin"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log game events to stderr"
    )

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config)
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    coordinator = GameCoordinator(config)
    session = coordinator.new_session(category=args.category, seed=args.seed)

    try:
        session.start()
    except ValueError as e:
        print(f"Error starting game: {e}", file=sys.stderr)
        return 1

    if args.play:
        try:
            play(session)
        except KeyboardInterrupt:
            print("\nGame interrupted by user")
    else:
        print_board(session)
        return 0

    result = session.get_result()

    print()
    print("=== Game Summary ===")
    if result.outcome == "all_found":
        print("All words found!")
    elif result.outcome == "time_up":
        print("Time's up!")
    print(f"Found {len(result.found_words)} of {len(result.words)} words")
    print(f"Score: {result.score}")
    print(f"Total points: {coordinator.total_points}")
    if result.hints_used:
        print(f"Hints used: {result.hints_used}")
    if result.new_record:
        print(f"New best time: {result.elapsed_ms / 1000:.0f}s")

    return 0


if __name__ == "__main__":
    sys.exit(main())
