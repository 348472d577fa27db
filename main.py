#!/usr/bin/env python3
"""
Main entry point for sudoku-shuffle.

Generates shuffled Sudoku boards from the reference corpus and runs a
line-oriented game session that is saved between runs.
"""

import argparse
import json
import logging
import sys
from pathlib import Path

import yaml

from sudoku_shuffle.config import Config, load_config, merge_configs
from sudoku_shuffle.data import BoardGenerator, format_grid
from sudoku_shuffle.errors import SudokuError
from sudoku_shuffle.logging_utils import get_logger
from sudoku_shuffle.session import GameSession, handle_key
from sudoku_shuffle.storage import SessionStore

# Terminal-friendly names for the session keys
KEY_ALIASES = {
    "up": "ArrowUp",
    "down": "ArrowDown",
    "left": "ArrowLeft",
    "right": "ArrowRight",
    "del": "Backspace",
}

PLAY_HELP = """Commands:
  up | down | left | right   move the selection
  <symbol>                   enter a value (toggle a candidate in candidate mode)
  del                        clear the selected cell
  :c  candidate mode    :e  error mode    :h  hint
  :s  show board        :q  save and quit"""


def setup_logging(config: Config) -> logging.Logger:
    """Configure the package logger from the `logging` config section."""
    log_file = Path(config.logging.log_file) if config.logging.log_file else None
    return get_logger("sudoku_shuffle", config.logging.level, log_file)


def run_generate(config: Config, as_json: bool = False, output: Path | None = None) -> None:
    """
    Generate one board and print or save it.

    Args:
        config: Configuration; its `generation` section selects base, seed,
            shuffle count and corpus.
        as_json: Emit the serialized board instead of text grids.
        output: Optional file to write to instead of stdout.
    """
    logger = setup_logging(config)
    gen = config.generation
    generator = BoardGenerator(
        corpus_path=gen.corpus_path,
        num_shuffles=gen.num_shuffles,
        seed=gen.seed,
    )
    board = generator.generate(gen.base)

    if as_json:
        text = json.dumps(board.to_dict(), indent=2)
    else:
        text = (
            f"Puzzle (base {board.n}, {sum(board.mask)} givens):\n"
            f"{format_grid(board.default_vals, board.n)}\n\n"
            f"Solution:\n{format_grid(board.board, board.n)}"
        )

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n")
        logger.info(f"Board written to {output}")
    else:
        print(text)


def print_session(session: GameSession) -> None:
    board = session.board
    values = [session.value_at(i) for i in range(len(board.board))]
    print(format_grid(values, board.n))
    print(
        f"Selected: row {session.row + 1}, col {session.col + 1} | "
        f"candidates: {session.candidates[session.selected].replace(' ', '') or '-'} | "
        f"time: {session.elapsed:.0f}s"
    )
    modes = [name for name, on in (("candidate", session.candidate_mode), ("error", session.error_mode)) if on]
    if modes:
        print(f"Modes: {', '.join(modes)}")
    wrong = session.wrong_cells()
    if wrong:
        cells = ", ".join(f"({i // board.side + 1},{i % board.side + 1})" for i in wrong)
        print(f"Wrong: {cells}")


def run_play(config: Config, new: bool = False) -> None:
    """
    Play a board from stdin, one command per line.

    The session is resumed from the configured storage directory unless `new`
    is set, and saved after every change when autosave is enabled.
    """
    logger = setup_logging(config)
    store = SessionStore(config.session.storage_dir)

    session = None if new else store.load()
    if session is None:
        gen = config.generation
        generator = BoardGenerator(
            corpus_path=gen.corpus_path,
            num_shuffles=gen.num_shuffles,
            seed=gen.seed,
        )
        session = GameSession(board=generator.generate(gen.base))
        logger.info(f"Started a new base-{gen.base} game")
    else:
        logger.info(f"Resumed game from {store.directory}")

    print(PLAY_HELP)
    print_session(session)

    for line in sys.stdin:
        command = line.strip()
        if not command:
            continue
        if command == ":q":
            break
        if command == ":s":
            print_session(session)
            continue

        if command == ":c":
            changed = session.toggle_candidate_mode()
        elif command == ":e":
            changed = session.toggle_error_mode()
        elif command == ":h":
            changed = session.hint()
        else:
            changed = handle_key(session, KEY_ALIASES.get(command.lower(), command))

        if changed:
            if config.session.autosave:
                store.save(session)
            print_session(session)
        if session.is_solved:
            print(f"Solved in {session.elapsed:.0f}s!")
            break

    session.pause()
    store.save(session)


def main() -> None:
    """Main entry point with CLI argument parsing."""
    parser = argparse.ArgumentParser(
        description="sudoku-shuffle: shuffled Sudoku boards from reference puzzles"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Path to a YAML config file (default: built-in defaults)",
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=None,
        help="Logging level, e.g. DEBUG or INFO (default: from config)",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # Generation parameters shared by both commands
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--base",
        type=int,
        default=None,
        help="Board base n; the board is n^2 x n^2 (default: from config, 3)",
    )
    common.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for reproducible boards",
    )
    common.add_argument(
        "--shuffles",
        type=int,
        default=None,
        help="Number of random permutations to apply (default: 500)",
    )
    common.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="Reference corpus JSON file (default: bundled corpus)",
    )

    generate = subparsers.add_parser("generate", parents=[common], help="Generate a board")
    generate.add_argument(
        "--json",
        action="store_true",
        help="Print the board as JSON",
    )
    generate.add_argument(
        "--output",
        type=str,
        default=None,
        help="Write the board to this file instead of stdout",
    )

    play = subparsers.add_parser("play", parents=[common], help="Play a board from stdin")
    play.add_argument(
        "--new",
        action="store_true",
        help="Discard any saved game and start a new one",
    )
    play.add_argument(
        "--storage-dir",
        type=str,
        default=None,
        help="Directory for the saved game (default: from config, .sudoku)",
    )

    args = parser.parse_args()

    generation = {
        key: value
        for key, value in (
            ("base", args.base),
            ("seed", args.seed),
            ("num_shuffles", args.shuffles),
            ("corpus_path", args.corpus),
        )
        if value is not None
    }
    overrides: dict[str, dict] = {"generation": generation}
    if args.log_level is not None:
        overrides["logging"] = {"level": args.log_level}
    if getattr(args, "storage_dir", None) is not None:
        overrides["session"] = {"storage_dir": args.storage_dir}

    try:
        config = merge_configs(load_config(args.config), overrides)
        if args.command == "generate":
            run_generate(
                config,
                as_json=args.json,
                output=Path(args.output) if args.output else None,
            )
        else:
            run_play(config, new=args.new)
    except (SudokuError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
