"""
Terminal front end for the era word trail puzzle.

Usage:
    python -m src.main
    python -m src.main config.yaml --category "Ancient Egypt" --verbose
    python -m src.main --words my_words.json < moves.txt
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, TextIO

import yaml

from .puzzle.models import Correct, Incorrect, Position, fill_blank
from .session import (
    CancelSelection,
    EventOutcome,
    ExtendSelection,
    InputEvent,
    PuzzleSession,
    RequestHint,
    SelectCategory,
    SessionConfig,
    StartSelection,
    SubmitSelection,
)

HELP = """Commands:
  categories            list available eras
  play <era>            start an era
  start <row> <col>     begin a trace
  extend <row> <col>    extend the trace
  trace r,c r,c ...     trace a whole path and submit it
  submit                submit the trace
  cancel                drop the trace
  hint                  buy a hint
  show                  print the grid and sentence
  quit                  exit"""


def load_config(config_path: str) -> SessionConfig:
    """Load session configuration from a YAML file."""
    path = Path(config_path)

    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(path) as f:
        data = yaml.safe_load(f) or {}

    return SessionConfig(**data)


def _position(tokens: List[str]) -> Position:
    if len(tokens) != 2:
        raise ValueError("expected <row> <col>")
    return Position(int(tokens[0]), int(tokens[1]))


def parse_command(line: str) -> List[InputEvent]:
    """
    Translate one command line into input events.

    Raises:
        ValueError: If the command is malformed
    """
    parts = line.split()
    command, args = parts[0].lower(), parts[1:]

    if command == "play":
        if not args:
            raise ValueError("expected an era name")
        return [SelectCategory(category=" ".join(args))]
    if command == "start":
        return [StartSelection(position=_position(args))]
    if command == "extend":
        return [ExtendSelection(position=_position(args))]
    if command == "submit":
        return [SubmitSelection()]
    if command == "cancel":
        return [CancelSelection()]
    if command == "hint":
        return [RequestHint()]
    if command == "trace":
        if not args:
            raise ValueError("expected at least one r,c position")
        positions = [_position(token.split(",")) for token in args]
        events: List[InputEvent] = [StartSelection(position=positions[0])]
        events.extend(ExtendSelection(position=pos) for pos in positions[1:])
        events.append(SubmitSelection())
        return events

    raise ValueError(f"unknown command '{command}'")


def print_state(session: PuzzleSession, out: Optional[TextIO] = None) -> None:
    snapshot = session.snapshot()
    if snapshot.category is None:
        print("No era selected. Use: play <era>", file=out)
        return

    print(f"\n=== {snapshot.category} ===", file=out)
    print(f"Word {min(snapshot.target_index + 1, snapshot.total_words)}/{snapshot.total_words}"
          f"  Score: {snapshot.score}", file=out)
    if snapshot.grid:
        print(snapshot.grid, file=out)
    if snapshot.category_complete:
        print("Era complete!", file=out)
    elif snapshot.sentence:
        print(snapshot.sentence, file=out)


def print_outcome(outcome: EventOutcome, out: Optional[TextIO] = None) -> None:
    if outcome.error:
        print(f"✗ {outcome.error}", file=out)
        return

    verdict = outcome.verdict
    if isinstance(verdict, Correct):
        print(f"✓ {verdict.word}! +{verdict.points} points", file=out)
        print(fill_blank(verdict.sentence, verdict.word), file=out)
    elif isinstance(verdict, Incorrect):
        print(f"✗ {verdict.word or 'Nothing'} is not it. Try again!", file=out)
    elif verdict is not None:
        print("Too short! Words need at least 3 letters.", file=out)

    hint = outcome.hint
    if hint is not None:
        if hint.positions:
            cells = " ".join(f"{p.row},{p.col}" for p in hint.positions)
            print(f"Hint (-{hint.cost}): the word starts at one of {cells}", file=out)
        else:
            print(f"Hint (-{hint.cost}): {hint.pattern}", file=out)


def run(session: PuzzleSession, lines: TextIO, out: Optional[TextIO] = None) -> int:
    """Read commands until EOF or `quit`; returns the final score."""
    print_state(session, out)

    for raw in lines:
        line = raw.strip()
        if not line or line.startswith("#"):
            continue

        command = line.split()[0].lower()
        if command in ("quit", "exit"):
            break
        if command == "help":
            print(HELP, file=out)
            continue
        if command == "categories":
            for era in session.word_bank.categories:
                if session.is_unlocked(era):
                    print(f"  {era}", file=out)
                else:
                    print(f"  {era} (locked, needs {session.price_of(era)} points)", file=out)
            continue
        if command == "show":
            print_state(session, out)
            continue

        try:
            events = parse_command(line)
        except ValueError as e:
            print(f"Bad command: {e}", file=out)
            continue

        for event in events:
            session.post(event)
        for outcome in session.drain():
            print_outcome(outcome, out)

        if any(isinstance(e, (SubmitSelection, SelectCategory)) for e in events):
            print_state(session, out)

    return session.score


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        description="Play the era word trail puzzle in the terminal",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example config.yaml:
  words_path: data/words.json
  grid_size: 6
  adjacency: 8-way
  seed: 42
  category: Ancient Egypt
  era_prices:
    Renaissance: 1000
    Industrial Revolution: 2000
    Ancient Greece: 3000
        """
    )
    parser.add_argument(
        "config",
        nargs="?",
        help="Path to YAML configuration file"
    )
    parser.add_argument(
        "--words",
        help="Path to a JSON or YAML word list (overrides the config)"
    )
    parser.add_argument(
        "--category", "-c",
        help="Era to start in (overrides the config)"
    )
    parser.add_argument(
        "--seed",
        type=int,
        help="Random seed for grid generation"
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Log debug output to stderr"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(name)s %(levelname)s: %(message)s",
    )

    try:
        config = load_config(args.config) if args.config else SessionConfig()
    except Exception as e:
        print(f"Error loading config: {e}", file=sys.stderr)
        return 1

    overrides = {}
    if args.words:
        overrides["words_path"] = args.words
    if args.category:
        overrides["category"] = args.category
    if args.seed is not None:
        overrides["seed"] = args.seed
    if overrides:
        config = config.model_copy(update=overrides)

    try:
        session = PuzzleSession.create(config=config)
    except Exception as e:
        print(f"Error starting session: {e}", file=sys.stderr)
        return 1

    if session.word_bank.is_empty():
        print("Warning: no eras loaded, check the word list", file=sys.stderr)

    if sys.stdin.isatty():
        print(HELP)

    try:
        score = run(session, sys.stdin)
    except KeyboardInterrupt:
        print("\nInterrupted")
        score = session.score

    print()
    print("=== Session Summary ===")
    print(f"Final score: {score}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
