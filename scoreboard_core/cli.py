"""
Line-oriented contest runner.

Reads one command per line, applies it to a single board and writes the
command's output lines. Logging goes to stderr so stdout stays exact.
"""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Iterable, TextIO

from .config import ScoringParams
from .contest import apply_command, default_board
from .models import Board
from .validation import parse_command_line

logger = logging.getLogger(__name__)


def _non_negative_int(value: str) -> int:
    try:
        number = int(value, 10)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value}")
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {number}")
    return number


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Run an ICPC-style scoreboard over a command stream")
    parser.add_argument(
        "--input",
        type=Path,
        default=None,
        help="Command file to read (default: stdin)",
    )
    parser.add_argument(
        "--penalty",
        type=_non_negative_int,
        default=ScoringParams().penalty_per_wrong,
        help="Penalty per rejected submission before acceptance (default: 20)",
    )
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Log level for stderr diagnostics (default: WARNING)",
    )
    return parser.parse_args(argv)


def run_stream(lines: Iterable[str], out: TextIO, board: Board | None = None) -> Board:
    """Apply each command line to the board, stopping after END."""
    board = board or default_board()
    for lineno, line in enumerate(lines, start=1):
        try:
            cmd = parse_command_line(line)
            if cmd is None:
                continue
            outcome = apply_command(board, cmd)
        except ValueError as e:
            logger.warning(f"Skipping line {lineno}: {e}")
            continue
        for text in outcome.lines:
            out.write(text + "\n")
        if outcome.terminal:
            break
    return board


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr,
    )
    board = default_board(ScoringParams(penalty_per_wrong=args.penalty))
    if args.input is None:
        run_stream(sys.stdin, sys.stdout, board)
    else:
        with args.input.open("r", encoding="utf-8") as f:
            run_stream(f, sys.stdout, board)
    return 0
