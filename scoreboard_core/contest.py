"""Core scoreboard command handling (pure, no I/O).

This module maps contest commands onto board operations and renders the literal
output lines of the command surface. Printing is left to the caller.

Architecture:
- The board is an explicit context object (models.Board) built by default_board()
- Commands are plain dicts with a 'type' field (ADDTEAM, START, SUBMIT, FLUSH, ...)
- apply_command() takes (board, cmd), mutates the board and returns CommandOutcome
- Failed commands leave the board untouched and carry a BoardError

Phases:
- not_started: teams may be registered; START locks the registry
- live: submissions update the visible board on the next FLUSH
- frozen: submissions on problems unsolved at FREEZE are captured, not scored
- post_freeze: after SCROLL; behaves as live, a new FREEZE is allowed

Command outputs:
- ADDTEAM: [Info]Add successfully. | duplicated name / started errors
- START: [Info]Competition starts. | started error
- SUBMIT: no output
- FLUSH: [Info]Flush scoreboard.
- FREEZE: [Info]Freeze scoreboard. | already frozen error
- SCROLL: [Info]Scroll scoreboard. + board before, rank changes, board after
- QUERY_RANKING: [Info]Complete query ranking. (+ frozen warning) + rank line
- QUERY_SUBMISSION: [Info]Complete query submission. + submission or not-found line
- END: [Info]Competition ends. (terminal=True)
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List

from .config import ScoringParams
from .ledger import record_submission
from .models import Board, BoardError, Team
from .queries import query_ranking, query_submission
from .ranking import take_snapshot
from .render import board_lines, rank_change_line
from .scroll import freeze, scroll
from .types import ALL, CommandPayload

logger = logging.getLogger(__name__)

FROZEN_RANKING_WARNING = (
    "[Warning]Scoreboard is frozen. The ranking may be inaccurate until it were scrolled."
)
NO_SUBMISSION = "Cannot find any submission."

# Failure line prefix per command type.
_FAILURE_PREFIX = {
    "ADDTEAM": "Add failed",
    "START": "Start failed",
    "FREEZE": "Freeze failed",
    "SCROLL": "Scroll failed",
    "QUERY_RANKING": "Query ranking failed",
    "QUERY_SUBMISSION": "Query submission failed",
}


@dataclass
class CommandOutcome:
    """Result of applying a core command."""

    lines: List[str] = field(default_factory=list)
    error: BoardError | None = None
    terminal: bool = False


def default_board(params: ScoringParams | None = None) -> Board:
    """Create a fresh board in the not_started phase."""
    return Board(params=params or ScoringParams())


def _failure(ctype: str, error: BoardError) -> CommandOutcome:
    logger.warning(f"{ctype} rejected: {error.kind}")
    return CommandOutcome(
        lines=[f"[Error]{_FAILURE_PREFIX[ctype]}: {error.message}."], error=error
    )


def add_team(board: Board, name: str) -> BoardError | None:
    if board.started:
        return BoardError(kind="started_already", message="competition has started")
    if name in board.teams:
        return BoardError(kind="duplicate_team", message="duplicated team name")
    board.teams[name] = Team(name=name)
    return None


def start(board: Board, duration: int, problem_count: int) -> BoardError | None:
    if board.started:
        return BoardError(kind="started_already", message="competition has started")
    if problem_count > board.params.max_problems:
        raise ValueError(f"START problem count exceeds {board.params.max_problems}")
    board.started = True
    board.duration = duration
    board.problem_count = problem_count
    for team in board.teams.values():
        team.reset_problems(problem_count)
    if board.phase == "not_started":
        board.phase = "live"
    logger.debug(f"Contest started: {len(board.teams)} teams, {problem_count} problems")
    return None


def apply_command(board: Board, cmd: CommandPayload) -> CommandOutcome:
    """Apply a contest command to the board.

    Args:
        board: Board context (mutated in place on success)
        cmd: Command dict with 'type' field and command-specific params

    Returns:
        CommandOutcome with output lines, optional BoardError and terminal flag

    Raises:
        ValueError: For payloads the board cannot place (unknown team on SUBMIT,
            unknown command type)
    """
    ctype = cmd.get("type")

    if ctype == "ADDTEAM":
        error = add_team(board, cmd["team"])
        if error:
            return _failure(ctype, error)
        return CommandOutcome(lines=["[Info]Add successfully."])

    if ctype == "START":
        error = start(board, int(cmd["duration"]), int(cmd["problemCount"]))
        if error:
            return _failure(ctype, error)
        return CommandOutcome(lines=["[Info]Competition starts."])

    if ctype == "SUBMIT":
        team_name = cmd["team"]
        if team_name not in board.teams:
            raise ValueError(f"SUBMIT for unknown team {team_name}")
        record_submission(board, team_name, cmd["problem"], cmd["status"], int(cmd["time"]))
        return CommandOutcome()

    if ctype == "FLUSH":
        take_snapshot(board)
        return CommandOutcome(lines=["[Info]Flush scoreboard."])

    if ctype == "FREEZE":
        error = freeze(board)
        if error:
            return _failure(ctype, error)
        return CommandOutcome(lines=["[Info]Freeze scoreboard."])

    if ctype == "SCROLL":
        result = scroll(board)
        if isinstance(result, BoardError):
            return _failure(ctype, result)
        lines = ["[Info]Scroll scoreboard."]
        lines.extend(board_lines(result.before))
        for change in result.changes:
            lines.append(
                rank_change_line(
                    change.team_name,
                    change.replaced_team_name,
                    change.solved_count,
                    change.penalty,
                )
            )
        lines.extend(board_lines(result.after))
        return CommandOutcome(lines=lines)

    if ctype == "QUERY_RANKING":
        team_name = cmd["team"]
        rank = query_ranking(board, team_name)
        if isinstance(rank, BoardError):
            return _failure(ctype, rank)
        lines = ["[Info]Complete query ranking."]
        if board.frozen:
            lines.append(FROZEN_RANKING_WARNING)
        lines.append(f"{team_name} NOW AT RANKING {rank}")
        return CommandOutcome(lines=lines)

    if ctype == "QUERY_SUBMISSION":
        team_name = cmd["team"]
        found = query_submission(
            board,
            team_name,
            cmd.get("problemFilter") or ALL,
            cmd.get("statusFilter") or ALL,
        )
        if isinstance(found, BoardError):
            return _failure(ctype, found)
        lines = ["[Info]Complete query submission."]
        if found is None:
            lines.append(NO_SUBMISSION)
        else:
            lines.append(f"{team_name} {found.problem} {found.verdict} {found.time}")
        return CommandOutcome(lines=lines)

    if ctype == "END":
        return CommandOutcome(lines=["[Info]Competition ends."], terminal=True)

    raise ValueError(f"Unknown command type: {ctype}")
