"""Submission ledger: route each verdict into history and the right record field."""
from __future__ import annotations

import logging

from .models import Board, Submission, problem_index
from .types import Verdict

logger = logging.getLogger(__name__)


def record_submission(board: Board, team_name: str, problem: str, verdict: Verdict, time: int) -> None:
    """Record a submission for an existing team.

    History always grows. Outside the frozen phase, and on problems already solved
    before the freeze, the live counters move immediately. Otherwise the submission
    is captured and stays invisible until scroll() replays it. A problem outside the
    contest (including any SUBMIT before START) only reaches history.
    """
    team = board.teams[team_name]
    submission = Submission(problem=problem, verdict=verdict, time=time)
    team.history.append(submission)

    idx = problem_index(problem)
    if not 0 <= idx < board.problem_count:
        logger.warning(f"Submission for {team_name} on problem {problem} outside the contest")
        return

    record = team.problems[idx]
    if board.frozen and not record.solved_before_freeze:
        record.captured.append(submission)
        return

    if board.frozen:
        assert record.solved, "problem flagged solved before freeze has no acceptance"
    record.apply(verdict, time)
