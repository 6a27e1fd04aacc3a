"""Read-only queries against the ledger and the ranking snapshot."""
from __future__ import annotations

from .models import Board, BoardError, Submission
from .ranking import ranking_order
from .types import ALL


def query_ranking(board: Board, team_name: str) -> int | BoardError:
    """1-based rank of the team in the last snapshot (name order before any flush)."""
    if board.get_team(team_name) is None:
        return BoardError(kind="team_not_found", message="cannot find the team")
    order = ranking_order(board)
    if team_name not in order:
        # Registered after the last flush; ranks below every snapshotted team.
        return len(order) + 1
    return order.index(team_name) + 1


def query_submission(
    board: Board, team_name: str, problem: str = ALL, status: str = ALL
) -> Submission | None | BoardError:
    """Most recent submission of the team matching both filters, or None."""
    team = board.get_team(team_name)
    if team is None:
        return BoardError(kind="team_not_found", message="cannot find the team")
    for submission in reversed(team.history):
        if problem != ALL and submission.problem != problem:
            continue
        if status != ALL and submission.verdict != status:
            continue
        return submission
    return None
