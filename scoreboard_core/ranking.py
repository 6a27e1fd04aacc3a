"""Visible metrics and the team ranking order.

- Visible metrics are recomputed from scratch on every call; nothing is patched incrementally.
- Comparator: more solved > lower penalty > earlier solve times (largest first) > name.
- Before the first flush the board is ordered by team name only.
"""
from __future__ import annotations

from .models import Board, Team

# Pads the shorter solve-time list; below any valid timestamp (>= 1).
_MISSING_TIME = -1


def rebuild_visible_metrics(board: Board) -> None:
    per_wrong = board.params.penalty_per_wrong
    for team in board.teams.values():
        solved_count = 0
        penalty = 0
        solve_times: list[int] = []
        for record in team.problems:
            if board.frozen and record.is_frozen:
                continue
            if record.first_accept_time is None:
                continue
            solved_count += 1
            penalty += per_wrong * record.wrong_before_accept + record.first_accept_time
            solve_times.append(record.first_accept_time)
        team.solved_count = solved_count
        team.penalty = penalty
        team.solve_times_desc = sorted(solve_times, reverse=True)


def _compare_solve_times(a: list[int], b: list[int]) -> int:
    for i in range(max(len(a), len(b))):
        ta = a[i] if i < len(a) else _MISSING_TIME
        tb = b[i] if i < len(b) else _MISSING_TIME
        if ta != tb:
            return -1 if ta < tb else 1
    return 0


def compare_teams(a: Team, b: Team) -> int:
    """Return a negative number if `a` outranks `b`, positive if `b` outranks `a`.

    Only returns 0 for the same team name, so the order is strict and total.
    """
    if a.solved_count != b.solved_count:
        return -1 if a.solved_count > b.solved_count else 1
    if a.penalty != b.penalty:
        return -1 if a.penalty < b.penalty else 1
    by_times = _compare_solve_times(a.solve_times_desc, b.solve_times_desc)
    if by_times:
        return by_times
    if a.name != b.name:
        return -1 if a.name < b.name else 1
    return 0


def _team_sort_key(team: Team) -> tuple[int, int, tuple[int, ...], str]:
    # Equal solved counts mean equal-length solve-time tuples, so this matches compare_teams().
    return (-team.solved_count, team.penalty, tuple(team.solve_times_desc), team.name)


def order_teams(board: Board) -> list[Team]:
    """Order teams by their current visible metrics."""
    return sorted(board.teams.values(), key=_team_sort_key)


def order_by_name(board: Board) -> list[Team]:
    return sorted(board.teams.values(), key=lambda team: team.name)


def take_snapshot(board: Board) -> list[Team]:
    """Recompute metrics and store the resulting order as the ranking snapshot."""
    rebuild_visible_metrics(board)
    ordered = order_teams(board)
    board.snapshot = [team.name for team in ordered]
    return ordered


def ranking_order(board: Board) -> list[str]:
    """Team names in the order used to answer rank queries."""
    if not board.has_flushed:
        return [team.name for team in order_by_name(board)]
    return list(board.snapshot)
