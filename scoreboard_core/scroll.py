"""Freeze and scroll: hide post-freeze progress, then reveal it one problem at a time.

Scroll loop:
- Pick the lowest-ranked team that still has a frozen problem.
- Replay its smallest frozen problem exactly as the live ledger would have.
- Recompute the whole board and reorder.
- If the team moved up, report it together with the team that held its new position
  in the order from just before this step.
Every frozen (team, problem) pair is unfrozen exactly once, so the loop terminates.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from .models import Board, BoardError, Team, problem_letter
from .ranking import order_teams, rebuild_visible_metrics, take_snapshot
from .render import BoardRow, build_rows

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RankChange:
    team_name: str
    replaced_team_name: str
    solved_count: int
    penalty: int


@dataclass(frozen=True)
class ScrollResult:
    before: tuple[BoardRow, ...]
    changes: tuple[RankChange, ...]
    after: tuple[BoardRow, ...]
    steps: int


def freeze(board: Board) -> BoardError | None:
    if board.frozen:
        return BoardError(kind="already_frozen", message="scoreboard has been frozen")
    for team in board.teams.values():
        for record in team.problems:
            record.snapshot_for_freeze()
    board.phase = "frozen"
    logger.debug(f"Board frozen with {len(board.teams)} teams")
    return None


def _position(order: Sequence[Team], team: Team) -> int:
    for idx, candidate in enumerate(order):
        if candidate is team:
            return idx
    return len(order)


def _lowest_with_frozen(order: Sequence[Team]) -> Team | None:
    for team in reversed(order):
        if team.has_frozen_problem:
            return team
    return None


def scroll(board: Board) -> ScrollResult | BoardError:
    if not board.frozen:
        return BoardError(kind="not_frozen", message="scoreboard has not been frozen")

    order = take_snapshot(board)
    before = build_rows(board, order)

    changes: list[RankChange] = []
    steps = 0
    while True:
        target = _lowest_with_frozen(order)
        if target is None:
            break
        idx = target.first_frozen_problem()
        target.problems[idx].replay_captured()
        steps += 1

        rebuild_visible_metrics(board)
        new_order = order_teams(board)
        old_pos = _position(order, target)
        new_pos = _position(new_order, target)
        logger.debug(
            f"Unfroze {target.name} problem {problem_letter(idx)}: rank {old_pos + 1} -> {new_pos + 1}"
        )
        if new_pos < old_pos:
            changes.append(
                RankChange(
                    team_name=target.name,
                    replaced_team_name=order[new_pos].name,
                    solved_count=target.solved_count,
                    penalty=target.penalty,
                )
            )
        order = new_order

    after = build_rows(board, order)
    board.phase = "post_freeze"
    board.snapshot = [team.name for team in order]
    logger.debug(f"Scroll finished after {steps} steps, {len(changes)} rank changes")
    return ScrollResult(before=before, changes=tuple(changes), after=after, steps=steps)
