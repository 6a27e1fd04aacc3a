"""Board dump rows and the literal line formats of the command surface."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from .models import Board, ProblemRecord, Team


@dataclass(frozen=True)
class BoardRow:
    team_name: str
    rank: int
    solved_count: int
    penalty: int
    cells: tuple[str, ...]


def format_cell(record: ProblemRecord, frozen: bool) -> str:
    """Render one problem cell.

    Hidden:   -x/y, or 0/y when there was no wrong attempt before the freeze.
    Solved:   + or +x.
    Unsolved: . or -x.
    """
    if frozen and record.is_frozen:
        x = record.wrong_before_freeze
        y = len(record.captured)
        if x > 0:
            return f"-{x}/{y}"
        return "." if y == 0 else f"0/{y}"
    x = record.wrong_before_accept
    if record.solved:
        return "+" if x == 0 else f"+{x}"
    return "." if x == 0 else f"-{x}"


def build_rows(board: Board, ordered: Sequence[Team]) -> tuple[BoardRow, ...]:
    return tuple(
        BoardRow(
            team_name=team.name,
            rank=rank,
            solved_count=team.solved_count,
            penalty=team.penalty,
            cells=tuple(format_cell(record, board.frozen) for record in team.problems),
        )
        for rank, team in enumerate(ordered, start=1)
    )


def row_line(row: BoardRow) -> str:
    return " ".join(
        [row.team_name, str(row.rank), str(row.solved_count), str(row.penalty), *row.cells]
    )


def board_lines(rows: Sequence[BoardRow]) -> list[str]:
    return [row_line(row) for row in rows]


def rank_change_line(rising_team: str, replaced_team: str, solved_count: int, penalty: int) -> str:
    return f"{rising_team} {replaced_team} {solved_count} {penalty}"
