"""Scoreboard data model: submissions, per-problem records, teams and the board context.

The board owns every piece of mutable state. Operations in ledger/ranking/scroll/queries
take the board explicitly.
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .config import ScoringParams
from .types import Phase, is_accepted


@dataclass(frozen=True)
class Submission:
    problem: str
    verdict: str
    time: int


@dataclass
class ProblemRecord:
    """Per team, per problem state.

    Live counters (wrong_before_accept, first_accept_time) only move through apply().
    Freeze fields are snapshotted by freeze() and drained by scroll().
    """

    wrong_before_accept: int = 0
    first_accept_time: int | None = None

    solved_before_freeze: bool = False
    wrong_before_freeze: int = 0
    captured: list[Submission] = field(default_factory=list)

    @property
    def solved(self) -> bool:
        return self.first_accept_time is not None

    @property
    def is_frozen(self) -> bool:
        # Derived, never stored.
        return not self.solved_before_freeze and bool(self.captured)

    def apply(self, verdict: str, time: int) -> None:
        """Apply one verdict to the live counters.

        Anything after the first acceptance is ignored for scoring.
        """
        if self.solved:
            return
        if is_accepted(verdict):
            self.first_accept_time = time
        else:
            self.wrong_before_accept += 1

    def snapshot_for_freeze(self) -> None:
        self.solved_before_freeze = self.solved
        self.wrong_before_freeze = self.wrong_before_accept
        self.captured = []

    def replay_captured(self) -> None:
        """Drain captured submissions in arrival order, as if they had arrived live."""
        for sub in self.captured:
            self.apply(sub.verdict, sub.time)
        self.captured = []


@dataclass
class Team:
    name: str
    problems: list[ProblemRecord] = field(default_factory=list)
    history: list[Submission] = field(default_factory=list)

    # Visible metrics, rebuilt wholesale by rebuild_visible_metrics().
    solved_count: int = 0
    penalty: int = 0
    solve_times_desc: list[int] = field(default_factory=list)

    def reset_problems(self, problem_count: int) -> None:
        self.problems = [ProblemRecord() for _ in range(problem_count)]

    @property
    def has_frozen_problem(self) -> bool:
        return any(record.is_frozen for record in self.problems)

    def first_frozen_problem(self) -> int | None:
        for idx, record in enumerate(self.problems):
            if record.is_frozen:
                return idx
        return None


@dataclass
class Board:
    """Contest-wide context: phase, registry and the last ranking snapshot."""

    params: ScoringParams = field(default_factory=ScoringParams)
    phase: Phase = "not_started"
    # Tracked apart from phase: a board may be frozen before START.
    started: bool = False
    duration: int = 0
    problem_count: int = 0
    teams: dict[str, Team] = field(default_factory=dict)
    # Team names in rank order as of the last FLUSH/SCROLL; None until the first one.
    snapshot: list[str] | None = None

    @property
    def frozen(self) -> bool:
        return self.phase == "frozen"

    @property
    def has_flushed(self) -> bool:
        return self.snapshot is not None

    def get_team(self, name: str) -> Team | None:
        return self.teams.get(name)


def problem_index(problem: str) -> int:
    """Map a problem letter to its record index ('A' -> 0)."""
    return ord(problem) - ord("A")


def problem_letter(index: int) -> str:
    return chr(ord("A") + index)


@dataclass
class BoardError:
    """Represents a failed board operation; the board is left unchanged."""

    kind: str
    message: str
