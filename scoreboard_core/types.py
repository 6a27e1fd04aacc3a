"""Type definitions for scoreboard state and commands."""
from __future__ import annotations

from typing import Literal, Optional, TypedDict


Verdict = Literal["Accepted", "Wrong_Answer", "Runtime_Error", "Time_Limit_Exceed"]

# 'not_started' until START; 'post_freeze' after a completed SCROLL (behaves as 'live').
Phase = Literal["not_started", "live", "frozen", "post_freeze"]

VERDICTS: tuple[str, ...] = (
    "Accepted",
    "Wrong_Answer",
    "Runtime_Error",
    "Time_Limit_Exceed",
)

# Query filter wildcard for both problem and status.
ALL = "ALL"


def is_accepted(verdict: str) -> bool:
    """Only Accepted vs. any rejection matters for scoring."""
    return verdict == "Accepted"


class CommandPayload(TypedDict, total=False):
    """
    TypedDict for command payloads sent to apply_command().

    Fields vary by command type.
    """
    # Common
    type: str

    # ADDTEAM / SUBMIT / QUERY_RANKING / QUERY_SUBMISSION
    team: Optional[str]

    # START
    duration: Optional[int]
    problemCount: Optional[int]

    # SUBMIT
    problem: Optional[str]
    status: Optional[str]
    time: Optional[int]

    # QUERY_SUBMISSION filters ("ALL" matches anything)
    problemFilter: Optional[str]
    statusFilter: Optional[str]

