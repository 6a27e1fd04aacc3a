from .config import ScoringParams
from .contest import (
    CommandOutcome,
    add_team,
    apply_command,
    default_board,
    start,
)
from .ledger import record_submission
from .models import Board, BoardError, ProblemRecord, Submission, Team
from .queries import query_ranking, query_submission
from .ranking import (
    compare_teams,
    order_teams,
    ranking_order,
    rebuild_visible_metrics,
    take_snapshot,
)
from .render import BoardRow, board_lines, format_cell, rank_change_line
from .scroll import RankChange, ScrollResult, freeze, scroll
from .types import CommandPayload, Phase, Verdict, is_accepted
from .validation import ValidatedCmd, parse_command_line, validate_command
from .cli import run_stream

__all__ = [
    "Board",
    "BoardError",
    "BoardRow",
    "CommandOutcome",
    "CommandPayload",
    "Phase",
    "ProblemRecord",
    "RankChange",
    "ScoringParams",
    "ScrollResult",
    "Submission",
    "Team",
    "ValidatedCmd",
    "Verdict",
    "add_team",
    "apply_command",
    "board_lines",
    "compare_teams",
    "default_board",
    "format_cell",
    "freeze",
    "is_accepted",
    "order_teams",
    "parse_command_line",
    "query_ranking",
    "query_submission",
    "rank_change_line",
    "ranking_order",
    "rebuild_visible_metrics",
    "record_submission",
    "run_stream",
    "scroll",
    "start",
    "take_snapshot",
    "validate_command",
]
