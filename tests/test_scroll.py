from scoreboard_core import (
    BoardError,
    ScrollResult,
    add_team,
    board_lines,
    default_board,
    format_cell,
    freeze,
    query_ranking,
    rebuild_visible_metrics,
    record_submission,
    scroll,
    start,
    take_snapshot,
)
from scoreboard_core.models import ProblemRecord, Submission


def _board(*names, problems=1):
    board = default_board()
    for name in names:
        add_team(board, name)
    start(board, 300, problems)
    return board


def _play(board, submissions):
    for team, problem, verdict, time in submissions:
        record_submission(board, team, problem, verdict, time)


BEFORE_FREEZE = [
    ("beta", "A", "Accepted", 5),
    ("alpha", "A", "Wrong_Answer", 10),
]
AFTER_FREEZE = [
    ("alpha", "A", "Accepted", 30),
    ("alpha", "B", "Wrong_Answer", 31),
    ("alpha", "B", "Accepted", 40),
    ("beta", "B", "Wrong_Answer", 50),
]


def _frozen_board():
    board = _board("alpha", "beta", problems=2)
    _play(board, BEFORE_FREEZE)
    take_snapshot(board)
    assert freeze(board) is None
    _play(board, AFTER_FREEZE)
    return board


def test_freeze_snapshots_records():
    board = _board("alpha", problems=2)
    _play(board, [("alpha", "A", "Wrong_Answer", 1), ("alpha", "A", "Accepted", 2)])
    _play(board, [("alpha", "B", "Wrong_Answer", 3)])
    freeze(board)
    a, b = board.teams["alpha"].problems
    assert board.phase == "frozen"
    assert a.solved_before_freeze is True
    assert b.solved_before_freeze is False
    assert b.wrong_before_freeze == 1
    assert not a.is_frozen and not b.is_frozen


def test_freeze_twice_fails_without_changes():
    board = _board("alpha")
    freeze(board)
    record_submission(board, "alpha", "A", "Wrong_Answer", 4)
    error = freeze(board)
    assert isinstance(error, BoardError)
    assert error.kind == "already_frozen"
    assert len(board.teams["alpha"].problems[0].captured) == 1


def test_scroll_requires_frozen_board():
    board = _board("alpha")
    result = scroll(board)
    assert isinstance(result, BoardError)
    assert result.kind == "not_frozen"
    assert board.phase == "live"


def test_frozen_submissions_are_captured_and_hidden():
    board = _frozen_board()
    alpha = board.teams["alpha"]
    assert [sub.time for sub in alpha.problems[1].captured] == [31, 40]
    assert alpha.problems[0].first_accept_time is None
    assert len(alpha.history) == 4

    take_snapshot(board)
    assert alpha.solved_count == 0
    assert query_ranking(board, "alpha") == 2


def test_post_freeze_submission_on_solved_problem_stays_live():
    board = _frozen_board()
    record_submission(board, "beta", "A", "Wrong_Answer", 60)
    record = board.teams["beta"].problems[0]
    assert record.captured == []
    assert record.first_accept_time == 5
    assert record.wrong_before_accept == 0
    assert format_cell(record, frozen=True) == "+"


def test_scroll_reveals_and_reports_rank_changes():
    board = _frozen_board()
    result = scroll(board)
    assert isinstance(result, ScrollResult)
    assert board_lines(result.before) == [
        "beta 1 1 5 + 0/1",
        "alpha 2 0 0 -1/1 0/2",
    ]
    assert [(c.team_name, c.replaced_team_name, c.solved_count, c.penalty) for c in result.changes] == [
        ("alpha", "beta", 2, 110),
    ]
    assert board_lines(result.after) == [
        "alpha 1 2 110 +1 +1",
        "beta 2 1 5 + -1",
    ]
    assert result.steps == 3
    assert board.phase == "post_freeze"
    assert query_ranking(board, "alpha") == 1


def test_replaced_team_is_taken_at_the_new_position():
    board = _board("x", "y", "z")
    _play(board, [("y", "A", "Accepted", 10), ("z", "A", "Accepted", 20)])
    freeze(board)
    _play(board, [("x", "A", "Accepted", 3)])
    result = scroll(board)
    assert len(result.changes) == 1
    change = result.changes[0]
    before_names = [row.team_name for row in result.before]
    new_rank = [row.team_name for row in result.after].index("x")
    assert change.replaced_team_name == before_names[new_rank] == "y"
    assert (change.solved_count, change.penalty) == (1, 3)


def test_no_event_when_reveal_does_not_improve_rank():
    board = _board("alpha", "beta")
    _play(board, [("alpha", "A", "Accepted", 1)])
    freeze(board)
    _play(board, [("beta", "A", "Wrong_Answer", 8), ("beta", "A", "Wrong_Answer", 9)])
    result = scroll(board)
    assert result.changes == ()
    assert board_lines(result.before) == ["alpha 1 1 1 +", "beta 2 0 0 0/2"]
    assert board_lines(result.after) == ["alpha 1 1 1 +", "beta 2 0 0 -2"]
    record = board.teams["beta"].problems[0]
    assert record.first_accept_time is None
    assert record.wrong_before_accept == 2


def test_scroll_matches_board_without_freeze():
    frozen = _frozen_board()
    scroll(frozen)

    plain = _board("alpha", "beta", problems=2)
    _play(plain, BEFORE_FREEZE + AFTER_FREEZE)
    rebuild_visible_metrics(plain)

    for name in ("alpha", "beta"):
        a = frozen.teams[name]
        b = plain.teams[name]
        assert (a.solved_count, a.penalty) == (b.solved_count, b.penalty)


def test_scroll_terminates_within_frozen_pair_count():
    board = _board("a", "b", "c", problems=3)
    freeze(board)
    for name in ("a", "b", "c"):
        for problem in "ABC":
            record_submission(board, name, problem, "Wrong_Answer", 10)
    result = scroll(board)
    assert result.steps == 9
    assert all(not team.has_frozen_problem for team in board.teams.values())


def test_board_can_be_frozen_again_after_scroll():
    board = _frozen_board()
    scroll(board)
    assert freeze(board) is None
    record_submission(board, "beta", "B", "Accepted", 70)
    record = board.teams["beta"].problems[1]
    assert record.wrong_before_freeze == 1
    assert format_cell(record, frozen=True) == "-1/1"
    result = scroll(board)
    assert [(c.team_name, c.replaced_team_name) for c in result.changes] == [("beta", "alpha")]
    assert board_lines(result.after) == [
        "beta 1 2 95 + +1",
        "alpha 2 2 110 +1 +1",
    ]


def test_frozen_cell_formats():
    record = ProblemRecord()
    record.snapshot_for_freeze()
    assert format_cell(record, frozen=True) == "."
    record.captured.append(Submission(problem="A", verdict="Accepted", time=3))
    assert format_cell(record, frozen=True) == "0/1"
    record.wrong_before_freeze = 2
    assert format_cell(record, frozen=True) == "-2/1"


def test_replaced_team_comes_from_the_order_before_each_step():
    board = _board("a", "b", "c", problems=2)
    _play(board, [("a", "A", "Accepted", 10), ("b", "A", "Accepted", 20)])
    freeze(board)
    _play(
        board,
        [
            ("c", "A", "Accepted", 1),
            ("c", "B", "Accepted", 2),
            ("b", "B", "Accepted", 100),
        ],
    )
    result = scroll(board)
    assert [(c.team_name, c.replaced_team_name, c.solved_count, c.penalty) for c in result.changes] == [
        ("c", "a", 1, 1),
        ("b", "c", 2, 120),
        ("c", "b", 2, 3),
    ]
    assert [row.team_name for row in result.after] == ["c", "b", "a"]
