from dataclasses import dataclass
import random

import pytest

from fourline.ai.alphabeta_agent import AlphaBetaAgent, SearchResult
from fourline.ai.minimax_agent import MinimaxAgent
from fourline.ai.random_agent import RandomAgent
from fourline.core.board import Board
from fourline.core.scoring import ConstantScorer, WindowScorer
from fourline.errors import AlreadyBoundError, ContractViolation, NoLegalMoveError, NotBoundError

FULL_BOARD = [
    "XOXOXOX",
    "XOXOXOX",
    "OXOXOXO",
    "OXOXOXO",
    "XOXOXOX",
    "XOXOXOX",
]


@dataclass(frozen=True)
class CellWeightScorer:
    """Uneven but deterministic scores, so pruned and unpruned trees have something to disagree on."""

    def score(self, board: Board) -> int:
        total = 0
        for r, row in enumerate(board.grid):
            for c, cell in enumerate(row):
                w = (r * 7 + c * 3) % 5 - 2
                if cell == "X":
                    total += w
                elif cell == "O":
                    total -= w
        return total


def _engine(board, side="X", **kw):
    agent = AlphaBetaAgent(board, **kw)
    agent.bind(side)
    return agent


def _grid(board):
    return [row[:] for row in board.grid]


def test_empty_board_default_scorer_picks_column_zero(board):
    agent = _engine(board, depth=5)
    assert agent.depth == 5
    assert isinstance(agent.scorer, ConstantScorer)

    assert agent.choose_move() == 0
    assert all(cell is None for row in board.grid for cell in row)


def test_default_scorer_picks_lowest_open_column(make_board):
    b = make_board([
        "X......",
        "O......",
        "X......",
        "O......",
        "X......",
        "O...X..",
    ])
    assert _engine(b, side="O").choose_move() == 1


def test_constant_scorer_does_not_see_an_immediate_win(make_board):
    # X completes the bottom row by playing 3, but every leaf scores zero
    # and nothing in the search looks for lines, so column 0 still wins the tie.
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "OO.....",
        "XXX.O..",
    ])
    assert _engine(b).choose_move() == 0


def test_window_scorer_takes_the_win(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "OO.....",
        "XXX.O..",
    ])
    agent = _engine(b, depth=2, scorer=WindowScorer("X"))
    assert agent.choose_move() == 3


def test_window_scorer_blocks_the_threat(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "XX.....",
        "OOO...X",
    ])
    agent = _engine(b, depth=2, scorer=WindowScorer("X"))
    assert agent.choose_move() == 3


def test_full_board_raises_no_legal_move(make_board):
    agent = _engine(make_board(FULL_BOARD))
    with pytest.raises(NoLegalMoveError) as exc:
        agent.choose_move()
    assert isinstance(exc.value, ContractViolation)


def test_choose_move_requires_bind(board):
    agent = AlphaBetaAgent(board)
    with pytest.raises(NotBoundError):
        agent.choose_move()


def test_bind_once(board):
    agent = AlphaBetaAgent(board)
    agent.bind("O")
    assert (agent.me, agent.opp) == ("O", "X")

    with pytest.raises(AlreadyBoundError):
        agent.bind("X")
    assert (agent.me, agent.opp) == ("O", "X")


def test_bind_rejects_empty_side(board):
    with pytest.raises(ContractViolation):
        AlphaBetaAgent(board).bind(None)


@pytest.mark.parametrize("seed", range(12))
@pytest.mark.parametrize("scorer", ["zero", "window"])
def test_search_leaves_board_untouched_and_returns_open_column(random_position, seed, scorer):
    b = random_position(6, 7, plies=seed * 3, seed=seed)
    if not b.valid_moves():
        pytest.skip("random position filled the board")

    side = "X" if seed % 2 == 0 else "O"
    sc = WindowScorer(side) if scorer == "window" else ConstantScorer()
    before = _grid(b)

    col = _engine(b, side=side, depth=3, scorer=sc).choose_move()

    assert _grid(b) == before
    assert before[0][col] is None


def test_applying_the_move_changes_exactly_one_cell(random_position):
    b = random_position(6, 7, plies=9, seed=42)
    before = _grid(b)

    agent = _engine(b, side="O", depth=4, scorer=WindowScorer("O"))
    row = b.drop(agent.choose_move(), "O")

    changed = [
        (r, c)
        for r in range(b.rows)
        for c in range(b.cols)
        if b.grid[r][c] != before[r][c]
    ]
    assert len(changed) == 1
    assert changed[0][0] == row


@pytest.mark.parametrize("seed", range(25))
def test_pruning_matches_exhaustive_minimax_on_3x3(random_position, seed):
    b = random_position(3, 3, plies=seed % 5, seed=seed)
    side = "X" if seed % 2 == 0 else "O"

    ab = AlphaBetaAgent(b, depth=3, scorer=CellWeightScorer())
    mm = MinimaxAgent(b, depth=3, scorer=CellWeightScorer())
    ab.bind(side)
    mm.bind(side)

    before = _grid(b)
    assert ab.choose_move() == mm.choose_move()
    assert ab.last_info["eval"] == mm.last_info["eval"]
    assert ab.last_info["nodes"] <= mm.last_info["nodes"]
    assert _grid(b) == before


@pytest.mark.parametrize("seed", range(6))
def test_pruning_matches_exhaustive_minimax_with_window_scorer(random_position, seed):
    b = random_position(6, 7, plies=4 + seed, seed=100 + seed)
    ab = _engine(b, depth=3, scorer=WindowScorer("X"))
    mm = MinimaxAgent(b, depth=3, scorer=WindowScorer("X"))
    mm.bind("X")

    assert ab.choose_move() == mm.choose_move()
    assert ab.last_info["eval"] == mm.last_info["eval"]


def test_minimizing_tie_break_keeps_first_column():
    # Depth 2 on an empty 3x3 with constant scores: every reply ties, so both
    # levels keep the lowest column.
    b = Board(3, 3)
    agent = _engine(b, depth=2)
    res = agent._minimax(2, "O", float("-inf"), float("inf"))
    assert res == SearchResult(0, 0)


def test_leaf_at_depth_zero_has_no_column(board):
    agent = _engine(board, depth=0)
    assert agent._minimax(0, "X", float("-inf"), float("inf")) == SearchResult(0, None)
    # the root itself is a leaf: fall back to the first open column
    assert agent.choose_move() == 0


def test_search_stats_recorded(board):
    agent = _engine(board)
    agent.choose_move()
    info = agent.last_info
    assert info["depth"] == 5
    assert info["move_col"] == 1
    assert info["eval"] == 0
    assert info["nodes"] > 0
    assert info["cutoffs"] > 0
    assert info["time_ms"] >= 1


def test_random_agent_plays_open_columns(make_board):
    b = make_board([
        "X.X.X.X",
        "O.O.O.O",
    ])
    agent = RandomAgent(b, rng=random.Random(7))
    agent.bind("X")
    for _ in range(20):
        assert agent.choose_move() in (1, 3, 5)


def test_random_agent_full_board(make_board):
    agent = RandomAgent(make_board(FULL_BOARD))
    agent.bind("O")
    with pytest.raises(NoLegalMoveError):
        agent.choose_move()


def test_scorer_for_the_other_side_is_rejected_at_bind(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "OO.....",
        "XXX.O..",
    ])
    agent = AlphaBetaAgent(b, depth=2, scorer=WindowScorer("O"))
    with pytest.raises(ContractViolation):
        agent.bind("X")
    assert agent.me is None

    mm = MinimaxAgent(b, depth=2, scorer=WindowScorer("O"))
    with pytest.raises(ContractViolation):
        mm.bind("X")


def test_side_free_scorers_bind_to_either_side(board):
    for side in ("X", "O"):
        agent = AlphaBetaAgent(board.copy(), scorer=CellWeightScorer())
        agent.bind(side)
        assert agent.me == side


def test_random_agent_rejects_unknown_side(board):
    agent = RandomAgent(board)
    with pytest.raises(ContractViolation):
        agent.bind("Z")
    assert agent.me is None
