import random

import pytest

from fourline.ai.alphabeta_agent import AlphaBetaAgent
from fourline.ai.random_agent import RandomAgent
from fourline.core.board import Board
from fourline.core.scoring import WindowScorer
from fourline.errors import ColumnFullError, ContractViolation, GameOverError
from fourline.game.session import GameSession


def test_hand_played_game_detects_horizontal_win():
    s = GameSession()
    # X: 0 1 2 3 on the bottom row, O stacks on top
    for col in [0, 0, 1, 1, 2, 2]:
        s.apply_move(col)
        assert not s.is_over

    row = s.apply_move(3)

    assert row == 5
    assert s.winner == "X"
    assert s.outcome == "X"
    assert sorted(s.winning_line) == [(5, 0), (5, 1), (5, 2), (5, 3)]
    assert s.state.last_status == "Player X wins!"
    assert s.history == [0, 0, 1, 1, 2, 2, 3]


def test_turns_alternate_and_status_updates():
    s = GameSession()
    assert s.current == "X"
    s.apply_move(4)
    assert s.current == "O"
    assert "Next: Player O" in s.state.last_status


def test_move_after_game_over_raises():
    s = GameSession()
    for col in [0, 1, 0, 1, 0, 1, 0]:
        s.apply_move(col)
    assert s.winner == "X"

    with pytest.raises(GameOverError):
        s.apply_move(5)


def test_full_column_leaves_turn_unchanged():
    s = GameSession()
    for _ in range(3):
        for col in (6, 6):
            s.apply_move(col)
    with pytest.raises(ColumnFullError):
        s.apply_move(6)
    assert s.current == "X"
    assert len(s.history) == 6


def test_draw_on_small_board():
    s = GameSession(Board(rows=2, cols=2))
    for col in [0, 1, 0]:
        s.apply_move(col)
        assert not s.is_over
    s.apply_move(1)

    assert s.drawn
    assert s.outcome == "D"
    assert s.winner is None


def test_session_binds_agents():
    b = Board()
    ax = AlphaBetaAgent(b)
    ao = RandomAgent(b)
    GameSession(b, ax, ao)
    assert ax.me == "X"
    assert ao.me == "O"


def test_step_applies_exactly_one_piece():
    b = Board()
    s = GameSession(b, agent_o=AlphaBetaAgent(b, depth=3, scorer=WindowScorer("O")))
    s.apply_move(3)
    before = [row[:] for row in b.grid]

    col = s.step()

    diff = [(r, c) for r in range(6) for c in range(7) if b.grid[r][c] != before[r][c]]
    assert len(diff) == 1
    assert diff[0][1] == col
    assert b.grid[diff[0][0]][col] == "O"


def test_step_for_hand_played_side_is_rejected():
    s = GameSession()
    with pytest.raises(ContractViolation):
        s.step()


def test_default_engine_stacks_column_zero_against_itself():
    b = Board()
    s = GameSession(b, AlphaBetaAgent(b), AlphaBetaAgent(b))
    for _ in range(6):
        assert s.step() == 0
    # column 0 is full and alternating, nobody has won
    assert not s.is_over
    assert s.step() == 1


def test_engine_vs_random_plays_to_the_end():
    b = Board()
    s = GameSession(b, AlphaBetaAgent(b, depth=2, scorer=WindowScorer("X")), RandomAgent(b, rng=random.Random(3)))
    outcome = s.play()
    assert outcome in ("X", "O", "D")
    assert s.is_over


def test_reset_clears_board_and_keeps_agents():
    b = Board()
    ax = AlphaBetaAgent(b)
    s = GameSession(b, ax, RandomAgent(b, rng=random.Random(1)))
    s.play()

    s.reset()

    assert all(cell is None for row in b.grid for cell in row)
    assert s.current == "X"
    assert s.outcome is None
    assert s.history == []
    assert ax.me == "X"
    assert s.step() == 0


def test_agent_on_another_board_is_rejected():
    b = Board()
    stray = AlphaBetaAgent(Board())
    with pytest.raises(ContractViolation):
        GameSession(b, AlphaBetaAgent(b), stray)
    # nothing was bound by the failed session
    assert stray.me is None


def test_agents_on_separate_boards_are_rejected():
    with pytest.raises(ContractViolation):
        GameSession(agent_x=AlphaBetaAgent(Board()), agent_o=AlphaBetaAgent(Board()))


def test_session_plays_on_the_agents_board_when_none_given():
    b = Board()
    s = GameSession(agent_x=AlphaBetaAgent(b), agent_o=AlphaBetaAgent(b))
    assert s.board is b

    for _ in range(7):
        s.step()
    assert s.history == [0, 0, 0, 0, 0, 0, 1]
    assert b.grid[5][1] == "X"
