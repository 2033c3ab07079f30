from fourline.core.board import Board
from fourline.core.scoring import WIN_SCORE, ConstantScorer, WindowScorer, windows


def test_constant_scorer(make_board):
    assert ConstantScorer().score(Board()) == 0
    assert ConstantScorer(7).score(make_board(["XXXX"])) == 7


def test_window_count_on_standard_board(board):
    # 24 horizontal, 21 vertical, 12 + 12 diagonal
    assert len(list(windows(board))) == 69


def test_window_scorer_win_and_loss(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "OOO....",
        "XXXX...",
    ])
    assert WindowScorer("X").score(b) == WIN_SCORE
    assert WindowScorer("O").score(b) == -WIN_SCORE


def test_window_scorer_is_symmetric_on_mirrored_colors(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "...O...",
        "..XXO..",
    ])
    swapped = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        "...X...",
        "..OOX..",
    ])
    assert WindowScorer("X").score(b) == WindowScorer("O").score(swapped)


def test_window_scorer_prefers_center(board):
    center = board.copy()
    center.drop(3, "X")
    edge = board.copy()
    edge.drop(0, "X")
    assert WindowScorer("X").score(center) > WindowScorer("X").score(edge)


def test_open_three_outweighs_opponent_pair(make_board):
    b = make_board([
        ".......",
        ".......",
        ".......",
        ".......",
        ".......",
        "XXX..OO",
    ])
    assert WindowScorer("X").score(b) > 0
    assert WindowScorer("O").score(b) < 0
