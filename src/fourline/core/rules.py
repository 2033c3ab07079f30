from __future__ import annotations
from typing import Iterator, Optional, List, Tuple

from fourline.config import CONNECT_N
from fourline.core.board import Board
from fourline.errors import CellMismatchError
from fourline.types import Player

Coord = Tuple[int, int]  # (row, col)

# (d_row, d_col): horizontal, vertical, "\" diagonal, "/" diagonal
DIRECTIONS: Tuple[Coord, ...] = ((0, 1), (1, 0), (1, 1), (1, -1))


def _line_through(board: Board, row: int, col: int, dr: int, dc: int) -> Iterator[Coord]:
    # Walk back to where the line enters the grid, then forward to where it leaves.
    r, c = row, col
    while 0 <= r - dr < board.rows and 0 <= c - dc < board.cols:
        r, c = r - dr, c - dc
    while 0 <= r < board.rows and 0 <= c < board.cols:
        yield r, c
        r, c = r + dr, c + dc


def wins(board: Board, row: int, col: int, side: Player, n: int = CONNECT_N) -> bool:
    """
    True if ``side`` has ``n`` in a row on any of the four lines through (row, col).

    (row, col) must hold ``side``; anything else is a caller error.
    """
    if not (0 <= row < board.rows and 0 <= col < board.cols):
        raise CellMismatchError(f"Cell ({row}, {col}) is off the board.")
    if board.grid[row][col] != side:
        raise CellMismatchError(
            f"Cell ({row}, {col}) holds {board.grid[row][col]!r}, not {side!r}."
        )

    g = board.grid
    for dr, dc in DIRECTIONS:
        count = 0
        for r, c in _line_through(board, row, col, dr, dc):
            if g[r][c] == side:
                count += 1
                if count >= n:
                    return True
            else:
                count = 0

    return False


def check_winner_with_line(board: Board, n: int = CONNECT_N) -> Optional[Tuple[Player, List[Coord]]]:
    g = board.grid
    rows, cols = board.rows, board.cols

    # Horizontal
    for r in range(rows):
        for c in range(cols - n + 1):
            p = g[r][c]
            if p and all(g[r][c + i] == p for i in range(1, n)):
                return p, [(r, c + i) for i in range(n)]

    # Vertical
    for r in range(rows - n + 1):
        for c in range(cols):
            p = g[r][c]
            if p and all(g[r + i][c] == p for i in range(1, n)):
                return p, [(r + i, c) for i in range(n)]

    # Diagonal down-right
    for r in range(rows - n + 1):
        for c in range(cols - n + 1):
            p = g[r][c]
            if p and all(g[r + i][c + i] == p for i in range(1, n)):
                return p, [(r + i, c + i) for i in range(n)]

    # Diagonal up-right
    for r in range(n - 1, rows):
        for c in range(cols - n + 1):
            p = g[r][c]
            if p and all(g[r - i][c + i] == p for i in range(1, n)):
                return p, [(r - i, c + i) for i in range(n)]

    return None


def check_winner(board: Board) -> Optional[Player]:
    res = check_winner_with_line(board)
    return res[0] if res else None


def is_draw(board: Board) -> bool:
    return board.is_full() and check_winner(board) is None
