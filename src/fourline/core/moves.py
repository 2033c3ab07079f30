# src/fourline/core/moves.py

from __future__ import annotations
from typing import TYPE_CHECKING, List

from fourline.errors import ColumnFullError, ColumnOutOfRangeError
from fourline.types import Move

if TYPE_CHECKING:
    from fourline.core.board import Board


def legal_columns(board: "Board") -> List[Move]:
    # Ascending order matters: the search breaks score ties toward the lowest column.
    top = board.grid[0]
    return [Move(c) for c in range(board.cols) if top[c] is None]


def drop_row(board: "Board", col: int) -> int:
    """Row a piece dropped in ``col`` settles into (lowest empty cell)."""
    c = int(col)
    if c < 0 or c >= board.cols:
        raise ColumnOutOfRangeError(c, board.cols)

    for r in range(board.rows - 1, -1, -1):
        if board.grid[r][c] is None:
            return r

    raise ColumnFullError(c)
