
# src/fourline/core/board.py

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, List, Sequence

from fourline.config import ROWS, COLS
from fourline.core.moves import drop_row, legal_columns
from fourline.types import Cell, Player, Move

_SYMBOLS = {None: ".", "X": "X", "O": "O"}


@dataclass(slots=True)
class Board:
    rows: int = ROWS
    cols: int = COLS
    grid: List[List[Cell]] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not self.grid:
            self.grid = [[None for _ in range(self.cols)] for _ in range(self.rows)]
        elif len(self.grid) != self.rows or any(len(row) != self.cols for row in self.grid):
            raise ValueError(f"Grid must be {self.rows}x{self.cols}.")

    @classmethod
    def from_rows(cls, rows: Sequence[str]) -> "Board":
        """
        Build a board from row strings, top row first.
        '.' is empty, 'X' and 'O' are pieces. Whitespace is ignored.
        """
        lines = ["".join(r.split()) for r in rows]
        if not lines or not lines[0]:
            raise ValueError("Board needs at least one non-empty row.")

        grid: List[List[Cell]] = []
        for line in lines:
            row: List[Cell] = []
            for ch in line.upper():
                if ch == ".":
                    row.append(None)
                elif ch in ("X", "O"):
                    row.append(ch)  # type: ignore[arg-type]
                else:
                    raise ValueError(f"Unknown cell symbol {ch!r}.")
            grid.append(row)

        return cls(rows=len(grid), cols=len(grid[0]), grid=grid)

    def copy(self) -> "Board":
        return Board(self.rows, self.cols, [row[:] for row in self.grid])

    def valid_moves(self) -> List[Move]:
        return legal_columns(self)

    def is_full(self) -> bool:
        return all(self.grid[0][c] is not None for c in range(self.cols))

    def drop(self, col: Move, player: Player) -> int:
        r = drop_row(self, col)
        self.grid[r][int(col)] = player
        return r

    @contextmanager
    def placed(self, row: int, col: int, player: Player) -> Iterator[None]:
        """
        Put a piece for the duration of the block; the cell is empty again on exit,
        whether the block returns, breaks out or raises.
        """
        self.grid[row][col] = player
        try:
            yield
        finally:
            self.grid[row][col] = None

    def reset(self) -> None:
        for row in self.grid:
            for c in range(self.cols):
                row[c] = None

    def __str__(self) -> str:
        return "\n".join("".join(_SYMBOLS[cell] for cell in row) for row in self.grid)
