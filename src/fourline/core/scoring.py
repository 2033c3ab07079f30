from __future__ import annotations
from dataclasses import dataclass
from typing import Iterator, List, Protocol, Tuple

from fourline.config import CONNECT_N
from fourline.core.board import Board
from fourline.core.rules import check_winner
from fourline.errors import ContractViolation
from fourline.types import Cell, Player, other

Coord = Tuple[int, int]

WIN_SCORE = 1_000_000


class Scorer(Protocol):
    """Static evaluation of a leaf position; larger favors the maximizing side."""

    def score(self, board: Board) -> int:
        ...


def check_perspective(scorer: Scorer, side: Player) -> None:
    """
    A scorer tied to one side (it has a ``player``) must score for the side the
    engine plays, or the engine ends up maximizing its opponent's evaluation.
    """
    player = getattr(scorer, "player", None)
    if player is not None and player != side:
        raise ContractViolation(f"Scorer rates positions for {player}, engine plays {side}.")


@dataclass(frozen=True, slots=True)
class ConstantScorer:
    """Gives every position the same value, so the search falls back to its tie-break."""

    value: int = 0

    def score(self, board: Board) -> int:
        return self.value


def _is_playable_empty(board: Board, r: int, c: int) -> bool:
    """
    An empty cell is playable if it is on the bottom row or there is a piece below it.
    """
    if board.grid[r][c] is not None:
        return False
    return (r == board.rows - 1) or (board.grid[r + 1][c] is not None)


def windows(board: Board, n: int = CONNECT_N) -> Iterator[List[Coord]]:
    rows, cols = board.rows, board.cols

    for r in range(rows):
        for c in range(cols - n + 1):
            yield [(r, c + i) for i in range(n)]

    for r in range(rows - n + 1):
        for c in range(cols):
            yield [(r + i, c) for i in range(n)]

    for r in range(rows - n + 1):
        for c in range(cols - n + 1):
            yield [(r + i, c + i) for i in range(n)]

    for r in range(n - 1, rows):
        for c in range(cols - n + 1):
            yield [(r - i, c + i) for i in range(n)]


@dataclass(frozen=True, slots=True)
class WindowScorer:
    """
    Counts how every window of four is shaping up for ``player``.

    Opponent threats weigh a little more than our own so the engine prefers to block.
    """

    player: Player
    center_weight: int = 6

    def _score_window(self, board: Board, coords: List[Coord]) -> int:
        opp = other(self.player)
        cells: List[Cell] = [board.grid[r][c] for (r, c) in coords]

        mine = cells.count(self.player)
        theirs = cells.count(opp)
        empty = cells.count(None)

        # both colors present: this window can never be completed
        if mine and theirs:
            return 0

        playable = sum(
            1 for (r, c), v in zip(coords, cells) if v is None and _is_playable_empty(board, r, c)
        )

        if mine == 3 and empty == 1:
            return 250 if playable == 1 else 40
        if mine == 2 and empty == 2:
            return 18
        if mine == 1 and empty == 3:
            return 2

        if theirs == 3 and empty == 1:
            return -280 if playable == 1 else -50
        if theirs == 2 and empty == 2:
            return -20

        return 0

    def score(self, board: Board) -> int:
        w = check_winner(board)
        if w == self.player:
            return WIN_SCORE
        if w is not None:
            return -WIN_SCORE

        total = 0

        center = board.cols // 2
        for r in range(board.rows):
            cell = board.grid[r][center]
            if cell == self.player:
                total += self.center_weight
            elif cell is not None:
                total -= self.center_weight

        for coords in windows(board):
            total += self._score_window(board, coords)

        return total
