from __future__ import annotations

from dataclasses import dataclass, field
from math import inf
from typing import Optional

from fourline.ai.alphabeta_agent import SearchResult
from fourline.config import SEARCH_DEPTH
from fourline.core.board import Board
from fourline.core.moves import drop_row, legal_columns
from fourline.core.scoring import ConstantScorer, Scorer, check_perspective
from fourline.errors import AlreadyBoundError, ContractViolation, NoLegalMoveError, NotBoundError
from fourline.types import Move, Player, other


@dataclass(slots=True)
class MinimaxAgent:
    """Plain fixed-depth minimax: visits every node, same tie-break as AlphaBetaAgent."""

    board: Board
    name: str = "Minimax AI"
    depth: int = SEARCH_DEPTH
    scorer: Scorer = field(default_factory=ConstantScorer)

    me: Optional[Player] = None
    opp: Optional[Player] = None

    last_info: dict = field(default_factory=dict)
    _nodes: int = 0

    def bind(self, side: Player) -> None:
        if self.me is not None:
            raise AlreadyBoundError(f"{self.name} already plays {self.me}.")
        if side not in ("X", "O"):
            raise ContractViolation(f"Unknown side {side!r}.")
        check_perspective(self.scorer, side)
        self.me = side
        self.opp = other(side)

    def choose_move(self) -> Move:
        if self.me is None:
            raise NotBoundError()
        moves = legal_columns(self.board)
        if not moves:
            raise NoLegalMoveError()

        self._nodes = 0
        result = self._minimax(self.depth, self.me)
        col = result.column if result.column is not None else moves[0]

        self.last_info = {
            "depth": self.depth,
            "nodes": self._nodes,
            "eval": result.score,
            "move_col": int(col) + 1,
        }
        return col

    def _minimax(self, depth: int, to_play: Player) -> SearchResult:
        self._nodes += 1
        board = self.board

        moves = legal_columns(board)
        if depth <= 0 or not moves:
            return SearchResult(self.scorer.score(board), None)

        maximizing = to_play == self.me
        best = SearchResult(-inf if maximizing else inf, None)

        for m in moves:
            row = drop_row(board, m)
            with board.placed(row, m, to_play):
                score = self._minimax(depth - 1, other(to_play)).score

            if maximizing and score > best.score:
                best = SearchResult(score, m)
            elif not maximizing and score < best.score:
                best = SearchResult(score, m)

        return best
