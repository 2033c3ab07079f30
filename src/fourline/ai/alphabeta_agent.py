from __future__ import annotations

from dataclasses import dataclass, field
from math import inf
from typing import NamedTuple, Optional
import logging
import time

from fourline.config import SEARCH_DEPTH
from fourline.core.board import Board
from fourline.core.moves import drop_row, legal_columns
from fourline.core.scoring import ConstantScorer, Scorer, check_perspective
from fourline.errors import AlreadyBoundError, ContractViolation, NoLegalMoveError, NotBoundError
from fourline.types import Move, Player, other

logger = logging.getLogger(__name__)


class SearchResult(NamedTuple):
    score: float
    column: Optional[Move]


@dataclass(slots=True)
class AlphaBetaAgent:
    """
    Depth-limited minimax with alpha-beta pruning.

    The search works directly on ``board``: every trial piece is placed through
    ``Board.placed`` and taken back before the next column is tried, so the board
    is unchanged when ``choose_move`` returns.

    A node is a leaf only when the depth runs out or no column is open. Lines of
    four are not looked at during the search; that is left to the scorer.
    """

    board: Board
    name: str = "AlphaBeta AI"
    depth: int = SEARCH_DEPTH
    scorer: Scorer = field(default_factory=ConstantScorer)

    me: Optional[Player] = None
    opp: Optional[Player] = None

    # Stats
    last_info: dict = field(default_factory=dict)

    _nodes: int = 0
    _cutoffs: int = 0

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
        if not legal_columns(self.board):
            raise NoLegalMoveError()

        self._nodes = 0
        self._cutoffs = 0
        start = time.perf_counter()

        result = self._minimax(self.depth, self.me, -inf, inf)

        elapsed = time.perf_counter() - start
        col = result.column
        # Only reachable with depth <= 0: the root itself is a leaf.
        if col is None:
            col = legal_columns(self.board)[0]

        self.last_info = {
            "depth": self.depth,
            "nodes": self._nodes,
            "cutoffs": self._cutoffs,
            "eval": result.score,
            "move_col": int(col) + 1,
            "time_ms": max(1, int(elapsed * 1000)),
        }
        logger.debug("%s (%s) picks column %d: %s", self.name, self.me, col, self.last_info)

        return col

    def _minimax(self, depth: int, to_play: Player, alpha: float, beta: float) -> SearchResult:
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
                score = self._minimax(depth - 1, other(to_play), alpha, beta).score

            # Strict comparisons: on equal scores the lower column stays best.
            if maximizing:
                if score > best.score:
                    best = SearchResult(score, m)
                alpha = max(alpha, best.score)
            else:
                if score < best.score:
                    best = SearchResult(score, m)
                beta = min(beta, best.score)

            if alpha >= beta:
                self._cutoffs += 1
                break

        return best
