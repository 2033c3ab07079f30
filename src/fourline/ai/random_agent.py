from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional
import random

from fourline.core.board import Board
from fourline.errors import AlreadyBoundError, ContractViolation, NoLegalMoveError, NotBoundError
from fourline.types import Move, Player


@dataclass(slots=True)
class RandomAgent:
    board: Board
    name: str = "Random AI"
    rng: random.Random = field(default_factory=random.Random)
    me: Optional[Player] = None

    def bind(self, side: Player) -> None:
        if self.me is not None:
            raise AlreadyBoundError(f"{self.name} already plays {self.me}.")
        if side not in ("X", "O"):
            raise ContractViolation(f"Unknown side {side!r}.")
        self.me = side

    def choose_move(self) -> Move:
        if self.me is None:
            raise NotBoundError()
        moves = self.board.valid_moves()
        if not moves:
            raise NoLegalMoveError()
        return self.rng.choice(moves)
