from __future__ import annotations
from dataclasses import dataclass

from fourline.core.board import Board
from fourline.types import Player


@dataclass(slots=True)
class GameState:
    board: Board
    current: Player = "X"
    last_status: str = "Player X starts."
