# src/fourline/types.py

from __future__ import annotations
from typing import Literal, Optional, NewType

Player = Literal["X", "O"]
Cell = Optional[Player]      # None is an empty cell
Move = NewType("Move", int)  # column index, 0-based
Outcome = Literal["X", "O", "D"]


def other(p: Player) -> Player:
    return "O" if p == "X" else "X"
