from __future__ import annotations
from typing import Protocol

from fourline.core.board import Board
from fourline.types import Move, Player


class Agent(Protocol):
    """
    A player strategy. The agent is built around the live board it plays on,
    told its side once with ``bind`` and then asked for a column each turn.
    """

    name: str
    board: Board

    def bind(self, side: Player) -> None:
        ...

    def choose_move(self) -> Move:
        ...
