from __future__ import annotations

import random

import matplotlib

matplotlib.use("Agg")

import pytest

from fourline.core.board import Board
from fourline.types import other


@pytest.fixture
def board() -> Board:
    return Board()


@pytest.fixture
def make_board():
    """Board from row strings, top row first ('.', 'X', 'O')."""
    return Board.from_rows


@pytest.fixture
def random_position():
    """Play ``plies`` random legal drops from an empty board, X first."""

    def _build(rows: int, cols: int, plies: int, seed: int) -> Board:
        b = Board(rows, cols)
        rng = random.Random(seed)
        side = "X"
        for _ in range(plies):
            moves = b.valid_moves()
            if not moves:
                break
            b.drop(rng.choice(moves), side)
            side = other(side)
        return b

    return _build
