from __future__ import annotations

from functools import partial
from typing import List

from fourline.ai.alphabeta_agent import AlphaBetaAgent
from fourline.ai.base import Agent
from fourline.ai.random_agent import RandomAgent
from fourline.config import SEARCH_DEPTH
from fourline.core.board import Board
from fourline.core.scoring import ConstantScorer, WindowScorer
from fourline.game.match import Contender
from fourline.types import Player

SCORERS = ("zero", "window")


def make_alphabeta(board: Board, side: Player, depth: int = SEARCH_DEPTH, scorer: str = "zero") -> Agent:
    if scorer == "window":
        return AlphaBetaAgent(board, name=f"AlphaBeta window d{depth}", depth=depth, scorer=WindowScorer(side))
    if scorer == "zero":
        return AlphaBetaAgent(board, name=f"AlphaBeta zero d{depth}", depth=depth, scorer=ConstantScorer())
    raise ValueError(f"Unknown scorer {scorer!r}; expected one of {SCORERS}.")


def make_random(board: Board, side: Player) -> Agent:
    return RandomAgent(board)


def build_roster(depth: int = SEARCH_DEPTH) -> List[Contender]:
    return [
        Contender(f"AlphaBeta zero d{depth}", partial(make_alphabeta, depth=depth, scorer="zero")),
        Contender(f"AlphaBeta window d{depth}", partial(make_alphabeta, depth=depth, scorer="window")),
        Contender("Random AI", make_random),
    ]
