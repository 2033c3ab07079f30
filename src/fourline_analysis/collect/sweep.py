from __future__ import annotations

import logging
import random
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, List

import pandas as pd

from fourline.ai.minimax_agent import MinimaxAgent
from fourline.ai.roster import make_alphabeta
from fourline.core.board import Board
from fourline.core.rules import check_winner
from fourline.core.scoring import ConstantScorer, WindowScorer
from fourline.types import Player, other

logger = logging.getLogger(__name__)

SWEEP_COLS = [
    "position", "plies", "side", "depth",
    "column", "eval", "nodes", "cutoffs", "time_ms",
    "minimax_nodes", "minimax_column",
]


@dataclass(frozen=True)
class SweepPlan:
    depths: tuple[int, ...] = (1, 2, 3, 4)
    positions: int = 12
    min_plies: int = 2
    max_plies: int = 16
    seed: int = 1234
    scorer: str = "window"
    # Run the unpruned search too, so node counts can be compared
    with_minimax: bool = True


def random_positions(plan: SweepPlan) -> Iterator[tuple[Board, Player, int]]:
    """
    Seeded mid-game positions: (board, side to move, plies played).
    Positions that are already won are skipped; the search would still run on
    them but they say nothing useful about branching.
    """
    rng = random.Random(plan.seed)
    made = 0
    attempts = 0
    while made < plan.positions:
        attempts += 1
        if attempts > plan.positions * 50:
            raise RuntimeError(f"Could only build {made} of {plan.positions} positions.")

        board = Board()
        side: Player = "X"
        plies = rng.randint(plan.min_plies, plan.max_plies)
        for _ in range(plies):
            board.drop(rng.choice(board.valid_moves()), side)
            side = other(side)

        if check_winner(board) is not None:
            continue

        made += 1
        yield board, side, plies


def _minimax_scorer(name: str, side: Player):
    return WindowScorer(side) if name == "window" else ConstantScorer()


def run_sweep(plan: SweepPlan) -> pd.DataFrame:
    """One row per (position, depth): what the alpha-beta engine chose and what it cost."""
    rows: List[dict] = []

    for idx, (board, side, plies) in enumerate(random_positions(plan)):
        for depth in plan.depths:
            engine = make_alphabeta(board, side, depth=depth, scorer=plan.scorer)
            engine.bind(side)
            col = engine.choose_move()
            info = engine.last_info

            row = {
                "position": idx,
                "plies": plies,
                "side": side,
                "depth": depth,
                "column": int(col),
                "eval": info["eval"],
                "nodes": info["nodes"],
                "cutoffs": info["cutoffs"],
                "time_ms": info["time_ms"],
                "minimax_nodes": float("nan"),
                "minimax_column": float("nan"),
            }

            if plan.with_minimax:
                full = MinimaxAgent(board, depth=depth, scorer=_minimax_scorer(plan.scorer, side))
                full.bind(side)
                row["minimax_column"] = int(full.choose_move())
                row["minimax_nodes"] = full.last_info["nodes"]

            rows.append(row)

        logger.info("position %d (%d plies, %s to move) done", idx, plies, side)

    return pd.DataFrame(rows, columns=SWEEP_COLS)


def save_sweep(df: pd.DataFrame, path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(path, index=False)
    return path


def load_sweep(path: Path) -> pd.DataFrame:
    if not path.exists():
        raise FileNotFoundError(f"Sweep CSV not found: {path}")

    df = pd.read_csv(path)
    missing = [c for c in ("depth", "nodes", "cutoffs") if c not in df.columns]
    if missing:
        raise ValueError(f"Not a search sweep, missing {missing}. Columns: {list(df.columns)}")
    return df
