from __future__ import annotations

import itertools
import logging
import math
import random
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Sequence, Tuple

import pandas as pd

from fourline.ai.base import Agent
from fourline.config import MATCH_GAMES, MATCH_SEED, RESULTS_DIR
from fourline.core.board import Board
from fourline.game.session import GameSession
from fourline.types import Outcome, Player

logger = logging.getLogger(__name__)

SideStats = Dict[str, int]


@dataclass(frozen=True)
class Contender:
    name: str
    make: Callable[[Board, Player], Agent]


@dataclass
class Agg:
    games: int = 0
    points: float = 0.0
    wins: int = 0
    losses: int = 0
    draws: int = 0

    moves: int = 0
    time_ms: int = 0
    nodes: int = 0
    cutoffs: int = 0


def seed_agent(agent: Agent, seed: int) -> None:
    rng = getattr(agent, "rng", None)
    if isinstance(rng, random.Random):
        rng.seed(seed)


def play_headless(
    make_x: Callable[[Board, Player], Agent],
    make_o: Callable[[Board, Player], Agent],
    seed_base: int = 0,
    opening_plies: int = 2,
) -> Tuple[Outcome, Dict[str, SideStats]]:
    """
    Play one game between two agent factories with no output.

    The first ``opening_plies`` moves are random (seeded) so deterministic
    engines do not replay the same game every time.
    """
    board = Board()
    agent_x = make_x(board, "X")
    agent_o = make_o(board, "O")
    session = GameSession(board, agent_x, agent_o)

    stats = {
        "X": {"moves": 0, "time_ms": 0, "nodes": 0, "cutoffs": 0},
        "O": {"moves": 0, "time_ms": 0, "nodes": 0, "cutoffs": 0},
    }

    seed_agent(agent_x, seed_base + 101)
    seed_agent(agent_o, seed_base + 202)

    rng = random.Random(seed_base)
    for _ in range(opening_plies):
        moves = board.valid_moves()
        if not moves or session.is_over:
            break
        session.apply_move(rng.choice(moves))

    while not session.is_over:
        side = session.current
        agent = session.agents[side]
        assert agent is not None

        start = time.perf_counter()
        session.step()
        elapsed_ms = int((time.perf_counter() - start) * 1000)

        info = getattr(agent, "last_info", None) or {}
        side_stats = stats[side]
        side_stats["moves"] += 1
        side_stats["time_ms"] += max(1, int(info.get("time_ms", elapsed_ms)))
        side_stats["nodes"] += int(info.get("nodes", 0))
        side_stats["cutoffs"] += int(info.get("cutoffs", 0))

    outcome = session.outcome
    assert outcome is not None
    return outcome, stats


def add_result(agg_a: Agg, agg_b: Agg, outcome: Outcome, a_is_x: bool) -> None:
    agg_a.games += 1
    agg_b.games += 1

    if outcome == "D":
        agg_a.draws += 1
        agg_b.draws += 1
        agg_a.points += 0.5
        agg_b.points += 0.5
        return

    a_won = (outcome == "X") == a_is_x
    if a_won:
        agg_a.wins += 1
        agg_b.losses += 1
        agg_a.points += 1.0
    else:
        agg_b.wins += 1
        agg_a.losses += 1
        agg_b.points += 1.0


def add_stats(agg: Agg, s: SideStats) -> None:
    agg.moves += s["moves"]
    agg.time_ms += s["time_ms"]
    agg.nodes += s["nodes"]
    agg.cutoffs += s["cutoffs"]


def ppg(a: Agg) -> float:
    return (a.points / a.games) if a.games else 0.0


def avg_ms_per_move(a: Agg) -> float:
    return (a.time_ms / a.moves) if a.moves else 0.0


def wilson_lcb(p: float, n: int, z: float = 1.28) -> float:
    if n <= 0:
        return 0.0
    p = max(0.0, min(1.0, p))
    z2 = z * z
    denom = 1.0 + (z2 / n)
    center = p + (z2 / (2.0 * n))
    rad = z * math.sqrt(max(0.0, (p * (1.0 - p) + (z2 / (4.0 * n))) / n))
    return max(0.0, (center - rad) / denom)


def run_match(
    contenders: Sequence[Contender],
    games_per_pair: int = MATCH_GAMES,
    seed: int = MATCH_SEED,
) -> pd.DataFrame:
    """
    Round robin: every pair plays ``games_per_pair`` games, swapping colors each game.
    Returns one row per contender.
    """
    if len(contenders) < 2:
        raise ValueError(f"A match needs at least two contenders, got {len(contenders)}.")

    names = [c.name for c in contenders]
    if len(set(names)) != len(names):
        raise ValueError(f"Contender names must be unique: {names}")

    aggs: Dict[str, Agg] = {c.name: Agg() for c in contenders}

    for pair_idx, (a, b) in enumerate(itertools.combinations(contenders, 2)):
        for g in range(games_per_pair):
            seed_base = seed + pair_idx * 1000 + g
            a_is_x = g % 2 == 0
            if a_is_x:
                outcome, stats = play_headless(a.make, b.make, seed_base=seed_base)
                add_stats(aggs[a.name], stats["X"])
                add_stats(aggs[b.name], stats["O"])
            else:
                outcome, stats = play_headless(b.make, a.make, seed_base=seed_base)
                add_stats(aggs[b.name], stats["X"])
                add_stats(aggs[a.name], stats["O"])

            add_result(aggs[a.name], aggs[b.name], outcome, a_is_x)
            logger.info(
                "%s (%s) vs %s (%s): %s",
                a.name, "X" if a_is_x else "O",
                b.name, "O" if a_is_x else "X",
                outcome,
            )

    rows: List[dict] = []
    for name, agg in aggs.items():
        rows.append({
            "name": name,
            "games": agg.games,
            "wins": agg.wins,
            "draws": agg.draws,
            "losses": agg.losses,
            "points": agg.points,
            "ppg": ppg(agg),
            "strength_wilson_lcb": wilson_lcb(ppg(agg), agg.games),
            "moves": agg.moves,
            "time_ms": agg.time_ms,
            "nodes": agg.nodes,
            "cutoffs": agg.cutoffs,
            "avg_ms_per_move": avg_ms_per_move(agg),
        })

    df = pd.DataFrame(rows)
    return df.sort_values(["points", "name"], ascending=[False, True]).reset_index(drop=True)


def export_results(df: pd.DataFrame, results_dir: Path | str = RESULTS_DIR) -> Path:
    out_dir = Path(results_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    ts = time.strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"match_results_{ts}.csv"
    df.to_csv(out_path, index=False)
    logger.info("Exported %d rows to %s", len(df), out_path)
    return out_path
