from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from fourline.ai.roster import SCORERS, build_roster, make_alphabeta
from fourline.config import MATCH_GAMES, MATCH_SEED, RESULTS_DIR, SEARCH_DEPTH
from fourline.core.board import Board
from fourline.game.match import export_results, run_match
from fourline.log import configure_logging

logger = logging.getLogger(__name__)


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="fourline", description="Connect-4 alpha-beta engine.")
    ap.add_argument("--log-level", type=str, default=None, help="DEBUG, INFO, WARNING, ...")
    sub = ap.add_subparsers(dest="cmd", required=True)

    mv = sub.add_parser("move", help="Print the engine's column for a position.")
    mv.add_argument("--board", nargs="+", required=True,
                    help="Rows top to bottom, e.g. ....... ...X... ('.' empty, X, O)")
    mv.add_argument("--side", choices=["X", "O"], default="X", help="Side the engine plays")
    mv.add_argument("--depth", type=int, default=SEARCH_DEPTH, help="Search horizon in plies")
    mv.add_argument("--scorer", choices=SCORERS, default="zero", help="Leaf evaluation")

    mt = sub.add_parser("match", help="Round robin between the built-in agents.")
    mt.add_argument("--games", type=int, default=MATCH_GAMES, help="Games per pairing")
    mt.add_argument("--depth", type=int, default=SEARCH_DEPTH, help="Search horizon in plies")
    mt.add_argument("--seed", type=int, default=MATCH_SEED)
    mt.add_argument("--results-dir", type=str, default=RESULTS_DIR, help="Where to write the CSV")
    mt.add_argument("--no-export", action="store_true", help="Print only; skip the CSV")

    return ap


def _cmd_move(args: argparse.Namespace) -> int:
    board = Board.from_rows(args.board)
    agent = make_alphabeta(board, args.side, depth=args.depth, scorer=args.scorer)
    agent.bind(args.side)
    col = agent.choose_move()
    print(int(col))
    logger.info("search stats: %s", getattr(agent, "last_info", {}))
    return 0


def _cmd_match(args: argparse.Namespace) -> int:
    df = run_match(build_roster(depth=args.depth), games_per_pair=args.games, seed=args.seed)
    print(df.to_string(index=False))
    if not args.no_export:
        out = export_results(df, Path(args.results_dir))
        print(f"\nSaved results to: {out}")
    return 0


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging(args.log_level)

    try:
        if args.cmd == "move":
            return _cmd_move(args)
        return _cmd_match(args)
    except ValueError as e:
        # ContractViolation included; also bad --board text
        print(f"error: {e}", file=sys.stderr)
        return 2


if __name__ == "__main__":
    raise SystemExit(main())
