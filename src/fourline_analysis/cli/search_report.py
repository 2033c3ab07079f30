from __future__ import annotations

import argparse
from pathlib import Path

from fourline.ai.roster import SCORERS
from fourline.log import configure_logging

from ..collect.sweep import SweepPlan, load_sweep, run_sweep, save_sweep
from ..metrics.search_stats import by_depth, disagreements
from ..plots.chart import plot_nodes_by_depth, plot_prune_ratio


def build_argparser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(description="Measure alpha-beta search cost across depths.")
    ap.add_argument("--csv", type=str, default=None, help="Reuse a saved sweep instead of searching")
    ap.add_argument("--save", type=str, default=None, help="Write the raw sweep rows to this CSV")

    ap.add_argument("--depths", type=int, nargs="+", default=[1, 2, 3, 4], help="Horizons to measure")
    ap.add_argument("--positions", type=int, default=12, help="Random mid-game positions per depth")
    ap.add_argument("--seed", type=int, default=1234)
    ap.add_argument("--scorer", choices=SCORERS, default="window", help="Leaf evaluation")
    ap.add_argument("--no-minimax", action="store_true", help="Skip the unpruned comparison search")

    ap.add_argument("--outdir", type=str, default="figures", help="Directory for saving plots")
    ap.add_argument("--show", action="store_true", help="Show plots instead of saving")
    ap.add_argument("--no-plots", action="store_true")
    ap.add_argument("--log-level", type=str, default=None)
    return ap


def main(argv: list[str] | None = None) -> int:
    args = build_argparser().parse_args(argv)
    configure_logging(args.log_level)

    if args.csv:
        df = load_sweep(Path(args.csv))
        print(f"Loaded: {args.csv}")
    else:
        plan = SweepPlan(
            depths=tuple(args.depths),
            positions=args.positions,
            seed=args.seed,
            scorer=args.scorer,
            with_minimax=not args.no_minimax,
        )
        df = run_sweep(plan)
        if args.save:
            print(f"Saved sweep to: {save_sweep(df, Path(args.save))}")

    summary = by_depth(df)
    print("\n=== Search cost by depth ===")
    print(summary.to_string(index=False, float_format=lambda v: f"{v:,.2f}"))

    bad = disagreements(df)
    if not bad.empty:
        print(f"\n{len(bad)} positions where pruning changed the move:")
        print(bad[["position", "depth", "column", "minimax_column"]].to_string(index=False))

    if not args.no_plots:
        outdir = Path(args.outdir)
        plot_nodes_by_depth(summary, outdir, show=args.show)
        plot_prune_ratio(summary, outdir, show=args.show)
        if not args.show:
            print(f"\nSaved figures to: {outdir.resolve()}")

    return 0 if bad.empty else 1


if __name__ == "__main__":
    raise SystemExit(main())
