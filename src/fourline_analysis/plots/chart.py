from __future__ import annotations

from pathlib import Path

import pandas as pd
import matplotlib.pyplot as plt


def _finish(fig, outdir: Path, filename: str, *, show: bool) -> Path | None:
    if show:
        plt.show()
        plt.close(fig)
        return None

    outdir.mkdir(parents=True, exist_ok=True)
    path = outdir / filename
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path


def plot_nodes_by_depth(summary: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    """Mean nodes visited per depth, pruned vs unpruned, on a log scale."""
    fig, ax = plt.subplots()
    ax.plot(summary["depth"], summary["nodes_mean"], marker="o", label="alpha-beta")
    if summary["minimax_nodes_mean"].notna().any():
        ax.plot(summary["depth"], summary["minimax_nodes_mean"], marker="s", linestyle="--", label="minimax")
    ax.set_yscale("log")
    ax.set_xlabel("depth (plies)")
    ax.set_ylabel("nodes per move (mean)")
    ax.set_title("Search tree size by depth")
    ax.legend()
    return _finish(fig, outdir, "nodes_by_depth.png", show=show)


def plot_prune_ratio(summary: pd.DataFrame, outdir: Path, *, show: bool) -> Path | None:
    if not summary["prune_ratio"].notna().any():
        return None

    fig, ax = plt.subplots()
    ax.bar(summary["depth"].astype(str), summary["prune_ratio"])
    ax.set_ylim(0, 1)
    ax.set_xlabel("depth (plies)")
    ax.set_ylabel("share of tree pruned")
    ax.set_title("Alpha-beta pruning by depth")
    return _finish(fig, outdir, "prune_ratio_by_depth.png", show=show)
