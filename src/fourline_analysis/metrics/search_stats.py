from __future__ import annotations

import pandas as pd


def with_ratios(df: pd.DataFrame) -> pd.DataFrame:
    """
    Per-row derived columns:
      prune_ratio   share of the unpruned tree the alpha-beta search skipped
      branching     effective branching factor, nodes ** (1 / depth)
      agrees        pruned and unpruned searches picked the same column
    """
    out = df.copy()
    depth = out["depth"].clip(lower=1)
    out["branching"] = out["nodes"] ** (1.0 / depth)

    if "minimax_nodes" in out.columns and out["minimax_nodes"].notna().any():
        out["prune_ratio"] = 1.0 - out["nodes"] / out["minimax_nodes"]
        out["agrees"] = out["column"] == out["minimax_column"]
    else:
        out["prune_ratio"] = float("nan")
        out["agrees"] = pd.NA

    return out


def by_depth(df: pd.DataFrame) -> pd.DataFrame:
    """Search cost per horizon depth, averaged over positions."""
    rows = with_ratios(df)
    grouped = rows.groupby("depth", sort=True)

    summary = grouped.agg(
        positions=("position", "nunique"),
        nodes_mean=("nodes", "mean"),
        nodes_max=("nodes", "max"),
        cutoffs_mean=("cutoffs", "mean"),
        time_ms_mean=("time_ms", "mean"),
        branching=("branching", "mean"),
        minimax_nodes_mean=("minimax_nodes", "mean"),
    )

    # Ratio of totals, so big trees weigh more than tiny ones
    totals = grouped[["nodes", "minimax_nodes"]].sum(min_count=1)
    summary["prune_ratio"] = 1.0 - totals["nodes"] / totals["minimax_nodes"]
    summary["agreement"] = grouped["agrees"].apply(
        lambda s: s.dropna().astype(bool).mean() if s.notna().any() else float("nan")
    )

    return summary.reset_index()


def disagreements(df: pd.DataFrame) -> pd.DataFrame:
    """Rows where pruning changed the chosen column. Should always be empty."""
    rows = with_ratios(df)
    mask = rows["agrees"].notna() & ~rows["agrees"].fillna(True).astype(bool)
    return rows[mask].reset_index(drop=True)
