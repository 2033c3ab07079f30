from .chart import (
    plot_nodes_by_depth,
    plot_prune_ratio,
)

__all__ = [
    "plot_nodes_by_depth",
    "plot_prune_ratio",
]
