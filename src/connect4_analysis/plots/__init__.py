from .chart import (
    plot_histograms,
    plot_metric_over_ply,
    plot_scatter,
)

__all__ = [
    "plot_histograms",
    "plot_metric_over_ply",
    "plot_scatter",
]
