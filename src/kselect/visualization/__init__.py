"""Visualization utilities for validation results."""

from .plot_cascade import (
    plot_cascade,
    plot_clusters_2d,
    CascadeChartSink
)

__all__ = [
    'plot_cascade',
    'plot_clusters_2d',
    'CascadeChartSink'
]
