"""
Visualization of validation results.

Line chart of mean silhouette against K for cascade scans, and a 2D scatter
of a clustering with per-cluster silhouettes in the legend.
"""

from typing import Optional, Union, Sequence, Tuple, List
import torch
from torch import Tensor
import matplotlib.pyplot as plt
import numpy as np

from ..base.data_structures import CascadeOutcome, SilhouetteResult


def _as_pairs(data: Union[CascadeOutcome, Sequence[Tuple[int, float]]]) -> List[Tuple[int, float]]:
    if isinstance(data, CascadeOutcome):
        return data.scores()
    return [(int(k), float(s)) for k, s in data]


def plot_cascade(data: Union[CascadeOutcome, Sequence[Tuple[int, float]]],
                 ax: Optional[plt.Axes] = None,
                 best_k: Optional[int] = None,
                 title: Optional[str] = "Silhouette Index",
                 subtitle: Optional[str] = None,
                 xlabel: str = "k",
                 ylabel: str = "Mean silhouette",
                 color: str = "blue") -> plt.Axes:
    """Plot mean silhouette per K.

    Args:
        data: CascadeOutcome or (k, mean silhouette) pairs
        ax: Matplotlib axes (created if None)
        best_k: K to highlight (taken from the outcome if omitted)
        title: Plot title
        subtitle: Optional second title line
        xlabel: X axis label
        ylabel: Y axis label
        color: Line color

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(6, 4.5))

    pairs = _as_pairs(data)
    if best_k is None and isinstance(data, CascadeOutcome):
        best_k = data.best_k

    ks = [k for k, _ in pairs]
    scores = [s for _, s in pairs]

    ax.plot(ks, scores, color=color, marker='o', linewidth=1.5, label='mean silhouette')

    if best_k is not None and best_k in ks:
        best_score = scores[ks.index(best_k)]
        ax.scatter([best_k], [best_score], s=160, facecolors='none',
                   edgecolors='red', linewidth=2, zorder=10, label=f'best k={best_k}')
        ax.legend()

    ax.set_xticks(ks)
    ax.set_xlabel(xlabel)
    ax.set_ylabel(ylabel)
    ax.set_facecolor('lightgray')
    ax.grid(True, axis='y', color='white')

    if title and subtitle:
        ax.set_title(f"{title}\n{subtitle}")
    elif title or subtitle:
        ax.set_title(title or subtitle)

    return ax


class CascadeChartSink:
    """Result sink that records (k, mean silhouette) and plots on demand.

    Pass an instance as ``sink=`` to ``CascadeSearch`` or ``ValidatedKMeans``.
    """

    def __init__(self):
        self.pairs: List[Tuple[int, float]] = []

    def __call__(self, k: int, result: SilhouetteResult) -> None:
        self.pairs.append((k, result.global_score))

    def plot(self, ax: Optional[plt.Axes] = None, **kwargs) -> plt.Axes:
        return plot_cascade(self.pairs, ax=ax, **kwargs)


def plot_clusters_2d(X: Tensor,
                     labels: Tensor,
                     centers: Optional[Tensor] = None,
                     result: Optional[SilhouetteResult] = None,
                     ax: Optional[plt.Axes] = None,
                     alpha: float = 0.7,
                     center_marker: str = 'X',
                     center_size: int = 200,
                     point_size: int = 50,
                     show_legend: bool = True,
                     title: Optional[str] = None) -> plt.Axes:
    """Plot 2D clustering results.

    Args:
        X: (n, 2) data points
        labels: (n,) cluster labels
        centers: Optional (k, 2) cluster centers
        result: Optional silhouette evaluation shown in legend and title
        ax: Matplotlib axes (created if None)
        alpha: Point transparency
        center_marker: Marker for centers
        center_size: Size of center markers
        point_size: Size of data points
        show_legend: Whether to show legend
        title: Plot title

    Returns:
        Matplotlib axes
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    X_np = torch.as_tensor(X).detach().cpu().numpy()
    labels_np = torch.as_tensor(labels).detach().cpu().numpy()

    unique_labels = np.unique(labels_np)
    n_clusters = len(unique_labels)
    cmap = plt.get_cmap('tab10' if n_clusters <= 10 else 'tab20')

    for i, label in enumerate(unique_labels):
        mask = labels_np == label
        name = f'Cluster {label}'
        if result is not None and label < result.n_clusters:
            name += f' (s={result.cluster_scores[label]:.3f})'
        ax.scatter(X_np[mask, 0], X_np[mask, 1],
                   color=cmap(i % cmap.N),
                   s=point_size,
                   alpha=alpha,
                   edgecolors='black',
                   linewidth=0.5,
                   label=name)

    if centers is not None:
        centers_np = torch.as_tensor(centers).detach().cpu().numpy()
        ax.scatter(centers_np[:, 0], centers_np[:, 1],
                   c='black',
                   marker=center_marker,
                   s=center_size,
                   edgecolors='white',
                   linewidth=2,
                   label='Centers',
                   zorder=10)

    ax.set_xlabel('Feature 1')
    ax.set_ylabel('Feature 2')

    if title is None and result is not None:
        title = f'Mean silhouette {result.global_score:.3f} ({result.verdict})'
    if title:
        ax.set_title(title)

    if show_legend:
        ax.legend()

    return ax
