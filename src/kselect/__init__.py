"""
kselect: k-means cluster validation with the Silhouette Index.

This package scores partitional clusterings and searches for the number of
clusters that best fits the data:
- K-means with Euclidean or Manhattan distance
- Silhouette Index evaluation (per cluster and global)
- Cascade search over a range of K
- Text reports and matplotlib charts of the results

Example usage:
    >>> import torch
    >>> from kselect import KMeans, SilhouetteIndex, CascadeSearch
    >>>
    >>> X = torch.randn(300, 2)
    >>>
    >>> # Score one clustering
    >>> model = KMeans(n_clusters=3).fit(X)
    >>> result = SilhouetteIndex().evaluate(
    ...     model, model.cluster_centers_, X, 'euclidean', labels=model.labels_)
    >>> result.global_score, result.verdict
    >>>
    >>> # Pick K between 2 and 8
    >>> outcome = CascadeSearch().run(X, 2, 8, lambda k: KMeans(n_clusters=k))
    >>> outcome.best_k
"""

__version__ = '0.1.0'

from .exceptions import (
    KSelectError,
    InvalidInputError,
    NotFittedError,
    DegenerateClusterError,
    NoSatisfactoryKError,
    CascadeCancelledError
)

from .config import ValidationConfig

from .algorithms.kmeans import KMeans
from .algorithms.validated import ValidatedKMeans

from .distances import EuclideanDistance, ManhattanDistance, get_distance

from .evaluation import (
    SilhouetteIndex,
    silhouette_verdict,
    get_evaluator,
    CascadeSearch,
    format_silhouette_report,
    format_cascade_report
)

from .visualization import plot_cascade, plot_clusters_2d, CascadeChartSink

from .base import (
    SilhouetteResult,
    CascadeEntry,
    CascadeOutcome
)

__all__ = [
    # Algorithms
    'KMeans',
    'ValidatedKMeans',
    'ValidationConfig',

    # Distances
    'EuclideanDistance',
    'ManhattanDistance',
    'get_distance',

    # Evaluation
    'SilhouetteIndex',
    'silhouette_verdict',
    'get_evaluator',
    'CascadeSearch',
    'format_silhouette_report',
    'format_cascade_report',

    # Results
    'SilhouetteResult',
    'CascadeEntry',
    'CascadeOutcome',

    # Errors
    'KSelectError',
    'InvalidInputError',
    'NotFittedError',
    'DegenerateClusterError',
    'NoSatisfactoryKError',
    'CascadeCancelledError',

    # Visualization
    'plot_cascade',
    'plot_clusters_2d',
    'CascadeChartSink',

    # Version
    '__version__'
]
