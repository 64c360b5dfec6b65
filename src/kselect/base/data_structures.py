"""
Core data structures for kselect.

Holds the per-iteration state of the k-means loop (assignments, centroids)
and the immutable results produced by cluster validation: one
``SilhouetteResult`` per evaluation and one ``CascadeOutcome`` per scan over
candidate cluster counts.
"""

from typing import Optional, List, Tuple, Dict, Any
import math
import torch
from torch import Tensor
from dataclasses import dataclass, field

from ..exceptions import InvalidInputError


@dataclass
class ClusterState:
    """Cluster centres at a given iteration."""

    means: Tensor  # (K, d) cluster centres
    n_clusters: int
    dimension: int

    def __post_init__(self):
        if tuple(self.means.shape) != (self.n_clusters, self.dimension):
            raise InvalidInputError(
                f"cluster state: means have shape {tuple(self.means.shape)}, "
                f"expected ({self.n_clusters}, {self.dimension})")


class AssignmentMatrix:
    """Hard cluster assignments with per-cluster lookups.

    Wraps an (n,) tensor of cluster indices and answers the questions the
    update step and the evaluators ask of it: which points belong to cluster k
    and how many points each cluster holds.
    """

    def __init__(self, assignments: Tensor, n_clusters: int):
        """
        Args:
            assignments: (n,) hard assignments in [0, n_clusters)
            n_clusters: Number of clusters K
        """
        self.n_clusters = n_clusters
        if assignments.dim() != 1:
            raise ValueError(f"Expected 1D assignments, got {assignments.dim()}D")
        if assignments.numel() > 0:
            if assignments.min() < 0 or assignments.max() >= n_clusters:
                raise ValueError(f"Assignments must lie in [0, {n_clusters})")
        self._assignments = assignments.long()

    def get_hard(self) -> Tensor:
        """(n,) tensor of cluster indices."""
        return self._assignments

    def get_cluster_indices(self, cluster_idx: int) -> Tensor:
        """Indices of points assigned to a specific cluster, in dataset order."""
        return torch.where(self._assignments == cluster_idx)[0]

    def partition(self) -> List[Tensor]:
        """Point indices for every cluster, indexed by cluster."""
        return [self.get_cluster_indices(k) for k in range(self.n_clusters)]

    def count_per_cluster(self) -> Tensor:
        """Count points per cluster."""
        return torch.bincount(self._assignments, minlength=self.n_clusters)


@dataclass
class AlgorithmState:
    """State of the clustering loop at a given iteration."""
    iteration: int
    cluster_state: ClusterState
    assignments: AssignmentMatrix
    objective_value: float


@dataclass(frozen=True)
class SilhouetteResult:
    """Silhouette scores of one clustering.

    ``global_score`` is the mean of ``cluster_scores`` (a mean of per-cluster
    means), not the mean over every point.
    """

    cluster_scores: Tuple[float, ...]
    global_score: float
    cluster_sizes: Tuple[int, ...]
    # (n,) per-point s(p), in dataset order
    sample_scores: Optional[Tensor] = field(default=None, compare=False, repr=False)

    @property
    def n_clusters(self) -> int:
        return len(self.cluster_scores)

    @property
    def verdict(self) -> str:
        """Qualitative reading of the global score."""
        from ..evaluation.silhouette import silhouette_verdict
        return silhouette_verdict(self.global_score)

    @property
    def cluster_verdicts(self) -> Tuple[str, ...]:
        from ..evaluation.silhouette import silhouette_verdict
        return tuple(silhouette_verdict(s) for s in self.cluster_scores)

    def as_dict(self) -> Dict[str, Any]:
        return {
            'cluster_scores': list(self.cluster_scores),
            'global_score': self.global_score,
            'cluster_sizes': list(self.cluster_sizes),
            'verdict': self.verdict,
        }


@dataclass(frozen=True)
class CascadeEntry:
    """Outcome of one candidate K in a cascade scan.

    ``result`` is None when the K was skipped because a cluster degenerated;
    ``error`` then holds the reason.
    """

    k: int
    result: Optional[SilhouetteResult]
    error: Optional[str] = None

    @property
    def valid(self) -> bool:
        return self.result is not None

    @property
    def score(self) -> float:
        return self.result.global_score if self.result is not None else math.nan


@dataclass(frozen=True)
class CascadeOutcome:
    """Every evaluated K, the selected K and the model re-fitted at it.

    ``best_k`` and ``model`` are None when no K scored above zero.
    """

    entries: Tuple[CascadeEntry, ...]
    best_k: Optional[int]
    best_score: float
    model: Any = field(default=None, compare=False, repr=False)

    @property
    def found(self) -> bool:
        return self.best_k is not None

    @property
    def results(self) -> List[Tuple[int, Optional[SilhouetteResult]]]:
        """(k, result) for every K in ascending order, skipped ones included."""
        return [(e.k, e.result) for e in self.entries]

    @property
    def k_values(self) -> List[int]:
        return [e.k for e in self.entries]

    def scores(self) -> List[Tuple[int, float]]:
        """(k, mean silhouette) pairs for the K values that were scored."""
        return [(e.k, e.result.global_score) for e in self.entries if e.valid]

    def result_for(self, k: int) -> Optional[SilhouetteResult]:
        for entry in self.entries:
            if entry.k == k:
                return entry.result
        raise KeyError(f"k={k} was not part of this cascade")
