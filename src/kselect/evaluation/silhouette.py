"""
Silhouette Index for partitional clusterings.

For a point p in cluster i:

    a(p) = sum of distances from p to the other members of i, / (|P_i| - 1)
    j    = the centroid index != i nearest to p (lowest index on ties)
    b(p) = mean distance from p to the members of cluster j
    s(p) = (b(p) - a(p)) / max(a(p), b(p))      (0 when both are 0)

The score of cluster i is sum(s(p)) / (|P_i| - 1) and the global score is the
mean over clusters. Neither matches the per-point mean scikit-learn reports:
small clusters are weighted up, and a cluster score can exceed 1.

Clusters with fewer than two members raise ``DegenerateClusterError``; K=1 is
rejected with ``InvalidInputError`` because no foreign cluster exists.
"""

from typing import Any, Callable, List, Optional, Union
import math
import torch
from torch import Tensor

from ..base.data_structures import AssignmentMatrix, SilhouetteResult
from ..base.interfaces import ClusterEvaluator, DistanceMetric
from ..distances import get_distance
from ..exceptions import (
    CascadeCancelledError, DegenerateClusterError, InvalidInputError
)
from ..utils.validation import validate_data

# Verdict bands, upper bound inclusive except the top band
STRONG = 0.70
REASONABLE = 0.50
WEAK = 0.25


def silhouette_verdict(s: float) -> str:
    """Qualitative reading of a silhouette value."""
    if s > STRONG:
        return "strong structure"
    elif s > REASONABLE:
        return "reasonable structure"
    elif s > WEAK:
        return "weak structure"
    return "no substantial structure"


class SilhouetteIndex(ClusterEvaluator):
    """Silhouette Index evaluator.

    Stateless: every call builds and returns a fresh ``SilhouetteResult``.
    Computation runs in float64 on the data's device; for each cluster only
    its own (n_i, n_i) distance block and the blocks towards the nearest
    foreign clusters are materialised.

    Example:
        >>> model = KMeans(n_clusters=3).fit(X)
        >>> result = SilhouetteIndex().evaluate(
        ...     model, model.cluster_centers_, X, EuclideanDistance(), labels=model.labels_)
        >>> result.global_score, result.verdict
    """

    name = "silhouette"

    def evaluate(self, clusterer: Any, centroids: Tensor, X: Tensor,
                 distance: Union[str, DistanceMetric],
                 labels: Optional[Tensor] = None,
                 should_stop: Optional[Callable[[], bool]] = None) -> SilhouetteResult:
        """Compute per-cluster and global silhouette scores.

        Args:
            clusterer: Fitted model exposing ``predict``; queried once for the
                assignments of X unless ``labels`` is given
            centroids: (K, d) cluster centres, row k is cluster k
            X: (n, d) dataset that was clustered
            distance: Metric (or its name) used for every comparison
            labels: Optional (n,) assignments of X, e.g. ``model.labels_``
            should_stop: Optional probe polled between clusters

        Returns:
            SilhouetteResult

        Raises:
            InvalidInputError: Missing clusterer/data/centroids, K < 2, or
                assignments that do not match the centroids
            DegenerateClusterError: A cluster with 0 or 1 members
            CascadeCancelledError: ``should_stop`` returned True
        """
        if clusterer is None:
            raise InvalidInputError("silhouette: the clusterer is missing")
        X = validate_data(X, dtype=torch.float64, device=None)
        metric = get_distance(distance)

        if centroids is None:
            raise InvalidInputError("silhouette: the centroids are missing")
        centroids = torch.as_tensor(centroids).to(dtype=torch.float64, device=X.device)
        if centroids.dim() != 2 or centroids.shape[0] == 0:
            raise InvalidInputError("silhouette: the centroid set is empty")
        if centroids.shape[1] != X.shape[1]:
            raise InvalidInputError(
                f"silhouette: centroids have dimension {centroids.shape[1]}, "
                f"data has dimension {X.shape[1]}")

        n_clusters = centroids.shape[0]
        if n_clusters < 2:
            raise InvalidInputError(
                "silhouette: at least 2 clusters are required, "
                "a single cluster has no foreign cluster to compare against")

        assignment = self._assign(clusterer, X, labels, n_clusters)
        members = assignment.partition()

        for k, idx in enumerate(members):
            if len(idx) < 2:
                raise DegenerateClusterError(k, len(idx))

        sample_scores = torch.zeros(X.shape[0], dtype=torch.float64, device=X.device)
        cluster_scores: List[float] = []

        for i, idx in enumerate(members):
            if should_stop is not None and should_stop():
                raise CascadeCancelledError("silhouette evaluation cancelled")

            points = X[idx]
            n_i = points.shape[0]

            within = metric.pairwise(points, points)
            within.fill_diagonal_(0.0)
            a = within.sum(dim=1) / (n_i - 1)

            foreign = metric.pairwise(points, centroids)
            foreign[:, i] = math.inf
            nearest = torch.argmin(foreign, dim=1)

            b = torch.empty(n_i, dtype=torch.float64, device=X.device)
            for j in torch.unique(nearest).tolist():
                rows = nearest == j
                b[rows] = metric.pairwise(points[rows], X[members[j]]).mean(dim=1)

            denom = torch.maximum(a, b)
            safe = torch.where(denom > 0, denom, torch.ones_like(denom))
            s = torch.where(denom > 0, (b - a) / safe, torch.zeros_like(denom))

            sample_scores[idx] = s
            cluster_scores.append(s.sum().item() / (n_i - 1))

        global_score = math.fsum(cluster_scores) / len(cluster_scores)

        return SilhouetteResult(
            cluster_scores=tuple(cluster_scores),
            global_score=global_score,
            cluster_sizes=tuple(len(idx) for idx in members),
            sample_scores=sample_scores
        )

    @staticmethod
    def _assign(clusterer: Any, X: Tensor, labels: Optional[Tensor],
                n_clusters: int) -> AssignmentMatrix:
        """Cluster index of every point of X, validated against K."""
        if labels is None:
            labels = clusterer.predict(X)
        labels = torch.as_tensor(labels).to(device=X.device).long().reshape(-1)

        if labels.shape[0] != X.shape[0]:
            raise InvalidInputError(
                f"silhouette: got {labels.shape[0]} assignments for {X.shape[0]} points")
        try:
            return AssignmentMatrix(labels, n_clusters)
        except ValueError as e:
            raise InvalidInputError(f"silhouette: {e}") from e


EVALUATORS = {
    'silhouette': SilhouetteIndex,
}

# Recognised names without an implementation
UNIMPLEMENTED_EVALUATORS = ('davies-bouldin',)


def get_evaluator(evaluator: Union[str, ClusterEvaluator] = 'silhouette') -> ClusterEvaluator:
    """Resolve an evaluator name or pass an instance through."""
    if isinstance(evaluator, ClusterEvaluator):
        return evaluator
    if isinstance(evaluator, str):
        key = evaluator.strip().lower()
        if key in EVALUATORS:
            return EVALUATORS[key]()
        if key in UNIMPLEMENTED_EVALUATORS:
            raise InvalidInputError(f"validation method {evaluator!r} is not implemented")
    raise InvalidInputError(
        f"unknown validation method {evaluator!r}; expected one of {sorted(EVALUATORS)}"
    )
