"""
Farthest-first initialization.

Deterministic after the first pick: each further center is the point farthest
from every center chosen so far (Hochbaum & Shmoys traversal).
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation
from ..distances.euclidean import EuclideanDistance


class FarthestFirstInit(InitializationStrategy):
    """Farthest-first traversal seeding."""

    def __init__(self, metric: Optional[DistanceMetric] = None):
        self.metric = metric

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize clusters by farthest-first traversal.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Source of randomness for the first center

        Returns:
            List of initialized CentroidRepresentations
        """
        n_points = points.shape[0]
        metric = self.metric if self.metric is not None else EuclideanDistance()

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        first_idx = torch.randint(n_points, (1,), generator=generator).item()
        center_indices = [first_idx]
        nearest = metric.pairwise(points, points[first_idx].unsqueeze(0)).squeeze(1)

        for _ in range(1, n_clusters):
            # argmin/argmax return the first extreme index, so ties are stable
            idx = torch.argmax(nearest).item()
            center_indices.append(idx)
            nearest = torch.minimum(
                nearest, metric.pairwise(points, points[idx].unsqueeze(0)).squeeze(1)
            )

        return [CentroidRepresentation.at(points[i], self.metric) for i in center_indices]
