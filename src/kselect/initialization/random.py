"""
Random initialization: K distinct rows of the data, drawn uniformly.
"""

from typing import List, Optional
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation


class RandomInit(InitializationStrategy):
    """Seeds every centroid on a different data point, chosen without replacement."""

    def __init__(self, metric: Optional[DistanceMetric] = None):
        self.metric = metric

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        n_points = points.shape[0]
        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        # The permutation is drawn on the generator's (CPU) device
        rows = torch.randperm(n_points, generator=generator)[:n_clusters].tolist()
        return [CentroidRepresentation.at(points[i], self.metric) for i in rows]
