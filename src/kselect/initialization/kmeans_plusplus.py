"""
K-means++ initialization strategy.

Selects initial cluster centers using the K-means++ algorithm, which chooses
centers that are far apart to improve convergence speed and quality.
"""

from typing import List, Optional
import math
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation
from ..distances.euclidean import EuclideanDistance


class KMeansPlusPlusInit(InitializationStrategy):
    """K-means++ initialization for better starting positions.

    Algorithm:
    1. Choose first center uniformly at random
    2. For each remaining center:
       - Compute distance from each point to nearest existing center
       - Choose next center with probability proportional to squared distance
    """

    def __init__(self, metric: Optional[DistanceMetric] = None,
                 n_local_trials: Optional[int] = None):
        """
        Args:
            metric: Distance used for seeding (Euclidean if None)
            n_local_trials: Number of candidates to try for each center.
                           If None, uses 2 + log(k) as in sklearn
        """
        self.metric = metric
        self.n_local_trials = n_local_trials

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize cluster centers using K-means++.

        Args:
            points: (n, d) data points
            n_clusters: Number of clusters
            generator: Source of randomness

        Returns:
            List of initialized CentroidRepresentations
        """
        n_points = points.shape[0]
        metric = self.metric if self.metric is not None else EuclideanDistance()

        if n_clusters > n_points:
            raise ValueError(f"Cannot create {n_clusters} clusters from {n_points} points")

        if self.n_local_trials is None:
            n_local_trials = 2 + int(math.log(n_clusters))
        else:
            n_local_trials = self.n_local_trials

        def sq_dist_to(idx: int) -> Tensor:
            return metric.pairwise(points, points[idx].unsqueeze(0)).squeeze(1) ** 2

        first_idx = torch.randint(n_points, (1,), generator=generator).item()
        center_indices = [first_idx]
        distances = sq_dist_to(first_idx)

        for _ in range(1, n_clusters):
            total = distances.sum()
            if total <= 0:
                # Every point coincides with a chosen center; fall back to uniform
                probabilities = torch.ones(n_points)
            else:
                probabilities = (distances / total).cpu()

            candidates_idx = torch.multinomial(probabilities, n_local_trials,
                                               replacement=True, generator=generator)

            # Keep the candidate that leaves the smallest potential
            best_potential = float('inf')
            best_candidate = None
            best_distances = None
            for idx in candidates_idx.tolist():
                new_distances = torch.minimum(distances, sq_dist_to(idx))
                potential = new_distances.sum().item()
                if potential < best_potential:
                    best_potential = potential
                    best_candidate = idx
                    best_distances = new_distances

            center_indices.append(best_candidate)
            distances = best_distances

        return [CentroidRepresentation.at(points[i], self.metric) for i in center_indices]
