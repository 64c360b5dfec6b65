"""
Euclidean distance metric.

The default metric for k-means clustering and silhouette evaluation.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class EuclideanDistance(DistanceMetric):
    """Euclidean (L2) distance.

    Computes ||x - y|| for every pair of rows in O(n * m) memory, whatever
    the number of features.
    """

    name = "euclidean"

    def __init__(self, squared: bool = False):
        """
        Args:
            squared: If True, return squared distances.
                    Silhouette evaluation expects the default (False).
        """
        self.squared = squared

    def pairwise(self, X: Tensor, Y: Optional[Tensor] = None) -> Tensor:
        """Compute Euclidean distances between rows of X and Y.

        Args:
            X: (n, d) first set of points
            Y: (m, d) second set of points (if None, uses X)

        Returns:
            (n, m) distance matrix
        """
        if Y is None:
            Y = X

        # Per-pair differences: d(x, x) is exactly zero and equal distances tie exactly
        distances = torch.cdist(X, Y, p=2.0, compute_mode='donot_use_mm_for_euclid_dist')

        if self.squared:
            return distances * distances
        return distances

    def __repr__(self) -> str:
        return f"EuclideanDistance(squared={self.squared})"
