"""
Manhattan (city-block) distance metric.
"""

from typing import Optional
import torch
from torch import Tensor

from ..base.interfaces import DistanceMetric


class ManhattanDistance(DistanceMetric):
    """Manhattan (L1) distance: sum_i |x_i - y_i|.

    k-means under this metric updates centroids with the coordinate-wise
    median, which minimises the summed L1 distance.
    """

    name = "manhattan"

    def pairwise(self, X: Tensor, Y: Optional[Tensor] = None) -> Tensor:
        """Compute Manhattan distances between rows of X and Y.

        Args:
            X: (n, d) first set of points
            Y: (m, d) second set of points (if None, uses X)

        Returns:
            (n, m) distance matrix, built without an (n, m, d) intermediate
        """
        if Y is None:
            Y = X
        return torch.cdist(X, Y, p=1.0)
