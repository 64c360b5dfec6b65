"""
Centroid representation for k-means clustering.

A cluster is a single centre point, reached through the metric the algorithm
was configured with. Euclidean clusters move to the mean of their members,
Manhattan clusters to the coordinate-wise median.
"""

from typing import Dict, Optional
import torch
from torch import Tensor

from ..base.interfaces import ClusterRepresentation, DistanceMetric
from ..distances.euclidean import EuclideanDistance

CENTERS = ('mean', 'median')


class CentroidRepresentation(ClusterRepresentation):
    """Cluster represented by a single centroid point.

    Attributes:
        metric: Distance from points to the centroid
        mean: (d,) centre; named after the Euclidean case but holds the
            median for Manhattan clusters
    """

    def __init__(self, dimension: int, device: torch.device,
                 metric: Optional[DistanceMetric] = None):
        """
        Args:
            dimension: Ambient dimension d of the data
            device: Torch device for tensor allocation
            metric: Distance from points to the centroid (Euclidean if None)
        """
        self._dimension = dimension
        self._device = device
        self._mean = torch.zeros(dimension, device=device)
        self.metric = metric if metric is not None else EuclideanDistance()

    @classmethod
    def at(cls, point: Tensor, metric: Optional[DistanceMetric] = None) -> 'CentroidRepresentation':
        """Centroid placed on a copy of ``point``."""
        rep = cls(point.shape[0], point.device, metric)
        rep.mean = point.clone()
        return rep

    @property
    def dimension(self) -> int:
        return self._dimension

    @property
    def device(self) -> torch.device:
        return self._device

    @property
    def mean(self) -> Tensor:
        """Cluster centre."""
        return self._mean

    @mean.setter
    def mean(self, value: Tensor):
        if value.shape != (self._dimension,):
            raise ValueError(f"Centre must have shape ({self._dimension},), "
                             f"got {tuple(value.shape)}")
        self._mean = value.to(self._device)

    def distance_to_point(self, points: Tensor, indices: Optional[Tensor] = None) -> Tensor:
        """(n,) distances from ``points`` to the centroid under ``self.metric``."""
        if points.dim() != 2 or points.shape[1] != self._dimension:
            raise ValueError(f"Expected (n, {self._dimension}) points, "
                             f"got {tuple(points.shape)}")
        return self.metric.pairwise(points, self._mean.unsqueeze(0)).squeeze(1)

    def update_from_points(self, points: Tensor, weights: Optional[Tensor] = None,
                           center: str = 'mean', **kwargs) -> None:
        """Move the centroid to the centre of its assigned points.

        An empty ``points`` leaves the centroid where it is.

        Args:
            points: (n, d) tensor of assigned points
            weights: Optional (n,) weights, used by the mean only
            center: 'mean' or 'median'
        """
        if center not in CENTERS:
            raise ValueError(f"center must be one of {CENTERS}, got {center!r}")
        if len(points) == 0:
            return

        if center == 'median':
            # Lower middle value for even counts
            self._mean = points.median(dim=0).values
        elif weights is None:
            self._mean = points.mean(dim=0)
        else:
            weights = weights.to(self._device)
            total_weight = weights.sum()
            if total_weight > 0:
                self._mean = (points * (weights / total_weight).unsqueeze(1)).sum(dim=0)

    def get_parameters(self) -> Dict[str, Tensor]:
        return {'mean': self._mean.clone()}

    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        if 'mean' in params:
            self.mean = params['mean']

    def to(self, device: torch.device) -> 'CentroidRepresentation':
        moved = CentroidRepresentation(self._dimension, device, self.metric)
        moved.mean = self._mean
        return moved

    def __repr__(self) -> str:
        return (f"CentroidRepresentation(dimension={self._dimension}, "
                f"metric={self.metric.name}, mean={self._mean.tolist()})")
