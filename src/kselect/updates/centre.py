"""
Centre updates for centroid-based clustering.

The centre that minimises the k-means cost depends on the metric: the mean
for squared Euclidean distance, the coordinate-wise median for Manhattan.
"""

from typing import Optional
from torch import Tensor

from ..base.interfaces import ParameterUpdater, ClusterRepresentation, DistanceMetric
from ..distances.manhattan import ManhattanDistance


class CentreUpdater(ParameterUpdater):
    """Moves a centroid to a location statistic of its assigned points."""

    center = 'mean'

    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               assignment_weights: Optional[Tensor] = None,
               **kwargs) -> None:
        weights = assignment_weights if self.center == 'mean' else None
        representation.update_from_points(points, weights=weights, center=self.center)


class MeanUpdater(CentreUpdater):
    """Arithmetic (optionally weighted) mean of the assigned points."""

    center = 'mean'


class MedianUpdater(CentreUpdater):
    """Coordinate-wise median of the assigned points."""

    center = 'median'


def updater_for(metric: DistanceMetric) -> CentreUpdater:
    """Centre update matching ``metric``."""
    if isinstance(metric, ManhattanDistance):
        return MedianUpdater()
    return MeanUpdater()
