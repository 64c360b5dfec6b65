"""
Nearest-centroid assignment.
"""

from typing import List
import torch
from torch import Tensor

from ..base.interfaces import AssignmentStrategy, ClusterRepresentation


class HardAssignment(AssignmentStrategy):
    """Each point goes to the cluster whose centroid is closest.

    Distances are taken with the metric of the first representation; every
    centroid of one model shares it. Ties go to the lowest cluster index.
    """

    def compute_assignments(self, points: Tensor,
                            representations: List[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """(n,) cluster index of every point."""
        if not representations:
            raise ValueError("No cluster representations to assign points to")
        centers = torch.stack([rep.mean for rep in representations]).to(points.dtype)
        distances = representations[0].metric.pairwise(points, centers)
        return torch.argmin(distances, dim=1)
