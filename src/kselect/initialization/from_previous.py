"""
Initialization from custom centers.

Useful for warm starts or when you have good initial guesses.
"""

from typing import List, Optional, Union
import torch
from torch import Tensor

from ..base.interfaces import InitializationStrategy, ClusterRepresentation, DistanceMetric
from ..representations.centroid import CentroidRepresentation
from ..base.data_structures import ClusterState


class FromPreviousInit(InitializationStrategy):
    """Initialize from given cluster centers.

    Accepts either:
    - A tensor of shape (n_clusters, dimension) with initial centers
    - A ClusterState object from a previous run
    """

    def __init__(self, initial_state: Union[Tensor, ClusterState],
                 metric: Optional[DistanceMetric] = None):
        """
        Args:
            initial_state: Previous solution to use for initialization
            metric: Distance carried by the created centroids
        """
        self.initial_state = initial_state
        self.metric = metric

    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> List[ClusterRepresentation]:
        """Initialize from the stored centers.

        Args:
            points: (n, d) data points (used for validation)
            n_clusters: Expected number of clusters

        Returns:
            List of initialized representations
        """
        dimension = points.shape[1]
        device = points.device

        if isinstance(self.initial_state, ClusterState):
            centers = self.initial_state.means
        elif isinstance(self.initial_state, Tensor):
            centers = self.initial_state
        else:
            raise TypeError(f"Unknown initial_state type: {type(self.initial_state)}")

        centers = centers.to(device=device, dtype=points.dtype)

        if centers.shape[0] != n_clusters:
            raise ValueError(f"Initial centers has {centers.shape[0]} clusters, "
                             f"but n_clusters={n_clusters}")
        if centers.shape[1] != dimension:
            raise ValueError(f"Initial centers has dimension {centers.shape[1]}, "
                             f"but data has dimension {dimension}")

        return [CentroidRepresentation.at(center, self.metric) for center in centers]
