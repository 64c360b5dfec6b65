"""
K-means clustering algorithm.

The clusterer whose output the validation indices score. Implemented on the
modular framework with a pluggable distance: Euclidean centroids are means,
Manhattan centroids are coordinate-wise medians.
"""

from typing import Optional, List, Union
import torch
from torch import Tensor

from ..base.clustering_base import BaseClusteringAlgorithm
from ..base.interfaces import ClusterRepresentation, ClusteringObjective, DistanceMetric
from ..assignments.hard import HardAssignment
from ..distances import get_distance
from ..distances.manhattan import ManhattanDistance
from ..exceptions import InvalidInputError
from ..initialization import INITIALIZERS, FromPreviousInit
from ..utils.convergence import ChangeInAssignments
from ..updates import updater_for


class KMeansObjective(ClusteringObjective):
    """K-means objective: sum of distances from points to their centroids.

    Squared distances for Euclidean, plain distances for Manhattan; each is
    what the matching centre update minimises.
    """

    def compute(self, points: Tensor, representations: List[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute within-cluster cost."""
        total = torch.tensor(0.0, device=points.device)

        for k, rep in enumerate(representations):
            cluster_points_mask = (assignments == k)
            if cluster_points_mask.any():
                distances = rep.distance_to_point(points[cluster_points_mask])
                if not isinstance(rep.metric, ManhattanDistance):
                    distances = distances * distances
                total = total + distances.sum()

        return total

    @property
    def minimize(self) -> bool:
        return True


class KMeans(BaseClusteringAlgorithm):
    """K-means clustering algorithm.

    Partitions data into K clusters by alternating nearest-centroid
    assignment and centroid updates.

    Parameters
    ----------
    n_clusters : int
        Number of clusters
    init : str or array-like, default='random'
        Initialization method:
        - 'random' : K distinct data points
        - 'k-means++' : K-means++ seeding
        - 'farthest-first' : farthest-first traversal
        - array of shape (n_clusters, n_features) : Use as initial centers
    distance : str or DistanceMetric, default='euclidean'
        'euclidean' or 'manhattan'
    max_iter : int, default=500
        Maximum number of iterations
    tol : float, default=1e-4
        Convergence tolerance based on change in assignments
    verbose : int, default=0
        Verbosity level
    random_state : int, default=10
        Random seed for reproducibility
    device : torch.device, optional
        Device for computation

    Attributes
    ----------
    cluster_centers_ : Tensor of shape (n_clusters, n_features)
        Cluster centroids
    labels_ : Tensor of shape (n_samples,)
        Cluster assignments for training data
    inertia_ : float
        Final objective value
    n_iter_ : int
        Number of iterations run
    """

    def __init__(self,
                 n_clusters: int,
                 init: Union[str, Tensor, list] = 'random',
                 distance: Union[str, DistanceMetric] = 'euclidean',
                 max_iter: int = 500,
                 tol: float = 1e-4,
                 verbose: int = 0,
                 random_state: Optional[int] = 10,
                 device: Optional[torch.device] = None):
        """Initialize K-means algorithm."""
        super().__init__(
            n_clusters=n_clusters,
            max_iter=max_iter,
            tol=tol,
            verbose=verbose,
            random_state=random_state,
            device=device
        )
        self.metric = get_distance(distance)
        if isinstance(init, str) and init not in INITIALIZERS:
            raise InvalidInputError(
                f"unknown init method {init!r}; expected one of {sorted(INITIALIZERS)}"
            )
        self.init = init

    def _create_components(self) -> None:
        """Create K-means specific components."""
        self.assignment_strategy = HardAssignment()

        self.update_strategy = updater_for(self.metric)

        if isinstance(self.init, str):
            self.initialization_strategy = INITIALIZERS[self.init](metric=self.metric)
        else:
            centers = torch.as_tensor(self.init, dtype=torch.float32, device=self.device)
            self.initialization_strategy = FromPreviousInit(centers, metric=self.metric)

        self.convergence_criterion = ChangeInAssignments(min_change_fraction=self.tol)
        self.objective = KMeansObjective()

    def score(self, X: Tensor, y: Optional[Tensor] = None) -> float:
        """Opposite of the value of X on the K-means objective.

        Parameters
        ----------
        X : Tensor of shape (n_samples, n_features)
            New data

        Returns
        -------
        score : float
            Negative within-cluster cost
        """
        labels = self.predict(X)
        X = self._validate_data(X)
        return -self.objective.compute(X, self.representations, labels).item()

    def get_params(self, deep: bool = True):
        params = super().get_params(deep)
        params.update({'init': self.init, 'distance': self.metric.name})
        return params

    def __repr__(self) -> str:
        init = self.init if isinstance(self.init, str) else 'array'
        return (f"KMeans(n_clusters={self.n_clusters}, init={init!r}, "
                f"distance={self.metric.name!r}, max_iter={self.max_iter}, "
                f"random_state={self.random_state})")
