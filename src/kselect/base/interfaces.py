"""
Core interfaces for kselect.

This module defines the abstract base classes shared by the clustering
components (representations, assignment, update, initialization, convergence)
and by the cluster-validity evaluators that score a finished clustering.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any, Callable, TYPE_CHECKING
import torch
from torch import Tensor

if TYPE_CHECKING:
    from .data_structures import SilhouetteResult


class DistanceMetric(ABC):
    """Abstract base class for point-to-point dissimilarities.

    Implementations must be symmetric and non-negative, and return zero for
    identical vectors. They are treated as read-only and may be shared across
    threads.
    """

    name: str = "distance"

    @abstractmethod
    def pairwise(self, X: Tensor, Y: Optional[Tensor] = None) -> Tensor:
        """Compute all distances between rows of X and rows of Y.

        Args:
            X: (n, d) tensor of points
            Y: (m, d) tensor of points (if None, uses X)

        Returns:
            (n, m) distance matrix
        """
        pass

    def distance(self, a: Tensor, b: Tensor) -> float:
        """Distance between two single feature vectors."""
        return self.pairwise(a.reshape(1, -1), b.reshape(1, -1))[0, 0].item()

    def __call__(self, a: Tensor, b: Tensor) -> float:
        return self.distance(a, b)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"


class ClusterRepresentation(ABC):
    """Abstract base class for cluster representations.

    For k-means a cluster is a single centroid; the distance used to reach it
    is whatever metric the algorithm was configured with.
    """

    @abstractmethod
    def distance_to_point(self, points: Tensor, indices: Optional[Tensor] = None) -> Tensor:
        """Compute distance/cost from points to this cluster representation.

        Args:
            points: (n, d) tensor of data points
            indices: Optional (n,) tensor of point indices for tracking

        Returns:
            (n,) tensor of distances/costs
        """
        pass

    @abstractmethod
    def update_from_points(self, points: Tensor, weights: Optional[Tensor] = None,
                           **kwargs) -> None:
        """Update cluster parameters given assigned points."""
        pass

    @abstractmethod
    def get_parameters(self) -> Dict[str, Tensor]:
        """Return all parameters defining this cluster representation."""
        pass

    @abstractmethod
    def set_parameters(self, params: Dict[str, Tensor]) -> None:
        """Set cluster parameters from dictionary."""
        pass

    @property
    @abstractmethod
    def dimension(self) -> int:
        """Ambient dimension of the data."""
        pass

    @abstractmethod
    def to(self, device: torch.device) -> 'ClusterRepresentation':
        """Move representation to specified device."""
        pass


class AssignmentStrategy(ABC):
    """Abstract base class for point-to-cluster assignment strategies."""

    @abstractmethod
    def compute_assignments(self, points: Tensor,
                            representations: list[ClusterRepresentation],
                            **kwargs) -> Tensor:
        """Compute cluster assignments for points.

        Args:
            points: (n, d) tensor of data points
            representations: List of K cluster representations

        Returns:
            (n,) tensor of hard assignments (cluster indices)
        """
        pass


class ParameterUpdater(ABC):
    """Abstract base class for cluster parameter update strategies."""

    @abstractmethod
    def update(self, representation: ClusterRepresentation,
               points: Tensor,
               assignment_weights: Optional[Tensor] = None,
               **kwargs) -> None:
        """Update cluster parameters given the points assigned to it."""
        pass


class InitializationStrategy(ABC):
    """Abstract base class for cluster initialization strategies."""

    @abstractmethod
    def initialize(self, points: Tensor, n_clusters: int,
                   generator: Optional[torch.Generator] = None,
                   **kwargs) -> list[ClusterRepresentation]:
        """Initialize cluster representations.

        Args:
            points: (n, d) tensor of data points
            n_clusters: Number of clusters to initialize
            generator: Source of randomness; strategies must draw only from it

        Returns:
            List of initialized cluster representations
        """
        pass


class ConvergenceCriterion(ABC):
    """Abstract base class for convergence checking."""

    def __init__(self):
        self.history = []

    @abstractmethod
    def check(self, current_state: Dict[str, Any]) -> bool:
        """Check if algorithm has converged."""
        pass

    def reset(self):
        """Reset convergence history."""
        self.history = []


class ClusteringObjective(ABC):
    """Abstract base class for clustering objective functions."""

    @abstractmethod
    def compute(self, points: Tensor,
                representations: list[ClusterRepresentation],
                assignments: Tensor) -> Tensor:
        """Compute objective function value (scalar tensor)."""
        pass

    @property
    @abstractmethod
    def minimize(self) -> bool:
        """Whether to minimize (True) or maximize (False) this objective."""
        pass


class ClusterEvaluator(ABC):
    """Abstract base class for cluster-validity indices.

    An evaluator scores a fitted clusterer against the data it partitions.
    Evaluators hold no per-call state, so a single instance can be reused
    (and shared between threads) across any number of evaluations.
    """

    name: str = "evaluator"

    @abstractmethod
    def evaluate(self, clusterer: Any, centroids: Tensor, X: Tensor,
                 distance: DistanceMetric,
                 labels: Optional[Tensor] = None,
                 should_stop: Optional[Callable[[], bool]] = None) -> 'SilhouetteResult':
        """Score a finished clustering.

        Args:
            clusterer: Fitted model exposing ``predict``
            centroids: (K, d) cluster centres, index k is cluster k
            X: (n, d) dataset that was clustered
            distance: Metric used for every comparison
            labels: Optional (n,) precomputed assignments for X
            should_stop: Optional cancellation probe

        Returns:
            Immutable result object
        """
        pass
