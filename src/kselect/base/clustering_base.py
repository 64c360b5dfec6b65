"""
Base class for clustering algorithms in kselect.

Provides the common algorithmic skeleton for alternating optimization
between assignment and update steps.
"""

from abc import abstractmethod
from typing import Optional, Dict, Any, List, Union
import torch
from torch import Tensor
import time
import warnings

from .interfaces import (
    ClusterRepresentation, AssignmentStrategy, ParameterUpdater,
    InitializationStrategy, ConvergenceCriterion, ClusteringObjective
)
from .data_structures import ClusterState, AssignmentMatrix, AlgorithmState
from ..exceptions import NotFittedError
from ..utils.validation import (
    validate_data, check_n_clusters, check_max_iter, check_random_state
)


class BaseClusteringAlgorithm:
    """Base class implementing the alternating optimization framework.

    Subclasses need to specify:
    - Assignment strategy
    - Parameter update strategy
    - Initialization strategy
    - Convergence criterion
    - Objective function

    Randomness is drawn from a private ``torch.Generator`` seeded from
    ``random_state``, so two instances with the same seed produce the same
    clustering even when fitted concurrently.
    """

    def __init__(self,
                 n_clusters: int,
                 max_iter: int = 100,
                 tol: float = 1e-4,
                 verbose: int = 0,
                 random_state: Optional[int] = None,
                 device: Optional[torch.device] = None):
        """
        Args:
            n_clusters: Number of clusters K
            max_iter: Maximum iterations
            tol: Convergence tolerance
            verbose: Verbosity level (0=silent, 1=progress, 2=detailed)
            random_state: Random seed for reproducibility
            device: Torch device (None for CPU)
        """
        check_n_clusters(n_clusters)
        check_max_iter(max_iter)

        self.n_clusters = n_clusters
        self.max_iter = max_iter
        self.tol = tol
        self.verbose = verbose
        self.random_state = random_state
        self.device = device if device is not None else torch.device('cpu')

        # These will be set by subclasses
        self.representations: Optional[List[ClusterRepresentation]] = None
        self.assignment_strategy: Optional[AssignmentStrategy] = None
        self.update_strategy: Optional[ParameterUpdater] = None
        self.initialization_strategy: Optional[InitializationStrategy] = None
        self.convergence_criterion: Optional[ConvergenceCriterion] = None
        self.objective: Optional[ClusteringObjective] = None

        # Algorithm state
        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_: List[AlgorithmState] = []
        self.labels_: Optional[Tensor] = None

    @abstractmethod
    def _create_components(self) -> None:
        """Create algorithm-specific components.

        Subclasses must implement this to instantiate:
        - self.assignment_strategy
        - self.update_strategy
        - self.initialization_strategy
        - self.convergence_criterion
        - self.objective
        """
        pass

    def fit(self, X: Union[Tensor, list], y: Optional[Tensor] = None) -> 'BaseClusteringAlgorithm':
        """Fit the clustering model.

        Args:
            X: (n, d) data
            y: Ignored (for sklearn compatibility)

        Returns:
            Self
        """
        return self._fit(X)

    def fit_predict(self, X: Union[Tensor, list], y: Optional[Tensor] = None) -> Tensor:
        """Fit and return the training assignments."""
        self._fit(X)
        return self.labels_

    def predict(self, X: Union[Tensor, list]) -> Tensor:
        """Assign points (seen or unseen) to the nearest fitted cluster.

        Args:
            X: (n, d) data

        Returns:
            (n,) tensor of cluster assignments
        """
        if not self.fitted_:
            raise NotFittedError(
                f"{self.__class__.__name__} must be fitted before calling predict")

        X = self._validate_data(X)
        return self.assignment_strategy.compute_assignments(X, self.representations)

    def _fit(self, X: Union[Tensor, list]) -> 'BaseClusteringAlgorithm':
        """Internal fit method implementing the alternating optimization."""
        X = self._validate_data(X)
        n_points, dimension = X.shape
        check_n_clusters(self.n_clusters, n_points)

        self._create_components()
        generator = check_random_state(self.random_state)

        if self.verbose:
            print(f"Initializing {self.n_clusters} clusters...")

        start_time = time.time()
        self.representations = self.initialization_strategy.initialize(
            X, self.n_clusters, generator=generator
        )

        self.fitted_ = False
        self.converged_ = False
        self.n_iter_ = 0
        self.history_ = []
        self.convergence_criterion.reset()

        assignments = None
        for iteration in range(self.max_iter):
            iter_start_time = time.time()

            # Assignment step
            assignments = self.assignment_strategy.compute_assignments(
                X, self.representations
            )
            assignment_matrix = AssignmentMatrix(assignments, self.n_clusters)

            # Update step; empty clusters keep their previous centre
            for k, representation in enumerate(self.representations):
                cluster_indices = assignment_matrix.get_cluster_indices(k)
                if len(cluster_indices) > 0:
                    self.update_strategy.update(representation, X[cluster_indices], None)

            objective_value = self.objective.compute(
                X, self.representations, assignments
            )

            self.history_.append(AlgorithmState(
                iteration=iteration,
                cluster_state=self._extract_cluster_state(),
                assignments=assignment_matrix,
                objective_value=float(objective_value)
            ))
            self.n_iter_ = iteration + 1

            converged = self.convergence_criterion.check({
                'iteration': iteration,
                'objective': float(objective_value),
                'assignments': assignments
            })

            iter_time = time.time() - iter_start_time
            if self.verbose >= 2 or (self.verbose >= 1 and iteration % 10 == 0):
                obj_direction = "↓" if self.objective.minimize else "↑"
                print(f"Iteration {iteration:3d}: objective = {float(objective_value):.6f} "
                      f"{obj_direction} ({iter_time:.3f}s)")

            if converged:
                self.converged_ = True
                if self.verbose:
                    print(f"Converged at iteration {iteration}")
                break

        total_time = time.time() - start_time

        if not self.converged_ and self.verbose:
            warnings.warn(f"Failed to converge after {self.max_iter} iterations")
        if self.verbose:
            print(f"Total fitting time: {total_time:.3f}s")

        # Assignments against the final centres, so labels_ == predict(X)
        self.labels_ = self.assignment_strategy.compute_assignments(X, self.representations)
        self.fitted_ = True
        return self

    def _validate_data(self, X: Union[Tensor, list]) -> Tensor:
        """Validate and prepare input data."""
        return validate_data(X, dtype=torch.float32, device=self.device)

    def _extract_cluster_state(self) -> ClusterState:
        """Extract current cluster centres into a ClusterState object."""
        means = torch.stack([
            rep.get_parameters()['mean']
            for rep in self.representations
        ])
        return ClusterState(
            means=means,
            n_clusters=self.n_clusters,
            dimension=means.shape[1]
        )

    @property
    def cluster_centers_(self) -> Tensor:
        """(K, d) fitted cluster centres; row k is cluster k."""
        if not self.fitted_:
            raise NotFittedError("Model must be fitted first")
        return self._extract_cluster_state().means

    @property
    def inertia_(self) -> float:
        """Final objective value."""
        if not self.fitted_:
            raise NotFittedError("Model must be fitted first")
        return self.history_[-1].objective_value

    def get_params(self, deep: bool = True) -> Dict[str, Any]:
        """Get parameters (sklearn compatibility)."""
        return {
            'n_clusters': self.n_clusters,
            'max_iter': self.max_iter,
            'tol': self.tol,
            'verbose': self.verbose,
            'random_state': self.random_state,
            'device': self.device
        }
