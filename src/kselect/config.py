"""
Configuration for validated k-means runs.

``ValidationConfig`` carries the values a run needs (not how they were
parsed) and rejects invalid combinations as soon as it is built.
"""

from dataclasses import dataclass, replace, asdict
from typing import Any, Dict, Optional

from .distances import DISTANCES
from .exceptions import InvalidInputError
from .initialization import INITIALIZERS
from .utils.validation import check_cascade_bounds, check_max_iter, check_n_clusters


@dataclass(frozen=True)
class ValidationConfig:
    """Settings for a single-K or cascade validated k-means run.

    Attributes:
        n_clusters: K for a single run (>= 1)
        max_iter: k-means iteration budget (>= 1)
        distance: 'euclidean' or 'manhattan'
        init: 'random', 'k-means++' or 'farthest-first'
        validation: Validity index name ('silhouette')
        cascade: Scan [min_k, max_k] instead of fitting n_clusters
        min_k: Smallest K of the scan (>= 2)
        max_k: Largest K of the scan (>= 3, > min_k)
        random_state: Seed shared by every fit
        n_jobs: Worker threads for the scan
        on_degenerate: 'skip' or 'raise' for clusters with < 2 points
        verbose: Verbosity level
    """

    n_clusters: int = 3
    max_iter: int = 500
    distance: str = 'euclidean'
    init: str = 'random'
    validation: str = 'silhouette'
    cascade: bool = False
    min_k: int = 3
    max_k: int = 10
    random_state: Optional[int] = 10
    n_jobs: int = 1
    on_degenerate: str = 'skip'
    verbose: int = 0

    def __post_init__(self):
        check_n_clusters(self.n_clusters)
        check_max_iter(self.max_iter)

        if not isinstance(self.distance, str) or self.distance.lower() not in DISTANCES:
            raise InvalidInputError(
                f"unsupported distance function {self.distance!r}; "
                f"only {sorted(DISTANCES)} are supported")
        if self.init not in INITIALIZERS:
            raise InvalidInputError(
                f"unknown init method {self.init!r}; expected one of {sorted(INITIALIZERS)}")

        # Resolves the name, raising for unknown or unimplemented indices
        from .evaluation.silhouette import get_evaluator
        get_evaluator(self.validation)

        if self.cascade:
            check_cascade_bounds(self.min_k, self.max_k, strict=True)

    def replace(self, **changes: Any) -> 'ValidationConfig':
        """Copy with some fields changed (validated again)."""
        return replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)
